"""
Query builder for the transaction listing endpoint.

Turns a FilterState into the canonical outbound parameter set. Optional
filters are emitted only when present; page and pageSize are always sent.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from pydantic import BaseModel

from bank_feed_mcp.core.exceptions import QueryValidationError
from bank_feed_mcp.models.filters import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, FilterState
from bank_feed_mcp.utils.date_utils import format_iso_utc

logger = logging.getLogger(__name__)


class TransactionQuery(BaseModel):
    """Canonical request: wire parameter name -> string value."""

    model_config = {"frozen": True}

    account_id: str
    params: Dict[str, str]


class OptionalParam(NamedTuple):
    """An optional query parameter and the rule deciding whether it is sent."""

    name: str
    value: Any
    is_present: Callable[[Any], bool]
    encode: Callable[[Any], str]


def _not_none(value: Any) -> bool:
    return value is not None


def _encode_decimal(value: Decimal) -> str:
    return str(value)


def _encode_positive_int(value: Optional[int], default: int) -> str:
    if value is None or value < 1:
        return str(default)
    return str(int(value))


def compose_params(entries: List[OptionalParam]) -> Dict[str, str]:
    """Encode the entries whose predicate holds, keeping their order."""
    return {
        entry.name: entry.encode(entry.value)
        for entry in entries
        if entry.is_present(entry.value)
    }


def _check_bounds(state: FilterState) -> None:
    if (
        state.oldest_time is not None
        and state.newest_time is not None
        and state.oldest_time > state.newest_time
    ):
        raise QueryValidationError("Oldest time must not be after newest time")

    if (
        state.min_amount is not None
        and state.max_amount is not None
        and state.min_amount > state.max_amount
    ):
        raise QueryValidationError("Min amount must not be greater than max amount")


def build_query(state: FilterState) -> TransactionQuery:
    """
    Build the outbound request for a filter state.

    Args:
        state: Filter state to encode

    Returns:
        TransactionQuery with accountId, page, pageSize and any present filters

    Raises:
        QueryValidationError: If the account ID is empty or a bound pair is
            inverted
    """
    account_id = (state.account_id or "").strip()
    if not account_id:
        raise QueryValidationError("Please enter an account ID")

    _check_bounds(state)

    entries: List[OptionalParam] = [
        OptionalParam("oldestTime", state.oldest_time, _not_none, format_iso_utc),
        OptionalParam("newestTime", state.newest_time, _not_none, format_iso_utc),
        OptionalParam("minAmount", state.min_amount, _not_none, _encode_decimal),
        OptionalParam("maxAmount", state.max_amount, _not_none, _encode_decimal),
    ]

    params: Dict[str, str] = {"accountId": account_id}
    params.update(compose_params(entries))
    params["page"] = _encode_positive_int(state.page, DEFAULT_PAGE)
    params["pageSize"] = _encode_positive_int(state.page_size, DEFAULT_PAGE_SIZE)

    logger.debug("Built transaction query: %s", params)
    return TransactionQuery(account_id=account_id, params=params)

"""
Filter state for transaction queries.

FilterState is immutable: user input is applied through update_filter,
which returns a new state or raises FilterInputError and leaves the
caller's state untouched.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from bank_feed_mcp.core.exceptions import FilterInputError
from bank_feed_mcp.utils.date_utils import parse_iso_datetime

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 1000


class FilterState(BaseModel):
    """Current query parameters for a transaction listing."""

    model_config = {"frozen": True}

    account_id: str = ""

    # Time window
    oldest_time: Optional[datetime] = None
    newest_time: Optional[datetime] = None

    # Amount bounds
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None

    # Pagination
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @field_validator("oldest_time", "newest_time")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Naive bounds are UTC; bounds must be representable in UTC."""
        if v is None:
            return v
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        try:
            v.astimezone(timezone.utc)
        except OverflowError:
            raise ValueError(f"{v.isoformat()} is out of range in UTC") from None
        return v


_LABELS = {
    "account_id": "Account ID",
    "oldest_time": "Oldest time",
    "newest_time": "Newest time",
    "min_amount": "Min amount",
    "max_amount": "Max amount",
    "page": "Page",
    "page_size": "Page size",
}


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _parse_text(field: str, raw: Any) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise FilterInputError(field, f"{_LABELS[field]} must be text")
    return raw.strip()


def _parse_timestamp(field: str, raw: Any) -> Optional[datetime]:
    if _is_blank(raw):
        return None

    value = None
    if isinstance(raw, datetime):
        value = raw if raw.tzinfo is not None else raw.replace(tzinfo=timezone.utc)
    elif isinstance(raw, str):
        try:
            value = parse_iso_datetime(raw)
        except ValueError:
            pass
    if value is None:
        raise FilterInputError(
            field, f"{_LABELS[field]} must be an ISO-8601 date-time, got {raw!r}"
        )

    try:
        value.astimezone(timezone.utc)
    except OverflowError:
        raise FilterInputError(
            field, f"{_LABELS[field]} is out of range in UTC, got {raw!r}"
        ) from None
    return value


def _parse_amount(field: str, raw: Any) -> Optional[Decimal]:
    if _is_blank(raw):
        return None
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float, Decimal)):
        raise FilterInputError(field, f"{_LABELS[field]} must be a number")
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        raise FilterInputError(
            field, f"{_LABELS[field]} must be a number, got {raw!r}"
        ) from None
    if not value.is_finite():
        raise FilterInputError(field, f"{_LABELS[field]} must be a finite number")
    return value


def _parse_bounded_int(field: str, raw: Any, minimum: int, maximum: Optional[int]) -> int:
    if isinstance(raw, bool):
        raise FilterInputError(field, f"{_LABELS[field]} must be a whole number")
    if isinstance(raw, int):
        value = raw
    else:
        text = raw.strip() if isinstance(raw, str) else ""
        try:
            if not text.lstrip("+-").isdecimal():
                raise ValueError(text)
            value = int(text)
        except ValueError:
            raise FilterInputError(
                field, f"{_LABELS[field]} must be a whole number, got {raw!r}"
            ) from None

    if maximum is None and value < minimum:
        raise FilterInputError(field, f"{_LABELS[field]} must be at least {minimum}")
    if maximum is not None and not minimum <= value <= maximum:
        raise FilterInputError(
            field, f"{_LABELS[field]} must be between {minimum} and {maximum}"
        )
    return value


_PARSERS: Dict[str, Callable[[str, Any], Any]] = {
    "account_id": _parse_text,
    "oldest_time": _parse_timestamp,
    "newest_time": _parse_timestamp,
    "min_amount": _parse_amount,
    "max_amount": _parse_amount,
    "page": lambda field, raw: _parse_bounded_int(field, raw, 1, None),
    "page_size": lambda field, raw: _parse_bounded_int(field, raw, 1, MAX_PAGE_SIZE),
}


def update_filter(state: FilterState, field: str, raw: Any) -> FilterState:
    """
    Apply one raw form input to a filter state.

    Args:
        state: Current filter state
        field: FilterState field name (e.g. "page_size")
        raw: Value as produced by an input control (string, number or None)

    Returns:
        New FilterState with the field replaced

    Raises:
        FilterInputError: If the field is unknown or the value is rejected.
            The given state is never modified.
    """
    parser = _PARSERS.get(field)
    if parser is None:
        raise FilterInputError(field, f"Unknown filter field: {field}")

    value = parser(field, raw)
    return state.model_copy(update={field: value})

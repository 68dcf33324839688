"""
Decoder for transaction listing response bodies.

The wire envelope nests records under data.data.transactions; decoding
flattens that into PaginationEnvelope.page and fails closed on any shape
mismatch instead of falling back to defaults.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError

from bank_feed_mcp.core.exceptions import EnvelopeDecodeError
from bank_feed_mcp.models.envelope import PaginationEnvelope, PaginationMeta, TransactionPage
from bank_feed_mcp.models.transaction import TransactionRecord

GENERIC_ERROR_MESSAGE = "Failed to fetch transactions"


class _WireRecords(BaseModel):
    transactions: List[TransactionRecord]


class _WireData(BaseModel):
    data: _WireRecords


class _WireEnvelope(BaseModel):
    meta: PaginationMeta
    data: _WireData
    success: Optional[bool] = None


def extract_error(body: Any) -> Optional[str]:
    """
    Find an application-level error in a response body.

    Args:
        body: Parsed JSON body

    Returns:
        The server's error message, the generic fallback if the body flags
        an error without a usable message, or None if no error is flagged
    """
    if not isinstance(body, dict):
        return None

    if "error" in body:
        message = body["error"]
        if isinstance(message, str) and message.strip():
            return message.strip()
        return GENERIC_ERROR_MESSAGE

    if body.get("success") is False:
        return GENERIC_ERROR_MESSAGE

    return None


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "body"
    return f"{location}: {first['msg']}"


def decode_envelope(body: Any) -> PaginationEnvelope:
    """
    Decode a successful listing response into a PaginationEnvelope.

    Args:
        body: Parsed JSON body

    Returns:
        PaginationEnvelope with the flattened record page

    Raises:
        EnvelopeDecodeError: If the body does not match the envelope shape
    """
    if not isinstance(body, dict):
        raise EnvelopeDecodeError(
            f"Unexpected response shape: expected an object, got {type(body).__name__}"
        )

    try:
        wire = _WireEnvelope.model_validate(body)
    except ValidationError as e:
        raise EnvelopeDecodeError(f"Unexpected response shape ({_describe(e)})") from e

    return PaginationEnvelope(
        meta=wire.meta,
        page=TransactionPage(transactions=wire.data.data.transactions),
    )

"""
Pydantic models for transaction queries and listing responses.
"""

from bank_feed_mcp.models.envelope import (
    PaginationEnvelope,
    PaginationMeta,
    PresentedPage,
    ResultSummary,
    TransactionPage,
)
from bank_feed_mcp.models.filters import FilterState, update_filter
from bank_feed_mcp.models.transaction import (
    DisplayTransaction,
    FieldFormatError,
    TransactionRecord,
)

__all__ = [
    "FilterState",
    "update_filter",
    "TransactionRecord",
    "DisplayTransaction",
    "FieldFormatError",
    "PaginationMeta",
    "TransactionPage",
    "PaginationEnvelope",
    "ResultSummary",
    "PresentedPage",
]

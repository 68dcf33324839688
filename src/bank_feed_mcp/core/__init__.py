"""
Core functionality for the bank feed MCP server.

Query building, fetching, presentation and the view controller live in
their own modules; this package only re-exports the error types.
"""

from bank_feed_mcp.core.exceptions import (
    BankFeedError,
    EnvelopeDecodeError,
    FilterInputError,
    FormatError,
    NetworkError,
    QueryValidationError,
    RemoteError,
)

__all__ = [
    "BankFeedError",
    "QueryValidationError",
    "FilterInputError",
    "NetworkError",
    "RemoteError",
    "EnvelopeDecodeError",
    "FormatError",
]

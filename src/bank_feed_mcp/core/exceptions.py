"""
Custom exceptions for the bank feed MCP server.
"""

from typing import Optional


class BankFeedError(Exception):
    """Base exception for bank feed errors."""
    pass


class QueryValidationError(BankFeedError):
    """Raised when filters cannot be turned into a transaction query."""
    pass


class FilterInputError(QueryValidationError):
    """Raised when a single filter input is rejected."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class NetworkError(BankFeedError):
    """Raised when the transaction endpoint cannot be reached or read."""
    pass


class RemoteError(BankFeedError):
    """Raised when the transaction endpoint reports an application error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EnvelopeDecodeError(RemoteError):
    """Raised when a response body does not match the pagination envelope."""
    pass


class FormatError(BankFeedError):
    """Raised when a single record field cannot be rendered."""

    def __init__(self, field: str, value: object, message: str):
        super().__init__(message)
        self.field = field
        self.value = value

"""
MCP tool definitions for bank transaction queries.

Exposes the transaction query pipeline through the Model Context Protocol.
"""

from typing import Any, Dict, List, Optional, Type

from pydantic import ValidationError

from bank_feed_mcp.core.client import TransactionClient
from bank_feed_mcp.core.controller import ErrorKind, ViewController
from bank_feed_mcp.core.exceptions import (
    BankFeedError,
    NetworkError,
    QueryValidationError,
    RemoteError,
)
from bank_feed_mcp.core.presenter import PresentationOptions
from bank_feed_mcp.models.filters import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from bank_feed_mcp.utils.date_utils import period_bounds

PERIODS = [
    "this_month",
    "last_month",
    "last_7_days",
    "last_30_days",
    "last_90_days",
    "ytd",
    "this_year",
    "last_year",
]

_ERRORS: Dict[ErrorKind, Type[BankFeedError]] = {
    ErrorKind.VALIDATION: QueryValidationError,
    ErrorKind.NETWORK: NetworkError,
    ErrorKind.REMOTE: RemoteError,
}


class BankFeedTools:
    """Collection of MCP tools for querying bank transactions."""

    def __init__(
        self,
        client: TransactionClient,
        presentation: Optional[PresentationOptions] = None,
    ):
        """
        Initialize tools with a transaction client.

        Args:
            client: TransactionClient shared by all tool calls
            presentation: Default locale preferences for rendering
        """
        self.client = client
        self.presentation = presentation or PresentationOptions()

    def _options_for(self, locale: Optional[str]) -> PresentationOptions:
        if not locale:
            return self.presentation
        try:
            return PresentationOptions(locale=locale, timezone=self.presentation.timezone)
        except ValidationError:
            raise ValueError(f"Unknown locale: {locale}") from None

    async def get_transactions(
        self,
        account_id: str,
        period: Optional[str] = None,
        oldest_time: Optional[str] = None,
        newest_time: Optional[str] = None,
        min_amount: Optional[Any] = None,
        max_amount: Optional[Any] = None,
        page: Any = DEFAULT_PAGE,
        page_size: Any = DEFAULT_PAGE_SIZE,
        locale: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Fetch and render one page of transactions for an account.

        Args:
            account_id: Account to list transactions for
            period: Period shorthand (this_month, last_30_days, ytd, etc.)
            oldest_time: Only transactions at or after this ISO-8601 time
            newest_time: Only transactions at or before this ISO-8601 time
            min_amount: Only transactions with amount >= this
            max_amount: Only transactions with amount <= this
            page: Page number (default: 1)
            page_size: Records per page, 1-1000 (default: 25)
            locale: Locale for dates and amounts (default: configured locale)

        Returns:
            Dict with the result summary and rendered transactions

        Raises:
            ValueError: If the period or locale is unknown
            QueryValidationError: If a filter is invalid
            NetworkError: If the endpoint cannot be reached
            RemoteError: If the endpoint reports an error
        """
        # Explicit bounds take precedence over the period shorthand
        if period:
            period_start, period_end = period_bounds(period)
            oldest_time = oldest_time or period_start.isoformat()
            newest_time = newest_time or period_end.isoformat()

        controller = ViewController(self.client, self._options_for(locale))

        inputs = {
            "account_id": account_id,
            "oldest_time": oldest_time,
            "newest_time": newest_time,
            "min_amount": min_amount,
            "max_amount": max_amount,
            "page": page,
            "page_size": page_size,
        }
        for field, raw in inputs.items():
            if not controller.set_filter(field, raw):
                raise QueryValidationError(controller.state.input_errors[field])

        state = await controller.submit()
        if state.error is not None:
            raise _ERRORS[state.error.kind](state.error.message)

        if state.result is None:
            raise RemoteError("No transactions were returned")
        return state.result.model_dump(mode="json")


def create_tool_schemas() -> List[Dict[str, Any]]:
    """
    Create MCP tool schemas for all tools.

    Returns:
        List of tool schema definitions
    """
    return [
        {
            "name": "get_transactions",
            "description": (
                "Get one page of transactions for a bank account. Supports time "
                "window and amount filters plus pagination. Use 'period' for "
                "common date ranges (this_month, last_30_days, ytd, etc.). "
                "Amounts are rendered in each transaction's own currency; "
                "negative amounts are debits."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "account_id": {
                        "type": "string",
                        "description": "Account ID to list transactions for",
                        "minLength": 1,
                    },
                    "period": {
                        "type": "string",
                        "description": "Period shorthand: " + ", ".join(PERIODS),
                        "enum": PERIODS,
                    },
                    "oldest_time": {
                        "type": "string",
                        "description": "Oldest transaction time (ISO-8601, UTC if no offset)",
                    },
                    "newest_time": {
                        "type": "string",
                        "description": "Newest transaction time (ISO-8601, UTC if no offset)",
                    },
                    "min_amount": {
                        "type": ["number", "string"],
                        "description": "Minimum transaction amount",
                    },
                    "max_amount": {
                        "type": ["number", "string"],
                        "description": "Maximum transaction amount",
                    },
                    "page": {
                        "type": "integer",
                        "description": "Page number (default: 1)",
                        "minimum": 1,
                        "default": DEFAULT_PAGE,
                    },
                    "page_size": {
                        "type": "integer",
                        "description": f"Records per page (default: {DEFAULT_PAGE_SIZE})",
                        "minimum": 1,
                        "maximum": MAX_PAGE_SIZE,
                        "default": DEFAULT_PAGE_SIZE,
                    },
                    "locale": {
                        "type": "string",
                        "description": "Locale for dates and amounts, e.g. en_AU",
                    },
                },
                "required": ["account_id"],
            },
        },
    ]

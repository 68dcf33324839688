"""
View controller for transaction queries.

Wires filters, query building, fetching and presentation together and
tracks the loading, error and result state a view renders from. Only one
submission may be in flight at a time.
"""

import enum
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from bank_feed_mcp.core.client import TransactionClient
from bank_feed_mcp.core.exceptions import (
    FilterInputError,
    NetworkError,
    QueryValidationError,
    RemoteError,
)
from bank_feed_mcp.core.presenter import PresentationOptions, ResultPresenter
from bank_feed_mcp.core.query import build_query
from bank_feed_mcp.models.envelope import PresentedPage
from bank_feed_mcp.models.filters import FilterState, update_filter

logger = logging.getLogger(__name__)


class ViewStatus(str, enum.Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NETWORK = "network"
    REMOTE = "remote"


class ViewError(BaseModel):
    """User-visible error message and where it came from."""

    kind: ErrorKind
    message: str


class ViewState(BaseModel):
    """Everything a transaction view renders from."""

    status: ViewStatus = ViewStatus.IDLE
    error: Optional[ViewError] = None
    result: Optional[PresentedPage] = None
    input_errors: Dict[str, str] = Field(default_factory=dict)

    @property
    def loading(self) -> bool:
        return self.status is ViewStatus.IN_FLIGHT


class ViewController:
    """Runs transaction queries on behalf of a view."""

    def __init__(
        self,
        client: TransactionClient,
        presentation: Optional[PresentationOptions] = None,
        filters: Optional[FilterState] = None,
    ):
        """
        Initialize the controller.

        Args:
            client: Client used to fetch pages
            presentation: Locale preferences for rendering (default en_AU/UTC)
            filters: Initial filter state (default: empty with page 1 of 25)
        """
        self.client = client
        self.presenter = ResultPresenter(presentation)
        self.filters = filters or FilterState()
        self.state = ViewState()

    def set_filter(self, field: str, raw: Any) -> bool:
        """
        Apply a raw input value to one filter field.

        Rejected input is recorded in state.input_errors and the previous
        value is kept.

        Returns:
            True if the value was accepted
        """
        try:
            self.filters = update_filter(self.filters, field, raw)
        except FilterInputError as e:
            logger.info("Rejected %s input: %s", field, e)
            self.state.input_errors[e.field] = str(e)
            return False

        self.state.input_errors.pop(field, None)
        return True

    async def submit(self) -> ViewState:
        """
        Run one query with the current filters.

        Ignored while a previous submission is still in flight. Validation
        failures never reach the network; fetch failures clear any previous
        result.

        Returns:
            The view state after the submission completes
        """
        if self.state.status is ViewStatus.IN_FLIGHT:
            logger.warning("Submission ignored: a query is already in flight")
            return self.state

        try:
            query = build_query(self.filters)
        except QueryValidationError as e:
            self.state.error = ViewError(kind=ErrorKind.VALIDATION, message=str(e))
            self.state.result = None
            return self.state

        self.state.status = ViewStatus.IN_FLIGHT
        self.state.error = None
        self.state.result = None
        try:
            envelope = await self.client.fetch_page(query)
        except NetworkError as e:
            self.state.error = ViewError(kind=ErrorKind.NETWORK, message=str(e))
        except RemoteError as e:
            self.state.error = ViewError(kind=ErrorKind.REMOTE, message=str(e))
        else:
            self.state.result = self.presenter.present_page(envelope)
        finally:
            self.state.status = ViewStatus.IDLE

        return self.state

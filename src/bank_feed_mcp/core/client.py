"""
HTTP client for the transaction listing endpoint.

Performs exactly one request per call and classifies the outcome:
a decoded envelope, a RemoteError reported by the server, or a
NetworkError for transport failures and unreadable bodies. Nothing is
retried here; retrying is left to the user.
"""

import logging
import uuid
from types import TracebackType
from typing import Dict, Optional, Type

import httpx

from bank_feed_mcp import config
from bank_feed_mcp.core.decoder import GENERIC_ERROR_MESSAGE, decode_envelope, extract_error
from bank_feed_mcp.core.exceptions import EnvelopeDecodeError, NetworkError, RemoteError
from bank_feed_mcp.core.query import TransactionQuery
from bank_feed_mcp.models.envelope import PaginationEnvelope

logger = logging.getLogger(__name__)


def _describe_failure(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


class TransactionClient:
    """Fetches pages of transactions from a listing endpoint."""

    def __init__(
        self,
        base_url: str,
        access_token: Optional[str] = None,
        timeout: float = config.DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Full URL of the transaction listing endpoint
            access_token: Optional bearer token sent with every request
            timeout: Transport timeout in seconds (ignored if http_client is given)
            http_client: Optional pre-configured httpx client. The caller keeps
                    ownership and must close it.
        """
        self.base_url = base_url
        self._access_token = access_token
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_config(cls) -> "TransactionClient":
        """Create a client from environment configuration."""
        return cls(
            base_url=config.base_url(),
            access_token=config.access_token(),
            timeout=config.request_timeout(),
        )

    async def __aenter__(self) -> "TransactionClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "x-v": "1",
            "x-min-v": "1",
            "x-fapi-interaction-id": str(uuid.uuid4()),
        }
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    async def fetch_page(self, query: TransactionQuery) -> PaginationEnvelope:
        """
        Fetch one page of transactions.

        Args:
            query: Canonical query built from the current filters

        Returns:
            Decoded PaginationEnvelope

        Raises:
            NetworkError: On timeout, connection or DNS failure, or a body
                that is not JSON
            RemoteError: If the server reports an error or a non-2xx status.
                EnvelopeDecodeError if the body has an unexpected shape.
        """
        logger.debug("Fetching transactions from %s params=%s", self.base_url, query.params)

        try:
            response = await self._http.get(
                self.base_url, params=query.params, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.warning("Transaction request failed: %s", _describe_failure(e))
            raise NetworkError(f"Network error: {_describe_failure(e)}") from e

        try:
            body = response.json()
        except ValueError as e:
            logger.warning(
                "Unreadable transaction response (HTTP %s)", response.status_code
            )
            raise NetworkError(
                f"Network error: malformed response body (HTTP {response.status_code})"
            ) from e

        message = extract_error(body)
        if message is None and not response.is_success:
            message = GENERIC_ERROR_MESSAGE
        if message is not None:
            logger.warning(
                "Transaction endpoint reported an error (HTTP %s): %s",
                response.status_code,
                message,
            )
            raise RemoteError(message, status_code=response.status_code)

        try:
            envelope = decode_envelope(body)
        except EnvelopeDecodeError as e:
            e.status_code = response.status_code
            logger.warning("Transaction response rejected: %s", e)
            raise

        logger.debug(
            "Fetched page %s/%s (%s records total)",
            envelope.meta.current_page,
            envelope.meta.total_pages,
            envelope.meta.total_records,
        )
        return envelope

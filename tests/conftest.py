"""
Pytest configuration and fixtures for bank-feed-mcp tests.
"""

from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from bank_feed_mcp.core.client import TransactionClient

BASE_URL = "https://bank.example.test/api/test-transactions"


def make_body(
    transactions: List[Dict[str, Any]],
    total_records: Optional[int] = None,
    total_pages: int = 1,
    current_page: int = 1,
) -> Dict[str, Any]:
    """Build a listing response body in the wire shape."""
    if total_records is None:
        total_records = len(transactions)
    return {
        "success": True,
        "meta": {
            "totalRecords": total_records,
            "totalPages": total_pages,
            "currentPage": current_page,
        },
        "data": {"data": {"transactions": transactions}},
    }


@pytest.fixture
def record_payloads() -> List[Dict[str, Any]]:
    """Three wire records: a debit, a credit and a pending debit."""
    return [
        {
            "transactionId": "txn_001",
            "accountId": "acct-123",
            "effectiveDateTime": "2026-01-15T10:30:00Z",
            "description": "WOOLWORTHS 1234 SYDNEY",
            "amount": "-45.00",
            "currency": "AUD",
            "type": "PAYMENT",
            "status": "POSTED",
        },
        {
            "transactionId": "txn_002",
            "accountId": "acct-123",
            "effectiveDateTime": "2026-01-14T08:00:00+11:00",
            "description": "SALARY ACME PTY LTD",
            "amount": "3200.50",
            "currency": "AUD",
            "type": "TRANSFER_INCOMING",
            "status": "POSTED",
        },
        {
            "transactionId": "txn_003",
            "accountId": "acct-123",
            "effectiveDateTime": "2026-01-13T19:45:12Z",
            "description": "NETFLIX.COM",
            "amount": "-16.99",
            "currency": "AUD",
            "type": "PAYMENT",
            "status": "PENDING",
        },
    ]


@pytest.fixture
def envelope_body(record_payloads: List[Dict[str, Any]]) -> Dict[str, Any]:
    """A successful single-page response body."""
    return make_body(record_payloads)


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client() -> Callable[..., TransactionClient]:
    """Factory for TransactionClients backed by an httpx mock transport."""

    def _make(handler: Handler, access_token: Optional[str] = None) -> TransactionClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return TransactionClient(
            base_url=BASE_URL,
            access_token=access_token,
            http_client=http_client,
        )

    return _make


@pytest.fixture
def json_handler(envelope_body: Dict[str, Any]) -> Callable[..., Handler]:
    """Factory for handlers answering every request with a fixed JSON body."""

    def _make(body: Any = None, status_code: int = 200) -> Handler:
        payload = envelope_body if body is None else body

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=payload)

        return handler

    return _make


@pytest.fixture
def make_envelope() -> Callable[..., Dict[str, Any]]:
    """Factory for listing response bodies in the wire shape."""
    return make_body

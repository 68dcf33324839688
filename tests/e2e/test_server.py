"""
End-to-end tests for the MCP server.

Drives the tool layer and the server's call handler against a mock
listing endpoint.
"""

import json

import httpx
import pytest

from bank_feed_mcp.core.controller import ViewController, ViewState
from bank_feed_mcp.core.exceptions import NetworkError, QueryValidationError, RemoteError
from bank_feed_mcp.core.presenter import PresentationOptions
from bank_feed_mcp.server import BankFeedServer
from bank_feed_mcp.tools.tools import BankFeedTools, create_tool_schemas
from bank_feed_mcp.utils.date_utils import format_iso_utc, period_bounds


@pytest.fixture
def recorded():
    """Query parameters of every request the mock endpoint receives."""
    return []


@pytest.fixture
def client(make_client, envelope_body, recorded):
    def handler(request: httpx.Request) -> httpx.Response:
        recorded.append(dict(request.url.params))
        return httpx.Response(200, json=envelope_body)

    return make_client(handler)


@pytest.fixture
def tools(client):
    """Create BankFeedTools instance for testing."""
    return BankFeedTools(client, PresentationOptions(locale="en_AU"))


@pytest.fixture
def server(client):
    """Create BankFeedServer instance with a mock endpoint."""
    return BankFeedServer(client, PresentationOptions(locale="en_AU"))


@pytest.mark.e2e
def test_server_initialization(server):
    """Test that server can be initialized."""
    assert server.client is not None
    assert server.tools is not None
    assert server.server is not None
    assert hasattr(server.server, "call_tool")
    assert hasattr(server.server, "list_tools")


@pytest.mark.e2e
def test_server_from_environment(monkeypatch):
    """Test server initialization from environment configuration."""
    monkeypatch.setenv("BANK_FEED_BASE_URL", "https://bank.example.test/env")
    monkeypatch.setenv("BANK_FEED_LOCALE", "en_GB")

    server = BankFeedServer()

    assert server.client.base_url == "https://bank.example.test/env"
    assert server.tools.presentation.locale == "en_GB"


@pytest.mark.e2e
def test_tool_schemas():
    """Test the advertised tool schema."""
    schemas = create_tool_schemas()
    assert [s["name"] for s in schemas] == ["get_transactions"]

    schema = schemas[0]["inputSchema"]
    assert schema["required"] == ["account_id"]
    assert schema["properties"]["page_size"]["maximum"] == 1000
    assert "last_30_days" in schema["properties"]["period"]["enum"]


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_get_transactions_basic(tools, recorded):
    """Test basic get_transactions tool functionality."""
    result = await tools.get_transactions(account_id="acct-123")

    assert recorded == [{"accountId": "acct-123", "page": "1", "pageSize": "25"}]
    assert result["summary"] == {
        "total_records": 3,
        "total_pages": 1,
        "current_page": 1,
        "returned": 3,
    }
    assert result["error_count"] == 0
    first = result["transactions"][0]
    assert first["is_debit"] is True
    assert first["direction"] == "debit"
    assert "$45.00" in first["formatted_amount"]


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_get_transactions_with_all_filters(tools, recorded):
    """Test that every filter reaches the endpoint."""
    await tools.get_transactions(
        account_id="acct-123",
        oldest_time="2026-01-01T00:00",
        newest_time="2026-01-31T23:59:59Z",
        min_amount=5,
        max_amount="100.00",
        page=2,
        page_size=50,
    )

    assert recorded[0] == {
        "accountId": "acct-123",
        "oldestTime": "2026-01-01T00:00:00Z",
        "newestTime": "2026-01-31T23:59:59Z",
        "minAmount": "5",
        "maxAmount": "100.00",
        "page": "2",
        "pageSize": "50",
    }


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_get_transactions_with_period(tools, recorded):
    """Test that a period shorthand expands to time bounds."""
    start, end = period_bounds("ytd")

    await tools.get_transactions(account_id="acct-123", period="ytd")

    assert recorded[0]["oldestTime"] == format_iso_utc(start)
    assert recorded[0]["newestTime"] == format_iso_utc(end)


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_explicit_bounds_override_period(tools, recorded):
    """Test that explicit bounds win over the period shorthand."""
    await tools.get_transactions(
        account_id="acct-123",
        period="this_year",
        oldest_time="2020-06-01T00:00:00Z",
    )

    assert recorded[0]["oldestTime"] == "2020-06-01T00:00:00Z"


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_get_transactions_locale(tools):
    """Test rendering in a requested locale."""
    result = await tools.get_transactions(account_id="acct-123", locale="en_US")
    assert "A$" in result["transactions"][0]["formatted_amount"]


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_invalid_page_size_is_rejected(tools, recorded):
    """Test that out-of-range input never reaches the endpoint."""
    with pytest.raises(QueryValidationError, match="between 1 and 1000"):
        await tools.get_transactions(account_id="acct-123", page_size=1001)
    assert recorded == []


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_blank_account_is_rejected(tools, recorded):
    """Test that a blank account ID is a validation error."""
    with pytest.raises(QueryValidationError, match="account ID"):
        await tools.get_transactions(account_id="  ")
    assert recorded == []


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_unknown_period_and_locale(tools):
    """Test that unknown shorthands are reported as ValueError."""
    with pytest.raises(ValueError, match="Unknown period"):
        await tools.get_transactions(account_id="acct-123", period="fortnight")
    with pytest.raises(ValueError, match="Unknown locale"):
        await tools.get_transactions(account_id="acct-123", locale="xx_YY")


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_fetch_failures_are_raised(make_client, json_handler):
    """Test that network and remote failures surface as their own types."""

    def broken(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    with pytest.raises(NetworkError, match="Name or service not known"):
        await BankFeedTools(make_client(broken)).get_transactions(account_id="acct-123")

    failing = make_client(json_handler({"error": "API request failed"}, status_code=401))
    with pytest.raises(RemoteError, match="API request failed"):
        await BankFeedTools(failing).get_transactions(account_id="acct-123")


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_handle_call_returns_json(server):
    """Test the server call handler's success output."""
    content = await server.handle_call("get_transactions", {"account_id": "acct-123"})

    assert len(content) == 1
    payload = json.loads(content[0].text)
    assert payload["summary"]["returned"] == 3
    assert len(payload["transactions"]) == 3


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_handle_call_reports_errors(server, recorded):
    """Test that invalid input is returned as error text."""
    content = await server.handle_call(
        "get_transactions", {"account_id": "acct-123", "page": 0}
    )
    assert content[0].text.startswith("Error: ")
    assert recorded == []

    content = await server.handle_call("get_transactions", {"bogus": True})
    assert content[0].text.startswith("Error: ")


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_handle_call_unknown_tool(server):
    """Test the response for an unknown tool name."""
    content = await server.handle_call("get_accounts", {})
    assert content[0].text == "Unknown tool: get_accounts"


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_get_transactions_without_result_is_remote_error(tools, monkeypatch):
    """Test that a submission that yields neither rows nor an error is reported."""

    async def empty_submit(self):
        return ViewState()

    monkeypatch.setattr(ViewController, "submit", empty_submit)

    with pytest.raises(RemoteError, match="No transactions"):
        await tools.get_transactions(account_id="acct-123")

"""
MCP server for bank transaction queries.

Exposes paginated, filtered transaction listings through the Model Context
Protocol.
"""

import json
import logging
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from bank_feed_mcp import config
from bank_feed_mcp.core.client import TransactionClient
from bank_feed_mcp.core.exceptions import BankFeedError
from bank_feed_mcp.core.presenter import PresentationOptions
from bank_feed_mcp.tools.tools import BankFeedTools, create_tool_schemas

logger = logging.getLogger(__name__)


class BankFeedServer:
    """MCP server for bank transaction data."""

    def __init__(
        self,
        client: Optional[TransactionClient] = None,
        presentation: Optional[PresentationOptions] = None,
    ):
        """
        Initialize the MCP server.

        Args:
            client: Optional transaction client.
                    If None, one is created from environment configuration.
            presentation: Optional locale preferences.
                    If None, they are read from environment configuration.
        """
        self.client = client or TransactionClient.from_config()
        self.tools = BankFeedTools(
            self.client, presentation or PresentationOptions.from_config()
        )
        self.server = Server("bank-feed-mcp")

        # Register handlers
        self._register_handlers()

    async def handle_call(self, name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Run a tool and format its result or error as text content."""
        try:
            if name == "get_transactions":
                result = await self.tools.get_transactions(**arguments)
            else:
                return [TextContent(type="text", text=f"Unknown tool: {name}")]

            return [TextContent(type="text", text=json.dumps(result, indent=2))]

        except (BankFeedError, ValueError, TypeError) as e:
            # Invalid arguments or a failed fetch: report to the caller
            return [TextContent(type="text", text=f"Error: {str(e)}")]
        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return [
                TextContent(
                    type="text",
                    text=f"Error executing tool: {str(e)}",
                )
            ]

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            return [
                Tool(
                    name=schema["name"],
                    description=schema["description"],
                    inputSchema=schema["inputSchema"],
                )
                for schema in create_tool_schemas()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            return await self.handle_call(name, arguments)

    async def run(self) -> None:  # pragma: no cover
        """Run the MCP server using stdio transport."""
        async with self.client:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )


async def run_server(
    base_url: Optional[str] = None,
    access_token: Optional[str] = None,
    timeout: Optional[float] = None,
) -> None:  # pragma: no cover
    """
    Run the bank feed MCP server.

    Args:
        base_url: Optional listing endpoint URL. If None, read from environment.
        access_token: Optional bearer token. If None, read from environment.
        timeout: Optional transport timeout in seconds. If None, read from environment.
    """
    client = TransactionClient(
        base_url=base_url or config.base_url(),
        access_token=access_token or config.access_token(),
        timeout=timeout or config.request_timeout(),
    )
    server = BankFeedServer(client)
    await server.run()

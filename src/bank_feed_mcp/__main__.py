"""
CLI entry point for the bank feed MCP server.
"""

import argparse
import asyncio
import logging
import sys

from bank_feed_mcp.server import run_server


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Bank Feed MCP Server - Expose bank transactions through MCP"
    )
    parser.add_argument(
        "--base-url",
        help="Transaction listing endpoint URL (default: $BANK_FEED_BASE_URL)",
    )
    parser.add_argument(
        "--token",
        help="Bearer token for the endpoint (default: $BANK_FEED_ACCESS_TOKEN)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: $BANK_FEED_TIMEOUT or 30)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be greater than 0")

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,  # MCP uses stdout for protocol, so log to stderr
    )

    # Run the server
    try:
        asyncio.run(
            run_server(
                base_url=args.base_url,
                access_token=args.token,
                timeout=args.timeout,
            )
        )
    except KeyboardInterrupt:
        logging.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logging.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""
Utility functions for the bank feed MCP server.
"""

from bank_feed_mcp.utils.date_utils import (
    format_iso_utc,
    get_month_range,
    parse_iso_datetime,
    parse_period,
    period_bounds,
)

__all__ = [
    "format_iso_utc",
    "parse_iso_datetime",
    "parse_period",
    "period_bounds",
    "get_month_range",
]

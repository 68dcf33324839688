"""
Date utilities for parsing periods, date ranges and ISO-8601 timestamps.
"""

import calendar
from datetime import datetime, time, timedelta, timezone
from typing import Tuple


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO-8601 date or date-time string.

    A trailing "Z" is accepted as UTC. Naive values are taken as UTC.

    Raises:
        ValueError: If value is not ISO-8601
    """
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_iso_utc(value: datetime) -> str:
    """Render a datetime as an ISO-8601 UTC string with a "Z" suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_period(period: str) -> Tuple[str, str]:
    """
    Parse a period string into (start_date, end_date).

    Supported periods:
    - "this_month", "last_month"
    - "this_year", "last_year"
    - "last_7_days", "last_30_days", "last_90_days"
    - "ytd" (year to date)

    Returns:
        Tuple of (start_date, end_date) as "YYYY-MM-DD" strings

    Raises:
        ValueError: If period is not recognized
    """
    today = datetime.now()

    if period == "this_month":
        return get_month_range(today.year, today.month)

    elif period == "last_month":
        last_day_last_month = today.replace(day=1) - timedelta(days=1)
        return get_month_range(last_day_last_month.year, last_day_last_month.month)

    elif period == "this_year":
        return f"{today.year}-01-01", f"{today.year}-12-31"

    elif period == "last_year":
        year = today.year - 1
        return f"{year}-01-01", f"{year}-12-31"

    elif period in ("last_7_days", "last_30_days", "last_90_days"):
        days = int(period.split("_")[1])
        start = today - timedelta(days=days)
        return start.strftime("%Y-%m-%d"), today.strftime("%Y-%m-%d")

    elif period == "ytd":
        return f"{today.year}-01-01", today.strftime("%Y-%m-%d")

    else:
        raise ValueError(f"Unknown period: {period}")


def period_bounds(period: str) -> Tuple[datetime, datetime]:
    """
    Expand a period shorthand into inclusive UTC time bounds.

    The start is midnight of the first day and the end is the last second of
    the final day, so the bounds can be used as oldest/newest time filters.

    Raises:
        ValueError: If period is not recognized
    """
    start_date, end_date = parse_period(period)
    start = datetime.combine(
        datetime.strptime(start_date, "%Y-%m-%d").date(), time.min, tzinfo=timezone.utc
    )
    end = datetime.combine(
        datetime.strptime(end_date, "%Y-%m-%d").date(),
        time(23, 59, 59),
        tzinfo=timezone.utc,
    )
    return start, end


def get_month_range(year: int, month: int) -> Tuple[str, str]:
    """
    Get the date range for a specific month.

    Args:
        year: Year (e.g., 2026)
        month: Month (1-12)

    Returns:
        Tuple of (start_date, end_date) as "YYYY-MM-DD" strings

    Raises:
        ValueError: If month is not in valid range (1-12)
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")

    _, last_day = calendar.monthrange(year, month)

    start = f"{year:04d}-{month:02d}-01"
    end = f"{year:04d}-{month:02d}-{last_day:02d}"

    return start, end

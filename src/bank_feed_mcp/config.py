"""Configuration helpers for environment variables."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "http://localhost:3000/api/test-transactions"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOCALE = "en_AU"
DEFAULT_TIMEZONE = "UTC"


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def base_url() -> str:
    """Return the transaction listing endpoint URL."""
    return (get_env("BANK_FEED_BASE_URL", "") or "").strip() or DEFAULT_BASE_URL


def access_token() -> str | None:
    """Return the bearer token for the listing endpoint when configured."""
    token = (get_env("BANK_FEED_ACCESS_TOKEN", "") or "").strip()
    return token or None


def request_timeout() -> float:
    """Return the transport timeout in seconds."""
    raw_value = (get_env("BANK_FEED_TIMEOUT", "") or "").strip()
    if not raw_value:
        return DEFAULT_TIMEOUT_SECONDS

    try:
        value = float(raw_value)
    except ValueError:
        value = 0.0

    if value <= 0:
        logger.warning(
            "bank_feed_timeout_invalid value=%r; using default %ss",
            raw_value,
            DEFAULT_TIMEOUT_SECONDS,
        )
        return DEFAULT_TIMEOUT_SECONDS
    return value


def display_locale() -> str:
    """Return the locale used to render dates and amounts."""
    return (get_env("BANK_FEED_LOCALE", "") or "").strip() or DEFAULT_LOCALE


def display_timezone() -> str:
    """Return the timezone used to render transaction dates."""
    return (get_env("BANK_FEED_TIMEZONE", "") or "").strip() or DEFAULT_TIMEZONE

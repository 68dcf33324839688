"""
Presentation of transaction records.

Maps raw records to display-ready values: dates rendered in the caller's
locale and timezone, amounts rendered as currency in the record's own
currency. A field that cannot be rendered is reported on that record only.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from babel import Locale, UnknownLocaleError
from babel.dates import format_datetime, get_timezone
from babel.numbers import UnknownCurrencyError, format_currency, validate_currency
from pydantic import BaseModel, field_validator

from bank_feed_mcp import config
from bank_feed_mcp.core.exceptions import FormatError
from bank_feed_mcp.models.envelope import PaginationEnvelope, PresentedPage, ResultSummary
from bank_feed_mcp.models.transaction import (
    DisplayTransaction,
    FieldFormatError,
    TransactionRecord,
)
from bank_feed_mcp.utils.date_utils import parse_iso_datetime

logger = logging.getLogger(__name__)


class PresentationOptions(BaseModel):
    """Locale preferences used when rendering records."""

    model_config = {"frozen": True}

    locale: str = config.DEFAULT_LOCALE
    timezone: str = config.DEFAULT_TIMEZONE
    date_format: str = "medium"

    @field_validator("locale", mode="before")
    @classmethod
    def validate_locale(cls, v: object) -> object:
        """Accept "en-AU" or "en_AU" style identifiers known to CLDR."""
        if not isinstance(v, str):
            return v
        identifier = v.strip().replace("-", "_")
        try:
            Locale.parse(identifier)
        except (UnknownLocaleError, ValueError) as e:
            raise ValueError(f"Unknown locale: {v}") from e
        return identifier

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            get_timezone(v)
        except (LookupError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @classmethod
    def from_config(cls) -> "PresentationOptions":
        """Build options from environment configuration."""
        return cls(locale=config.display_locale(), timezone=config.display_timezone())


def format_timestamp(value: Optional[str], options: PresentationOptions) -> str:
    """
    Render an ISO-8601 timestamp in the options locale and timezone.

    Raises:
        FormatError: If the value is missing, not ISO-8601, or cannot be
            shown in the options timezone
    """
    field = "effective_date_time"
    if value is None or not value.strip():
        raise FormatError(field, value, "Missing transaction date")

    try:
        parsed = parse_iso_datetime(value)
    except ValueError:
        raise FormatError(field, value, f"Invalid transaction date: {value!r}") from None

    try:
        return format_datetime(
            parsed,
            format=options.date_format,
            tzinfo=get_timezone(options.timezone),
            locale=options.locale,
        )
    except OverflowError:
        raise FormatError(
            field, value, f"Transaction date out of range: {value!r}"
        ) from None


def parse_amount(value: Optional[str]) -> Decimal:
    """
    Parse a sign-prefixed decimal amount string.

    Raises:
        FormatError: If the value is missing, not a number, or not finite
    """
    if value is None or not value.strip():
        raise FormatError("amount", value, "Missing amount")

    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        raise FormatError("amount", value, f"Invalid amount: {value!r}") from None

    if not amount.is_finite():
        raise FormatError("amount", value, f"Invalid amount: {value!r}")
    return amount


def format_amount(
    value: Optional[str], currency: Optional[str], options: PresentationOptions
) -> str:
    """
    Render an amount as currency using the given ISO 4217 code.

    Raises:
        FormatError: If the amount or the currency code is invalid
    """
    amount = parse_amount(value)

    if currency is None or not currency.strip():
        raise FormatError("currency", currency, "Missing currency")

    code = currency.strip().upper()
    try:
        validate_currency(code)
    except UnknownCurrencyError:
        raise FormatError("currency", currency, f"Unknown currency: {currency!r}") from None

    return format_currency(amount, code, locale=options.locale)


def is_debit(amount: Optional[str]) -> bool:
    """Outgoing transactions carry a leading minus sign."""
    return (amount or "").startswith("-")


def _as_field_error(exc: FormatError) -> FieldFormatError:
    value = None if exc.value is None else str(exc.value)
    return FieldFormatError(field=exc.field, value=value, message=str(exc))


class ResultPresenter:
    """Turns decoded records into display rows."""

    def __init__(self, options: Optional[PresentationOptions] = None):
        self.options = options or PresentationOptions()

    def present(
        self, record: TransactionRecord, options: Optional[PresentationOptions] = None
    ) -> DisplayTransaction:
        """
        Render a single record.

        Never raises for record content: a bad field keeps its raw text and
        is listed in format_errors.
        """
        options = options or self.options
        errors = []

        try:
            formatted_date = format_timestamp(record.effective_date_time, options)
        except FormatError as e:
            errors.append(_as_field_error(e))
            formatted_date = record.effective_date_time or ""

        try:
            formatted_amount = format_amount(record.amount, record.currency, options)
        except FormatError as e:
            errors.append(_as_field_error(e))
            formatted_amount = record.amount or ""

        if errors:
            logger.debug(
                "Record %s rendered with format errors: %s",
                record.transaction_id,
                [err.field for err in errors],
            )

        return DisplayTransaction(
            formatted_date=formatted_date,
            formatted_amount=formatted_amount,
            is_debit=is_debit(record.amount),
            description=record.description,
            currency=record.currency,
            type=record.type,
            status=record.status,
            transaction_id=record.transaction_id,
            format_errors=errors,
        )

    def present_page(
        self, envelope: PaginationEnvelope, options: Optional[PresentationOptions] = None
    ) -> PresentedPage:
        """Render every record of a page together with its result summary."""
        transactions = [
            self.present(record, options) for record in envelope.page.transactions
        ]
        summary = ResultSummary(
            total_records=envelope.meta.total_records,
            total_pages=envelope.meta.total_pages,
            current_page=envelope.meta.current_page,
            returned=len(transactions),
        )
        return PresentedPage(summary=summary, transactions=transactions)

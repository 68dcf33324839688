"""
Transaction models for banking data provider responses.
"""

import json
from typing import Any, List, Optional

from pydantic import BaseModel, Field, computed_field, field_validator


def _raw_text(v: Any) -> Any:
    if v is None or isinstance(v, str):
        return v
    return json.dumps(v)


class TransactionRecord(BaseModel):
    """
    Represents a transaction as returned by the listing endpoint.

    String fields are kept as raw wire text, with non-string JSON values
    stored as their JSON text, so that a malformed value can be reported
    for this record alone.
    """

    model_config = {"populate_by_name": True, "frozen": True}

    # Rendered fields
    effective_date_time: Optional[str] = Field(default=None, alias="effectiveDateTime")
    amount: Optional[str] = None  # Sign-prefixed decimal, "-" = debit
    currency: Optional[str] = None
    description: str = ""
    type: str = ""
    status: str = ""

    # Identifiers
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")
    account_id: Optional[str] = Field(default=None, alias="accountId")

    @field_validator(
        "effective_date_time", "amount", "currency", "transaction_id", "account_id",
        mode="before",
    )
    @classmethod
    def keep_raw_text(cls, v: object) -> object:
        """Keep non-string JSON values as their wire text."""
        return _raw_text(v)

    @field_validator("description", "type", "status", mode="before")
    @classmethod
    def null_to_empty(cls, v: object) -> object:
        return "" if v is None else _raw_text(v)


class FieldFormatError(BaseModel):
    """A single record field that could not be rendered."""

    model_config = {"frozen": True}

    field: str
    value: Optional[str] = None
    message: str


class DisplayTransaction(BaseModel):
    """Display-ready projection of a TransactionRecord."""

    model_config = {"frozen": True}

    formatted_date: str
    formatted_amount: str
    is_debit: bool
    description: str = ""
    currency: Optional[str] = None
    type: str = ""
    status: str = ""
    transaction_id: Optional[str] = None
    format_errors: List[FieldFormatError] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def direction(self) -> str:
        """Debit or credit label for this transaction."""
        return "debit" if self.is_debit else "credit"

    def error_for(self, field: str) -> Optional[FieldFormatError]:
        """Return the format error recorded for a field, if any."""
        return next((err for err in self.format_errors if err.field == field), None)

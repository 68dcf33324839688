"""
Pagination envelope and rendered page models.
"""

from typing import List

from pydantic import BaseModel, Field, computed_field, model_validator

from bank_feed_mcp.models.transaction import DisplayTransaction, TransactionRecord


class PaginationMeta(BaseModel):
    """Result counts and page index reported by the listing endpoint."""

    model_config = {"populate_by_name": True, "frozen": True}

    total_records: int = Field(alias="totalRecords", ge=0)
    total_pages: int = Field(alias="totalPages", ge=0)
    current_page: int = Field(alias="currentPage", ge=1)

    @model_validator(mode="after")
    def check_page_bounds(self) -> "PaginationMeta":
        """currentPage must lie within totalPages unless the result is empty."""
        if self.total_pages == 0:
            if self.total_records != 0:
                raise ValueError(
                    f"totalPages is 0 but totalRecords is {self.total_records}"
                )
        elif self.current_page > self.total_pages:
            raise ValueError(
                f"currentPage {self.current_page} exceeds totalPages {self.total_pages}"
            )
        return self


class TransactionPage(BaseModel):
    """One page of transaction records."""

    model_config = {"frozen": True}

    transactions: List[TransactionRecord] = Field(default_factory=list)


class PaginationEnvelope(BaseModel):
    """Decoded listing response: metadata plus the record page."""

    model_config = {"frozen": True}

    meta: PaginationMeta
    page: TransactionPage


class ResultSummary(BaseModel):
    """Counts shown above a rendered result table."""

    total_records: int
    total_pages: int
    current_page: int
    returned: int


class PresentedPage(BaseModel):
    """A fully rendered page of transactions."""

    summary: ResultSummary
    transactions: List[DisplayTransaction] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_count(self) -> int:
        """Number of records with at least one field that failed to render."""
        return sum(1 for txn in self.transactions if txn.format_errors)

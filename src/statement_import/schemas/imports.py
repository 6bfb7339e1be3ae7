"""Pydantic schemas for statement import requests and responses."""

import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from statement_import.schemas.internal import RowError, TransactionType

ImportKind = Literal["account", "card"]


class ImportContext(BaseModel):
    """Where the imported transactions are going.

    Account imports keep the parsed sign of each row. Card imports are
    invoice lines: every row is an expense that is not settled until
    the invoice is paid.
    """

    kind: ImportKind = Field(default="account", description="'account' or 'card'")
    account_id: str | None = Field(None, max_length=100, description="Target account")
    card_id: str | None = Field(None, max_length=100, description="Target credit card")
    invoice_due_date: datetime.date | None = Field(
        None, description="Invoice due date (card imports)"
    )

    @property
    def is_card(self) -> bool:
        return self.kind == "card"


class ImportedTransaction(BaseModel):
    """Transaction ready for the review screen."""

    date: str = Field(..., description="Transaction date (YYYY-MM-DD)")
    description: str = Field(default="", description="Free-text description")
    amount: Decimal = Field(..., description="Signed amount (negative for money out)")
    type: TransactionType
    settled: bool = Field(..., description="Whether the money already moved")
    source_row_index: int = Field(..., ge=1, description="1-based line number in the source")
    account_id: str | None = None
    card_id: str | None = None
    invoice_due_date: datetime.date | None = None


class ImportPreview(BaseModel):
    """Result of parsing an upload, before anything is saved."""

    file_name: str = Field(default="", description="Original file name")
    kind: ImportKind = "account"
    format_id: str
    format_name: str
    separator: str
    encoding: str = Field(default="utf-8", description="Encoding used to decode the file")
    transactions: list[ImportedTransaction] = Field(default_factory=list)
    errors: list[RowError] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    total_rows: int = 0
    success_rate: float = Field(default=0.0, description="Percent of rows imported")

    @property
    def total_amount(self) -> Decimal:
        return sum((t.amount for t in self.transactions), Decimal("0"))


class FormatInfo(BaseModel):
    """Registry entry as listed to clients."""

    id: str
    name: str
    separator: str | None = Field(None, description="Fixed separator (None = sniffed)")
    has_header_row: bool


class ProcessingErrorDetail(BaseModel):
    """Detailed error information for a failed import."""

    error_code: str = Field(description="Error code from catalog")
    message: str = Field(description="Technical error message (for logging)")
    user_message: str = Field(description="User-friendly error message")
    suggestion: str = Field(description="Actionable guidance")
    retry_allowed: bool = Field(description="Whether the operation can be retried")

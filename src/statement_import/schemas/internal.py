"""Internal data schemas for parsed statement data.

These models represent the parser's output: normalized transactions,
isolated row errors and the per-file result that bundles them.
"""

import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TransactionType = Literal["receipt", "expense"]


class NormalizedTransaction(BaseModel):
    """Represents a single transaction normalized from one statement row.

    Amounts keep their sign: negative = money out, positive = money in.
    """

    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="Transaction date (YYYY-MM-DD)")
    description: str = Field(default="", description="Free-text description (may be empty)")
    amount: Decimal = Field(..., description="Signed amount (negative for money out)")
    type: TransactionType = Field(..., description="'receipt' or 'expense'")
    source_row_index: int = Field(..., ge=1, description="1-based line number in the source")

    @field_validator("date")
    @classmethod
    def date_is_iso(cls, v: str) -> str:
        """Ensure the date is a real calendar date in ISO format."""
        datetime.date.fromisoformat(v)
        return v

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return v.strip()

    @property
    def is_expense(self) -> bool:
        return self.type == "expense"

    @classmethod
    def from_amount(
        cls,
        date: str,
        description: str,
        amount: Decimal,
        source_row_index: int,
        type: TransactionType | None = None,
    ) -> "NormalizedTransaction":
        """Create a transaction, inferring the type from the amount sign.

        When an explicit type is given, the amount sign is aligned with it
        (expense -> negative, receipt -> positive).
        """
        if type is None:
            type = "expense" if amount < 0 else "receipt"
        elif type == "expense":
            amount = -abs(amount)
        else:
            amount = abs(amount)
        return cls(
            date=date,
            description=description,
            amount=amount,
            type=type,
            source_row_index=source_row_index,
        )


class RowError(BaseModel):
    """A single line that could not be normalized.

    Row errors are data, not exceptions: the parser records them and
    moves on to the next line.
    """

    model_config = ConfigDict(frozen=True)

    row_index: int = Field(..., ge=1, description="1-based line number in the source")
    raw_line: str = Field(..., description="Line exactly as read")
    reason: str = Field(..., description="Why the row was skipped")


class ParseResult(BaseModel):
    """Outcome of parsing one statement file with one format entry."""

    model_config = ConfigDict(frozen=True)

    format_id: str = Field(..., description="Format entry used (e.g., 'itau', 'generic')")
    format_name: str = Field(..., description="Human label of the format entry")
    separator: str = Field(..., description="Effective column separator")
    transactions: list[NormalizedTransaction] = Field(default_factory=list)
    errors: list[RowError] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    total_rows: int = Field(default=0, description="Data rows examined (header excluded)")

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def success_rate(self) -> float:
        """Percentage of data rows that became transactions."""
        if self.total_rows == 0:
            return 0.0
        return len(self.transactions) / self.total_rows * 100

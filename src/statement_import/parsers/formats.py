"""Statement format entries.

A FormatEntry is static configuration: how to recognize one
institution's export and how to read its columns. Entries are built
once at import time and never mutated.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from functools import cached_property

from statement_import.parsers.normalizers import (
    normalize_generic_amount,
    normalize_generic_date,
    normalize_type,
)
from statement_import.schemas.internal import TransactionType

GENERIC_ID = "generic"

DateNormalizer = Callable[[str], str | None]
AmountNormalizer = Callable[[str], Decimal | None]
TypeNormalizer = Callable[[str], TransactionType | None]


@dataclass(frozen=True)
class ColumnMap:
    """Zero-based column positions of the logical fields.

    None means the field doesn't exist in the source. A missing ``type``
    is inferred from the amount sign; a missing ``amount`` is rebuilt from
    ``credit`` minus ``debit`` when those columns exist.
    """

    date: int
    description: int | None = None
    amount: int | None = None
    type: int | None = None
    credit: int | None = None
    debit: int | None = None

    def __post_init__(self):
        if self.amount is None and self.credit is None and self.debit is None:
            raise ValueError("ColumnMap needs an amount column or credit/debit columns")

    @property
    def uses_split_amount(self) -> bool:
        return self.amount is None


@dataclass(frozen=True)
class FormatEntry:
    """Detection and parsing rules for one statement format.

    Example:
        >>> entry = FormatEntry(
        ...     id="mybank",
        ...     display_name="My Bank",
        ...     detection_keywords=("mybank",),
        ...     field_separator=";",
        ...     column_map=ColumnMap(date=0, description=1, amount=2),
        ... )
    """

    id: str
    display_name: str
    column_map: ColumnMap
    detection_keywords: tuple[str, ...] = ()
    detection_patterns: tuple[str, ...] = ()
    field_separator: str | None = None
    has_header_row: bool = True
    date_normalizer: DateNormalizer = normalize_generic_date
    amount_normalizer: AmountNormalizer = normalize_generic_amount
    type_normalizer: TypeNormalizer = normalize_type
    # Headerless layouts only: skip a first line whose date and amount
    # cells both fail to parse.
    optional_header: bool = False
    notes: str = field(default="", compare=False)

    def __post_init__(self):
        if self.field_separator is not None and len(self.field_separator) != 1:
            raise ValueError(
                f"Format {self.id!r}: field separator must be a single character"
            )

    @property
    def is_generic(self) -> bool:
        return self.id == GENERIC_ID

    @cached_property
    def compiled_patterns(self) -> tuple[re.Pattern, ...]:
        """Detection patterns compiled case-insensitive and multiline."""
        return tuple(
            re.compile(pattern, re.IGNORECASE | re.MULTILINE)
            for pattern in self.detection_patterns
        )

    def matches_keywords(self, *texts: str) -> bool:
        """Check if any keyword is a case-insensitive substring of the texts."""
        haystacks = [text.lower() for text in texts if text]
        return any(
            keyword.lower() in haystack
            for keyword in self.detection_keywords
            for haystack in haystacks
        )

    def matches_patterns(self, text: str) -> bool:
        """Check if any detection pattern matches the text."""
        if not text:
            return False
        return any(pattern.search(text) for pattern in self.compiled_patterns)


GENERIC_FORMAT = FormatEntry(
    id=GENERIC_ID,
    display_name="Generic CSV",
    column_map=ColumnMap(date=0, description=1, amount=2),
    field_separator=None,
    has_header_row=True,
    notes="Separator, decimal convention and date layout are sniffed per file.",
)

"""Pydantic schemas."""

from statement_import.schemas.imports import (
    FormatInfo,
    ImportContext,
    ImportedTransaction,
    ImportPreview,
    ProcessingErrorDetail,
)
from statement_import.schemas.internal import NormalizedTransaction, ParseResult, RowError

__all__ = [
    "FormatInfo",
    "ImportContext",
    "ImportPreview",
    "ImportedTransaction",
    "NormalizedTransaction",
    "ParseResult",
    "ProcessingErrorDetail",
    "RowError",
]

"""Core building blocks: error catalog, exceptions, events and logging."""

from statement_import.core.events import IMPORT_FAILED, IMPORT_PARSED, EventBus
from statement_import.core.exceptions import (
    DecodingError,
    EmptyContentError,
    FatalParseError,
    ReporterError,
    SeparatorDetectionError,
    StatementImportError,
    UnsupportedFormatError,
)

__all__ = [
    "EventBus",
    "IMPORT_PARSED",
    "IMPORT_FAILED",
    "StatementImportError",
    "FatalParseError",
    "EmptyContentError",
    "SeparatorDetectionError",
    "DecodingError",
    "UnsupportedFormatError",
    "ReporterError",
]

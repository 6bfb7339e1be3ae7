"""Custom exception classes for statement imports.

This module defines the hierarchy of exceptions used by the import
pipeline. Each exception maps to an error code defined in errors.py.

Row-level problems are never raised: the parser returns them as
RowError data. Only whole-file problems (and reporter internals)
use exceptions.
"""

from typing import Any


class StatementImportError(Exception):
    """Base exception for all statement import errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "IMPORT_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 400)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 400,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class FatalParseError(StatementImportError):
    """Raised when a whole file cannot be parsed.

    The caller is expected to show a user-facing message and offer to
    hand the file over to the failure reporter.
    """

    pass


class EmptyContentError(FatalParseError):
    """Raised when the statement content is empty or whitespace only."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("IMPORT_001", details)


class SeparatorDetectionError(FatalParseError):
    """Raised when no column separator can be sniffed from the content."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("IMPORT_002", details)


class DecodingError(StatementImportError):
    """Raised when raw file bytes cannot be decoded to text."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("IMPORT_003", details)


class UnsupportedFormatError(StatementImportError):
    """Raised when a caller forces a format id the registry doesn't know."""

    def __init__(self, format_id: str):
        super().__init__("IMPORT_004", {"format_id": format_id})


class ReporterError(Exception):
    """Raised inside failure reporters.

    Never crosses report_failure_safely(); it exists so reporters can
    signal partial failures (upload ok, record not stored) explicitly.
    """

    pass

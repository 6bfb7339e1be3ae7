"""Application services."""

from statement_import.services.failure_reporter import (
    FailedUpload,
    FailureReporter,
    StorageFailureReporter,
    report_failure_safely,
    summarize_errors,
    summarize_exception,
)
from statement_import.services.importer import ImportService

__all__ = [
    "FailedUpload",
    "FailureReporter",
    "ImportService",
    "StorageFailureReporter",
    "report_failure_safely",
    "summarize_errors",
    "summarize_exception",
]

"""Error codes and user-friendly messages.

This module defines the error catalog for statement imports.
Each error has:
- error_code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

from dataclasses import dataclass


@dataclass
class ErrorDefinition:
    """Definition of a single error type."""

    code: str
    message: str
    user_message: str
    suggestion: str
    retry_allowed: bool


# Error catalog for statement imports
ERROR_CATALOG: dict[str, dict] = {
    "IMPORT_001": {
        "code": "IMPORT_001",
        "message": "Statement file is empty",
        "user_message": "This file doesn't contain any data.",
        "suggestion": "Export the statement again from your bank and retry.",
        "retry_allowed": True,
    },
    "IMPORT_002": {
        "code": "IMPORT_002",
        "message": "Column separator could not be determined",
        "user_message": "We couldn't recognize the columns in this file.",
        "suggestion": "Use a CSV export separated by commas, semicolons or tabs. "
        "The file was saved for our support team to review.",
        "retry_allowed": False,
    },
    "IMPORT_003": {
        "code": "IMPORT_003",
        "message": "Statement file could not be decoded as text",
        "user_message": "This file doesn't look like a text statement.",
        "suggestion": "Export the statement as CSV or TXT and try again.",
        "retry_allowed": False,
    },
    "IMPORT_004": {
        "code": "IMPORT_004",
        "message": "Requested statement format is not registered",
        "user_message": "We don't support the selected bank format.",
        "suggestion": "Choose another bank or let us detect the format automatically.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data.",
        "suggestion": "Please check your input and try again.",
        "retry_allowed": True,
    },
    # API-specific errors
    "API_001": {
        "code": "API_001",
        "message": "Invalid file type uploaded",
        "user_message": "Only CSV and TXT statements are supported.",
        "suggestion": "Please upload the statement exported as CSV or TXT.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "File size exceeds maximum limit",
        "user_message": "The file is too large.",
        "suggestion": "Please upload a smaller statement file or split the period.",
        "retry_allowed": False,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred.",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists.",
        "suggestion": "Please check if the record was already created.",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred.",
        "suggestion": "Please try again later or contact support.",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic definition for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    """Get actionable suggestion for an error code."""
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]

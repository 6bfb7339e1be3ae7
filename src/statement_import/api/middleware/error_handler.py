"""Global error handling middleware.

This module provides consistent error responses across all API endpoints.
Exceptions are converted to the error catalog's JSON shape with
appropriate HTTP status codes.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from statement_import.config import settings
from statement_import.core.errors import get_error
from statement_import.core.exceptions import StatementImportError

logger = logging.getLogger(__name__)


def error_content(error_code: str, message: str | None = None) -> dict[str, Any]:
    """Build the JSON body for a catalog error.

    Args:
        error_code: Code from the error catalog
        message: Technical message overriding the catalog one

    Returns:
        Dict with error_code, message, user_message, suggestion, retry_allowed
    """
    error_def = get_error(error_code)
    return {
        "error_code": error_code,
        "message": message or error_def["message"],
        "user_message": error_def["user_message"],
        "suggestion": error_def["suggestion"],
        "retry_allowed": error_def["retry_allowed"],
    }


def log_import_error(request: Request, exc: StatementImportError) -> None:
    # Details can echo upload content; only log them in debug.
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(level, f"Statement import error: {exc.error_code}", extra=extra)


async def handle_statement_import_error(
    request: Request, exc: StatementImportError
) -> JSONResponse:
    """Handle statement import exceptions.

    Args:
        request: The incoming request
        exc: The statement import exception

    Returns:
        JSONResponse with error details from catalog
    """
    log_import_error(request, exc)
    return JSONResponse(status_code=exc.http_status, content=error_content(exc.error_code))


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse with validation error details
    """
    errors = exc.errors()
    error_messages = []

    for error in errors:
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        extra["errors"] = errors
    logger.warning(f"Validation error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_content("VAL_001", " | ".join(error_messages)),
    )


async def handle_integrity_error(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Handle database integrity errors.

    Args:
        request: The incoming request
        exc: The integrity error

    Returns:
        JSONResponse with error details
    """
    # Do not log str(exc): it can include SQL + bound parameters.
    log = logger.exception if settings.debug else logger.error
    log(
        f"Database integrity error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=error_content("DB_002"),
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_content("DB_001"),
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    # In non-debug: do not log str(exc) or traceback (may include upload content).
    log = logger.exception if settings.debug else logger.error
    log(
        f"Unexpected error on {request.url.path}",
        extra={
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_content("SYS_001"),
    )

"""Statement import endpoints: format listing, upload preview and failed uploads."""

from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Header, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from statement_import.api.deps import (
    get_failed_import_repository,
    get_failure_reporter,
    get_import_service,
    get_parser_factory,
)
from statement_import.api.middleware.error_handler import error_content, log_import_error
from statement_import.config import Settings, get_settings
from statement_import.core.exceptions import (
    DecodingError,
    EmptyContentError,
    FatalParseError,
    StatementImportError,
)
from statement_import.parsers.extractor import TextExtractor
from statement_import.parsers.factory import ParserFactory
from statement_import.repositories.failed_import import FailedImportRepository
from statement_import.schemas.imports import (
    FormatInfo,
    ImportContext,
    ImportKind,
    ImportPreview,
    ProcessingErrorDetail,
)
from statement_import.services.failure_reporter import (
    FailedUpload,
    FailureReporter,
    report_failure_safely,
    summarize_errors,
    summarize_exception,
)
from statement_import.services.importer import ImportService

router = APIRouter(prefix="/imports", tags=["imports"])


class FailedImportResponse(BaseModel):
    """Failed upload record as listed to support."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    file_name: str
    file_path: str
    file_size: int
    content_type: str | None
    format_id: str | None
    error_summary: str
    reviewed: bool
    created_at: datetime


async def read_body(request: Request, max_bytes: int) -> bytes:
    """Read the raw request body with a strict size cap.

    Raises:
        StatementImportError: API_002 when the body exceeds max_bytes
    """
    buf = bytearray()
    async for chunk in request.stream():
        if not chunk:
            continue
        if len(buf) + len(chunk) > max_bytes:
            raise StatementImportError(
                "API_002",
                {"max_bytes": max_bytes},
                http_status=413,
            )
        buf.extend(chunk)
    return bytes(buf)


@router.get(
    "/formats",
    response_model=list[FormatInfo],
    summary="List statement formats",
)
async def list_formats(
    factory: ParserFactory = Depends(get_parser_factory),
) -> list[FormatInfo]:
    """List registered formats in detection order (generic last)."""
    return [FormatInfo(**entry) for entry in factory.registry.supported_formats()]


@router.post(
    "/preview",
    response_model=ImportPreview,
    summary="Preview a statement import",
    description="""
    Parse a bank statement export and return normalized transactions for review.
    Nothing is saved.

    ## File Requirements
    - Request body must be the raw file bytes (no multipart)
    - `Content-Type`: text/csv, text/plain, text/tab-separated-values or
      application/octet-stream
    - `X-File-Name`: original file name (helps format detection)
    - Maximum size: configurable via `IMPORT_MAX_SIZE_MB` (default: 10MB)

    ## Error Codes
    - IMPORT_001: Empty file
    - IMPORT_002: Columns could not be recognized
    - IMPORT_003: File is not text
    - IMPORT_004: Unknown format_id
    - API_001: Invalid file type
    - API_002: File too large
    """,
    responses={
        400: {"description": "File could not be imported", "model": ProcessingErrorDetail},
        413: {"description": "File too large", "model": ProcessingErrorDetail},
    },
)
async def preview_import(
    request: Request,
    background_tasks: BackgroundTasks,
    file_name: Annotated[
        str, Header(alias="X-File-Name", description="Original file name")
    ] = "",
    kind: Annotated[ImportKind, Query(description="'account' or 'card'")] = "account",
    account_id: Annotated[str | None, Query(max_length=100)] = None,
    card_id: Annotated[str | None, Query(max_length=100)] = None,
    invoice_due_date: Annotated[date | None, Query()] = None,
    format_id: Annotated[
        str | None, Query(description="Skip detection and use this format")
    ] = None,
    service: ImportService = Depends(get_import_service),
    reporter: FailureReporter | None = Depends(get_failure_reporter),
    settings: Settings = Depends(get_settings),
):
    """
    Parse an uploaded statement into an import preview.

    Row errors don't fail the request; they are returned with the preview
    and the file is reported for review in the background. Files that
    can't be parsed at all get a 400 and are reported the same way.
    """
    content_type = request.headers.get("content-type") or ""
    if not TextExtractor.can_handle(None, content_type):
        raise StatementImportError("API_001", {"content_type": content_type})

    data = await read_body(request, settings.import_max_size_mb * 1024 * 1024)
    if not data:
        raise EmptyContentError({"file_name": file_name})

    context = ImportContext(
        kind=kind,
        account_id=account_id,
        card_id=card_id,
        invoice_due_date=invoice_due_date,
    )
    upload = FailedUpload(
        file_name=file_name,
        data=data,
        content_type=content_type.split(";")[0].strip() or None,
        format_id=format_id,
    )

    try:
        preview = service.preview(data, file_name, context, format_id)
    except (FatalParseError, DecodingError) as e:
        log_import_error(request, e)
        # Raising would skip background tasks; attach the report to the response.
        report = BackgroundTasks()
        report.add_task(report_failure_safely, reporter, upload, summarize_exception(e))
        return JSONResponse(
            status_code=e.http_status,
            content=error_content(e.error_code),
            background=report,
        )

    if preview.errors:
        background_tasks.add_task(
            report_failure_safely,
            reporter,
            FailedUpload(
                file_name=upload.file_name,
                data=upload.data,
                content_type=upload.content_type,
                format_id=preview.format_id,
            ),
            summarize_errors(preview.errors),
        )

    return preview


@router.get(
    "/failed",
    response_model=list[FailedImportResponse],
    summary="List failed uploads awaiting review",
)
async def list_failed_imports(
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    repo: FailedImportRepository = Depends(get_failed_import_repository),
) -> list[FailedImportResponse]:
    records = await repo.list_pending(skip=skip, limit=limit)
    return [FailedImportResponse.model_validate(record) for record in records]


@router.post(
    "/failed/{failed_import_id}/reviewed",
    response_model=FailedImportResponse,
    summary="Mark a failed upload as reviewed",
    responses={404: {"description": "Record not found"}},
)
async def mark_failed_import_reviewed(
    failed_import_id: UUID,
    repo: FailedImportRepository = Depends(get_failed_import_repository),
):
    record = await repo.mark_reviewed(failed_import_id)
    if record is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Failed import not found"},
        )
    return FailedImportResponse.model_validate(record)

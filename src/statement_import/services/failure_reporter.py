"""Best-effort reporting of uploads that failed to import.

When a file can't be parsed (or parses with row errors), a copy of the
original bytes is kept for support together with a short error summary.
Reporting must never affect the user's import: report_failure_safely()
is the boundary that turns every reporter failure into a logged warning
and a False result.
"""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from statement_import.core.errors import get_error
from statement_import.core.exceptions import ReporterError, StatementImportError
from statement_import.models.failed_import import FailedImport
from statement_import.repositories.failed_import import FailedImportRepository
from statement_import.schemas.internal import RowError
from statement_import.storage.local import LocalFileStorage, safe_object_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FailedUpload:
    """The upload being reported, as received."""

    file_name: str
    data: bytes
    content_type: str | None = None
    format_id: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


class FailureReporter(Protocol):
    """Anything that can keep a failed upload for later review."""

    async def save(self, upload: FailedUpload, error_summary: str) -> None:
        ...


class StorageFailureReporter:
    """Stores the file in object storage and records it in the database.

    Example:
        >>> reporter = StorageFailureReporter(LocalFileStorage("./failed-imports"), AsyncSessionLocal)
        >>> await report_failure_safely(reporter, upload, "IMPORT_002: ...")
        True
    """

    def __init__(
        self,
        storage: LocalFileStorage,
        session_factory: Callable[[], AsyncSession],
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the reporter.

        Args:
            storage: Where the raw bytes go
            session_factory: Creates database sessions (async_sessionmaker)
            clock: Seconds since the epoch, used for object keys
        """
        self.storage = storage
        self.session_factory = session_factory
        self.clock = clock

    def object_key(self, file_name: str) -> str:
        """Build a unique key: '<epoch-ms>_<safe-name>'."""
        return f"{int(self.clock() * 1000)}_{safe_object_name(file_name)}"

    async def save(self, upload: FailedUpload, error_summary: str) -> None:
        """Store the upload and its record.

        Raises:
            ReporterError: If the file or the record can't be stored
        """
        key = self.object_key(upload.file_name)
        try:
            path = self.storage.put(key, upload.data)
        except (OSError, ValueError) as e:
            raise ReporterError(f"Could not store failed upload: {type(e).__name__}") from e

        try:
            async with self.session_factory() as session:
                await FailedImportRepository(session).create(
                    FailedImport(
                        file_name=upload.file_name or "upload",
                        file_path=path,
                        file_size=upload.size,
                        content_type=upload.content_type,
                        format_id=upload.format_id,
                        error_summary=error_summary,
                    )
                )
        except SQLAlchemyError as e:
            raise ReporterError(
                f"Stored {path} but could not record it: {type(e).__name__}"
            ) from e

        logger.info(
            "Failed upload saved for review",
            extra={"key": path, "size": upload.size, "format_id": upload.format_id},
        )


async def report_failure_safely(
    reporter: FailureReporter | None, upload: FailedUpload, error_summary: str
) -> bool:
    """Hand an upload to a reporter without ever raising.

    Args:
        reporter: Reporter to use (None disables reporting)
        upload: The failed upload
        error_summary: Short description of what went wrong

    Returns:
        True if the reporter finished, False if it failed or is disabled
    """
    if reporter is None:
        return False
    try:
        await reporter.save(upload, error_summary)
    except Exception as e:
        logger.warning(
            "Failed upload could not be reported",
            extra={"error_type": type(e).__name__, "error": str(e)},
        )
        return False
    return True


def summarize_errors(errors: Sequence[RowError], limit: int = 5) -> str:
    """Describe row errors in one short text.

    Example:
        >>> summarize_errors([RowError(row_index=3, raw_line="x", reason="invalid date: 'x'")])
        "1 row(s) failed: line 3: invalid date: 'x'"
    """
    if not errors:
        return "no row errors"
    parts = [f"line {error.row_index}: {error.reason}" for error in errors[:limit]]
    summary = f"{len(errors)} row(s) failed: " + "; ".join(parts)
    if len(errors) > limit:
        summary += f"; (+{len(errors) - limit} more)"
    return summary


def summarize_exception(error: StatementImportError) -> str:
    """Describe a fatal import error as '<code>: <technical message>'."""
    return f"{error.error_code}: {get_error(error.error_code)['message']}"

"""FastAPI dependency injection for services, storage and database."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from statement_import.config import Settings, get_settings
from statement_import.core.events import EventBus
from statement_import.db.session import AsyncSessionLocal, get_db
from statement_import.parsers.factory import ParserFactory
from statement_import.repositories.failed_import import FailedImportRepository
from statement_import.services.failure_reporter import FailureReporter, StorageFailureReporter
from statement_import.services.importer import ImportService
from statement_import.storage.local import LocalFileStorage

__all__ = [
    "get_db",
    "get_event_bus",
    "get_failed_import_repository",
    "get_failure_reporter",
    "get_import_service",
    "get_parser_factory",
    "get_session_factory",
]


def get_event_bus(request: Request) -> EventBus:
    """Get the application's event bus (created at startup)."""
    return request.app.state.event_bus


def get_parser_factory(request: Request) -> ParserFactory:
    """Get the application's parser factory."""
    return request.app.state.parser_factory


def get_import_service(
    factory: ParserFactory = Depends(get_parser_factory),
    event_bus: EventBus = Depends(get_event_bus),
) -> ImportService:
    """
    Get import service instance.

    Args:
        factory: Parser factory
        event_bus: Application event bus

    Returns:
        ImportService instance
    """
    return ImportService(factory, event_bus)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory used outside request-scoped sessions."""
    return AsyncSessionLocal


def get_failure_reporter(
    settings: Settings = Depends(get_settings),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> FailureReporter | None:
    """
    Get the failure reporter (None when reporting is disabled).

    The reporter runs after the response is sent, so it gets a session
    factory instead of the request's session.
    """
    if not settings.report_failed_imports:
        return None
    return StorageFailureReporter(LocalFileStorage(settings.failed_imports_dir), session_factory)


async def get_failed_import_repository(
    db: AsyncSession = Depends(get_db),
) -> FailedImportRepository:
    return FailedImportRepository(db)

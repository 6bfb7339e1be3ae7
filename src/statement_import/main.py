import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from statement_import import __version__
from statement_import.api.middleware.error_handler import (
    handle_generic_error,
    handle_integrity_error,
    handle_statement_import_error,
    handle_validation_error,
)
from statement_import.api.middleware.logging import RequestLoggingMiddleware
from statement_import.api.v1 import router as v1_router
from statement_import.api.v1.health import router as health_router
from statement_import.config import settings
from statement_import.core.events import EventBus
from statement_import.core.exceptions import StatementImportError
from statement_import.core.logging import setup_logging
from statement_import.db.session import dispose_db, init_db
from statement_import.parsers.factory import ParserFactory

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(settings.log_level, json_format=settings.json_logs, log_file=settings.log_file)
    if settings.create_tables_on_startup:
        await init_db()
    logger.info(
        "Statement import API started",
        extra={"formats": app.state.parser_factory.registry.ids()},
    )
    yield
    # Shutdown
    await dispose_db()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Statement Import API",
        description="Bank statement (CSV/TXT) import with format detection",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # One bus and one factory per application
    app.state.event_bus = EventBus()
    app.state.parser_factory = ParserFactory(sample_lines=settings.detection_sample_lines)

    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(StatementImportError, handle_statement_import_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()

import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# Settings are read at import time; point them at the test database first.
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("APP_ENV", "test")

sys.path.append(str(Path(__file__).parents[1] / "src"))

from statement_import.api.deps import get_session_factory
from statement_import.config import Settings, get_settings
from statement_import.db.session import get_db
from statement_import.main import app
from statement_import.models.base import Base

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse: parser tests run without touching the database.
    """
    import statement_import.models  # noqa: F401

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def failed_imports_dir(tmp_path: Path) -> Path:
    return tmp_path / "failed-imports"


@pytest.fixture
def test_settings(failed_imports_dir: Path) -> Settings:
    return Settings(
        database_url=TEST_DATABASE_URL,
        failed_imports_dir=str(failed_imports_dir),
        report_failed_imports=True,
        import_max_size_mb=1,
    )


@pytest.fixture
async def client(db_session: AsyncSession, test_settings: Settings):
    """Provide test client with database and settings overrides."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestSessionLocal
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()

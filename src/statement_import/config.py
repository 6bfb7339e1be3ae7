"""Application configuration using Pydantic settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: str | None = None

    # Database (failed import records)
    database_url: str = "sqlite+aiosqlite:///./statement_import.db"
    db_echo: bool = False
    create_tables_on_startup: bool = True

    # Import
    import_max_size_mb: int = 10
    # Lines handed to format detection; below 5 the separator and data rows
    # aren't reliably visible.
    detection_sample_lines: int = Field(default=10, ge=5)

    # Failure reporting
    report_failed_imports: bool = True
    failed_imports_dir: str = "./failed-imports"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

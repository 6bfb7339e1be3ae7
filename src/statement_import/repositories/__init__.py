"""Data access repositories."""
from statement_import.repositories.base import BaseRepository
from statement_import.repositories.failed_import import FailedImportRepository

__all__ = ["BaseRepository", "FailedImportRepository"]

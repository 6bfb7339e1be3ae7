"""Database models."""
from statement_import.models.base import Base, BaseModel
from statement_import.models.failed_import import FailedImport

__all__ = ["Base", "BaseModel", "FailedImport"]

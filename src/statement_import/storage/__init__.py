"""Object storage for failed uploads."""

from statement_import.storage.local import LocalFileStorage, safe_object_name

__all__ = ["LocalFileStorage", "safe_object_name"]

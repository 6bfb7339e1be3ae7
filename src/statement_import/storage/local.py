"""Local filesystem object storage.

Objects live as plain files under one base directory; keys are flat
file names.
"""

import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
MAX_NAME_LENGTH = 80


def safe_object_name(file_name: str) -> str:
    """Reduce a user-supplied file name to a safe object name.

    Directory parts are dropped and anything outside ``[A-Za-z0-9._-]``
    becomes ``_``.

    Example:
        >>> safe_object_name("../extrato março.csv")
        'extrato_mar_o.csv'
    """
    base = os.path.basename(file_name.replace("\\", "/"))
    safe = _UNSAFE_CHARS.sub("_", base).strip("._")[:MAX_NAME_LENGTH]
    return safe or "upload"


class LocalFileStorage:
    """Stores objects as files in a directory."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def path_for(self, key: str) -> Path:
        """Resolve a key to its file path.

        Raises:
            ValueError: If the key would escape the base directory
        """
        if not key or key != safe_object_name(key):
            raise ValueError(f"Invalid object key: {key!r}")
        return self.base_dir / key

    def put(self, key: str, data: bytes) -> str:
        """Write an object.

        Args:
            key: Object key (a safe file name)
            data: Object content

        Returns:
            The key the object was stored under

        Raises:
            ValueError: If the key is not a safe name
            OSError: If the file can't be written
        """
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug("Stored object", extra={"key": key, "size": len(data)})
        return key

    def get(self, key: str) -> bytes:
        """Read an object.

        Raises:
            FileNotFoundError: If the key doesn't exist
        """
        path = self.path_for(key)
        if not path.exists():
            raise FileNotFoundError(f"Object not found: {key}")
        return path.read_bytes()

    def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

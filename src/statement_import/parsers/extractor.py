"""Text extraction from uploaded statement files.

This module turns raw file bytes into clean text for detection and
parsing: encoding sniffing from the byte-order mark, UTF-8 decoding
with a Latin-1 fallback for legacy bank exports, newline
normalization and NUL removal.
"""

import logging
from dataclasses import dataclass
from pathlib import PurePath

from statement_import.core.exceptions import DecodingError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".csv", ".txt", ".tsv"}
SUPPORTED_CONTENT_TYPES = {
    "text/csv",
    "text/plain",
    "text/tab-separated-values",
    "application/csv",
    "application/vnd.ms-excel",
    "application/octet-stream",
}

_BOMS = (
    (b"\xef\xbb\xbf", "utf-8-sig"),
    (b"\xff\xfe", "utf-16-le"),
    (b"\xfe\xff", "utf-16-be"),
)


@dataclass(frozen=True)
class ExtractedText:
    """Decoded and cleaned statement text."""

    text: str
    encoding: str

    @property
    def line_count(self) -> int:
        """Number of non-blank lines."""
        return sum(1 for line in self.text.split("\n") if line.strip())

    def preview(self, max_length: int = 500) -> str:
        """Leading part of the text for logs and error reports."""
        if len(self.text) <= max_length:
            return self.text
        return self.text[:max_length] + "..."


def clean_text(text: str) -> str:
    """Normalize line endings to '\\n' and drop NUL characters."""
    if not text:
        return ""
    return text.replace("\r\n", "\n").replace("\r", "\n").replace("\x00", "")


def detect_encoding(data: bytes) -> str | None:
    """Detect the encoding from a byte-order mark (None when absent)."""
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return encoding
    return None


class TextExtractor:
    """Decodes uploaded statement files.

    Example:
        >>> extractor = TextExtractor()
        >>> extracted = extractor.extract(file_bytes)
        >>> extracted.encoding
        'utf-8'
    """

    def __init__(self, fallback_encoding: str = "latin-1"):
        """Initialize the extractor.

        Args:
            fallback_encoding: Used when the bytes are not valid UTF-8
        """
        self.fallback_encoding = fallback_encoding

    @staticmethod
    def can_handle(file_name: str | None, content_type: str | None = None) -> bool:
        """Check if a file looks like a text statement (by extension or MIME type)."""
        if file_name and PurePath(file_name).suffix.lower() in SUPPORTED_EXTENSIONS:
            return True
        if content_type:
            mime = content_type.split(";")[0].strip().lower()
            return mime in SUPPORTED_CONTENT_TYPES
        return False

    def extract(self, data: bytes) -> ExtractedText:
        """Decode and clean raw file bytes.

        Args:
            data: File content

        Returns:
            ExtractedText with the cleaned text and the encoding used

        Raises:
            DecodingError: If a UTF-16 file (by BOM) can't be decoded
        """
        encoding = detect_encoding(data)
        if encoding is not None:
            try:
                text = data.decode(encoding)
            except UnicodeDecodeError as e:
                raise DecodingError({"encoding": encoding}) from e
            text = text.lstrip("\ufeff")
            # utf-8-sig strips the BOM itself; report the plain codec name.
            encoding = "utf-8" if encoding == "utf-8-sig" else encoding
        else:
            try:
                text = data.decode("utf-8")
                encoding = "utf-8"
            except UnicodeDecodeError:
                logger.warning(
                    "File is not valid UTF-8; decoding with fallback",
                    extra={"encoding": self.fallback_encoding},
                )
                text = data.decode(self.fallback_encoding, errors="replace")
                encoding = self.fallback_encoding

        return ExtractedText(text=clean_text(text), encoding=encoding)

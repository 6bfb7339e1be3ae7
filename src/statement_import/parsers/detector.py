"""Statement format detection.

This module identifies which institution produced a statement file
based on its file name and the first lines of its content.
"""

import logging

from statement_import.parsers.formats import FormatEntry
from statement_import.parsers.registry import FormatRegistry, default_registry

logger = logging.getLogger(__name__)

MIN_SAMPLE_LINES = 5


def content_sample(text: str, max_lines: int = 10) -> str:
    """Return the first lines of a file for detection.

    Args:
        text: Decoded file content
        max_lines: Number of lines to keep (never fewer than 5)

    Returns:
        The leading lines joined with newlines (the whole text when shorter)
    """
    if not text:
        return ""
    max_lines = max(max_lines, MIN_SAMPLE_LINES)
    return "\n".join(text.splitlines()[:max_lines])


class FormatDetector:
    """Detects the statement format of an uploaded file.

    Institution entries are tried in registry order. An entry matches
    when one of its keywords appears (case-insensitive) in the file name
    or the content sample, or, failing that, when one of its patterns
    matches the content sample. No match falls back to the generic entry.

    Example:
        >>> detector = FormatDetector()
        >>> entry = detector.detect("extrato-nubank.csv", sample)
        >>> entry.id
        'nubank'
    """

    def __init__(self, registry: FormatRegistry | None = None):
        """Initialize the detector.

        Args:
            registry: Format catalog (default: the shipped registry)
        """
        self.registry = registry or default_registry()

    def detect(self, file_name: str | None, content_sample: str | None) -> FormatEntry:
        """Select the best-matching format entry.

        Args:
            file_name: Original file name (may be empty)
            content_sample: First lines of the decoded content

        Returns:
            The first matching institution entry, else the generic entry
        """
        file_name = file_name or ""
        content_sample = content_sample or ""

        for entry in self.registry.institution_entries:
            if entry.matches_keywords(file_name, content_sample):
                logger.debug(
                    "Format detected by keyword",
                    extra={"format_id": entry.id},
                )
                return entry
            if entry.matches_patterns(content_sample):
                logger.debug(
                    "Format detected by pattern",
                    extra={"format_id": entry.id},
                )
                return entry

        logger.debug("No institution format matched; using generic")
        return self.registry.generic

    def get_supported_formats(self) -> list[str]:
        """Get list of format ids in detection order."""
        return self.registry.ids()

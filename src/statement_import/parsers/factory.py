"""Parser factory for routing statement files to the right format.

This module orchestrates the parsing workflow:
1. Decode file bytes using TextExtractor
2. Detect the format from the file name and a content sample
3. Parse with StatementParser using the selected FormatEntry
"""

import logging

from statement_import.core.exceptions import UnsupportedFormatError
from statement_import.parsers.detector import FormatDetector, content_sample
from statement_import.parsers.extractor import TextExtractor, clean_text
from statement_import.parsers.formats import FormatEntry
from statement_import.parsers.statement import StatementParser
from statement_import.schemas.internal import ParseResult

logger = logging.getLogger(__name__)


class ParserFactory:
    """Factory for parsing statement files.

    The factory handles the complete parsing workflow:
    - Decodes bytes into clean text
    - Detects which format the file uses (generic as fallback)
    - Parses rows into NormalizedTransaction / RowError values

    Example:
        >>> factory = ParserFactory()
        >>> result = factory.parse_bytes(data, file_name="extrato_itau.txt")
        >>> print(f"Format: {result.format_id}")
        >>> print(f"Transactions: {len(result.transactions)}")
    """

    def __init__(
        self,
        extractor: TextExtractor | None = None,
        detector: FormatDetector | None = None,
        parser: StatementParser | None = None,
        sample_lines: int = 10,
    ):
        """Initialize the parser factory.

        Args:
            extractor: Text extractor (default: new TextExtractor)
            detector: Format detector (default: detector over the shipped registry)
            parser: Statement parser (default: new StatementParser)
            sample_lines: Lines of content handed to detection
        """
        self.extractor = extractor or TextExtractor()
        self.detector = detector or FormatDetector()
        self.parser = parser or StatementParser()
        self.sample_lines = sample_lines

    @property
    def registry(self):
        return self.detector.registry

    def parse_bytes(
        self, data: bytes, file_name: str = "", format_id: str | None = None
    ) -> ParseResult:
        """Parse a statement file from raw bytes.

        Args:
            data: File content
            file_name: Original file name (used for detection)
            format_id: Force a registered format instead of detecting

        Returns:
            ParseResult

        Raises:
            DecodingError: If the bytes can't be decoded
            FatalParseError: If the file is empty or has no detectable separator
            UnsupportedFormatError: If format_id is not registered
        """
        extracted = self.extractor.extract(data)
        logger.info(
            "Extracted statement text",
            extra={"encoding": extracted.encoding, "lines": extracted.line_count},
        )
        return self._parse_clean_text(extracted.text, file_name, format_id)

    def parse_text(
        self, content: str, file_name: str = "", format_id: str | None = None
    ) -> ParseResult:
        """Parse already-decoded statement content."""
        return self._parse_clean_text(clean_text(content), file_name, format_id)

    def resolve_format(
        self, content: str, file_name: str = "", format_id: str | None = None
    ) -> FormatEntry:
        """Get the forced format or detect one from the content.

        Raises:
            UnsupportedFormatError: If format_id is not registered
        """
        if format_id:
            entry = self.registry.get(format_id)
            if entry is None:
                raise UnsupportedFormatError(format_id)
            return entry
        return self.detector.detect(file_name, content_sample(content, self.sample_lines))

    def _parse_clean_text(
        self, content: str, file_name: str, format_id: str | None
    ) -> ParseResult:
        entry = self.resolve_format(content, file_name, format_id)
        logger.info(
            "Using statement format",
            extra={"format_id": entry.id, "forced": bool(format_id)},
        )
        return self.parser.parse(content, entry)


_factory_instance: ParserFactory | None = None


def get_parser_factory() -> ParserFactory:
    """Get or create a shared ParserFactory for library callers.

    The factory is stateless, so sharing it is safe.
    """
    global _factory_instance
    if _factory_instance is None:
        _factory_instance = ParserFactory()
    return _factory_instance


def parse_statement(data: bytes, file_name: str = "") -> ParseResult:
    """Convenience function to parse a statement using the shared factory."""
    return get_parser_factory().parse_bytes(data, file_name=file_name)

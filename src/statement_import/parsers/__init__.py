"""Statement parsing module.

This module turns bank statement exports (CSV/TXT) into normalized
transactions:
- FormatRegistry holds the per-institution FormatEntry catalog
- FormatDetector picks an entry from the file name and content
- StatementParser applies the entry row by row
- ParserFactory wires extraction, detection and parsing together
"""

from statement_import.parsers.detector import FormatDetector, content_sample
from statement_import.parsers.extractor import ExtractedText, TextExtractor
from statement_import.parsers.factory import ParserFactory, get_parser_factory, parse_statement
from statement_import.parsers.formats import GENERIC_FORMAT, ColumnMap, FormatEntry
from statement_import.parsers.registry import FormatRegistry, default_registry
from statement_import.parsers.statement import StatementParser

__all__ = [
    "ColumnMap",
    "ExtractedText",
    "FormatDetector",
    "FormatEntry",
    "FormatRegistry",
    "GENERIC_FORMAT",
    "ParserFactory",
    "StatementParser",
    "TextExtractor",
    "content_sample",
    "default_registry",
    "get_parser_factory",
    "parse_statement",
]

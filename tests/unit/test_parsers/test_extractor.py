"""Tests for text extraction."""

import pytest

from statement_import.core.exceptions import DecodingError
from statement_import.parsers.extractor import (
    ExtractedText,
    TextExtractor,
    clean_text,
    detect_encoding,
)


class TestCleanText:
    """Test suite for clean_text."""

    def test_normalizes_newlines(self):
        assert clean_text("a\r\nb\rc\n") == "a\nb\nc\n"

    def test_drops_nul(self):
        assert clean_text("a\x00b") == "ab"

    def test_empty(self):
        assert clean_text("") == ""


class TestDetectEncoding:
    """Test suite for BOM sniffing."""

    @pytest.mark.parametrize(
        "data,expected",
        [
            (b"\xef\xbb\xbfabc", "utf-8-sig"),
            (b"\xff\xfea\x00", "utf-16-le"),
            (b"\xfe\xff\x00a", "utf-16-be"),
            (b"abc", None),
        ],
    )
    def test_bom(self, data, expected):
        assert detect_encoding(data) == expected


class TestTextExtractor:
    """Test suite for TextExtractor."""

    def test_utf8(self):
        extracted = TextExtractor().extract("Data;Descrição\r\n".encode("utf-8"))
        assert extracted.text == "Data;Descrição\n"
        assert extracted.encoding == "utf-8"

    def test_utf8_bom_is_stripped(self):
        extracted = TextExtractor().extract(b"\xef\xbb\xbfdate,amount\n")
        assert extracted.text == "date,amount\n"
        assert extracted.encoding == "utf-8"

    def test_utf16_with_bom(self):
        data = "Data;Valor\n05/01/2024;-4,50\n".encode("utf-16")
        extracted = TextExtractor().extract(data)
        assert extracted.text == "Data;Valor\n05/01/2024;-4,50\n"
        assert extracted.encoding.startswith("utf-16")

    def test_latin1_fallback(self):
        """Test legacy exports that aren't valid UTF-8 still decode."""
        extracted = TextExtractor().extract("Descrição;Crédito".encode("latin-1"))
        assert extracted.text == "Descrição;Crédito"
        assert extracted.encoding == "latin-1"

    def test_broken_utf16_raises(self):
        with pytest.raises(DecodingError) as exc_info:
            TextExtractor().extract(b"\xff\xfea\x00b")
        assert exc_info.value.error_code == "IMPORT_003"

    @pytest.mark.parametrize(
        "file_name,content_type,expected",
        [
            ("extrato.csv", None, True),
            ("EXTRATO.TXT", None, True),
            ("statement.pdf", None, False),
            (None, "text/csv; charset=utf-8", True),
            (None, "application/octet-stream", True),
            (None, "application/pdf", False),
            (None, None, False),
        ],
    )
    def test_can_handle(self, file_name, content_type, expected):
        assert TextExtractor.can_handle(file_name, content_type) is expected


class TestExtractedText:
    """Test suite for ExtractedText."""

    def test_line_count_ignores_blank_lines(self):
        assert ExtractedText("a\n\nb\n", "utf-8").line_count == 2

    def test_preview_truncates(self):
        extracted = ExtractedText("x" * 600, "utf-8")
        assert extracted.preview(100) == "x" * 100 + "..."
        assert ExtractedText("short", "utf-8").preview() == "short"

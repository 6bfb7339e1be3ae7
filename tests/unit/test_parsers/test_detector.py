"""Tests for format detector."""

import pytest

from statement_import.parsers.detector import FormatDetector, content_sample
from statement_import.parsers.formats import ColumnMap, FormatEntry
from statement_import.parsers.registry import default_registry


class TestContentSample:
    """Test suite for content_sample."""

    def test_keeps_leading_lines(self):
        text = "\n".join(f"line {i}" for i in range(20))
        sample = content_sample(text, max_lines=10)
        assert sample.splitlines() == [f"line {i}" for i in range(10)]

    def test_never_fewer_than_five_lines(self):
        text = "\n".join(f"line {i}" for i in range(20))
        assert len(content_sample(text, max_lines=2).splitlines()) == 5

    def test_short_text_returned_whole(self):
        assert content_sample("a\nb") == "a\nb"

    def test_empty(self):
        assert content_sample("") == ""


class TestFormatDetector:
    """Test suite for FormatDetector."""

    def test_initialization(self):
        """Test detector uses the shipped registry by default."""
        detector = FormatDetector()
        assert detector.get_supported_formats()[-1] == "generic"
        assert "nubank" in detector.get_supported_formats()

    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("extrato-nubank-2024-01.csv", "nubank"),
            ("NUBANK_2024.CSV", "nubank"),
            ("Extrato Itaú janeiro.txt", "itau"),
            ("bradesco_conta.csv", "bradesco"),
            ("santander.csv", "santander"),
            ("c6bank-extrato.csv", "c6"),
            ("banco inter.csv", "inter"),
        ],
    )
    def test_detect_by_file_name_keyword(self, file_name, expected):
        """Test keywords in the file name pick the institution."""
        detector = FormatDetector()
        sample = "date,description,amount\n2024-01-05,Coffee,-4.50"
        assert detector.detect(file_name, sample).id == expected

    def test_detect_by_content_keyword(self):
        """Test keywords are also searched in the content sample."""
        detector = FormatDetector()
        sample = "Nu Pagamentos S.A.\nData,Descrição,Valor\n05/01/2024,Padaria,\"-4,50\""
        assert detector.detect("export.csv", sample).id == "nubank"

    def test_detect_itau_by_line_pattern(self):
        """Test an Itaú-shaped line is enough without keywords."""
        detector = FormatDetector()
        sample = "05/01/2024;PIX TRANSF JOAO;-20,00\n06/01/2024;SALARIO;3500,00"
        assert detector.detect("statement.txt", sample).id == "itau"

    def test_detect_bradesco_extrato_by_header(self):
        """Test the credit/debit layout wins over the plain Bradesco entry."""
        detector = FormatDetector()
        sample = (
            "Data;Histórico;Docto.;Crédito (R$);Débito (R$);Saldo (R$)\n"
            "05/01/2024;Supermercado;1234;;150,00;1.000,00"
        )
        assert detector.detect("bradesco.csv", sample).id == "bradesco_extrato"

    def test_unknown_falls_back_to_generic(self):
        """Test no match returns the generic entry."""
        detector = FormatDetector()
        sample = "date,description,amount\n2024-01-05,Coffee,-4.50"
        entry = detector.detect("statement.csv", sample)
        assert entry.id == "generic"
        assert entry.is_generic

    def test_empty_inputs_fall_back_to_generic(self):
        detector = FormatDetector()
        assert detector.detect("", "").id == "generic"
        assert detector.detect(None, None).id == "generic"

    def test_registry_order_decides_ties(self):
        """Test the first matching entry in registry order wins."""
        detector = FormatDetector()
        sample = "date,description,amount\n2024-01-05,Coffee,-4.50"
        assert detector.detect("nubank_vs_santander.csv", sample).id == "nubank"

    def test_custom_registry(self):
        """Test an extended registry puts new formats first."""
        mybank = FormatEntry(
            id="mybank",
            display_name="My Bank",
            detection_keywords=("mybank",),
            field_separator=";",
            column_map=ColumnMap(date=0, description=1, amount=2),
        )
        detector = FormatDetector(default_registry().extend(mybank))
        assert detector.detect("mybank-nubank.csv", "").id == "mybank"

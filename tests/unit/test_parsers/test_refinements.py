"""Tests for institution-specific formats."""

from decimal import Decimal

import pytest

from statement_import.parsers.factory import ParserFactory
from statement_import.parsers.refinements import INSTITUTION_FORMATS
from statement_import.parsers.refinements.itau import parse_itau_amount
from statement_import.parsers.refinements.nubank import parse_nubank_amount


class TestInstitutionSamples:
    """One realistic export per institution, end to end."""

    @pytest.mark.parametrize(
        "file_name,content,format_id,expected",
        [
            (
                "nubank-2024-01.csv",
                'Data,Descrição,Valor\n05/01/2024,Padaria,"-1.234,56"\n',
                "nubank",
                ("2024-01-05", Decimal("-1234.56"), "expense"),
            ),
            (
                "extrato.txt",
                "05/01/2024;PIX TRANSF JOAO;-20,00\n",
                "itau",
                ("2024-01-05", Decimal("-20.00"), "expense"),
            ),
            (
                "bradesco.csv",
                "Data;Lançamento;Descrição;Tipo;Valor\n05/01/2024;123;Supermercado;D;1.234,56\n",
                "bradesco",
                ("2024-01-05", Decimal("-1234.56"), "expense"),
            ),
            (
                "extrato_conta.csv",
                "Data;Histórico;Docto.;Crédito (R$);Débito (R$);Saldo (R$)\n"
                "05/01/2024;TED recebida;991;2.000,00;;2.500,00\n",
                "bradesco_extrato",
                ("2024-01-05", Decimal("2000.00"), "receipt"),
            ),
            (
                "santander-jan.csv",
                "Data;Descrição;Tipo;Valor\n05/01/2024;Supermercado;Débito;89,90\n",
                "santander",
                ("2024-01-05", Decimal("-89.90"), "expense"),
            ),
            (
                "c6bank.csv",
                'Data,Descrição,Valor\n05/01/2024,Cashback,"12,30"\n',
                "c6",
                ("2024-01-05", Decimal("12.30"), "receipt"),
            ),
            (
                "banco-inter.csv",
                'Data,Descrição,Valor\n05/01/2024,Pix enviado,"-50,00"\n',
                "inter",
                ("2024-01-05", Decimal("-50.00"), "expense"),
            ),
        ],
    )
    def test_sample_line(self, file_name, content, format_id, expected):
        result = ParserFactory().parse_text(content, file_name=file_name)

        assert result.format_id == format_id
        assert result.errors == []
        transaction = result.transactions[0]
        assert (transaction.date, transaction.amount, transaction.type) == expected

    def test_every_institution_has_a_br_date_normalizer(self):
        """Test institution entries never accept ISO dates."""
        for entry in INSTITUTION_FORMATS:
            assert entry.date_normalizer("2024-01-05") is None
            assert entry.date_normalizer("05/01/2024") == "2024-01-05"


class TestItauAmount:
    """Test suite for parse_itau_amount."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("-20,00", Decimal("-20.00")),
            ("1.234,56", Decimal("1234.56")),
            ("3500,00", Decimal("3500.00")),
            ("R$ 10,00", Decimal("10.00")),
        ],
    )
    def test_values(self, raw, expected):
        assert parse_itau_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "--", "12abc", "1O0,00", "NaN"])
    def test_invalid(self, raw):
        assert parse_itau_amount(raw) is None

    def test_dot_decimal_without_comma(self):
        assert parse_itau_amount("-20.00") == Decimal("-20.00")


class TestNubankAmount:
    """Test suite for parse_nubank_amount."""

    def test_brazilian_notation(self):
        assert parse_nubank_amount("R$ -1.234,56") == Decimal("-1234.56")

    def test_invalid(self):
        assert parse_nubank_amount("R$") is None
        assert parse_nubank_amount("1,2,3") is None

    @pytest.mark.parametrize("raw", ["NaN1", "sNaN1", "Infinity", "1O0,00", "R$ 12abc"])
    def test_non_numbers_fail(self, raw):
        """Test text that Decimal would accept or that hides letters is rejected."""
        assert parse_nubank_amount(raw) is None


class TestHeadedItauLookalike:
    """A headed three-column semicolon file is detected as Itaú."""

    def test_header_does_not_become_row_error(self):
        content = "Data;Descricao;Valor\n05/01/2024;Pagamento internet;-99,90\n"

        result = ParserFactory().parse_text(content, file_name="statement.csv")

        assert result.format_id == "itau"
        assert result.errors == []
        assert [t.amount for t in result.transactions] == [Decimal("-99.90")]

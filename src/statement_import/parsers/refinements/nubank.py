"""Nubank statement format.

Nubank exports are comma separated with a header row:
    Data,Descrição,Valor
    31/12/2023,Supermercado,"-1.234,56"

Amounts come in Brazilian notation (R$ 1.234,56) and must be quoted when
they carry a decimal comma.
"""

from decimal import Decimal

from statement_import.parsers.formats import ColumnMap, FormatEntry
from statement_import.parsers.normalizers import normalize_br_amount, normalize_br_date


def parse_nubank_amount(raw: str) -> Decimal | None:
    """Parse a Nubank amount: 'R$' and spaces dropped, dot thousands, decimal comma."""
    return normalize_br_amount(raw)


NUBANK = FormatEntry(
    id="nubank",
    display_name="Nubank",
    detection_keywords=("nubank", "nu pagamentos"),
    detection_patterns=(r"nubank.*csv", r"extrato.*nubank"),
    field_separator=",",
    has_header_row=True,
    column_map=ColumnMap(date=0, description=1, amount=2),
    date_normalizer=normalize_br_date,
    amount_normalizer=parse_nubank_amount,
)

"""Banco Santander statement format.

    Data;Descrição;Tipo;Valor
    31/12/2023;Supermercado;Débito;1.234,56
"""

from statement_import.parsers.formats import ColumnMap, FormatEntry
from statement_import.parsers.normalizers import normalize_br_amount, normalize_br_date

SANTANDER = FormatEntry(
    id="santander",
    display_name="Banco Santander",
    detection_keywords=("santander", "bco santander"),
    detection_patterns=(r"extrato.*santander", r"santander.*txt"),
    field_separator=";",
    has_header_row=True,
    column_map=ColumnMap(date=0, description=1, amount=3, type=2),
    date_normalizer=normalize_br_date,
    amount_normalizer=normalize_br_amount,
)

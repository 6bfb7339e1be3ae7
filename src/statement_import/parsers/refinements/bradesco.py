"""Banco Bradesco statement formats.

Two layouts are in circulation:

- The account export with an explicit nature column:
      Data;Lançamento;Descrição;Tipo;Valor
      31/12/2023;123;Supermercado;D;1.234,56
- The "extrato" layout with separate credit and debit columns:
      Data;Histórico;Docto.;Crédito (R$);Débito (R$);Saldo (R$)
      31/12/2023;Supermercado;1234;;1.234,56;10.000,00

The extrato layout is recognized from its header, so it is registered
ahead of every keyword-based entry.
"""

from statement_import.parsers.formats import ColumnMap, FormatEntry
from statement_import.parsers.normalizers import normalize_br_amount, normalize_br_date

BRADESCO = FormatEntry(
    id="bradesco",
    display_name="Banco Bradesco",
    detection_keywords=("bradesco", "bco bradesco"),
    detection_patterns=(r"extrato.*bradesco", r"bradesco.*txt"),
    field_separator=";",
    has_header_row=True,
    column_map=ColumnMap(date=0, description=2, amount=4, type=3),
    date_normalizer=normalize_br_date,
    amount_normalizer=normalize_br_amount,
)

BRADESCO_EXTRATO = FormatEntry(
    id="bradesco_extrato",
    display_name="Banco Bradesco (crédito/débito)",
    detection_patterns=(
        r"^\s*data\s*;\s*hist[oó]rico\s*;\s*docto\.?\s*;\s*cr[eé]dito[^;]*;\s*d[eé]bito",
    ),
    field_separator=";",
    has_header_row=True,
    column_map=ColumnMap(date=0, description=1, credit=3, debit=4),
    date_normalizer=normalize_br_date,
    amount_normalizer=normalize_br_amount,
)

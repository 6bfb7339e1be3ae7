"""Digital bank formats (C6 Bank, Banco Inter).

Both export comma separated files with a header row and the
date/description/amount column order:
    Data,Descrição,Valor
    31/12/2023,Supermercado,"-1.234,56"
"""

from statement_import.parsers.formats import ColumnMap, FormatEntry
from statement_import.parsers.normalizers import normalize_br_amount, normalize_br_date

C6 = FormatEntry(
    id="c6",
    display_name="C6 Bank",
    detection_keywords=("c6 bank", "c6bank", "banco c6"),
    detection_patterns=(r"extrato.*c6", r"c6.*csv"),
    field_separator=",",
    has_header_row=True,
    column_map=ColumnMap(date=0, description=1, amount=2),
    date_normalizer=normalize_br_date,
    amount_normalizer=normalize_br_amount,
)

# "inter" is a short keyword; keep this entry last so longer, more
# specific keywords win first.
INTER = FormatEntry(
    id="inter",
    display_name="Banco Inter",
    detection_keywords=("inter", "banco inter"),
    detection_patterns=(r"extrato.*inter", r"inter.*csv"),
    field_separator=",",
    has_header_row=True,
    column_map=ColumnMap(date=0, description=1, amount=2),
    date_normalizer=normalize_br_date,
    amount_normalizer=normalize_br_amount,
)

"""Banco Itaú statement format.

Itaú text exports have no header and use semicolons:
    31/12/2023;PIX TRANSF JOAO;-20,00

Besides the keywords, a three-column line shaped like the sample is
enough to recognize the export. Wider semicolon layouts (Santander,
Bradesco) must not match it. The line pattern also catches generic
three-column files that carry a 'Data;Descrição;Valor' header, so a
first line that doesn't parse is skipped as a header.
"""

from decimal import Decimal

from statement_import.parsers.formats import ColumnMap, FormatEntry
from statement_import.parsers.normalizers import (
    normalize_br_amount,
    normalize_br_date,
    normalize_generic_amount,
)


def parse_itau_amount(raw: str) -> Decimal | None:
    """Parse an Itaú amount such as '-20,00' or '1.234,56'.

    Cells without a comma keep the dot as decimal mark ('20.00').
    """
    if raw and "," in raw:
        return normalize_br_amount(raw)
    return normalize_generic_amount(raw)


ITAU = FormatEntry(
    id="itau",
    display_name="Banco Itaú",
    detection_keywords=("itau", "itaú", "banco itau"),
    detection_patterns=(
        r"^\d{2}/\d{2}/\d{4};[^;]*;-?[\d.]*\d,\d{2}$",
        r"extrato.*itau",
        r"itau.*txt",
    ),
    field_separator=";",
    has_header_row=False,
    optional_header=True,
    column_map=ColumnMap(date=0, description=1, amount=2),
    date_normalizer=normalize_br_date,
    amount_normalizer=parse_itau_amount,
)

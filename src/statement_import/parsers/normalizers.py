"""Value normalizers for statement cells.

Every normalizer is a pure function taking one raw cell and returning
the canonical value or None when the cell can't be normalized. None is
the failure sentinel the parser turns into a RowError.

The generic normalizers sniff the locale of each cell; the fixed ones
encode the Brazilian convention (DD/MM/YYYY, decimal comma) used by the
institution formats.
"""

import re
import unicodedata
from datetime import date
from decimal import Decimal, InvalidOperation

# Currency markers allowed before or after the number: R$ 10,00 / 10.00 USD.
_CURRENCY = r"(?:R\$|US\$|\$|€|£|BRL|USD|EUR|GBP)"
_LEADING_CURRENCY = re.compile(rf"^([-+(]?){_CURRENCY}", re.IGNORECASE)
_TRAILING_CURRENCY = re.compile(rf"{_CURRENCY}([-)]?)$", re.IGNORECASE)
_AMOUNT_CHARS = re.compile(r"[\d,.\-+()]+")
_DECIMAL_TEXT = re.compile(r"\d+(?:\.\d*)?|\.\d+")

# Tried in order; the first pattern that matches the cell wins.
_GENERIC_DATE_PATTERNS: list[tuple[re.Pattern, tuple[str, str, str]]] = [
    (re.compile(r"(\d{2})/(\d{2})/(\d{4})"), ("day", "month", "year")),  # 31/12/2023
    (re.compile(r"(\d{4})-(\d{2})-(\d{2})"), ("year", "month", "day")),  # 2023-12-31
    (re.compile(r"(\d{2})\.(\d{2})\.(\d{4})"), ("day", "month", "year")),  # 31.12.2023
]

_BR_DATE_PATTERN = re.compile(r"(\d{2})/(\d{2})/(\d{4})")

_RECEIPT_TOKENS = {"c", "cr", "cred", "credito", "credit", "receita", "entrada", "deposito"}
_EXPENSE_TOKENS = {"d", "db", "dr", "deb", "debito", "debit", "despesa", "saida", "pagamento"}


def _iso_date(year: str, month: str, day: str) -> str | None:
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return None


def to_decimal(text: str) -> Decimal | None:
    """Convert plain unsigned decimal text ('1234.56') to a Decimal.

    Anything else (signs, exponents, NaN, Infinity, stray letters) is
    rejected with None, so the result is always finite.
    """
    if not text or not _DECIMAL_TEXT.fullmatch(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def _split_sign(raw: str) -> tuple[bool, str] | None:
    """Strip currency markers, whitespace and sign markers from an amount cell.

    Returns (negative, unsigned_text), or None for empty cells and cells
    with anything besides digits, separators and signs (e.g., '1O0,00').
    """
    cleaned = re.sub(r"\s+", "", raw or "")
    cleaned = _LEADING_CURRENCY.sub(r"\1", cleaned)
    cleaned = _TRAILING_CURRENCY.sub(r"\1", cleaned)
    if not cleaned or not _AMOUNT_CHARS.fullmatch(cleaned):
        return None

    negative = False
    # Parentheses denote a negative amount: (50,00) -> -50.00
    if "(" in cleaned or ")" in cleaned:
        negative = True
        cleaned = cleaned.replace("(", "").replace(")", "")
    if cleaned.startswith("-"):
        negative = True
        cleaned = cleaned[1:]
    elif cleaned.startswith("+"):
        cleaned = cleaned[1:]
    # Some banks print the sign after the number: 20,00-
    if cleaned.endswith("-"):
        negative = True
        cleaned = cleaned[:-1]

    if not cleaned or "-" in cleaned or "+" in cleaned:
        return None
    return negative, cleaned


def normalize_generic_amount(raw: str) -> Decimal | None:
    """Parse an amount whose decimal convention is unknown.

    Rules:
        - Currency markers (R$, $, €, BRL, ...) at either end and whitespace
          are stripped; any other letter fails the cell ("1O0,00" -> None).
        - Parentheses or a leading/trailing minus make the amount negative.
        - With both ',' and '.', the rightmost one is the decimal separator
          and the other one is a thousands separator.
        - With only ',': a single comma followed by 1-2 digits is decimal,
          otherwise commas are thousands separators ("1,234" -> 1234).
        - With only '.': several dots are thousands separators.

    Examples:
        >>> normalize_generic_amount("R$ 1.234,56")
        Decimal('1234.56')
        >>> normalize_generic_amount("(50,00)")
        Decimal('-50.00')
    """
    split = _split_sign(raw)
    if split is None:
        return None
    negative, text = split

    has_comma = "," in text
    has_dot = "." in text
    if has_comma and has_dot:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif has_comma:
        parts = text.split(",")
        if len(parts) == 2 and 1 <= len(parts[1]) <= 2:
            text = text.replace(",", ".")
        else:
            text = text.replace(",", "")
    elif text.count(".") > 1:
        text = text.replace(".", "")

    value = to_decimal(text)
    if value is None:
        return None
    return -value if negative else value


def normalize_br_amount(raw: str) -> Decimal | None:
    """Parse an amount written with decimal comma and dot thousands.

    "1.234,56" -> 1234.56, "-20,00" -> -20.00, "(15,90)" -> -15.90.
    """
    split = _split_sign(raw)
    if split is None:
        return None
    negative, text = split

    value = to_decimal(text.replace(".", "").replace(",", "."))
    if value is None:
        return None
    return -value if negative else value


def normalize_generic_date(raw: str) -> str | None:
    """Parse a date in DD/MM/YYYY, YYYY-MM-DD or DD.MM.YYYY.

    The first layout that matches the cell decides; an impossible
    calendar date (e.g., 13/13/2023) fails instead of trying the next
    layout.

    Examples:
        >>> normalize_generic_date("31.12.2023")
        '2023-12-31'
        >>> normalize_generic_date("13/13/2023") is None
        True
    """
    if not raw:
        return None
    text = raw.strip()
    for pattern, order in _GENERIC_DATE_PATTERNS:
        match = pattern.search(text)
        if match:
            parts = dict(zip(order, match.groups()))
            return _iso_date(parts["year"], parts["month"], parts["day"])
    return None


def normalize_br_date(raw: str) -> str | None:
    """Parse a DD/MM/YYYY date (the only layout Brazilian exports use)."""
    if not raw:
        return None
    match = _BR_DATE_PATTERN.search(raw.strip())
    if not match:
        return None
    day, month, year = match.groups()
    return _iso_date(year, month, day)


def _fold(text: str) -> str:
    """Lowercase and strip accents/punctuation: 'Crédito' -> 'credito'."""
    decomposed = unicodedata.normalize("NFD", text.strip().lower())
    without_accents = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[^\w\s]", "", without_accents).strip()


def normalize_type(raw: str) -> str | None:
    """Map a type/nature cell to 'receipt' or 'expense'.

    Returns None for cells that don't name a known direction, in which
    case the parser infers the type from the amount sign.
    """
    if not raw:
        return None
    token = _fold(raw)
    if token in _RECEIPT_TOKENS:
        return "receipt"
    if token in _EXPENSE_TOKENS:
        return "expense"
    return None

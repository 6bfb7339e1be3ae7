"""Statement parser.

This module turns decoded statement text plus a resolved FormatEntry
into normalized transactions. A row that can't be normalized becomes
a RowError and parsing continues with the next line; only whole-file
problems (empty content, no detectable separator) raise.
"""

import csv
import logging
from decimal import Decimal

from statement_import.core.exceptions import EmptyContentError, SeparatorDetectionError
from statement_import.parsers.formats import FormatEntry
from statement_import.schemas.internal import NormalizedTransaction, ParseResult, RowError

logger = logging.getLogger(__name__)

# Candidate separators for sniffing; on equal counts the earlier one wins.
SEPARATOR_CANDIDATES = (";", ",", "\t", "|")


class RowParseError(ValueError):
    """A single row could not be normalized (message is the RowError reason)."""

    pass


def sniff_separator(lines: list[str]) -> str:
    """Pick the most frequent separator character of the first non-empty line.

    Args:
        lines: Content lines

    Returns:
        The separator character

    Raises:
        SeparatorDetectionError: If there is no non-empty line or it
            contains none of the candidate separators
    """
    first = next((line for line in lines if line.strip()), None)
    if first is None:
        raise SeparatorDetectionError({"reason": "no lines to sniff"})

    separator = max(SEPARATOR_CANDIDATES, key=first.count)
    if first.count(separator) == 0:
        raise SeparatorDetectionError({"reason": "no separator in first line"})
    return separator


def split_row(line: str, separator: str) -> list[str]:
    """Split one line into trimmed cells, honoring double-quoted cells."""
    try:
        cells = next(csv.reader([line], delimiter=separator), [])
    except csv.Error:
        cells = line.split(separator)
    return [cell.strip() for cell in cells]


class StatementParser:
    """Applies a FormatEntry's column map and normalizers row by row.

    The parser holds no state between calls: parsing the same content
    with the same entry always yields an equal ParseResult.

    Example:
        >>> parser = StatementParser()
        >>> result = parser.parse(content, registry.get("itau"))
        >>> len(result.transactions), len(result.errors)
        (41, 1)
    """

    def parse(self, content: str, format_entry: FormatEntry) -> ParseResult:
        """Parse statement content.

        Args:
            content: Decoded file content ('\\n' line endings)
            format_entry: Resolved format (detected or chosen by the user)

        Returns:
            ParseResult with transactions, row errors and warnings

        Raises:
            EmptyContentError: If the content is empty or whitespace only
            SeparatorDetectionError: If the separator can't be determined
        """
        if not content or not content.strip():
            raise EmptyContentError({"format_id": format_entry.id})

        lines = [line.rstrip("\r") for line in content.split("\n")]
        separator = format_entry.field_separator or sniff_separator(lines)

        transactions: list[NormalizedTransaction] = []
        errors: list[RowError] = []
        inconsistent_rows: list[int] = []
        expected_columns: int | None = None
        warnings: list[str] = []
        header_pending = format_entry.has_header_row
        header_optional = not header_pending and format_entry.optional_header
        total_rows = 0

        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            if header_pending:
                header_pending = False
                continue

            cells = split_row(line, separator)
            if header_optional:
                header_optional = False
                if self._looks_like_header(cells, format_entry):
                    warnings.append(f"Line {line_number} read as a header row and skipped")
                    continue

            total_rows += 1
            if expected_columns is None:
                expected_columns = len(cells)
            elif len(cells) != expected_columns:
                inconsistent_rows.append(line_number)

            try:
                transactions.append(self._parse_row(cells, line_number, format_entry))
            except RowParseError as e:
                logger.debug(
                    "Row skipped",
                    extra={"row_index": line_number, "reason": str(e)},
                )
                errors.append(RowError(row_index=line_number, raw_line=line, reason=str(e)))

        if total_rows == 0:
            warnings.append("No data rows found")
        if inconsistent_rows:
            warnings.append(
                f"{len(inconsistent_rows)} row(s) with inconsistent column count "
                f"(expected {expected_columns}): lines "
                + ", ".join(str(n) for n in inconsistent_rows[:10])
            )

        logger.info(
            "Statement parsed",
            extra={
                "format_id": format_entry.id,
                "rows": total_rows,
                "transactions_count": len(transactions),
                "errors_count": len(errors),
            },
        )

        return ParseResult(
            format_id=format_entry.id,
            format_name=format_entry.display_name,
            separator=separator,
            transactions=transactions,
            errors=errors,
            warnings=warnings,
            total_rows=total_rows,
        )

    def _parse_row(
        self, cells: list[str], line_number: int, entry: FormatEntry
    ) -> NormalizedTransaction:
        """Build one transaction or raise RowParseError with the reason."""
        columns = entry.column_map

        raw_date = self._cell(cells, columns.date)
        if raw_date is None:
            raise RowParseError("missing date column")
        iso_date = self._apply(entry.date_normalizer, raw_date)
        if iso_date is None:
            raise RowParseError(f"invalid date: {raw_date!r}")

        if columns.uses_split_amount:
            amount = self._split_amount(cells, entry)
        else:
            raw_amount = self._cell(cells, columns.amount)
            if raw_amount is None:
                raise RowParseError("missing amount column")
            amount = self._amount(entry, raw_amount)
            if amount is None:
                raise RowParseError(f"invalid amount: {raw_amount!r}")

        explicit_type = None
        if columns.type is not None:
            raw_type = self._cell(cells, columns.type)
            if raw_type:
                explicit_type = self._apply(entry.type_normalizer, raw_type)

        try:
            return NormalizedTransaction.from_amount(
                date=iso_date,
                description=self._cell(cells, columns.description) or "",
                amount=amount,
                source_row_index=line_number,
                type=explicit_type,
            )
        except ValueError as e:
            raise RowParseError(f"invalid row: {e}") from e

    def _split_amount(self, cells: list[str], entry: FormatEntry) -> Decimal:
        """Rebuild a signed amount from separate credit and debit columns."""
        columns = entry.column_map
        raw_credit = self._cell(cells, columns.credit) or ""
        raw_debit = self._cell(cells, columns.debit) or ""
        if not raw_credit and not raw_debit:
            raise RowParseError("missing amount: credit and debit are empty")

        total = Decimal("0")
        for raw, sign in ((raw_credit, 1), (raw_debit, -1)):
            if not raw:
                continue
            value = self._amount(entry, raw)
            if value is None:
                raise RowParseError(f"invalid amount: {raw!r}")
            total += sign * abs(value)
        return total

    @classmethod
    def _amount(cls, entry: FormatEntry, raw: str) -> Decimal | None:
        """Normalize an amount cell; anything but a finite Decimal is a failure."""
        value = cls._apply(entry.amount_normalizer, raw)
        if not isinstance(value, Decimal) or not value.is_finite():
            return None
        return value

    @classmethod
    def _looks_like_header(cls, cells: list[str], entry: FormatEntry) -> bool:
        """Check if neither the date nor the amount cell of a line parses."""
        columns = entry.column_map
        raw_date = cls._cell(cells, columns.date)
        if raw_date is None or cls._apply(entry.date_normalizer, raw_date) is not None:
            return False
        raw_amount = cls._cell(cells, columns.amount)
        return raw_amount is None or cls._amount(entry, raw_amount) is None

    @staticmethod
    def _cell(cells: list[str], index: int | None) -> str | None:
        if index is None or index >= len(cells):
            return None
        return cells[index]

    @staticmethod
    def _apply(normalizer, raw: str):
        """Run a normalizer, treating any exception as a failed cell."""
        try:
            return normalizer(raw)
        except Exception as e:
            logger.debug(
                "Normalizer raised",
                extra={"normalizer": getattr(normalizer, "__name__", repr(normalizer)),
                       "error_type": type(e).__name__},
            )
            return None

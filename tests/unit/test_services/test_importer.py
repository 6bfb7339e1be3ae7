"""Tests for import service."""

from datetime import date
from decimal import Decimal

import pytest

from statement_import.core.events import IMPORT_FAILED, IMPORT_PARSED, EventBus
from statement_import.core.exceptions import EmptyContentError, UnsupportedFormatError
from statement_import.parsers.factory import ParserFactory
from statement_import.schemas.imports import ImportContext
from statement_import.services.importer import ImportService

STATEMENT = (
    b"date,description,amount\n"
    b"2024-01-05,Coffee,-4.50\n"
    b"2024-01-20,Salary,3000.00\n"
    b"2024-02-10,Scheduled rent,-1200.00\n"
    b"broken,row,1\n"
)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def service(event_bus: EventBus) -> ImportService:
    return ImportService(ParserFactory(), event_bus, today=lambda: date(2024, 1, 31))


class TestImportServiceAccount:
    """Test suite for account imports."""

    def test_preview_shape(self, service: ImportService):
        preview = service.preview(STATEMENT, "statement.csv")

        assert preview.kind == "account"
        assert preview.format_id == "generic"
        assert preview.file_name == "statement.csv"
        assert preview.encoding == "utf-8"
        assert preview.total_rows == 4
        assert len(preview.transactions) == 3
        assert preview.errors[0].row_index == 5
        assert preview.success_rate == 75.0

    def test_settled_by_date(self, service: ImportService):
        """Test rows dated up to today are settled, future rows are not."""
        preview = service.preview(STATEMENT, "statement.csv", ImportContext(account_id="acc-1"))

        assert [t.settled for t in preview.transactions] == [True, True, False]
        assert all(t.account_id == "acc-1" for t in preview.transactions)
        assert all(t.card_id is None for t in preview.transactions)

    def test_keeps_parsed_sign(self, service: ImportService):
        preview = service.preview(STATEMENT, "statement.csv")
        assert [t.type for t in preview.transactions] == ["expense", "receipt", "expense"]
        assert preview.transactions[1].amount == Decimal("3000.00")

    def test_total_amount(self, service: ImportService):
        preview = service.preview(STATEMENT, "statement.csv")
        assert preview.total_amount == Decimal("1795.50")


class TestImportServiceCard:
    """Test suite for card imports."""

    def test_card_rows_are_unsettled_expenses(self, service: ImportService):
        context = ImportContext(kind="card", card_id="card-9", invoice_due_date=date(2024, 2, 15))
        preview = service.preview(STATEMENT, "statement.csv", context)

        assert preview.kind == "card"
        for transaction in preview.transactions:
            assert transaction.type == "expense"
            assert transaction.amount < 0
            assert transaction.settled is False
            assert transaction.card_id == "card-9"
            assert transaction.invoice_due_date == date(2024, 2, 15)
            assert transaction.account_id is None
        assert preview.transactions[1].amount == Decimal("-3000.00")


class TestImportServiceEvents:
    """Test suite for event publishing."""

    def test_publishes_parsed(self, service: ImportService, event_bus: EventBus):
        received = []
        event_bus.subscribe(IMPORT_PARSED, received.append)

        preview = service.preview(STATEMENT, "statement.csv")

        assert received == [preview]

    def test_publishes_failed_and_reraises(self, service: ImportService, event_bus: EventBus):
        received = []
        event_bus.subscribe(IMPORT_FAILED, received.append)

        with pytest.raises(EmptyContentError) as exc_info:
            service.preview(b"   ", "empty.csv")

        assert received == [exc_info.value]

    def test_unknown_format_publishes_failed(self, service: ImportService, event_bus: EventBus):
        received = []
        event_bus.subscribe(IMPORT_FAILED, received.append)

        with pytest.raises(UnsupportedFormatError):
            service.preview(STATEMENT, "statement.csv", format_id="nope")

        assert len(received) == 1

    def test_failing_subscriber_does_not_break_import(
        self, service: ImportService, event_bus: EventBus
    ):
        def broken(_):
            raise RuntimeError("subscriber bug")

        event_bus.subscribe(IMPORT_PARSED, broken)
        preview = service.preview(STATEMENT, "statement.csv")
        assert len(preview.transactions) == 3

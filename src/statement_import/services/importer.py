"""Statement import service.

This module orchestrates an import preview:
1. Decode the uploaded bytes
2. Detect the format (or use the one the user picked)
3. Parse rows into normalized transactions
4. Apply the import context (account or card)
5. Notify subscribers through the event bus

Nothing is persisted here: the preview feeds the review screen, where
the user confirms or edits rows before saving.
"""

import logging
from collections.abc import Callable
from datetime import date

from statement_import.core.events import IMPORT_FAILED, IMPORT_PARSED, EventBus
from statement_import.core.exceptions import StatementImportError
from statement_import.parsers.factory import ParserFactory
from statement_import.schemas.imports import ImportContext, ImportedTransaction, ImportPreview
from statement_import.schemas.internal import NormalizedTransaction

logger = logging.getLogger(__name__)


class ImportService:
    """Builds import previews from uploaded statement files."""

    def __init__(
        self,
        factory: ParserFactory,
        event_bus: EventBus,
        today: Callable[[], date] = date.today,
    ):
        """Initialize the service.

        Args:
            factory: Parser factory (extraction, detection, parsing)
            event_bus: Application event bus
            today: Clock used to decide which account rows are settled
        """
        self.factory = factory
        self.event_bus = event_bus
        self.today = today

    def preview(
        self,
        data: bytes,
        file_name: str = "",
        context: ImportContext | None = None,
        format_id: str | None = None,
    ) -> ImportPreview:
        """Parse an upload and shape it for review.

        Args:
            data: Raw file content
            file_name: Original file name
            context: Import target (default: account import)
            format_id: Force a registered format instead of detecting

        Returns:
            ImportPreview with transactions, row errors and warnings

        Raises:
            StatementImportError: Fatal file problems (after publishing
                IMPORT_FAILED)
        """
        context = context or ImportContext()
        start = self.today()

        try:
            extracted = self.factory.extractor.extract(data)
            result = self.factory.parse_text(extracted.text, file_name, format_id)
        except StatementImportError as e:
            logger.info(
                "Import failed",
                extra={"error_code": e.error_code, "kind": context.kind},
            )
            self.event_bus.publish(IMPORT_FAILED, e)
            raise

        preview = ImportPreview(
            file_name=file_name,
            kind=context.kind,
            format_id=result.format_id,
            format_name=result.format_name,
            separator=result.separator,
            encoding=extracted.encoding,
            transactions=[self._apply_context(t, context, start) for t in result.transactions],
            errors=result.errors,
            warnings=result.warnings,
            total_rows=result.total_rows,
            success_rate=round(result.success_rate, 2),
        )

        logger.info(
            "Import preview ready",
            extra={
                "format_id": preview.format_id,
                "kind": context.kind,
                "transactions_count": len(preview.transactions),
                "errors_count": len(preview.errors),
            },
        )
        self.event_bus.publish(IMPORT_PARSED, preview)
        return preview

    @staticmethod
    def _apply_context(
        transaction: NormalizedTransaction, context: ImportContext, today: date
    ) -> ImportedTransaction:
        if context.is_card:
            # Invoice lines are always charges.
            return ImportedTransaction(
                date=transaction.date,
                description=transaction.description,
                amount=-abs(transaction.amount),
                type="expense",
                settled=False,
                source_row_index=transaction.source_row_index,
                card_id=context.card_id,
                invoice_due_date=context.invoice_due_date,
            )

        return ImportedTransaction(
            date=transaction.date,
            description=transaction.description,
            amount=transaction.amount,
            type=transaction.type,
            settled=date.fromisoformat(transaction.date) <= today,
            source_row_index=transaction.source_row_index,
            account_id=context.account_id,
        )

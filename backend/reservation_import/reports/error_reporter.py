"""
Error reporting — turns ErrorItems into reason/suggestion pairs and
writes them as the task's report artifact.
"""

from __future__ import annotations

from reservation_import.core.constants import ErrorCode
from reservation_import.core.logging import get_logger
from reservation_import.processing.schemas import StatusVocabulary
from reservation_import.reports.items import ErrorItem, ReportItem
from reservation_import.reports.store import ReportStore

logger = get_logger(__name__)


class ErrorReporter:
    """Maps error codes to user-facing text and persists reports."""

    def __init__(self, report_store: ReportStore, vocabulary: StatusVocabulary | None = None) -> None:
        self.report_store = report_store
        self.vocabulary = vocabulary or StatusVocabulary.from_settings()

    def map_error(self, item: ErrorItem) -> ReportItem:
        reason, suggestion = self._describe(item)
        return ReportItem(
            row=item.row,
            code=item.code.value,
            field=item.field,
            reason=reason,
            suggestion=suggestion,
        )

    def _describe(self, item: ErrorItem) -> tuple[str, str]:
        code = item.code
        if code == ErrorCode.MISSING_FIELD:
            return (
                f"Missing required field: {item.field}",
                f'Provide value for field "{item.field}"',
            )
        if code == ErrorCode.INVALID_DATE:
            return (
                f"Invalid date format in field: {item.field}",
                "Use YYYY-MM-DD format",
            )
        if code == ErrorCode.INVALID_STATUS:
            return (
                "Invalid reservation status",
                f"Use one of allowed values: {', '.join(self.vocabulary.allowed_values())}",
            )
        if code == ErrorCode.CHECKOUT_BEFORE_CHECKIN:
            return (
                "Check-out date is before check-in date",
                "Ensure check-out date is after check-in date",
            )
        if code == ErrorCode.DUPLICATE:
            return (
                f"Duplicate reservation ID: {item.field}",
                "Remove duplicate entry or use unique reservation ID",
            )
        return (item.message or "Unknown error", "Verify row data")

    async def generate(self, task_id: str, items: list[ErrorItem]) -> str | None:
        """
        Write the report for `task_id` and return its reference.

        Returns None without touching the store when there is nothing to
        report: the artifact's absence is what signals a clean run.
        """
        if not items:
            logger.info("No errors, report not generated", task_id=task_id)
            return None

        report_items = [self.map_error(item) for item in items]
        return await self.report_store.write(task_id, report_items)

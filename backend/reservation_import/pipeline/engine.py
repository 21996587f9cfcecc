"""
ImportEngine — the orchestrator that runs one reservation import task.

Responsibilities:
    - Load the task and move it PENDING → IN_PROGRESS
    - Stream the workbook row by row, in file order
    - Route each row through normalize → duplicate check → validate →
      business rules, collecting ErrorItems for bad rows
    - Emit a progress event every N rows
    - Write the error report, move the task to COMPLETED / FAILED and
      emit the final status event

Failure policy:
    - Bad rows are data, not failures: the task still ends COMPLETED.
    - An unreadable / corrupt workbook ends the task FAILED with a single
      file-level error item.  Nothing is re-raised.
    - Store, broker and report-write errors propagate so the queue can
      redeliver the job.  Each attempt starts from a clean ImportContext.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

import structlog

from reservation_import.core.config import settings
from reservation_import.core.constants import TaskStatus, can_transition
from reservation_import.notifications.notifier import (
    InMemoryNotifier,
    Notifier,
    TaskProgressUpdate,
    TaskStatusUpdate,
)
from reservation_import.pipeline.context import ImportContext, RowResult
from reservation_import.pipeline.errors import InvalidTransitionError, SpreadsheetReadError
from reservation_import.pipeline.stores import ReservationStore, TaskRecord, TaskStore
from reservation_import.processing.normalizer import normalize_row
from reservation_import.processing.reader import SheetRow, SpreadsheetReader
from reservation_import.processing.schemas import StatusVocabulary
from reservation_import.reports.error_reporter import ErrorReporter
from reservation_import.reports.items import ErrorItem
from reservation_import.reports.store import ReportStore
from reservation_import.validation.business_rules import BusinessRuleEngine
from reservation_import.validation.schema_validator import RowValidator


@dataclass
class ImportResult:
    """Final outcome of one job execution."""

    task_id: str
    status: str | None              # TaskStatus value; None when aborted
    execution_id: str | None = None
    report_path: str | None = None
    rows_processed: int = 0
    error_count: int = 0
    aborted: bool = False
    started_at: datetime | None = None
    completed_at: datetime | None = None
    total_duration_ms: int = 0
    summary: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_id": self.task_id,
            "status": self.status,
            "execution_id": self.execution_id,
            "report_path": self.report_path,
            "rows_processed": self.rows_processed,
            "error_count": self.error_count,
            "aborted": self.aborted,
            "duration_ms": self.total_duration_ms,
        }


class ImportEngine:
    """
    Runs reservation imports against injected stores.

    Usage::

        engine = ImportEngine(
            task_store=SqlTaskStore(session_factory),
            reservation_store=SqlReservationStore(session_factory),
            report_store=FileReportStore(),
            notifier=RedisNotifier(),
        )
        result = await engine.run(task_id)
    """

    def __init__(
        self,
        task_store: TaskStore,
        reservation_store: ReservationStore,
        report_store: ReportStore,
        notifier: Notifier | None = None,
        *,
        vocabulary: StatusVocabulary | None = None,
        progress_interval: int | None = None,
        reader_factory: Callable[[str], SpreadsheetReader] = SpreadsheetReader,
    ) -> None:
        vocabulary = vocabulary or StatusVocabulary.from_settings()
        self.task_store = task_store
        self.notifier = notifier or InMemoryNotifier()
        self.validator = RowValidator(vocabulary)
        self.rules = BusinessRuleEngine(reservation_store)
        self.reporter = ErrorReporter(report_store, vocabulary)
        self.progress_interval = max(1, progress_interval or settings.PROGRESS_INTERVAL)
        self.reader_factory = reader_factory
        self.logger = structlog.get_logger("pipeline.engine")

    async def run(self, task_id: str) -> ImportResult:
        """Process the task's file end to end."""
        started_at = datetime.now(timezone.utc)
        log = self.logger.bind(task_id=task_id)

        task = await self.task_store.find_by_id(task_id)
        if task is None:
            log.error("Task not found, job dropped")
            return ImportResult(
                task_id=task_id,
                status=None,
                aborted=True,
                started_at=started_at,
                completed_at=datetime.now(timezone.utc),
            )

        if TaskStatus(task.status).is_terminal:
            log.warning("Task already finished, redelivered job ignored", status=task.status)
            return ImportResult(
                task_id=task.id,
                status=task.status,
                report_path=task.report_path,
                rows_processed=task.rows_processed,
                error_count=task.error_count,
                started_at=started_at,
                completed_at=datetime.now(timezone.utc),
            )

        ctx = ImportContext(task_id=task.id, file_path=task.file_path)
        log = log.bind(execution_id=ctx.execution_id)

        redelivered = task.status == TaskStatus.IN_PROGRESS
        await self._transition(task, TaskStatus.IN_PROGRESS)
        await self.notifier.emit_status(TaskStatusUpdate(task_id=task.id, status=TaskStatus.IN_PROGRESS.value))
        log.info("Import started", file_path=task.file_path, redelivered=redelivered)

        # ── Stream rows ───────────────────────────────
        final_status = TaskStatus.COMPLETED
        try:
            await self._process_stream(ctx, log)
        except SpreadsheetReadError as exc:
            log.error(
                "Spreadsheet unreadable, import failed",
                error=str(exc),
                rows_processed=ctx.rows_processed,
            )
            ctx.add_error(ErrorItem.file_level(f"File processing failed: {exc}"))
            final_status = TaskStatus.FAILED

        # ── Finalise ──────────────────────────────────
        report_path = await self.reporter.generate(task.id, ctx.errors)
        await self._complete(task.id, final_status, report_path, ctx)
        await self.notifier.emit_status(TaskStatusUpdate(
            task_id=task.id,
            status=final_status.value,
            report_path=report_path,
        ))

        completed_at = datetime.now(timezone.utc)
        total_duration_ms = int((completed_at - started_at).total_seconds() * 1000)
        summary = ctx.to_summary_dict()

        log.info(
            "Import finished",
            status=final_status.value,
            report_path=report_path,
            duration_ms=total_duration_ms,
            **{key: value for key, value in summary.items() if key not in ("task_id", "execution_id")},
        )

        return ImportResult(
            task_id=task.id,
            status=final_status.value,
            execution_id=ctx.execution_id,
            report_path=report_path,
            rows_processed=ctx.rows_processed,
            error_count=ctx.error_count,
            started_at=started_at,
            completed_at=completed_at,
            total_duration_ms=total_duration_ms,
            summary=summary,
        )

    async def _process_stream(self, ctx: ImportContext, log: structlog.BoundLogger) -> None:
        """Walk every worksheet, skipping each sheet's header row."""
        with self.reader_factory(ctx.file_path) as reader:
            for sheet in reader.worksheets():
                header_skipped = False
                for row in sheet.rows():
                    if not header_skipped:
                        header_skipped = True
                        continue
                    if row.is_blank:
                        continue

                    result = await self.process_row(ctx, row)
                    ctx.record(result)
                    if result.errors:
                        log.debug(
                            "Row rejected",
                            worksheet=sheet.title,
                            row=row.number,
                            codes=[item.code.value for item in result.errors],
                        )

                    if ctx.rows_processed % self.progress_interval == 0:
                        await self.notifier.emit_progress(TaskProgressUpdate(
                            task_id=ctx.task_id,
                            rows_processed=ctx.rows_processed,
                            error_count=ctx.error_count,
                        ))

    async def process_row(self, ctx: ImportContext, row: SheetRow) -> RowResult:
        """Normalize, de-duplicate, validate and persist a single data row."""
        result = RowResult(row_number=row.number)
        normalized = normalize_row(row.values)

        duplicate = ctx.duplicates.check(row.number, normalized.reservation_id)
        if duplicate is not None:
            result.errors.append(duplicate)
            return result

        validation = self.validator.validate(row.number, normalized)
        if not validation.ok:
            result.errors.extend(validation.errors)
            return result

        ctx.duplicates.mark_seen(validation.record.reservation_id)
        result.record = validation.record
        result.outcome = await self.rules.apply(validation.record)
        return result

    async def _transition(self, task: TaskRecord, target: TaskStatus) -> None:
        self._check_transition(task.id, task.status, target)
        await self.task_store.update_status(task.id, target.value)
        task.status = target.value

    async def _complete(
        self,
        task_id: str,
        status: TaskStatus,
        report_path: str | None,
        ctx: ImportContext,
    ) -> None:
        self._check_transition(task_id, TaskStatus.IN_PROGRESS, status)
        await self.task_store.complete(
            task_id,
            status.value,
            report_path,
            rows_processed=ctx.rows_processed,
            error_count=ctx.error_count,
        )

    @staticmethod
    def _check_transition(task_id: str, current: str, target: TaskStatus) -> None:
        if not can_transition(current, target):
            raise InvalidTransitionError(
                f"Task cannot move from {current} to {target.value}",
                task_id=task_id,
                current_status=str(current),
                target_status=target.value,
            )

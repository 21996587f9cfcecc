"""
ImportContext — mutable state carried through one job attempt.

A fresh context is built every time the queue delivers a job, so the
duplicate set and error list never leak between tasks or retries.
RowResult is the per-row value threaded through normalize -> duplicate
check -> validate -> business rules; data problems travel in it as
ErrorItems instead of exceptions.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from reservation_import.core.constants import RuleOutcome
from reservation_import.processing.schemas import ReservationRow
from reservation_import.reports.items import ErrorItem
from reservation_import.validation.duplicate_detector import DuplicateTracker


# ═══════════════════════════════════════════════════════════
#  RowResult
# ═══════════════════════════════════════════════════════════

@dataclass
class RowResult:
    """Outcome of processing a single data row."""

    row_number: int
    record: ReservationRow | None = None
    errors: list[ErrorItem] = field(default_factory=list)
    outcome: RuleOutcome | None = None

    @property
    def ok(self) -> bool:
        return not self.errors


# ═══════════════════════════════════════════════════════════
#  ImportContext
# ═══════════════════════════════════════════════════════════

@dataclass
class ImportContext:
    """Per-attempt state for one task."""

    task_id: str
    file_path: str
    execution_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    duplicates: DuplicateTracker = field(default_factory=DuplicateTracker)
    errors: list[ErrorItem] = field(default_factory=list)

    rows_processed: int = 0
    upserted: int = 0
    updated: int = 0
    skipped: int = 0
    rejected: int = 0

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def record(self, result: RowResult) -> None:
        """Fold one row's outcome into the running totals."""
        self.rows_processed += 1
        if result.errors:
            self.errors.extend(result.errors)
            self.rejected += 1
        elif result.outcome == RuleOutcome.UPSERTED:
            self.upserted += 1
        elif result.outcome == RuleOutcome.UPDATED:
            self.updated += 1
        elif result.outcome == RuleOutcome.SKIPPED:
            self.skipped += 1

    def add_error(self, item: ErrorItem) -> None:
        """Record an error that is not tied to a processed row."""
        self.errors.append(item)

    def to_summary_dict(self) -> dict[str, Any]:
        """Compact summary for logging."""
        return {
            "execution_id": self.execution_id,
            "task_id": self.task_id,
            "rows_processed": self.rows_processed,
            "upserted": self.upserted,
            "updated": self.updated,
            "skipped": self.skipped,
            "rejected_rows": self.rejected,
            "error_count": self.error_count,
            "distinct_keys": len(self.duplicates),
        }

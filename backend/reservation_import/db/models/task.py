"""
ImportTask — one row per uploaded reservation spreadsheet.

Created as PENDING by the upload side, then moved by the import worker
through IN_PROGRESS to COMPLETED or FAILED.  `report_path` stays NULL
unless the run produced at least one error.
"""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID

from reservation_import.core.constants import TaskStatus
from reservation_import.db.models.base import Base, generate_uuid, utcnow


class ImportTask(Base):
    """One row per file import job."""

    __tablename__ = "tasks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=generate_uuid)

    # ── Source file ──────────────────────────
    file_path = Column(Text, nullable=False)

    # ── Status / Outcome ─────────────────────
    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value, index=True)
    report_path = Column(Text, nullable=True)
    rows_processed = Column(Integer, nullable=False, default=0)
    error_count = Column(Integer, nullable=False, default=0)

    # ── Audit timestamps ─────────────────────
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<ImportTask {self.id} status={self.status} rows={self.rows_processed} errors={self.error_count}>"

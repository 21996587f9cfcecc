"""Task status / report response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from reservation_import.core.constants import TaskStatus


class TaskStatusResponse(BaseModel):
    """Current state of an import task."""

    task_id: str
    status: TaskStatus
    created_at: datetime | None
    updated_at: datetime | None
    report_path: str | None = None
    rows_processed: int = Field(0, ge=0)
    error_count: int = Field(0, ge=0)


class ReportItemResponse(BaseModel):
    """One entry of a task's error report."""

    row: int = Field(..., ge=0)
    code: str
    field: str | None = None
    reason: str
    suggestion: str


class TaskReportResponse(BaseModel):
    """Error report of a finished task."""

    message: str
    errors: list[ReportItemResponse]

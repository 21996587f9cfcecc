"""
Task repository containing all data-access operations for the tasks table.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from reservation_import.core.constants import TaskStatus
from reservation_import.db.models.task import ImportTask


def _parse_task_id(task_id: str | uuid.UUID) -> uuid.UUID | None:
    if isinstance(task_id, uuid.UUID):
        return task_id
    try:
        return uuid.UUID(str(task_id))
    except (ValueError, AttributeError):
        return None


async def create_task(db: AsyncSession, *, file_path: str) -> ImportTask:
    """Create a PENDING task for an accepted upload."""
    task = ImportTask(file_path=file_path, status=TaskStatus.PENDING.value)
    db.add(task)
    await db.flush()
    return task


async def get_task_by_id(db: AsyncSession, task_id: str | uuid.UUID) -> ImportTask | None:
    """Fetch a task by primary key.  Malformed IDs resolve to None."""
    task_uuid = _parse_task_id(task_id)
    if task_uuid is None:
        return None
    return await db.get(ImportTask, task_uuid)


async def update_task_status(
    db: AsyncSession,
    task_id: str | uuid.UUID,
    status: str,
) -> ImportTask | None:
    """Set a task's status and return the updated row."""
    task = await get_task_by_id(db, task_id)
    if task is None:
        return None
    task.status = status
    await db.flush()
    return task


async def complete_task(
    db: AsyncSession,
    task_id: str | uuid.UUID,
    *,
    status: str,
    report_path: str | None,
    rows_processed: int = 0,
    error_count: int = 0,
) -> ImportTask | None:
    """Write the terminal status, report reference and run counters."""
    task = await get_task_by_id(db, task_id)
    if task is None:
        return None
    task.status = status
    task.report_path = report_path
    task.rows_processed = rows_processed
    task.error_count = error_count
    await db.flush()
    return task

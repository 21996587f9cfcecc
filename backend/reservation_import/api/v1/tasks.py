"""
Task endpoints — read-only views of import tasks and their error reports.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from reservation_import.api.deps import get_report_store, get_task_store
from reservation_import.api.schemas.tasks import (
    ReportItemResponse,
    TaskReportResponse,
    TaskStatusResponse,
)
from reservation_import.core.logging import get_logger
from reservation_import.pipeline.stores import TaskRecord, TaskStore
from reservation_import.reports.store import ReportStore

logger = get_logger(__name__)

router = APIRouter(prefix="/tasks", tags=["Tasks"])

NO_ERRORS_MESSAGE = "No errors found during processing"
ERRORS_MESSAGE = "Errors found during processing"


async def _load_task(task_id: str, task_store: TaskStore) -> TaskRecord:
    task = await task_store.find_by_id(task_id)
    if task is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task with ID {task_id} not found",
        )
    return task


@router.get("/{task_id}", response_model=TaskStatusResponse)
async def get_task_status(
    task_id: str,
    task_store: TaskStore = Depends(get_task_store),
) -> TaskStatusResponse:
    """Current status of a task."""
    task = await _load_task(task_id, task_store)
    return TaskStatusResponse(
        task_id=task.id,
        status=task.status,
        created_at=task.created_at,
        updated_at=task.updated_at,
        report_path=task.report_path,
        rows_processed=task.rows_processed,
        error_count=task.error_count,
    )


@router.get("/{task_id}/report", response_model=TaskReportResponse)
async def get_task_report(
    task_id: str,
    task_store: TaskStore = Depends(get_task_store),
    report_store: ReportStore = Depends(get_report_store),
) -> TaskReportResponse:
    """
    Error report of a task.

    A task without a report reference finished without errors (or has
    not finished yet); that is answered with an empty list, not a 404.
    """
    task = await _load_task(task_id, task_store)
    if not task.report_path:
        return TaskReportResponse(message=NO_ERRORS_MESSAGE, errors=[])

    try:
        items = await report_store.read(task.report_path)
    except FileNotFoundError:
        logger.warning("Report file missing", task_id=task_id, report_path=task.report_path)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Report for task {task_id} not found",
        ) from None

    return TaskReportResponse(
        message=ERRORS_MESSAGE,
        errors=[ReportItemResponse(**item.to_dict()) for item in items],
    )

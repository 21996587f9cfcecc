"""
Celery tasks — reservation file import.

Wires the ImportEngine into the Celery task system.  One job carries one
task ID; the worker builds fresh stores on a fresh event loop for every
attempt, runs the engine and tears everything down again.

Transient infrastructure failures (database connection drops, Redis
outages, filesystem errors while writing the report) propagate out of
the engine and are retried by Celery with exponential backoff.
"""

import asyncio

import structlog
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from sqlalchemy.exc import InterfaceError, OperationalError

from reservation_import.core.config import settings
from reservation_import.db.session import make_session_factory
from reservation_import.notifications.notifier import RedisNotifier
from reservation_import.pipeline.engine import ImportEngine, ImportResult
from reservation_import.pipeline.stores import SqlReservationStore, SqlTaskStore
from reservation_import.reports.store import FileReportStore
from reservation_import.tasks import celery_app

logger = structlog.get_logger("tasks.import")

TRANSIENT_ERRORS = (
    OperationalError,
    InterfaceError,
    RedisConnectionError,
    RedisTimeoutError,
    OSError,
)


async def _run_import(task_id: str) -> ImportResult:
    """Run one import attempt with its own engine, pool and Redis client."""
    session_factory, db_engine = make_session_factory()
    notifier = RedisNotifier()
    try:
        engine = ImportEngine(
            task_store=SqlTaskStore(session_factory),
            reservation_store=SqlReservationStore(session_factory),
            report_store=FileReportStore(),
            notifier=notifier,
        )
        return await engine.run(task_id)
    finally:
        await notifier.close()
        await db_engine.dispose()


@celery_app.task(
    bind=True,
    name="reservation_import.tasks.import_tasks.process_reservation_file",
    autoretry_for=TRANSIENT_ERRORS,
    retry_backoff=settings.QUEUE_BACKOFF_SECONDS,
    retry_backoff_max=settings.QUEUE_BACKOFF_MAX_SECONDS,
    retry_jitter=True,
    max_retries=max(0, settings.QUEUE_MAX_ATTEMPTS - 1),
)
def process_reservation_file(self, task_id: str) -> dict:
    """
    Import the workbook attached to `task_id`.

    Status moves PENDING → IN_PROGRESS → COMPLETED/FAILED inside the
    engine.  A missing task is dropped without retry; a task that is
    already terminal (duplicate delivery) is returned as-is.
    """
    task_log = logger.bind(
        celery_task_id=self.request.id,
        task_id=task_id,
        attempt=self.request.retries + 1,
    )
    task_log.info("Import job received")

    try:
        result = asyncio.run(_run_import(task_id))
    except TRANSIENT_ERRORS as exc:
        task_log.warning("Import job hit a transient error, will be retried", error=str(exc))
        raise
    except Exception as exc:
        task_log.exception("Import job crashed", error=str(exc))
        raise

    task_log.info(
        "Import job finished",
        status=result.status,
        aborted=result.aborted,
        rows_processed=result.rows_processed,
        error_count=result.error_count,
        duration_ms=result.total_duration_ms,
    )
    return result.to_dict()


def enqueue_import(task_id: str) -> str:
    """Queue an import job for `task_id`.  Returns the Celery message id."""
    async_result = process_reservation_file.delay(task_id)
    logger.info("Import job queued", task_id=task_id, celery_task_id=async_result.id)
    return async_result.id

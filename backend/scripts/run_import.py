#!/usr/bin/env python3
"""
Create an import task for a local workbook and process it.

Without --queue the engine runs inline in this process (no Celery
worker needed, events go to an in-memory notifier).  With --queue the
task is handed to the Celery `imports` queue.

Usage (from backend/):
    python -m scripts.run_import sample-reservations-errors.xlsx
    python -m scripts.run_import uploads/1736171234567.xlsx --queue
"""

import argparse
import asyncio
import json
from pathlib import Path

from reservation_import.core.config import settings
from reservation_import.core.logging import setup_logging
from reservation_import.db.session import make_session_factory
from reservation_import.notifications.notifier import InMemoryNotifier
from reservation_import.pipeline.engine import ImportEngine
from reservation_import.pipeline.stores import SqlReservationStore, SqlTaskStore
from reservation_import.reports.store import FileReportStore


async def create_task(file_path: str) -> str:
    session_factory, db_engine = make_session_factory()
    try:
        task = await SqlTaskStore(session_factory).create(file_path)
        return task.id
    finally:
        await db_engine.dispose()


async def run_inline(task_id: str) -> None:
    session_factory, db_engine = make_session_factory()
    notifier = InMemoryNotifier()
    try:
        engine = ImportEngine(
            task_store=SqlTaskStore(session_factory),
            reservation_store=SqlReservationStore(session_factory),
            report_store=FileReportStore(),
            notifier=notifier,
        )
        result = await engine.run(task_id)
    finally:
        await db_engine.dispose()

    print(json.dumps(result.to_dict(), indent=2))
    print(f"  status events:   {len(notifier.status_updates)}")
    print(f"  progress events: {len(notifier.progress_updates)}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Import a reservations workbook")
    parser.add_argument("path", type=Path, help="path to the .xlsx file")
    parser.add_argument("--queue", action="store_true", help="dispatch to Celery instead of running inline")
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    file_path = str(args.path.resolve())
    task_id = asyncio.run(create_task(file_path))
    print(f"Created task {task_id} for {file_path}")

    if args.queue:
        from reservation_import.tasks.import_tasks import enqueue_import

        message_id = enqueue_import(task_id)
        print(f"Queued as {message_id}")
        return

    asyncio.run(run_inline(task_id))


if __name__ == "__main__":
    main()

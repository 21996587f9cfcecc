"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from reservation_import.db.session import async_session
from reservation_import.db.session import get_db as _get_db
from reservation_import.pipeline.stores import SqlTaskStore, TaskStore
from reservation_import.reports.store import FileReportStore, ReportStore


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session."""
    async for session in _get_db():
        yield session


def get_task_store() -> TaskStore:
    """TaskStore over the API process's session factory."""
    return SqlTaskStore(async_session)


def get_report_store() -> ReportStore:
    """Report artifacts under the configured reports directory."""
    return FileReportStore()

"""
Store interfaces consumed by the import engine, plus their SQL adapters.

The engine only talks to TaskStore / ReservationStore.  The SQL adapters
open one short transaction per call through an async_sessionmaker and
delegate to the repository functions, so every row commits on its own.
Database errors are not caught here; they reach the queue for retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reservation_import.db.models.reservation import Reservation
from reservation_import.db.models.task import ImportTask
from reservation_import.processing.schemas import ReservationRow
from reservation_import.repositories import reservations as reservation_repository
from reservation_import.repositories import tasks as task_repository


# ═══════════════════════════════════════════════════════════
#  Plain records returned by stores
# ═══════════════════════════════════════════════════════════

@dataclass
class TaskRecord:
    """Snapshot of a task row."""

    id: str
    file_path: str
    status: str
    report_path: str | None = None
    rows_processed: int = 0
    error_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, task: ImportTask) -> "TaskRecord":
        return cls(
            id=str(task.id),
            file_path=task.file_path,
            status=task.status,
            report_path=task.report_path,
            rows_processed=task.rows_processed or 0,
            error_count=task.error_count or 0,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


@dataclass
class StoredReservation:
    """Snapshot of a persisted reservation."""

    reservation_id: str
    guest_name: str
    status: str
    check_in_date: date
    check_out_date: date

    @classmethod
    def from_model(cls, reservation: Reservation) -> "StoredReservation":
        return cls(
            reservation_id=reservation.reservation_id,
            guest_name=reservation.guest_name,
            status=reservation.status,
            check_in_date=reservation.check_in_date,
            check_out_date=reservation.check_out_date,
        )


# ═══════════════════════════════════════════════════════════
#  Interfaces
# ═══════════════════════════════════════════════════════════

class TaskStore(ABC):
    """Persistence for import tasks."""

    @abstractmethod
    async def find_by_id(self, task_id: str) -> TaskRecord | None:
        ...

    @abstractmethod
    async def create(self, file_path: str) -> TaskRecord:
        ...

    @abstractmethod
    async def update_status(self, task_id: str, status: str) -> TaskRecord | None:
        ...

    @abstractmethod
    async def complete(
        self,
        task_id: str,
        status: str,
        report_ref: str | None,
        *,
        rows_processed: int = 0,
        error_count: int = 0,
    ) -> TaskRecord | None:
        ...


class ReservationStore(ABC):
    """Persistence for reservations, keyed by reservation ID."""

    @abstractmethod
    async def find_by_key(self, reservation_id: str) -> StoredReservation | None:
        ...

    @abstractmethod
    async def upsert(self, record: ReservationRow) -> StoredReservation:
        ...

    @abstractmethod
    async def update_status_by_key(self, reservation_id: str, status: str) -> StoredReservation | None:
        ...


# ═══════════════════════════════════════════════════════════
#  SQLAlchemy adapters
# ═══════════════════════════════════════════════════════════

class SqlTaskStore(TaskStore):
    """TaskStore backed by the `tasks` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_id(self, task_id: str) -> TaskRecord | None:
        async with self._session_factory() as session:
            task = await task_repository.get_task_by_id(session, task_id)
            return TaskRecord.from_model(task) if task else None

    async def create(self, file_path: str) -> TaskRecord:
        async with self._session_factory() as session:
            async with session.begin():
                task = await task_repository.create_task(session, file_path=file_path)
            return TaskRecord.from_model(task)

    async def update_status(self, task_id: str, status: str) -> TaskRecord | None:
        async with self._session_factory() as session:
            async with session.begin():
                task = await task_repository.update_task_status(session, task_id, status)
            return TaskRecord.from_model(task) if task else None

    async def complete(
        self,
        task_id: str,
        status: str,
        report_ref: str | None,
        *,
        rows_processed: int = 0,
        error_count: int = 0,
    ) -> TaskRecord | None:
        async with self._session_factory() as session:
            async with session.begin():
                task = await task_repository.complete_task(
                    session,
                    task_id,
                    status=status,
                    report_path=report_ref,
                    rows_processed=rows_processed,
                    error_count=error_count,
                )
            return TaskRecord.from_model(task) if task else None


class SqlReservationStore(ReservationStore):
    """ReservationStore backed by the `reservations` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_key(self, reservation_id: str) -> StoredReservation | None:
        async with self._session_factory() as session:
            reservation = await reservation_repository.get_reservation_by_key(session, reservation_id)
            return StoredReservation.from_model(reservation) if reservation else None

    async def upsert(self, record: ReservationRow) -> StoredReservation:
        async with self._session_factory() as session:
            async with session.begin():
                reservation = await reservation_repository.upsert_reservation(
                    session,
                    reservation_id=record.reservation_id,
                    guest_name=record.guest_name,
                    status=record.status.value,
                    check_in_date=record.check_in_date,
                    check_out_date=record.check_out_date,
                )
            return StoredReservation.from_model(reservation)

    async def update_status_by_key(self, reservation_id: str, status: str) -> StoredReservation | None:
        async with self._session_factory() as session:
            async with session.begin():
                reservation = await reservation_repository.update_reservation_status(
                    session, reservation_id, status
                )
            return StoredReservation.from_model(reservation) if reservation else None

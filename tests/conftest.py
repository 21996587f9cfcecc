import struct
import uuid
import zipfile
from datetime import datetime, timezone
from pathlib import Path

import pytest
from openpyxl import Workbook

from reservation_import.core.constants import TaskStatus
from reservation_import.notifications.notifier import InMemoryNotifier
from reservation_import.pipeline.stores import (
    ReservationStore,
    StoredReservation,
    TaskRecord,
    TaskStore,
)
from reservation_import.processing.schemas import StatusVocabulary
from reservation_import.reports.store import FileReportStore

HEADER = ["reservation_id", "guest_name", "status", "check_in_date", "check_out_date"]


class InMemoryTaskStore(TaskStore):
    def __init__(self) -> None:
        self.tasks: dict[str, TaskRecord] = {}
        self.status_history: list[tuple[str, str]] = []

    def add(self, file_path: str, status: str = TaskStatus.PENDING.value) -> TaskRecord:
        now = datetime.now(timezone.utc)
        task = TaskRecord(
            id=str(uuid.uuid4()),
            file_path=file_path,
            status=status,
            created_at=now,
            updated_at=now,
        )
        self.tasks[task.id] = task
        return task

    async def find_by_id(self, task_id: str) -> TaskRecord | None:
        task = self.tasks.get(task_id)
        if task is None:
            return None
        return TaskRecord(**vars(task))

    async def create(self, file_path: str) -> TaskRecord:
        return self.add(file_path)

    async def update_status(self, task_id: str, status: str) -> TaskRecord | None:
        task = self.tasks.get(task_id)
        if task is None:
            return None
        task.status = status
        task.updated_at = datetime.now(timezone.utc)
        self.status_history.append((task_id, status))
        return task

    async def complete(self, task_id, status, report_ref, *, rows_processed=0, error_count=0):
        task = await self.update_status(task_id, status)
        if task is None:
            return None
        task.report_path = report_ref
        task.rows_processed = rows_processed
        task.error_count = error_count
        return task


class InMemoryReservationStore(ReservationStore):
    def __init__(self) -> None:
        self.records: dict[str, StoredReservation] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_on_upsert_call: int | None = None
        self.failure: Exception = ConnectionError("database unavailable")

    @property
    def write_calls(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[0] in ("upsert", "update_status_by_key")]

    def seed(self, reservation_id: str, **fields) -> StoredReservation:
        record = StoredReservation(
            reservation_id=reservation_id,
            guest_name=fields.get("guest_name", "Seeded Guest"),
            status=fields.get("status", "pending"),
            check_in_date=fields.get("check_in_date", datetime(2024, 1, 1).date()),
            check_out_date=fields.get("check_out_date", datetime(2024, 1, 5).date()),
        )
        self.records[reservation_id] = record
        return record

    async def find_by_key(self, reservation_id: str) -> StoredReservation | None:
        self.calls.append(("find_by_key", reservation_id))
        return self.records.get(reservation_id)

    async def upsert(self, record) -> StoredReservation:
        self.calls.append(("upsert", record.reservation_id))
        upserts = sum(1 for name, _ in self.calls if name == "upsert")
        if self.fail_on_upsert_call is not None and upserts == self.fail_on_upsert_call:
            raise self.failure
        stored = StoredReservation(
            reservation_id=record.reservation_id,
            guest_name=record.guest_name,
            status=record.status.value,
            check_in_date=record.check_in_date,
            check_out_date=record.check_out_date,
        )
        self.records[record.reservation_id] = stored
        return stored

    async def update_status_by_key(self, reservation_id: str, status: str) -> StoredReservation | None:
        self.calls.append(("update_status_by_key", reservation_id))
        existing = self.records.get(reservation_id)
        if existing is None:
            return None
        existing.status = status
        return existing


@pytest.fixture()
def vocabulary():
    return StatusVocabulary(pending="pending", completed="completed", cancelled="cancelled")


@pytest.fixture()
def task_store():
    return InMemoryTaskStore()


@pytest.fixture()
def reservation_store():
    return InMemoryReservationStore()


@pytest.fixture()
def report_store(tmp_path):
    return FileReportStore(tmp_path / "reports")


@pytest.fixture()
def notifier():
    return InMemoryNotifier()


@pytest.fixture()
def make_workbook(tmp_path):
    """Write an .xlsx with a header row followed by `rows`; extra sheets via `sheets`."""

    def _make(rows, name="reservations.xlsx", header=True, sheets=None) -> str:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Reservations"
        if header:
            sheet.append(HEADER)
        for row in rows:
            sheet.append(row)
        for title, extra_rows in (sheets or {}).items():
            extra = workbook.create_sheet(title)
            extra.append(HEADER)
            for row in extra_rows:
                extra.append(row)
        path = Path(tmp_path) / name
        workbook.save(path)
        return str(path)

    return _make


@pytest.fixture()
def corrupt_workbook():
    """Flip bytes inside a deflated workbook member, leaving the zip directory intact."""

    def _corrupt(path: str, member: str = "xl/worksheets/sheet1.xml") -> str:
        with zipfile.ZipFile(path) as archive:
            info = archive.getinfo(member)
        data = bytearray(Path(path).read_bytes())
        offset = info.header_offset
        name_length, extra_length = struct.unpack("<HH", data[offset + 26:offset + 30])
        start = offset + 30 + name_length + extra_length
        for index in range(start + 20, start + min(60, info.compress_size)):
            data[index] ^= 0xFF
        Path(path).write_bytes(bytes(data))
        return path

    return _corrupt


@pytest.fixture()
def truncate_workbook():
    """Cut a workbook file down to its first half."""

    def _truncate(path: str) -> str:
        data = Path(path).read_bytes()
        Path(path).write_bytes(data[: len(data) // 2])
        return path

    return _truncate

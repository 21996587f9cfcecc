"""Shared constants and enums used across the application."""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Lifecycle status of a file import task."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_TASK_STATUSES


TERMINAL_TASK_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.FAILED})

# IN_PROGRESS -> IN_PROGRESS is the re-entry taken when the queue redelivers
# a job whose previous attempt died mid-stream.
TASK_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.PENDING: frozenset({TaskStatus.IN_PROGRESS}),
    TaskStatus.IN_PROGRESS: frozenset({
        TaskStatus.IN_PROGRESS,
        TaskStatus.COMPLETED,
        TaskStatus.FAILED,
    }),
    TaskStatus.COMPLETED: frozenset(),
    TaskStatus.FAILED: frozenset(),
}


def can_transition(current: str, target: str) -> bool:
    """Return True if a task may move from `current` to `target`."""
    return TaskStatus(target) in TASK_TRANSITIONS[TaskStatus(current)]


class ReservationStatus(StrEnum):
    """Canonical reservation states, independent of spreadsheet literals."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ErrorCode(StrEnum):
    """Error kinds recorded in an import report."""

    MISSING_FIELD = "MISSING_FIELD"
    INVALID_DATE = "INVALID_DATE"
    INVALID_STATUS = "INVALID_STATUS"
    CHECKOUT_BEFORE_CHECKIN = "CHECKOUT_BEFORE_CHECKIN"
    DUPLICATE = "DUPLICATE"
    UNKNOWN = "UNKNOWN"


class RuleOutcome(StrEnum):
    """What the business rule engine did with a valid row."""

    UPSERTED = "UPSERTED"
    UPDATED = "UPDATED"
    SKIPPED = "SKIPPED"


# Spreadsheet column order, 1-based as in the worksheet.
RESERVATION_COLUMNS: dict[str, int] = {
    "reservation_id": 1,
    "guest_name": 2,
    "status": 3,
    "check_in_date": 4,
    "check_out_date": 5,
}

DATE_FIELDS = ("check_in_date", "check_out_date")

# Column widths of the reservations table.
RESERVATION_ID_MAX_LENGTH = 100
GUEST_NAME_MAX_LENGTH = 255

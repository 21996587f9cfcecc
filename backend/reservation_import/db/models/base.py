"""
Declarative base for the reservation import schema.

Two tables hang off this base:
    - `tasks`         one row per uploaded workbook (ImportTask)
    - `reservations`  one row per reservation ID (Reservation)

Timestamps are timezone-aware UTC; task IDs are UUID4.  Models are
re-exported from `reservation_import.db.models` so Alembic's
autogenerate sees both tables.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def generate_uuid() -> uuid.UUID:
    """Primary key default for `tasks.id`."""
    return uuid.uuid4()


def utcnow() -> datetime:
    """Default / onupdate value for `created_at` and `updated_at`."""
    return datetime.now(timezone.utc)

"""
Reservation repository — lookups and idempotent writes keyed by reservation ID.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from reservation_import.db.models.base import utcnow
from reservation_import.db.models.reservation import Reservation


async def get_reservation_by_key(db: AsyncSession, reservation_id: str) -> Reservation | None:
    """Fetch a reservation by its business key."""
    stmt = select(Reservation).where(Reservation.reservation_id == reservation_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def upsert_reservation(
    db: AsyncSession,
    *,
    reservation_id: str,
    guest_name: str,
    status: str,
    check_in_date: date,
    check_out_date: date,
) -> Reservation:
    """Insert the reservation, or overwrite every field if the key exists."""
    now = utcnow()
    values = {
        "guest_name": guest_name,
        "status": status,
        "check_in_date": check_in_date,
        "check_out_date": check_out_date,
    }
    stmt = (
        pg_insert(Reservation)
        .values(reservation_id=reservation_id, created_at=now, updated_at=now, **values)
        .on_conflict_do_update(
            index_elements=[Reservation.reservation_id],
            set_={**values, "updated_at": now},
        )
        .returning(Reservation)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    reservation = result.scalar_one()
    await db.flush()
    return reservation


async def update_reservation_status(
    db: AsyncSession,
    reservation_id: str,
    status: str,
) -> Reservation | None:
    """Change only the status of an existing reservation."""
    reservation = await get_reservation_by_key(db, reservation_id)
    if reservation is None:
        return None
    reservation.status = status
    await db.flush()
    return reservation

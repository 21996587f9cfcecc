"""
Reservation model — the durable business record, one row per reservation ID.
"""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from reservation_import.core.constants import GUEST_NAME_MAX_LENGTH, RESERVATION_ID_MAX_LENGTH
from reservation_import.db.models.base import Base, utcnow


class Reservation(Base):
    __tablename__ = "reservations"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    reservation_id: Mapped[str] = mapped_column(
        String(RESERVATION_ID_MAX_LENGTH), unique=True, nullable=False, index=True
    )
    guest_name: Mapped[str] = mapped_column(String(GUEST_NAME_MAX_LENGTH), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False
    )  # pending | completed | cancelled

    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Reservation {self.reservation_id} status={self.status} {self.check_in_date}..{self.check_out_date}>"

"""
Reservation business rules — decide how a valid row touches the store.

    pending (or anything not terminal)  -> upsert by reservation ID
    completed / cancelled               -> update status only if the
                                           reservation already exists,
                                           otherwise skip silently

A terminal-status row must never create a reservation: a cancellation
can arrive before the booking it refers to was ever imported.
"""

from __future__ import annotations

from reservation_import.core.constants import ReservationStatus, RuleOutcome
from reservation_import.core.logging import get_logger
from reservation_import.pipeline.stores import ReservationStore
from reservation_import.processing.schemas import ReservationRow

logger = get_logger(__name__)

UPDATE_ONLY_STATUSES = frozenset({ReservationStatus.COMPLETED, ReservationStatus.CANCELLED})


class BusinessRuleEngine:
    """Apply exactly one write decision per valid reservation row."""

    def __init__(self, reservation_store: ReservationStore) -> None:
        self.reservation_store = reservation_store

    async def apply(self, record: ReservationRow) -> RuleOutcome:
        if record.status in UPDATE_ONLY_STATUSES:
            return await self._update_if_exists(record)

        await self.reservation_store.upsert(record)
        logger.debug("Reservation upserted", reservation_id=record.reservation_id, status=record.status.value)
        return RuleOutcome.UPSERTED

    async def _update_if_exists(self, record: ReservationRow) -> RuleOutcome:
        existing = await self.reservation_store.find_by_key(record.reservation_id)
        if existing is None:
            logger.info(
                "Reservation skipped, terminal status for unknown reservation",
                reservation_id=record.reservation_id,
                status=record.status.value,
            )
            return RuleOutcome.SKIPPED

        await self.reservation_store.update_status_by_key(record.reservation_id, record.status.value)
        logger.debug(
            "Reservation status updated",
            reservation_id=record.reservation_id,
            previous_status=existing.status,
            status=record.status.value,
        )
        return RuleOutcome.UPDATED

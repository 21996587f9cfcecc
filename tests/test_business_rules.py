from datetime import date

from reservation_import.core.constants import ReservationStatus, RuleOutcome
from reservation_import.processing.schemas import ReservationRow
from reservation_import.validation.business_rules import BusinessRuleEngine


def _record(status: ReservationStatus, reservation_id: str = "R1", **overrides) -> ReservationRow:
    values = {
        "reservation_id": reservation_id,
        "guest_name": "Jan Nowak",
        "status": status,
        "check_in_date": date(2024, 5, 1),
        "check_out_date": date(2024, 5, 7),
    }
    values.update(overrides)
    return ReservationRow.model_construct(**values)


async def test_pending_row_is_upserted(reservation_store):
    engine = BusinessRuleEngine(reservation_store)

    outcome = await engine.apply(_record(ReservationStatus.PENDING))

    assert outcome is RuleOutcome.UPSERTED
    assert reservation_store.write_calls == [("upsert", "R1")]
    assert reservation_store.records["R1"].status == "pending"


async def test_pending_row_overwrites_existing_reservation(reservation_store):
    reservation_store.seed("R1", guest_name="Old Name", status="pending")
    engine = BusinessRuleEngine(reservation_store)

    await engine.apply(_record(ReservationStatus.PENDING, guest_name="New Name"))

    assert len(reservation_store.records) == 1
    assert reservation_store.records["R1"].guest_name == "New Name"


async def test_cancelled_unknown_reservation_is_skipped_without_writes(reservation_store):
    engine = BusinessRuleEngine(reservation_store)

    outcome = await engine.apply(_record(ReservationStatus.CANCELLED))

    assert outcome is RuleOutcome.SKIPPED
    assert reservation_store.write_calls == []
    assert reservation_store.records == {}


async def test_completed_existing_reservation_gets_status_only_update(reservation_store):
    seeded = reservation_store.seed(
        "R1",
        guest_name="Seeded Guest",
        status="pending",
        check_in_date=date(2024, 1, 1),
        check_out_date=date(2024, 1, 5),
    )
    engine = BusinessRuleEngine(reservation_store)

    outcome = await engine.apply(_record(
        ReservationStatus.COMPLETED,
        guest_name="Someone Else",
        check_in_date=date(2030, 1, 1),
        check_out_date=date(2030, 1, 2),
    ))

    assert outcome is RuleOutcome.UPDATED
    assert reservation_store.write_calls == [("update_status_by_key", "R1")]
    stored = reservation_store.records["R1"]
    assert stored.status == "completed"
    assert stored.guest_name == "Seeded Guest"
    assert stored.check_in_date == seeded.check_in_date
    assert stored.check_out_date == seeded.check_out_date


async def test_cancelled_existing_reservation_is_updated(reservation_store):
    reservation_store.seed("R1", status="pending")
    engine = BusinessRuleEngine(reservation_store)

    outcome = await engine.apply(_record(ReservationStatus.CANCELLED))

    assert outcome is RuleOutcome.UPDATED
    assert reservation_store.records["R1"].status == "cancelled"

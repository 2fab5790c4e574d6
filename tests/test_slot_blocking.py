"""
Tests for blocking and unblocking court time slots
"""
from datetime import time, timedelta

from app.crud import time_slot as time_slot_crud
from app.models.time_slot import TimeSlot


def test_block_slot_creates_record(db, court, tomorrow):
    slot = time_slot_crud.block_slot(
        db, court.id, tomorrow, time(10, 0), time(11, 0), reason="Maintenance"
    )

    assert slot.id is not None
    assert slot.is_blocked is True
    assert slot.reason == "Maintenance"


def test_block_slot_is_an_upsert(db, court, tomorrow):
    first = time_slot_crud.block_slot(
        db, court.id, tomorrow, time(10, 0), time(11, 0), reason="Maintenance"
    )
    second = time_slot_crud.block_slot(
        db, court.id, tomorrow, time(10, 0), time(11, 0), reason="Resurfacing"
    )

    assert first.id == second.id
    assert second.reason == "Resurfacing"
    assert db.query(TimeSlot).count() == 1


def test_unblock_slot_clears_flag_and_reason(db, court, tomorrow):
    time_slot_crud.block_slot(
        db, court.id, tomorrow, time(10, 0), time(11, 0), reason="Maintenance"
    )

    slot = time_slot_crud.unblock_slot(db, court.id, tomorrow, time(10, 0), time(11, 0))

    assert slot.is_blocked is False
    assert slot.reason is None


def test_unblock_slot_is_idempotent(db, court, tomorrow):
    assert time_slot_crud.unblock_slot(db, court.id, tomorrow, time(10, 0), time(11, 0)) is None

    time_slot_crud.block_slot(db, court.id, tomorrow, time(10, 0), time(11, 0))
    assert time_slot_crud.unblock_slot(db, court.id, tomorrow, time(10, 0), time(11, 0)) is not None
    assert time_slot_crud.unblock_slot(db, court.id, tomorrow, time(10, 0), time(11, 0)) is None


def test_block_and_unblock_by_ids(db, court, tomorrow):
    db.add_all(
        [
            TimeSlot(court_id=court.id, slot_date=tomorrow, start_time=time(8, 0), end_time=time(9, 0)),
            TimeSlot(court_id=court.id, slot_date=tomorrow, start_time=time(9, 0), end_time=time(10, 0)),
        ]
    )
    db.commit()
    ids = [slot.id for slot in db.query(TimeSlot).all()]

    blocked = time_slot_crud.block_slots_by_ids(db, court.id, ids, reason="Tournament")
    assert len(blocked) == 2
    assert all(slot.is_blocked and slot.reason == "Tournament" for slot in blocked)

    unblocked = time_slot_crud.unblock_slots_by_ids(db, court.id, ids[:1])
    assert [slot.id for slot in unblocked] == ids[:1]
    assert unblocked[0].is_blocked is False


def test_ids_of_other_courts_are_ignored(db, court, tomorrow):
    slot = TimeSlot(court_id=court.id, slot_date=tomorrow, start_time=time(8, 0), end_time=time(9, 0))
    db.add(slot)
    db.commit()

    assert time_slot_crud.block_slots_by_ids(db, court.id + 1, [slot.id]) == []


def test_get_blocked_slots_by_date_and_range(db, court, tomorrow):
    time_slot_crud.block_slot(db, court.id, tomorrow, time(10, 0), time(11, 0))
    time_slot_crud.block_slot(db, court.id, tomorrow + timedelta(days=60), time(10, 0), time(11, 0))

    assert len(time_slot_crud.get_blocked_slots(db, court.id, slot_date=tomorrow)) == 1
    # Default range covers the next 30 days only
    assert len(time_slot_crud.get_blocked_slots(db, court.id)) == 1
    assert (
        len(
            time_slot_crud.get_blocked_slots(
                db, court.id, start_date=tomorrow, end_date=tomorrow + timedelta(days=90)
            )
        )
        == 2
    )

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from datetime import date, time, timedelta
from typing import List, Optional
import logging

from app.exceptions import is_unique_violation
from app.models.time_slot import TimeSlot

logger = logging.getLogger(__name__)

DEFAULT_BLOCKED_RANGE_DAYS = 30


def get_time_slot(
    db: Session, court_id: int, slot_date: date, start_time: time, end_time: time
) -> Optional[TimeSlot]:
    return (
        db.query(TimeSlot)
        .filter(
            TimeSlot.court_id == court_id,
            TimeSlot.slot_date == slot_date,
            TimeSlot.start_time == start_time,
            TimeSlot.end_time == end_time,
        )
        .first()
    )


def get_time_slots_by_ids(db: Session, court_id: int, slot_ids: List[int]) -> List[TimeSlot]:
    if not slot_ids:
        return []
    return (
        db.query(TimeSlot)
        .filter(TimeSlot.court_id == court_id, TimeSlot.id.in_(slot_ids))
        .order_by(TimeSlot.slot_date, TimeSlot.start_time)
        .all()
    )


def get_time_slots_for_date(db: Session, court_id: int, slot_date: date) -> List[TimeSlot]:
    """All records (blocked or not) of a court on a date."""
    return (
        db.query(TimeSlot)
        .filter(TimeSlot.court_id == court_id, TimeSlot.slot_date == slot_date)
        .order_by(TimeSlot.start_time)
        .all()
    )


def get_blocked_slots(
    db: Session,
    court_id: int,
    slot_date: Optional[date] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[TimeSlot]:
    """
    Blocked records for a court, either on a single date or within a range.

    Without a date the range defaults to today .. today + 30 days.
    """
    query = db.query(TimeSlot).filter(
        TimeSlot.court_id == court_id, TimeSlot.is_blocked.is_(True)
    )

    if slot_date:
        query = query.filter(TimeSlot.slot_date == slot_date)
    else:
        start_date = start_date or date.today()
        end_date = end_date or start_date + timedelta(days=DEFAULT_BLOCKED_RANGE_DAYS)
        query = query.filter(TimeSlot.slot_date.between(start_date, end_date))

    return query.order_by(TimeSlot.slot_date, TimeSlot.start_time).all()


def block_slot(
    db: Session,
    court_id: int,
    slot_date: date,
    start_time: time,
    end_time: time,
    reason: Optional[str] = None,
) -> TimeSlot:
    """
    Upsert a blocking record keyed by (court, date, start, end).

    Existing bookings in the window are left untouched.
    """
    db_slot = get_time_slot(db, court_id, slot_date, start_time, end_time)

    if db_slot is None:
        db_slot = TimeSlot(
            court_id=court_id,
            slot_date=slot_date,
            start_time=start_time,
            end_time=end_time,
            is_blocked=True,
            reason=reason,
        )
        db.add(db_slot)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if not is_unique_violation(exc):
                raise
            # Lost the insert race, the row exists now
            db_slot = get_time_slot(db, court_id, slot_date, start_time, end_time)
            db_slot.is_blocked = True
            db_slot.reason = reason
            db.commit()
    else:
        db_slot.is_blocked = True
        db_slot.reason = reason
        db.commit()

    db.refresh(db_slot)
    logger.info(
        f"Court {court_id} blocked on {slot_date} {start_time}-{end_time}: {reason}"
    )
    return db_slot


def unblock_slot(
    db: Session, court_id: int, slot_date: date, start_time: time, end_time: time
) -> Optional[TimeSlot]:
    """
    Clear the blocked flag and reason of the matching record.

    Returns None when no blocked record matches, so repeating the call is a no-op.
    """
    db_slot = get_time_slot(db, court_id, slot_date, start_time, end_time)
    if db_slot is None or not db_slot.is_blocked:
        return None

    db_slot.is_blocked = False
    db_slot.reason = None
    db.commit()
    db.refresh(db_slot)
    logger.info(f"Court {court_id} unblocked on {slot_date} {start_time}-{end_time}")
    return db_slot


def block_slots_by_ids(
    db: Session, court_id: int, slot_ids: List[int], reason: Optional[str] = None
) -> List[TimeSlot]:
    db_slots = get_time_slots_by_ids(db, court_id, slot_ids)
    for db_slot in db_slots:
        db_slot.is_blocked = True
        db_slot.reason = reason
    db.commit()

    for db_slot in db_slots:
        db.refresh(db_slot)
    return db_slots


def unblock_slots_by_ids(db: Session, court_id: int, slot_ids: List[int]) -> List[TimeSlot]:
    db_slots = [
        s for s in get_time_slots_by_ids(db, court_id, slot_ids) if s.is_blocked
    ]
    for db_slot in db_slots:
        db_slot.is_blocked = False
        db_slot.reason = None
    db.commit()

    for db_slot in db_slots:
        db.refresh(db_slot)
    return db_slots

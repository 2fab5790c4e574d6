from sqlalchemy import or_, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional
import logging

from app.exceptions import (
    SlotAlreadyBookedError,
    InvalidStatusTransitionError,
    is_unique_violation,
)
from app.models.booking import Booking, BookingStatus, PaymentStatus
from app.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return db.query(Booking).filter(Booking.id == booking_id).first()


def get_bookings(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    user_id: Optional[int] = None,
    venue_id: Optional[int] = None,
    status: Optional[BookingStatus] = None,
    booking_date: Optional[date] = None,
    upcoming: bool = False,
    now: Optional[datetime] = None,
) -> List[Booking]:
    query = db.query(Booking)

    if user_id:
        query = query.filter(Booking.user_id == user_id)
    if venue_id:
        query = query.filter(Booking.venue_id == venue_id)
    if status:
        query = query.filter(Booking.status == status)
    if booking_date:
        query = query.filter(Booking.booking_date == booking_date)

    if upcoming:
        now = now or datetime.now()
        query = query.filter(
            Booking.status == BookingStatus.CONFIRMED,
            or_(
                Booking.booking_date > now.date(),
                and_(
                    Booking.booking_date == now.date(),
                    Booking.start_time > now.time(),
                ),
            ),
        ).order_by(Booking.booking_date.asc(), Booking.start_time.asc())
    else:
        query = query.order_by(Booking.booking_date.desc(), Booking.start_time.desc())

    return query.offset(skip).limit(limit).all()


def get_active_bookings_for_court(
    db: Session, court_id: int, booking_date: date
) -> List[Booking]:
    """Every booking of the court on that date whose status is not cancelled."""
    return (
        db.query(Booking)
        .filter(
            Booking.court_id == court_id,
            Booking.booking_date == booking_date,
            Booking.status != BookingStatus.CANCELLED,
        )
        .order_by(Booking.start_time)
        .all()
    )


def find_conflicts(
    db: Session,
    court_id: int,
    booking_date: date,
    start_time: time,
    end_time: time,
    exclude_booking_id: Optional[int] = None,
) -> List[Booking]:
    """
    Non-cancelled bookings whose [start, end) intersects the given interval.

    This is a read-time pre-check only; nothing re-verifies it when the row is
    written, so two concurrent requests for partially overlapping intervals
    can both pass it.
    """
    query = db.query(Booking).filter(
        Booking.court_id == court_id,
        Booking.booking_date == booking_date,
        Booking.status != BookingStatus.CANCELLED,
        Booking.start_time < end_time,
        Booking.end_time > start_time,
    )

    if exclude_booking_id:
        query = query.filter(Booking.id != exclude_booking_id)

    return query.all()


def _commit_slot_change(db: Session, db_booking: Booking) -> Booking:
    # Rollback expires the instance, describe the slot before committing
    slot = (
        f"court {db_booking.court_id} on {db_booking.booking_date} "
        f"{db_booking.start_time}-{db_booking.end_time}"
    )
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            logger.warning(f"Booking rejected: {slot} is already booked")
            raise SlotAlreadyBookedError()
        raise

    db.refresh(db_booking)
    return db_booking


def create_booking(
    db: Session, booking: BookingCreate, user_id: int, total_amount: Decimal
) -> Booking:
    """
    Insert a confirmed booking with pending payment.

    Only the storage-level unique index guards the slot here: an identical
    (court, date, start, end) among non-cancelled rows raises
    ``SlotAlreadyBookedError``, any other storage failure propagates.
    """
    db_booking = Booking(
        user_id=user_id,
        court_id=booking.court_id,
        venue_id=booking.venue_id,
        booking_date=booking.booking_date,
        start_time=booking.start_time,
        end_time=booking.end_time,
        total_amount=total_amount,
        notes=booking.notes,
        status=BookingStatus.CONFIRMED,
        payment_status=PaymentStatus.PENDING,
    )
    db.add(db_booking)

    db_booking = _commit_slot_change(db, db_booking)
    logger.info(
        f"Booking {db_booking.id} created for user {user_id} on court "
        f"{db_booking.court_id} ({db_booking.booking_date} "
        f"{db_booking.start_time}-{db_booking.end_time})"
    )
    return db_booking


def reschedule_booking(
    db: Session,
    db_booking: Booking,
    new_date: date,
    new_start_time: time,
    new_end_time: time,
    total_amount: Decimal,
) -> Booking:
    booking_id = db_booking.id

    db_booking.booking_date = new_date
    db_booking.start_time = new_start_time
    db_booking.end_time = new_end_time
    db_booking.total_amount = total_amount
    db_booking.rescheduled_at = datetime.utcnow()

    db_booking = _commit_slot_change(db, db_booking)
    logger.info(
        f"Booking {booking_id} rescheduled to {new_date} {new_start_time}-{new_end_time}"
    )
    return db_booking


def _transition(db: Session, db_booking: Booking, new_status: BookingStatus) -> Booking:
    if db_booking.status != BookingStatus.CONFIRMED:
        raise InvalidStatusTransitionError(
            f"Cannot change booking status from {db_booking.status.value} to {new_status.value}"
        )

    db_booking.status = new_status
    db.commit()
    db.refresh(db_booking)
    logger.info(f"Booking {db_booking.id} marked as {new_status.value}")
    return db_booking


def complete_booking(db: Session, db_booking: Booking) -> Booking:
    return _transition(db, db_booking, BookingStatus.COMPLETED)


def mark_no_show(db: Session, db_booking: Booking) -> Booking:
    return _transition(db, db_booking, BookingStatus.NO_SHOW)

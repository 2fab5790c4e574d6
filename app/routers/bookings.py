from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional
import logging

from app.database import get_db
from app.crud import booking as crud
from app.crud import court as court_crud
from app.crud import time_slot as time_slot_crud
from app.exceptions import SlotUnavailableError
from app.models.booking import Booking as BookingModel, BookingStatus
from app.models.court import Court
from app.models.user import User
from app.schemas.booking import Booking, BookingCreate, BookingCancel, BookingReschedule
from app.services.auth import get_current_user
from app.utils.booking_cancellation import cancel_booking as cancel_future_booking
from app.utils.slot_overlap import duration_hours, overlaps_any

router = APIRouter()

logger = logging.getLogger(__name__)


def calculate_amount(court: Court, start_time: time, end_time: time) -> Decimal:
    hours = Decimal(str(duration_hours(start_time, end_time)))
    return (hours * Decimal(str(court.price_per_hour))).quantize(Decimal("0.01"))


def ensure_slot_available(
    db: Session,
    court_id: int,
    booking_date: date,
    start_time: time,
    end_time: time,
    exclude_booking_id: Optional[int] = None,
) -> None:
    """
    Application-level pre-check: reject intervals that overlap an active
    booking or a blocked record. Not re-verified when the row is written.
    """
    conflicts = crud.find_conflicts(
        db, court_id, booking_date, start_time, end_time, exclude_booking_id
    )
    blocked = [
        (s.start_time, s.end_time)
        for s in time_slot_crud.get_blocked_slots(db, court_id, slot_date=booking_date)
    ]

    if conflicts or overlaps_any(start_time, end_time, blocked):
        logger.warning(
            f"Slot unavailable: court {court_id} {booking_date} {start_time}-{end_time} "
            f"({len(conflicts)} overlapping bookings)"
        )
        raise SlotUnavailableError()


def _get_owned_booking(db: Session, booking_id: int, current_user: User, action: str):
    db_booking = crud.get_booking(db, booking_id)
    if db_booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    if db_booking.user_id != current_user.id:
        raise HTTPException(
            status_code=403, detail=f"You can only {action} your own bookings"
        )
    return db_booking


@router.get("/", response_model=List[Booking])
def read_my_bookings(
    status: Optional[BookingStatus] = None,
    upcoming: bool = False,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return crud.get_bookings(
        db,
        skip=offset,
        limit=limit,
        user_id=current_user.id,
        status=status,
        upcoming=upcoming,
    )


@router.post("/", response_model=Booking, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    court = court_crud.get_active_court(db, booking.court_id)
    if court is None:
        raise HTTPException(
            status_code=404, detail="Court not found or not available"
        )

    if court.venue_id != booking.venue_id:
        raise HTTPException(
            status_code=400, detail="Court does not belong to this venue"
        )

    if not court.venue.is_approved:
        raise HTTPException(status_code=404, detail="Venue not available for booking")

    if datetime.combine(booking.booking_date, booking.start_time) <= datetime.now():
        raise HTTPException(
            status_code=400, detail="Cannot book for past dates and times"
        )

    ensure_slot_available(
        db, court.id, booking.booking_date, booking.start_time, booking.end_time
    )

    total_amount = booking.total_amount
    if total_amount is None:
        total_amount = calculate_amount(court, booking.start_time, booking.end_time)

    return crud.create_booking(
        db=db, booking=booking, user_id=current_user.id, total_amount=total_amount
    )


@router.get("/{booking_id}", response_model=Booking)
def read_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_booking = crud.get_booking(db, booking_id)
    if db_booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    # The customer, the venue owner and admins can see a booking
    if (
        db_booking.user_id != current_user.id
        and db_booking.venue.owner_id != current_user.id
        and not current_user.is_admin
    ):
        raise HTTPException(status_code=403, detail="Access denied")
    return db_booking


@router.patch("/{booking_id}/cancel", response_model=Booking)
def cancel_booking(
    booking_id: int,
    payload: Optional[BookingCancel] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_booking = _get_owned_booking(db, booking_id, current_user, "cancel")

    if db_booking.status == BookingStatus.CANCELLED:
        raise HTTPException(status_code=400, detail="Booking is already cancelled")
    if db_booking.status != BookingStatus.CONFIRMED:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot cancel a booking with status {db_booking.status.value}",
        )

    reason = payload.reason if payload and payload.reason else "Cancelled by customer"
    return cancel_future_booking(db, db_booking, reason=reason)


@router.patch("/{booking_id}/reschedule", response_model=Booking)
def reschedule_booking(
    booking_id: int,
    payload: BookingReschedule,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_booking: BookingModel = _get_owned_booking(
        db, booking_id, current_user, "reschedule"
    )

    if db_booking.status != BookingStatus.CONFIRMED:
        raise HTTPException(
            status_code=400, detail="Only confirmed bookings can be rescheduled"
        )

    if datetime.combine(payload.new_date, payload.new_start_time) <= datetime.now():
        raise HTTPException(
            status_code=400, detail="Cannot reschedule to past dates and times"
        )

    court = court_crud.get_active_court(db, db_booking.court_id)
    if court is None:
        raise HTTPException(status_code=404, detail="Court not available")

    ensure_slot_available(
        db,
        court.id,
        payload.new_date,
        payload.new_start_time,
        payload.new_end_time,
        exclude_booking_id=db_booking.id,
    )

    return crud.reschedule_booking(
        db,
        db_booking,
        new_date=payload.new_date,
        new_start_time=payload.new_start_time,
        new_end_time=payload.new_end_time,
        total_amount=calculate_amount(
            court, payload.new_start_time, payload.new_end_time
        ),
    )

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Optional
import logging

from app.exceptions import PastBookingError
from app.models.booking import Booking, BookingStatus

logger = logging.getLogger(__name__)


def booking_start_datetime(booking: Booking) -> datetime:
    return datetime.combine(booking.booking_date, booking.start_time)


def can_be_cancelled(booking: Booking, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now()
    return (
        booking.status == BookingStatus.CONFIRMED
        and booking_start_datetime(booking) > now
    )


def cancel_booking(
    db: Session,
    booking: Booking,
    reason: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Booking:
    """
    Cancel a booking whose start is still in the future.

    Args:
        db: Database session
        booking: Loaded booking (date and start time are read from it)
        reason: Optional cancellation reason stored on the booking
        now: Reference time, defaults to the current local time

    Returns:
        Booking: The updated booking

    Raises:
        PastBookingError: if the booking start is not after ``now``
    """
    now = now or datetime.now()

    if booking_start_datetime(booking) <= now:
        raise PastBookingError()

    # Payment status is left as is, refunds are handled elsewhere
    booking.status = BookingStatus.CANCELLED
    booking.cancellation_reason = reason
    booking.cancelled_at = datetime.utcnow()

    db.commit()
    db.refresh(booking)

    logger.info(f"Booking {booking.id} cancelled: {reason or 'no reason given'}")
    return booking

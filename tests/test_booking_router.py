"""
Tests for the booking endpoints, called as plain functions
"""
import pytest
from datetime import date, time, timedelta
from decimal import Decimal
from fastapi import HTTPException

from app.exceptions import PastBookingError, SlotUnavailableError
from app.models.booking import BookingStatus
from app.models.time_slot import TimeSlot
from app.routers import bookings as bookings_router
from app.schemas.booking import BookingCancel, BookingCreate, BookingReschedule


def _payload(court, booking_date, start="14:00", end="15:00", **extra):
    return BookingCreate(
        venue_id=court.venue_id,
        court_id=court.id,
        booking_date=booking_date,
        start_time=start,
        end_time=end,
        **extra,
    )


def test_create_booking_computes_amount(db, court, customer, tomorrow):
    booking = bookings_router.create_booking(
        _payload(court, tomorrow, "10:00", "11:30"), db=db, current_user=customer
    )

    assert booking.user_id == customer.id
    assert booking.total_amount == Decimal("75.00")


def test_create_booking_keeps_given_amount(db, court, customer, tomorrow):
    booking = bookings_router.create_booking(
        _payload(court, tomorrow, total_amount=Decimal("40.00")),
        db=db,
        current_user=customer,
    )

    assert booking.total_amount == Decimal("40.00")


def test_create_booking_on_taken_slot(db, court, customer, other_customer, tomorrow):
    bookings_router.create_booking(_payload(court, tomorrow), db=db, current_user=customer)

    with pytest.raises(SlotUnavailableError):
        bookings_router.create_booking(
            _payload(court, tomorrow), db=db, current_user=other_customer
        )


def test_create_booking_on_partially_overlapping_slot(db, court, customer, other_customer, tomorrow):
    bookings_router.create_booking(
        _payload(court, tomorrow, "10:00", "11:00"), db=db, current_user=customer
    )

    with pytest.raises(SlotUnavailableError):
        bookings_router.create_booking(
            _payload(court, tomorrow, "10:30", "11:30"), db=db, current_user=other_customer
        )


def test_create_booking_on_blocked_slot(db, court, customer, tomorrow):
    db.add(
        TimeSlot(
            court_id=court.id,
            slot_date=tomorrow,
            start_time=time(14, 0),
            end_time=time(15, 0),
            is_blocked=True,
        )
    )
    db.commit()

    with pytest.raises(SlotUnavailableError):
        bookings_router.create_booking(_payload(court, tomorrow), db=db, current_user=customer)


def test_create_booking_in_the_past(db, court, customer):
    yesterday = date.today() - timedelta(days=1)

    with pytest.raises(HTTPException) as exc_info:
        bookings_router.create_booking(_payload(court, yesterday), db=db, current_user=customer)

    assert exc_info.value.status_code == 400


def test_create_booking_on_inactive_court(db, court, customer, tomorrow):
    court.is_active = False
    db.commit()

    with pytest.raises(HTTPException) as exc_info:
        bookings_router.create_booking(_payload(court, tomorrow), db=db, current_user=customer)

    assert exc_info.value.status_code == 404


def test_create_booking_with_wrong_venue(db, court, customer, tomorrow):
    payload = _payload(court, tomorrow)
    payload.venue_id = court.venue_id + 1

    with pytest.raises(HTTPException) as exc_info:
        bookings_router.create_booking(payload, db=db, current_user=customer)

    assert exc_info.value.status_code == 400


def test_create_booking_on_unapproved_venue(db, venue, court, customer, tomorrow):
    venue.is_approved = False
    db.commit()

    with pytest.raises(HTTPException) as exc_info:
        bookings_router.create_booking(_payload(court, tomorrow), db=db, current_user=customer)

    assert exc_info.value.status_code == 404


def test_cancel_booking(db, court, customer, tomorrow):
    booking = bookings_router.create_booking(_payload(court, tomorrow), db=db, current_user=customer)

    cancelled = bookings_router.cancel_booking(
        booking.id, payload=None, db=db, current_user=customer
    )

    assert cancelled.status == BookingStatus.CANCELLED
    assert cancelled.cancellation_reason == "Cancelled by customer"

    with pytest.raises(HTTPException) as exc_info:
        bookings_router.cancel_booking(
            booking.id, payload=BookingCancel(reason="Again"), db=db, current_user=customer
        )
    assert exc_info.value.status_code == 400


def test_cancel_someone_elses_booking(db, court, customer, other_customer, tomorrow):
    booking = bookings_router.create_booking(_payload(court, tomorrow), db=db, current_user=customer)

    with pytest.raises(HTTPException) as exc_info:
        bookings_router.cancel_booking(
            booking.id, payload=None, db=db, current_user=other_customer
        )

    assert exc_info.value.status_code == 403


def test_cancel_past_booking(db, court, customer):
    from app.models.booking import Booking

    booking = Booking(
        user_id=customer.id,
        court_id=court.id,
        venue_id=court.venue_id,
        booking_date=date.today() - timedelta(days=2),
        start_time=time(10, 0),
        end_time=time(11, 0),
        total_amount=Decimal("50.00"),
    )
    db.add(booking)
    db.commit()

    with pytest.raises(PastBookingError):
        bookings_router.cancel_booking(booking.id, payload=None, db=db, current_user=customer)


def test_reschedule_booking(db, court, customer, tomorrow):
    booking = bookings_router.create_booking(_payload(court, tomorrow), db=db, current_user=customer)

    moved = bookings_router.reschedule_booking(
        booking.id,
        BookingReschedule(new_date=tomorrow, new_start_time="16:00", new_end_time="18:00"),
        db=db,
        current_user=customer,
    )

    assert moved.start_time == time(16, 0)
    assert moved.total_amount == Decimal("100.00")
    assert moved.rescheduled_at is not None


def test_reschedule_within_own_slot(db, court, customer, tomorrow):
    booking = bookings_router.create_booking(
        _payload(court, tomorrow, "14:00", "16:00"), db=db, current_user=customer
    )

    moved = bookings_router.reschedule_booking(
        booking.id,
        BookingReschedule(new_date=tomorrow, new_start_time="15:00", new_end_time="16:00"),
        db=db,
        current_user=customer,
    )

    assert moved.start_time == time(15, 0)


def test_reschedule_onto_taken_slot(db, court, customer, other_customer, tomorrow):
    bookings_router.create_booking(_payload(court, tomorrow), db=db, current_user=other_customer)
    booking = bookings_router.create_booking(
        _payload(court, tomorrow, "18:00", "19:00"), db=db, current_user=customer
    )

    with pytest.raises(SlotUnavailableError):
        bookings_router.reschedule_booking(
            booking.id,
            BookingReschedule(new_date=tomorrow, new_start_time="14:30", new_end_time="15:30"),
            db=db,
            current_user=customer,
        )


def test_read_booking_access(db, court, customer, other_customer, owner, admin, tomorrow):
    booking = bookings_router.create_booking(_payload(court, tomorrow), db=db, current_user=customer)

    assert bookings_router.read_booking(booking.id, db=db, current_user=customer).id == booking.id
    assert bookings_router.read_booking(booking.id, db=db, current_user=owner).id == booking.id
    assert bookings_router.read_booking(booking.id, db=db, current_user=admin).id == booking.id

    with pytest.raises(HTTPException) as exc_info:
        bookings_router.read_booking(booking.id, db=db, current_user=other_customer)
    assert exc_info.value.status_code == 403


def test_read_my_bookings_upcoming(db, court, customer, tomorrow):
    bookings_router.create_booking(_payload(court, tomorrow, "18:00", "19:00"), db=db, current_user=customer)
    bookings_router.create_booking(_payload(court, tomorrow, "08:00", "09:00"), db=db, current_user=customer)

    upcoming = bookings_router.read_my_bookings(
        status=None, upcoming=True, limit=20, offset=0, db=db, current_user=customer
    )

    assert [b.start_time for b in upcoming] == [time(8, 0), time(18, 0)]

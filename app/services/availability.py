from sqlalchemy.orm import Session
from datetime import date, time
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple
import logging
import os

from dotenv import load_dotenv

from app.crud import booking as booking_crud
from app.crud import time_slot as time_slot_crud
from app.models.court import Court
from app.utils.slot_overlap import generate_hourly_slots, overlaps_any, parse_time

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_OPENING_TIME = parse_time(os.getenv("DEFAULT_OPENING_TIME", "06:00"))
DEFAULT_CLOSING_TIME = parse_time(os.getenv("DEFAULT_CLOSING_TIME", "22:00"))


def get_operating_hours(court: Court) -> Tuple[time, time]:
    """Court operating window, falling back to the default when unset."""
    opening = court.opening_time or DEFAULT_OPENING_TIME
    closing = court.closing_time or DEFAULT_CLOSING_TIME
    return opening, closing


def compute_available_slots(
    court: Court,
    booked_intervals: Iterable[Tuple[time, time]],
    blocked_intervals: Iterable[Tuple[time, time]] = (),
    price_overrides: Optional[Dict[Tuple[time, time], Decimal]] = None,
) -> List[dict]:
    """
    Hourly candidates of the court's operating window minus every candidate
    that overlaps a booked or blocked interval.

    Args:
        court: Court providing operating hours and price per hour
        booked_intervals: (start, end) of the non-cancelled bookings of the day
        blocked_intervals: (start, end) of the blocked records of the day
        price_overrides: Optional price per exact (start, end) candidate

    Returns:
        List of dicts with start_time, end_time and price, in time order
    """
    booked = list(booked_intervals)
    blocked = list(blocked_intervals)
    price_overrides = price_overrides or {}

    opening, closing = get_operating_hours(court)

    available = []
    for start, end in generate_hourly_slots(opening, closing):
        if overlaps_any(start, end, booked) or overlaps_any(start, end, blocked):
            continue

        available.append(
            {
                "start_time": start,
                "end_time": end,
                "price": price_overrides.get((start, end), court.price_per_hour),
            }
        )

    return available


def get_available_slots(db: Session, court: Court, target_date: date) -> List[dict]:
    """
    Available hourly slots of a court on a date. Read only.
    """
    bookings = booking_crud.get_active_bookings_for_court(db, court.id, target_date)
    records = time_slot_crud.get_time_slots_for_date(db, court.id, target_date)

    booked_intervals = [(b.start_time, b.end_time) for b in bookings]
    blocked_intervals = [(r.start_time, r.end_time) for r in records if r.is_blocked]
    price_overrides = {
        (r.start_time, r.end_time): r.price_override
        for r in records
        if not r.is_blocked and r.price_override is not None
    }

    slots = compute_available_slots(
        court, booked_intervals, blocked_intervals, price_overrides
    )

    logger.debug(
        f"Court {court.id} on {target_date}: {len(slots)} available slots, "
        f"{len(bookings)} bookings, {len(blocked_intervals)} blocked"
    )
    return slots

"""
Time interval helpers for slot generation and conflict detection.

Every interval is half-open, [start, end): a booking that ends at 10:00 does
not overlap one that starts at 10:00.
"""

from datetime import datetime, date, time, timedelta
from typing import Iterable, List, Tuple

TIME_FORMAT = "%H:%M"
SLOT_DURATION = timedelta(hours=1)

# Any date works as an anchor, only the time of day matters
_ANCHOR_DATE = date(2000, 1, 1)


def parse_time(time_str: str) -> time:
    """
    Convert an "HH:mm" (24h) string to ``datetime.time``.

    Raises:
        ValueError: if the string is not a valid time
    """
    return datetime.strptime(time_str, TIME_FORMAT).time()


def format_time(value: time) -> str:
    return value.strftime(TIME_FORMAT)


def intervals_overlap(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    return a_start < b_end and a_end > b_start


def overlaps_any(
    start: time, end: time, intervals: Iterable[Tuple[time, time]]
) -> bool:
    return any(
        intervals_overlap(start, end, b_start, b_end) for b_start, b_end in intervals
    )


def generate_hourly_slots(opening: time, closing: time) -> List[Tuple[time, time]]:
    """
    Build the one-hour candidate intervals between opening and closing.

    Args:
        opening: Opening time of day
        closing: Closing time of day

    Returns:
        List of (start, end) tuples. A trailing interval that does not fit
        completely before closing is dropped.
    """
    slots = []

    current = datetime.combine(_ANCHOR_DATE, opening)
    end_of_day = datetime.combine(_ANCHOR_DATE, closing)

    while current + SLOT_DURATION <= end_of_day:
        slot_end = current + SLOT_DURATION
        slots.append((current.time(), slot_end.time()))
        current = slot_end

    return slots


def duration_hours(start: time, end: time) -> float:
    delta = datetime.combine(_ANCHOR_DATE, end) - datetime.combine(_ANCHOR_DATE, start)
    return delta.total_seconds() / 3600

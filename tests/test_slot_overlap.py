"""
Tests for the time interval helpers
"""
import pytest
from datetime import time

from app.utils.slot_overlap import (
    duration_hours,
    format_time,
    generate_hourly_slots,
    intervals_overlap,
    overlaps_any,
    parse_time,
)


def test_parse_and_format_time():
    assert parse_time("09:30") == time(9, 30)
    assert format_time(time(6, 0)) == "06:00"


def test_parse_time_rejects_invalid_values():
    with pytest.raises(ValueError):
        parse_time("24:00")


def test_touching_intervals_do_not_overlap():
    assert not intervals_overlap(time(9, 0), time(10, 0), time(10, 0), time(11, 0))
    assert not intervals_overlap(time(10, 0), time(11, 0), time(9, 0), time(10, 0))


def test_partial_and_contained_intervals_overlap():
    assert intervals_overlap(time(9, 0), time(10, 30), time(10, 0), time(11, 0))
    assert intervals_overlap(time(9, 0), time(12, 0), time(10, 0), time(11, 0))
    assert intervals_overlap(time(10, 15), time(10, 45), time(10, 0), time(11, 0))


def test_overlaps_any():
    booked = [(time(8, 0), time(9, 0)), (time(14, 0), time(15, 0))]
    assert overlaps_any(time(14, 30), time(15, 30), booked)
    assert not overlaps_any(time(9, 0), time(14, 0), booked)
    assert not overlaps_any(time(9, 0), time(10, 0), [])


def test_generate_hourly_slots_default_window():
    slots = generate_hourly_slots(time(6, 0), time(22, 0))

    assert len(slots) == 16
    assert slots[0] == (time(6, 0), time(7, 0))
    assert slots[-1] == (time(21, 0), time(22, 0))


def test_generate_hourly_slots_drops_partial_trailing_hour():
    slots = generate_hourly_slots(time(8, 30), time(11, 0))

    assert slots == [(time(8, 30), time(9, 30)), (time(9, 30), time(10, 30))]


def test_generate_hourly_slots_empty_window():
    assert generate_hourly_slots(time(10, 0), time(10, 30)) == []


def test_duration_hours():
    assert duration_hours(time(10, 0), time(11, 30)) == 1.5

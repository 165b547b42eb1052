from __future__ import annotations

from datetime import time

from src.bakery_timekeeping.bakery_timekeeping.attendance.hours import hours_worked


def test_same_day_hours_are_rounded_to_two_decimals():
    assert hours_worked(time(8, 0), time(17, 0)) == 9.0
    assert hours_worked(time(8, 0), time(8, 20)) == 0.33


def test_clock_out_before_clock_in_wraps_to_next_day():
    assert hours_worked(time(22, 0), time(6, 30)) == 8.5


def test_missing_event_counts_as_zero():
    assert hours_worked(time(8, 0), None) == 0.0
    assert hours_worked(None, time(17, 0)) == 0.0

from __future__ import annotations

from datetime import date

import pytest

from src.bakery_timekeeping.bakery_timekeeping.core.exceptions import ValidationError
from src.bakery_timekeeping.bakery_timekeeping.leaves.calculator import compute_leave_interval, leave_days


def test_day_counts_are_inclusive():
    assert leave_days(date(2024, 1, 1), date(2024, 1, 1)) == 1
    assert leave_days(date(2024, 1, 1), date(2024, 1, 5)) == 5


def test_interval_from_strings():
    interval = compute_leave_interval("2024-02-27", "2024-03-02")

    assert interval.start_date == date(2024, 2, 27)
    assert interval.end_date == date(2024, 3, 2)
    assert interval.days == 5


def test_reversed_range_is_rejected():
    with pytest.raises(ValidationError, match="end date cannot be before start date"):
        compute_leave_interval("2024-06-10", "2024-06-09")


def test_thirty_days_is_the_maximum():
    assert compute_leave_interval("2024-06-01", "2024-06-30").days == 30

    with pytest.raises(ValidationError, match="leave cannot exceed 30 days"):
        compute_leave_interval("2024-06-01", "2024-07-01")


def test_start_in_the_past_is_rejected_only_when_today_is_known():
    with pytest.raises(ValidationError, match="past dates"):
        compute_leave_interval("2024-06-09", "2024-06-12", today=date(2024, 6, 10))

    assert compute_leave_interval("2024-06-10", "2024-06-12", today=date(2024, 6, 10)).days == 3


def test_ordering_is_checked_before_past_dates():
    with pytest.raises(ValidationError, match="end date cannot be before start date"):
        compute_leave_interval("2024-01-05", "2024-01-01", today=date(2024, 6, 10))


@pytest.mark.parametrize(
    "start, end, message",
    [("2024-13-01", "2024-12-02", "invalid start date"), ("2024-06-01", "June 2", "invalid end date")],
)
def test_unparsable_dates(start, end, message):
    with pytest.raises(ValidationError, match=message):
        compute_leave_interval(start, end)

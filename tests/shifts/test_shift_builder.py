from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.bakery_timekeeping.bakery_timekeeping.core.enums import ShiftStatus
from src.bakery_timekeeping.bakery_timekeeping.core.exceptions import ValidationErrors
from src.bakery_timekeeping.bakery_timekeeping.shifts.builder import build_shift


def _messages(exc_info) -> list[str]:
    return [e.message for e in exc_info.value.errors]


def test_day_shift_is_normalized_to_utc_and_scheduled():
    shift = build_shift(employee_id=1, date="2024-03-01", start_time="08:00", end_time="17:00")

    assert shift.start_instant == datetime(2024, 3, 1, 7, 0, tzinfo=timezone.utc)
    assert shift.end_instant == datetime(2024, 3, 1, 16, 0, tzinfo=timezone.utc)
    assert shift.status == ShiftStatus.SCHEDULED
    assert shift.location == "Main Bakery"
    assert shift.notes is None


def test_overnight_shift_needs_explicit_end_date():
    shift = build_shift(
        employee_id="2", date="2024-03-01", end_date="2024-03-02", start_time="22:00", end_time="06:00",
        location="  Night Oven ", notes="dough prep",
    )

    assert shift.employee_id == 2
    assert shift.start_instant == datetime(2024, 3, 1, 21, 0, tzinfo=timezone.utc)
    assert shift.end_instant == datetime(2024, 3, 2, 5, 0, tzinfo=timezone.utc)
    assert shift.location == "Night Oven"
    assert shift.notes == "dough prep"


def test_all_missing_fields_are_reported_together():
    with pytest.raises(ValidationErrors) as exc_info:
        build_shift(employee_id=None, date="", start_time=None, end_time="  ")

    assert _messages(exc_info) == [
        "employee required",
        "date required",
        "start time required",
        "end time required",
    ]
    assert [e.field for e in exc_info.value.errors] == ["employeeId", "date", "startTime", "endTime"]


def test_end_before_start_is_rejected():
    with pytest.raises(ValidationErrors) as exc_info:
        build_shift(employee_id=1, date="2024-03-01", start_time="17:00", end_time="08:00")

    assert _messages(exc_info) == ["end time must be after start time"]


def test_zero_length_shift_is_rejected():
    with pytest.raises(ValidationErrors) as exc_info:
        build_shift(employee_id=1, date="2024-03-01", start_time="09:00", end_time="09:00")

    assert _messages(exc_info) == ["end time must be after start time"]


def test_format_errors_skip_the_ordering_check():
    with pytest.raises(ValidationErrors) as exc_info:
        build_shift(employee_id=1, date="01/03/2024", start_time="8am", end_time="17:00")

    assert _messages(exc_info) == [
        "invalid date format (YYYY-MM-DD expected)",
        "invalid start time format (HH:MM expected)",
    ]


def test_invalid_employee_reference_is_collected_with_other_errors():
    with pytest.raises(ValidationErrors) as exc_info:
        build_shift(employee_id="abc", date="2024-03-01", start_time="08:00", end_time=None)

    assert _messages(exc_info) == ["invalid employee id", "end time required"]


def test_date_outside_datetime_range_is_a_validation_error():
    with pytest.raises(ValidationErrors) as exc_info:
        build_shift(employee_id=1, date="0001-01-01", start_time="00:30", end_time="08:00")

    assert _messages(exc_info) == ["date out of range"]
    assert exc_info.value.errors[0].field == "date"


@pytest.mark.parametrize("employee_id", [True, False, 1.5, "1.0", "one", [1]])
def test_non_integer_employee_reference_is_rejected(employee_id):
    with pytest.raises(ValidationErrors) as exc_info:
        build_shift(employee_id=employee_id, date="2024-03-01", start_time="08:00", end_time="17:00")

    assert _messages(exc_info) == ["invalid employee id"]


def test_integral_float_and_padded_string_employee_ids_are_accepted():
    assert build_shift(employee_id=2.0, date="2024-03-01", start_time="08:00", end_time="17:00").employee_id == 2
    assert build_shift(employee_id=" 7 ", date="2024-03-01", start_time="08:00", end_time="17:00").employee_id == 7

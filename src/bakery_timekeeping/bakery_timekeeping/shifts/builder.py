"""Shift record builder.

Turns submitted local fields into a validated ``NewShift``. Every field problem
is collected so callers can show them all at once.
"""

from __future__ import annotations

from datetime import date, time
from typing import Any, List, Optional

from ..common.datetime_utils import to_utc_instant
from ..common.validators import is_blank, optional_text, parse_date_field, parse_employee_id, parse_time_field
from ..core.constants import DEFAULT_LOCATION
from ..core.enums import ShiftStatus
from ..core.exceptions import ValidationError, ValidationErrors
from .model import NewShift


def _date(value: Any, field: str, label: str, errors: List[ValidationError], *, required: bool = True) -> Optional[date]:
    if is_blank(value):
        if required:
            errors.append(ValidationError(f"{label} required", field=field))
        return None
    try:
        return parse_date_field(value, field, f"invalid {label} format (YYYY-MM-DD expected)")
    except ValidationError as e:
        errors.append(e)
        return None


def _time(value: Any, field: str, label: str, errors: List[ValidationError]) -> Optional[time]:
    if is_blank(value):
        errors.append(ValidationError(f"{label} required", field=field))
        return None
    try:
        return parse_time_field(value, field, f"invalid {label} format (HH:MM expected)")
    except ValidationError as e:
        errors.append(e)
        return None


def _instant(day: date, wall_clock: time, field: str, errors: List[ValidationError]):
    try:
        return to_utc_instant(day, wall_clock)
    except ValueError:
        errors.append(ValidationError("date out of range", field=field))
        return None


def build_shift(
    *,
    employee_id: Any,
    date: Any,
    start_time: Any,
    end_time: Any,
    end_date: Any = None,
    location: Any = None,
    notes: Any = None,
) -> NewShift:
    """Validate shift fields and compute both UTC instants.

    ``end_date`` defaults to ``date``; pass the next day for an overnight shift.
    Raises ValidationErrors listing every problem found.
    """
    errors: List[ValidationError] = []

    emp_id = parse_employee_id(employee_id, errors)
    day = _date(date, "date", "date", errors)
    start = _time(start_time, "startTime", "start time", errors)
    end = _time(end_time, "endTime", "end time", errors)
    end_day = _date(end_date, "endDate", "end date", errors, required=False) or day

    start_instant = end_instant = None
    if day and start and end and end_day:
        start_instant = _instant(day, start, "date", errors)
        end_instant = _instant(end_day, end, "date" if is_blank(end_date) else "endDate", errors)
        if start_instant and end_instant and end_instant <= start_instant:
            errors.append(ValidationError("end time must be after start time", field="endTime"))

    if errors:
        raise ValidationErrors(errors)

    return NewShift(
        employee_id=emp_id,
        start_instant=start_instant,
        end_instant=end_instant,
        location=optional_text(location) or DEFAULT_LOCATION,
        status=ShiftStatus.SCHEDULED,
        notes=optional_text(notes),
    )

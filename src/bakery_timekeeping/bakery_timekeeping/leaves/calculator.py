from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.validators import parse_date_field
from ..core.constants import MAX_LEAVE_DAYS
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class LeaveInterval:
    start_date: date
    end_date: date
    days: int


def leave_days(start_date: date, end_date: date) -> int:
    """Inclusive day count: a single-day leave is 1."""
    return (end_date - start_date).days + 1


def compute_leave_interval(
    start_date: Any,
    end_date: Any,
    *,
    today: Optional[date] = None,
    max_days: int = MAX_LEAVE_DAYS,
) -> LeaveInterval:
    """Validate a leave date range and count its days.

    Checks run in order: parse, ordering, maximum length, then (when ``today``
    is given) no start date in the past.
    """
    if not start_date:
        raise ValidationError("start date required", field="startDate")
    if not end_date:
        raise ValidationError("end date required", field="endDate")
    start = parse_date_field(start_date, "startDate", "invalid start date")
    end = parse_date_field(end_date, "endDate", "invalid end date")

    if end < start:
        raise ValidationError("end date cannot be before start date", field="endDate")

    days = leave_days(start, end)
    if days > max_days:
        raise ValidationError(f"leave cannot exceed {max_days} days", field="endDate")

    if today is not None and start < today:
        raise ValidationError("cannot request leave for past dates", field="startDate")

    return LeaveInterval(start_date=start, end_date=end, days=days)

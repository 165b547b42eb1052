from __future__ import annotations

import logging
from datetime import date, time, timedelta
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import to_utc_instant
from ..common.validators import parse_enum
from ..core.enums import SHIFT_TRANSITIONS, ShiftStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .builder import build_shift
from .model import ShiftInterval
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


def _day_start(day: date, field: str, *, offset_days: int = 0):
    """UTC instant of business-local midnight, ``offset_days`` after ``day``."""
    try:
        return to_utc_instant(day + timedelta(days=offset_days), time(0, 0))
    except (ValueError, OverflowError):
        raise ValidationError("date out of range", field=field)


class ShiftService:
    def __init__(self, shifts: ShiftRepository, employees: EmployeeRepository):
        self._shifts = shifts
        self._employees = employees

    def create_shift(
        self,
        *,
        employee_id: Any,
        date: Any,
        start_time: Any,
        end_time: Any,
        end_date: Any = None,
        location: Any = None,
        notes: Any = None,
    ) -> ShiftInterval:
        new_shift = build_shift(
            employee_id=employee_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            end_date=end_date,
            location=location,
            notes=notes,
        )

        if not self._employees.get_by_id(new_shift.employee_id):
            raise NotFoundError("employee not found")

        shift_id = self._shifts.create(new_shift)
        logger.info(
            "Shift %s scheduled for employee %s (%s -> %s)",
            shift_id, new_shift.employee_id, new_shift.start_instant, new_shift.end_instant,
        )
        return ShiftInterval(shift_id=shift_id, **vars(new_shift))

    def get_shift(self, shift_id: int) -> ShiftInterval:
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise NotFoundError("shift not found")
        return shift

    def list_shifts(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        statuses: Optional[Iterable[Any]] = None,
    ) -> Sequence[ShiftInterval]:
        """List shifts starting within the business-local dates [start_date, end_date]."""
        if start_date and end_date and end_date < start_date:
            raise ValidationError("end date cannot be before start date", field="endDate")

        lower = _day_start(start_date, "startDate") if start_date else None
        upper = _day_start(end_date, "endDate", offset_days=1) if end_date else None
        wanted = [parse_enum(ShiftStatus, s, "status") for s in (statuses or [])]

        return self._shifts.list_range(employee_id=employee_id, start=lower, end=upper, statuses=wanted)

    def change_status(self, shift_id: int, status: Any) -> ShiftInterval:
        target = parse_enum(ShiftStatus, status, "status")
        shift = self.get_shift(shift_id)

        if target == shift.status:
            return shift
        if target not in SHIFT_TRANSITIONS[shift.status]:
            raise ValidationError(
                f"cannot change shift status from {shift.status.value} to {target.value}", field="status"
            )

        if not self._shifts.update_status(shift.shift_id, target):
            raise NotFoundError("shift not found")
        logger.info("Shift %s: %s -> %s", shift.shift_id, shift.status.value, target.value)
        return self.get_shift(shift.shift_id)

    def delete_shift(self, shift_id: int) -> None:
        if not self._shifts.delete(int(shift_id)):
            raise NotFoundError("shift not found")
        logger.info("Shift %s deleted", shift_id)

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Any, List, Optional, Sequence, Tuple

from ..common.datetime_utils import now_local
from ..common.validators import (
    is_blank,
    optional_text,
    parse_date_field,
    parse_employee_id,
    parse_enum,
    parse_time_field,
)
from ..core.constants import DEFAULT_LATE_THRESHOLD, DEFAULT_LOCATION, MIN_REST_HOURS, MIN_SHIFT_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError, ValidationErrors
from ..employees.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .hours import hours_worked
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        late_threshold: time = DEFAULT_LATE_THRESHOLD,
        min_rest_hours: int = MIN_REST_HOURS,
        min_shift_minutes: int = MIN_SHIFT_MINUTES,
    ):
        self._attendance = attendance
        self._employees = employees
        self._factory = strategy_factory or AttendanceStrategyFactory(late_threshold=late_threshold)
        self._min_rest = timedelta(hours=int(min_rest_hours))
        self._min_shift = timedelta(minutes=int(min_shift_minutes))

    @property
    def late_threshold(self) -> time:
        return self._factory.late_threshold

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("employee not found")

    def _save(
        self,
        *,
        existing: Optional[AttendanceRecord],
        employee_id: int,
        work_date: date,
        clock_in: Optional[time],
        clock_out: Optional[time],
        location: str,
        notes: Optional[str],
    ) -> AttendanceRecord:
        # Status is always derived from the events being written, never from the stored value.
        decision = self._factory.classify(clock_in=clock_in, clock_out=clock_out)
        worked = hours_worked(clock_in, clock_out)

        if existing:
            ok = self._attendance.update(
                attendance_id=existing.attendance_id,
                clock_in=clock_in,
                clock_out=clock_out,
                status=decision.status,
                location=location,
                notes=notes,
                hours_worked=worked,
            )
            if not ok:
                raise NotFoundError("attendance record not found")
            attendance_id = existing.attendance_id
        else:
            attendance_id = self._attendance.create(
                employee_id=employee_id,
                work_date=work_date,
                clock_in=clock_in,
                clock_out=clock_out,
                status=decision.status,
                location=location,
                notes=notes,
                hours_worked=worked,
            )

        if decision.minutes_late:
            logger.info("Employee %s late by %d min on %s", employee_id, decision.minutes_late, work_date)

        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=clock_out,
            status=decision.status,
            location=location,
            notes=notes,
            hours_worked=worked,
            correction_status=existing.correction_status if existing else None,
        )

    def record_event(
        self,
        *,
        employee_id: Any,
        date: Any,
        clock_in: Any = None,
        clock_out: Any = None,
        notes: Any = None,
        location: Any = None,
    ) -> Tuple[AttendanceRecord, bool]:
        """Create or update the record for (employee, date).

        Only the fields provided overwrite stored values. Returns the stored
        record and whether it was newly created.
        """
        errors: List[ValidationError] = []
        emp_id = parse_employee_id(employee_id, errors)

        work_date = None
        if is_blank(date):
            errors.append(ValidationError("date required", field="date"))
        else:
            try:
                work_date = parse_date_field(date, "date", "invalid date format (YYYY-MM-DD expected)")
            except ValidationError as e:
                errors.append(e)

        new_in = new_out = None
        for value, field, label in ((clock_in, "clockIn", "clock-in"), (clock_out, "clockOut", "clock-out")):
            if is_blank(value):
                continue
            try:
                parsed = parse_time_field(value, field, f"invalid {label} time format (HH:MM expected)")
            except ValidationError as e:
                errors.append(e)
                continue
            if field == "clockIn":
                new_in = parsed
            else:
                new_out = parsed

        if errors:
            raise ValidationErrors(errors)

        self._require_employee(emp_id)

        existing = self._attendance.get_for_employee_and_date(emp_id, work_date)
        record = self._save(
            existing=existing,
            employee_id=emp_id,
            work_date=work_date,
            clock_in=new_in if new_in is not None else (existing.clock_in if existing else None),
            clock_out=new_out if new_out is not None else (existing.clock_out if existing else None),
            location=optional_text(location) or (existing.location if existing else DEFAULT_LOCATION),
            notes=optional_text(notes) if not is_blank(notes) else (existing.notes if existing else None),
        )
        logger.info(
            "Attendance %s for employee %s on %s -> %s",
            "updated" if existing else "recorded", emp_id, work_date, record.status.value,
        )
        return record, existing is None

    def clock_in(
        self,
        employee_id: int,
        *,
        location: Any,
        notes: Any = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        location = optional_text(location)
        if not location:
            raise ValidationError("location required", field="location")
        self._require_employee(employee_id)

        local = now_local(now).replace(tzinfo=None, microsecond=0)
        today = local.date()

        existing = self._attendance.get_for_employee_and_date(employee_id, today)
        if existing and existing.clock_in is not None:
            raise ValidationError("already clocked in today")

        last = self._attendance.get_last_clock_out_before(employee_id, today)
        if last and last.clock_out is not None:
            last_out = datetime.combine(last.work_date, last.clock_out)
            if last.clock_in is not None and last.clock_out < last.clock_in:
                last_out += timedelta(days=1)
            rest = local - last_out
            if rest < self._min_rest:
                remaining = self._min_rest - rest
                hours, rem = divmod(int(remaining.total_seconds()), 3600)
                raise ValidationError(
                    f"minimum rest of {int(self._min_rest.total_seconds() // 3600)} hours required "
                    f"since last clock-out ({hours}h {rem // 60}m remaining)"
                )

        return self._save(
            existing=existing,
            employee_id=employee_id,
            work_date=today,
            clock_in=local.time(),
            clock_out=None,
            location=location,
            notes=optional_text(notes) or (existing.notes if existing else None),
        )

    def clock_out(self, employee_id: int, *, notes: Any = None, now: datetime | None = None) -> AttendanceRecord:
        self._require_employee(employee_id)

        local = now_local(now).replace(tzinfo=None, microsecond=0)
        today = local.date()

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record or record.clock_in is None:
            raise ValidationError("no clock-in recorded today")
        if record.clock_out is not None:
            raise ValidationError("already clocked out today")

        worked = local - datetime.combine(today, record.clock_in)
        if worked < self._min_shift:
            raise ValidationError(
                f"minimum shift of {int(self._min_shift.total_seconds() // 60)} minutes required before clock-out"
            )

        return self._save(
            existing=record,
            employee_id=employee_id,
            work_date=today,
            clock_in=record.clock_in,
            clock_out=local.time(),
            location=record.location,
            notes=optional_text(notes) or record.notes,
        )

    def clear_events(self, employee_id: int, work_date: date) -> AttendanceRecord:
        """Drop both clock events for the day, leaving an absent record."""
        self._require_employee(employee_id)
        existing = self._attendance.get_for_employee_and_date(employee_id, work_date)
        record = self._save(
            existing=existing,
            employee_id=employee_id,
            work_date=work_date,
            clock_in=None,
            clock_out=None,
            location=existing.location if existing else DEFAULT_LOCATION,
            notes=existing.notes if existing else None,
        )
        logger.info("Attendance cleared for employee %s on %s", employee_id, work_date)
        return record

    def delete_record(self, employee_id: int, attendance_id: int) -> None:
        if not self._attendance.delete(employee_id=int(employee_id), attendance_id=int(attendance_id)):
            raise NotFoundError("attendance record not found or already deleted")
        logger.info("Attendance %s of employee %s deleted", attendance_id, employee_id)

    def list_attendance(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Any = None,
    ) -> Sequence[AttendanceRecord]:
        if start_date and end_date and end_date < start_date:
            raise ValidationError("end date cannot be before start date", field="endDate")
        wanted = parse_enum(AttendanceStatus, status, "status") if not is_blank(status) else None
        return self._attendance.list_range(
            start_date=start_date, end_date=end_date, employee_id=employee_id, status=wanted
        )

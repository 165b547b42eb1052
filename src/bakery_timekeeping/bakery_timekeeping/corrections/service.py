from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, List, Optional, Sequence, Tuple

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.service import AttendanceService
from ..common.datetime_utils import today_local
from ..common.validators import (
    is_blank,
    optional_text,
    parse_date_field,
    parse_employee_id,
    parse_enum,
    parse_time_field,
)
from ..core.constants import CORRECTION_WINDOW_DAYS
from ..core.enums import CorrectionStatus, CorrectionType, RequestStatus
from ..core.exceptions import NotFoundError, ValidationError, ValidationErrors
from ..employees.repository import EmployeeRepository
from .model import CorrectionRequest
from .repository import CorrectionRepository

logger = logging.getLogger(__name__)


class CorrectionService:
    """Attendance correction requests.

    A request flags the day's record as ``requested``. Approving it rewrites
    the record through AttendanceService so the status is derived again;
    rejecting it leaves the clock events alone.
    """

    def __init__(
        self,
        corrections: CorrectionRepository,
        attendance: AttendanceRepository,
        attendance_service: AttendanceService,
        employees: EmployeeRepository,
    ):
        self._corrections = corrections
        self._employees = employees
        self._attendance = attendance
        self._attendance_service = attendance_service

    def _get(self, request_id: int) -> CorrectionRequest:
        req = self._corrections.get_by_id(int(request_id))
        if not req:
            raise NotFoundError("correction request not found")
        return req

    def request_correction(
        self,
        *,
        employee_id: Any,
        date: Any,
        correction_type: Any,
        requested_time: Any = None,
        reason: Any = None,
        today: Optional[date] = None,
    ) -> CorrectionRequest:
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

        kind = None
        if is_blank(correction_type):
            errors.append(ValidationError("correction type required", field="type"))
        else:
            try:
                kind = parse_enum(CorrectionType, correction_type, "type")
            except ValidationError as e:
                errors.append(e)

        wall_clock = None
        if kind is not None and kind != CorrectionType.ABSENCE:
            if is_blank(requested_time):
                errors.append(ValidationError("time required", field="time"))
            else:
                try:
                    wall_clock = parse_time_field(
                        requested_time, "time", "invalid time format (HH:MM or HH:MM:SS expected)"
                    )
                except ValidationError as e:
                    errors.append(e)

        reason_text = optional_text(reason)
        if not reason_text:
            errors.append(ValidationError("reason required", field="reason"))

        if work_date is not None:
            today = today or today_local()
            if work_date > today:
                errors.append(ValidationError("cannot request corrections for future dates", field="date"))
            elif work_date < today - timedelta(days=CORRECTION_WINDOW_DAYS - 1):
                errors.append(
                    ValidationError(
                        f"can only request corrections for the last {CORRECTION_WINDOW_DAYS} days", field="date"
                    )
                )

        if errors:
            raise ValidationErrors(errors)

        if not self._employees.get_by_id(emp_id):
            raise NotFoundError("employee not found")

        record = self._attendance.get_for_employee_and_date(emp_id, work_date)
        if record is None:
            if kind != CorrectionType.ABSENCE:
                raise NotFoundError("no attendance record found for this date")
            # An absence claim for a day nobody recorded starts from an empty record.
            record, _ = self._attendance_service.record_event(employee_id=emp_id, date=work_date)

        self._attendance.set_correction_status(record.attendance_id, CorrectionStatus.REQUESTED)
        request_id = self._corrections.create(
            employee_id=emp_id,
            work_date=work_date,
            correction_type=kind,
            requested_time=wall_clock,
            reason=reason_text,
        )
        logger.info("Correction %s requested by employee %s: %s on %s", request_id, emp_id, kind.value, work_date)
        return self._get(request_id)

    def _claim(self, request_id: int, status: RequestStatus) -> CorrectionRequest:
        req = self._get(request_id)
        if req.status != RequestStatus.PENDING:
            raise ValidationError("correction request already decided")
        if not self._corrections.decide(request_id=req.request_id, status=status):
            raise ValidationError("correction request already decided")
        logger.info("Correction %s %s", req.request_id, status.value)
        return self._get(req.request_id)

    def approve_correction(self, request_id: int) -> Tuple[CorrectionRequest, AttendanceRecord]:
        req = self._claim(request_id, RequestStatus.APPROVED)

        if req.correction_type == CorrectionType.ABSENCE:
            record = self._attendance_service.clear_events(req.employee_id, req.work_date)
        elif req.correction_type == CorrectionType.CLOCK_IN:
            record, _ = self._attendance_service.record_event(
                employee_id=req.employee_id, date=req.work_date, clock_in=req.requested_time
            )
        else:
            record, _ = self._attendance_service.record_event(
                employee_id=req.employee_id, date=req.work_date, clock_out=req.requested_time
            )

        self._attendance.set_correction_status(record.attendance_id, CorrectionStatus.APPROVED)
        return req, self._attendance.get_for_employee_and_date(req.employee_id, req.work_date) or record

    def reject_correction(self, request_id: int) -> CorrectionRequest:
        req = self._claim(request_id, RequestStatus.REJECTED)
        record = self._attendance.get_for_employee_and_date(req.employee_id, req.work_date)
        if record:
            self._attendance.set_correction_status(record.attendance_id, CorrectionStatus.REJECTED)
        return req

    def list_corrections(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Any = None,
    ) -> Sequence[CorrectionRequest]:
        return self._corrections.list_requests(
            employee_id=employee_id,
            status=parse_enum(RequestStatus, status, "status") if not is_blank(status) else None,
        )

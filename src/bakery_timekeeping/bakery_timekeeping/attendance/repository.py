from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, CorrectionStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_last_clock_out_before(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        """Most recent earlier record that has a clock-out."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in: Optional[time],
        clock_out: Optional[time],
        status: AttendanceStatus,
        location: str,
        notes: Optional[str],
        hours_worked: float,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        attendance_id: int,
        clock_in: Optional[time],
        clock_out: Optional[time],
        status: AttendanceStatus,
        location: str,
        notes: Optional[str],
        hours_worked: float,
    ) -> bool:
        raise NotImplementedError

    def set_correction_status(self, attendance_id: int, status: CorrectionStatus) -> bool:
        raise NotImplementedError

    def delete(self, *, employee_id: int, attendance_id: int) -> bool:
        """Remove one record of the employee. False when no such record exists."""

        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

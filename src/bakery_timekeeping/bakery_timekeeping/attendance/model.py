from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.constants import DEFAULT_LOCATION
from ..core.enums import AttendanceStatus, CorrectionStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's clock events for one business-local day."""

    attendance_id: int
    employee_id: int
    work_date: date
    clock_in: Optional[time]
    clock_out: Optional[time]
    status: AttendanceStatus
    location: str = DEFAULT_LOCATION
    notes: Optional[str] = None
    hours_worked: float = 0.0
    correction_status: Optional[CorrectionStatus] = None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports/exports."""

    employee_id: int
    full_name: str
    work_date: date
    clock_in: Optional[time]
    clock_out: Optional[time]
    status: AttendanceStatus
    hours_worked: float = 0.0
    notes: Optional[str] = None

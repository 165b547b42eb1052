from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .corrections.mysql_correction_repository import MySQLCorrectionRepository
from .corrections.repository import CorrectionRepository
from .corrections.service import CorrectionService
from .core.constants import DEFAULT_LATE_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .reports.service import AttendanceReportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    shifts_repo: ShiftRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    corrections_repo: CorrectionRepository

    shift_service: ShiftService
    attendance_service: AttendanceService
    leave_service: LeaveService
    report_service: AttendanceReportService
    correction_service: CorrectionService


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    shifts_repo: ShiftRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    corrections_repo: CorrectionRepository,
    late_threshold: time = DEFAULT_LATE_THRESHOLD,
) -> Container:
    """Build services on top of the given repositories (MySQL or in-memory)."""
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        strategy_factory=AttendanceStrategyFactory(late_threshold=late_threshold),
    )
    return Container(
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        corrections_repo=corrections_repo,
        shift_service=ShiftService(shifts_repo, employees_repo),
        attendance_service=attendance_service,
        leave_service=LeaveService(leaves_repo, employees_repo),
        report_service=AttendanceReportService(attendance_repo),
        correction_service=CorrectionService(corrections_repo, attendance_repo, attendance_service, employees_repo),
    )


def build_container(*, db_config: dict, late_threshold: time = DEFAULT_LATE_THRESHOLD) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        corrections_repo=MySQLCorrectionRepository(conn),
        late_threshold=late_threshold,
    )

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import today_local
from ..common.validators import is_blank, optional_text, parse_employee_id, parse_enum
from ..core.enums import RequestStatus, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .calculator import compute_leave_interval
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    def _get(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("leave request not found")
        return leave

    def create_leave(
        self,
        *,
        employee_id: Any,
        leave_type: Any,
        start_date: Any,
        end_date: Any,
        notes: Any = None,
        today: Optional[date] = None,
    ) -> LeaveRequest:
        emp_id = parse_employee_id(employee_id)
        if is_blank(leave_type):
            raise ValidationError("leave type required", field="type")
        kind = parse_enum(LeaveType, leave_type, "type")
        interval = compute_leave_interval(start_date, end_date, today=today or today_local())

        if not self._employees.get_by_id(emp_id):
            raise NotFoundError("employee not found")

        if self._leaves.find_overlapping(
            employee_id=emp_id, start_date=interval.start_date, end_date=interval.end_date
        ):
            raise ValidationError("existing leave overlaps with this period", field="startDate")

        leave_id = self._leaves.create(
            employee_id=emp_id,
            leave_type=kind,
            start_date=interval.start_date,
            end_date=interval.end_date,
            days=interval.days,
            notes=optional_text(notes),
        )
        logger.info(
            "Leave %s requested by employee %s: %s %s..%s (%d days)",
            leave_id, emp_id, kind.value, interval.start_date, interval.end_date, interval.days,
        )
        return self._get(leave_id)

    def _decide(self, leave_id: int, status: RequestStatus) -> LeaveRequest:
        leave = self._get(leave_id)
        if leave.status != RequestStatus.PENDING:
            raise ValidationError("leave request already decided")
        if not self._leaves.decide(leave_id=leave.leave_id, status=status):
            raise ValidationError("leave request already decided")
        logger.info("Leave %s %s", leave.leave_id, status.value)
        return self._get(leave.leave_id)

    def approve_leave(self, leave_id: int) -> LeaveRequest:
        return self._decide(leave_id, RequestStatus.APPROVED)

    def reject_leave(self, leave_id: int) -> LeaveRequest:
        return self._decide(leave_id, RequestStatus.REJECTED)

    def cancel_leave(self, employee_id: int, leave_id: int, *, today: Optional[date] = None) -> None:
        """Employees may withdraw a pending request that has not started yet."""
        leave = self._get(leave_id)
        if leave.employee_id != int(employee_id):
            raise NotFoundError("leave request not found")
        if leave.status != RequestStatus.PENDING:
            raise ValidationError("only pending leave requests can be cancelled")
        if leave.start_date <= (today or today_local()):
            raise ValidationError("cannot cancel a leave that has already started")
        if not self._leaves.delete_pending(leave.leave_id):
            raise ValidationError("only pending leave requests can be cancelled")
        logger.info("Leave %s cancelled by employee %s", leave.leave_id, employee_id)

    def list_leaves(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Any = None,
        leave_type: Any = None,
    ) -> Sequence[LeaveRequest]:
        return self._leaves.list_leaves(
            employee_id=employee_id,
            status=parse_enum(RequestStatus, status, "status") if not is_blank(status) else None,
            leave_type=parse_enum(LeaveType, leave_type, "type") if not is_blank(leave_type) else None,
        )

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: an employee's leave request."""

    leave_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days: int
    status: RequestStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import CorrectionType, RequestStatus


@dataclass(frozen=True)
class CorrectionRequest:
    """An employee's request to fix one day's attendance."""

    request_id: int
    employee_id: int
    work_date: date
    correction_type: CorrectionType
    requested_time: Optional[time]
    reason: str
    status: RequestStatus
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None

from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """On-time clock-in, clock-out recorded."""

    def decide(self, *, clock_in: Optional[time], clock_out: Optional[time], late_threshold: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

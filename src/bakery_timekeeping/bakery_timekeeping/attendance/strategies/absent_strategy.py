from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No clock-in recorded for the day."""

    def decide(self, *, clock_in: Optional[time], clock_out: Optional[time], late_threshold: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)

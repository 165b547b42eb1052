from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class InProgressStrategy(AttendanceStrategy):
    """Clocked in, not yet clocked out. Lateness is not reported until clock-out."""

    def decide(self, *, clock_in: Optional[time], clock_out: Optional[time], late_threshold: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.IN_PROGRESS)

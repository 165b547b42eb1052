from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


def _seconds(t: time) -> int:
    return t.hour * 3600 + t.minute * 60 + t.second


class LateStrategy(AttendanceStrategy):
    """Completed day with a clock-in after the threshold."""

    def decide(self, *, clock_in: Optional[time], clock_out: Optional[time], late_threshold: time) -> StatusDecision:
        late_by = max(_seconds(clock_in) - _seconds(late_threshold), 0) if clock_in else 0
        return StatusDecision(status=AttendanceStatus.LATE, minutes_late=-(-late_by // 60))

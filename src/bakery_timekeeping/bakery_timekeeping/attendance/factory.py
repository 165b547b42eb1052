from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.constants import DEFAULT_LATE_THRESHOLD
from ..core.enums import AttendanceStatus
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy, StatusDecision
from .strategies.in_progress_strategy import InProgressStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Rules are checked in order; the first match wins:
    no clock-in -> absent, no clock-out -> in-progress,
    clock-in after the threshold -> late, otherwise present.
    """

    late_threshold: time = DEFAULT_LATE_THRESHOLD

    def for_events(self, *, clock_in: Optional[time], clock_out: Optional[time]) -> AttendanceStrategy:
        if clock_in is None:
            return AbsentStrategy()
        if clock_out is None:
            return InProgressStrategy()
        if clock_in > self.late_threshold:
            return LateStrategy()
        return PresentStrategy()

    def classify(self, *, clock_in: Optional[time], clock_out: Optional[time]) -> StatusDecision:
        strategy = self.for_events(clock_in=clock_in, clock_out=clock_out)
        return strategy.decide(clock_in=clock_in, clock_out=clock_out, late_threshold=self.late_threshold)


def classify_attendance(
    clock_in: Optional[time],
    clock_out: Optional[time],
    late_threshold: time = DEFAULT_LATE_THRESHOLD,
) -> AttendanceStatus:
    """Pure status derivation for one employee-day."""
    return AttendanceStrategyFactory(late_threshold=late_threshold).classify(
        clock_in=clock_in, clock_out=clock_out
    ).status

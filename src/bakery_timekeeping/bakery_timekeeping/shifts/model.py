from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ShiftStatus


@dataclass(frozen=True)
class NewShift:
    """A validated shift not yet persisted."""

    employee_id: int
    start_instant: datetime
    end_instant: datetime
    location: str
    status: ShiftStatus = ShiftStatus.SCHEDULED
    notes: Optional[str] = None


@dataclass(frozen=True)
class ShiftInterval:
    """Domain entity: a scheduled shift as an absolute UTC interval."""

    shift_id: int
    employee_id: int
    start_instant: datetime
    end_instant: datetime
    location: str
    status: ShiftStatus
    notes: Optional[str] = None

    @property
    def duration_hours(self) -> float:
        return round((self.end_instant - self.start_instant).total_seconds() / 3600, 2)


@dataclass(frozen=True)
class LegacyShiftRow:
    """Raw shift row as stored, in either legacy or instant form."""

    shift_id: int
    employee_id: int
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    start_instant: Optional[datetime] = None
    end_instant: Optional[datetime] = None

    @property
    def is_migrated(self) -> bool:
        return self.start_instant is not None and self.end_instant is not None

    def missing_legacy_fields(self) -> list[str]:
        fields = ("start_date", "end_date", "start_time", "end_time")
        return [f for f in fields if not (getattr(self, f) or "").strip()]

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import ShiftStatus
from .model import LegacyShiftRow, NewShift, ShiftInterval


class ShiftRepository(Protocol):
    def create(self, shift: NewShift) -> int:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[ShiftInterval]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        statuses: Optional[Iterable[ShiftStatus]] = None,
    ) -> Sequence[ShiftInterval]:
        """Shifts whose start falls in [start, end), ordered by start."""

        raise NotImplementedError

    def update_status(self, shift_id: int, status: ShiftStatus) -> bool:
        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        raise NotImplementedError

    # Backfill support
    def list_raw(self) -> Sequence[LegacyShiftRow]:
        raise NotImplementedError

    def save_instants(
        self,
        shift_id: int,
        *,
        start_instant: datetime,
        end_instant: datetime,
        clear_legacy: bool = True,
    ) -> bool:
        """Write both instants (and optionally null the legacy fields) in one statement."""

        raise NotImplementedError

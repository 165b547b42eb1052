from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import CorrectionType, RequestStatus
from .model import CorrectionRequest


class CorrectionRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        correction_type: CorrectionType,
        requested_time: Optional[time],
        reason: str,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[CorrectionRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[CorrectionRequest]:
        raise NotImplementedError

    def decide(self, *, request_id: int, status: RequestStatus) -> bool:
        """Set a final status. Only affects requests that are still pending."""

        raise NotImplementedError

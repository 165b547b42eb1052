from __future__ import annotations

from enum import Enum


class ShiftStatus(str, Enum):
    """Lifecycle of a scheduled shift."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Allowed status changes; completed and cancelled are terminal.
SHIFT_TRANSITIONS: dict[ShiftStatus, frozenset[ShiftStatus]] = {
    ShiftStatus.SCHEDULED: frozenset({ShiftStatus.IN_PROGRESS, ShiftStatus.CANCELLED}),
    ShiftStatus.IN_PROGRESS: frozenset({ShiftStatus.COMPLETED, ShiftStatus.CANCELLED}),
    ShiftStatus.COMPLETED: frozenset(),
    ShiftStatus.CANCELLED: frozenset(),
}


class AttendanceStatus(str, Enum):
    """Derived attendance label stored alongside the clock events."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    IN_PROGRESS = "in-progress"


class LeaveType(str, Enum):
    VACATION = "vacation"
    SICK = "sick"
    PERSONAL = "personal"
    EMERGENCY = "emergency"


class RequestStatus(str, Enum):
    """Approval flow for leave and correction requests: pending until an admin decides."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CorrectionType(str, Enum):
    CLOCK_IN = "clock-in"
    CLOCK_OUT = "clock-out"
    ABSENCE = "absence"


class CorrectionStatus(str, Enum):
    """Marker on an attendance record that has a correction request against it."""

    REQUESTED = "requested"
    APPROVED = "approved"
    REJECTED = "rejected"

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Read-only view of an employee owned by the staff directory."""

    employee_id: int
    full_name: str
    position: Optional[str] = None
    is_active: bool = True

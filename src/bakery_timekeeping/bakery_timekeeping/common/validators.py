from __future__ import annotations

from datetime import date, time
from enum import Enum
from typing import Any, List, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_wall_clock

E = TypeVar("E", bound=Enum)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def optional_text(value: Any) -> Optional[str]:
    if is_blank(value):
        return None
    return str(value).strip()


def parse_date_field(value: Any, field_name: str, message: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError(message, field=field_name)


def parse_time_field(value: Any, field_name: str, message: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return parse_wall_clock(str(value))
    except ValueError:
        raise ValidationError(message, field=field_name)


def parse_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}", field=field_name)


def _as_int(value: Any) -> Optional[int]:
    # JSON true/false and fractional numbers are not ids
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return None


def parse_employee_id(value: Any, errors: Optional[List[ValidationError]] = None) -> Optional[int]:
    """Coerce an employee reference to int.

    When ``errors`` is given, failures are appended instead of raised.
    """
    try:
        if is_blank(value):
            raise ValidationError("employee required", field="employeeId")
        employee_id = _as_int(value)
        if employee_id is None or employee_id <= 0:
            raise ValidationError("invalid employee id", field="employeeId")
        return employee_id
    except ValidationError as e:
        if errors is None:
            raise
        errors.append(e)
        return None

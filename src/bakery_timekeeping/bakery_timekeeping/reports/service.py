from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_wall_clock
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


REPORT_FIELDS = [
    "work_date",
    "employee_id",
    "full_name",
    "clock_in",
    "clock_out",
    "status",
    "hours_worked",
    "notes",
]


class AttendanceReportService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> ReportData:
        if end < start:
            raise ValidationError("end date cannot be before start date", field="endDate")

        query_rows = self._attendance.get_report_rows(start_date=start, end_date=end, employee_id=employee_id)

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            out_rows.append(
                {
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "employee_id": r.employee_id,
                    "full_name": r.full_name,
                    "clock_in": format_wall_clock(r.clock_in) or "-",
                    "clock_out": format_wall_clock(r.clock_out) or "-",
                    "status": r.status.value,
                    "hours_worked": f"{r.hours_worked:.2f}",
                    "notes": r.notes or "",
                }
            )

            s = summary_map.get(r.employee_id)
            if not s:
                s = {
                    "employee_id": r.employee_id,
                    "full_name": r.full_name,
                    "total_hours": 0.0,
                    "days_present": 0,
                    "days_late": 0,
                    "days_absent": 0,
                }
                summary_map[r.employee_id] = s
            s["total_hours"] += r.hours_worked
            if r.status == AttendanceStatus.PRESENT:
                s["days_present"] += 1
            elif r.status == AttendanceStatus.LATE:
                s["days_late"] += 1
            elif r.status == AttendanceStatus.ABSENT:
                s["days_absent"] += 1

        summary = []
        for s in summary_map.values():
            s["total_hours"] = round(s["total_hours"], 2)
            summary.append(s)

        summary.sort(key=lambda x: x["total_hours"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)

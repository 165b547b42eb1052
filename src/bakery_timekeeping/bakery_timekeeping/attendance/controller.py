from __future__ import annotations

import csv
import io
from datetime import timedelta

from flask import Flask, request

from ..common.datetime_utils import format_wall_clock, today_local
from ..common.http import json_endpoint, json_ok, query_date, query_int, request_payload
from ..container import Container
from ..core.constants import DEFAULT_REPORT_DAYS
from ..reports.service import REPORT_FIELDS
from .model import AttendanceRecord


def attendance_to_json(record: AttendanceRecord) -> dict:
    return {
        "id": record.attendance_id,
        "employeeId": record.employee_id,
        "date": record.work_date.isoformat(),
        "clockIn": format_wall_clock(record.clock_in),
        "clockOut": format_wall_clock(record.clock_out),
        "status": record.status.value,
        "location": record.location,
        "notes": record.notes,
        "hoursWorked": record.hours_worked,
        "correctionStatus": record.correction_status.value if record.correction_status else None,
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _report_range():
        today = today_local()
        start = query_date("startDate") or (today - timedelta(days=DEFAULT_REPORT_DAYS - 1))
        end = query_date("endDate") or today
        return start, end

    def _write_report_csv(*, data, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_record")
    @json_endpoint
    def api_attendance_record():
        payload = request_payload()
        record, created = service.record_event(
            employee_id=payload.get("employeeId"),
            date=payload.get("date"),
            clock_in=payload.get("clockIn"),
            clock_out=payload.get("clockOut"),
            notes=payload.get("notes"),
            location=payload.get("location"),
        )
        return json_ok(attendance_to_json(record), 201 if created else 200)

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    @json_endpoint
    def api_attendance_list():
        records = service.list_attendance(
            start_date=query_date("startDate"),
            end_date=query_date("endDate"),
            employee_id=query_int("employeeId"),
            status=request.args.get("status"),
        )
        return json_ok([attendance_to_json(r) for r in records])

    @app.route(
        "/api/employees/<int:employee_id>/attendance/clock-in",
        methods=["POST"],
        endpoint="api_attendance_clock_in",
    )
    @json_endpoint
    def api_attendance_clock_in(employee_id: int):
        payload = request_payload()
        record = service.clock_in(employee_id, location=payload.get("location"), notes=payload.get("notes"))
        return json_ok(attendance_to_json(record), 201, message="clocked in")

    @app.route(
        "/api/employees/<int:employee_id>/attendance/clock-out",
        methods=["POST"],
        endpoint="api_attendance_clock_out",
    )
    @json_endpoint
    def api_attendance_clock_out(employee_id: int):
        record = service.clock_out(employee_id, notes=request_payload().get("notes"))
        return json_ok(attendance_to_json(record), message="clocked out")

    @app.route(
        "/api/employees/<int:employee_id>/attendance/<int:attendance_id>",
        methods=["DELETE"],
        endpoint="api_attendance_delete",
    )
    @json_endpoint
    def api_attendance_delete(employee_id: int, attendance_id: int):
        service.delete_record(employee_id, attendance_id)
        return json_ok(None, message="attendance record deleted")

    @app.route("/api/attendance/report", methods=["GET"], endpoint="api_attendance_report")
    @json_endpoint
    def api_attendance_report():
        start, end = _report_range()
        data = container.report_service.build_attendance_report(
            start=start, end=end, employee_id=query_int("employeeId")
        )
        return json_ok({"rows": data.rows, "summary": data.summary}, startDate=start.isoformat(), endDate=end.isoformat())

    @app.route("/api/attendance/report.csv", methods=["GET"], endpoint="api_attendance_report_csv")
    @json_endpoint
    def api_attendance_report_csv():
        start, end = _report_range()
        data = container.report_service.build_attendance_report(
            start=start, end=end, employee_id=query_int("employeeId")
        )
        filename = f"attendance_report_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(data=data, filename=filename)

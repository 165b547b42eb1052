from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import format_instant, format_wall_clock, to_local_display
from ..common.http import json_endpoint, json_ok, query_date, query_int, request_payload
from ..container import Container
from .model import ShiftInterval


def shift_to_json(shift: ShiftInterval) -> dict:
    start_day, start_clock = to_local_display(shift.start_instant)
    end_day, end_clock = to_local_display(shift.end_instant)
    return {
        "id": shift.shift_id,
        "employeeId": shift.employee_id,
        "startInstant": format_instant(shift.start_instant),
        "endInstant": format_instant(shift.end_instant),
        "date": start_day.isoformat(),
        "startTime": format_wall_clock(start_clock),
        "endDate": end_day.isoformat(),
        "endTime": format_wall_clock(end_clock),
        "durationHours": shift.duration_hours,
        "location": shift.location,
        "status": shift.status.value,
        "notes": shift.notes,
    }


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    def _status_filter() -> list[str]:
        raw = request.args.get("status") or ""
        return [s for s in (part.strip() for part in raw.split(",")) if s]

    @app.route("/api/shifts", methods=["POST"], endpoint="api_shifts_create")
    @json_endpoint
    def api_shifts_create():
        payload = request_payload()
        shift = service.create_shift(
            employee_id=payload.get("employeeId"),
            date=payload.get("date"),
            start_time=payload.get("startTime"),
            end_time=payload.get("endTime"),
            end_date=payload.get("endDate"),
            location=payload.get("location"),
            notes=payload.get("notes"),
        )
        return json_ok(shift_to_json(shift), 201)

    @app.route("/api/shifts", methods=["GET"], endpoint="api_shifts_list")
    @json_endpoint
    def api_shifts_list():
        shifts = service.list_shifts(
            employee_id=query_int("employeeId"),
            start_date=query_date("startDate"),
            end_date=query_date("endDate"),
            statuses=_status_filter(),
        )
        return json_ok([shift_to_json(s) for s in shifts])

    @app.route("/api/employees/<int:employee_id>/shifts", methods=["GET"], endpoint="api_employee_shifts")
    @json_endpoint
    def api_employee_shifts(employee_id: int):
        shifts = service.list_shifts(
            employee_id=employee_id,
            start_date=query_date("startDate"),
            end_date=query_date("endDate"),
            statuses=_status_filter(),
        )
        return json_ok([shift_to_json(s) for s in shifts])

    @app.route("/api/shifts/<int:shift_id>", methods=["GET"], endpoint="api_shifts_get")
    @json_endpoint
    def api_shifts_get(shift_id: int):
        return json_ok(shift_to_json(service.get_shift(shift_id)))

    @app.route("/api/shifts/<int:shift_id>/status", methods=["PATCH"], endpoint="api_shifts_status")
    @json_endpoint
    def api_shifts_status(shift_id: int):
        shift = service.change_status(shift_id, request_payload().get("status"))
        return json_ok(shift_to_json(shift))

    @app.route("/api/shifts/<int:shift_id>", methods=["DELETE"], endpoint="api_shifts_delete")
    @json_endpoint
    def api_shifts_delete(shift_id: int):
        service.delete_shift(shift_id)
        return json_ok(None, message="shift deleted")

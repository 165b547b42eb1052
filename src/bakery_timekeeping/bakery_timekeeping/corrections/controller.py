from __future__ import annotations

from flask import Flask, request

from ..attendance.controller import attendance_to_json
from ..common.datetime_utils import format_wall_clock
from ..common.http import json_endpoint, json_ok, query_int, request_payload
from ..container import Container
from .model import CorrectionRequest


def correction_to_json(req: CorrectionRequest) -> dict:
    return {
        "id": req.request_id,
        "employeeId": req.employee_id,
        "date": req.work_date.isoformat(),
        "type": req.correction_type.value,
        "time": format_wall_clock(req.requested_time),
        "reason": req.reason,
        "status": req.status.value,
        "createdAt": req.created_at.isoformat() if req.created_at else None,
        "decidedAt": req.decided_at.isoformat() if req.decided_at else None,
    }


def register(app: Flask, container: Container) -> None:
    service = container.correction_service

    @app.route(
        "/api/employees/<int:employee_id>/attendance/corrections",
        methods=["POST"],
        endpoint="api_corrections_create",
    )
    @json_endpoint
    def api_corrections_create(employee_id: int):
        payload = request_payload()
        req = service.request_correction(
            employee_id=employee_id,
            date=payload.get("date"),
            correction_type=payload.get("type"),
            requested_time=payload.get("time"),
            reason=payload.get("reason"),
        )
        return json_ok(correction_to_json(req), 201, message="correction request submitted")

    @app.route(
        "/api/employees/<int:employee_id>/attendance/corrections",
        methods=["GET"],
        endpoint="api_employee_corrections",
    )
    @json_endpoint
    def api_employee_corrections(employee_id: int):
        reqs = service.list_corrections(employee_id=employee_id, status=request.args.get("status"))
        return json_ok([correction_to_json(r) for r in reqs])

    @app.route("/api/attendance/corrections", methods=["GET"], endpoint="api_corrections_list")
    @json_endpoint
    def api_corrections_list():
        reqs = service.list_corrections(employee_id=query_int("employeeId"), status=request.args.get("status"))
        return json_ok([correction_to_json(r) for r in reqs])

    @app.route(
        "/api/attendance/corrections/<int:request_id>/approve",
        methods=["POST"],
        endpoint="api_corrections_approve",
    )
    @json_endpoint
    def api_corrections_approve(request_id: int):
        req, record = service.approve_correction(request_id)
        return json_ok(correction_to_json(req), attendance=attendance_to_json(record))

    @app.route(
        "/api/attendance/corrections/<int:request_id>/reject",
        methods=["POST"],
        endpoint="api_corrections_reject",
    )
    @json_endpoint
    def api_corrections_reject(request_id: int):
        return json_ok(correction_to_json(service.reject_correction(request_id)))

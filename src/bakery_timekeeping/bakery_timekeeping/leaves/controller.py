from __future__ import annotations

from flask import Flask, request

from ..common.http import json_endpoint, json_ok, query_int, request_payload
from ..container import Container
from .model import LeaveRequest


def leave_to_json(leave: LeaveRequest) -> dict:
    return {
        "id": leave.leave_id,
        "employeeId": leave.employee_id,
        "type": leave.leave_type.value,
        "startDate": leave.start_date.isoformat(),
        "endDate": leave.end_date.isoformat(),
        "days": leave.days,
        "status": leave.status.value,
        "notes": leave.notes,
        "createdAt": leave.created_at.isoformat() if leave.created_at else None,
        "decidedAt": leave.decided_at.isoformat() if leave.decided_at else None,
    }


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/employees/<int:employee_id>/leaves", methods=["POST"], endpoint="api_leaves_create")
    @json_endpoint
    def api_leaves_create(employee_id: int):
        payload = request_payload()
        leave = service.create_leave(
            employee_id=employee_id,
            leave_type=payload.get("type"),
            start_date=payload.get("startDate"),
            end_date=payload.get("endDate"),
            notes=payload.get("notes"),
        )
        return json_ok(leave_to_json(leave), 201)

    @app.route("/api/employees/<int:employee_id>/leaves", methods=["GET"], endpoint="api_employee_leaves")
    @json_endpoint
    def api_employee_leaves(employee_id: int):
        leaves = service.list_leaves(
            employee_id=employee_id,
            status=request.args.get("status"),
            leave_type=request.args.get("type"),
        )
        return json_ok([leave_to_json(lv) for lv in leaves])

    @app.route("/api/leaves", methods=["GET"], endpoint="api_leaves_list")
    @json_endpoint
    def api_leaves_list():
        leaves = service.list_leaves(
            employee_id=query_int("employeeId"),
            status=request.args.get("status"),
            leave_type=request.args.get("type"),
        )
        return json_ok([leave_to_json(lv) for lv in leaves])

    @app.route("/api/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="api_leaves_approve")
    @json_endpoint
    def api_leaves_approve(leave_id: int):
        return json_ok(leave_to_json(service.approve_leave(leave_id)))

    @app.route("/api/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="api_leaves_reject")
    @json_endpoint
    def api_leaves_reject(leave_id: int):
        return json_ok(leave_to_json(service.reject_leave(leave_id)))

    @app.route(
        "/api/employees/<int:employee_id>/leaves/<int:leave_id>",
        methods=["DELETE"],
        endpoint="api_leaves_cancel",
    )
    @json_endpoint
    def api_leaves_cancel(employee_id: int, leave_id: int):
        service.cancel_leave(employee_id, leave_id)
        return json_ok(None, message="leave request cancelled")

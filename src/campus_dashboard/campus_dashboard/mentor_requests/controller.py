from __future__ import annotations

from flask import Flask, request, session

from ..common.auth import admin_required, student_required
from ..common.responses import error_response, ok, serialize
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .panel import ACTION_SUCCESS_MESSAGES


def _parse_status(value: str):
    v = (value or "").strip().lower()
    if not v:
        return None
    try:
        return RequestStatus(v)
    except ValueError:
        raise ValidationError(f"Unknown status: {value}")


def register(app: Flask, container: Container) -> None:
    service = container.mentor_request_service

    @app.route("/api/mentor-requests", methods=["POST"], endpoint="create_mentor_request")
    @student_required
    def create_mentor_request():
        body = request.get_json(silent=True) or {}
        try:
            student = container.user_service.get_profile(session["user_id"])
            request_id = service.create_request(
                student_id=student.user_id,
                requested_mentor_id=body.get("requested_mentor_id") or "",
                current_mentor_id=student.mentor_id or None,
                reason=body.get("reason"),
            )
            return ok({"request_id": request_id, "message": "Mentor change request submitted"}, 201)
        except Exception as e:
            return error_response(e, "Failed to submit request")

    @app.route("/api/admin/mentor-requests", methods=["GET"], endpoint="list_mentor_requests")
    @admin_required
    def list_mentor_requests():
        try:
            status = _parse_status(request.args.get("status", RequestStatus.PENDING.value))
            return ok(serialize(list(service.list_requests(status=status))))
        except Exception as e:
            return error_response(e, "Failed to load requests")

    def _review(action: str, request_id: str):
        body = request.get_json(silent=True) or {}
        decide = service.approve if action == "approve" else service.reject
        try:
            decide(request_id=request_id, admin_id=session["user_id"], notes=body.get("notes"))
            return ok({"request_id": request_id, "message": ACTION_SUCCESS_MESSAGES[action]})
        except Exception as e:
            return error_response(e, f"Failed to {action} request")

    @app.route("/api/admin/mentor-requests/<request_id>/approve", methods=["POST"], endpoint="approve_mentor_request")
    @admin_required
    def approve_mentor_request(request_id: str):
        return _review("approve", request_id)

    @app.route("/api/admin/mentor-requests/<request_id>/reject", methods=["POST"], endpoint="reject_mentor_request")
    @admin_required
    def reject_mentor_request(request_id: str):
        return _review("reject", request_id)

    @app.route("/api/admin/mentor-requests/unreconciled", methods=["GET"], endpoint="unreconciled_mentor_requests")
    @admin_required
    def unreconciled_mentor_requests():
        try:
            return ok(serialize(service.find_unreconciled()))
        except Exception as e:
            return error_response(e, "Failed to check requests")

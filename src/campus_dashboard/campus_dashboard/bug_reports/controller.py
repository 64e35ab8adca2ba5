from __future__ import annotations

from flask import Flask, request, session

from ..common.auth import admin_required
from ..common.responses import error_response, ok, serialize
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.bug_report_service

    @app.route("/api/bug-reports", methods=["POST"], endpoint="submit_bug_report")
    def submit_bug_report():
        body = request.get_json(silent=True) or {}
        try:
            report_id = service.submit(
                description=body.get("description") or "",
                console_logs=body.get("console_logs") or "",
                user_id=session.get("user_id"),
                user_name=session.get("name"),
                user_email=body.get("email"),
            )
            return ok({"report_id": report_id}, 201)
        except Exception as e:
            return error_response(e, "Failed to submit bug report")

    @app.route("/api/admin/bug-reports", methods=["GET"], endpoint="list_bug_reports")
    @admin_required
    def list_bug_reports():
        try:
            return ok(serialize(list(service.list_all())))
        except Exception as e:
            return error_response(e, "Failed to fetch bug reports")

    @app.route("/api/admin/bug-reports/<report_id>/review", methods=["POST"], endpoint="review_bug_report")
    @admin_required
    def review_bug_report(report_id: str):
        try:
            service.mark_reviewed(report_id)
            return ok({"report_id": report_id})
        except Exception as e:
            return error_response(e, "Failed to update report status")

    @app.route("/api/admin/bug-reports/unreviewed-count", methods=["GET"], endpoint="unreviewed_bug_reports")
    @admin_required
    def unreviewed_bug_reports():
        return ok({"count": service.unreviewed_count()})

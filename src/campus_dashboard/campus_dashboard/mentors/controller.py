from __future__ import annotations

from flask import Flask, request

from ..common.auth import login_required
from ..common.responses import error_response, ok, serialize
from ..core.constants import MENTOR_LIST_BATCH_SIZE
from ..core.exceptions import ValidationError
from ..container import Container
from .model import MentorFilters
from .service import load_more


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name, "")
    if raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/mentors", methods=["GET"], endpoint="list_mentors")
    @login_required
    def list_mentors():
        try:
            filters = MentorFilters(
                campus=request.args.get("campus") or None,
                house=request.args.get("house") or None,
                phase=request.args.get("phase") or None,
            )
            offset = _int_arg("offset", 0)
            limit = _int_arg("limit", MENTOR_LIST_BATCH_SIZE)

            mentors = container.mentor_capacity_service.list_mentors_with_capacity(filters)
            page = load_more(mentors, offset, limit)
            return ok(
                {
                    "items": serialize(page),
                    "total": len(mentors),
                    "has_more": offset + len(page) < len(mentors),
                }
            )
        except Exception as e:
            return error_response(e, "Failed to load mentors")

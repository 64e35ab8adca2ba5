from __future__ import annotations

import logging

from firebase_admin import auth as admin_auth
from flask import Flask, request, session

from ..common.auth import login_required
from ..common.responses import error_response, ok, serialize
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/session", methods=["POST"], endpoint="create_session")
    def create_session():
        body = request.get_json(silent=True) or {}
        try:
            id_token = (body.get("id_token") or "").strip()
            if not id_token:
                raise ValidationError("id_token is required")
            try:
                claims = admin_auth.verify_id_token(id_token)
            except (ValueError, admin_auth.InvalidIdTokenError, admin_auth.ExpiredIdTokenError) as e:
                raise AuthorizationError("Invalid or expired sign-in token") from e

            user = container.user_service.get_profile(claims["uid"])
            session.clear()
            session["user_id"] = user.user_id
            session["name"] = user.name
            session["role"] = user.role.value
            logger.info("user %s signed in as %s", user.user_id, user.role.value)
            return ok(serialize(user))
        except Exception as e:
            return error_response(e, "Sign-in failed")

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        try:
            return ok(serialize(container.user_service.get_profile(session["user_id"])))
        except Exception as e:
            return error_response(e, "Failed to load profile")

    @app.route("/api/me", methods=["PATCH"], endpoint="update_me")
    @login_required
    def update_me():
        body = request.get_json(silent=True) or {}
        try:
            user = container.user_service.update_profile(
                session["user_id"],
                name=body.get("name"),
                campus=body.get("campus"),
                house=body.get("house"),
                phase=body.get("phase"),
            )
            session["name"] = user.name
            return ok(serialize(user))
        except Exception as e:
            return error_response(e, "Failed to update profile")

from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"ok": False, "error": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def role_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"ok": False, "error": "Please sign in to continue"}), 401
            if session.get("role") not in allowed:
                return jsonify({"ok": False, "error": "You do not have permission"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
student_required = role_required(Role.STUDENT)

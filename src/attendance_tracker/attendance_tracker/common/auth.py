from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import AccessDenied


def current_user_id() -> int:
    return int(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Access Denied"}), 401
        return view(*args, **kwargs)

    return wrapper


def manager_required(view):
    """Allow only the manager role (cross-employee reports and exports)."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Access Denied"}), 401
        if session.get("role") != Role.MANAGER.value:
            raise AccessDenied("Access Denied")
        return view(*args, **kwargs)

    return wrapper

from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.auth import current_user_id, login_required, manager_required
from ..common.validators import require_json_object
from ..core.exceptions import AuthenticationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = require_json_object(request.get_json(silent=True))
        user_id = container.user_service.register(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=data.get("role"),
            employee_id=data.get("employeeId"),
            department=data.get("department"),
        )
        return jsonify({"message": "User Registered", "userId": user_id}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = require_json_object(request.get_json(silent=True))
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        except AuthenticationError:
            logger.warning("failed login for %r", data.get("email"))
            raise

        session.clear()
        session.permanent = bool(data.get("rememberMe"))

        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        user = container.user_service.get_user(s_user.user_id)
        return jsonify({"user": user.public_view() if user else None})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def auth_me():
        user = container.user_service.get_user(current_user_id())
        if not user:
            session.clear()
            return jsonify({"error": "Access Denied"}), 401
        return jsonify({"user": user.public_view()})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @manager_required
    def list_users():
        users = container.user_service.list_users(role=request.args.get("role") or None)
        return jsonify([u.public_view() for u in users])

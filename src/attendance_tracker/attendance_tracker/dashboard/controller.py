from __future__ import annotations

from flask import Flask, jsonify

from ..common.auth import current_user_id, login_required, manager_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/employee", methods=["GET"], endpoint="dashboard_employee")
    @login_required
    def dashboard_employee():
        return jsonify(container.dashboard_service.employee_summary(current_user_id()))

    @app.route("/api/dashboard/manager", methods=["GET"], endpoint="dashboard_manager")
    @manager_required
    def dashboard_manager():
        return jsonify(container.dashboard_service.manager_summary())

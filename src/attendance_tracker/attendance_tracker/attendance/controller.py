from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user_id, login_required, manager_required
from ..container import Container
from .model import record_to_json, report_row_to_json


def register(app: Flask, container: Container) -> None:
    def _report_filters() -> dict:
        return {
            "start_date": request.args.get("startDate") or None,
            "end_date": request.args.get("endDate") or None,
            "employee_id": request.args.get("employeeId") or None,
        }

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        record = container.attendance_service.check_in(current_user_id())
        return jsonify(record_to_json(record))

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        record = container.attendance_service.check_out(current_user_id())
        return jsonify(record_to_json(record))

    @app.route("/api/attendance/my-history", methods=["GET"], endpoint="my_history")
    @login_required
    def my_history():
        rows = container.attendance_service.get_history(current_user_id())
        return jsonify([record_to_json(r) for r in rows])

    @app.route("/api/attendance/today", methods=["GET"], endpoint="today")
    @login_required
    def today():
        record = container.attendance_service.get_today_record(current_user_id())
        return jsonify(record_to_json(record) if record else None)

    @app.route("/api/attendance/today-status", methods=["GET"], endpoint="today_status")
    @manager_required
    def today_status():
        rows = container.attendance_service.today_status()
        return jsonify([report_row_to_json(r) for r in rows])

    @app.route("/api/attendance/all", methods=["GET"], endpoint="all_records")
    @manager_required
    def all_records():
        data = container.report_service.build_report()
        return jsonify(data.rows)

    @app.route("/api/attendance/reports", methods=["GET"], endpoint="reports")
    @manager_required
    def reports():
        data = container.report_service.build_report(**_report_filters())
        return jsonify(data.rows)

    @app.route("/api/attendance/export", methods=["GET"], endpoint="export")
    @manager_required
    def export():
        text = container.report_service.export_csv(**_report_filters())
        return app.response_class(
            text.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance_report.csv"},
        )

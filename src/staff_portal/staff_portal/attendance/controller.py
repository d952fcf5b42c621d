from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.web import build_auth_guards, error_response, month_arg, not_linked
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required, approver_required = build_auth_guards(container)

    @app.route("/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @auth_required
    def check_in():
        try:
            employee = container.employee_service.require_linked(g.identity)
            record = container.attendance_service.check_in(g.identity, employee.employee_id)
            return jsonify({"record": record.to_dict()}), 201
        except Exception as e:
            return error_response(e)

    @app.route("/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @auth_required
    def check_out():
        try:
            employee = container.employee_service.require_linked(g.identity)
            record = container.attendance_service.check_out(g.identity, employee.employee_id)
            return jsonify({"record": record.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/attendance/today", methods=["GET"], endpoint="attendance_today")
    @auth_required
    def today():
        try:
            employee = container.employee_service.get_linked(g.identity)
            if not employee:
                return not_linked()
            record = container.attendance_service.today(g.identity, employee.employee_id)
            return jsonify({"record": record.to_dict() if record else None})
        except Exception as e:
            return error_response(e)

    @app.route("/attendance/history", methods=["GET"], endpoint="attendance_history")
    @auth_required
    def history():
        try:
            employee = container.employee_service.get_linked(g.identity)
            if not employee:
                return not_linked()
            records = container.attendance_service.history(g.identity, employee.employee_id, month=month_arg())
            return jsonify({"records": [r.to_dict() for r in records]})
        except Exception as e:
            return error_response(e)

    @app.route("/attendance/pending", methods=["GET"], endpoint="attendance_pending")
    @approver_required
    def pending():
        try:
            records = container.attendance_service.pending(g.identity)
            return jsonify({"records": [r.to_dict() for r in records]})
        except Exception as e:
            return error_response(e)

from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.datetime_utils import now_local
from ..common.web import build_auth_guards, error_response, json_body, month_arg, not_linked, optional_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required, approver_required = build_auth_guards(container)

    @app.route("/leaves", methods=["POST"], endpoint="submit_leave")
    @auth_required
    def submit_leave():
        try:
            data = json_body()
            start_date = optional_date(data.get("start_date"))
            end_date = optional_date(data.get("end_date"))

            employee = container.employee_service.require_linked(g.identity)
            leave = container.leave_service.submit(
                g.identity,
                employee.employee_id,
                leave_type=data.get("leave_type"),
                start_date=start_date,
                end_date=end_date,
                reason=data.get("reason"),
            )
            return jsonify({"leave": leave.to_dict()}), 201
        except Exception as e:
            return error_response(e)

    @app.route("/leaves", methods=["GET"], endpoint="my_leaves")
    @auth_required
    def my_leaves():
        try:
            employee = container.employee_service.get_linked(g.identity)
            if not employee:
                return not_linked()
            leaves = container.leave_service.history(g.identity, employee.employee_id, month=month_arg())
            return jsonify({"leaves": [lv.to_dict() for lv in leaves]})
        except Exception as e:
            return error_response(e)

    @app.route("/leaves/balance", methods=["GET"], endpoint="leave_balance")
    @auth_required
    def leave_balance():
        try:
            employee = container.employee_service.get_linked(g.identity)
            if not employee:
                return not_linked()
            today = now_local().date()
            month = month_arg() or (today.year, today.month)
            balance = container.leave_service.balance(g.identity, employee.employee_id, month=month)
            return jsonify({"balance": balance.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/leaves/pending", methods=["GET"], endpoint="pending_leaves")
    @approver_required
    def pending_leaves():
        try:
            leaves = container.leave_service.pending(g.identity)
            return jsonify({"leaves": [lv.to_dict() for lv in leaves]})
        except Exception as e:
            return error_response(e)

from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.validators import require_non_empty
from ..common.web import build_auth_guards, error_response, json_body, optional_date
from ..core.enums import EmployeeStatus
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required, approver_required = build_auth_guards(container)

    @app.route("/employees", methods=["GET"], endpoint="list_employees")
    @approver_required
    def list_employees():
        try:
            status_s = request.args.get("status")
            try:
                status = EmployeeStatus(status_s) if status_s else None
            except ValueError:
                raise ValidationError("Status must be 'active' or 'inactive'")
            employees = container.employee_service.list_employees(g.identity, status=status)
            return jsonify({"employees": [e.to_dict() for e in employees]})
        except Exception as e:
            return error_response(e)

    @app.route("/employees", methods=["POST"], endpoint="create_employee")
    @auth_required
    def create_employee():
        try:
            data = json_body()
            date_of_joining = optional_date(require_non_empty(data.get("date_of_joining"), "Date of joining"))
            employee = container.employee_service.create_employee(
                g.identity,
                employee_code=data.get("employee_code"),
                full_name=data.get("full_name"),
                email=data.get("email"),
                department=data.get("department"),
                designation=data.get("designation"),
                date_of_joining=date_of_joining,
                phone=data.get("phone"),
                user_id=data.get("user_id"),
            )
            return jsonify({"employee": employee.to_dict()}), 201
        except Exception as e:
            return error_response(e)

    @app.route("/employees/<int:employee_id>", methods=["PATCH"], endpoint="update_employee")
    @auth_required
    def update_employee(employee_id: int):
        try:
            employee = container.employee_service.update_employee(g.identity, employee_id, json_body())
            return jsonify({"employee": employee.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/employees/<int:employee_id>/deactivate", methods=["POST"], endpoint="deactivate_employee")
    @auth_required
    def deactivate_employee(employee_id: int):
        try:
            employee = container.employee_service.deactivate(g.identity, employee_id)
            return jsonify({"employee": employee.to_dict()})
        except Exception as e:
            return error_response(e)

from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.web import bearer_token, build_auth_guards, error_response, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required, _ = build_auth_guards(container)

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        try:
            data = json_body()
            token, user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
            return jsonify(
                {
                    "token": token,
                    "user": {"id": user.user_id, "email": user.email, "fullName": user.full_name},
                }
            )
        except Exception as e:
            return error_response(e)

    @app.route("/me", methods=["GET"], endpoint="me")
    @auth_required
    def me():
        try:
            identity = g.identity
            employee = container.employee_service.get_linked(identity)
            return jsonify(
                {
                    "user_id": identity.user_id,
                    "role": identity.role.value,
                    "linked": employee is not None,
                    "employee": employee.to_dict() if employee else None,
                }
            )
        except Exception as e:
            return error_response(e)

    # Privileged endpoints. The caller's role is always re-read from user_roles.
    @app.route("/create-user", methods=["POST", "OPTIONS"], endpoint="create_user")
    def create_user():
        if request.method == "OPTIONS":
            return "", 200
        try:
            identity = container.auth_service.resolve(bearer_token())
            data = json_body()
            created = container.user_service.create_user(
                requesting_user_id=identity.user_id,
                email=data.get("email"),
                password=data.get("password"),
                full_name=data.get("fullName"),
                role=data.get("role"),
            )
            return jsonify({"success": True, "user": created.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/update-user-role", methods=["POST", "OPTIONS"], endpoint="update_user_role")
    def update_user_role():
        if request.method == "OPTIONS":
            return "", 200
        try:
            identity = container.auth_service.resolve(bearer_token())
            data = json_body()
            new_role = container.user_service.update_user_role(
                requesting_user_id=identity.user_id,
                target_user_id=data.get("userId"),
                new_role=data.get("newRole"),
            )
            return jsonify({"success": True, "userId": data.get("userId"), "newRole": new_role.value})
        except Exception as e:
            return error_response(e)

    @app.route("/users", methods=["GET"], endpoint="list_users")
    @auth_required
    def list_users():
        try:
            users = container.user_service.list_users(requesting_user_id=g.identity.user_id)
            return jsonify(
                {
                    "users": [
                        {
                            "id": u.user_id,
                            "email": u.email,
                            "fullName": u.full_name,
                            "role": (u.role.value if u.role else None),
                            "isActive": u.is_active,
                            "createdAt": u.created_at.isoformat() if u.created_at else None,
                        }
                        for u in users
                    ]
                }
            )
        except Exception as e:
            return error_response(e)

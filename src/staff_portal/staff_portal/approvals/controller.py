from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.web import build_auth_guards, error_response, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required, _ = build_auth_guards(container)

    # Role gating happens inside ApprovalService so employees get the same Forbidden.
    @app.route("/approvals/<kind>/<int:record_id>", methods=["POST"], endpoint="decide_record")
    @auth_required
    def decide_record(kind: str, record_id: int):
        try:
            data = json_body()
            record = container.approval_service.decide(
                record_kind=kind,
                record_id=record_id,
                decision=data.get("decision"),
                actor_role=g.identity.role,
                actor_id=g.identity.user_id,
            )
            return jsonify({"record": record.to_dict()})
        except Exception as e:
            return error_response(e)

from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import actor_required, current_actor
from ..common.http import api_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container)

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @api_errors
    @login_required
    def auth_me():
        # Resolution itself may provision the first super admin.
        return jsonify({"member": current_actor().to_dict()}), 200

    @app.route("/api/bootstrap", methods=["POST"], endpoint="bootstrap")
    @api_errors
    def bootstrap():
        body = json_body()
        member = container.member_service.bootstrap_first_super_admin(
            secret=body.get("secret"),
            email=body.get("email"),
            name=body.get("name"),
        )
        return jsonify({"ok": True, "member": member.to_dict()}), 200

from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import actor_required, current_actor
from ..common.http import api_errors, json_body
from ..common.validators import require_iso_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container)

    @app.route("/api/teams", methods=["GET"], endpoint="teams_list")
    @api_errors
    @login_required
    def teams_list():
        teams = container.team_service.list_for(current_actor())
        return jsonify({"teams": [t.to_dict() for t in teams]}), 200

    @app.route("/api/teams/eligible", methods=["GET"], endpoint="teams_eligible")
    @api_errors
    @login_required
    def teams_eligible():
        """Teams selectable for an event spanning ``from``..``to``."""
        teams = container.team_service.eligible_for_range(
            date_from=require_iso_date(request.args.get("from"), "from"),
            date_to=require_iso_date(request.args.get("to"), "to"),
        )
        return jsonify({"teams": [t.to_dict() for t in teams]}), 200

    @app.route("/api/teams", methods=["POST"], endpoint="teams_create")
    @api_errors
    @login_required
    def teams_create():
        team = container.team_service.create(actor=current_actor(), name=json_body().get("name"))
        return jsonify({"id": team.team_id, "team": team.to_dict()}), 200

    @app.route("/api/teams/<team_id>", methods=["PATCH"], endpoint="teams_update")
    @api_errors
    @login_required
    def teams_update(team_id: str):
        team = container.team_service.update(actor=current_actor(), team_id=team_id, payload=json_body())
        return jsonify({"ok": True, "team": team.to_dict()}), 200

    @app.route("/api/teams/<team_id>", methods=["DELETE"], endpoint="teams_delete")
    @api_errors
    @login_required
    def teams_delete(team_id: str):
        container.team_service.delete(actor=current_actor(), team_id=team_id)
        return jsonify({"ok": True}), 200

    @app.route("/api/teams/seed", methods=["POST"], endpoint="teams_seed")
    @api_errors
    @login_required
    def teams_seed():
        created = container.team_service.seed_defaults(actor=current_actor())
        return jsonify({"ok": True, "created": created}), 200

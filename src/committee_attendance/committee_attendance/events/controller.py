from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import actor_required, current_actor
from ..common.http import api_errors, json_body
from ..common.validators import bounded_int
from ..container import Container
from ..core.constants import EVENT_LIST_DEFAULT_LIMIT, EVENT_LIST_MAX_LIMIT


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container)

    @app.route("/api/events", methods=["GET"], endpoint="events_list")
    @api_errors
    @login_required
    def events_list():
        limit = bounded_int(
            request.args.get("limit"), "limit", default=EVENT_LIST_DEFAULT_LIMIT, maximum=EVENT_LIST_MAX_LIMIT
        )
        upcoming = request.args.get("upcoming") == "true"
        events = container.event_service.list_events(limit=limit, upcoming=upcoming)
        return jsonify({"events": [e.to_dict() for e in events]}), 200

    @app.route("/api/events", methods=["POST"], endpoint="events_create")
    @api_errors
    @login_required
    def events_create():
        event = container.event_service.create(actor=current_actor(), payload=json_body())
        return jsonify({"id": event.event_id, "event": event.to_dict()}), 200

    @app.route("/api/events/<event_id>", methods=["GET"], endpoint="events_get")
    @api_errors
    @login_required
    def events_get(event_id: str):
        return jsonify({"event": container.event_service.get_with_teams(event_id)}), 200

    @app.route("/api/events/<event_id>", methods=["PATCH"], endpoint="events_update")
    @api_errors
    @login_required
    def events_update(event_id: str):
        event = container.event_service.update(actor=current_actor(), event_id=event_id, payload=json_body())
        return jsonify({"ok": True, "event": event.to_dict()}), 200

    @app.route("/api/events/<event_id>", methods=["DELETE"], endpoint="events_delete")
    @api_errors
    @login_required
    def events_delete(event_id: str):
        container.event_service.delete(actor=current_actor(), event_id=event_id)
        return jsonify({"ok": True}), 200

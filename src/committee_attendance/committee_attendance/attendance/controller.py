from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import actor_required, current_actor
from ..common.http import api_errors, json_body
from ..common.validators import id_list, optional_float, optional_iso_date, optional_text, require_iso_date, require_non_empty
from ..container import Container
from .model import AttendanceFilters, AttendanceSubmission


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container)

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @api_errors
    @login_required
    def attendance_list():
        args = request.args
        filters = AttendanceFilters(
            event_id=args.get("eventId") or None,
            team_id=args.get("teamId") or None,
            work_date=optional_iso_date(args.get("date"), "date"),
            date_from=optional_iso_date(args.get("from"), "from"),
            date_to=optional_iso_date(args.get("to"), "to"),
            expand_members=args.get("expand") == "members",
        )
        view = container.attendance_service.resolve_view(current_actor(), filters)
        return jsonify(view.to_dict()), 200

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_submit")
    @api_errors
    @login_required
    def attendance_submit():
        body = json_body()
        event_id = body.get("eventId")
        submission = AttendanceSubmission(
            team_id=require_non_empty(body.get("teamId"), "teamId"),
            work_date=require_iso_date(body.get("date"), "date"),
            event_id=event_id if isinstance(event_id, str) and event_id else None,
            member_self=body.get("memberSelf") is True,
            present_ids=tuple(id_list(body.get("presentIds"))),
            absent_ids=tuple(id_list(body.get("absentIds"))),
            start_time=optional_text(body.get("startTime")),
            end_time=optional_text(body.get("endTime")),
            notes=optional_text(body.get("notes")),
            lat=optional_float(body.get("lat")),
            lng=optional_float(body.get("lng")),
        )
        record = container.attendance_service.submit(current_actor(), submission)
        return jsonify({"ok": True, "id": record.record_id, "record": record.to_dict()}), 200

    @app.route("/api/attendance/venue", methods=["GET"], endpoint="attendance_venue")
    def attendance_venue():
        return jsonify({"required": container.geofence.required}), 200

    @app.route("/api/attendance/link", methods=["POST"], endpoint="attendance_link_issue")
    @api_errors
    @login_required
    def attendance_link_issue():
        body = json_body()
        team_id = body.get("teamId")
        base_url = container.app_url or request.host_url
        issued = container.link_service.issue(
            actor=current_actor(),
            team_id=team_id if isinstance(team_id, str) else "",
            base_url=base_url,
        )
        return jsonify({"link": issued.url, "expiresAt": issued.expires_at}), 200

    @app.route("/api/attendance/submit", methods=["GET"], endpoint="attendance_link_read")
    @api_errors
    def attendance_link_read():
        data = container.link_service.read(
            token=request.args.get("token") or "",
            team_id=request.args.get("teamId") or "",
        )
        return jsonify(data), 200

    @app.route("/api/attendance/submit", methods=["POST"], endpoint="attendance_link_submit")
    @api_errors
    def attendance_link_submit():
        body = json_body()
        token = body.get("token")
        team_id = body.get("teamId")
        record = container.link_service.submit(
            token=token if isinstance(token, str) else "",
            team_id=team_id if isinstance(team_id, str) else "",
            present_ids=id_list(body.get("presentIds")),
            absent_ids=id_list(body.get("absentIds")),
            work_date=optional_iso_date(body.get("date"), "date"),
        )
        return jsonify({"ok": True, "id": record.record_id}), 200

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import date_part, now_ms, today_utc
from ..common.validators import id_list, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..members.model import Member
from ..teams.repository import TeamRepository
from .model import Event, parse_overrides
from .repository import EventRepository

logger = logging.getLogger(__name__)


def _require_iso_instant(value: Any, field_name: str) -> str:
    raw = require_non_empty(value, field_name)
    try:
        date_part(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO date", reason=f"invalid_{field_name}")
    return raw


class EventService:
    """Use case: events and their per-team overrides."""

    def __init__(self, events: EventRepository, teams: TeamRepository):
        self._events = events
        self._teams = teams

    def get(self, event_id: str) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found", reason="event_not_found")
        return event

    def list_events(self, *, limit: int, upcoming: bool = False, today: Optional[date] = None) -> list[Event]:
        """Latest events first; ``upcoming`` keeps those not yet over, soonest first."""
        events = list(self._events.list_recent(limit=limit))
        if upcoming:
            today = today or today_utc()
            events = [e for e in events if e.end_date >= today]
            events.reverse()
        return events

    def get_with_teams(self, event_id: str) -> dict:
        """Event plus the effective (override-applied) view of each listed team."""
        event = self.get(event_id)
        teams = []
        for team in self._teams.list_all():
            if not event.lists_team(team.team_id):
                continue
            override = event.override_for(team.team_id)
            leader_id = override.leader_id if override and override.leader_id else team.leader_id
            member_ids = override.member_ids if override and override.member_ids is not None else team.member_ids
            teams.append(
                {
                    "id": team.team_id,
                    "name": team.name,
                    "leaderId": leader_id,
                    "memberIds": list(member_ids),
                    "dayOfWeek": team.day_of_week,
                    "isWrapUp": team.is_wrap_up,
                }
            )
        data = event.to_dict()
        data["teams"] = teams
        return data

    def _require_super_admin(self, actor: Member, action: str) -> None:
        if actor.role != Role.SUPER_ADMIN:
            raise AuthorizationError(f"Only Super Admin can {action} events", reason="super_admin_only")

    def _known_team_ids(self, raw: Any) -> list[str]:
        team_ids = id_list(raw)
        known = {t.team_id for t in self._teams.list_all()}
        unknown = [tid for tid in team_ids if tid not in known]
        if unknown:
            raise ValidationError(f"Unknown teams: {', '.join(unknown)}", reason="unknown_team")
        return team_ids

    def create(self, *, actor: Member, payload: Mapping[str, Any]) -> Event:
        self._require_super_admin(actor, "create")

        name = require_non_empty(payload.get("name"), "name")
        date_from = _require_iso_instant(payload.get("dateFrom"), "dateFrom")
        date_to = _require_iso_instant(payload.get("dateTo"), "dateTo")
        if date_part(date_from) > date_part(date_to):
            raise ValidationError("dateFrom must be on or before dateTo", reason="invalid_date_range")

        overrides = parse_overrides(payload.get("teamOverrides"))
        event_id = self._events.create(
            name=name,
            date_from=date_from,
            date_to=date_to,
            team_ids=self._known_team_ids(payload.get("teamIds")),
            team_overrides={tid: o.to_dict() for tid, o in overrides.items()},
            created_by=actor.member_id,
            now=now_ms(),
        )
        logger.info("Event %s created by %s", event_id, actor.member_id)
        return self.get(event_id)

    def update(self, *, actor: Member, event_id: str, payload: Mapping[str, Any], today: Optional[date] = None) -> Event:
        self._require_super_admin(actor, "update")
        event = self.get(event_id)
        today = today or today_utc()

        changes: dict[str, Any] = {}
        if isinstance(payload.get("name"), str):
            changes["name"] = require_non_empty(payload["name"], "name")
        if isinstance(payload.get("dateFrom"), str):
            changes["date_from"] = _require_iso_instant(payload["dateFrom"], "dateFrom")
        if isinstance(payload.get("dateTo"), str):
            changes["date_to"] = _require_iso_instant(payload["dateTo"], "dateTo")
        if date_part(changes.get("date_from", event.date_from)) > date_part(changes.get("date_to", event.date_to)):
            raise ValidationError("dateFrom must be on or before dateTo", reason="invalid_date_range")
        if isinstance(payload.get("teamIds"), list):
            changes["team_ids"] = self._known_team_ids(payload["teamIds"])
        if "teamOverrides" in payload:
            overrides = parse_overrides(payload["teamOverrides"])
            changes["team_overrides"] = {tid: o.to_dict() for tid, o in overrides.items()}

        start = payload.get("overallStartTime")
        end = payload.get("overallEndTime")
        if isinstance(start, str) or isinstance(end, str):
            # Duration can only be recorded once the stored event has ended.
            if event.end_date > today:
                raise AuthorizationError(
                    "Cannot set overall event time for future events",
                    reason="event_not_finished",
                )
            if isinstance(start, str):
                changes["overall_start_time"] = start.strip() or None
            if isinstance(end, str):
                changes["overall_end_time"] = end.strip() or None

        self._events.update(event_id=event.event_id, changes=changes, now=now_ms())
        return self.get(event.event_id)

    def delete(self, *, actor: Member, event_id: str) -> None:
        self._require_super_admin(actor, "delete")
        if not self._events.delete(event_id=event_id):
            raise NotFoundError("Event not found", reason="event_not_found")
        logger.info("Event %s deleted", event_id)

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Sequence

from ..common.datetime_utils import now_ms, weekdays_in_range
from ..common.validators import id_list, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..members.model import Member
from ..members.repository import MemberRepository
from .defaults import DEFAULT_REGULAR_TEAM_NAMES, WRAP_UP_TEAMS
from .model import Team
from .repository import TeamRepository

logger = logging.getLogger(__name__)


class TeamService:
    """Use case: team rosters and leadership."""

    def __init__(self, teams: TeamRepository, members: MemberRepository):
        self._teams = teams
        self._members = members

    def get(self, team_id: str) -> Team:
        team = self._teams.get_by_id(team_id)
        if not team:
            raise NotFoundError("Team not found", reason="team_not_found")
        return team

    def list_for(self, actor: Member) -> list[Team]:
        teams = list(self._teams.list_all())
        if actor.role == Role.ADMIN:
            return [t for t in teams if t.is_led_by(actor.member_id)]
        return teams

    def eligible_for_range(self, *, date_from: date, date_to: date) -> list[Team]:
        """Regular teams plus the wrap-up teams whose weekday falls inside the range."""
        weekdays = set(weekdays_in_range(date_from, date_to))
        return [
            t
            for t in self._teams.list_all()
            if not t.is_wrap_up or (t.day_of_week is not None and t.day_of_week in weekdays)
        ]

    def create(self, *, actor: Member, name: Any) -> Team:
        if actor.role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only Super Admin can create teams", reason="super_admin_only")
        name_s = require_non_empty(name, "name")
        team_id = self._teams.create(name=name_s, now=now_ms())
        return self.get(team_id)

    def update(self, *, actor: Member, team_id: str, payload: Mapping[str, Any]) -> Team:
        team = self.get(team_id)
        if actor.role != Role.SUPER_ADMIN and not team.is_led_by(actor.member_id):
            raise AuthorizationError("Forbidden", reason="not_team_leader")

        changes: dict[str, Any] = {}
        if isinstance(payload.get("name"), str):
            changes["name"] = require_non_empty(payload["name"], "name")
        if "leaderId" in payload:
            leader_id = payload["leaderId"]
            if leader_id is not None:
                if not isinstance(leader_id, str) or not self._members.existing_ids([leader_id]):
                    raise ValidationError("Unknown leader", reason="unknown_leader")
            changes["leader_id"] = leader_id
        day = payload.get("dayOfWeek")
        if isinstance(day, int) and not isinstance(day, bool) and 0 <= day <= 6:
            changes["day_of_week"] = day
        if "isWrapUp" in payload:
            changes["is_wrap_up"] = 1 if payload["isWrapUp"] is True else 0

        now = now_ms()
        if isinstance(payload.get("memberIds"), list):
            self._replace_roster(team, id_list(payload["memberIds"]), now=now)
        if changes:
            self._teams.update(team_id=team.team_id, changes=changes, now=now)
        return self.get(team.team_id)

    def _replace_roster(self, team: Team, member_ids: Sequence[str], *, now: int) -> None:
        unknown = set(member_ids) - self._members.existing_ids(member_ids)
        if unknown:
            raise ValidationError(f"Unknown members: {', '.join(sorted(unknown))}", reason="unknown_member")
        self._teams.replace_members(team_id=team.team_id, member_ids=member_ids, now=now)
        logger.info("Team %s roster replaced (%d members)", team.team_id, len(member_ids))

    def delete(self, *, actor: Member, team_id: str) -> None:
        if actor.role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only Super Admin can delete teams", reason="super_admin_only")
        if not self._teams.delete(team_id=team_id):
            raise NotFoundError("Team not found", reason="team_not_found")
        logger.info("Team %s deleted", team_id)

    def seed_defaults(self, *, actor: Member) -> int:
        """Create the default regular and wrap-up teams that are missing (matched by name)."""
        if actor.role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only Super Admin can seed teams", reason="super_admin_only")

        existing = {t.name.lower().strip() for t in self._teams.list_all()}
        now = now_ms()
        created = 0

        for name in DEFAULT_REGULAR_TEAM_NAMES:
            key = name.lower().strip()
            if key in existing:
                continue
            self._teams.create(name=name, now=now)
            existing.add(key)
            created += 1

        for day_of_week, name in WRAP_UP_TEAMS:
            key = name.lower().strip()
            if key in existing:
                continue
            self._teams.create(name=name, now=now, day_of_week=day_of_week, is_wrap_up=True)
            existing.add(key)
            created += 1

        logger.info("Seeded %d default teams", created)
        return created

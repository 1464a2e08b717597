from __future__ import annotations

from typing import Optional

from ..core.exceptions import NotFoundError
from ..events.model import Event
from ..events.repository import EventRepository
from ..teams.model import Team
from ..teams.repository import TeamRepository


def effective_member_ids(team: Team, event: Optional[Event]) -> list[str]:
    """Team roster, replaced (not merged) by the event's override when the event lists the team."""
    if event is not None and event.lists_team(team.team_id):
        override = event.override_for(team.team_id)
        if override is not None and override.member_ids is not None:
            return list(override.member_ids)
    return list(team.member_ids)


class MembershipResolver:
    def __init__(self, teams: TeamRepository, events: EventRepository):
        self._teams = teams
        self._events = events

    def resolve_effective_members(self, team_id: str, event_id: Optional[str] = None) -> list[str]:
        team = self._teams.get_by_id(team_id)
        if not team:
            raise NotFoundError("Team not found", reason="team_not_found")
        # A stale or deleted event reference falls back to the team roster.
        event = self._events.get_by_id(event_id) if event_id else None
        return effective_member_ids(team, event)

    def effective_for(self, team: Team, event: Optional[Event]) -> list[str]:
        """Same resolution for an already loaded team/event pair."""
        return effective_member_ids(team, event)

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence, Type

from ..core.enums import Operation, Role
from ..core.exceptions import AuthorizationError, DomainError, NotFoundError
from ..events.model import Event
from ..members.model import Member
from ..teams.model import Team

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = "ok"
    message: str = ""
    error: Type[DomainError] = AuthorizationError

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str, message: str, error: Type[DomainError] = AuthorizationError) -> "Decision":
        return cls(allowed=False, reason=reason, message=message, error=error)

    def raise_if_denied(self) -> None:
        if not self.allowed:
            raise self.error(self.message, reason=self.reason)


class AttendancePolicy:
    """Who may read or write attendance for a team, day and event.

    Leaders write the whole team (batch overwrite) while members may only
    assert their own presence, and only for today.
    """

    def can_act(
        self,
        actor: Member,
        operation: Operation,
        *,
        team: Optional[Team] = None,
        work_date: Optional[date] = None,
        today: Optional[date] = None,
        event_id: Optional[str] = None,
        event: Optional[Event] = None,
        roster: Sequence[str] = (),
    ) -> Decision:
        if operation == Operation.READ:
            decision = self._read(actor, team)
        elif operation == Operation.FULL_SUBMIT:
            decision = self._full_submit(actor, team, work_date, today, event_id, event)
        elif operation == Operation.SELF_SUBMIT:
            decision = self._self_submit(actor, team, work_date, today, event_id, event, roster)
        else:
            decision = Decision.deny("unknown_operation", f"Unsupported operation {operation!r}")

        if not decision.allowed:
            logger.info(
                "Denied %s for member %s on team %s: %s",
                operation.value,
                actor.member_id,
                team.team_id if team else "-",
                decision.reason,
            )
        return decision

    def _read(self, actor: Member, team: Optional[Team]) -> Decision:
        if actor.role == Role.SUPER_ADMIN:
            return Decision.allow()
        if actor.role == Role.ADMIN:
            # Without a team the caller is scoped to led teams by the engine.
            if team is None or team.is_led_by(actor.member_id):
                return Decision.allow()
            return Decision.deny("not_team_leader", "Forbidden")
        if actor.role == Role.MEMBER:
            return Decision.deny("members_cannot_view", "Members cannot view attendance records")
        return Decision.deny("unknown_role", "Forbidden")

    def _full_submit(
        self,
        actor: Member,
        team: Optional[Team],
        work_date: Optional[date],
        today: Optional[date],
        event_id: Optional[str],
        event: Optional[Event],
    ) -> Decision:
        if work_date is None or today is None or team is None:
            return Decision.deny("incomplete_request", "team and date required")
        if work_date > today:
            return Decision.deny("future_date", "Cannot submit attendance for future dates")

        if actor.role == Role.SUPER_ADMIN:
            pass
        elif actor.role == Role.ADMIN:
            if not team.is_led_by(actor.member_id):
                return Decision.deny("not_team_leader", "Only team leader or super admin can submit full attendance")
        elif actor.role == Role.MEMBER:
            return Decision.deny("not_team_leader", "Only team leader or super admin can submit full attendance")
        else:
            return Decision.deny("unknown_role", "Forbidden")

        return self._event_window(team, work_date, event_id, event)

    def _self_submit(
        self,
        actor: Member,
        team: Optional[Team],
        work_date: Optional[date],
        today: Optional[date],
        event_id: Optional[str],
        event: Optional[Event],
        roster: Sequence[str],
    ) -> Decision:
        if work_date is None or today is None or team is None:
            return Decision.deny("incomplete_request", "team and date required")

        if actor.role == Role.MEMBER:
            pass
        elif actor.role in (Role.ADMIN, Role.SUPER_ADMIN):
            return Decision.deny("self_submit_members_only", "memberSelf only for members")
        else:
            return Decision.deny("unknown_role", "Forbidden")

        if work_date != today:
            return Decision.deny("date_not_today", "Members can only mark attendance for today")
        if actor.member_id not in roster:
            return Decision.deny("not_in_team", "You are not in this team")
        return self._event_window(team, work_date, event_id, event)

    @staticmethod
    def _event_window(team: Team, work_date: date, event_id: Optional[str], event: Optional[Event]) -> Decision:
        if not event_id:
            return Decision.allow()
        if event is None:
            return Decision.deny("event_not_found", "Event not found", NotFoundError)
        if not event.lists_team(team.team_id):
            return Decision.deny("team_not_in_event", "Team not in this event")
        if not event.covers(work_date):
            return Decision.deny("date_not_in_event_range", "Date not in event range")
        return Decision.allow()

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import now_ms, today_utc
from ..core.constants import ATTENDANCE_LIST_LIMIT
from ..core.enums import Operation, Role
from ..core.exceptions import NotFoundError
from ..events.model import Event
from ..events.repository import EventRepository
from ..members.model import Member
from ..members.service import MemberService
from ..teams.model import Team
from ..teams.repository import TeamRepository
from .factory import MergeStrategyFactory
from .geofence import GeofenceCheck
from .membership import MembershipResolver
from .model import AttendanceFilters, AttendanceRecord, AttendanceSubmission, AttendanceView, RecordKey
from .policy import AttendancePolicy
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Reads and writes attendance after running the authorization chain.

    Every check happens before the store is touched.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        teams: TeamRepository,
        events: EventRepository,
        members: MemberService,
        *,
        membership: MembershipResolver,
        geofence: GeofenceCheck,
        policy: AttendancePolicy | None = None,
        strategy_factory: MergeStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._teams = teams
        self._events = events
        self._members = members
        self._membership = membership
        self._geofence = geofence
        self._policy = policy or AttendancePolicy()
        self._factory = strategy_factory or MergeStrategyFactory()

    def _get_team(self, team_id: str) -> Team:
        team = self._teams.get_by_id(team_id)
        if not team:
            raise NotFoundError("Team not found", reason="team_not_found")
        return team

    def _get_event(self, event_id: Optional[str]) -> Optional[Event]:
        return self._events.get_by_id(event_id) if event_id else None

    def resolve_view(self, actor: Member, filters: AttendanceFilters) -> AttendanceView:
        team = self._get_team(filters.team_id) if filters.team_id else None
        self._policy.can_act(actor, Operation.READ, team=team).raise_if_denied()

        scope: Optional[set[str]] = None
        if actor.role == Role.ADMIN and team is None:
            scope = {t.team_id for t in self._teams.list_all() if t.is_led_by(actor.member_id)}

        records = list(
            self._attendance.list_records(
                event_id=filters.event_id,
                team_id=filters.team_id,
                team_ids=scope,
                work_date=filters.work_date,
                date_from=filters.date_from,
                date_to=filters.date_to,
                limit=ATTENDANCE_LIST_LIMIT,
            )
        )

        if not (filters.expand_members and team is not None):
            return AttendanceView(records=records)

        # The expanded record belongs to exactly one key; plain reads never pick up event records.
        if filters.work_date is not None:
            record = self._attendance.get_for_key(
                RecordKey(team_id=team.team_id, work_date=filters.work_date, event_id=filters.event_id)
            )
        else:
            record = next((r for r in records if r.event_id == filters.event_id), None)

        roster = self._membership.resolve_effective_members(team.team_id, filters.event_id)
        return AttendanceView(
            records=records,
            record=record,
            members=self._members.refs_for(roster),
            expanded=True,
        )

    def submit(
        self,
        actor: Member,
        submission: AttendanceSubmission,
        *,
        today: Optional[date] = None,
        now: Optional[int] = None,
    ) -> AttendanceRecord:
        today = today or today_utc()
        team = self._get_team(submission.team_id)
        event = self._get_event(submission.event_id)

        if submission.member_self:
            roster = self._membership.effective_for(team, event)
            self._policy.can_act(
                actor,
                Operation.SELF_SUBMIT,
                team=team,
                work_date=submission.work_date,
                today=today,
                event_id=submission.event_id,
                event=event,
                roster=roster,
            ).raise_if_denied()
            self._geofence.check(submission.lat, submission.lng)
        else:
            roster = list(team.member_ids)
            self._policy.can_act(
                actor,
                Operation.FULL_SUBMIT,
                team=team,
                work_date=submission.work_date,
                today=today,
                event_id=submission.event_id,
                event=event,
            ).raise_if_denied()

        strategy = self._factory.for_submission(submission=submission, actor_id=actor.member_id, roster=roster)
        key = RecordKey(team_id=team.team_id, work_date=submission.work_date, event_id=submission.event_id)
        record = self._attendance.upsert(key=key, merge=strategy, now=now or now_ms())

        logger.info(
            "Attendance %s saved by %s (%s) for team %s on %s",
            record.record_id,
            actor.member_id,
            "self" if submission.member_self else "full",
            team.team_id,
            submission.work_date.isoformat(),
        )
        return record

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence
from urllib.parse import urlencode

from ..common.datetime_utils import now_ms, today_utc
from ..core.constants import LINK_SECRET_BYTES, LINK_TTL_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..members.model import Member
from ..members.service import MemberService
from ..teams.model import Team
from ..teams.repository import TeamRepository
from .factory import MergeStrategyFactory
from .model import AttendanceLink, AttendanceRecord, RecordKey
from .repository import AttendanceLinkRepository, AttendanceRepository

logger = logging.getLogger(__name__)

_DAY_MS = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class IssuedLink:
    url: str
    expires_at: int


class AttendanceLinkService:
    """Use case: secure links that let an anonymous holder submit for one team."""

    def __init__(
        self,
        links: AttendanceLinkRepository,
        attendance: AttendanceRepository,
        teams: TeamRepository,
        members: MemberService,
        *,
        strategy_factory: MergeStrategyFactory | None = None,
    ):
        self._links = links
        self._attendance = attendance
        self._teams = teams
        self._members = members
        self._factory = strategy_factory or MergeStrategyFactory()

    def _get_team(self, team_id: str) -> Team:
        team = self._teams.get_by_id(team_id)
        if not team:
            raise NotFoundError("Team not found", reason="team_not_found")
        return team

    def issue(self, *, actor: Member, team_id: str, base_url: str, now: Optional[int] = None) -> IssuedLink:
        if actor.role not in (Role.ADMIN, Role.SUPER_ADMIN):
            raise AuthorizationError("Forbidden", reason="admins_only")
        if not team_id:
            raise ValidationError("teamId required", reason="teamId_required")
        team = self._get_team(team_id)

        now = now or now_ms()
        link = self._links.create(
            team_id=team.team_id,
            secret=secrets.token_hex(LINK_SECRET_BYTES),
            expires_at=now + LINK_TTL_DAYS * _DAY_MS,
            now=now,
        )
        query = urlencode({"token": link.secret, "teamId": team.team_id})
        logger.info("Attendance link %s issued by %s for team %s", link.link_id, actor.member_id, team.team_id)
        return IssuedLink(url=f"{base_url.rstrip('/')}/attendance/submit?{query}", expires_at=link.expires_at)

    def _valid_link(self, token: str, team_id: str, now: int) -> AttendanceLink:
        if not token or not team_id:
            raise ValidationError("token and teamId required", reason="token_and_team_required")
        link = self._links.find(secret=token, team_id=team_id)
        if not link:
            raise AuthorizationError("Invalid or expired link", reason="invalid_link")
        if link.is_expired(now):
            raise AuthorizationError("Link has expired", reason="link_expired")
        return link

    def read(self, *, token: str, team_id: str, now: Optional[int] = None, today: Optional[date] = None) -> dict:
        self._valid_link(token, team_id, now or now_ms())
        team = self._get_team(team_id)
        return {
            "teamName": team.name,
            "members": [m.to_dict() for m in self._members.refs_for_known(team.member_ids)],
            "date": (today or today_utc()).strftime("%Y-%m-%d"),
        }

    def submit(
        self,
        *,
        token: str,
        team_id: str,
        present_ids: Sequence[str],
        absent_ids: Sequence[str],
        work_date: Optional[date] = None,
        now: Optional[int] = None,
        today: Optional[date] = None,
    ) -> AttendanceRecord:
        now = now or now_ms()
        today = today or today_utc()
        self._valid_link(token, team_id, now)
        team = self._get_team(team_id)

        work_date = work_date or today
        if work_date > today:
            raise AuthorizationError("Cannot submit attendance for future dates", reason="future_date")

        strategy = self._factory.for_link(present_ids=present_ids, absent_ids=absent_ids)
        record = self._attendance.upsert(key=RecordKey(team_id=team.team_id, work_date=work_date), merge=strategy, now=now)
        logger.info("Attendance %s saved through link for team %s", record.record_id, team.team_id)
        return record

from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date
from typing import Any, Collection, Iterable, Mapping, Optional, Sequence

import pytest

from src.committee_attendance.committee_attendance.attendance.geofence import VenueConfig
from src.committee_attendance.committee_attendance.attendance.model import AttendanceLink, AttendanceRecord, RecordKey
from src.committee_attendance.committee_attendance.container import Container, assemble_container
from src.committee_attendance.committee_attendance.core.enums import Role
from src.committee_attendance.committee_attendance.events.model import Event, parse_overrides
from src.committee_attendance.committee_attendance.members.model import Member
from src.committee_attendance.committee_attendance.teams.model import Team

_ids = itertools.count(1)


def _next_id(prefix: str) -> str:
    return f"{prefix}{next(_ids)}"


class InMemoryTeams:
    def __init__(self):
        self.teams: dict[str, Team] = {}

    def add(self, team: Team) -> Team:
        self.teams[team.team_id] = team
        return team

    def get_by_id(self, team_id: str) -> Optional[Team]:
        return self.teams.get(team_id)

    def list_all(self) -> Sequence[Team]:
        return sorted(self.teams.values(), key=lambda t: t.name)

    def create(self, *, name: str, now: int, day_of_week: Optional[int] = None, is_wrap_up: bool = False) -> str:
        team_id = _next_id("team-")
        self.teams[team_id] = Team(
            team_id=team_id,
            name=name,
            day_of_week=day_of_week,
            is_wrap_up=is_wrap_up,
            created_at=now,
            updated_at=now,
        )
        return team_id

    def update(self, *, team_id: str, changes: Mapping[str, Any], now: int) -> bool:
        team = self.teams.get(team_id)
        if not team:
            return False
        fields = {k: v for k, v in changes.items() if k in {"name", "leader_id", "day_of_week"}}
        if "is_wrap_up" in changes:
            fields["is_wrap_up"] = bool(changes["is_wrap_up"])
        self.teams[team_id] = replace(team, updated_at=now, **fields)
        return True

    def replace_members(self, *, team_id: str, member_ids: Sequence[str], now: int) -> None:
        team = self.teams[team_id]
        self.teams[team_id] = replace(team, member_ids=tuple(member_ids), updated_at=now)

    def delete(self, *, team_id: str) -> bool:
        return self.teams.pop(team_id, None) is not None


class InMemoryMembers:
    """Members whose team_ids are derived from team rosters, like the MySQL store."""

    def __init__(self, teams: InMemoryTeams):
        self.members: dict[str, Member] = {}
        self._teams = teams

    def add(self, member: Member) -> Member:
        self.members[member.member_id] = member
        return member

    def _with_teams(self, member: Member) -> Member:
        team_ids = tuple(sorted(t.team_id for t in self._teams.teams.values() if member.member_id in t.member_ids))
        return replace(member, team_ids=team_ids)

    def get_by_id(self, member_id: str) -> Optional[Member]:
        m = self.members.get(member_id)
        return self._with_teams(m) if m else None

    def get_by_email(self, email: str) -> Optional[Member]:
        for m in self.members.values():
            if m.email == email.lower():
                return self._with_teams(m)
        return None

    def names_for(self, member_ids: Iterable[str]) -> dict[str, str]:
        return {mid: self.members[mid].name for mid in member_ids if mid in self.members}

    def existing_ids(self, member_ids: Iterable[str]) -> set[str]:
        return {mid for mid in member_ids if mid in self.members}

    def create_first_super_admin(self, *, email: str, name: str, now: int) -> Optional[Member]:
        if self.members:
            return None
        member = Member(
            member_id=_next_id("member-"),
            email=email.lower(),
            name=name,
            role=Role.SUPER_ADMIN,
            created_at=now,
            updated_at=now,
        )
        self.members[member.member_id] = member
        return member


class InMemoryEvents:
    def __init__(self):
        self.events: dict[str, Event] = {}

    def add(self, event: Event) -> Event:
        self.events[event.event_id] = event
        return event

    def get_by_id(self, event_id: str) -> Optional[Event]:
        return self.events.get(event_id)

    def list_recent(self, *, limit: int):
        return sorted(self.events.values(), key=lambda e: e.date_from, reverse=True)[:limit]

    def create(self, *, name, date_from, date_to, team_ids, team_overrides, created_by, now) -> str:
        event_id = _next_id("event-")
        self.events[event_id] = Event(
            event_id=event_id,
            name=name,
            date_from=date_from,
            date_to=date_to,
            team_ids=tuple(team_ids),
            team_overrides=parse_overrides(team_overrides),
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        return event_id

    def update(self, *, event_id: str, changes: Mapping[str, Any], now: int) -> bool:
        event = self.events.get(event_id)
        if not event:
            return False
        fields = dict(changes)
        if "team_ids" in fields:
            fields["team_ids"] = tuple(fields["team_ids"])
        if "team_overrides" in fields:
            fields["team_overrides"] = parse_overrides(fields["team_overrides"])
        self.events[event_id] = replace(event, updated_at=now, **fields)
        return True

    def delete(self, *, event_id: str) -> bool:
        return self.events.pop(event_id, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[RecordKey, AttendanceRecord] = {}

    def list_records(
        self,
        *,
        event_id: Optional[str] = None,
        team_id: Optional[str] = None,
        team_ids: Optional[Collection[str]] = None,
        work_date: Optional[date] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 500,
    ):
        out = []
        for r in self.records.values():
            if team_ids is not None and r.team_id not in team_ids:
                continue
            if event_id and r.event_id != event_id:
                continue
            if team_id and r.team_id != team_id:
                continue
            if work_date is not None and r.work_date != work_date:
                continue
            if date_from is not None and r.work_date < date_from:
                continue
            if date_to is not None and r.work_date > date_to:
                continue
            out.append(r)
        out.sort(key=lambda r: r.work_date, reverse=True)
        return out[:limit]

    def get_for_key(self, key: RecordKey) -> Optional[AttendanceRecord]:
        return self.records.get(key)

    def upsert(self, *, key: RecordKey, merge, now: int) -> AttendanceRecord:
        existing = self.records.get(key)
        write = merge(existing)
        if existing is None:
            record = AttendanceRecord(
                record_id=_next_id("att-"),
                team_id=key.team_id,
                work_date=key.work_date,
                event_id=key.event_id,
                submitted_by=write.submitted_by,
                present_ids=write.present_ids,
                absent_ids=write.absent_ids,
                start_time=write.start_time,
                end_time=write.end_time,
                notes=write.notes,
                created_at=now,
                updated_at=now,
            )
        else:
            record = replace(
                existing,
                submitted_by=write.submitted_by,
                present_ids=write.present_ids,
                absent_ids=write.absent_ids,
                start_time=write.start_time if write.start_time is not None else existing.start_time,
                end_time=write.end_time if write.end_time is not None else existing.end_time,
                notes=write.notes if write.notes is not None else existing.notes,
                updated_at=now,
            )
        self.records[key] = record
        return record


class InMemoryLinks:
    def __init__(self):
        self.links: list[AttendanceLink] = []

    def create(self, *, team_id: str, secret: str, expires_at: int, now: int) -> AttendanceLink:
        link = AttendanceLink(link_id=_next_id("link-"), team_id=team_id, secret=secret, expires_at=expires_at, created_at=now)
        self.links.append(link)
        return link

    def find(self, *, secret: str, team_id: str) -> Optional[AttendanceLink]:
        for link in self.links:
            if link.secret == secret and link.team_id == team_id:
                return link
        return None


class World:
    """In-memory repositories plus a container wired on top of them."""

    def __init__(self, *, venue: Optional[VenueConfig] = None, first_super_admin_email=None, bootstrap_secret=None, ping_database=None):
        self.teams = InMemoryTeams()
        self.members = InMemoryMembers(self.teams)
        self.events = InMemoryEvents()
        self.attendance = InMemoryAttendance()
        self.links = InMemoryLinks()
        self.container: Container = assemble_container(
            members_repo=self.members,
            teams_repo=self.teams,
            events_repo=self.events,
            attendance_repo=self.attendance,
            links_repo=self.links,
            secret_key="test-secret",
            venue=venue,
            first_super_admin_email=first_super_admin_email,
            bootstrap_secret=bootstrap_secret,
            app_url="http://testserver",
            ping_database=ping_database,
        )

    def member(self, member_id: str, role: Role = Role.MEMBER, *, name: Optional[str] = None) -> Member:
        return self.members.add(
            Member(member_id=member_id, email=f"{member_id}@example.com", name=name or member_id.upper(), role=role)
        )

    def team(self, team_id: str, *, leader_id: Optional[str] = None, member_ids: Sequence[str] = (), name=None, **kw) -> Team:
        return self.teams.add(
            Team(team_id=team_id, name=name or team_id.title(), leader_id=leader_id, member_ids=tuple(member_ids), **kw)
        )

    def event(self, event_id: str, *, date_from: str, date_to: str, team_ids: Sequence[str] = (), overrides=None) -> Event:
        return self.events.add(
            Event(
                event_id=event_id,
                name=event_id.title(),
                date_from=date_from,
                date_to=date_to,
                team_ids=tuple(team_ids),
                team_overrides=parse_overrides(overrides or {}),
            )
        )


@pytest.fixture
def world() -> World:
    return World()


@pytest.fixture
def fixed_today() -> date:
    return date(2025, 3, 10)


@pytest.fixture
def make_world():
    return World

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..members.model import MemberRef


@dataclass(frozen=True)
class RecordKey:
    """Uniqueness key of an attendance record: one per team, day and event (or none)."""

    team_id: str
    work_date: date
    event_id: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRecord:
    record_id: str
    team_id: str
    work_date: date
    submitted_by: str
    present_ids: tuple[str, ...] = field(default_factory=tuple)
    absent_ids: tuple[str, ...] = field(default_factory=tuple)
    event_id: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "eventId": self.event_id,
            "teamId": self.team_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "submittedBy": self.submitted_by,
            "presentIds": list(self.present_ids),
            "absentIds": list(self.absent_ids),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "notes": self.notes,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class RecordWrite:
    """Field values a merge strategy wants stored.

    ``None`` for start_time/end_time/notes keeps the stored value.
    """

    submitted_by: str
    present_ids: tuple[str, ...]
    absent_ids: tuple[str, ...]
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttendanceFilters:
    event_id: Optional[str] = None
    team_id: Optional[str] = None
    work_date: Optional[date] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    expand_members: bool = False


@dataclass(frozen=True)
class AttendanceSubmission:
    """Write payload for both the leader/admin path and the member self path."""

    team_id: str
    work_date: date
    event_id: Optional[str] = None
    member_self: bool = False
    present_ids: tuple[str, ...] = field(default_factory=tuple)
    absent_ids: tuple[str, ...] = field(default_factory=tuple)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


@dataclass(frozen=True)
class AttendanceView:
    records: list[AttendanceRecord]
    record: Optional[AttendanceRecord] = None
    members: Optional[list[MemberRef]] = None
    expanded: bool = False

    def to_dict(self) -> dict:
        data: dict = {"records": [r.to_dict() for r in self.records]}
        if self.expanded:
            data["record"] = (
                {
                    "presentIds": list(self.record.present_ids),
                    "absentIds": list(self.record.absent_ids),
                    "startTime": self.record.start_time,
                    "endTime": self.record.end_time,
                    "notes": self.record.notes,
                }
                if self.record
                else None
            )
            data["members"] = [m.to_dict() for m in self.members or []]
        return data


@dataclass(frozen=True)
class AttendanceLink:
    """Secure link letting an anonymous holder submit for one team until expiry."""

    link_id: str
    team_id: str
    secret: str
    # epoch milliseconds
    expires_at: int
    created_at: int

    def is_expired(self, now: int) -> bool:
        return self.expires_at < now

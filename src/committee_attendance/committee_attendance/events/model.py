from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import date_part


@dataclass(frozen=True)
class TeamOverride:
    """Per-event replacement of a team's roster and/or leader."""

    member_ids: Optional[tuple[str, ...]] = None
    leader_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TeamOverride":
        member_ids = data.get("memberIds")
        leader_id = data.get("leaderId")
        return cls(
            member_ids=tuple(str(x) for x in member_ids) if isinstance(member_ids, list) else None,
            leader_id=leader_id if isinstance(leader_id, str) and leader_id else None,
        )

    def to_dict(self) -> dict:
        data: dict[str, Any] = {}
        if self.member_ids is not None:
            data["memberIds"] = list(self.member_ids)
        if self.leader_id is not None:
            data["leaderId"] = self.leader_id
        return data


@dataclass(frozen=True)
class Event:
    event_id: str
    name: str
    # ISO date-time strings, e.g. "2025-03-01T08:00:00"
    date_from: str
    date_to: str
    team_ids: tuple[str, ...] = field(default_factory=tuple)
    team_overrides: Mapping[str, TeamOverride] = field(default_factory=dict)
    overall_start_time: Optional[str] = None
    overall_end_time: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    @property
    def start_date(self) -> date:
        return date_part(self.date_from)

    @property
    def end_date(self) -> date:
        return date_part(self.date_to)

    def lists_team(self, team_id: str) -> bool:
        return team_id in self.team_ids

    def covers(self, day: date) -> bool:
        """Day-granularity containment in [date_from, date_to]."""
        return self.start_date <= day <= self.end_date

    def override_for(self, team_id: str) -> Optional[TeamOverride]:
        return self.team_overrides.get(team_id)

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "name": self.name,
            "dateFrom": self.date_from,
            "dateTo": self.date_to,
            "teamIds": list(self.team_ids),
            "teamOverrides": {tid: o.to_dict() for tid, o in self.team_overrides.items()},
            "overallStartTime": self.overall_start_time,
            "overallEndTime": self.overall_end_time,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


def parse_overrides(raw: Any) -> dict[str, TeamOverride]:
    if not isinstance(raw, Mapping):
        return {}
    return {str(tid): TeamOverride.from_dict(o) for tid, o in raw.items() if isinstance(o, Mapping)}

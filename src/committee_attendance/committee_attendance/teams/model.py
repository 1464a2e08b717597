from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Team:
    """Team roster. The team is the single owner of membership."""

    team_id: str
    name: str
    leader_id: Optional[str] = None
    member_ids: tuple[str, ...] = field(default_factory=tuple)
    # 0=Sunday .. 6=Saturday, only for wrap-up teams
    day_of_week: Optional[int] = None
    is_wrap_up: bool = False
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    def is_led_by(self, member_id: str) -> bool:
        return self.leader_id is not None and self.leader_id == member_id

    def to_dict(self) -> dict:
        data = {
            "id": self.team_id,
            "name": self.name,
            "leaderId": self.leader_id,
            "memberIds": list(self.member_ids),
            "isWrapUp": self.is_wrap_up,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.day_of_week is not None:
            data["dayOfWeek"] = self.day_of_week
        return data

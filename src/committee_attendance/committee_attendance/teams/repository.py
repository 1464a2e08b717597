from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Team


class TeamRepository(Protocol):
    def get_by_id(self, team_id: str) -> Optional[Team]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Team]:
        raise NotImplementedError

    def create(self, *, name: str, now: int, day_of_week: Optional[int] = None, is_wrap_up: bool = False) -> str:
        raise NotImplementedError

    def update(self, *, team_id: str, changes: Mapping[str, Any], now: int) -> bool:
        """Apply column changes (name, leader_id, day_of_week, is_wrap_up)."""

        raise NotImplementedError

    def replace_members(self, *, team_id: str, member_ids: Sequence[str], now: int) -> None:
        """Replace the roster. Member back-references derive from it, so both sides change together."""

        raise NotImplementedError

    def delete(self, *, team_id: str) -> bool:
        """Delete the team and its roster rows in one transaction."""

        raise NotImplementedError

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Event


class EventRepository(Protocol):
    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def list_recent(self, *, limit: int) -> Sequence[Event]:
        """Events with the latest ``date_from`` first."""

        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        date_from: str,
        date_to: str,
        team_ids: list[str],
        team_overrides: Mapping[str, Any],
        created_by: Optional[str],
        now: int,
    ) -> str:
        raise NotImplementedError

    def update(self, *, event_id: str, changes: Mapping[str, Any], now: int) -> bool:
        """Apply changes to name, date_from, date_to, team_ids, team_overrides, overall_start_time, overall_end_time."""

        raise NotImplementedError

    def delete(self, *, event_id: str) -> bool:
        raise NotImplementedError

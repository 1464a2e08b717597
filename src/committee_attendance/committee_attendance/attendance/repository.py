from __future__ import annotations

from datetime import date
from typing import Callable, Collection, Optional, Protocol, Sequence

from .model import AttendanceLink, AttendanceRecord, RecordKey, RecordWrite

MergeFn = Callable[[Optional[AttendanceRecord]], RecordWrite]


class AttendanceRepository(Protocol):
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
    ) -> Sequence[AttendanceRecord]:
        """Records newest date first. ``team_ids`` restricts to a set of teams (admin scope)."""

        raise NotImplementedError

    def get_for_key(self, key: RecordKey) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, *, key: RecordKey, merge: MergeFn, now: int) -> AttendanceRecord:
        """Create or update the record for ``key``.

        ``merge`` receives the current record (None when the key is new) and runs
        inside the store's transaction with that row locked. Concurrent writers on
        the same key are serialized, so each merge sees the previous writer's result.
        """

        raise NotImplementedError


class AttendanceLinkRepository(Protocol):
    def create(self, *, team_id: str, secret: str, expires_at: int, now: int) -> AttendanceLink:
        raise NotImplementedError

    def find(self, *, secret: str, team_id: str) -> Optional[AttendanceLink]:
        raise NotImplementedError

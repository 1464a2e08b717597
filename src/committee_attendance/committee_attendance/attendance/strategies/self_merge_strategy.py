from __future__ import annotations

from typing import Optional, Sequence

from ..model import AttendanceRecord, RecordWrite
from .base import MergeStrategy


class SelfMergeStrategy(MergeStrategy):
    """Member marks only themselves present; entries written by others are left alone."""

    def __init__(self, *, actor_id: str, roster: Sequence[str]):
        self.actor_id = actor_id
        self.roster = tuple(roster)

    def merge(self, existing: Optional[AttendanceRecord]) -> RecordWrite:
        if existing is None:
            return RecordWrite(
                submitted_by=self.actor_id,
                present_ids=(self.actor_id,),
                absent_ids=tuple(mid for mid in self.roster if mid != self.actor_id),
            )

        present = existing.present_ids
        if self.actor_id not in present:
            present = present + (self.actor_id,)
        return RecordWrite(
            submitted_by=self.actor_id,
            present_ids=present,
            absent_ids=tuple(mid for mid in existing.absent_ids if mid != self.actor_id),
        )

from __future__ import annotations

from typing import Optional

from ..model import AttendanceRecord, RecordWrite
from .base import MergeStrategy


class OverwriteStrategy(MergeStrategy):
    """Leader/admin (or secure link) batch write: the submitted lists replace the stored ones."""

    def __init__(
        self,
        *,
        submitted_by: str,
        present_ids: tuple[str, ...],
        absent_ids: tuple[str, ...],
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        notes: Optional[str] = None,
    ):
        self.submitted_by = submitted_by
        self.present_ids = tuple(present_ids)
        self.absent_ids = tuple(absent_ids)
        self.start_time = start_time
        self.end_time = end_time
        self.notes = notes

    def merge(self, existing: Optional[AttendanceRecord]) -> RecordWrite:
        return RecordWrite(
            submitted_by=self.submitted_by,
            present_ids=self.present_ids,
            absent_ids=self.absent_ids,
            start_time=self.start_time,
            end_time=self.end_time,
            notes=self.notes,
        )

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..model import AttendanceRecord, RecordWrite


class MergeStrategy(ABC):
    """Strategy Pattern: encapsulate how a submission combines with the stored record."""

    @abstractmethod
    def merge(self, existing: Optional[AttendanceRecord]) -> RecordWrite:
        raise NotImplementedError

    def __call__(self, existing: Optional[AttendanceRecord]) -> RecordWrite:
        return self.merge(existing)

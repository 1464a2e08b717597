from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..core.constants import LINK_SUBMITTER
from .model import AttendanceSubmission
from .strategies.base import MergeStrategy
from .strategies.overwrite_strategy import OverwriteStrategy
from .strategies.self_merge_strategy import SelfMergeStrategy


@dataclass
class MergeStrategyFactory:
    """Factory Pattern: choose how a submission is merged into the stored record."""

    def for_submission(self, *, submission: AttendanceSubmission, actor_id: str, roster: Sequence[str]) -> MergeStrategy:
        if submission.member_self:
            return SelfMergeStrategy(actor_id=actor_id, roster=roster)
        return OverwriteStrategy(
            submitted_by=actor_id,
            present_ids=submission.present_ids,
            absent_ids=submission.absent_ids,
            start_time=submission.start_time,
            end_time=submission.end_time,
            notes=submission.notes,
        )

    def for_link(self, *, present_ids: Sequence[str], absent_ids: Sequence[str]) -> MergeStrategy:
        return OverwriteStrategy(
            submitted_by=LINK_SUBMITTER,
            present_ids=tuple(present_ids),
            absent_ids=tuple(absent_ids),
        )

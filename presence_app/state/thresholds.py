"""
Per-status soft limits and exceeded-flag evaluation.

Limits drive display emphasis only. Nothing here triggers a transition
or a notification.
"""

from typing import Mapping, Optional

from ..config.defaults import ThresholdParams
from ..models.status import DurationMap, StatusKey


class ThresholdTable:
    """Static mapping from status to an optional soft limit in seconds."""

    def __init__(self, limits: Mapping[StatusKey, int]):
        self._limits = dict(limits)

    @classmethod
    def from_params(cls, params: Optional[ThresholdParams] = None) -> "ThresholdTable":
        params = params or ThresholdParams()
        return cls({
            StatusKey.BREAK: params.break_seconds,
            StatusKey.LUNCH_TIME: params.lunch_time_seconds,
            StatusKey.OFFLINE: params.offline_seconds,
        })

    def limit(self, status: StatusKey) -> Optional[int]:
        return self._limits.get(status)


class ThresholdEvaluator:
    """Derives the exceeded flag per status from durations and limits."""

    def __init__(self, table: Optional[ThresholdTable] = None):
        self.table = table or ThresholdTable.from_params()

    def exceeded(self, status: StatusKey, durations: Mapping[StatusKey, int]) -> bool:
        """
        True when the status has a limit and strictly more seconds than it.

        Reaching the limit exactly is not exceeding it.
        """
        limit = self.table.limit(status)
        if limit is None:
            return False
        return durations.get(status, 0) > limit

    def exceeded_map(self, durations: DurationMap) -> dict[StatusKey, bool]:
        """Exceeded flag for every status that has a limit."""
        return {
            status: self.exceeded(status, durations)
            for status in StatusKey
            if self.table.limit(status) is not None
        }

"""
Statistics collector for one run.
"""

from collections import Counter
from types import MappingProxyType

from .models import Outcome, RunStatistics, SkipReason


class StatisticsCollector:
    """Counters only go up. Bytes are counted for unique and duplicate moves only."""

    def __init__(self):
        self._counts: Counter[Outcome] = Counter()
        self._skips: Counter[SkipReason] = Counter()
        self._bytes_moved = 0

    def record(self, outcome: Outcome, size: int = 0, reason: SkipReason | None = None) -> None:
        self._counts[outcome] += 1
        if outcome is Outcome.SKIPPED and reason is not None:
            self._skips[reason] += 1
        if outcome in (Outcome.UNIQUE, Outcome.DUPLICATE):
            self._bytes_moved += max(size, 0)

    def snapshot(self) -> RunStatistics:
        return RunStatistics(
            unique=self._counts[Outcome.UNIQUE],
            duplicate=self._counts[Outcome.DUPLICATE],
            skipped=self._counts[Outcome.SKIPPED],
            errors=self._counts[Outcome.ERROR],
            bytes_moved=self._bytes_moved,
            skipped_by_reason=MappingProxyType(dict(self._skips)),
        )

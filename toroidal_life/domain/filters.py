"""Run-termination detectors over successive live-cell snapshots."""

from __future__ import annotations

from collections import deque
from enum import Enum

Snapshot = frozenset[tuple[int, int]]


class TerminationReason(str, Enum):
    """Termination reason labels persisted in run metadata."""

    STILL_LIFE = "still_life"
    OSCILLATION = "oscillation"
    EXTINCTION = "extinction"


class HaltDetector:
    """Detect N consecutive unchanged snapshots."""

    def __init__(self, window: int) -> None:
        if window < 1:
            raise ValueError("window must be >= 1")
        self.window = window
        self._last_snapshot: Snapshot | None = None
        self._unchanged_count = 0

    def observe(self, snapshot: Snapshot) -> bool:
        """Return True once snapshot has remained unchanged for `window` checks."""
        if self._last_snapshot is None:
            self._last_snapshot = snapshot
            return False

        if snapshot == self._last_snapshot:
            self._unchanged_count += 1
        else:
            self._unchanged_count = 0
            self._last_snapshot = snapshot

        return self._unchanged_count >= self.window


class ShortPeriodDetector:
    """Detect oscillation with period in [2, max_period] over two full cycles.

    Still lifes (period 1) are left to HaltDetector and never trigger here.
    """

    def __init__(self, max_period: int, history_size: int) -> None:
        if max_period < 2:
            raise ValueError("max_period must be >= 2")
        if history_size < max_period * 2:
            raise ValueError("history_size must be >= 2 * max_period")
        self.max_period = max_period
        self._history: deque[Snapshot] = deque(maxlen=history_size)

    def observe(self, snapshot: Snapshot) -> bool:
        """Return True when the latest snapshots repeat with a period of 2..max_period."""
        self._history.append(snapshot)
        history = list(self._history)
        if len(history) < 2 or history[-1] == history[-2]:
            return False
        for period in range(2, self.max_period + 1):
            if len(history) < period * 2:
                break
            if history[-period:] == history[-2 * period : -period]:
                return True
        return False


class ExtinctionDetector:
    """Detect a board with no live cells."""

    def observe(self, population: int) -> bool:
        return population == 0

"""
Time sources for HOS evaluation.

Provides the wall clock used in production and a deterministic virtual
clock for compliance testing, so long durations can be simulated
instantly instead of with real-time waits.
"""

import math
from abc import ABC, abstractmethod

from django.utils import timezone

MINUTE_MS = 60 * 1000


class TimeSource(ABC):
    """Anything that can report the current epoch time in milliseconds."""

    @abstractmethod
    def now_epoch_ms(self) -> int:
        """Return the current epoch time in milliseconds."""


class SystemClock(TimeSource):
    """
    Wall clock truncated to the minute.

    HOS durations must be whole minutes, so the current time is floored to
    the minute boundary.
    """

    def now_epoch_ms(self) -> int:
        now_ms = int(timezone.now().timestamp() * 1000)
        return now_ms - (now_ms % MINUTE_MS)


class VirtualClock(TimeSource):
    """Deterministic clock that only moves when told to."""

    def __init__(self, start_epoch_ms: int = 0):
        self._validate_epoch_ms(start_epoch_ms, "start_epoch_ms")
        self._current_epoch_ms = start_epoch_ms

    def now_epoch_ms(self) -> int:
        return self._current_epoch_ms

    def advance_minutes(self, minutes: int) -> None:
        """
        Advance the clock by a number of minutes.

        Args:
            minutes: Minutes to advance (integer >= 0)
        """
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 0:
            raise ValueError(f"Invalid minutes to advance: {minutes!r}")
        self._current_epoch_ms += minutes * MINUTE_MS

    def set_epoch_ms(self, ts: int) -> None:
        self._validate_epoch_ms(ts, "epoch ms")
        self._current_epoch_ms = ts

    @staticmethod
    def _validate_epoch_ms(value, label: str) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Invalid {label}: {value!r}")
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Invalid {label}: {value!r}")

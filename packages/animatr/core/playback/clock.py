"""Millisecond clocks for playback timing.

Playback only ever asks "what time is it now, in milliseconds?". Real
playback uses a monotonic clock; tests and offline simulation use a fake
clock that only moves when told to.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

from animatr.core.utils.math import is_real_number


@runtime_checkable
class Clock(Protocol):
    """Source of the current time in milliseconds."""

    def now_ms(self) -> float:
        """Return the current time in milliseconds."""
        ...


class MonotonicClock:
    """Wall clock based on time.perf_counter (never goes backwards)."""

    def now_ms(self) -> float:
        return time.perf_counter() * 1000.0


class FakeClock:
    """Deterministic clock for tests and offline simulation.

    Example:
        >>> clock = FakeClock()
        >>> clock.advance(16.0)
        16.0
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now_ms = float(start_ms)

    def now_ms(self) -> float:
        return self._now_ms

    def advance(self, ms: float) -> float:
        """Move time forward by `ms` and return the new time."""
        if not is_real_number(ms):
            raise TypeError(f"ms must be a number, got {ms!r}")
        if ms < 0:
            raise ValueError(f"FakeClock cannot move backwards (ms={ms})")
        self._now_ms += float(ms)
        return self._now_ms

    def set(self, now_ms: float) -> None:
        """Jump to an absolute time (must not be earlier than the current time)."""
        if now_ms < self._now_ms:
            raise ValueError(f"FakeClock cannot move backwards ({now_ms} < {self._now_ms})")
        self._now_ms = float(now_ms)

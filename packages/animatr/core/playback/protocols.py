"""Protocol shared by everything that can be played."""

from __future__ import annotations

from concurrent.futures import Future
from typing import Protocol, runtime_checkable

from animatr.core.playback.playback import PlaybackState
from animatr.core.playback.scheduler import FrameCallback


@runtime_checkable
class Playable(Protocol):
    """Capability interface for single, composite, and kinetic values.

    Uses Protocol for structural subtyping (no inheritance required), so a
    composite can hold any mix of values that implement these methods.
    """

    @property
    def state(self) -> PlaybackState:
        """Current lifecycle state."""
        ...

    def play(self, duration_ms: float, on_frame: FrameCallback | None = None) -> Future[bool]:
        """Play for `duration_ms`, calling `on_frame` once per delivered frame.

        Returns:
            Completion signal resolving True on natural completion, False
            when interrupted by reset().
        """
        ...

    def pause(self) -> None:
        """Freeze at the current value (only while playing)."""
        ...

    def resume(self) -> None:
        """Continue exactly where pause() left off (only while paused)."""
        ...

    def reset(self) -> None:
        """Return to the initial state, resolving any outstanding signal False."""
        ...

    def value(self) -> float:
        """Current numeric value, recomputed on every call."""
        ...

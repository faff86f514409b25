"""Playback state machine shared by every animated value.

A Playback tracks one play window: when it started, how long it lasts,
and how far through it was when paused. It registers a tick with the frame
scheduler while playing and resolves a completion signal exactly once per
play cycle: True when the window runs out, False when the cycle is
interrupted by reset() or replaced by a new play().

States:
    UNSTARTED -> play() -> PLAYING
    PLAYING   -> pause() -> PAUSED -> resume() -> PLAYING
    PLAYING   -> window elapsed -> UNSTARTED (signal resolves True)
    any       -> reset() -> UNSTARTED (outstanding signal resolves False)

There is no terminal state: a finished playback can be played again.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import math
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

from animatr.core.playback.scheduler import FrameCallback, FrameScheduler, get_default_scheduler
from animatr.core.utils.math import clamp, is_real_number

logger = logging.getLogger(__name__)

CompletionSignal: TypeAlias = Future


class PlaybackState(str, Enum):
    """Lifecycle state of a playable value."""

    UNSTARTED = "unstarted"
    PLAYING = "playing"
    PAUSED = "paused"


def validate_duration(duration_ms: object) -> float:
    """Validate a play duration in milliseconds.

    Raises:
        TypeError: If the duration is not a real number (bools are rejected).
        ValueError: If the duration is NaN or negative.
    """
    if not is_real_number(duration_ms):
        raise TypeError(f"duration must be a number of milliseconds, got {duration_ms!r}")
    duration = float(duration_ms)  # type: ignore[arg-type]
    if math.isnan(duration) or duration < 0:
        raise ValueError(f"duration must be >= 0 ms, got {duration_ms}")
    return duration


def wait(signal: Future[bool]) -> asyncio.Future[bool]:
    """Adapt a completion signal so asyncio code can `await` it.

    Must be called from a running event loop.
    """
    return asyncio.wrap_future(signal)


def _settle(signal: Future[bool] | None, result: bool) -> None:
    if signal is not None and not signal.done():
        signal.set_result(result)


@dataclass(eq=False)
class _PlayCycle:
    """Per-play bookkeeping; ticks from a replaced cycle are ignored."""

    on_frame: FrameCallback | None
    signal: Future[bool] = field(default_factory=Future)
    tick_queued: bool = False


_Snapshot: TypeAlias = tuple[
    PlaybackState, float | None, float | None, float | None, _PlayCycle | None, Future[bool] | None
]


class Playback:
    """Play/pause/resume/reset lifecycle with exactly-once completion.

    Args:
        scheduler: Frame scheduler providing frames and the clock
            (default: the process-wide scheduler).
        before_stop: Called while still PLAYING whenever playback is about
            to stop (pause or natural completion), so the owner can freeze
            its current value before timing information is discarded.
        name: Label used in log messages.
    """

    def __init__(
        self,
        scheduler: FrameScheduler | None = None,
        *,
        before_stop: Callable[[], None] | None = None,
        name: str | None = None,
    ) -> None:
        self._scheduler = scheduler if scheduler is not None else get_default_scheduler()
        self._before_stop = before_stop
        self.name = name or f"playback-{id(self):x}"

        self.state = PlaybackState.UNSTARTED
        self.duration_ms: float | None = None
        self._anchor_ms: float | None = None
        self._paused_offset_ms: float | None = None
        self._cycle: _PlayCycle | None = None
        self._signal: Future[bool] | None = None

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def completion(self) -> Future[bool] | None:
        """Signal of the current (or most recent) play cycle, None before the first play."""
        return self._signal

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    def now(self) -> float:
        return self._scheduler.now()

    def elapsed_ms(self) -> float:
        """Played time of the current window (frozen while paused, 0 when unstarted)."""
        if self.state is PlaybackState.PLAYING and self._anchor_ms is not None:
            return self.now() - self._anchor_ms
        if self.state is PlaybackState.PAUSED and self._paused_offset_ms is not None:
            return self._paused_offset_ms
        return 0.0

    def progress(self) -> float:
        """Elapsed fraction of the play window, clamped to [0, 1]."""
        if self.duration_ms is None:
            return 0.0
        if self.duration_ms == 0:
            return 1.0
        return clamp(self.elapsed_ms() / self.duration_ms, 0.0, 1.0)

    def play(self, duration_ms: float, on_frame: FrameCallback | None = None) -> Future[bool]:
        """Start a play window of `duration_ms`.

        A no-op returning the existing signal when already playing. The tick
        runs once immediately, then once per delivered frame; `on_frame` is
        invoked at the start of every tick.

        Raises:
            TypeError: If the duration is not a number.
            ValueError: If the duration is NaN or negative.
            RuntimeError: If the scheduler cannot request a frame (e.g. the
                default asyncio host with no running loop). The playback is
                left as it was before the call.
        """
        if self.state is PlaybackState.PLAYING and self._signal is not None:
            return self._signal

        duration = validate_duration(duration_ms)
        previous = self._snapshot()
        previous_signal = self._signal

        cycle = _PlayCycle(on_frame=on_frame)
        self.state = PlaybackState.PLAYING
        self.duration_ms = duration
        self._anchor_ms = self.now()
        self._paused_offset_ms = None
        self._cycle = cycle
        self._signal = cycle.signal
        logger.debug("%s: play for %.1f ms", self.name, duration)

        stranded = False
        try:
            self._tick(cycle)
        except Exception:
            stranded = self._is_stranded(cycle)
            if stranded:
                self._restore(previous)
            raise
        finally:
            if not stranded:
                # A paused cycle being replaced counts as interrupted
                _settle(previous_signal, False)
        return cycle.signal

    def pause(self) -> None:
        """Freeze elapsed time. Only effective while playing."""
        if self.state is not PlaybackState.PLAYING or self._anchor_ms is None:
            return
        if self._before_stop is not None:
            self._before_stop()
        self._paused_offset_ms = self.now() - self._anchor_ms
        self._anchor_ms = None
        self.state = PlaybackState.PAUSED
        logger.debug("%s: paused at %.1f ms", self.name, self._paused_offset_ms)

    def resume(self) -> None:
        """Continue from the paused offset. Only effective while paused."""
        if self.state is not PlaybackState.PAUSED or self._paused_offset_ms is None:
            return
        previous = self._snapshot()
        self._anchor_ms = self.now() - self._paused_offset_ms
        self._paused_offset_ms = None
        self.state = PlaybackState.PLAYING
        logger.debug("%s: resumed", self.name)
        if self._cycle is None:
            return
        cycle = self._cycle
        try:
            self._tick(cycle)
        except Exception:
            if self._is_stranded(cycle):
                self._restore(previous)
            raise

    def reset(self) -> None:
        """Interrupt the current cycle and return to UNSTARTED."""
        _settle(self._signal, False)
        self._clear()
        logger.debug("%s: reset", self.name)

    def reanchor(self) -> None:
        """Restart the current play window at the present moment."""
        if self.state is PlaybackState.PLAYING:
            self._anchor_ms = self.now()
        elif self.state is PlaybackState.PAUSED:
            self._paused_offset_ms = 0.0

    def _clear(self) -> None:
        self.state = PlaybackState.UNSTARTED
        self.duration_ms = None
        self._anchor_ms = None
        self._paused_offset_ms = None
        self._cycle = None

    def _snapshot(self) -> _Snapshot:
        return (
            self.state,
            self.duration_ms,
            self._anchor_ms,
            self._paused_offset_ms,
            self._cycle,
            self._signal,
        )

    def _restore(self, snapshot: _Snapshot) -> None:
        (
            self.state,
            self.duration_ms,
            self._anchor_ms,
            self._paused_offset_ms,
            self._cycle,
            self._signal,
        ) = snapshot
        logger.debug("%s: no frame could be requested; state restored", self.name)

    def _is_stranded(self, cycle: _PlayCycle) -> bool:
        """True when `cycle` is still PLAYING but has no tick queued to drive it."""
        return cycle is self._cycle and self.state is PlaybackState.PLAYING and not cycle.tick_queued

    def _tick(self, cycle: _PlayCycle) -> None:
        # Stale: replaced, reset, or a frame queued before pause()
        if cycle is not self._cycle or self.state is not PlaybackState.PLAYING:
            return
        try:
            if cycle.on_frame is not None:
                cycle.on_frame()
        finally:
            # Runs even when on_frame raises, so the cycle still completes
            self._advance(cycle)

    def _advance(self, cycle: _PlayCycle) -> None:
        # on_frame may have paused, reset or replayed us
        if cycle is not self._cycle or self.state is not PlaybackState.PLAYING:
            return
        assert self.duration_ms is not None
        if self.elapsed_ms() >= self.duration_ms:
            self._finish(cycle)
        elif not cycle.tick_queued:
            self._scheduler.schedule(functools.partial(self._frame_tick, cycle))
            cycle.tick_queued = True

    def _frame_tick(self, cycle: _PlayCycle) -> None:
        cycle.tick_queued = False
        self._tick(cycle)

    def _finish(self, cycle: _PlayCycle) -> None:
        self.pause()
        self._clear()
        logger.debug("%s: finished", self.name)
        _settle(cycle.signal, True)

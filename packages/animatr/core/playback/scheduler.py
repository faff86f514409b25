"""Unified frame loop.

Every playing value wants to run a little work once per display refresh.
Rather than each value asking the host for its own frame, the FrameScheduler
collects callbacks into a queue and asks the host for a single frame per
batch. Callbacks scheduled while a batch is running always land in the next
batch, so the host gets control back every frame.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from animatr.core.playback.clock import Clock, MonotonicClock

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]

DEFAULT_FRAME_INTERVAL_MS = 1000.0 / 60.0


@runtime_checkable
class FrameHost(Protocol):
    """Host frame-delivery primitive: invoke a callback once on the next refresh."""

    def request_frame(self, callback: FrameCallback) -> None:
        """Arrange for `callback` to run once on the next display refresh."""
        ...


class ManualFrameHost:
    """Frame host that only delivers frames when asked to.

    Used by tests and offline simulation together with FakeClock.

    Example:
        >>> host = ManualFrameHost()
        >>> host.request_frame(lambda: None)
        >>> host.deliver()
        True
    """

    def __init__(self) -> None:
        self._requests: list[FrameCallback] = []
        self.frames_delivered = 0

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._requests)

    def request_frame(self, callback: FrameCallback) -> None:
        self._requests.append(callback)

    def deliver(self) -> bool:
        """Deliver one frame.

        Returns:
            True if any callback was waiting, False if there was nothing to run.
        """
        if not self._requests:
            return False
        requests, self._requests = self._requests, []
        self.frames_delivered += 1
        for callback in requests:
            callback()
        return True


class AsyncioFrameHost:
    """Frame host driven by an asyncio event loop at a fixed frame interval.

    Args:
        frame_interval_ms: Delay between frames in milliseconds (default ~60 fps).
        loop: Event loop to use. Defaults to the loop running when a frame
            is requested.
    """

    def __init__(
        self,
        frame_interval_ms: float = DEFAULT_FRAME_INTERVAL_MS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if frame_interval_ms <= 0:
            raise ValueError(f"frame_interval_ms must be > 0, got {frame_interval_ms}")
        self.frame_interval_ms = float(frame_interval_ms)
        self._loop = loop

    def request_frame(self, callback: FrameCallback) -> None:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        loop.call_later(self.frame_interval_ms / 1000.0, callback)


class FrameScheduler:
    """Coalesces per-frame work from all active values into one host frame.

    Args:
        host: Frame-delivery primitive (default: AsyncioFrameHost).
        clock: Millisecond clock shared by everything driven by this
            scheduler (default: MonotonicClock).
    """

    def __init__(self, host: FrameHost | None = None, clock: Clock | None = None) -> None:
        self._host: FrameHost = host if host is not None else AsyncioFrameHost()
        self._clock: Clock = clock if clock is not None else MonotonicClock()
        self._queue: list[FrameCallback] = []
        self._frame_requested = False
        self.frames_delivered = 0

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def pending(self) -> int:
        """Number of callbacks queued for the next batch."""
        return len(self._queue)

    @property
    def is_idle(self) -> bool:
        """True when no frame is requested or running."""
        return not self._frame_requested

    def now(self) -> float:
        """Current time in milliseconds."""
        return self._clock.now_ms()

    def schedule(self, callback: FrameCallback) -> None:
        """Queue `callback` for the next batch, requesting a frame if none is in flight.

        Raises:
            RuntimeError: From AsyncioFrameHost when no event loop is running.
                Any host failure drops the callback and leaves the scheduler idle.
        """
        self._queue.append(callback)
        if self._frame_requested:
            return
        self._frame_requested = True
        try:
            self._host.request_frame(self._run_batch)
        except Exception:
            self._frame_requested = False
            self._queue.remove(callback)
            raise

    def _run_batch(self) -> None:
        batch, self._queue = self._queue, []
        self.frames_delivered += 1
        try:
            for callback in batch:
                try:
                    callback()
                except Exception:
                    logger.exception("Frame callback %r raised", callback)
        finally:
            self._frame_requested = False
            if self._queue:
                self._frame_requested = True
                try:
                    self._host.request_frame(self._run_batch)
                except Exception:
                    # Queued work stays put; the next schedule() requests again
                    self._frame_requested = False
                    logger.exception("Could not request the next frame")


_default_scheduler: FrameScheduler | None = None


def get_default_scheduler() -> FrameScheduler:
    """Return the process-wide scheduler, creating it on first use."""
    global _default_scheduler
    if _default_scheduler is None:
        logger.debug("Creating default frame scheduler")
        _default_scheduler = FrameScheduler(AsyncioFrameHost(), MonotonicClock())
    return _default_scheduler


def set_default_scheduler(scheduler: FrameScheduler | None) -> None:
    """Replace the process-wide scheduler (None drops it so the next use recreates it)."""
    global _default_scheduler
    _default_scheduler = scheduler

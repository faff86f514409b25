"""Shared pytest fixtures for animatr tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
import logging

import pytest

from animatr.core.playback.clock import FakeClock
from animatr.core.playback.scheduler import FrameScheduler, ManualFrameHost, set_default_scheduler

# ============================================================================
# Frame Loop Fixtures
# ============================================================================


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock starting at 0 ms that only moves when advanced."""
    return FakeClock()


@pytest.fixture
def frame_host() -> ManualFrameHost:
    """Frame host that delivers frames on demand."""
    return ManualFrameHost()


@pytest.fixture
def scheduler(frame_host: ManualFrameHost, fake_clock: FakeClock) -> FrameScheduler:
    """Deterministic scheduler wired to the fake clock and manual host."""
    return FrameScheduler(frame_host, fake_clock)


@pytest.fixture
def step(fake_clock: FakeClock, frame_host: ManualFrameHost) -> Callable[..., int]:
    """Advance the clock and deliver frames.

    Returns a callable `step(ms=16.0, frames=1)` that returns the number of
    frames actually delivered.
    """

    def _step(ms: float = 16.0, frames: int = 1) -> int:
        delivered = 0
        for _ in range(frames):
            fake_clock.advance(ms)
            if frame_host.deliver():
                delivered += 1
        return delivered

    return _step


class FlakyFrameHost(ManualFrameHost):
    """Manual frame host whose frame requests fail while `failing` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.failing = True

    def request_frame(self, callback: Callable[[], None]) -> None:
        if self.failing:
            raise RuntimeError("no running event loop")
        super().request_frame(callback)


@pytest.fixture
def flaky_host() -> FlakyFrameHost:
    """Frame host that refuses requests until `failing` is cleared."""
    return FlakyFrameHost()


@pytest.fixture
def flaky_scheduler(flaky_host: FlakyFrameHost, fake_clock: FakeClock) -> FrameScheduler:
    """Scheduler whose host cannot deliver frames yet."""
    return FrameScheduler(flaky_host, fake_clock)


@pytest.fixture(autouse=True)
def _isolate_default_scheduler() -> Iterator[None]:
    """Drop any process-wide scheduler a test created."""
    yield
    set_default_scheduler(None)


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Undo configure_logging() so later tests keep pytest's handlers."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)

"""Offline playback: drive values with a fake clock and a manual frame host.

Simulation wires a FakeClock, a ManualFrameHost and a FrameScheduler
together so animations can be stepped frame by frame without an event loop,
for previews, the CLI and tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from animatr.core.curves.library import EasingSpec, NamedCurve
from animatr.core.playback.animated_value import AnimatedValue
from animatr.core.playback.clock import FakeClock
from animatr.core.playback.scheduler import (
    DEFAULT_FRAME_INTERVAL_MS,
    FrameScheduler,
    ManualFrameHost,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_FRAMES = 10_000


@dataclass(frozen=True)
class Sample:
    """A value observed at a point in time."""

    t_ms: float
    value: float


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of an offline playback run."""

    samples: list[Sample]
    frames: int
    completed: bool | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def final_value(self) -> float | None:
        return self.samples[-1].value if self.samples else None


class Simulation:
    """Deterministic frame loop for offline playback.

    Args:
        frame_ms: Time the fake clock advances before each frame.
        start_ms: Initial fake-clock time.

    Example:
        >>> sim = Simulation(frame_ms=16)
        >>> x = AnimatedValue(0, 300, scheduler=sim.scheduler)
        >>> done = x.play(300)
        >>> samples = sim.run(x.value)
        >>> done.result()
        True
    """

    def __init__(self, frame_ms: float = DEFAULT_FRAME_INTERVAL_MS, start_ms: float = 0.0) -> None:
        if frame_ms <= 0:
            raise ValueError(f"frame_ms must be > 0, got {frame_ms}")
        self.frame_ms = float(frame_ms)
        self.clock = FakeClock(start_ms)
        self.host = ManualFrameHost()
        self.scheduler = FrameScheduler(self.host, self.clock)

    def now(self) -> float:
        return self.clock.now_ms()

    def step(self) -> bool:
        """Advance the clock by one frame step and deliver a frame.

        Returns:
            True if a frame had been requested and was delivered.
        """
        self.clock.advance(self.frame_ms)
        return self.host.deliver()

    def run(
        self,
        probe: Callable[[], float] | None = None,
        *,
        max_frames: int = DEFAULT_MAX_FRAMES,
        until_ms: float | None = None,
        on_step: Callable[[float], None] | None = None,
    ) -> list[Sample]:
        """Deliver frames until the scheduler goes idle.

        Args:
            probe: Read after every frame (and once before the first) to
                record a sample.
            max_frames: Hard cap on frames delivered by this call.
            until_ms: Stop once the clock reaches this time.
            on_step: Called with the clock time before each frame, e.g. to
                retarget a kinetic value.

        Returns:
            Samples in time order (empty without a probe).
        """
        samples: list[Sample] = []
        if probe is not None:
            samples.append(Sample(self.now(), probe()))

        frames = 0
        while not self.scheduler.is_idle and frames < max_frames:
            if until_ms is not None and self.now() >= until_ms:
                break
            if on_step is not None:
                on_step(self.now())
            self.step()
            frames += 1
            if probe is not None:
                samples.append(Sample(self.now(), probe()))

        if frames >= max_frames and not self.scheduler.is_idle:
            logger.warning("Simulation stopped after %d frames with work still pending", frames)
        return samples


def simulate(
    start: float,
    end: float,
    duration_ms: float,
    ease: EasingSpec | None = NamedCurve.LINEAR,
    *,
    frame_ms: float = DEFAULT_FRAME_INTERVAL_MS,
    max_frames: int = DEFAULT_MAX_FRAMES,
) -> SimulationResult:
    """Play a single AnimatedValue offline and record one sample per frame.

    Raises:
        TypeError: If the bounds, easing or duration have the wrong type.
        ValueError: If the duration or frame step is invalid.
    """
    sim = Simulation(frame_ms)
    value = AnimatedValue(start, end, ease, scheduler=sim.scheduler, name="simulation")
    signal = value.play(duration_ms)
    samples = sim.run(value.value, max_frames=max_frames)

    warnings: list[str] = []
    if not signal.done():
        warnings.append(f"playback did not complete within {max_frames} frames")
    return SimulationResult(
        samples=samples,
        frames=sim.host.frames_delivered,
        completed=signal.result() if signal.done() else None,
        warnings=warnings,
    )

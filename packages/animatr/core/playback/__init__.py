"""Playback: frame scheduling, the play/pause/resume/reset lifecycle and animated values."""

from animatr.core.playback.animated_value import AnimatedValue
from animatr.core.playback.clock import Clock, FakeClock, MonotonicClock
from animatr.core.playback.composite import CompositeAnimatedValue, compose
from animatr.core.playback.kinetic import KineticValue
from animatr.core.playback.playback import (
    CompletionSignal,
    Playback,
    PlaybackState,
    validate_duration,
    wait,
)
from animatr.core.playback.protocols import Playable
from animatr.core.playback.scheduler import (
    DEFAULT_FRAME_INTERVAL_MS,
    AsyncioFrameHost,
    FrameCallback,
    FrameHost,
    FrameScheduler,
    ManualFrameHost,
    get_default_scheduler,
    set_default_scheduler,
)
from animatr.core.playback.simulation import Sample, Simulation, SimulationResult, simulate

__all__ = [
    "DEFAULT_FRAME_INTERVAL_MS",
    "AnimatedValue",
    "AsyncioFrameHost",
    "Clock",
    "CompletionSignal",
    "CompositeAnimatedValue",
    "FakeClock",
    "FrameCallback",
    "FrameHost",
    "FrameScheduler",
    "KineticValue",
    "ManualFrameHost",
    "MonotonicClock",
    "Playable",
    "Playback",
    "PlaybackState",
    "Sample",
    "Simulation",
    "SimulationResult",
    "compose",
    "get_default_scheduler",
    "set_default_scheduler",
    "simulate",
    "validate_duration",
    "wait",
]

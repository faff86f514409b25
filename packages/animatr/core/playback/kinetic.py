"""Spring-driven values that can be redirected mid-flight.

A KineticValue has no fixed destination. Each `play_to()` bends the current
trajectory toward a new target by re-solving the spring curve with the
velocity the value has at that instant, so both position and velocity stay
continuous through the redirect.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future

from animatr.core.config.models import KineticValueConfig
from animatr.core.curves.models import EasingFn
from animatr.core.curves.spring import SpringCurve, solve_spring
from animatr.core.playback.playback import Playback, PlaybackState
from animatr.core.playback.scheduler import FrameCallback, FrameScheduler
from animatr.core.utils.math import is_real_number, lerp

logger = logging.getLogger(__name__)

# Normalized-time step for the backward-difference velocity estimate
VELOCITY_EPSILON = 1e-4


def _progress_curve(curve: SpringCurve) -> EasingFn:
    """Turn a displacement curve (1 -> 0) into a progress curve (0 -> 1)."""

    def ease(t: float) -> float:
        return 1.0 - curve(t)

    return ease


class KineticValue:
    """A value that springs toward whatever target it was last given.

    Args:
        start: Initial value.
        end: Initial target (defaults to start).
        stiffness: Half cycles before settling; truncated toward zero.
        damping: Damping ratio in [0, 1).
        duration: Sampling window per retarget, in milliseconds.
        scheduler: Frame scheduler (default: the process-wide scheduler).
        name: Label used in log messages.

    Raises:
        pydantic.ValidationError: If any option is invalid.

    Example:
        >>> x = KineticValue(start=0, stiffness=3, damping=0.6)
        >>> x.play_to(420, on_frame=component.render)
        >>> x.play_to(80)  # redirect while still moving
    """

    def __init__(
        self,
        start: float = 0.0,
        end: float | None = None,
        stiffness: float = 3,
        damping: float = 0.8,
        duration: float = 1000.0,
        *,
        scheduler: FrameScheduler | None = None,
        name: str | None = None,
    ) -> None:
        config = KineticValueConfig(
            start=start,
            end=end,
            stiffness=stiffness,
            damping=damping,
            duration=duration,
        )
        self._setup(config, scheduler=scheduler, name=name)

    @classmethod
    def from_config(
        cls,
        config: KineticValueConfig,
        *,
        scheduler: FrameScheduler | None = None,
        name: str | None = None,
    ) -> KineticValue:
        """Build a value from a validated preset."""
        value = cls.__new__(cls)
        value._setup(config, scheduler=scheduler, name=name)
        return value

    def _setup(
        self,
        config: KineticValueConfig,
        *,
        scheduler: FrameScheduler | None,
        name: str | None,
    ) -> None:
        self.start = config.start
        self.end = config.end if config.end is not None else config.start
        self.stiffness = config.stiffness
        self.damping = config.damping
        self.dyn_duration_ms = config.duration

        self._curve = solve_spring(self.damping, self.stiffness)
        self.ease: EasingFn = _progress_curve(self._curve)
        self._fill_state = self.start
        self._playback = Playback(scheduler, before_stop=self._freeze, name=name or "kinetic-value")

    @property
    def state(self) -> PlaybackState:
        return self._playback.state

    @property
    def playback(self) -> Playback:
        return self._playback

    @property
    def curve(self) -> SpringCurve:
        """Displacement curve of the active trajectory."""
        return self._curve

    @property
    def fill_state(self) -> float:
        return self._fill_state

    def value(self) -> float:
        if not self._playback.is_playing:
            return self._fill_state
        return lerp(self.start, self.end, self.ease(self._playback.progress()))

    def velocity(self) -> float:
        """Current velocity in value units per millisecond (0 when not playing)."""
        return (self.end - self.start) * self._progress_velocity() / self.dyn_duration_ms

    def play_to(self, end: float, on_frame: FrameCallback | None = None) -> Future[bool]:
        """Spring toward a new target, starting playback if needed.

        While already playing the trajectory is redirected in place and
        `on_frame` is ignored; the existing completion signal is returned.

        Raises:
            TypeError: If the target is not a number.
        """
        if not is_real_number(end):
            raise TypeError(f"target must be a number, got {end!r}")
        new_end = float(end)

        current = self.value()
        progress_velocity = self._progress_velocity()
        span = new_end - current
        if span == 0:
            scaled_velocity = 0.0
        else:
            # Re-express the velocity relative to the new displacement range
            scaled_velocity = progress_velocity * (self.end - self.start) / span

        self._curve = solve_spring(
            self.damping,
            self.stiffness,
            initial_position=1.0,
            initial_velocity=-scaled_velocity,
        )
        self.ease = _progress_curve(self._curve)
        self.start = current
        self.end = new_end
        logger.debug(
            "%s: retarget %.4g -> %.4g (progress velocity %.4g)",
            self._playback.name,
            current,
            new_end,
            scaled_velocity,
        )

        if self._playback.is_playing:
            self._playback.reanchor()
            signal = self._playback.completion
            assert signal is not None
            return signal

        self._fill_state = current
        return self._playback.play(self.dyn_duration_ms, on_frame)

    def play(self, duration_ms: float, on_frame: FrameCallback | None = None) -> Future[bool]:
        """Unsupported: kinetic values have no fixed end state. Use play_to()."""
        logger.warning(
            "%s: play() is not supported on a KineticValue; use play_to(target) instead",
            self._playback.name,
        )
        signal = self._playback.completion
        if signal is not None:
            return signal
        unplayed: Future[bool] = Future()
        unplayed.set_result(False)
        return unplayed

    def pause(self) -> None:
        self._playback.pause()

    def resume(self) -> None:
        self._playback.resume()

    def reset(self) -> None:
        """Unsupported: a spring has no end state to reset to."""
        logger.warning(
            "%s: reset() is not supported on a KineticValue; use play_to(target) instead",
            self._playback.name,
        )

    def _progress_velocity(self) -> float:
        """Backward-difference slope of the progress curve at the current instant."""
        if not self._playback.is_playing:
            return 0.0
        elapsed = self._playback.elapsed_ms() / self.dyn_duration_ms
        return (self.ease(elapsed) - self.ease(elapsed - VELOCITY_EPSILON)) / VELOCITY_EPSILON

    def _freeze(self) -> None:
        self._fill_state = self.value()

    def __repr__(self) -> str:
        return (
            f"KineticValue(start={self.start:.4g}, end={self.end:.4g}, "
            f"state={self.state.value}, value={self.value():.4g})"
        )

"""A single numeric value animated between two bounds with an easing curve."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import TYPE_CHECKING

from animatr.core.curves.library import EasingSpec, NamedCurve, resolve_easing
from animatr.core.curves.models import EasingFn
from animatr.core.playback.playback import Playback, PlaybackState
from animatr.core.playback.scheduler import FrameCallback, FrameScheduler
from animatr.core.utils.math import is_real_number, lerp

if TYPE_CHECKING:
    from animatr.core.config.models import AnimatedValueConfig

logger = logging.getLogger(__name__)


class AnimatedValue:
    """A value that moves from `start` to `end` over a play window.

    Most often an AnimatedValue drives one visual property of a component
    (a translation, a scale, an opacity). Its value is recomputed from the
    clock on every `value()` call while playing; otherwise the frozen fill
    state is returned.

    Args:
        start: Value before playback and after reset.
        end: Value at the end of the play window.
        ease: Named curve, custom easing function, or four cubic-bezier
            control points (resolved once, here).
        scheduler: Frame scheduler (default: the process-wide scheduler).
        name: Label used in log messages.

    Example:
        >>> x = AnimatedValue(start=0, end=300, ease=NamedCurve.EASE_OUT)
        >>> done = x.play(400, on_frame=component.render)
        >>> x.value()  # read inside render
    """

    CURVES = NamedCurve

    def __init__(
        self,
        start: float = 0.0,
        end: float = 1.0,
        ease: EasingSpec | None = NamedCurve.LINEAR,
        *,
        scheduler: FrameScheduler | None = None,
        name: str | None = None,
    ) -> None:
        for label, bound in (("start", start), ("end", end)):
            if not is_real_number(bound):
                raise TypeError(f"{label} must be a number, got {bound!r}")
        self.start = float(start)
        self.end = float(end)
        self.ease: EasingFn = resolve_easing(ease)
        self._fill_state = self.start
        self._playback = Playback(scheduler, before_stop=self._freeze, name=name or "animated-value")

    @classmethod
    def from_config(
        cls,
        config: AnimatedValueConfig,
        *,
        scheduler: FrameScheduler | None = None,
        name: str | None = None,
    ) -> AnimatedValue:
        """Build a value from a validated preset."""
        return cls(config.start, config.end, config.ease, scheduler=scheduler, name=name)

    @property
    def state(self) -> PlaybackState:
        return self._playback.state

    @property
    def playback(self) -> Playback:
        return self._playback

    @property
    def fill_state(self) -> float:
        """Value returned whenever the animation is not playing."""
        return self._fill_state

    def play(self, duration_ms: float, on_frame: FrameCallback | None = None) -> Future[bool]:
        return self._playback.play(duration_ms, on_frame)

    def pause(self) -> None:
        self._playback.pause()

    def resume(self) -> None:
        self._playback.resume()

    def reset(self) -> None:
        self._playback.reset()
        self._fill_state = self.start

    def value(self) -> float:
        """Current value; not a property because every call recomputes from the clock."""
        if not self._playback.is_playing:
            return self._fill_state
        return lerp(self.start, self.end, self.ease(self._playback.progress()))

    def _freeze(self) -> None:
        # Runs while still playing; value() is only live in that state
        self._fill_state = self.value()

    def __repr__(self) -> str:
        return (
            f"AnimatedValue(start={self.start}, end={self.end}, "
            f"state={self.state.value}, value={self.value():.4g})"
        )

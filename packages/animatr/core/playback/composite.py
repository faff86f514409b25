"""Group several playables so they play, pause, resume and reset together."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import Future

from animatr.core.playback.kinetic import KineticValue
from animatr.core.playback.playback import Playback, PlaybackState, validate_duration
from animatr.core.playback.protocols import Playable
from animatr.core.playback.scheduler import FrameCallback, FrameScheduler

logger = logging.getLogger(__name__)


class CompositeAnimatedValue:
    """Plays a set of values in lockstep.

    The composite keeps its own play window and calls `on_frame` once per
    frame, however many children it holds; the children are played without
    a frame callback. Its own `value()` is the elapsed fraction of the
    window, and `values()` reports what each child currently holds.

    Children may be AnimatedValues or other composites. KineticValues are
    accepted with a warning: they have no fixed end state, so playing them
    for a duration is not supported.

    Example:
        >>> x = AnimatedValue(0, 300)
        >>> y = AnimatedValue(0, 120, ease="ease-out")
        >>> both = CompositeAnimatedValue([x, y])
        >>> both.play(400, on_frame=component.render)
    """

    def __init__(
        self,
        playables: Iterable[Playable] = (),
        *,
        scheduler: FrameScheduler | None = None,
        name: str | None = None,
    ) -> None:
        self._children: list[Playable] = []
        self._progress_fill = 0.0
        self._playback = Playback(scheduler, before_stop=self._freeze, name=name or "composite")
        self.add(*playables)

    @property
    def state(self) -> PlaybackState:
        return self._playback.state

    @property
    def playback(self) -> Playback:
        return self._playback

    @property
    def children(self) -> tuple[Playable, ...]:
        return tuple(self._children)

    def add(self, *playables: Playable) -> None:
        """Append children.

        Raises:
            TypeError: If an item does not implement the playable interface.
        """
        for playable in playables:
            if not isinstance(playable, Playable):
                raise TypeError(f"expected a playable value, got {type(playable).__name__}")
            if isinstance(playable, KineticValue):
                logger.warning(
                    "%s: KineticValue children cannot be played for a duration; "
                    "drive them with play_to() instead",
                    self._playback.name,
                )
            self._children.append(playable)

    def play(self, duration_ms: float, on_frame: FrameCallback | None = None) -> Future[bool]:
        """Play the composite and every child for `duration_ms`.

        Children start first, so they tick ahead of the composite in every
        frame and `on_frame` always reads values from the same instant.

        Returns:
            The composite's own completion signal.
        """
        if self._playback.is_playing:
            return self._playback.play(duration_ms, on_frame)
        validate_duration(duration_ms)
        for child in self._children:
            child.play(duration_ms)
        return self._playback.play(duration_ms, on_frame)

    def pause(self) -> None:
        self._playback.pause()
        for child in self._children:
            child.pause()

    def resume(self) -> None:
        if self._playback.state is not PlaybackState.PAUSED:
            return
        # Children first so the composite's immediate tick reads resumed values
        for child in self._children:
            child.resume()
        self._playback.resume()

    def reset(self) -> None:
        self._playback.reset()
        self._progress_fill = 0.0
        for child in self._children:
            child.reset()

    def value(self) -> float:
        """Elapsed fraction of the composite's play window, in [0, 1]."""
        if not self._playback.is_playing:
            return self._progress_fill
        return self._playback.progress()

    def values(self) -> tuple[float, ...]:
        """Current value of each child, in insertion order."""
        return tuple(child.value() for child in self._children)

    def _freeze(self) -> None:
        self._progress_fill = self._playback.progress()

    def __repr__(self) -> str:
        return f"CompositeAnimatedValue(children={len(self._children)}, state={self.state.value})"


def compose(*playables: Playable, scheduler: FrameScheduler | None = None) -> CompositeAnimatedValue:
    """Shorthand for CompositeAnimatedValue(playables)."""
    return CompositeAnimatedValue(playables, scheduler=scheduler)

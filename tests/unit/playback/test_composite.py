"""Tests for CompositeAnimatedValue."""

from __future__ import annotations

from collections.abc import Callable
import logging

import pytest

from animatr.core.playback.animated_value import AnimatedValue
from animatr.core.playback.composite import CompositeAnimatedValue, compose
from animatr.core.playback.kinetic import KineticValue
from animatr.core.playback.playback import PlaybackState
from animatr.core.playback.scheduler import FrameScheduler, ManualFrameHost


@pytest.fixture
def pair(scheduler: FrameScheduler) -> tuple[AnimatedValue, AnimatedValue]:
    """Two linear values sharing the test scheduler."""
    return (
        AnimatedValue(0, 300, scheduler=scheduler, name="x"),
        AnimatedValue(100, 0, scheduler=scheduler, name="y"),
    )


class TestCompositeAnimatedValue:
    """Tests for grouped playback."""

    def test_on_frame_once_per_frame(
        self,
        scheduler: FrameScheduler,
        frame_host: ManualFrameHost,
        pair: tuple[AnimatedValue, AnimatedValue],
        step: Callable[..., int],
    ) -> None:
        """N children still mean one on_frame call per frame."""
        third = AnimatedValue(0, 1, scheduler=scheduler)
        group = CompositeAnimatedValue([*pair, third], scheduler=scheduler)
        calls: list[int] = []
        group.play(1000, lambda: calls.append(frame_host.frames_delivered))

        assert len(calls) == 1
        frames = step(ms=16, frames=10)
        assert frames == 10
        assert len(calls) == 1 + frames
        assert calls[1:] == list(range(1, 11))

    def test_children_follow_the_group(
        self,
        scheduler: FrameScheduler,
        pair: tuple[AnimatedValue, AnimatedValue],
        step: Callable[..., int],
    ) -> None:
        """Children play for the same window."""
        group = CompositeAnimatedValue(pair, scheduler=scheduler)
        group.play(200)
        step(ms=100)

        assert group.value() == pytest.approx(0.5)
        assert group.values() == pytest.approx((150.0, 50.0))
        assert all(child.state is PlaybackState.PLAYING for child in group.children)

    def test_completion(
        self,
        scheduler: FrameScheduler,
        pair: tuple[AnimatedValue, AnimatedValue],
        step: Callable[..., int],
    ) -> None:
        """All members finish at the end of the window."""
        group = CompositeAnimatedValue(pair, scheduler=scheduler)
        seen: list[tuple[float, ...]] = []
        signal = group.play(100, lambda: seen.append(group.values()))
        step(ms=50, frames=2)

        assert signal.result() is True
        assert group.value() == 1.0
        assert group.values() == (300.0, 0.0)
        assert seen[-1] == (300.0, 0.0)
        assert group.state is PlaybackState.UNSTARTED
        assert all(child.state is PlaybackState.UNSTARTED for child in group.children)

    def test_pause_resume(
        self,
        scheduler: FrameScheduler,
        fake_clock,
        pair: tuple[AnimatedValue, AnimatedValue],
        step: Callable[..., int],
    ) -> None:
        """Pausing freezes every child; resuming continues them together."""
        group = CompositeAnimatedValue(pair, scheduler=scheduler)
        group.play(400)
        step(ms=100)
        group.pause()
        frozen = group.values()
        fake_clock.advance(1000)

        assert group.state is PlaybackState.PAUSED
        assert all(child.state is PlaybackState.PAUSED for child in group.children)
        assert group.values() == frozen
        group.resume()
        assert group.values() == pytest.approx(frozen)
        step(ms=100)
        assert group.value() == pytest.approx(0.5)

    def test_reset(
        self,
        scheduler: FrameScheduler,
        pair: tuple[AnimatedValue, AnimatedValue],
        step: Callable[..., int],
    ) -> None:
        """Reset interrupts the group and returns children to start."""
        group = CompositeAnimatedValue(pair, scheduler=scheduler)
        signal = group.play(100)
        step(ms=30)
        group.reset()

        assert signal.result() is False
        assert group.value() == 0.0
        assert group.values() == (0.0, 100.0)

    def test_nested_composites(
        self,
        scheduler: FrameScheduler,
        pair: tuple[AnimatedValue, AnimatedValue],
        step: Callable[..., int],
    ) -> None:
        """Composites can hold composites."""
        inner = compose(*pair, scheduler=scheduler)
        outer = CompositeAnimatedValue([inner], scheduler=scheduler)
        outer.play(100)
        step(ms=50)
        assert inner.values() == pytest.approx((150.0, 50.0))

    def test_add(self, scheduler: FrameScheduler, pair: tuple[AnimatedValue, AnimatedValue]) -> None:
        """Children can be added after construction."""
        group = CompositeAnimatedValue(scheduler=scheduler)
        group.add(*pair)
        assert group.children == pair

    def test_rejects_non_playables(self, scheduler: FrameScheduler) -> None:
        """Only values implementing the playable interface are accepted."""
        with pytest.raises(TypeError, match="expected a playable value"):
            CompositeAnimatedValue([42], scheduler=scheduler)  # type: ignore[list-item]

    def test_invalid_duration_touches_nothing(
        self, scheduler: FrameScheduler, pair: tuple[AnimatedValue, AnimatedValue]
    ) -> None:
        """Validation runs before any child starts."""
        group = CompositeAnimatedValue(pair, scheduler=scheduler)
        with pytest.raises(ValueError):
            group.play(-1)
        assert all(child.state is PlaybackState.UNSTARTED for child in group.children)

    def test_kinetic_child_warns(
        self, scheduler: FrameScheduler, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Kinetic children are accepted but flagged."""
        with caplog.at_level(logging.WARNING):
            group = CompositeAnimatedValue([KineticValue(scheduler=scheduler)], scheduler=scheduler)
        assert len(group.children) == 1
        assert "KineticValue children cannot be played" in caplog.text

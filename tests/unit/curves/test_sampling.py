"""Tests for curve sampling infrastructure."""

from __future__ import annotations

import pytest

from animatr.core.curves.library import linear
from animatr.core.curves.models import CurvePoint
from animatr.core.curves.sampling import sample_easing, sample_unit_interval


class TestSampleUnitInterval:
    """Tests for sample_unit_interval function."""

    def test_returns_correct_count(self) -> None:
        """Returns requested number of samples."""
        assert len(sample_unit_interval(7)) == 7

    def test_covers_closed_interval(self) -> None:
        """Samples include both 0 and 1."""
        assert sample_unit_interval(5) == [0.0, 0.25, 0.5, 0.75, 1.0]

    def test_minimum_two_samples(self) -> None:
        """Two samples are just the endpoints."""
        assert sample_unit_interval(2) == [0.0, 1.0]

    @pytest.mark.parametrize("n", [1, 0, -5])
    def test_n_less_than_two_raises(self, n: int) -> None:
        """n < 2 raises ValueError."""
        with pytest.raises(ValueError, match="n must be >= 2"):
            sample_unit_interval(n)


class TestSampleEasing:
    """Tests for sample_easing function."""

    def test_samples_linear(self) -> None:
        """Linear easing samples onto the diagonal."""
        points = sample_easing(linear, 3)
        assert points == [CurvePoint(t=0.0, v=0.0), CurvePoint(t=0.5, v=0.5), CurvePoint(t=1.0, v=1.0)]

    def test_values_may_overshoot(self) -> None:
        """Sampled values are not clamped."""
        points = sample_easing(lambda t: 1.2 * t, 3)
        assert points[-1].v == pytest.approx(1.2)

    def test_too_few_samples_raises(self) -> None:
        """n_samples < 2 raises ValueError."""
        with pytest.raises(ValueError, match="n_samples must be >= 2"):
            sample_easing(linear, 1)


class TestCurvePoint:
    """Tests for the CurvePoint model."""

    def test_time_must_be_normalized(self) -> None:
        """t outside [0, 1] is rejected."""
        with pytest.raises(ValueError):
            CurvePoint(t=1.5, v=0.0)

    def test_is_frozen(self) -> None:
        """Points are immutable."""
        point = CurvePoint(t=0.5, v=0.5)
        with pytest.raises(ValueError):
            point.v = 1.0  # type: ignore[misc]

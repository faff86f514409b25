"""Tests for CSS-style cubic-bezier easing."""

from __future__ import annotations

import bezier
import numpy as np
import pytest

from animatr.core.curves.bezier import CubicBezierEasing
from animatr.core.curves.sampling import sample_unit_interval


class TestCubicBezierEasing:
    """Tests for CubicBezierEasing."""

    def test_endpoints_are_exact(self) -> None:
        """0 maps to 0 and 1 maps to 1 for every curve."""
        ease = CubicBezierEasing(0.6, -0.28, 0.735, 0.045)
        assert ease(0.0) == 0.0
        assert ease(1.0) == 1.0

    def test_ease_in_out_is_symmetric(self) -> None:
        """The symmetric curve passes through its midpoint."""
        ease = CubicBezierEasing(0.42, 0.0, 0.58, 1.0)
        assert ease(0.5) == pytest.approx(0.5, abs=1e-4)
        assert ease(0.25) == pytest.approx(1.0 - ease(0.75), abs=1e-4)

    def test_css_ease_midpoint(self) -> None:
        """CSS 'ease' is ~0.8024 at x = 0.5."""
        ease = CubicBezierEasing(0.25, 0.1, 0.25, 1.0)
        assert ease(0.5) == pytest.approx(0.8024, abs=1e-3)

    def test_linear_control_points_are_identity(self) -> None:
        """x1 == y1 and x2 == y2 gives a straight line."""
        ease = CubicBezierEasing(0.3, 0.3, 0.7, 0.7)
        for t in sample_unit_interval(7):
            assert ease(t) == pytest.approx(t)

    @pytest.mark.parametrize(
        "points",
        [
            (0.42, 0.0, 1.0, 1.0),
            (0.0, 0.0, 0.58, 1.0),
            (0.175, 0.885, 0.32, 1.275),
            (0.95, 0.05, 0.795, 0.035),
        ],
    )
    def test_matches_bezier_curve(self, points: tuple[float, float, float, float]) -> None:
        """For points on the curve, ease(x) recovers y."""
        x1, y1, x2, y2 = points
        ease = CubicBezierEasing(*points)
        nodes = np.asfortranarray([[0.0, x1, x2, 1.0], [0.0, y1, y2, 1.0]])
        curve = bezier.Curve(nodes, degree=3)

        evaluated = curve.evaluate_multi(np.linspace(0.05, 0.95, 10))
        for x, y in zip(evaluated[0, :], evaluated[1, :], strict=True):
            assert ease(float(x)) == pytest.approx(float(y), abs=1e-3)

    def test_ease_in_is_monotonic(self) -> None:
        """A curve with y in [0, 1] never decreases."""
        ease = CubicBezierEasing(0.42, 0.0, 1.0, 1.0)
        values = [ease(t) for t in sample_unit_interval(51)]
        assert all(b >= a - 1e-9 for a, b in zip(values, values[1:]))

    def test_back_curves_overshoot(self) -> None:
        """Control points outside [0, 1] on y overshoot the range."""
        grid = sample_unit_interval(101)
        ease_out_back = CubicBezierEasing(0.175, 0.885, 0.32, 1.275)
        ease_in_back = CubicBezierEasing(0.6, -0.28, 0.735, 0.045)
        assert max(ease_out_back(t) for t in grid) > 1.0
        assert min(ease_in_back(t) for t in grid) < 0.0

    def test_flat_middle_uses_subdivision(self) -> None:
        """Curves with zero x-slope mid-way still resolve (expo-in-out)."""
        ease = CubicBezierEasing(1.0, 0.0, 0.0, 1.0)
        assert ease(0.5) == pytest.approx(0.5, abs=1e-2)
        assert ease(0.1) < 0.1
        assert ease(0.9) > 0.9

    def test_x_out_of_range_raises(self) -> None:
        """x control points must stay in [0, 1]."""
        with pytest.raises(ValueError, match="bezier x values must be in"):
            CubicBezierEasing(1.2, 0.0, 0.5, 1.0)
        with pytest.raises(ValueError, match="bezier x values must be in"):
            CubicBezierEasing(0.2, 0.0, -0.1, 1.0)

    def test_non_numeric_raises(self) -> None:
        """Control points must be numbers."""
        with pytest.raises(TypeError, match="x1 must be a number"):
            CubicBezierEasing("0.4", 0.0, 0.5, 1.0)  # type: ignore[arg-type]

    def test_repr(self) -> None:
        """repr shows the control points."""
        assert repr(CubicBezierEasing(0.42, 0, 0.58, 1)) == "CubicBezierEasing(0.42, 0.0, 0.58, 1.0)"

"""Tests for named curves and easing resolution."""

from __future__ import annotations

import pytest

from animatr.core.curves.bezier import CubicBezierEasing
from animatr.core.curves.library import (
    CURVE_CONTROL_POINTS,
    NamedCurve,
    get_curve,
    linear,
    parse_curve_name,
    resolve_easing,
)


class TestNamedCurve:
    """Tests for the built-in curve table."""

    def test_every_curve_but_linear_has_control_points(self) -> None:
        """LINEAR is the identity; the rest are bezier curves."""
        assert set(CURVE_CONTROL_POINTS) == set(NamedCurve) - {NamedCurve.LINEAR}

    @pytest.mark.parametrize("curve", list(NamedCurve))
    def test_curves_start_at_zero_and_end_at_one(self, curve: NamedCurve) -> None:
        """Every named curve maps 0 -> 0 and 1 -> 1."""
        ease = get_curve(curve)
        assert ease(0.0) == 0.0
        assert ease(1.0) == 1.0

    def test_get_curve_is_cached(self) -> None:
        """Named curves are built once."""
        assert get_curve(NamedCurve.EASE_OUT) is get_curve("ease_out")

    def test_linear_is_identity(self) -> None:
        """LINEAR returns progress unchanged."""
        assert get_curve(NamedCurve.LINEAR) is linear
        assert linear(0.37) == 0.37


class TestParseCurveName:
    """Tests for parse_curve_name."""

    @pytest.mark.parametrize("name", ["EASE_IN_OUT", "ease_in_out", "ease-in-out", " Ease-In-Out "])
    def test_accepts_spellings(self, name: str) -> None:
        """Case, hyphens and surrounding spaces are tolerated."""
        assert parse_curve_name(name) is NamedCurve.EASE_IN_OUT

    def test_unknown_name_lists_options(self) -> None:
        """Unknown names raise with the valid choices."""
        with pytest.raises(ValueError, match="Unknown curve name 'wobble'.*EXPO_OUT"):
            parse_curve_name("wobble")


class TestResolveEasing:
    """Tests for resolve_easing."""

    def test_none_is_linear(self) -> None:
        """Missing easing falls back to LINEAR."""
        assert resolve_easing(None) is linear

    def test_named_curve(self) -> None:
        """NamedCurve members resolve to their bezier easing."""
        ease = resolve_easing(NamedCurve.EASE_IN)
        assert isinstance(ease, CubicBezierEasing)
        assert ease.control_points == CURVE_CONTROL_POINTS[NamedCurve.EASE_IN]

    def test_callable_passes_through(self) -> None:
        """Custom functions are used as-is."""

        def quadratic(t: float) -> float:
            return t * t

        assert resolve_easing(quadratic) is quadratic

    def test_control_points(self) -> None:
        """Four numbers become a cubic-bezier easing."""
        ease = resolve_easing([0.42, 0, 0.58, 1])
        assert isinstance(ease, CubicBezierEasing)
        assert ease(0.5) == pytest.approx(0.5, abs=1e-4)

    def test_wrong_number_of_control_points(self) -> None:
        """Anything but four control points is rejected."""
        with pytest.raises(ValueError, match="needs 4 control points, got 3"):
            resolve_easing((0.1, 0.2, 0.3))

    def test_unsupported_type(self) -> None:
        """Non-callable, non-sequence specs raise TypeError."""
        with pytest.raises(TypeError, match="Unsupported easing value"):
            resolve_easing(42)  # type: ignore[arg-type]

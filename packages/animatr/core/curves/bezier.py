"""CSS-style cubic-bezier timing functions.

A timing function is the y-component of a cubic Bezier with fixed endpoints
(0, 0) and (1, 1), looked up by its x-component. Finding the curve parameter
for a given x has no closed form, so each easing builds a small lookup table
once and refines it per sample with Newton-Raphson, falling back to binary
subdivision where the curve is too flat for Newton to be stable.
"""

from __future__ import annotations

import bisect

import bezier
import numpy as np

from animatr.core.utils.math import is_real_number

_TABLE_SIZE = 11
_TABLE_STEP = 1.0 / (_TABLE_SIZE - 1)

_NEWTON_ITERATIONS = 4
_NEWTON_MIN_SLOPE = 0.001
_SUBDIVISION_PRECISION = 1e-7
_SUBDIVISION_MAX_ITERATIONS = 10


def _coefficients(p1: float, p2: float) -> tuple[float, float, float]:
    """Power-basis coefficients (a, b, c) of one Bezier axis: ((a*s + b)*s + c)*s."""
    return (1.0 - 3.0 * p2 + 3.0 * p1, 3.0 * p2 - 6.0 * p1, 3.0 * p1)


def _evaluate(coeffs: tuple[float, float, float], s: float) -> float:
    a, b, c = coeffs
    return ((a * s + b) * s + c) * s


def _slope(coeffs: tuple[float, float, float], s: float) -> float:
    a, b, c = coeffs
    return 3.0 * a * s * s + 2.0 * b * s + c


class CubicBezierEasing:
    """Easing function defined by two cubic-bezier control points.

    Args:
        x1: First control point x (must be in [0, 1]).
        y1: First control point y (may overshoot).
        x2: Second control point x (must be in [0, 1]).
        y2: Second control point y (may overshoot).

    Raises:
        TypeError: If a control point is not a real number.
        ValueError: If an x control point lies outside [0, 1].

    Example:
        >>> ease = CubicBezierEasing(0.42, 0.0, 0.58, 1.0)
        >>> round(ease(0.5), 6)
        0.5
    """

    def __init__(self, x1: float, y1: float, x2: float, y2: float) -> None:
        for name, point in (("x1", x1), ("y1", y1), ("x2", x2), ("y2", y2)):
            if not is_real_number(point):
                raise TypeError(f"bezier control point {name} must be a number, got {point!r}")
        if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
            raise ValueError(f"bezier x values must be in [0, 1], got x1={x1}, x2={x2}")

        self.control_points = (float(x1), float(y1), float(x2), float(y2))
        self._linear = x1 == y1 and x2 == y2

        nodes = np.asfortranarray(
            [
                [0.0, x1, x2, 1.0],
                [0.0, y1, y2, 1.0],
            ]
        )
        self._curve = bezier.Curve(nodes, degree=3)
        self._x_coeffs = _coefficients(float(x1), float(x2))
        self._y_coeffs = _coefficients(float(y1), float(y2))

        evaluated = self._curve.evaluate_multi(np.linspace(0.0, 1.0, _TABLE_SIZE))
        self._x_table: list[float] = [float(x) for x in evaluated[0, :]]

    def __call__(self, x: float) -> float:
        if self._linear:
            return x
        # Exact endpoints regardless of refinement error
        if x == 0.0 or x == 1.0:
            return float(x)
        return _evaluate(self._y_coeffs, self._parameter_for_x(x))

    def __repr__(self) -> str:
        x1, y1, x2, y2 = self.control_points
        return f"CubicBezierEasing({x1}, {y1}, {x2}, {y2})"

    def _parameter_for_x(self, x: float) -> float:
        index = bisect.bisect_right(self._x_table, x) - 1
        index = max(0, min(_TABLE_SIZE - 2, index))
        interval_start = index * _TABLE_STEP

        lo_x = self._x_table[index]
        span = self._x_table[index + 1] - lo_x
        dist = (x - lo_x) / span if span > 0 else 0.0
        guess = interval_start + dist * _TABLE_STEP

        initial_slope = _slope(self._x_coeffs, guess)
        if initial_slope >= _NEWTON_MIN_SLOPE:
            return self._newton_raphson(x, guess)
        if initial_slope == 0.0:
            return guess
        return self._binary_subdivide(x, interval_start, interval_start + _TABLE_STEP)

    def _newton_raphson(self, x: float, guess: float) -> float:
        for _ in range(_NEWTON_ITERATIONS):
            slope = _slope(self._x_coeffs, guess)
            if slope == 0.0:
                return guess
            guess -= (_evaluate(self._x_coeffs, guess) - x) / slope
        return guess

    def _binary_subdivide(self, x: float, lower: float, upper: float) -> float:
        current = lower
        for _ in range(_SUBDIVISION_MAX_ITERATIONS):
            current = lower + (upper - lower) / 2.0
            error = _evaluate(self._x_coeffs, current) - x
            if abs(error) <= _SUBDIVISION_PRECISION:
                break
            if error > 0.0:
                upper = current
            else:
                lower = current
        return current

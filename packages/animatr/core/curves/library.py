"""Named easing curves and easing resolution.

Easing can be given as a NamedCurve (or its name), an arbitrary callable, or
four cubic-bezier control points. `resolve_easing` turns any of these into a
callable once, so per-frame sampling never re-parses the easing argument.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Sequence
from enum import Enum
from typing import TypeAlias

from animatr.core.curves.bezier import CubicBezierEasing
from animatr.core.curves.models import EasingFn

logger = logging.getLogger(__name__)


class NamedCurve(str, Enum):
    """Built-in easing curves."""

    LINEAR = "LINEAR"
    EASE = "EASE"
    EASE_IN = "EASE_IN"
    EASE_OUT = "EASE_OUT"
    EASE_IN_OUT = "EASE_IN_OUT"
    EASE_IN_BACK = "EASE_IN_BACK"
    EASE_OUT_BACK = "EASE_OUT_BACK"
    EXPO_IN = "EXPO_IN"
    EXPO_OUT = "EXPO_OUT"
    EXPO_IN_OUT = "EXPO_IN_OUT"


# LINEAR is the identity and has no entry here
CURVE_CONTROL_POINTS: dict[NamedCurve, tuple[float, float, float, float]] = {
    NamedCurve.EASE: (0.25, 0.1, 0.25, 1.0),
    NamedCurve.EASE_IN: (0.42, 0.0, 1.0, 1.0),
    NamedCurve.EASE_OUT: (0.0, 0.0, 0.58, 1.0),
    NamedCurve.EASE_IN_OUT: (0.42, 0.0, 0.58, 1.0),
    NamedCurve.EASE_IN_BACK: (0.6, -0.28, 0.735, 0.045),
    NamedCurve.EASE_OUT_BACK: (0.175, 0.885, 0.32, 1.275),
    NamedCurve.EXPO_IN: (0.95, 0.05, 0.795, 0.035),
    NamedCurve.EXPO_OUT: (0.19, 1.0, 0.22, 1.0),
    NamedCurve.EXPO_IN_OUT: (1.0, 0.0, 0.0, 1.0),
}

EasingSpec: TypeAlias = NamedCurve | str | EasingFn | Sequence[float]


def linear(t: float) -> float:
    """Identity easing."""
    return t


def parse_curve_name(name: str) -> NamedCurve:
    """Parse a curve name case-insensitively ("ease-out" and "EASE_OUT" are equivalent).

    Raises:
        ValueError: If the name is not a built-in curve.
    """
    try:
        return NamedCurve(name.strip().upper().replace("-", "_"))
    except ValueError:
        options = ", ".join(c.value for c in NamedCurve)
        raise ValueError(f"Unknown curve name {name!r}; expected one of: {options}") from None


@functools.cache
def _build_named_curve(curve: NamedCurve) -> EasingFn:
    if curve is NamedCurve.LINEAR:
        return linear
    logger.debug("Building bezier easing for %s", curve.value)
    return CubicBezierEasing(*CURVE_CONTROL_POINTS[curve])


def get_curve(name: NamedCurve | str) -> EasingFn:
    """Return the (cached) easing function for a named curve."""
    curve = name if isinstance(name, NamedCurve) else parse_curve_name(name)
    return _build_named_curve(curve)


def resolve_easing(ease: EasingSpec | None) -> EasingFn:
    """Resolve an easing value into a callable.

    Args:
        ease: NamedCurve or curve name, a callable, four cubic-bezier control
            points (x1, y1, x2, y2), or None for LINEAR.

    Returns:
        Easing function of normalized time.

    Raises:
        ValueError: Unknown curve name or wrong number of control points.
        TypeError: Unsupported easing type.

    Example:
        >>> resolve_easing("linear")(0.25)
        0.25
        >>> resolve_easing([0.42, 0, 0.58, 1])(1.0)
        1.0
    """
    if ease is None:
        return linear
    if isinstance(ease, str):
        return get_curve(ease)
    if callable(ease):
        return ease
    if isinstance(ease, Sequence):
        if len(ease) != 4:
            raise ValueError(f"cubic-bezier easing needs 4 control points, got {len(ease)}")
        return CubicBezierEasing(*ease)
    raise TypeError(f"Unsupported easing value: {ease!r}")

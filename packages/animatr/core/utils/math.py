"""Math utilities for common operations."""

from __future__ import annotations

import math
from numbers import Real
from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def lerp(a: Number, b: Number, t: float) -> float:
    """Linear interpolation between a and b.

    Args:
        a: Start value
        b: End value
        t: Interpolation factor (not clamped; eased factors may overshoot)

    Returns:
        Interpolated value
    """
    return float(a) + (float(b) - float(a)) * t


def is_real_number(value: object) -> bool:
    """Return True for real numbers, excluding bools (which are ints in Python)."""
    return isinstance(value, Real) and not isinstance(value, bool)


def safe_atan_ratio(a: float, b: float) -> float:
    """Return atan(a / b), using the signed limit ±π/2 when b is zero."""
    if b == 0:
        if a == 0:
            return 0.0
        return math.copysign(math.pi / 2, a) * math.copysign(1.0, b)
    return math.atan(a / b)

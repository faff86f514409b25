"""Shared utilities for animatr."""

from animatr.core.utils.math import clamp, is_real_number, lerp, safe_atan_ratio

__all__ = [
    "clamp",
    "is_real_number",
    "lerp",
    "safe_atan_ratio",
]

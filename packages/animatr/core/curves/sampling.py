"""Curve sampling infrastructure.

This module provides functions for sampling easing functions at uniform
intervals, used for previews, the CLI, and tests.
"""

from __future__ import annotations

from animatr.core.curves.models import CurvePoint, EasingFn


def sample_unit_interval(n: int) -> list[float]:
    """Generate N evenly-spaced samples covering the closed interval [0, 1].

    Returns N samples: [0.0, 1/(N-1), ..., 1.0]

    Args:
        n: Number of samples to generate. Must be >= 2.

    Returns:
        List of N evenly-spaced float values in [0, 1].

    Raises:
        ValueError: If n < 2.

    Example:
        >>> sample_unit_interval(5)
        [0.0, 0.25, 0.5, 0.75, 1.0]
    """
    if n < 2:
        raise ValueError("n must be >= 2")
    return [i / (n - 1) for i in range(n)]


def sample_easing(ease: EasingFn, n_samples: int) -> list[CurvePoint]:
    """Evaluate an easing function on a uniform grid.

    Args:
        ease: Easing function to sample.
        n_samples: Number of samples (must be >= 2).

    Returns:
        List of CurvePoints, first at t=0 and last at t=1.

    Raises:
        ValueError: If n_samples < 2.
    """
    if n_samples < 2:
        raise ValueError("n_samples must be >= 2")
    return [CurvePoint(t=t, v=float(ease(t))) for t in sample_unit_interval(n_samples)]

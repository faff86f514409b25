"""Easing curves: named bezier curves, custom easings, and spring physics."""

from animatr.core.curves.bezier import CubicBezierEasing
from animatr.core.curves.library import (
    CURVE_CONTROL_POINTS,
    EasingSpec,
    NamedCurve,
    get_curve,
    linear,
    parse_curve_name,
    resolve_easing,
)
from animatr.core.curves.models import CurvePoint, EasingFn
from animatr.core.curves.sampling import sample_easing, sample_unit_interval
from animatr.core.curves.spring import (
    BisectionResult,
    SpringCurve,
    compute_omega,
    solve_omega_and_b,
    solve_spring,
)

__all__ = [
    "BisectionResult",
    "CURVE_CONTROL_POINTS",
    "CubicBezierEasing",
    "CurvePoint",
    "EasingFn",
    "EasingSpec",
    "NamedCurve",
    "SpringCurve",
    "compute_omega",
    "get_curve",
    "linear",
    "parse_curve_name",
    "resolve_easing",
    "sample_easing",
    "sample_unit_interval",
    "solve_omega_and_b",
    "solve_spring",
]

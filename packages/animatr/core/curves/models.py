"""Curve models shared by easing and spring helpers.

- EasingFn: structural type for any easing function of normalized time
- CurvePoint: a single sampled (t, v) pair for previews and tests
"""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class EasingFn(Protocol):
    """Easing function mapping normalized progress to eased progress.

    Ideally (but not necessarily) maps 0 -> 0 and 1 -> 1. Back and spring
    curves overshoot, so the output range is not restricted.
    """

    def __call__(self, t: float, /) -> float: ...


class CurvePoint(BaseModel):
    """A single sampled point of an easing curve.

    Time is normalized to [0, 1]; the value is left unbounded so that
    overshooting curves (EASE_OUT_BACK, underdamped springs) sample faithfully.

    Example:
        >>> point = CurvePoint(t=0.5, v=1.08)
        >>> point.v
        1.08
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    t: float = Field(..., ge=0.0, le=1.0, description="Normalized time [0,1]")
    v: float = Field(..., description="Eased value (may overshoot [0,1])")

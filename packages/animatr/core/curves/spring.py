"""Spring easing curves from a damped harmonic oscillator.

Generates a physically realistic easing curve for a damped mass-spring
system, adapted from "The Spring Factory"
(https://hackernoon.com/the-spring-factory-4c3d988e7129).

The underdamped solution is

    y(t) = e^(-zeta*omega*t) * (A*cos(omega_d*t) + B*sin(omega_d*t))
    omega_d = omega * sqrt(1 - zeta^2)

with A the initial displacement. Stiffness k selects how many half cycles
happen before the curve reaches its final zero crossing at t = 1. With zero
initial velocity B has a closed form; otherwise B and omega depend on each
other and are solved numerically by bisection.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from animatr.core.curves.models import CurvePoint
from animatr.core.curves.sampling import sample_easing
from animatr.core.utils.math import is_real_number, safe_atan_ratio

logger = logging.getLogger(__name__)

ZERO_VELOCITY_EPSILON = 1e-6
BISECTION_TOLERANCE = 1e-6
BISECTION_MAX_ITERATIONS = 1000


def _validate_damping(zeta: float) -> None:
    if not is_real_number(zeta):
        raise TypeError(f"damping must be a number, got {zeta!r}")
    if not 0.0 <= zeta < 1.0:
        raise ValueError(f"damping must be in [0, 1), got {zeta}")


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


def compute_omega(A: float, B: float, k: float, zeta: float) -> float:
    """Natural frequency (in cycles) that puts the k-th zero crossing at t = 1.

    When A and B have opposite signs the arctangent lands a half cycle off
    the branch used for same-sign inputs (atan has range (-pi/2, pi/2) and
    -atan(-x) == atan(x)), so k is lowered by one to keep the number of half
    cycles equal to k.
    """
    if A * B < 0 and k >= 1:
        k -= 1
    return (-safe_atan_ratio(A, B) + math.pi * k) / (2 * math.pi * math.sqrt(1 - zeta * zeta))


@dataclass(frozen=True)
class BisectionResult:
    """Outcome of the numeric omega/B solve."""

    omega: float
    B: float
    iterations: int
    converged: bool


def solve_omega_and_b(
    zeta: float,
    k: float,
    y0: float = 1.0,
    v0: float = 0.0,
) -> BisectionResult:
    """Resolve the mutually recursive omega and B with bounded bisection.

    omega is known in terms of B (`compute_omega`); B must satisfy
    B = (zeta*omega*y0 + v0) / omega_d. The residual of that equation is
    bracketed by doubling B away from the initial guess until its sign
    flips, then bisected until it is within tolerance.

    The iteration budget is shared by bracketing and bisection. When it runs
    out the best estimate so far is returned with converged=False.

    Args:
        zeta: Damping ratio in [0, 1).
        k: Half-cycle count.
        y0: Initial displacement (A).
        v0: Initial velocity, already scaled to cycles (divided by 2*pi).

    Returns:
        BisectionResult with omega still expressed in cycles.
    """
    _validate_damping(zeta)
    A = y0
    damped_ratio = math.sqrt(1 - zeta * zeta)

    def evaluate(B: float) -> tuple[float, float]:
        omega = compute_omega(A, B, k, zeta)
        omega_d = omega * damped_ratio
        numerator = zeta * omega * A + v0
        if omega_d == 0:
            error = B if numerator == 0 else -math.copysign(math.inf, numerator)
        else:
            error = B - numerator / omega_d
        return omega, error

    # Initial guess that's pretty close; zero damping would never leave B = 0
    B = zeta if zeta > 0 else 1.0
    omega, error = evaluate(B)
    iterations = 0

    if abs(error) <= BISECTION_TOLERANCE:
        return BisectionResult(omega=omega, B=B, iterations=0, converged=True)

    if _sign(error) < 0:
        lower = B
        while _sign(error) < 0 and iterations < BISECTION_MAX_ITERATIONS:
            iterations += 1
            lower = B
            B *= 2
            omega, error = evaluate(B)
        upper = B
    else:
        upper = B
        B = -B
        omega, error = evaluate(B)
        while _sign(error) > 0 and iterations < BISECTION_MAX_ITERATIONS:
            iterations += 1
            upper = B
            B *= 2
            omega, error = evaluate(B)
        lower = B

    while abs(error) > BISECTION_TOLERANCE and iterations < BISECTION_MAX_ITERATIONS:
        iterations += 1
        B = (upper + lower) / 2
        omega, error = evaluate(B)
        if _sign(error) < 0:
            lower = B
        else:
            upper = B

    converged = abs(error) <= BISECTION_TOLERANCE
    if not converged:
        logger.debug(
            "Spring bisection stopped after %d iterations (zeta=%s, k=%s, v0=%s, residual=%s)",
            iterations,
            zeta,
            k,
            v0,
            error,
        )
    return BisectionResult(omega=omega, B=B, iterations=iterations, converged=converged)


@dataclass(frozen=True)
class SpringCurve:
    """Displacement of a damped spring over normalized time.

    Callable on floats (returns float) and numpy arrays (vectorised). Valid
    for t >= 0; the curve decays asymptotically and is never clamped.
    """

    zeta: float
    A: float
    B: float
    omega: float
    omega_d: float

    def __call__(self, t: float | np.ndarray) -> float | np.ndarray:
        with np.errstate(over="ignore", invalid="ignore"):
            ts = np.asarray(t, dtype=float)
            sinusoid = self.A * np.cos(self.omega_d * ts) + self.B * np.sin(self.omega_d * ts)
            y = np.exp(-ts * self.zeta * self.omega) * sinusoid
        if y.ndim == 0:
            return float(y)
        return y

    def velocity(self, t: float | np.ndarray) -> float | np.ndarray:
        """Analytic time derivative of the displacement."""
        with np.errstate(over="ignore", invalid="ignore"):
            ts = np.asarray(t, dtype=float)
            cos = np.cos(self.omega_d * ts)
            sin = np.sin(self.omega_d * ts)
            decay = np.exp(-ts * self.zeta * self.omega)
            dy = decay * (
                -self.zeta * self.omega * (self.A * cos + self.B * sin)
                + self.omega_d * (self.B * cos - self.A * sin)
            )
        if dy.ndim == 0:
            return float(dy)
        return dy

    def sample(self, n_samples: int) -> list[CurvePoint]:
        """Sample the curve on a uniform grid over [0, 1]."""
        return sample_easing(self, n_samples)


def solve_spring(
    damping: float = 0.8,
    stiffness: float = 3,
    initial_position: float = 1.0,
    initial_velocity: float = 0.0,
) -> SpringCurve:
    """Build the displacement curve of a damped spring.

    Args:
        damping: Damping ratio zeta in [0, 1).
        stiffness: Half-cycle count k (>= 0).
        initial_position: Initial displacement A (default 1).
        initial_velocity: Initial velocity in normalized time units.

    Returns:
        SpringCurve starting at `initial_position` with slope `initial_velocity`.

    Raises:
        TypeError: If a parameter is not a number.
        ValueError: If damping is outside [0, 1) or stiffness is negative.

    Example:
        >>> curve = solve_spring(damping=0.5, stiffness=2)
        >>> curve(0.0)
        1.0
    """
    _validate_damping(damping)
    for name, value in (
        ("stiffness", stiffness),
        ("initial_position", initial_position),
        ("initial_velocity", initial_velocity),
    ):
        if not is_real_number(value):
            raise TypeError(f"{name} must be a number, got {value!r}")
    if stiffness < 0:
        raise ValueError(f"stiffness must be >= 0, got {stiffness}")

    zeta = float(damping)
    A = float(initial_position)
    v0 = float(initial_velocity)

    if abs(v0) < ZERO_VELOCITY_EPSILON:
        B = zeta * A / math.sqrt(1 - zeta * zeta)
        omega = compute_omega(A, B, stiffness, zeta)
    else:
        # Velocity is scaled to cycles so it stays consistent with the
        # 2*pi rescale applied to omega below
        result = solve_omega_and_b(zeta=zeta, k=stiffness, y0=A, v0=v0 / (2 * math.pi))
        B = result.B
        omega = result.omega

    omega *= 2 * math.pi
    omega_d = omega * math.sqrt(1 - zeta * zeta)
    return SpringCurve(zeta=zeta, A=A, B=B, omega=omega, omega_d=omega_d)

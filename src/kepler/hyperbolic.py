"""
Hyperbolic orbits (e >= 1 + eps).

The semi-major axis is negative, the energy positive. Kepler's equation
takes the hyperbolic form

    M = e*sinh(H) - H

and is solved by Newton-Raphson from the Danby-style starting guess
H0 = sign(M) * ln(2|M|/e + 1.8). Anomalies are signed: nu lies strictly
inside the asymptote angles, |nu| < acos(-1/e) < pi.
"""

import logging
import math
from typing import Optional

from scipy.optimize import newton

from core.config import SolverSettings
from core.exceptions import (
    AnomalyConvergenceError,
    InvalidElementError,
    UnboundedOrbitError,
)
from kepler.angles import wrap_pi
from kepler.classifier import OrbitFamily
from kepler.equations import KeplerEquations

logger = logging.getLogger(__name__)


def _require_open(a: float) -> None:
    if not a < 0.0:
        raise InvalidElementError(
            f"Hyperbolic orbits need a negative semi-major axis, got a = {a}"
        )


def areal_velocity(mu: float, a: float, e: float, p: Optional[float] = None) -> float:
    _require_open(a)
    return math.sqrt(-a * mu * (e * e - 1.0)) / 2.0


def periapsis_distance(a: float, e: float, p: Optional[float] = None) -> float:
    return a * (1.0 - e)


def period(n: float) -> float:
    raise UnboundedOrbitError("A hyperbolic orbit is not periodic")


def total_energy_per_mass(mu: float, a: float) -> float:
    _require_open(a)
    return -mu / (2.0 * a)


def velocity_squared(mu: float, r: float, a: float) -> float:
    return mu * (2.0 / r - 1.0 / a)


def mean_motion(mu: float, a: float, p: Optional[float] = None) -> float:
    _require_open(a)
    return math.sqrt(mu / (-a) ** 3)


# -----------------------------------------------------------------------------
# Anomaly relations
# -----------------------------------------------------------------------------

def hyperbolic_from_true(nu: float, e: float) -> float:
    """H from nu via tanh(H/2) = sqrt((e-1)/(e+1)) * tan(nu/2)."""
    nu = wrap_pi(nu)
    arg = math.sqrt((e - 1.0) / (e + 1.0)) * math.tan(nu / 2.0)
    if abs(arg) >= 1.0:
        raise InvalidElementError(
            f"True anomaly {nu:.6f} rad lies beyond the asymptotes for e = {e:.6f}"
        )
    return 2.0 * math.atanh(arg)


def true_from_hyperbolic(H: float, e: float) -> float:
    """nu from H via tan(nu/2) = sqrt((e+1)/(e-1)) * tanh(H/2), in (-pi, pi)."""
    return 2.0 * math.atan(math.sqrt((e + 1.0) / (e - 1.0)) * math.tanh(H / 2.0))


def mean_from_hyperbolic(H: float, e: float) -> float:
    """Hyperbolic Kepler equation, M = e*sinh(H) - H."""
    return e * math.sinh(H) - H


def hyperbolic_from_mean(M: float, e: float, settings: SolverSettings) -> float:
    """
    Solve the hyperbolic Kepler equation for H by Newton-Raphson.

    Raises
    ------
    AnomalyConvergenceError
        If the update has not dropped below ``settings.tolerance`` after
        ``settings.max_iterations`` iterations.
    """
    if M == 0.0:
        return 0.0
    H0 = math.copysign(math.log(2.0 * abs(M) / e + 1.8), M)

    H, info = newton(
        lambda H: e * math.sinh(H) - H - M,
        H0,
        fprime=lambda H: e * math.cosh(H) - 1.0,
        tol=settings.tolerance,
        maxiter=settings.max_iterations,
        full_output=True,
        disp=False,
    )
    if not info.converged:
        raise AnomalyConvergenceError(M, e, info.iterations)

    logger.debug(f"Hyperbolic Kepler solve: M={M:.6f}, e={e:.6f}, "
                 f"{info.iterations} iterations")
    return float(H)


HYPERBOLIC = KeplerEquations(
    family=OrbitFamily.HYPERBOLIC,
    areal_velocity=areal_velocity,
    periapsis_distance=periapsis_distance,
    period=period,
    total_energy_per_mass=total_energy_per_mass,
    velocity_squared=velocity_squared,
    mean_motion=mean_motion,
    anomaly_from_true=hyperbolic_from_true,
    true_from_anomaly=true_from_hyperbolic,
    mean_from_anomaly=mean_from_hyperbolic,
    anomaly_from_mean=hyperbolic_from_mean,
)

"""
Elliptical orbits (eps <= e < 1 - eps).

Kepler's equation

    M = E - e*sin(E)

is inverted with Newton-Raphson. The starting guess follows the usual
split: E0 = M for moderate eccentricity, E0 = pi for e >= 0.8, from which
Newton converges monotonically for every M in [0, 2*pi).
"""

import logging
import math
from typing import Optional

from scipy.optimize import newton

from core.config import SolverSettings
from core.constants import PI, TWO_PI
from core.exceptions import AnomalyConvergenceError, InvalidElementError
from kepler.angles import quadrant_fix, wrap_two_pi
from kepler.classifier import OrbitFamily
from kepler.equations import KeplerEquations

logger = logging.getLogger(__name__)


def _require_bound(a: float) -> None:
    if not a > 0.0:
        raise InvalidElementError(
            f"Closed orbits need a positive semi-major axis, got a = {a}"
        )


def areal_velocity(mu: float, a: float, e: float, p: Optional[float] = None) -> float:
    _require_bound(a)
    return math.sqrt(a * mu * (1.0 - e * e)) / 2.0


def periapsis_distance(a: float, e: float, p: Optional[float] = None) -> float:
    return a * (1.0 - e)


def period(n: float) -> float:
    return TWO_PI / n


def total_energy_per_mass(mu: float, a: float) -> float:
    return -mu / (2.0 * a)


def velocity_squared(mu: float, r: float, a: float) -> float:
    return mu * (2.0 / r - 1.0 / a)


def mean_motion(mu: float, a: float, p: Optional[float] = None) -> float:
    _require_bound(a)
    return math.sqrt(mu / a ** 3)


# -----------------------------------------------------------------------------
# Anomaly relations
# -----------------------------------------------------------------------------

def eccentric_from_true(nu: float, e: float) -> float:
    """E from nu via tan(E/2) = sqrt((1-e)/(1+e)) * tan(nu/2), in [0, 2*pi)."""
    nu = wrap_two_pi(nu)
    E = 2.0 * math.atan(math.sqrt((1.0 - e) / (1.0 + e)) * math.tan(nu / 2.0))
    return wrap_two_pi(quadrant_fix(E, nu))


def true_from_eccentric(E: float, e: float) -> float:
    """nu from E via tan(nu/2) = sqrt((1+e)/(1-e)) * tan(E/2), in [0, 2*pi)."""
    E = wrap_two_pi(E)
    nu = 2.0 * math.atan(math.sqrt((1.0 + e) / (1.0 - e)) * math.tan(E / 2.0))
    return wrap_two_pi(quadrant_fix(nu, E))


def mean_from_eccentric(E: float, e: float) -> float:
    """Kepler's equation, M = E - e*sin(E), in [0, 2*pi)."""
    return wrap_two_pi(E - e * math.sin(E))


def eccentric_from_mean(M: float, e: float, settings: SolverSettings) -> float:
    """
    Solve Kepler's equation for E by Newton-Raphson.

    Raises
    ------
    AnomalyConvergenceError
        If the update has not dropped below ``settings.tolerance`` after
        ``settings.max_iterations`` iterations.
    """
    M = wrap_two_pi(M)
    E0 = M if e < 0.8 else PI

    E, info = newton(
        lambda E: E - e * math.sin(E) - M,
        E0,
        fprime=lambda E: 1.0 - e * math.cos(E),
        tol=settings.tolerance,
        maxiter=settings.max_iterations,
        full_output=True,
        disp=False,
    )
    if not info.converged:
        raise AnomalyConvergenceError(M, e, info.iterations)

    logger.debug(f"Kepler solve: M={M:.6f}, e={e:.6f}, {info.iterations} iterations")
    return wrap_two_pi(float(E))


ELLIPTICAL = KeplerEquations(
    family=OrbitFamily.ELLIPTICAL,
    areal_velocity=areal_velocity,
    periapsis_distance=periapsis_distance,
    period=period,
    total_energy_per_mass=total_energy_per_mass,
    velocity_squared=velocity_squared,
    mean_motion=mean_motion,
    anomaly_from_true=eccentric_from_true,
    true_from_anomaly=true_from_eccentric,
    mean_from_anomaly=mean_from_eccentric,
    anomaly_from_mean=eccentric_from_mean,
)

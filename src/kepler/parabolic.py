"""
Parabolic orbits (1 - eps <= e < 1 + eps).

A parabola has no finite semi-major axis, so the geometry is carried by
the semi-latus rectum p (twice the periapsis distance). Time enters
through Barker's equation

    M = D + D^3 / 3,    D = tan(nu / 2),    M = 2*sqrt(mu/p^3) * (t - tp)

which is a depressed cubic in D and is inverted in closed form:

    w = cbrt(3M/2 + sqrt(1 + (3M/2)^2)),    D = w - 1/w

Anomalies are signed: nu in (-pi, pi), negative before periapsis.
"""

import math
from typing import Optional

import numpy as np

from core.config import SolverSettings
from core.constants import PI
from core.exceptions import InvalidElementError, UnboundedOrbitError
from kepler.angles import wrap_pi
from kepler.classifier import OrbitFamily
from kepler.equations import KeplerEquations, require_semi_latus_rectum


def areal_velocity(mu: float, a: float, e: float, p: Optional[float] = None) -> float:
    return math.sqrt(mu * require_semi_latus_rectum(a, e, p)) / 2.0


def periapsis_distance(a: float, e: float, p: Optional[float] = None) -> float:
    return require_semi_latus_rectum(a, e, p) / 2.0


def period(n: float) -> float:
    raise UnboundedOrbitError("A parabolic orbit is not periodic")


def total_energy_per_mass(mu: float, a: float) -> float:
    return 0.0


def velocity_squared(mu: float, r: float, a: float) -> float:
    # Escape speed: the 1/a term of vis-viva vanishes.
    return 2.0 * mu / r


def mean_motion(mu: float, a: float, p: Optional[float] = None) -> float:
    p = require_semi_latus_rectum(a, 1.0, p)
    return 2.0 * math.sqrt(mu / p ** 3)


# -----------------------------------------------------------------------------
# Anomaly relations
# -----------------------------------------------------------------------------

def parabolic_from_true(nu: float, e: float) -> float:
    """D = tan(nu/2)."""
    nu = wrap_pi(nu)
    if abs(nu) >= PI:
        raise InvalidElementError("True anomaly of pi lies at infinity on a parabola")
    return math.tan(nu / 2.0)


def true_from_parabolic(D: float, e: float) -> float:
    """nu = 2*atan(D), in (-pi, pi)."""
    return 2.0 * math.atan(D)


def mean_from_parabolic(D: float, e: float) -> float:
    """Barker's equation, M = D + D^3/3."""
    return D + D ** 3 / 3.0


def parabolic_from_mean(M: float, e: float, settings: SolverSettings) -> float:
    """Closed-form inverse of Barker's equation (no iteration needed)."""
    # Solved for |M| and mirrored: x + sqrt(1 + x^2) cancels badly for x << 0
    x = 1.5 * abs(M)
    w = float(np.cbrt(x + math.sqrt(1.0 + x * x)))
    return math.copysign(w - 1.0 / w, M)


PARABOLIC = KeplerEquations(
    family=OrbitFamily.PARABOLIC,
    areal_velocity=areal_velocity,
    periapsis_distance=periapsis_distance,
    period=period,
    total_energy_per_mass=total_energy_per_mass,
    velocity_squared=velocity_squared,
    mean_motion=mean_motion,
    anomaly_from_true=parabolic_from_true,
    true_from_anomaly=true_from_parabolic,
    mean_from_anomaly=mean_from_parabolic,
    anomaly_from_mean=parabolic_from_mean,
)

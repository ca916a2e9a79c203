"""
Circular orbits (e < eps).

On a circle the true, eccentric and mean anomaly coincide, so every
anomaly relation reduces to wrapping into [0, 2*pi). The radius is the
semi-major axis and the areal velocity is sqrt(a*mu)/2.
"""

import math
from typing import Optional

from core.config import SolverSettings
from core.constants import TWO_PI
from core.exceptions import InvalidElementError
from kepler.angles import wrap_two_pi
from kepler.classifier import OrbitFamily
from kepler.equations import KeplerEquations


def areal_velocity(mu: float, a: float, e: float, p: Optional[float] = None) -> float:
    if not a > 0.0:
        raise InvalidElementError(f"Circular orbit radius must be positive, got a = {a}")
    return math.sqrt(a * mu) / 2.0


def periapsis_distance(a: float, e: float, p: Optional[float] = None) -> float:
    return a


def period(n: float) -> float:
    return TWO_PI / n


def total_energy_per_mass(mu: float, a: float) -> float:
    return -mu / (2.0 * a)


def velocity_squared(mu: float, r: float, a: float) -> float:
    return mu * (2.0 / r - 1.0 / a)


def mean_motion(mu: float, a: float, p: Optional[float] = None) -> float:
    if not a > 0.0:
        raise InvalidElementError(f"Circular orbit radius must be positive, got a = {a}")
    return math.sqrt(mu / a ** 3)


def _same_angle(angle: float, e: float) -> float:
    return wrap_two_pi(angle)


def _mean_to_anomaly(M: float, e: float, settings: SolverSettings) -> float:
    return wrap_two_pi(M)


CIRCULAR = KeplerEquations(
    family=OrbitFamily.CIRCULAR,
    areal_velocity=areal_velocity,
    periapsis_distance=periapsis_distance,
    period=period,
    total_energy_per_mass=total_energy_per_mass,
    velocity_squared=velocity_squared,
    mean_motion=mean_motion,
    anomaly_from_true=_same_angle,
    true_from_anomaly=_same_angle,
    mean_from_anomaly=_same_angle,
    anomaly_from_mean=_mean_to_anomaly,
)

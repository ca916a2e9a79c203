"""
===============================================================================
ORBITLAB - Kepler Equations
===============================================================================
Per-family equation record plus the family-independent conic relations.

Each orbit family (circular, elliptical, parabolic, hyperbolic) is a single
``KeplerEquations`` instance: a table of plain functions selected by the
OrbitFamily tag (see kepler.families). There is no class hierarchy; the
families only differ in which functions fill the table.

Anomaly vocabulary used throughout:

    nu  true anomaly          angle from periapsis to the body
    E   eccentric anomaly     elliptical auxiliary angle
    D   parabolic anomaly     D = tan(nu/2)
    H   hyperbolic anomaly    hyperbolic auxiliary "angle"
    M   mean anomaly          linear in time: M = M0 + n*(t - t0)

The auxiliary anomaly (E, D, H, or nu itself for circular orbits) is
called simply "anomaly" in the function names below.

References
----------
    [1] Vallado, "Fundamentals of Astrodynamics and Applications", 4th ed.,
        Sec. 2.2-2.3.
    [2] Wakker, "Fundamentals of Astrodynamics", TU Delft, Ch. 6-8.

===============================================================================
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from core.config import DEFAULT_SETTINGS, SolverSettings
from core.constants import TWO_PI
from core.exceptions import InvalidElementError
from kepler.classifier import OrbitFamily


@dataclass(frozen=True)
class KeplerEquations:
    """
    Function table for one orbit family.

    Attributes
    ----------
    family : OrbitFamily
        Tag of the family this table implements.
    areal_velocity : (mu, a, e, p=None) -> float
        Half the specific angular momentum, h/2 (m^2/s).
    periapsis_distance : (a, e, p=None) -> float
        Closest approach radius (m).
    period : (mean_motion) -> float
        Orbital period (s). Raises UnboundedOrbitError for open orbits.
    total_energy_per_mass : (mu, a) -> float
        Specific mechanical energy (J/kg).
    velocity_squared : (mu, r, a) -> float
        Vis-viva speed squared at radius r (m^2/s^2).
    mean_motion : (mu, a, p=None) -> float
        Rate of change of the mean anomaly (rad/s).
    anomaly_from_true : (nu, e) -> float
    true_from_anomaly : (anomaly, e) -> float
    mean_from_anomaly : (anomaly, e) -> float
    anomaly_from_mean : (M, e, settings) -> float
    """
    family: OrbitFamily
    areal_velocity: Callable[..., float]
    periapsis_distance: Callable[..., float]
    period: Callable[[float], float]
    total_energy_per_mass: Callable[[float, float], float]
    velocity_squared: Callable[[float, float, float], float]
    mean_motion: Callable[..., float]
    anomaly_from_true: Callable[[float, float], float]
    true_from_anomaly: Callable[[float, float], float]
    mean_from_anomaly: Callable[[float, float], float]
    anomaly_from_mean: Callable[[float, float, SolverSettings], float]

    def mean_anomaly(self, nu: float, e: float) -> float:
        """Mean anomaly corresponding to true anomaly *nu*."""
        return self.mean_from_anomaly(self.anomaly_from_true(nu, e), e)

    def true_anomaly_from_mean(self, M: float, e: float,
                               settings: Optional[SolverSettings] = None) -> float:
        """True anomaly corresponding to mean anomaly *M*."""
        settings = settings or DEFAULT_SETTINGS
        return self.true_from_anomaly(self.anomaly_from_mean(M, e, settings), e)

    def semi_latus_rectum(self, mu: float, a: float, e: float,
                          p: Optional[float] = None) -> float:
        """p = h^2 / mu, derived from the family's areal velocity."""
        h = 2.0 * self.areal_velocity(mu, a, e, p)
        return h * h / mu


# =============================================================================
# FAMILY-INDEPENDENT CONIC RELATIONS
# =============================================================================

def require_semi_latus_rectum(a: float, e: float, p: Optional[float]) -> float:
    """
    Return *p* if given, otherwise a*(1 - e^2).

    Parabolic elements carry an infinite semi-major axis, so for them the
    semi-latus rectum has to be supplied explicitly.
    """
    if p is not None:
        if not p > 0.0:
            raise InvalidElementError(f"Semi-latus rectum must be positive, got {p}")
        return float(p)
    if not math.isfinite(a):
        raise InvalidElementError(
            "Semi-latus rectum is required when the semi-major axis is not finite"
        )
    p = a * (1.0 - e * e)
    if not p > 0.0:
        raise InvalidElementError(
            f"Degenerate conic: a = {a:.6e} m with e = {e:.9f} gives p = {p:.6e} m"
        )
    return p


def eccentricity(rp: float, ra: float) -> float:
    """
    Eccentricity of the ellipse with periapsis radius *rp* and apoapsis
    radius *ra*:  e = (ra - rp) / (ra + rp).
    """
    return (ra - rp) / (ra + rp)


def flight_path_angle(e: float, nu: float) -> float:
    """
    Flight path angle gamma (rad), measured from the local horizontal:

        tan(gamma) = e*sin(nu) / (1 + e*cos(nu))
    """
    return math.atan2(e * math.sin(nu), 1.0 + e * math.cos(nu))


def radius(p: float, e: float, nu: float) -> float:
    """Orbit equation: r = p / (1 + e*cos(nu))."""
    return p / (1.0 + e * math.cos(nu))


def mean_motion(mu: float, a: float) -> float:
    """Mean motion n = sqrt(mu / |a|^3) (rad/s)."""
    return math.sqrt(mu / abs(a) ** 3)


def argument_of_latitude(omega: float, nu: float) -> float:
    """u = omega + nu, wrapped into [0, 2*pi)."""
    return (omega + nu) % TWO_PI


def true_longitude(raan: float, omega: float, nu: float) -> float:
    """Approximate true longitude l = RAAN + omega + nu, in [0, 2*pi)."""
    return (raan + omega + nu) % TWO_PI


def specific_angular_momentum(r_vec: np.ndarray, v_vec: np.ndarray) -> np.ndarray:
    """
    Specific angular momentum vector h = r x v (m^2/s).

    h is normal to the orbital plane and |h|^2 / mu is the semi-latus
    rectum.
    """
    return np.cross(
        np.asarray(r_vec, dtype=np.float64),
        np.asarray(v_vec, dtype=np.float64),
    )

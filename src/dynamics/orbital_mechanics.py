"""
===============================================================================
ORBITLAB - State Conversion and Kepler Propagation
===============================================================================
Cartesian <-> Keplerian conversion for every conic family, plus analytic
two-body propagation through the mean anomaly.

    cartesian_to_kepler     (r, v, central)  -> KeplerElements
    cartesian_to_kepler_2d  (r, v, central)  -> KeplerElements (a, e, i, nu)
    kepler_to_cartesian     (elements, mu)   -> CartesianElements
    fix_2d_orbit            replaces undefined RAAN/omega with 0
    propagate_kepler        advance nu by n*dt along a fixed conic

The conic geometry comes from the family's KeplerEquations table: the
areal velocity fixes h and the semi-latus rectum p = h^2/mu, from which

    r     = p / (1 + e*cos(nu))
    r_pqw = r * [cos(nu), sin(nu), 0]
    v_pqw = (mu/h) * [-sin(nu), e + cos(nu), 0]

are rotated into the inertial frame by R = Rz(-RAAN) Rx(-i) Rz(-omega).

Degenerate geometry is normalized, never reported as an error:
    - Equatorial (node vector ~ 0): RAAN = 0, omega measured from x-axis.
    - Circular (e ~ 0): omega = 0, nu measured from the ascending node.
    - Circular equatorial: RAAN = omega = 0, nu measured from the x-axis.

References
----------
    [1] Vallado, "Fundamentals of Astrodynamics and Applications", 4th ed.,
        Algorithms 9 and 10.
    [2] Curtis, "Orbital Mechanics for Engineering Students", 4th ed.

===============================================================================
"""

import logging
import math
from typing import Optional, Tuple, Union

import numpy as np

from core.config import SolverSettings
from core.constants import EQUATORIAL_TOLERANCE, PI, TWO_PI
from core.exceptions import InvalidElementError
from core.frames import perifocal_rotation
from dynamics.bodies import CelestialBody
from dynamics.state_vectors import CartesianElements, KeplerElements
from kepler.classifier import OrbitFamily, classify
from kepler.equations import specific_angular_momentum

logger = logging.getLogger(__name__)

Central = Union[float, CelestialBody]


def _resolve_central(central: Central) -> Tuple[float, CelestialBody]:
    """Return (mu, body) for either a bare mu or a CelestialBody."""
    if isinstance(central, CelestialBody):
        body = central
    else:
        body = CelestialBody.from_mu(float(central))
    mu = body.mu
    if not mu > 0.0:
        raise InvalidElementError(f"Gravitational parameter must be positive, got {mu}")
    return mu, body


def _clipped_angle(a: np.ndarray, b: np.ndarray, a_mag: float, b_mag: float) -> float:
    """Unsigned angle between two vectors, [0, pi]."""
    return float(np.arccos(np.clip(np.dot(a, b) / (a_mag * b_mag), -1.0, 1.0)))


# =============================================================================
# CARTESIAN -> KEPLER
# =============================================================================

def cartesian_to_kepler(r_vec: np.ndarray, v_vec: np.ndarray,
                        central: Central) -> KeplerElements:
    """
    Convert an inertial Cartesian state to classical Keplerian elements.

    The algorithm computes:
        h = r x v                       (angular momentum)
        n = z_hat x h                   (ascending node vector)
        e_vec = (v x h)/mu - r/|r|      (eccentricity vector)
        a = -mu / (2*E), E = v^2/2 - mu/r   (inf for parabolic)
        i = arccos(h_z / |h|)
        RAAN = arctan2(n_y, n_x)
        omega = angle from n to e_vec, 2*pi - omega if e_z < 0
        nu = angle from e_vec to r, mirrored when r.v < 0

    Parameters
    ----------
    r_vec : np.ndarray
        3-element position vector (m).
    v_vec : np.ndarray
        3-element velocity vector (m/s).
    central : float or CelestialBody
        Gravitational parameter (m^3/s^2) or the central body itself. A
        bare mu is wrapped in a new CelestialBody.

    Returns
    -------
    KeplerElements
        Closed orbits carry nu in [0, 2*pi); open orbits carry a signed nu
        in (-pi, pi). Parabolic elements carry a = inf and p = |h|^2/mu.

    Raises
    ------
    InvalidElementError
        For a rectilinear state (h = 0) or a non-positive mu.
    """
    mu, body = _resolve_central(central)
    r = np.asarray(r_vec, dtype=np.float64)
    v = np.asarray(v_vec, dtype=np.float64)

    r_mag = np.linalg.norm(r)
    v_mag = np.linalg.norm(v)

    h = specific_angular_momentum(r, v)
    h_mag = np.linalg.norm(h)
    if not h_mag > 0.0:
        raise InvalidElementError("Rectilinear state (r parallel to v) has no orbital plane")

    z_hat = np.array([0.0, 0.0, 1.0])
    n = np.cross(z_hat, h)
    n_mag = np.linalg.norm(n)

    e_vec = (np.cross(v, h) / mu) - (r / r_mag)
    e = float(np.linalg.norm(e_vec))
    family = classify(e)
    logger.debug(f"Cartesian state classified as {family.value} (e={e:.9f})")

    p = h_mag * h_mag / mu
    energy = 0.5 * v_mag * v_mag - mu / r_mag
    if family is OrbitFamily.PARABOLIC:
        a = math.inf
    else:
        a = -mu / (2.0 * energy)

    inc = float(np.arccos(np.clip(h[2] / h_mag, -1.0, 1.0)))

    equatorial = n_mag <= EQUATORIAL_TOLERANCE * h_mag
    circular = family is OrbitFamily.CIRCULAR
    retrograde = h[2] < 0.0

    # Right Ascension of Ascending Node
    if not equatorial:
        raan = float(np.arctan2(n[1], n[0]) % TWO_PI)
    else:
        raan = 0.0

    # Argument of periapsis
    if circular:
        omega = 0.0
    elif not equatorial:
        omega = _clipped_angle(n, e_vec, n_mag, e)
        if e_vec[2] < 0.0:
            omega = TWO_PI - omega
    else:
        omega = float(np.arctan2(e_vec[1], e_vec[0]))
        if retrograde:
            omega = -omega
        omega %= TWO_PI

    # True anomaly
    if not circular:
        nu = _clipped_angle(e_vec, r, e, r_mag)
        if np.dot(r, v) < 0.0:
            nu = TWO_PI - nu if family.is_closed else -nu
    elif not equatorial:
        nu = _clipped_angle(n, r, n_mag, r_mag)
        if r[2] < 0.0:
            nu = TWO_PI - nu
    else:
        if retrograde:
            nu = float(np.arctan2(-r[1], r[0]) % TWO_PI)
        else:
            nu = float(np.arctan2(r[1], r[0]) % TWO_PI)

    if equatorial or circular:
        logger.debug(f"Degenerate geometry normalized (equatorial={equatorial}, "
                     f"circular={circular})")

    elements = KeplerElements(
        a=a, e=e, i=inc, omega=omega, raan=raan, true_anomaly=nu, body=body,
        p=p if family is OrbitFamily.PARABOLIC else None,
    )
    return fix_2d_orbit(elements)


def cartesian_to_kepler_2d(r_vec: np.ndarray, v_vec: np.ndarray,
                           central: Central) -> KeplerElements:
    """
    Planar reduction of cartesian_to_kepler.

    Only a, e and nu are computed; the inclination is 0 for prograde
    (h_z >= 0) and pi for retrograde motion. RAAN and omega are 0.
    """
    mu, body = _resolve_central(central)
    r = np.asarray(r_vec, dtype=np.float64)
    v = np.asarray(v_vec, dtype=np.float64)
    r_mag = np.linalg.norm(r)
    v_mag = np.linalg.norm(v)

    h = specific_angular_momentum(r, v)
    h_mag = np.linalg.norm(h)
    if not h_mag > 0.0:
        raise InvalidElementError("Rectilinear state (r parallel to v) has no orbital plane")

    e_vec = (np.cross(v, h) / mu) - (r / r_mag)
    e = float(np.linalg.norm(e_vec))
    family = classify(e)

    energy = 0.5 * v_mag * v_mag - mu / r_mag
    a = math.inf if family is OrbitFamily.PARABOLIC else -mu / (2.0 * energy)

    if family is OrbitFamily.CIRCULAR:
        nu = float(np.arctan2(r[1], r[0]))
        if h[2] < 0.0:
            nu = -nu
        nu %= TWO_PI
    else:
        nu = _clipped_angle(e_vec, r, e, r_mag)
        if np.dot(r, v) < 0.0:
            nu = TWO_PI - nu if family.is_closed else -nu

    return KeplerElements(
        a=a, e=e, i=0.0 if h[2] >= 0.0 else PI, omega=0.0, raan=0.0,
        true_anomaly=nu, body=body,
        p=h_mag * h_mag / mu if family is OrbitFamily.PARABOLIC else None,
    )


def fix_2d_orbit(elements: KeplerElements) -> KeplerElements:
    """
    Replace an undefined (NaN) RAAN or argument of periapsis with 0.

    Planar and circular orbits leave these angles without a geometric
    meaning. The elements are modified in place and returned.
    """
    if math.isnan(elements.raan):
        elements.raan = 0.0
    if math.isnan(elements.omega):
        elements.omega = 0.0
    return elements


# =============================================================================
# KEPLER -> CARTESIAN
# =============================================================================

def kepler_to_cartesian(elements: KeplerElements,
                        mu: Optional[float] = None) -> CartesianElements:
    """
    Convert Keplerian elements to an inertial Cartesian state.

    Parameters
    ----------
    elements : KeplerElements
        Elements to convert. The family is taken from ``elements.e``.
    mu : float, optional
        Gravitational parameter (m^3/s^2). Defaults to ``elements.body.mu``.

    Returns
    -------
    CartesianElements

    Raises
    ------
    InvalidElementError
        If no mu is available, if ``a`` has the wrong sign for the family,
        or if nu lies beyond the asymptotes of an open orbit.
    """
    if mu is None:
        if elements.body is None:
            raise InvalidElementError(
                "No gravitational parameter: pass mu or attach a central body"
            )
        mu = elements.body.mu

    e = elements.e
    nu = elements.true_anomaly
    eqs = elements.equations

    h = 2.0 * eqs.areal_velocity(mu, elements.a, e, elements.p)
    p = h * h / mu

    cos_nu = np.cos(nu)
    sin_nu = np.sin(nu)
    denom = 1.0 + e * cos_nu
    if not denom > 0.0:
        raise InvalidElementError(
            f"True anomaly {nu:.6f} rad is not reachable on a {eqs.family.value} "
            f"orbit with e = {e:.6f}"
        )
    r_mag = p / denom

    r_pqw = r_mag * np.array([cos_nu, sin_nu, 0.0], dtype=np.float64)
    v_pqw = (mu / h) * np.array([-sin_nu, e + cos_nu, 0.0], dtype=np.float64)

    R = perifocal_rotation(elements.raan, elements.i, elements.omega)
    return CartesianElements(position=R @ r_pqw, velocity=R @ v_pqw)


# =============================================================================
# ANALYTIC PROPAGATION
# =============================================================================

def propagate_kepler(elements: KeplerElements, dt: float,
                     settings: Optional[SolverSettings] = None,
                     mu: Optional[float] = None) -> KeplerElements:
    """
    Advance the elements by *dt* seconds along their (unperturbed) conic.

    The mean anomaly grows linearly, M = M0 + n*dt; the new true anomaly
    is recovered through the family's Kepler equation. All other elements
    are unchanged.

    Returns
    -------
    KeplerElements
        A copy of *elements* with the propagated true anomaly.
    """
    if mu is None:
        if elements.body is None:
            raise InvalidElementError(
                "No gravitational parameter: pass mu or attach a central body"
            )
        mu = elements.body.mu

    eqs = elements.equations
    n = eqs.mean_motion(mu, elements.a, elements.p)
    M0 = eqs.mean_anomaly(elements.true_anomaly, elements.e)
    M = M0 + n * dt

    propagated = elements.copy()
    propagated.true_anomaly = eqs.true_anomaly_from_mean(M, elements.e, settings)
    logger.debug(f"Propagated {eqs.family.value} orbit by {dt:.3f} s: "
                 f"M {M0:.6f} -> {M:.6f} rad")
    return propagated

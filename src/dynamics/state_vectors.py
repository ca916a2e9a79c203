"""
===============================================================================
ORBITLAB - State Vectors
===============================================================================
The two equivalent representations of a two-body state:

    CartesianElements   position r (m) and velocity v (m/s), inertial frame
    KeplerElements      a, e, i, omega, RAAN, nu  (+ p for parabolas)

Both flatten to a fixed six-component layout for ODE steppers and any
serialization:

    Cartesian  [rx, ry, rz, vx, vy, vz]
    Kepler     [a, e, i, omega, RAAN, nu]

The orbit family of a KeplerElements is never stored. It is derived from
``e`` on every access, since the elements are mutable.
===============================================================================
"""

import math
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from core.exceptions import DimensionError, InvalidElementError
from kepler.angles import angular_difference
from kepler.classifier import OrbitFamily, classify
from kepler.equations import KeplerEquations, require_semi_latus_rectum
from kepler.families import equations_for

if TYPE_CHECKING:
    from dynamics.bodies import CelestialBody

STATE_DIMENSION = 6

CARTESIAN_LAYOUT = "[rx, ry, rz, vx, vy, vz]"
KEPLER_LAYOUT = "[a, e, i, omega, raan, nu]"


def _as_flat_vector(vector: Sequence[float], layout: str) -> np.ndarray:
    vec = np.asarray(vector, dtype=np.float64).ravel()
    if vec.size != STATE_DIMENSION:
        raise DimensionError(STATE_DIMENSION, vec.size, layout)
    return vec


def _as_3vector(vector: Sequence[float], name: str) -> np.ndarray:
    vec = np.asarray(vector, dtype=np.float64).ravel()
    if vec.size != 3:
        raise DimensionError(3, vec.size, name)
    return vec


# =============================================================================
# CARTESIAN STATE
# =============================================================================

@dataclass
class CartesianElements:
    """
    Inertial position and velocity relative to a central body.

    Attributes
    ----------
    position : np.ndarray
        3-element position vector (m).
    velocity : np.ndarray
        3-element velocity vector (m/s).
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        self.position = _as_3vector(self.position, "position")
        self.velocity = _as_3vector(self.velocity, "velocity")

    @classmethod
    def from_vector(cls, vector: Sequence[float]) -> 'CartesianElements':
        """Build from ``[rx, ry, rz, vx, vy, vz]``; any other length raises DimensionError."""
        vec = _as_flat_vector(vector, CARTESIAN_LAYOUT)
        return cls(position=vec[:3].copy(), velocity=vec[3:].copy())

    def to_vector(self) -> np.ndarray:
        """Flatten to ``[rx, ry, rz, vx, vy, vz]``."""
        return np.concatenate([self.position, self.velocity])

    @property
    def r_mag(self) -> float:
        """Magnitude of the position vector (m)."""
        return float(np.linalg.norm(self.position))

    @property
    def v_mag(self) -> float:
        """Magnitude of the velocity vector (m/s)."""
        return float(np.linalg.norm(self.velocity))

    def to_kepler(self, central) -> 'KeplerElements':
        """Convert to Kepler elements about *central* (mu or CelestialBody)."""
        from dynamics.orbital_mechanics import cartesian_to_kepler
        return cartesian_to_kepler(self.position, self.velocity, central)

    def copy(self) -> 'CartesianElements':
        """Return a deep copy of this state."""
        return CartesianElements(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
        )

    def is_close(self, other: 'CartesianElements', rtol: float = 1e-9,
                 atol: float = 0.0) -> bool:
        """Component-wise comparison of position and velocity."""
        return (np.allclose(self.position, other.position, rtol=rtol, atol=atol)
                and np.allclose(self.velocity, other.velocity, rtol=rtol, atol=atol))


# =============================================================================
# KEPLER ELEMENTS
# =============================================================================

@dataclass
class KeplerElements:
    """
    Classical orbital elements.

    Attributes
    ----------
    a : float
        Semi-major axis (m). Negative for hyperbolic orbits, ``inf`` for
        parabolic ones.
    e : float
        Eccentricity, e >= 0.
    i : float
        Inclination (rad), [0, pi].
    omega : float
        Argument of periapsis (rad).
    raan : float
        Right ascension of the ascending node (rad).
    true_anomaly : float
        True anomaly nu (rad).
    body : CelestialBody, optional
        Shared central body. Only ``body.mu`` is ever read.
    p : float, optional
        Semi-latus rectum (m). Required when ``a`` is not finite.
    """
    a: float
    e: float
    i: float = 0.0
    omega: float = 0.0
    raan: float = 0.0
    true_anomaly: float = 0.0
    body: Optional['CelestialBody'] = None
    p: Optional[float] = None

    def __post_init__(self):
        if math.isnan(self.e) or self.e < 0.0:
            raise InvalidElementError(f"Eccentricity must be non-negative, got {self.e}")

    @property
    def family(self) -> OrbitFamily:
        """Orbit family, recomputed from the current eccentricity."""
        return classify(self.e)

    @property
    def equations(self) -> KeplerEquations:
        """Kepler equation table for the current family."""
        return equations_for(self.family)

    @property
    def semi_latus_rectum(self) -> float:
        """p, either stored or a*(1 - e^2)."""
        return require_semi_latus_rectum(self.a, self.e, self.p)

    @property
    def mu(self) -> Optional[float]:
        return None if self.body is None else self.body.mu

    @classmethod
    def from_vector(cls, vector: Sequence[float],
                    body: Optional['CelestialBody'] = None,
                    p: Optional[float] = None) -> 'KeplerElements':
        """
        Build from ``[a, e, i, omega, raan, nu]``; any other length raises
        DimensionError.

        The six-vector has no slot for the semi-latus rectum, so a vector
        with an infinite ``a`` (a parabola) needs *p* passed alongside it.
        """
        a, e, i, omega, raan, nu = _as_flat_vector(vector, KEPLER_LAYOUT)
        if p is None and not math.isfinite(a):
            raise InvalidElementError(
                f"Kepler vector with a = {a} needs the semi-latus rectum p "
                f"to fix the conic size"
            )
        return cls(a=float(a), e=float(e), i=float(i), omega=float(omega),
                   raan=float(raan), true_anomaly=float(nu), body=body,
                   p=None if p is None else float(p))

    def to_vector(self) -> np.ndarray:
        """Flatten to ``[a, e, i, omega, raan, nu]``; ``p`` is not included."""
        return np.array([self.a, self.e, self.i, self.omega,
                         self.raan, self.true_anomaly], dtype=np.float64)

    def to_cartesian(self, mu: Optional[float] = None) -> CartesianElements:
        """Convert to a Cartesian state; *mu* defaults to ``body.mu``."""
        from dynamics.orbital_mechanics import kepler_to_cartesian
        return kepler_to_cartesian(self, mu)

    def copy(self) -> 'KeplerElements':
        """Shallow copy; the central body stays shared."""
        return replace(self)

    def is_close(self, other: 'KeplerElements', rtol: float = 1e-9,
                 angle_tol: float = 1e-9) -> bool:
        """
        Compare shape (a, e) relatively and the four angles modulo 2*pi.
        """
        if not math.isclose(self.a, other.a, rel_tol=rtol):
            return False
        if not math.isclose(self.e, other.e, rel_tol=rtol, abs_tol=angle_tol):
            return False
        pairs = ((self.i, other.i), (self.omega, other.omega),
                 (self.raan, other.raan), (self.true_anomaly, other.true_anomaly))
        return all(abs(angular_difference(x, y)) <= angle_tol for x, y in pairs)

"""
Central bodies.

A CelestialBody is shared by reference between every element set or state
that orbits it; the conversion engine only ever reads ``mu`` from it.
"""

from dataclasses import dataclass, field
from typing import Optional

from core.constants import GRAVITATIONAL_CONSTANT, SUN_MASS
from dynamics.state_vectors import CartesianElements


@dataclass
class CelestialBody:
    """
    Gravitating body with a mass and an (optional) state of its own.

    Attributes
    ----------
    mass : float
        Body mass (kg). Defaults to one solar mass.
    state : CartesianElements
        Position/velocity of the body itself (default at rest at the
        origin).
    """
    mass: float = SUN_MASS
    state: CartesianElements = field(default_factory=CartesianElements)

    @property
    def mu(self) -> float:
        """Gravitational parameter mu = G * m (m^3/s^2)."""
        return GRAVITATIONAL_CONSTANT * self.mass

    @mu.setter
    def mu(self, value: float) -> None:
        self.mass = value / GRAVITATIONAL_CONSTANT

    @classmethod
    def from_mu(cls, mu: float, state: Optional[CartesianElements] = None) -> 'CelestialBody':
        """Build a body from its gravitational parameter instead of its mass."""
        body = cls(mass=mu / GRAVITATIONAL_CONSTANT)
        if state is not None:
            body.state = state
        return body

"""
Orbit family classification.

The four conic families are separated by eccentricity bands of half-width
ECCENTRICITY_TOLERANCE around 0 and 1:

    e <  eps               Circular
    eps     <= e < 1 - eps Elliptical
    1 - eps <= e < 1 + eps Parabolic
    1 + eps <= e           Hyperbolic

The bands are half-open, so every non-negative eccentricity lands in
exactly one family.
"""

import math
from enum import Enum

from core.constants import ECCENTRICITY_TOLERANCE
from core.exceptions import InvalidElementError


class OrbitFamily(Enum):
    """Conic section governing a set of Kepler elements."""
    CIRCULAR = "circular"
    ELLIPTICAL = "elliptical"
    PARABOLIC = "parabolic"
    HYPERBOLIC = "hyperbolic"

    @property
    def is_closed(self) -> bool:
        """True for the periodic (bound) families."""
        return self in (OrbitFamily.CIRCULAR, OrbitFamily.ELLIPTICAL)


def classify(e: float) -> OrbitFamily:
    """
    Return the orbit family for eccentricity *e*.

    Raises
    ------
    InvalidElementError
        If *e* is negative or NaN.
    """
    if math.isnan(e) or e < 0.0:
        raise InvalidElementError(f"Eccentricity must be non-negative, got {e}")

    tol = ECCENTRICITY_TOLERANCE
    if e < tol:
        return OrbitFamily.CIRCULAR
    elif e < 1.0 - tol:
        return OrbitFamily.ELLIPTICAL
    elif e < 1.0 + tol:
        return OrbitFamily.PARABOLIC
    else:
        return OrbitFamily.HYPERBOLIC

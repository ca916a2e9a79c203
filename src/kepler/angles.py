"""
Angle helpers shared by the anomaly relations.

Half-angle formulas such as tan(nu/2) = k * tan(E/2) only pin an anomaly
down modulo pi once inverted with atan. ``quadrant_fix`` moves such a
result onto the same revolution as a reference angle that is known to lie
on the correct side.
"""

import numpy as np

from core.constants import PI, TWO_PI


def wrap_two_pi(angle: float) -> float:
    """Wrap *angle* into [0, 2*pi)."""
    wrapped = float(np.mod(angle, TWO_PI))
    # np.mod can round a tiny negative input up to exactly 2*pi
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def wrap_pi(angle: float) -> float:
    """Wrap *angle* into [-pi, pi)."""
    return wrap_two_pi(angle + PI) - PI


def quadrant_fix(angle: float, reference: float) -> float:
    """
    Shift *angle* by a whole number of revolutions so that it lies within
    pi of *reference*.

    Parameters
    ----------
    angle : float
        Angle produced by an atan/atan2 based relation (rad).
    reference : float
        Angle known to be on the correct revolution, e.g. the eccentric
        anomaly when recovering the true anomaly (rad).

    Returns
    -------
    float
        ``angle + 2*pi*k`` with ``|result - reference| <= pi``.
    """
    k = np.round((reference - angle) / TWO_PI)
    return float(angle + k * TWO_PI)


def angular_difference(a: float, b: float) -> float:
    """Smallest signed difference a - b, in [-pi, pi)."""
    return wrap_pi(a - b)

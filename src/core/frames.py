"""
===============================================================================
ORBITLAB - Perifocal Frame Rotation
===============================================================================
Elementary rotations and the 3-1-3 Euler sequence that carries vectors
from the perifocal (PQW) frame of an orbit into the inertial frame of its
central body.

    p-hat  -> toward periapsis
    q-hat  -> 90 deg ahead of p-hat in the direction of motion
    w-hat  -> along the specific angular momentum h

All functions operate on NumPy arrays and return NumPy arrays. Angles are
in radians.

References
----------
    [1] Vallado, "Fundamentals of Astrodynamics and Applications", 4th ed.
    [2] Curtis, "Orbital Mechanics for Engineering Students", 4th ed.

===============================================================================
"""

import numpy as np


# =============================================================================
# ELEMENTARY ROTATION MATRICES
# =============================================================================

def Rx(angle: float) -> np.ndarray:
    """
    Elementary (passive) rotation matrix about the X-axis.

        Rx(a) = | 1    0       0     |
                | 0   cos(a)  sin(a)  |
                | 0  -sin(a)  cos(a)  |
    """
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array([
        [1.0,  0.0,  0.0],
        [0.0,    c,    s],
        [0.0,   -s,    c],
    ], dtype=np.float64)


def Rz(angle: float) -> np.ndarray:
    """
    Elementary (passive) rotation matrix about the Z-axis.

        Rz(a) = |  cos(a)  sin(a)  0 |
                | -sin(a)  cos(a)  0 |
                |    0       0     1 |
    """
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array([
        [  c,    s,  0.0],
        [ -s,    c,  0.0],
        [0.0,  0.0,  1.0],
    ], dtype=np.float64)


# =============================================================================
# PERIFOCAL -> INERTIAL
# =============================================================================

def perifocal_rotation(raan: float, inc: float, omega: float) -> np.ndarray:
    """
    Rotation matrix from the perifocal (PQW) frame to the inertial frame.

    The two frames are related by three successive rotations:
        1. Rotate about Z by -RAAN            (undo right ascension)
        2. Rotate about X by -inc             (undo inclination)
        3. Rotate about Z by -omega           (undo argument of periapsis)

        R = Rz(-RAAN) * Rx(-inc) * Rz(-omega)

    Parameters
    ----------
    raan : float
        Right Ascension of the Ascending Node (rad).
    inc : float
        Orbital inclination (rad).
    omega : float
        Argument of periapsis (rad).

    Returns
    -------
    np.ndarray
        3x3 rotation matrix; columns are p-hat, q-hat, w-hat expressed in
        the inertial frame.

    References
    ----------
    Vallado (2013), Algorithm 10.
    """
    return Rz(-raan) @ Rx(-inc) @ Rz(-omega)


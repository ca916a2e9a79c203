"""
===============================================================================
ORBITLAB - Physical Constants and Numerical Tolerances
===============================================================================
Central repository for the constants used by the Kepler engine and the
trajectory containers. SI units throughout (meters, seconds, kilograms,
radians).

Body values are IAU 2012 / IERS where applicable. The numerical tolerances
at the bottom are shared process-wide: the orbit family of a set of
elements is always decided against ECCENTRICITY_TOLERANCE, never against a
per-call value.
===============================================================================
"""

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
PI = np.pi
TWO_PI = 2.0 * np.pi
HALF_PI = 0.5 * np.pi
DEG2RAD = PI / 180.0
RAD2DEG = 180.0 / PI

# =============================================================================
# FUNDAMENTAL PHYSICAL CONSTANTS
# =============================================================================
GRAVITATIONAL_CONSTANT = 6.67430e-11   # m^3 / (kg * s^2)
AU = 1.495978707e11                    # Astronomical Unit in meters

# =============================================================================
# CENTRAL BODIES
# =============================================================================
EARTH_MU = 3.986004418e14              # Gravitational parameter (m^3/s^2)
EARTH_MASS = 5.97237e24                # kg
EARTH_RADIUS = 6371000.0               # Mean radius (m)

MOON_MU = 4.9048695e12                 # m^3/s^2
MOON_MASS = 7.342e22                   # kg

SUN_MU = 1.32712440018e20              # m^3/s^2
SUN_MASS = 1.98892e30                  # kg

# =============================================================================
# KEPLER ENGINE TOLERANCES
# =============================================================================
# Width of the eccentricity bands around 0 (circular) and 1 (parabolic).
ECCENTRICITY_TOLERANCE = 1e-6

# Node vector magnitude, relative to |h|, below which an orbit is treated
# as equatorial.
EQUATORIAL_TOLERANCE = 1e-11

# Defaults for the iterative anomaly solvers (overridable via config).
ANOMALY_TOLERANCE = 1e-10              # rad
ANOMALY_MAX_ITERATIONS = 50

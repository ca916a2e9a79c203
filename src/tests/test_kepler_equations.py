"""
===============================================================================
ORBITLAB - Kepler Equations Test Suite
===============================================================================
Tests for the per-family Kepler equations: anomaly inversion for every
family, solver bounds, energy/period/vis-viva formulas, angle helpers,
and the static conic relations.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from core.config import SolverSettings
from core.constants import EARTH_MU, PI, TWO_PI
from core.exceptions import (
    AnomalyConvergenceError,
    InvalidElementError,
    UnboundedOrbitError,
)
from kepler.angles import angular_difference, quadrant_fix, wrap_pi, wrap_two_pi
from kepler.circular import CIRCULAR
from kepler.elliptical import ELLIPTICAL, eccentric_from_mean
from kepler.equations import (
    argument_of_latitude,
    eccentricity,
    flight_path_angle,
    radius,
    specific_angular_momentum,
    true_longitude,
)
from kepler.families import mean_anomaly, true_anomaly_from_mean
from kepler.hyperbolic import HYPERBOLIC
from kepler.parabolic import PARABOLIC, mean_from_parabolic, parabolic_from_mean

MEAN_ANOMALIES = np.linspace(0.0, TWO_PI, 25, endpoint=False)


# =============================================================================
# Anomaly inversion
# =============================================================================

class TestAnomalyInversion:
    """mean_anomaly(true_anomaly_from_mean(M, e), e) == M for every family."""

    @pytest.mark.parametrize("e", [0.0, 1e-3, 0.1, 0.5, 0.8, 0.9, 0.99])
    def test_closed_orbits(self, e):
        """Closed orbits: round trip over M in [0, 2*pi)."""
        for M in MEAN_ANOMALIES:
            nu = true_anomaly_from_mean(M, e)
            assert 0.0 <= nu < TWO_PI
            assert abs(angular_difference(mean_anomaly(nu, e), M)) < 1e-9

    @pytest.mark.parametrize("e", [1.0 + 1e-3, 1.5, 3.0, 10.0])
    @pytest.mark.parametrize("M", [-10.0, -2.0, -0.1, 0.0, 0.1, 2.0, 10.0])
    def test_hyperbolic(self, e, M):
        """Hyperbolic anomalies are signed and the round trip is exact."""
        nu = true_anomaly_from_mean(M, e)
        assert -PI < nu < PI
        assert np.sign(nu) == np.sign(M)
        assert_allclose(mean_anomaly(nu, e), M, rtol=1e-9, atol=1e-12)

    @pytest.mark.parametrize("M", [-20.0, -1.0, 0.0, 0.5, 4.0 / 3.0, 20.0])
    def test_parabolic(self, M):
        """Barker's equation is inverted in closed form."""
        nu = true_anomaly_from_mean(M, 1.0)
        assert -PI < nu < PI
        assert_allclose(mean_anomaly(nu, 1.0), M, rtol=1e-12, atol=1e-14)

    def test_barker_reference_value(self):
        """D = 1 gives M = 4/3, i.e. nu = pi/2."""
        assert_allclose(mean_from_parabolic(1.0, 1.0), 4.0 / 3.0)
        assert_allclose(parabolic_from_mean(4.0 / 3.0, 1.0, SolverSettings()), 1.0,
                        rtol=1e-14)
        assert_allclose(true_anomaly_from_mean(4.0 / 3.0, 1.0), PI / 2.0, rtol=1e-14)

    def test_circular_anomalies_coincide(self):
        for M in MEAN_ANOMALIES:
            assert_allclose(CIRCULAR.true_anomaly_from_mean(M, 0.0), M, atol=1e-15)

    def test_elliptical_reference_value(self):
        """M = 5 rad, e = 0.6 gives nu = 3.8564447 rad (i.e. -2.42674 rad)."""
        nu = ELLIPTICAL.true_anomaly_from_mean(5.0, 0.6)
        assert_allclose(nu, 3.8564447095, atol=1e-8)

    def test_mean_anomaly_at_periapsis_and_apoapsis(self):
        assert_allclose(ELLIPTICAL.mean_anomaly(0.0, 0.7), 0.0, atol=1e-15)
        assert_allclose(ELLIPTICAL.mean_anomaly(PI, 0.7), PI, atol=1e-12)


class TestSolverBounds:
    """Iteration bound and tolerance come from SolverSettings."""

    def test_convergence_error_when_iterations_exhausted(self):
        settings = SolverSettings(tolerance=1e-15, max_iterations=1)
        with pytest.raises(AnomalyConvergenceError) as excinfo:
            eccentric_from_mean(0.3, 0.9, settings)
        assert excinfo.value.iterations == 1
        assert excinfo.value.eccentricity == 0.9

    def test_convergence_error_is_runtime_error(self):
        settings = SolverSettings(tolerance=1e-15, max_iterations=1)
        with pytest.raises(RuntimeError):
            HYPERBOLIC.true_anomaly_from_mean(50.0, 1.2, settings)

    def test_default_settings_converge(self):
        E = eccentric_from_mean(1.0, 0.5, SolverSettings())
        assert_allclose(E - 0.5 * math.sin(E), 1.0, atol=1e-12)

    @pytest.mark.parametrize("kwargs", [
        {"tolerance": 0.0},
        {"tolerance": -1e-10},
        {"max_iterations": 0},
        {"max_iterations": 2.5},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            SolverSettings(**kwargs)


# =============================================================================
# Energy, period and vis-viva
# =============================================================================

class TestFamilyFormulas:
    """Closed-form per-family quantities."""

    def test_elliptical_areal_velocity(self):
        a, e = 7.0e6, 0.1
        expected = math.sqrt(a * EARTH_MU * (1.0 - e * e)) / 2.0
        assert_allclose(ELLIPTICAL.areal_velocity(EARTH_MU, a, e), expected, rtol=1e-14)

    def test_circular_areal_velocity(self):
        a = 7.0e6
        assert_allclose(CIRCULAR.areal_velocity(EARTH_MU, a, 0.0),
                        math.sqrt(a * EARTH_MU) / 2.0, rtol=1e-14)

    def test_hyperbolic_areal_velocity(self):
        a, e = -2.0e7, 1.5
        expected = math.sqrt(-a * EARTH_MU * (e * e - 1.0)) / 2.0
        assert_allclose(HYPERBOLIC.areal_velocity(EARTH_MU, a, e), expected, rtol=1e-14)

    def test_parabolic_areal_velocity_uses_semi_latus_rectum(self):
        p = 1.4e7
        assert_allclose(PARABOLIC.areal_velocity(EARTH_MU, math.inf, 1.0, p),
                        math.sqrt(EARTH_MU * p) / 2.0, rtol=1e-14)

    def test_parabolic_without_semi_latus_rectum_rejected(self):
        with pytest.raises(InvalidElementError):
            PARABOLIC.areal_velocity(EARTH_MU, math.inf, 1.0)

    @pytest.mark.parametrize("eqs,a", [(ELLIPTICAL, -7.0e6), (HYPERBOLIC, 7.0e6)])
    def test_wrong_sign_semi_major_axis_rejected(self, eqs, a):
        with pytest.raises(InvalidElementError):
            eqs.areal_velocity(EARTH_MU, a, 0.5 if eqs is ELLIPTICAL else 1.5)

    def test_periapsis_distance(self):
        assert_allclose(ELLIPTICAL.periapsis_distance(1.0e7, 0.2), 8.0e6)
        assert_allclose(CIRCULAR.periapsis_distance(1.0e7, 0.0), 1.0e7)
        assert_allclose(HYPERBOLIC.periapsis_distance(-1.0e7, 1.5), 5.0e6)
        assert_allclose(PARABOLIC.periapsis_distance(math.inf, 1.0, 1.4e7), 7.0e6)

    def test_period_of_closed_orbits(self):
        n = 1.1e-3
        assert_allclose(ELLIPTICAL.period(n), TWO_PI / n)
        assert_allclose(CIRCULAR.period(n), TWO_PI / n)

    @pytest.mark.parametrize("eqs", [PARABOLIC, HYPERBOLIC])
    def test_period_of_open_orbits_is_unbounded(self, eqs):
        with pytest.raises(UnboundedOrbitError):
            eqs.period(1.1e-3)

    def test_energy(self):
        a = 7.0e6
        assert_allclose(ELLIPTICAL.total_energy_per_mass(EARTH_MU, a), -EARTH_MU / (2 * a))
        assert PARABOLIC.total_energy_per_mass(EARTH_MU, 7.0e6) == 0.0
        assert PARABOLIC.total_energy_per_mass(EARTH_MU, math.inf) == 0.0
        assert HYPERBOLIC.total_energy_per_mass(EARTH_MU, -a) > 0.0

    def test_parabolic_velocity_is_escape_velocity(self):
        r = 7.0e6
        assert_allclose(PARABOLIC.velocity_squared(EARTH_MU, r, math.inf),
                        2.0 * EARTH_MU / r)

    def test_parabolic_mean_motion(self):
        p = 1.4e7
        assert_allclose(PARABOLIC.mean_motion(EARTH_MU, math.inf, p),
                        2.0 * math.sqrt(EARTH_MU / p ** 3))

    def test_semi_latus_rectum_from_areal_velocity(self):
        a, e = 1.0e7, 0.3
        assert_allclose(ELLIPTICAL.semi_latus_rectum(EARTH_MU, a, e),
                        a * (1.0 - e * e), rtol=1e-12)

    def test_true_anomaly_beyond_asymptote_rejected(self):
        # Asymptote for e = 2 is at acos(-1/2) = 120 deg
        with pytest.raises(InvalidElementError):
            HYPERBOLIC.mean_anomaly(np.radians(150.0), 2.0)


# =============================================================================
# Angle helpers
# =============================================================================

class TestAngles:

    @pytest.mark.parametrize("angle", [-7.0, -1e-20, 0.0, 3.0, TWO_PI, 20.0])
    def test_wrap_two_pi_range(self, angle):
        wrapped = wrap_two_pi(angle)
        assert 0.0 <= wrapped < TWO_PI
        assert_allclose(math.cos(wrapped), math.cos(angle), atol=1e-12)

    @pytest.mark.parametrize("angle", [-7.0, -PI, 0.0, PI, 4.0])
    def test_wrap_pi_range(self, angle):
        wrapped = wrap_pi(angle)
        assert -PI <= wrapped < PI
        assert_allclose(math.sin(wrapped), math.sin(angle), atol=1e-12)

    def test_quadrant_fix(self):
        """atan results are moved onto the revolution of the reference."""
        assert_allclose(quadrant_fix(-0.1, 6.0), TWO_PI - 0.1)
        assert_allclose(quadrant_fix(0.5, 0.4), 0.5)
        assert_allclose(quadrant_fix(3.0, -3.0), 3.0 - TWO_PI)

    def test_angular_difference(self):
        assert_allclose(angular_difference(0.1, TWO_PI - 0.1), 0.2, atol=1e-12)
        assert_allclose(angular_difference(TWO_PI - 0.1, 0.1), -0.2, atol=1e-12)


# =============================================================================
# Static conic relations
# =============================================================================

class TestStaticRelations:

    def test_eccentricity_from_apsides(self):
        assert_allclose(eccentricity(1.0, 1.0), 0.0, atol=1e-3)
        # Earth-Mars transfer: perihelion at Earth, aphelion at Mars
        assert_allclose(eccentricity(1.495978e11, 2.27987047e11), 0.207606972, atol=1e-9)

    def test_flight_path_angle(self):
        gamma = flight_path_angle(0.6, -2.427) % TWO_PI
        assert_allclose(gamma, 5.6597, atol=1e-4)

    def test_flight_path_angle_zero_at_apsides(self):
        assert_allclose(flight_path_angle(0.5, 0.0), 0.0, atol=1e-15)
        assert_allclose(flight_path_angle(0.5, PI), 0.0, atol=1e-15)

    def test_radius(self):
        p, e = 1.0e7, 0.5
        assert_allclose(radius(p, e, 0.0), p / 1.5)
        assert_allclose(radius(p, e, PI / 2.0), p)

    def test_argument_of_latitude_and_true_longitude(self):
        assert_allclose(argument_of_latitude(5.0, 2.0), 7.0 - TWO_PI)
        assert_allclose(true_longitude(1.0, 2.0, 3.0), 6.0)

    def test_specific_angular_momentum(self):
        h = specific_angular_momentum([7.0e6, 0.0, 0.0], [0.0, 7.5e3, 0.0])
        assert_allclose(h, [0.0, 0.0, 7.0e6 * 7.5e3])

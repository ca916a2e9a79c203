"""
Error taxonomy for the Kepler engine and the trajectory containers.

Every error derives from OrbitError and from the builtin exception a
caller would naturally catch for that failure (ValueError for bad input,
RuntimeError for a solver that gave up, LookupError for a missing
sample). None of these are retried internally.
"""


class OrbitError(Exception):
    """Base class for all orbit-engine failures."""


class InvalidElementError(OrbitError, ValueError):
    """Malformed orbital elements, e.g. a negative eccentricity."""


class UnboundedOrbitError(OrbitError, ValueError):
    """A periodic quantity was requested for a parabolic or hyperbolic orbit."""


class AnomalyConvergenceError(OrbitError, RuntimeError):
    """The iterative anomaly solve did not converge within its bound.

    Attributes
    ----------
    mean_anomaly : float
        Mean anomaly (rad) that was being inverted.
    eccentricity : float
        Eccentricity of the orbit.
    iterations : int
        Number of iterations performed before giving up.
    """

    def __init__(self, mean_anomaly: float, eccentricity: float,
                 iterations: int) -> None:
        self.mean_anomaly = mean_anomaly
        self.eccentricity = eccentricity
        self.iterations = iterations
        super().__init__(
            f"Anomaly solve did not converge after {iterations} iterations "
            f"(M = {mean_anomaly:.12g} rad, e = {eccentricity:.12g})"
        )


class NoPrecedingStateError(OrbitError, LookupError):
    """A trajectory was queried before its earliest sample."""

    def __init__(self, time: float, start_time=None) -> None:
        self.time = time
        self.start_time = start_time
        if start_time is None:
            message = f"Trajectory holds no samples; cannot evaluate t = {time}"
        else:
            message = (
                f"No state on or before t = {time}; "
                f"earliest sample is at t = {start_time}"
            )
        super().__init__(message)


class DimensionError(OrbitError, ValueError):
    """A flat state vector did not have exactly six components."""

    def __init__(self, expected: int, actual: int, layout: str = "") -> None:
        self.expected = expected
        self.actual = actual
        suffix = f": {layout}" if layout else ""
        super().__init__(
            f"Vector must have {expected} components, got {actual}{suffix}"
        )

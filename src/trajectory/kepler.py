"""
Analytic two-body trajectory and sampling into a DiscreteTrajectory.
"""

import logging
from typing import Iterable, Optional

from core.config import SolverSettings
from dynamics.orbital_mechanics import kepler_to_cartesian, propagate_kepler
from dynamics.state_vectors import CartesianElements, KeplerElements
from trajectory.base import Trajectory
from trajectory.discrete import DiscreteTrajectory

logger = logging.getLogger(__name__)


class KeplerTrajectory(Trajectory):
    """
    Unperturbed conic motion from a set of elements valid at *epoch*.

    Parameters
    ----------
    elements : KeplerElements
        Osculating elements at ``epoch``; a central body (or *mu*) is
        required.
    epoch : float
        Time (s) at which ``elements`` are valid.
    mu : float, optional
        Gravitational parameter overriding ``elements.body.mu``.
    settings : SolverSettings, optional
        Anomaly solver controls.
    """

    def __init__(self, elements: KeplerElements, epoch: float = 0.0,
                 mu: Optional[float] = None,
                 settings: Optional[SolverSettings] = None) -> None:
        self.elements = elements
        self.epoch = float(epoch)
        self.mu = mu
        self.settings = settings

    def elements_at(self, epoch: float) -> KeplerElements:
        """Kepler elements propagated to *epoch*."""
        return propagate_kepler(self.elements, epoch - self.epoch,
                                settings=self.settings, mu=self.mu)

    def evaluate(self, epoch: float) -> CartesianElements:
        return kepler_to_cartesian(self.elements_at(epoch), self.mu)


def sample_trajectory(trajectory: Trajectory,
                      times: Iterable[float]) -> DiscreteTrajectory:
    """Evaluate *trajectory* at each of *times* and store the results."""
    discrete = DiscreteTrajectory()
    for t in times:
        discrete.add_state(t, trajectory.evaluate(t))
    logger.debug(f"Sampled {len(discrete)} states")
    return discrete

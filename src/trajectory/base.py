"""
Trajectory interface: anything that can be asked for a state at an epoch.
"""

from abc import ABC, abstractmethod
from typing import Any


class Trajectory(ABC):
    """Abstract time-indexed state source.

    Subclasses must implement ``evaluate``. The returned state type is up
    to the implementation (CartesianElements for KeplerTrajectory, any
    stored object for DiscreteTrajectory).
    """

    @abstractmethod
    def evaluate(self, epoch: float) -> Any:
        """Return the state valid at *epoch* (s).

        Parameters
        ----------
        epoch : float
            Query time (s), on the same time scale as the trajectory.
        """

"""
===============================================================================
ORBITLAB - Discrete Trajectory
===============================================================================
Step-hold (zero-order hold) trajectory over a sparse set of samples.

Samples are kept sorted by time whatever the insertion order. A query at
time t returns the state of the sample with the greatest time <= t:

    t0 -------- t1 -------- t2 ------>
    |  s0 held  |  s1 held  |  s2 held forward

Queries before t0 raise NoPrecedingStateError. Queries at or after the
last sample return the last stored object itself (no extrapolation).
Adding a sample at an existing time replaces the earlier one. Times are
stored and compared as floats; a NaN time is rejected.

The container has no internal locking; concurrent writers must be
serialized by the caller.
===============================================================================
"""

import bisect
import logging
import math
from typing import Any, Iterator, List, Optional, Tuple

from core.exceptions import NoPrecedingStateError
from trajectory.base import Trajectory

logger = logging.getLogger(__name__)


def _as_epoch(time) -> float:
    """Coerce a sample time to float; NaN has no place in the ordering."""
    epoch = float(time)
    if math.isnan(epoch):
        raise ValueError("Trajectory epoch must be an orderable number, got NaN")
    return epoch


class DiscreteTrajectory(Trajectory):
    """
    Ordered (time, state) samples with nearest-preceding-sample lookup.

    Parameters
    ----------
    samples : iterable of (float, object), optional
        Initial samples, in any order.
    """

    def __init__(self, samples=None) -> None:
        self._times: List[float] = []
        self._states: List[Any] = []
        for time, state in samples or ():
            self.add_state(time, state)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_state(self, time: float, state: Any) -> None:
        """
        Insert *state* at *time*, keeping the samples time-ordered.

        A sample already stored at exactly *time* is overwritten.
        """
        time = _as_epoch(time)
        idx = bisect.bisect_left(self._times, time)
        if idx < len(self._times) and self._times[idx] == time:
            logger.debug(f"Overwriting trajectory sample at t={time}")
            self._states[idx] = state
            return
        self._times.insert(idx, time)
        self._states.insert(idx, state)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def evaluate(self, epoch: float) -> Any:
        """
        Return the state of the latest sample at or before *epoch*.

        Raises
        ------
        NoPrecedingStateError
            If the trajectory is empty or *epoch* precedes the first
            sample.
        ValueError
            If *epoch* is NaN.
        """
        epoch = _as_epoch(epoch)
        if not self._times:
            raise NoPrecedingStateError(epoch)

        idx = bisect.bisect_right(self._times, epoch) - 1
        if idx < 0:
            raise NoPrecedingStateError(epoch, self._times[0])
        if idx == len(self._times) - 1 and epoch > self._times[-1]:
            logger.debug(f"t={epoch} is past the last sample (t={self._times[-1]}); "
                         f"holding the last state")
        return self._states[idx]

    @property
    def times(self) -> List[float]:
        """Sample times in ascending order (copy)."""
        return list(self._times)

    @property
    def states(self) -> List[Any]:
        """States in time order (copy of the list, same objects)."""
        return list(self._states)

    @property
    def start_time(self) -> Optional[float]:
        return self._times[0] if self._times else None

    @property
    def end_time(self) -> Optional[float]:
        return self._times[-1] if self._times else None

    def __len__(self) -> int:
        return len(self._times)

    def __iter__(self) -> Iterator[Tuple[float, Any]]:
        return iter(list(zip(self._times, self._states)))

    def __contains__(self, time) -> bool:
        time = float(time)
        idx = bisect.bisect_left(self._times, time)
        return idx < len(self._times) and self._times[idx] == time

    def __repr__(self) -> str:
        return (f"DiscreteTrajectory({len(self)} samples, "
                f"t=[{self.start_time}, {self.end_time}])")

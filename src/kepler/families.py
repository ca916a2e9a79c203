"""
Family dispatch: OrbitFamily tag -> KeplerEquations table.

Callers that only hold an eccentricity go through ``equations_for``; the
tag is recomputed on every call, never stored on the elements.
"""

import logging
from typing import Dict, Optional, Union

from core.config import SolverSettings
from kepler.circular import CIRCULAR
from kepler.classifier import OrbitFamily, classify
from kepler.elliptical import ELLIPTICAL
from kepler.equations import KeplerEquations
from kepler.hyperbolic import HYPERBOLIC
from kepler.parabolic import PARABOLIC

logger = logging.getLogger(__name__)

FAMILY_EQUATIONS: Dict[OrbitFamily, KeplerEquations] = {
    OrbitFamily.CIRCULAR: CIRCULAR,
    OrbitFamily.ELLIPTICAL: ELLIPTICAL,
    OrbitFamily.PARABOLIC: PARABOLIC,
    OrbitFamily.HYPERBOLIC: HYPERBOLIC,
}


def equations_for(family_or_e: Union[OrbitFamily, float]) -> KeplerEquations:
    """
    Return the equation table for a family tag or an eccentricity.

    Parameters
    ----------
    family_or_e : OrbitFamily or float
        Either the family itself or an eccentricity to classify.
    """
    if isinstance(family_or_e, OrbitFamily):
        family = family_or_e
    else:
        family = classify(family_or_e)
        logger.debug(f"e={family_or_e:.9f} classified as {family.value}")
    return FAMILY_EQUATIONS[family]


def mean_anomaly(nu: float, e: float) -> float:
    """Mean anomaly for true anomaly *nu* on an orbit of eccentricity *e*."""
    return equations_for(e).mean_anomaly(nu, e)


def true_anomaly_from_mean(M: float, e: float,
                           settings: Optional[SolverSettings] = None) -> float:
    """True anomaly for mean anomaly *M* on an orbit of eccentricity *e*."""
    return equations_for(e).true_anomaly_from_mean(M, e, settings)

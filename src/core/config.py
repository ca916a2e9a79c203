"""
===============================================================================
ORBITLAB - Configuration and Logging Setup
===============================================================================
Loads solver settings from a YAML file and configures the project-wide
logging format.

Example ``config/orbit_config.yaml``::

    solver:
      tolerance: 1.0e-10      # rad, Newton step size at convergence
      max_iterations: 50      # hard bound on anomaly iterations
    logging:
      level: INFO

Every key is optional; anything missing falls back to the defaults in
core.constants.
===============================================================================
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from core.constants import ANOMALY_MAX_ITERATIONS, ANOMALY_TOLERANCE

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / 'config' / 'orbit_config.yaml'

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


@dataclass(frozen=True)
class SolverSettings:
    """
    Convergence controls for the iterative anomaly solvers.

    Attributes
    ----------
    tolerance : float
        Newton iteration stops once the anomaly update is smaller than
        this (rad).
    max_iterations : int
        Upper bound on Newton iterations. Exceeding it raises
        AnomalyConvergenceError instead of looping further.
    """
    tolerance: float = ANOMALY_TOLERANCE
    max_iterations: int = ANOMALY_MAX_ITERATIONS

    def __post_init__(self):
        if not self.tolerance > 0.0:
            raise ValueError(
                f"Solver tolerance must be positive, got {self.tolerance}"
            )
        if int(self.max_iterations) != self.max_iterations or self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be a positive integer, got {self.max_iterations}"
            )


DEFAULT_SETTINGS = SolverSettings()


@dataclass(frozen=True)
class OrbitConfig:
    """Top-level configuration: solver settings plus log level."""
    solver: SolverSettings = field(default_factory=SolverSettings)
    log_level: str = 'INFO'


def load_config(config_path: Optional[Union[str, Path]] = None) -> OrbitConfig:
    """
    Load the engine configuration from a YAML file.

    Args:
        config_path: Path to YAML config. Defaults to config/orbit_config.yaml
            at the project root.

    Returns:
        OrbitConfig populated from the file. A missing default file yields
        the built-in defaults; a missing explicit path raises
        FileNotFoundError.
    """
    if config_path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            logger.warning(f"No configuration at {path}; using defaults")
            return OrbitConfig()
    else:
        path = Path(config_path)

    logger.info(f"Loading configuration from: {path}")
    with open(path, 'r') as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Configuration root must be a mapping, got {type(raw).__name__}")

    solver_cfg = raw.get('solver') or {}
    solver = SolverSettings(
        tolerance=float(solver_cfg.get('tolerance', ANOMALY_TOLERANCE)),
        max_iterations=int(solver_cfg.get('max_iterations', ANOMALY_MAX_ITERATIONS)),
    )
    log_level = str((raw.get('logging') or {}).get('level', 'INFO')).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log level '{log_level}'")

    logger.debug(
        f"Solver tolerance={solver.tolerance:.3e}, "
        f"max_iterations={solver.max_iterations}, log_level={log_level}"
    )
    return OrbitConfig(solver=solver, log_level=log_level)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Install the project log format on the root logger (stdout)."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

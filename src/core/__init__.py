"""
===============================================================================
ORBITLAB - Core Package
===============================================================================
Shared constants, error types, configuration and rotation matrices.

Modules:
    constants   : Physical constants and solver defaults
    exceptions  : OrbitError hierarchy
    config      : YAML configuration and logging setup
    frames      : Elementary rotations and the perifocal rotation matrix
===============================================================================
"""

"""
===============================================================================
ORBITLAB - Trajectory Package
===============================================================================
Time-indexed state sources.

Modules:
    base      : Trajectory interface (evaluate(epoch) -> state)
    discrete  : Step-hold trajectory over sparse samples
    kepler    : Analytic two-body trajectory and sampling helper
===============================================================================
"""

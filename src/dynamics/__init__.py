"""
===============================================================================
ORBITLAB - Dynamics Package
===============================================================================
Two-body state representations and the conversions between them.

Modules:
    state_vectors     -- CartesianElements and KeplerElements
    bodies            -- CelestialBody (mass, mu)
    orbital_mechanics -- Cartesian <-> Kepler conversion, Kepler propagation
===============================================================================
"""

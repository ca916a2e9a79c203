"""
===============================================================================
ORBITLAB - Kepler Package
===============================================================================
Orbit family classification and the per-family Kepler equations.

Modules:
    classifier  : OrbitFamily tag and eccentricity band classification
    angles      : Angle wrapping and atan quadrant correction
    equations   : KeplerEquations function table and conic relations
    circular    : e < eps
    elliptical  : Kepler's equation M = E - e*sin(E)
    parabolic   : Barker's equation M = D + D^3/3
    hyperbolic  : M = e*sinh(H) - H
    families    : Tag -> equation table dispatch
===============================================================================
"""

"""pychebtech: adaptive Chebyshev series for smooth functions on an interval.

Provides the :class:`ChebyshevRepresentation` class, which samples a
vectorized function on Chebyshev grids of increasing size until its
Chebyshev coefficients have decayed to a requested tolerance, then freezes
the chopped series for fast barycentric evaluation, calculus and algebra.
The building blocks are exposed as well: :mod:`pychebtech.transform`
(points and values <-> coefficients), :mod:`pychebtech.chop` (deciding the
cutoff), :mod:`pychebtech.construct` (the adaptive loop) and
:mod:`pychebtech.barycentric` (evaluation).

Example
-------
>>> import numpy as np
>>> from pychebtech import ChebyshevRepresentation, Preferences
>>> f = ChebyshevRepresentation(np.sin, preferences=Preferences(eps=1e-13))
>>> f.happy, f.degree() < 20
(True, True)
>>> round(f(0.3), 10)
0.2955202067
"""

from pychebtech._algebra import add, compose, multiply, scale, subtract
from pychebtech._exceptions import (
    ChebtechError,
    NonFiniteValue,
    ShapeMismatch,
    ToleranceShapeMismatch,
    UnresolvedWarning,
)
from pychebtech._preferences import GridKind, Preferences
from pychebtech._version import __version__
from pychebtech.barycentric import barycentric_interpolate, barycentric_weights
from pychebtech.chop import standard_check, standard_chop
from pychebtech.construct import ConstructionResult, ConstructionStatus, construct
from pychebtech.representation import ChebyshevRepresentation
from pychebtech.transform import chebpts, coeffs2vals, quadwts, vals2coeffs

__all__ = [
    "ChebyshevRepresentation",
    "ConstructionResult",
    "ConstructionStatus",
    "GridKind",
    "Preferences",
    "ChebtechError",
    "NonFiniteValue",
    "ShapeMismatch",
    "ToleranceShapeMismatch",
    "UnresolvedWarning",
    "add",
    "barycentric_interpolate",
    "barycentric_weights",
    "chebpts",
    "coeffs2vals",
    "compose",
    "construct",
    "multiply",
    "quadwts",
    "scale",
    "standard_check",
    "standard_chop",
    "subtract",
    "vals2coeffs",
    "__version__",
]

"""Algebra on Chebyshev representations as free functions.

Linear operations are carried out on the coefficients and the result is
chopped again; nonlinear ones are rebuilt adaptively from the values of
their operands.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from pychebtech._preferences import Preferences


def _is_scalar(value) -> bool:
    """Return True if *value* is a numeric scalar (int, float, or numpy scalar)."""
    return isinstance(value, (int, float, np.integer, np.floating))


def _check_compatible(a, b) -> None:
    """Validate that two representations can be combined.

    Both operands must:
    - be the same type
    - share the domain, grid kind and number of columns
    """
    if type(a) is not type(b):
        raise TypeError(
            f"Cannot combine {type(a).__name__} with {type(b).__name__}; "
            f"operands must be the same type."
        )

    if a.domain != b.domain:
        raise ValueError(
            f"Domain mismatch: {a.domain} vs {b.domain}"
        )

    if a.kind != b.kind:
        raise ValueError(
            f"Grid kind mismatch: {int(a.kind)} vs {int(b.kind)}"
        )

    if a.num_columns != b.num_columns:
        raise ValueError(
            f"Column count mismatch: {a.num_columns} vs {b.num_columns}"
        )


def _combine(f, g, sign: float):
    _check_compatible(f, g)
    n = max(f.length, g.length)
    coeffs = f.prolong(n)._coeffs + sign * g.prolong(n)._coeffs
    vscale = np.maximum(f._vscale, g._vscale)
    result = type(f)._from_coefficients(
        coeffs, f.kind, f.domain, vscale, f.happy and g.happy, max(f.eps, g.eps)
    )
    return result.simplify()


def add(f, g):
    """Sum of two representations, chopped to the larger tolerance."""
    return _combine(f, g, 1.0)


def subtract(f, g):
    """Difference ``f - g`` of two representations."""
    return _combine(f, g, -1.0)


def scale(f, alpha):
    """Multiply a representation by a scalar."""
    if not _is_scalar(alpha):
        raise TypeError(f"alpha must be a real scalar, got {type(alpha).__name__}")
    alpha = float(alpha)
    return type(f)._from_coefficients(
        f._coeffs * alpha, f.kind, f.domain, f._vscale * abs(alpha),
        f.happy, f.eps,
    )


def compose(op: Callable, *operands):
    """Build ``op(f1(x), f2(x), ...)`` adaptively.

    Parameters
    ----------
    op : callable
        Elementwise, vectorized function of as many arrays as there are
        operands.
    *operands : ChebyshevRepresentation
        One or more compatible representations.

    Returns
    -------
    ChebyshevRepresentation
        Built on the common domain and grid kind at the loosest operand
        tolerance.
    """
    if not operands:
        raise ValueError("compose needs at least one operand")
    first = operands[0]
    for other in operands[1:]:
        _check_compatible(first, other)

    prefs = Preferences(eps=max(f.eps for f in operands), kind=first.kind)

    def composed(x):
        return op(*(f.evaluate_at(x) for f in operands))

    return type(first)(composed, domain=first.domain, preferences=prefs)


def multiply(f, g):
    """Pointwise product of two representations."""
    return compose(np.multiply, f, g)

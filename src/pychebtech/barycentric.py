"""Barycentric interpolation at Chebyshev points.

Weights for both Chebyshev grid kinds have closed forms, so no O(n^2)
product formula is needed. Evaluation is the second (true) barycentric
formula, batched over query points and columns so that the node distances
for a query point are computed once for every column.

References
----------
- Berrut & Trefethen (2004), "Barycentric Lagrange Interpolation",
  SIAM Review 46(3):501-517
- Salzer (1972), "Lagrangian interpolation at the Chebyshev points
  x_{n,v} = cos(v pi/n), v = 0(1)n; some unnoted advantages",
  Computer J. 15:156-159
"""

from __future__ import annotations

import numpy as np
from numpy.polynomial.chebyshev import chebval

from pychebtech._exceptions import ShapeMismatch
from pychebtech._preferences import GridKind, as_grid_kind

# Query points closer than this to a node take the node's value.
_NODE_TOL = 1e-14

# Upper bound on the size of the (points x nodes) block held in memory.
_BLOCK_ELEMENTS = 2**20


def barycentric_weights(n: int, kind=GridKind.SECOND) -> np.ndarray:
    """Compute barycentric weights for *n* Chebyshev points.

    Parameters
    ----------
    n : int
        Number of points.
    kind : {1, 2} or GridKind
        Grid family.

    Returns
    -------
    ndarray of shape (n,)
        Kind 2: ``(-1)^j`` with the two end weights halved.
        Kind 1: ``(-1)^j sin((2j+1) pi / (2n))``.
        Both are ordered to match the ascending points of
        :func:`pychebtech.transform.chebpts` and are only defined up to a
        common factor, which cancels in the formula.
    """
    kind = as_grid_kind(kind)
    n = int(n)
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    if n == 1:
        return np.array([1.0])
    signs = np.where(np.arange(n) % 2 == 0, 1.0, -1.0)
    if kind is GridKind.FIRST:
        return signs * np.sin((2 * np.arange(n) + 1) * np.pi / (2 * n))
    weights = signs.copy()
    weights[0] *= 0.5
    weights[-1] *= 0.5
    return weights


def barycentric_interpolate(x, values: np.ndarray, points: np.ndarray,
                            weights: np.ndarray) -> np.ndarray:
    """Evaluate the barycentric interpolant of *values* at *x*.

    Parameters
    ----------
    x : array_like
        Query points of any shape.
    values : ndarray of shape (n,) or (n, m)
        Function values at *points*, one column per output.
    points : ndarray of shape (n,)
        Interpolation nodes.
    weights : ndarray of shape (n,)
        Barycentric weights for *points*.

    Returns
    -------
    ndarray
        Shape ``x.shape`` for 1-D *values*, ``x.shape + (m,)`` otherwise.
        A query point that coincides with a node returns that node's stored
        value exactly.

    Raises
    ------
    ShapeMismatch
        If *values*, *points* and *weights* disagree on the number of nodes.
    """
    x = np.asarray(x, dtype=float)
    values = np.asarray(values, dtype=float)
    one_column = values.ndim == 1
    if one_column:
        values = values[:, np.newaxis]
    n, m = values.shape
    if len(points) != n or len(weights) != n:
        raise ShapeMismatch(
            f"{n} values, {len(points)} points and {len(weights)} weights"
        )

    flat = x.ravel()
    result = np.empty((flat.size, m))
    if n == 1:
        result[:] = values[0]
    else:
        block = max(1, _BLOCK_ELEMENTS // n)
        for start in range(0, flat.size, block):
            stop = start + block
            diff = flat[start:stop, np.newaxis] - points
            exact = np.abs(diff) < _NODE_TOL
            hit = exact.any(axis=1)
            diff[exact] = 1.0
            w_over_diff = weights / diff
            chunk = (w_over_diff @ values) / np.sum(w_over_diff, axis=1)[:, np.newaxis]
            if hit.any():
                chunk[hit] = values[np.argmax(exact[hit], axis=1)]
            result[start:stop] = chunk

    if one_column:
        return result.reshape(x.shape)
    return result.reshape(x.shape + (m,))


def clenshaw(x, coeffs: np.ndarray) -> np.ndarray:
    """Evaluate a Chebyshev series from its coefficients.

    Stable for points outside [-1, 1], where the barycentric formula is not.

    Parameters
    ----------
    x : array_like
        Query points of any shape.
    coeffs : ndarray of shape (n,) or (n, m)
        Chebyshev coefficients, ascending degree.

    Returns
    -------
    ndarray
        Same shape convention as :func:`barycentric_interpolate`.
    """
    x = np.asarray(x, dtype=float)
    coeffs = np.asarray(coeffs, dtype=float)
    if coeffs.ndim == 1:
        return chebval(x, coeffs)
    # chebval puts the column axis first
    return np.moveaxis(chebval(x, coeffs, tensor=True), 0, -1)

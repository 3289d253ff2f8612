"""Chebyshev points and the values <-> coefficients transforms.

Both grid kinds are supported. Kind 1 uses the roots of T_n and the
DCT-II / DCT-III pair; kind 2 uses the extrema of T_{n-1} and DCT-I, which is
its own inverse up to scaling. Points are always returned in ascending
order and coefficients in ascending degree order, so ``coeffs[0]`` is the
coefficient of T_0.

References
----------
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapters 2-3 and 19.
- Waldvogel (2006), "Fast Construction of the Fejér and Clenshaw–Curtis
  Quadrature Rules", BIT Numer. Math. 46(2):195–202.
"""

from __future__ import annotations

import numpy as np
from numpy.polynomial.chebyshev import chebpts1
from scipy.fft import dct

from pychebtech._exceptions import ShapeMismatch
from pychebtech._preferences import GridKind, as_grid_kind


def chebpts(n: int, kind=GridKind.SECOND) -> np.ndarray:
    """Return *n* Chebyshev points of the given kind on [-1, 1], ascending.

    The points are exactly symmetric: ``x[j] == -x[n - 1 - j]``.

    Parameters
    ----------
    n : int
        Number of points (>= 1).
    kind : {1, 2} or GridKind
        Grid family. Default is the second kind.

    Returns
    -------
    ndarray of shape (n,)
    """
    kind = as_grid_kind(kind)
    n = int(n)
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    if n == 1:
        return np.array([0.0])
    if kind is GridKind.FIRST:
        return chebpts1(n)
    m = n - 1
    return np.sin(np.pi * np.arange(-m, m + 1, 2) / (2 * m))


def _as_columns(data: np.ndarray, n: int | None, what: str) -> np.ndarray:
    data = np.asarray(data, dtype=float)
    if data.ndim not in (1, 2):
        raise ShapeMismatch(f"{what} must be 1-D or 2-D, got shape {data.shape}")
    if data.shape[0] == 0:
        raise ShapeMismatch(f"{what} is empty")
    if n is not None and data.shape[0] != n:
        raise ShapeMismatch(
            f"{what} has {data.shape[0]} rows but the grid has {n} points"
        )
    return data


def _enforce_parity(values: np.ndarray, coeffs: np.ndarray) -> np.ndarray:
    """Zero the coefficients that must vanish for even or odd columns."""
    flipped = values[::-1]
    even = np.all(values == flipped, axis=0)
    odd = np.all(values == -flipped, axis=0)
    if coeffs.ndim == 1:
        if even:
            coeffs[1::2] = 0.0
        elif odd:
            coeffs[::2] = 0.0
        return coeffs
    coeffs[1::2, even] = 0.0
    coeffs[::2, odd & ~even] = 0.0
    return coeffs


def vals2coeffs(values, kind=GridKind.SECOND, n: int | None = None) -> np.ndarray:
    """Convert values at Chebyshev points to Chebyshev coefficients.

    Parameters
    ----------
    values : array_like of shape (n,) or (n, m)
        Samples at the ascending points returned by :func:`chebpts`.
    kind : {1, 2} or GridKind
        Grid family the values were sampled on.
    n : int, optional
        Expected grid size. If given, a different row count raises
        :class:`ShapeMismatch`.

    Returns
    -------
    ndarray
        Coefficients with the same shape as *values*, ascending degree.

    Raises
    ------
    ShapeMismatch
        If *values* is empty, more than 2-D, or does not have *n* rows.
    """
    kind = as_grid_kind(kind)
    values = _as_columns(values, n, "values")
    size = values.shape[0]
    if size == 1:
        return values.copy()

    if kind is GridKind.FIRST:
        coeffs = dct(values[::-1], type=2, axis=0) / size
        coeffs[0] /= 2
    else:
        coeffs = dct(values[::-1], type=1, axis=0) / (size - 1)
        coeffs[0] /= 2
        coeffs[-1] /= 2
    return _enforce_parity(values, coeffs)


def coeffs2vals(coeffs, kind=GridKind.SECOND, n: int | None = None) -> np.ndarray:
    """Convert Chebyshev coefficients to values at Chebyshev points.

    Inverse of :func:`vals2coeffs`; see there for the parameters.
    """
    kind = as_grid_kind(kind)
    coeffs = _as_columns(coeffs, n, "coeffs")
    size = coeffs.shape[0]
    if size == 1:
        return coeffs.copy()

    scaled = coeffs / 2
    if kind is GridKind.FIRST:
        scaled[0] = coeffs[0]
        return dct(scaled, type=3, axis=0)[::-1].copy()
    scaled[0] = coeffs[0]
    scaled[-1] = coeffs[-1]
    return dct(scaled, type=1, axis=0)[::-1].copy()


def quadwts(n: int, kind=GridKind.SECOND) -> np.ndarray:
    """Quadrature weights for *n* Chebyshev points on [-1, 1].

    Clenshaw–Curtis weights for kind 2 and Fejér-1 weights for kind 1, in
    ascending point order, such that ``w @ f(chebpts(n, kind))`` approximates
    the integral of f over [-1, 1]. Both are computed in O(n log n) from the
    integration moments of T_k with one DCT.

    Parameters
    ----------
    n : int
        Number of points (>= 1).
    kind : {1, 2} or GridKind
        Grid family.

    Returns
    -------
    ndarray of shape (n,)
    """
    kind = as_grid_kind(kind)
    n = int(n)
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    if n == 1:
        return np.array([2.0])

    # Integration moments: I_k = 2/(1-k²) for k even, 0 for k odd
    moments = np.zeros(n)
    k = np.arange(0, n, 2)
    moments[::2] = 2.0 / (1.0 - k * k)

    if kind is GridKind.FIRST:
        return (dct(moments, type=3) / n)[::-1].copy()

    # Transpose of the DCT-I based vals2coeffs map applied to the moments
    halved = moments / 2
    weights = dct(halved, type=1)
    weights[1:-1] *= 2
    return (weights / (n - 1))[::-1].copy()

"""Shared helpers for calculus on Chebyshev series (integration, roots, optimization).

References
----------
- Waldvogel (2006), "Fast Construction of the Fejér and Clenshaw–Curtis
  Quadrature Rules", BIT Numerical Mathematics 46(2):195–202.
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapters 18–21.
- Good (1961), "The colleague matrix, a Chebyshev analogue of the companion
  matrix", Quarterly J. Mech. 14:195–196.
"""

from __future__ import annotations

import numpy as np
from numpy.polynomial.chebyshev import chebder, chebint, chebroots, chebtrim, chebval

from pychebtech.transform import quadwts


def _integrate(values: np.ndarray, kind, domain: tuple) -> np.ndarray:
    """Integrate each column of *values* over *domain*.

    Parameters
    ----------
    values : ndarray of shape (n, m)
        Values at ascending Chebyshev points of *kind*.
    kind : GridKind
        Grid family, selects Clenshaw–Curtis or Fejér-1 weights.
    domain : (float, float)
        Physical domain ``[a, b]``.

    Returns
    -------
    ndarray of shape (m,)
    """
    a, b = domain
    weights = quadwts(values.shape[0], kind)
    return weights @ values * (b - a) / 2.0


def _differentiate(coeffs: np.ndarray, domain: tuple, order: int = 1) -> np.ndarray:
    """Coefficients of the *order*-th derivative on *domain*."""
    if int(order) != order or order < 0:
        raise ValueError(f"order must be a non-negative int, got {order}")
    if order == 0:
        return coeffs.copy()
    a, b = domain
    # chebder returns a zero row once everything has been differentiated away
    return chebder(coeffs, m=int(order), scl=2.0 / (b - a), axis=0)


def _cumulative_integral(coeffs: np.ndarray, domain: tuple) -> np.ndarray:
    """Coefficients of the indefinite integral that is zero at ``a``."""
    a, b = domain
    return chebint(coeffs, m=1, lbnd=-1.0, scl=(b - a) / 2.0, axis=0)


def _roots_1d(coeffs: np.ndarray, domain: tuple) -> np.ndarray:
    """Find all real roots of a 1-D Chebyshev series within its domain.

    Parameters
    ----------
    coeffs : ndarray of shape (n,)
        Chebyshev coefficients, ascending degree.
    domain : (float, float)
        Physical domain ``[a, b]``.

    Returns
    -------
    ndarray
        Sorted real roots in ``[a, b]``.
    """
    coeffs = chebtrim(coeffs, tol=0)
    if len(coeffs) < 2:
        return np.array([], dtype=float)
    raw_roots = chebroots(coeffs)

    # Keep only real roots inside [-1, 1]
    tol = 1e-10
    real_roots = []
    for r in np.atleast_1d(raw_roots):
        if abs(np.imag(r)) < tol:
            t = np.real(r)
            if -1.0 - tol <= t <= 1.0 + tol:
                real_roots.append(np.clip(t, -1.0, 1.0))

    if len(real_roots) == 0:
        return np.array([], dtype=float)

    # Map from [-1, 1] to [a, b]
    a, b = domain
    physical = 0.5 * (a + b) + 0.5 * (b - a) * np.array(real_roots)

    # Sort and deduplicate (tolerance for near-identical roots)
    physical = np.sort(physical)
    if len(physical) > 1:
        mask = np.concatenate([[True], np.diff(physical) > 1e-10 * (b - a + 1)])
        physical = physical[mask]

    return physical


def _optimize_1d(coeffs: np.ndarray, domain: tuple, mode: str = "min") -> tuple:
    """Find the minimum or maximum of a 1-D Chebyshev series.

    Parameters
    ----------
    coeffs : ndarray of shape (n,)
        Chebyshev coefficients, ascending degree.
    domain : (float, float)
        Physical domain ``[a, b]``.
    mode : {'min', 'max'}
        Whether to find the minimum or maximum.

    Returns
    -------
    (value, location) : (float, float)
    """
    if mode not in ("min", "max"):
        raise ValueError(f"mode must be 'min' or 'max', got {mode!r}")

    # Critical points: roots of the derivative
    critical = _roots_1d(_differentiate(coeffs, domain), domain)

    # Candidates: critical points + domain endpoints
    a, b = domain
    candidates = np.concatenate([[a], critical, [b]])

    # Evaluate the series at all candidates
    t = (2.0 * candidates - (a + b)) / (b - a)
    vals = chebval(t, coeffs)

    idx = np.argmin(vals) if mode == "min" else np.argmax(vals)
    return float(vals[idx]), float(candidates[idx])

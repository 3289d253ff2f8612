"""Deciding how many Chebyshev coefficients a function needs.

:func:`standard_chop` looks at one column of coefficients and finds the
shortest prefix that represents it to a relative tolerance.
:func:`standard_check` wraps it for multi-column data: it validates the
samples, derives a per-column scale from the values and their finite
differences, and reduces the per-column verdicts to one decision.

References
----------
- Aurentz & Trefethen (2017), "Chopping a Chebyshev Series",
  ACM Trans. Math. Softw. 43(4):33.
"""

from __future__ import annotations

import numpy as np

from pychebtech._exceptions import NonFiniteValue, ToleranceShapeMismatch

# Series shorter than this are accepted as they are.
MIN_CHOP_LENGTH = 17

# Number of consecutive resolved coefficients a plateau must span.
PLATEAU_RUN = 3

# Minimum slope, in units of log(tol), of the log envelope's fall from the
# last unresolved coefficient into the plateau run. Falls at least this
# steep mark the run as rounding noise.
MIN_DROP_SLOPE = 1.0 / 3.0


def standard_chop(coeffs, tol: float, scale: float = 1.0) -> tuple[bool, int]:
    """Find the cutoff of a single column of Chebyshev coefficients.

    The coefficients are reduced to a monotone envelope (running maximum of
    ``|coeffs[j:]|`` divided by *scale*), read on the log scale
    ``log(envelope) / log(tol)``, where a level of 1 means "at tolerance".
    The plateau starts at the first index whose whole tail is at tolerance,
    and must be sustained for :data:`PLATEAU_RUN` coefficients. The plateau
    point is the end of that run, so the kept prefix always carries the
    evidence that it is resolved. If the log envelope falls into the run
    with slope at least :data:`MIN_DROP_SLOPE`, and the run still fits in a
    series of :data:`MIN_CHOP_LENGTH`, the run is noise and the plateau
    point is its start.

    The answer only depends on ``coeffs[:cutoff]`` and on the tail being at
    tolerance, so truncating a resolved series to any length of at least
    ``max(cutoff, MIN_CHOP_LENGTH)`` gives the same cutoff.

    Parameters
    ----------
    coeffs : array_like of shape (n,)
        Chebyshev coefficients, ascending degree.
    tol : float
        Relative tolerance, ``0 < tol``.
    scale : float
        Magnitude the coefficients are measured against, ``scale > 0``.

    Returns
    -------
    (accepted, cutoff) : (bool, int)
        Whether the series is resolved, and how many leading coefficients
        to keep (``1 <= cutoff <= n``). Unresolved series return ``n``.

    Raises
    ------
    ValueError
        If *tol* or *scale* is not positive, or *coeffs* is not 1-D.
    """
    if not tol > 0:
        raise ValueError(f"tol must be positive, got {tol}")
    if not scale > 0:
        raise ValueError(f"scale must be positive, got {scale}")
    coeffs = np.asarray(coeffs, dtype=float)
    if coeffs.ndim != 1:
        raise ValueError(f"coeffs must be 1-D, got shape {coeffs.shape}")

    n = len(coeffs)
    if n == 0:
        raise ValueError("coeffs is empty")
    if not np.any(coeffs):
        return True, 1
    if n < MIN_CHOP_LENGTH:
        return True, n

    # Step 1: monotone envelope, read from the tail
    envelope = np.maximum.accumulate(np.abs(coeffs)[::-1])[::-1] / scale

    # Step 2: nothing to find if even the last coefficient is too big
    if envelope[-1] > tol:
        return False, n

    # Step 3: start of the plateau, the first index whose whole tail is resolved
    plateau = int(np.argmax(envelope <= tol))
    if plateau == 0:
        return True, 1
    if n - plateau < PLATEAU_RUN:
        return False, n

    # Step 4: slope of the log envelope into the run. Only the run itself is
    # read, never the coefficients past it.
    run = np.max(np.abs(coeffs[plateau:plateau + PLATEAU_RUN])) / scale
    with np.errstate(divide="ignore", invalid="ignore"):
        slope = (np.log(run) - np.log(envelope[plateau - 1])) / np.log(tol)
    if slope >= MIN_DROP_SLOPE and plateau + PLATEAU_RUN <= MIN_CHOP_LENGTH:
        return True, plateau
    return True, plateau + PLATEAU_RUN


def _broadcast_tolerance(tol, m: int) -> np.ndarray:
    tol = np.atleast_1d(np.asarray(tol, dtype=float))
    if tol.ndim != 1:
        raise ToleranceShapeMismatch(f"tol must be a scalar or 1-D, got shape {tol.shape}")
    if tol.size == 1:
        return np.full(m, tol[0])
    if tol.size != m:
        raise ToleranceShapeMismatch(
            f"{tol.size} tolerances given for {m} columns"
        )
    return tol


def vertical_scale(values) -> np.ndarray:
    """Per-column maximum absolute value, with all-zero columns mapped to 1."""
    values = np.asarray(values, dtype=float)
    if values.ndim == 1:
        values = values[:, np.newaxis]
    vscale = np.max(np.abs(values), axis=0)
    vscale[vscale == 0] = 1.0
    return vscale


def scale_estimate(values, points, vscale=None, hscale: float = 1.0) -> np.ndarray:
    """Estimate the magnitude chop thresholds are measured against.

    Combines the vertical scale of each column with a finite-difference
    gradient estimate measured on the domain (the reference-grid slope times
    *hscale*, relative to the sample magnitude). Functions that vary quickly
    relative to their size are held to a looser absolute threshold, and
    nearly flat ones to a tighter one.

    Parameters
    ----------
    values : array_like of shape (n,) or (n, m)
        Samples at *points*.
    points : array_like of shape (n,)
        Grid the samples were taken on.
    vscale : float or array_like of shape (m,), optional
        Vertical scale to use instead of ``max|values|``.
    hscale : float
        Horizontal scale of the domain, ``max(|a|, |b|)`` for ``[a, b]``.

    Returns
    -------
    ndarray of shape (m,)
        ``vscale * gradient`` per column, with a zero gradient counted as 1;
        always positive.
    """
    values = np.asarray(values, dtype=float)
    if values.ndim == 1:
        values = values[:, np.newaxis]
    m = values.shape[1]
    sample_scale = vertical_scale(values)
    if vscale is None:
        vscl = sample_scale
    else:
        vscl = np.broadcast_to(np.asarray(vscale, dtype=float), (m,)).copy()
        vscl[~(vscl > 0)] = 1.0

    points = np.asarray(points, dtype=float)
    if len(points) < 2:
        return vscl
    slopes = np.abs(np.diff(values, axis=0) / np.diff(points)[:, np.newaxis])
    gradient = np.max(slopes, axis=0) * hscale / sample_scale
    gradient[gradient == 0] = 1.0
    return vscl * gradient


def standard_check(coeffs, values, points, tol, vscale=None,
                   hscale: float = 1.0) -> tuple[bool, int]:
    """Decide whether a (possibly multi-column) series is resolved.

    Parameters
    ----------
    coeffs : array_like of shape (n,) or (n, m)
        Chebyshev coefficients of *values*.
    values : array_like of shape (n,) or (n, m)
        Samples the coefficients were computed from.
    points : array_like of shape (n,)
        Grid the samples were taken on.
    tol : float or array_like
        One tolerance for all columns, or one per column.
    vscale : float or array_like, optional
        Vertical scale per column; computed from *values* if omitted.
    hscale : float
        Horizontal scale of the domain, ``max(|a|, |b|)`` for ``[a, b]``.

    Returns
    -------
    (happy, cutoff) : (bool, int)
        ``happy`` is True when every column is resolved. ``cutoff`` is the
        largest cutoff over the columns that were checked.

    Raises
    ------
    NonFiniteValue
        If *values* or *coeffs* contain NaN or Inf.
    ToleranceShapeMismatch
        If *tol* has neither one entry nor one per column.
    """
    coeffs = np.asarray(coeffs, dtype=float)
    values = np.asarray(values, dtype=float)
    if not (np.isfinite(values).all() and np.isfinite(coeffs).all()):
        raise NonFiniteValue("Function returned NaN or Inf when evaluated")
    if coeffs.ndim == 1:
        coeffs = coeffs[:, np.newaxis]
    m = coeffs.shape[1]

    tols = _broadcast_tolerance(tol, m)
    scales = scale_estimate(values, points, vscale=vscale, hscale=hscale)

    happy = True
    cutoff = 0
    for k in range(m):
        accepted, column_cutoff = standard_chop(coeffs[:, k], tols[k], scales[k])
        cutoff = max(cutoff, column_cutoff)
        if not accepted:
            # No need to look at the remaining columns
            happy = False
            break
    return happy, cutoff

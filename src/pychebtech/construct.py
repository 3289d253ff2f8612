"""Adaptive construction of a Chebyshev series from a function handle.

The function is sampled on Chebyshev grids of sizes 17, 33, 65, ... until
:func:`pychebtech.chop.standard_check` declares the coefficients resolved or
the maximum length is reached. Second-kind grids are nested under this
doubling, so only the new half of the points is evaluated at each step.
"""

from __future__ import annotations

import dataclasses
import enum
import time
import warnings
from typing import Callable, Tuple

import numpy as np

from pychebtech._exceptions import NonFiniteValue, ShapeMismatch, UnresolvedWarning
from pychebtech._preferences import GridKind, Preferences
from pychebtech.barycentric import barycentric_interpolate, barycentric_weights
from pychebtech.chop import scale_estimate, standard_check, vertical_scale
from pychebtech.transform import chebpts, coeffs2vals, vals2coeffs

# Off-grid points for the sample test, chosen not to coincide with any
# Chebyshev point of either kind.
_SAMPLE_TEST_POINTS = np.array([-0.357998918959666, 0.036785641195074, 0.736428347813291])


class ConstructionStatus(enum.Enum):
    """Terminal state of an adaptive construction."""

    HAPPY = "happy"
    UNRESOLVED = "unresolved"


@dataclasses.dataclass(frozen=True)
class SamplingState:
    """Samples and coefficients of one pass of the sampling loop."""

    n: int
    points: np.ndarray
    values: np.ndarray
    coeffs: np.ndarray
    attempt: int


@dataclasses.dataclass(frozen=True)
class ConstructionResult:
    """Outcome of :func:`construct`.

    ``state`` holds the final full-length samples; ``cutoff`` rows of
    ``state.coeffs`` are to be kept (all of them when unresolved).
    """

    status: ConstructionStatus
    state: SamplingState
    cutoff: int
    vscale: np.ndarray
    build_time: float
    n_evaluations: int

    @property
    def happy(self) -> bool:
        return self.status is ConstructionStatus.HAPPY

    @property
    def coeffs(self) -> np.ndarray:
        return self.state.coeffs[:self.cutoff]


def map_to_domain(t, domain: Tuple[float, float]) -> np.ndarray:
    """Map points from [-1, 1] to ``[a, b]``."""
    a, b = domain
    return 0.5 * (a + b) + 0.5 * (b - a) * np.asarray(t, dtype=float)


def map_from_domain(x, domain: Tuple[float, float]) -> np.ndarray:
    """Map points from ``[a, b]`` to [-1, 1]."""
    a, b = domain
    return (2.0 * np.asarray(x, dtype=float) - (a + b)) / (b - a)


def domain_hscale(domain: Tuple[float, float]) -> float:
    """Horizontal scale of ``[a, b]``: the largest magnitude of its ends."""
    a, b = domain
    return max(abs(a), abs(b))


def next_length(n: int, max_length: int) -> int:
    """Grid size after *n*: ``2*(n-1)+1``, capped at *max_length*."""
    return min(2 * (n - 1) + 1, max_length)


def sample(fun: Callable, t: np.ndarray, domain: Tuple[float, float]) -> np.ndarray:
    """Evaluate *fun* once on the mapped points and return an ``(n, m)`` array.

    Raises
    ------
    ShapeMismatch
        If the function does not return one row per point.
    NonFiniteValue
        If any returned value is NaN or Inf.
    """
    x = map_to_domain(t, domain)
    values = np.asarray(fun(x), dtype=float)
    n = len(t)
    if values.ndim == 0:
        # Constant functions may return a scalar
        values = np.full((n, 1), float(values))
    elif values.ndim == 1:
        if values.shape[0] != n:
            raise ShapeMismatch(f"function returned {values.shape[0]} values for {n} points")
        values = values[:, np.newaxis]
    elif values.ndim != 2 or values.shape[0] != n:
        raise ShapeMismatch(f"function returned shape {values.shape} for {n} points")
    if not np.isfinite(values).all():
        raise NonFiniteValue("Function returned NaN or Inf when evaluated")
    return values


def _refine(fun, state: SamplingState, n: int, kind: GridKind,
            domain) -> Tuple[SamplingState, int]:
    """Return the sampling state on a grid of *n* points and the number of
    new function evaluations it took."""
    points = chebpts(n, kind)
    nested = (
        state is not None
        and kind is GridKind.SECOND
        and n == 2 * (state.n - 1) + 1
    )
    if nested:
        # The old grid sits at the even indices of the new one
        new_values = sample(fun, points[1::2], domain)
        if new_values.shape[1] != state.values.shape[1]:
            raise ShapeMismatch(
                f"function returned {new_values.shape[1]} columns, "
                f"previously {state.values.shape[1]}"
            )
        values = np.empty((n, new_values.shape[1]))
        values[::2] = state.values
        values[1::2] = new_values
        evaluated = len(new_values)
    else:
        values = sample(fun, points, domain)
        evaluated = n
    attempt = 1 if state is None else state.attempt + 1
    return SamplingState(n, points, values, vals2coeffs(values, kind), attempt), evaluated


def _sample_test(fun, state: SamplingState, cutoff: int, kind: GridKind,
                 domain, tol: float, vscale, hscale: float) -> bool:
    """Compare the truncated series with *fun* at points off the grid."""
    coeffs = state.coeffs[:cutoff]
    values = coeffs2vals(coeffs, kind)
    approx = barycentric_interpolate(
        _SAMPLE_TEST_POINTS, values, chebpts(cutoff, kind),
        barycentric_weights(cutoff, kind),
    )
    exact = sample(fun, _SAMPLE_TEST_POINTS, domain)
    if exact.shape[1] != approx.shape[1]:
        raise ShapeMismatch(
            f"function returned {exact.shape[1]} columns, previously {approx.shape[1]}"
        )
    scales = scale_estimate(state.values, state.points, vscale=vscale, hscale=hscale)
    sample_tol = np.sqrt(max(tol, np.finfo(float).eps))
    return bool(np.all(np.max(np.abs(exact - approx), axis=0) <= sample_tol * scales))


def construct(
    fun: Callable,
    preferences: Preferences | None = None,
    domain: Tuple[float, float] = (-1.0, 1.0),
    vscale=None,
    verbose: bool = False,
) -> ConstructionResult:
    """Adaptively sample *fun* until its Chebyshev series is resolved.

    Parameters
    ----------
    fun : callable
        Vectorized function: called with a 1-D array of ``n`` points in
        *domain*, returns ``n`` values or an ``(n, m)`` array.
    preferences : Preferences, optional
        Tolerance, grid kind, length limits and sample test switch.
    domain : (float, float)
        Interval ``[a, b]`` with ``a < b``.
    vscale : float or array_like, optional
        Vertical scale to measure the tolerance against, per column.
        Defaults to the maximum absolute sample value.
    verbose : bool, optional
        If True, print one line per grid. Default is False.

    Returns
    -------
    ConstructionResult
        ``HAPPY`` with the chopped cutoff, or ``UNRESOLVED`` with the full
        length of the largest grid. Unresolved results also emit an
        :class:`UnresolvedWarning`.

    Raises
    ------
    NonFiniteValue
        As soon as the function returns NaN or Inf.
    ShapeMismatch
        If the function does not return one row per point.
    ValueError
        If *domain* is not an increasing pair of finite numbers.
    """
    prefs = Preferences() if preferences is None else preferences
    a, b = domain
    if not (np.isfinite(a) and np.isfinite(b) and a < b):
        raise ValueError(f"domain must satisfy a < b, got [{a}, {b}]")
    domain = (float(a), float(b))
    kind = prefs.kind
    hscale = domain_hscale(domain)

    if verbose:
        print(f"Building Chebyshev series on [{domain[0]}, {domain[1]}] "
              f"(kind {int(kind)}, tol {prefs.eps:.1e})...")

    start = time.time()
    state = None
    n = min(prefs.min_samples, prefs.max_length)
    evaluations = 0
    while True:
        state, evaluated = _refine(fun, state, n, kind, domain)
        evaluations += evaluated

        happy, cutoff = standard_check(
            state.coeffs, state.values, state.points, prefs.eps,
            vscale=vscale, hscale=hscale,
        )
        if happy and prefs.sample_test:
            happy = _sample_test(
                fun, state, cutoff, kind, domain, prefs.eps, vscale, hscale
            )
            evaluations += len(_SAMPLE_TEST_POINTS)
        if verbose:
            print(f"  n = {n:>6d}: {'happy' if happy else 'not resolved'}"
                  f"{f' (cutoff {cutoff})' if happy else ''}")

        if happy or n >= prefs.max_length:
            break
        n = next_length(n, prefs.max_length)

    build_time = time.time() - start
    column_scale = vertical_scale(state.values)
    if verbose:
        print(f"  Built in {build_time:.3f}s ({evaluations:,} evaluations)")

    if happy:
        return ConstructionResult(
            ConstructionStatus.HAPPY, state, cutoff, column_scale,
            build_time, evaluations,
        )

    warnings.warn(
        f"Function not resolved using {state.n} points.",
        UnresolvedWarning,
        stacklevel=2,
    )
    return ConstructionResult(
        ConstructionStatus.UNRESOLVED, state, state.n, column_scale,
        build_time, evaluations,
    )

"""Frozen Chebyshev series representation of a function on an interval.

A :class:`ChebyshevRepresentation` stores the chopped Chebyshev coefficients
of one or more functions (one column each) on ``[a, b]``, together with the
grid kind they refer to and the vertical scale of the samples they came from.
Evaluation uses the barycentric formula on the values at the Chebyshev points
of the representation's own length.
"""

from __future__ import annotations

from typing import Callable, Tuple

import numpy as np

from pychebtech._preferences import GridKind, Preferences, as_grid_kind
from pychebtech.barycentric import barycentric_interpolate, barycentric_weights, clenshaw
from pychebtech.chop import standard_check, vertical_scale
from pychebtech.construct import construct, domain_hscale, map_from_domain, map_to_domain
from pychebtech.transform import chebpts, coeffs2vals, vals2coeffs

# Reference points further than this outside [-1, 1] are evaluated by
# Clenshaw's recurrence instead of the barycentric formula.
_OUTSIDE_TOL = 1e-14


def _validate_domain(domain) -> Tuple[float, float]:
    a, b = domain
    if not (np.isfinite(a) and np.isfinite(b) and a < b):
        raise ValueError(f"domain must satisfy a < b, got [{a}, {b}]")
    return float(a), float(b)


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.array(array, dtype=float)
    array.setflags(write=False)
    return array


class ChebyshevRepresentation:
    """Adaptive Chebyshev series of a (possibly vector-valued) function.

    The function is sampled on Chebyshev grids of increasing size until its
    coefficients have decayed to the requested tolerance; the chopped series
    is then frozen. Unresolved functions still produce a representation, at
    the maximum length, with :attr:`happy` set to False.

    Parameters
    ----------
    function : callable
        Vectorized function to approximate. Called with a 1-D array of points
        in *domain*; returns one value per point, or an ``(n, m)`` array for
        ``m`` outputs.
    domain : (float, float), optional
        Interval ``[a, b]``. Default is ``(-1, 1)``.
    preferences : Preferences, optional
        Tolerance, grid kind, maximum length and sample test switch.
    vscale : float or array_like, optional
        Vertical scale the tolerance is measured against.
    verbose : bool, optional
        If True, print construction progress. Default is False.

    Examples
    --------
    >>> import numpy as np
    >>> f = ChebyshevRepresentation(np.sin, preferences=Preferences(eps=1e-13))
    >>> f.happy
    True
    >>> abs(f(0.3) - np.sin(0.3)) < 1e-12
    True
    """

    def __init__(
        self,
        function: Callable,
        domain: Tuple[float, float] = (-1.0, 1.0),
        preferences: Preferences | None = None,
        vscale=None,
        verbose: bool = False,
    ):
        prefs = Preferences() if preferences is None else preferences
        domain = _validate_domain(domain)
        result = construct(function, prefs, domain=domain, vscale=vscale, verbose=verbose)

        self.function = function
        self._init_from_coefficients(
            result.coeffs, prefs.kind, domain, result.vscale, result.happy, prefs.eps
        )
        self.build_time = result.build_time
        self.n_evaluations = result.n_evaluations

    def _init_from_coefficients(self, coeffs, kind, domain, vscale, happy, eps):
        coeffs = np.asarray(coeffs, dtype=float)
        if coeffs.ndim == 1:
            coeffs = coeffs[:, np.newaxis]
        self._coeffs = _frozen(coeffs)
        self._kind = as_grid_kind(kind)
        self._domain = domain
        self._vscale = _frozen(np.broadcast_to(np.asarray(vscale, dtype=float),
                                               (coeffs.shape[1],)))
        self._happy = bool(happy)
        self._eps = float(eps)
        self._values = _frozen(coeffs2vals(self._coeffs, self._kind))
        self._weights = barycentric_weights(self.length, self._kind)

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def _from_coefficients(cls, coeffs, kind, domain, vscale=None, happy=True,
                           eps=None) -> "ChebyshevRepresentation":
        """Create an instance directly from coefficients, bypassing construction.

        Internal factory for calculus and algebra. The result has
        ``function=None`` and ``build_time=0.0``.
        """
        coeffs = np.asarray(coeffs, dtype=float)
        if vscale is None:
            vscale = vertical_scale(coeffs2vals(coeffs, kind))
        obj = object.__new__(cls)
        obj.function = None
        obj._init_from_coefficients(
            coeffs, kind, domain, vscale, happy,
            Preferences().eps if eps is None else eps,
        )
        obj.build_time = 0.0
        obj.n_evaluations = 0
        return obj

    @classmethod
    def from_coefficients(
        cls,
        coeffs,
        kind=GridKind.SECOND,
        domain: Tuple[float, float] = (-1.0, 1.0),
    ) -> "ChebyshevRepresentation":
        """Wrap given Chebyshev coefficients without chopping them.

        Parameters
        ----------
        coeffs : array_like of shape (n,) or (n, m)
            Coefficients in ascending degree.
        kind : {1, 2} or GridKind
            Grid the values of the series should be stored on.
        domain : (float, float)
            Interval ``[a, b]``.

        Returns
        -------
        ChebyshevRepresentation
            A representation with ``function=None`` and ``happy=True``.
        """
        coeffs = np.asarray(coeffs, dtype=float)
        if coeffs.ndim not in (1, 2) or coeffs.shape[0] == 0:
            raise ValueError(f"coeffs must be a non-empty 1-D or 2-D array, got shape {coeffs.shape}")
        if not np.isfinite(coeffs).all():
            raise ValueError("coeffs contains NaN or Inf")
        return cls._from_coefficients(coeffs, as_grid_kind(kind), _validate_domain(domain))

    @classmethod
    def from_values(
        cls,
        values,
        kind=GridKind.SECOND,
        domain: Tuple[float, float] = (-1.0, 1.0),
        eps: float | None = None,
    ) -> "ChebyshevRepresentation":
        """Create a representation from samples at Chebyshev points.

        The samples are converted to coefficients and chopped once; there is
        no adaptive refinement. Use :meth:`points_at` (or
        :func:`pychebtech.transform.chebpts` mapped to *domain*) to obtain the
        sample locations.

        Parameters
        ----------
        values : array_like of shape (n,) or (n, m)
            Function values at the ``n`` Chebyshev points of *kind*.
        kind : {1, 2} or GridKind
            Grid the values were sampled on.
        domain : (float, float)
            Interval ``[a, b]``.
        eps : float, optional
            Chop tolerance. Defaults to the :class:`Preferences` default.

        Returns
        -------
        ChebyshevRepresentation
            Chopped representation; ``happy`` reports whether the samples
            resolved the function.

        Raises
        ------
        NonFiniteValue
            If *values* contains NaN or Inf.
        ShapeMismatch
            If *values* is empty or more than 2-D.
        """
        kind = as_grid_kind(kind)
        domain = _validate_domain(domain)
        eps = Preferences().eps if eps is None else eps
        coeffs = vals2coeffs(values, kind)
        values = np.asarray(values, dtype=float)
        happy, cutoff = standard_check(
            coeffs, values, chebpts(len(values), kind), eps,
            hscale=domain_hscale(domain),
        )
        if not happy:
            cutoff = len(values)
        return cls._from_coefficients(
            coeffs[:cutoff], kind, domain, vertical_scale(values), happy, eps
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def kind(self) -> GridKind:
        return self._kind

    @property
    def domain(self) -> Tuple[float, float]:
        return self._domain

    @property
    def length(self) -> int:
        """Number of coefficients kept (the cutoff)."""
        return self._coeffs.shape[0]

    @property
    def num_columns(self) -> int:
        return self._coeffs.shape[1]

    @property
    def happy(self) -> bool:
        """False if construction stopped at the maximum length unresolved."""
        return self._happy

    @property
    def eps(self) -> float:
        return self._eps

    @property
    def vscale(self):
        """Vertical scale per column (a float for single-column objects)."""
        if self.num_columns == 1:
            return float(self._vscale[0])
        return self._vscale.copy()

    def _squeeze(self, array: np.ndarray) -> np.ndarray:
        return array[:, 0].copy() if self.num_columns == 1 else array.copy()

    def coefficients(self) -> np.ndarray:
        """Chebyshev coefficients, ascending degree; ``(length,)`` or ``(length, m)``."""
        return self._squeeze(self._coeffs)

    def values(self) -> np.ndarray:
        """Values at :meth:`points`; ``(length,)`` or ``(length, m)``."""
        return self._squeeze(self._values)

    def degree(self) -> int:
        """Polynomial degree of the series, ``length - 1``."""
        return self.length - 1

    def points_at(self, n: int) -> np.ndarray:
        """The *n* Chebyshev points of this object's kind, mapped to its domain."""
        return map_to_domain(chebpts(n, self._kind), self._domain)

    def points(self) -> np.ndarray:
        """The points :meth:`values` are stored at."""
        return self.points_at(self.length)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate_at(self, x):
        """Evaluate the series at *x*.

        Parameters
        ----------
        x : float or array_like
            Points in (or near) the domain. Points outside the domain are
            extrapolated with Clenshaw's recurrence.

        Returns
        -------
        float or ndarray
            Shape ``x.shape`` for single-column objects, ``x.shape + (m,)``
            otherwise; a Python float for a scalar *x* and one column.
        """
        x = np.asarray(x, dtype=float)
        t = map_from_domain(x, self._domain)
        values = self._values[:, 0] if self.num_columns == 1 else self._values
        result = barycentric_interpolate(
            t, values, chebpts(self.length, self._kind), self._weights
        )
        outside = np.abs(t) > 1.0 + _OUTSIDE_TOL
        if np.any(outside):
            coeffs = self._coeffs[:, 0] if self.num_columns == 1 else self._coeffs
            result[outside] = clenshaw(t[outside], coeffs)
        if result.ndim == 0:
            return float(result)
        return result

    def __call__(self, x):
        return self.evaluate_at(x)

    # ------------------------------------------------------------------
    # Length changes
    # ------------------------------------------------------------------

    def simplify(self, tol: float | None = None) -> "ChebyshevRepresentation":
        """Chop the series again, possibly with a looser tolerance.

        Parameters
        ----------
        tol : float, optional
            Relative tolerance. Defaults to the tolerance the object was
            built with.

        Returns
        -------
        ChebyshevRepresentation
            The shortened series, or an unchanged copy if the coefficients do
            not chop at *tol*.
        """
        tol = self._eps if tol is None else tol
        happy, cutoff = standard_check(
            self._coeffs, self._values, chebpts(self.length, self._kind), tol,
            vscale=self._vscale, hscale=domain_hscale(self._domain),
        )
        if not happy:
            cutoff = self.length
        return self._from_coefficients(
            self._coeffs[:cutoff], self._kind, self._domain, self._vscale,
            self._happy, self._eps,
        )

    def prolong(self, n: int) -> "ChebyshevRepresentation":
        """Return the series padded with zeros, or truncated, to length *n*."""
        n = int(n)
        if n < 1:
            raise ValueError(f"n must be >= 1, got {n}")
        coeffs = np.zeros((n, self.num_columns))
        keep = min(n, self.length)
        coeffs[:keep] = self._coeffs[:keep]
        return self._from_coefficients(
            coeffs, self._kind, self._domain, self._vscale, self._happy, self._eps
        )

    # ------------------------------------------------------------------
    # Calculus
    # ------------------------------------------------------------------

    def integral(self):
        """Definite integral over the domain (float, or array per column)."""
        from pychebtech._calculus import _integrate

        result = _integrate(self._values, self._kind, self._domain)
        return float(result[0]) if self.num_columns == 1 else result

    def derivative(self, order: int = 1) -> "ChebyshevRepresentation":
        """Series of the *order*-th derivative."""
        from pychebtech._calculus import _differentiate

        coeffs = _differentiate(self._coeffs, self._domain, order)
        return self._from_coefficients(
            coeffs, self._kind, self._domain, happy=self._happy, eps=self._eps
        )

    def cumulative_integral(self) -> "ChebyshevRepresentation":
        """Indefinite integral that vanishes at the left end of the domain."""
        from pychebtech._calculus import _cumulative_integral

        coeffs = _cumulative_integral(self._coeffs, self._domain)
        return self._from_coefficients(
            coeffs, self._kind, self._domain, happy=self._happy, eps=self._eps
        )

    def roots(self):
        """Real roots in the domain, sorted.

        Returns an array for single-column objects and a list of arrays, one
        per column, otherwise.
        """
        from pychebtech._calculus import _roots_1d

        found = [_roots_1d(self._coeffs[:, k], self._domain) for k in range(self.num_columns)]
        return found[0] if self.num_columns == 1 else found

    def minimum(self) -> Tuple[float, float]:
        """``(value, location)`` of the global minimum of a single-column series."""
        from pychebtech._calculus import _optimize_1d

        return _optimize_1d(self._single_column("minimum"), self._domain, mode="min")

    def maximum(self) -> Tuple[float, float]:
        """``(value, location)`` of the global maximum of a single-column series."""
        from pychebtech._calculus import _optimize_1d

        return _optimize_1d(self._single_column("maximum"), self._domain, mode="max")

    def _single_column(self, what: str) -> np.ndarray:
        if self.num_columns != 1:
            raise ValueError(f"{what} needs a single-column representation, got {self.num_columns} columns")
        return self._coeffs[:, 0]

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"ChebyshevRepresentation("
            f"length={self.length}, "
            f"columns={self.num_columns}, "
            f"happy={self._happy})"
        )

    def __str__(self) -> str:
        a, b = self._domain
        status = "happy" if self._happy else "unresolved"
        vscale_str = ", ".join(f"{v:.2e}" for v in self._vscale)
        lines = [
            f"ChebyshevRepresentation ({self.num_columns} column"
            f"{'s' if self.num_columns != 1 else ''}, {status})",
            f"  Domain:      [{a}, {b}]",
            f"  Length:      {self.length} (degree {self.degree()}, kind {int(self._kind)})",
            f"  Vscale:      {vscale_str}",
            f"  Tolerance:   {self._eps:.2e}",
        ]
        if self.function is not None:
            lines.append(
                f"  Build:       {self.build_time:.3f}s, "
                f"{self.n_evaluations:,} evaluations"
            )
        return "\n".join(lines)

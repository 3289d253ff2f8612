"""Tests for Chebyshev points, values <-> coefficients, and quadrature weights."""

import math

import numpy as np
import pytest
from numpy.polynomial.chebyshev import chebpts1, chebval

from pychebtech import GridKind, ShapeMismatch, chebpts, coeffs2vals, quadwts, vals2coeffs


# ======================================================================
# Points
# ======================================================================

class TestChebpts:
    """Tests for chebpts()."""

    def test_second_kind_includes_endpoints(self):
        """Second-kind points are cos(j pi / (n-1)), ends included."""
        x = chebpts(5, GridKind.SECOND)
        expected = [-1.0, -math.sqrt(0.5), 0.0, math.sqrt(0.5), 1.0]
        assert np.allclose(x, expected, atol=1e-15), f"Expected {expected}, got {x}"
        assert x[0] == -1.0 and x[-1] == 1.0, f"Ends are {x[0]}, {x[-1]}"

    def test_first_kind_excludes_endpoints(self):
        """First-kind points match numpy's chebpts1 and stay inside (-1, 1)."""
        x = chebpts(4, GridKind.FIRST)
        assert np.allclose(x, chebpts1(4)), f"Got {x}"
        assert np.all(np.abs(x) < 1.0), f"End point in {x}"

    @pytest.mark.parametrize("kind", [1, 2])
    @pytest.mark.parametrize("n", [2, 5, 16, 17, 33])
    def test_ascending_and_symmetric(self, n, kind):
        """Points ascend and are exactly symmetric about 0."""
        x = chebpts(n, kind)
        assert len(x) == n, f"Expected {n} points, got {len(x)}"
        assert np.all(np.diff(x) > 0), f"Not ascending: {x}"
        assert np.array_equal(x, -x[::-1]), "Not exactly symmetric"

    @pytest.mark.parametrize("kind", [1, 2])
    def test_single_point(self, kind):
        """One Chebyshev point is 0."""
        x = chebpts(1, kind)
        assert np.array_equal(x, [0.0]), f"Expected [0.0], got {x}"

    def test_invalid_arguments(self):
        """Zero points or an unknown kind is rejected."""
        with pytest.raises(ValueError):
            chebpts(0)
        with pytest.raises(ValueError, match="kind"):
            chebpts(5, 3)

    def test_second_kind_grids_nest(self):
        """The 17-point grid sits at the even indices of the 33-point grid."""
        coarse = chebpts(17)
        fine = chebpts(33)
        difference = np.max(np.abs(fine[::2] - coarse))
        assert difference <= 1e-15, f"Grids differ by {difference}"


# ======================================================================
# Values <-> coefficients
# ======================================================================

class TestTransform:
    """Tests for vals2coeffs() and coeffs2vals()."""

    @pytest.mark.parametrize("kind", [1, 2])
    @pytest.mark.parametrize("n", [1, 2, 5, 16, 17, 64, 65])
    def test_round_trip_coefficients(self, n, kind):
        """coeffs -> values -> coeffs recovers random coefficients."""
        rng = np.random.default_rng(n)
        coeffs = rng.standard_normal((n, 3))
        back = vals2coeffs(coeffs2vals(coeffs, kind), kind)
        error = np.max(np.abs(back - coeffs))
        assert error <= n * 1e-14, f"n={n}: max error {error}"

    @pytest.mark.parametrize("kind", [1, 2])
    def test_round_trip_values(self, kind):
        """values -> coefficients -> values gives the samples back."""
        x = chebpts(40, kind)
        values = np.exp(x)
        back = coeffs2vals(vals2coeffs(values, kind), kind)
        error = np.max(np.abs(back - values))
        assert error <= 1e-14, f"Max error {error}"

    @pytest.mark.parametrize("kind", [1, 2])
    def test_chebyshev_polynomial_recovered(self, kind):
        """Values of T_3 give the unit vector e_3."""
        x = chebpts(8, kind)
        coeffs = vals2coeffs(4 * x ** 3 - 3 * x, kind)
        expected = np.zeros(8)
        expected[3] = 1.0
        assert np.allclose(coeffs, expected, atol=1e-14), f"Got {coeffs}"

    @pytest.mark.parametrize("kind", [1, 2])
    def test_x_squared(self, kind):
        """x^2 = (T_0 + T_2) / 2."""
        coeffs = vals2coeffs(chebpts(6, kind) ** 2, kind)
        assert np.allclose(coeffs, [0.5, 0.0, 0.5, 0.0, 0.0, 0.0], atol=1e-15), f"Got {coeffs}"

    @pytest.mark.parametrize("kind", [1, 2])
    def test_coefficients_evaluate_to_values(self, kind):
        """coeffs2vals agrees with numpy's chebval at the grid points."""
        coeffs = np.array([0.3, -1.2, 0.5, 0.25, -0.1])
        x = chebpts(5, kind)
        result = coeffs2vals(coeffs, kind)
        assert np.allclose(result, chebval(x, coeffs), atol=1e-14), f"Got {result}"

    def test_columns_are_independent(self):
        """Transforming [sin, cos] together equals transforming each alone."""
        x = chebpts(17)
        values = np.column_stack([np.sin(x), np.cos(x)])
        both = vals2coeffs(values)
        assert np.allclose(both[:, 0], vals2coeffs(np.sin(x)), atol=0), f"First column {both[:, 0]}"
        assert np.allclose(both[:, 1], vals2coeffs(np.cos(x)), atol=0), \
            f"Second column {both[:, 1]}"

    @pytest.mark.parametrize("kind", [1, 2])
    def test_parity_zeros_coefficients(self, kind):
        """Exactly odd data has zero even coefficients, and vice versa."""
        x = chebpts(17, kind)
        odd = vals2coeffs(np.sin(x), kind)
        even = vals2coeffs(np.cos(x), kind)
        assert np.all(odd[::2] == 0.0), f"Even coefficients of sin: {odd[::2]}"
        assert np.all(even[1::2] == 0.0), f"Odd coefficients of cos: {even[1::2]}"

    def test_one_dimensional_in_one_dimensional_out(self):
        """1-D input gives 1-D output, 2-D gives 2-D."""
        shape = vals2coeffs(np.ones(9)).shape
        assert shape == (9,), f"Got shape {shape}"
        shape = coeffs2vals(np.ones((9, 2))).shape
        assert shape == (9, 2), f"Got shape {shape}"


class TestTransformShapes:
    """Shape validation in the transforms."""

    def test_row_count_must_match_grid(self):
        """A stated size must match the row count."""
        with pytest.raises(ShapeMismatch):
            vals2coeffs(np.ones(5), n=6)
        with pytest.raises(ShapeMismatch):
            coeffs2vals(np.ones((5, 2)), n=4)

    def test_stated_size_accepted(self):
        """A stated size equal to the row count is fine."""
        shape = vals2coeffs(np.ones(5), n=5).shape
        assert shape == (5,), f"Got shape {shape}"

    def test_empty_rejected(self):
        """An empty array is rejected."""
        with pytest.raises(ShapeMismatch):
            vals2coeffs(np.array([]))

    def test_three_dimensional_rejected(self):
        """Arrays with more than two dimensions are rejected."""
        with pytest.raises(ShapeMismatch):
            coeffs2vals(np.ones((3, 3, 3)))

    def test_shape_mismatch_is_value_error(self):
        """ShapeMismatch can be caught as ValueError."""
        with pytest.raises(ValueError):
            vals2coeffs(np.ones(5), n=6)


# ======================================================================
# Quadrature weights
# ======================================================================

class TestQuadwts:
    """Clenshaw-Curtis (second kind) and Fejer (first kind) weights."""

    @pytest.mark.parametrize("kind", [1, 2])
    @pytest.mark.parametrize("n", [2, 3, 9, 32, 33])
    def test_weights_sum_to_two(self, n, kind):
        """The weights integrate 1 over [-1, 1] exactly."""
        total = quadwts(n, kind).sum()
        assert abs(total - 2.0) < 1e-14, f"n={n}: weights sum to {total}"

    @pytest.mark.parametrize("kind", [1, 2])
    def test_exact_for_polynomials(self, kind):
        """Nine-point rules integrate x^4 and x^3 exactly."""
        x = chebpts(9, kind)
        w = quadwts(9, kind)
        assert abs(w @ x ** 4 - 2.0 / 5.0) < 1e-14, f"x^4 integrates to {w @ x ** 4}"
        assert abs(w @ x ** 3) < 1e-15, f"x^3 integrates to {w @ x ** 3}"

    def test_clenshaw_curtis_three_points(self):
        """Simpson's rule."""
        w = quadwts(3, GridKind.SECOND)
        assert np.allclose(w, [1 / 3, 4 / 3, 1 / 3]), f"Got {w}"

    def test_single_point(self):
        """The one-point rule has weight 2."""
        w = quadwts(1)
        assert np.array_equal(w, [2.0]), f"Expected [2.0], got {w}"

    def test_exp_integral(self):
        """20 first-kind points integrate exp to machine precision."""
        x = chebpts(20, 1)
        result = quadwts(20, 1) @ np.exp(x)
        expected = math.e - 1 / math.e
        assert abs(result - expected) < 1e-14, f"Expected {expected}, got {result}"

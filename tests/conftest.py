"""Shared test fixtures for pychebtech tests."""

import numpy as np
import pytest

from pychebtech import ChebyshevRepresentation, Preferences


# ---------------------------------------------------------------------------
# Test functions
# ---------------------------------------------------------------------------

def sin_cos(x):
    """Two-column function [sin(x), cos(x)]."""
    return np.column_stack([np.sin(x), np.cos(x)])


def runge(x):
    """1 / (1 + 25 x^2): analytic, but needs a long series on [-1, 1]."""
    return 1.0 / (1.0 + 25.0 * x ** 2)


def generic_weights(points):
    """Barycentric weights from the product formula w_i = 1 / prod_{j!=i} (x_i - x_j)."""
    n = len(points)
    weights = np.ones(n)
    for i in range(n):
        for j in range(n):
            if j != i:
                weights[i] /= (points[i] - points[j])
    return weights


TIGHT = Preferences(eps=1e-13)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rep_sin():
    """sin(x) on [-1, 1] at tolerance 1e-13."""
    return ChebyshevRepresentation(np.sin, preferences=TIGHT)


@pytest.fixture
def rep_sin_cos():
    """Two-column [sin(x), cos(x)] on [-1, 1] at tolerance 1e-13."""
    return ChebyshevRepresentation(sin_cos, preferences=TIGHT)


@pytest.fixture
def rep_sin_0_pi():
    """sin(x) on [0, pi]."""
    return ChebyshevRepresentation(np.sin, domain=(0.0, np.pi), preferences=TIGHT)


@pytest.fixture(scope="module")
def rep_runge():
    """Runge function on [-1, 1] at the default tolerance."""
    return ChebyshevRepresentation(runge)

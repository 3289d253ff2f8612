"""Quick start example: resolve a 1D function and compute with its series."""

import math

import numpy as np

from pychebtech import ChebyshevRepresentation, Preferences


def f(x):
    """A smooth function on [-3, 3]: sin(x) * exp(-x^2 / 4)."""
    return np.sin(x) * np.exp(-x ** 2 / 4)


# Build the series adaptively
cheb = ChebyshevRepresentation(
    f,
    domain=(-3.0, 3.0),
    preferences=Preferences(eps=1e-13),
    verbose=True,
)
print(cheb)

# Evaluate at a test point
point = 1.0
exact = float(f(point))
approx = cheb(point)

print(f"\nExact:  {exact:.10f}")
print(f"Approx: {approx:.10f}")
print(f"Error:  {abs(approx - exact):.2e}")

# Derivative df/dx
dfdx_exact = (math.cos(point) - 0.5 * point * math.sin(point)) * math.exp(-point ** 2 / 4)
dfdx_approx = cheb.derivative()(point)
print(f"\ndf/dx exact:  {dfdx_exact:.10f}")
print(f"df/dx approx: {dfdx_approx:.10f}")
print(f"df/dx error:  {abs(dfdx_approx - dfdx_exact):.2e}")

# Roots and extrema
print(f"\nRoots:   {cheb.roots()}")
print(f"Maximum: {cheb.maximum()}")

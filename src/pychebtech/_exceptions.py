"""Exceptions and warnings raised by the Chebyshev construction engine."""


class ChebtechError(Exception):
    """Base exception for all pychebtech errors."""

    pass


class NonFiniteValue(ChebtechError, ValueError):
    """A sampled value or coefficient is NaN or infinite.

    Fatal: construction is aborted and no partial representation is returned.
    """

    pass


class ShapeMismatch(ChebtechError, ValueError):
    """An array does not have the shape implied by the stated grid size."""

    pass


class ToleranceShapeMismatch(ChebtechError, ValueError):
    """A tolerance vector cannot be matched to the number of columns."""

    pass


class UnresolvedWarning(UserWarning):
    """Adaptive construction reached the maximum length without resolving."""

    pass

"""Construction preferences and the grid-kind tag."""

from __future__ import annotations

import dataclasses
import enum

import numpy as np


class GridKind(enum.IntEnum):
    """Family of Chebyshev points a representation is sampled on.

    ``FIRST`` are the roots of T_n (no endpoints), ``SECOND`` the extrema of
    T_{n-1} (endpoints included).
    """

    FIRST = 1
    SECOND = 2


def as_grid_kind(kind) -> GridKind:
    """Coerce ``1``, ``2`` or a :class:`GridKind` to a :class:`GridKind`."""
    try:
        return GridKind(kind)
    except ValueError:
        raise ValueError(f"kind must be 1 or 2, got {kind!r}") from None


@dataclasses.dataclass(frozen=True)
class Preferences:
    """Options for adaptive construction.

    Parameters
    ----------
    eps : float
        Target relative tolerance of the chopped series.
    max_length : int
        Largest grid size tried before declaring the function unresolved.
    min_samples : int
        Size of the first grid.
    kind : GridKind
        Grid family used for sampling.
    sample_test : bool
        If True, a happy series is also compared against the function at a
        few points off the grid before it is accepted.
    """

    eps: float = 10 * float(np.finfo(float).eps)
    max_length: int = 2**16 + 1
    min_samples: int = 17
    kind: GridKind = GridKind.SECOND
    sample_test: bool = True

    def __post_init__(self):
        object.__setattr__(self, "kind", as_grid_kind(self.kind))
        if not (0 < self.eps < 1):
            raise ValueError(f"eps must lie in (0, 1), got {self.eps}")
        if int(self.min_samples) != self.min_samples or self.min_samples < 1:
            raise ValueError(f"min_samples must be a positive int, got {self.min_samples}")
        if int(self.max_length) != self.max_length or self.max_length < 1:
            raise ValueError(f"max_length must be a positive int, got {self.max_length}")

    def replace(self, **changes) -> "Preferences":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

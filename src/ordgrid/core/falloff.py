"""
Falloff kernel: the footprint a node splats into the coarse density grid.

The weight at signed offset (i, j) from the center is

    w(i, j) = (R - |i|/R) * (R - |j|/R)

so influence declines linearly with grid distance along each axis.
The kernel is computed once per radius and shared read-only by every
grid that uses it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from functools import lru_cache

import numpy as np


@lru_cache(maxsize=None)
def falloff_weights(radius: int) -> np.ndarray:
    """
    Compute the (2R+1) x (2R+1) falloff weights for a radius.

    Memoized: callers with the same radius get the same read-only array.

    Args:
        radius: Kernel radius R in grid cells (must be positive)

    Returns:
        Read-only float64 array, shape [2R+1, 2R+1], indexed [i+R, j+R]
    """
    if radius <= 0:
        raise ValueError(f"Falloff radius must be positive, got {radius}")

    offsets = np.arange(-radius, radius + 1)
    profile = radius - np.abs(offsets) / radius

    # Row index follows the y offset, column index the x offset
    weights = np.outer(profile, profile)
    weights.setflags(write=False)
    return weights


@dataclass(frozen=True)
class FalloffKernel:
    """
    Immutable square weight matrix used for coarse splatting.

    Adding the kernel to the coarse grid places one node; subtracting the
    same kernel at the same window removes it again.
    """

    radius: int = 10
    weights: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "weights", falloff_weights(self.radius))

    @property
    def size(self) -> int:
        """Side length 2R+1."""
        return 2 * self.radius + 1

    @property
    def center_weight(self) -> float:
        """Weight at the node's own cell (R * R)."""
        return float(self.weights[self.radius, self.radius])

    def weight(self, di: int, dj: int) -> float:
        """Weight at signed offset (di, dj) from the center."""
        r = self.radius
        if abs(di) > r or abs(dj) > r:
            return 0.0
        return float(self.weights[di + r, dj + r])

    def total_weight(self) -> float:
        """Sum of the footprint: what one coarse placement adds to the grid."""
        return float(self.weights.sum())

"""
Rebuild the coarse density field from scratch and compare it with a grid.

The grid updates its coarse field incrementally: millions of add/sub pairs
over a layout run. Rebuilding the field in one pass (occupancy histogram
convolved with the falloff kernel) gives a reference to check that the
incremental field has not drifted or missed a subtraction.

This is NOT used by the grid itself. One-way diagnostics only.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

import numpy as np
from scipy import ndimage

from ordgrid.core.falloff import falloff_weights

if TYPE_CHECKING:
    from ordgrid.core.density_grid import DensityGrid, DensityGridConfig


@dataclass
class SplatComparison:
    """Results of comparing an incremental coarse field with its rebuild."""

    incremental: np.ndarray
    reference: np.ndarray
    max_error: float
    rmse: float
    tolerance: float

    @property
    def is_consistent(self) -> bool:
        """True if every cell agrees within the tolerance."""
        return self.max_error <= self.tolerance


def occupancy_histogram(
    positions: Iterable[tuple[float, float]],
    config: "DensityGridConfig",
) -> np.ndarray:
    """
    Count nodes per grid cell.

    Uses the same viewport-to-grid mapping as DensityGrid.to_cell.
    Positions that map outside the grid are ignored.

    Returns:
        int64 array, shape [G, G], indexed [y, x]
    """
    g = config.grid_size
    counts = np.zeros((g, g), dtype=np.int64)

    pts = np.asarray(list(positions), dtype=np.float64).reshape(-1, 2)
    if len(pts) == 0:
        return counts

    half_view = config.view_size / 2
    cells = ((pts + half_view + 0.5) * config.view_to_grid).astype(np.int64)
    xs, ys = cells[:, 0], cells[:, 1]

    inside = (xs >= 0) & (xs < g) & (ys >= 0) & (ys < g)
    np.add.at(counts, (ys[inside], xs[inside]), 1)
    return counts


def reference_density(
    positions: Iterable[tuple[float, float]],
    config: "DensityGridConfig",
) -> np.ndarray:
    """
    Coarse density field for a set of placements, computed in one pass.

    Equivalent to coarse-adding a node at each position into an empty grid,
    as long as every footprint fits inside the grid.

    Returns:
        float64 array, shape [G, G]
    """
    counts = occupancy_histogram(positions, config).astype(np.float64)
    weights = falloff_weights(config.radius)
    return ndimage.convolve(counts, weights, mode="constant", cval=0.0)


def compare_with_reference(
    grid: "DensityGrid",
    positions: Iterable[tuple[float, float]],
    tolerance: float = 1e-6,
) -> SplatComparison:
    """
    Compare a grid's coarse field with the rebuild from `positions`.

    Args:
        grid: Grid whose coarse field was built incrementally
        positions: The `sub_pos` of every node currently coarse-placed
        tolerance: Largest acceptable per-cell difference

    Returns:
        SplatComparison with both fields and error metrics
    """
    incremental = grid.density_field()
    reference = reference_density(positions, grid.config)

    diff = incremental - reference
    max_error = float(np.max(np.abs(diff)))
    rmse = float(np.sqrt(np.mean(diff ** 2)))

    return SplatComparison(
        incremental=incremental,
        reference=reference,
        max_error=max_error,
        rmse=rmse,
        tolerance=tolerance,
    )


def crowding_summary(grid: "DensityGrid") -> dict:
    """
    Summary statistics for a grid.

    Returns:
        Dictionary with coarse and fine occupancy figures
    """
    counts = grid.bin_counts()
    kernel_total = grid.falloff.total_weight()
    mass = grid.coarse_mass()

    return {
        "max_density": float(grid.density.max()),
        "mean_density": float(grid.density.mean()),
        "coarse_mass": mass,
        "coarse_nodes": mass / kernel_total,
        "fine_nodes": grid.n_fine,
        "occupied_bins": int(np.count_nonzero(counts)),
        "max_bin": int(counts.max()),
    }

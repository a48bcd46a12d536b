"""
2D visualization of density grid fields.

Provides heatmaps for:
- Coarse density: the splatted falloff footprints
- Bin counts: fine occupancy per cell
- The falloff kernel itself

All plots use matplotlib with sensible defaults for scientific visualization.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes
from matplotlib.patches import Rectangle

if TYPE_CHECKING:
    from ordgrid.core.density_grid import DensityGrid, DensityGridConfig
    from ordgrid.core.falloff import FalloffKernel


# Custom colormap: deep navy (empty) → teal → warm white (crowded)
def _create_density_cmap():
    """Create a colormap from empty space to crowded regions."""
    from matplotlib.colors import LinearSegmentedColormap

    colors = [
        (0.031, 0.043, 0.122),   # Deep navy (empty)
        (0.110, 0.192, 0.361),   # Dark blue
        (0.153, 0.384, 0.522),   # Blue
        (0.127, 0.566, 0.550),   # Teal
        (0.565, 0.820, 0.376),   # Light green
        (0.993, 0.978, 0.925),   # Warm white (crowded)
    ]
    return LinearSegmentedColormap.from_list("density", colors)


CMAP_DENSITY = _create_density_cmap()
CMAP_BINS = "YlOrRd"
CMAP_KERNEL = "magma"


def view_extent(config: "DensityGridConfig", margin: int = 0) -> tuple[float, float, float, float]:
    """
    Viewport coordinates spanned by cells [margin, G - margin) on each axis.

    Inverts DensityGrid.to_cell: cell c covers viewport positions
    [c / s - V/2 - 0.5, (c + 1) / s - V/2 - 0.5) with s = G / V.

    Returns:
        (left, right, bottom, top) for imshow's `extent`
    """
    s = config.view_to_grid
    offset = config.view_size / 2 + 0.5
    lo = margin / s - offset
    hi = (config.grid_size - margin) / s - offset
    return lo, hi, lo, hi


def plot_field(
    field: np.ndarray,
    title: str = "",
    cmap=None,
    vmin: float | None = None,
    vmax: float | None = None,
    ax: Axes | None = None,
    colorbar: bool = True,
    figsize: tuple[float, float] = (8, 6),
    extent: tuple[float, float, float, float] | None = None,
) -> tuple[Figure, Axes]:
    """
    Plot a 2D grid field as a heatmap.

    Args:
        field: 2D array to plot, indexed [y, x]
        title: Plot title
        cmap: Colormap name
        vmin, vmax: Color scale limits (auto if None)
        ax: Existing axes to plot on (creates new figure if None)
        colorbar: Whether to add a colorbar
        figsize: Figure size if creating new figure
        extent: Viewport span of the field (see view_extent); axes are
                labelled in cells when None

    Returns:
        (fig, ax) tuple
    """
    if cmap is None:
        cmap = CMAP_DENSITY

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    im = ax.imshow(
        field,
        origin="lower",
        cmap=cmap,
        vmin=vmin,
        vmax=vmax,
        extent=extent,
        aspect="equal",
    )

    if colorbar:
        plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    ax.set_title(title)
    units = "cell" if extent is None else "viewport"
    ax.set_xlabel(f"x ({units})")
    ax.set_ylabel(f"y ({units})")

    return fig, ax


def _plot_grid_field(
    grid: "DensityGrid",
    field: np.ndarray,
    crop_wall: bool,
    **kwargs,
) -> tuple[Figure, Axes]:
    """Plot a [G, G] field in viewport units, cropping or outlining the wall."""
    config = grid.config
    margin = config.boundary_margin

    if crop_wall:
        field = field[margin:-margin, margin:-margin]
        return plot_field(field, extent=view_extent(config, margin), **kwargs)

    fig, ax = plot_field(field, extent=view_extent(config), **kwargs)

    # Outline the wall: queries outside this square return wall_density
    lo, hi, _, _ = view_extent(config, margin)
    ax.add_patch(
        Rectangle((lo, lo), hi - lo, hi - lo, fill=False, linestyle="--", linewidth=0.8, edgecolor="white")
    )
    return fig, ax


def plot_density(
    grid: "DensityGrid",
    title: str = "Coarse Density",
    ax: Axes | None = None,
    crop_wall: bool = True,
    **kwargs,
) -> tuple[Figure, Axes]:
    """Plot the coarse density field, optionally without the wall margin."""
    return _plot_grid_field(
        grid, grid.density, crop_wall, title=title, cmap=CMAP_DENSITY, vmin=0, ax=ax, **kwargs
    )


def plot_bin_counts(
    grid: "DensityGrid",
    title: str = "Fine Bin Occupancy",
    ax: Axes | None = None,
    crop_wall: bool = True,
    **kwargs,
) -> tuple[Figure, Axes]:
    """Plot the number of nodes in each fine bin."""
    counts = grid.bin_counts().astype(float)
    return _plot_grid_field(
        grid, counts, crop_wall, title=title, cmap=CMAP_BINS, vmin=0, ax=ax, **kwargs
    )


def plot_kernel(
    kernel: "FalloffKernel",
    title: str = "Falloff Kernel",
    ax: Axes | None = None,
    **kwargs,
) -> tuple[Figure, Axes]:
    """Plot the falloff weights against their signed cell offsets."""
    edge = kernel.radius + 0.5
    fig, ax = plot_field(
        kernel.weights, title=title, cmap=CMAP_KERNEL, vmin=0, ax=ax,
        extent=(-edge, edge, -edge, edge), **kwargs,
    )
    ax.set_xlabel("x offset (cells)")
    ax.set_ylabel("y offset (cells)")
    return fig, ax


def plot_grid_summary(
    grid: "DensityGrid",
    figsize: tuple[float, float] = (16, 5),
) -> Figure:
    """
    Three-panel summary: coarse density, bin occupancy, falloff kernel.
    """
    fig, axes = plt.subplots(1, 3, figsize=figsize)

    plot_density(grid, ax=axes[0])
    plot_bin_counts(grid, ax=axes[1])
    plot_kernel(grid.falloff, ax=axes[2])

    g = grid.config.grid_size
    fig.suptitle(
        f"Density grid {g}x{g}, view {grid.config.view_size:g}, "
        f"{grid.n_fine} fine nodes"
    )
    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)

"""
Visualization utilities.

- Coarse density heatmaps
- Fine bin occupancy
- Falloff kernel
"""

from ordgrid.viz.density import (
    view_extent,
    plot_field,
    plot_density,
    plot_bin_counts,
    plot_kernel,
    plot_grid_summary,
    save_figure,
)

__all__ = [
    "view_extent",
    "plot_field",
    "plot_density",
    "plot_bin_counts",
    "plot_kernel",
    "plot_grid_summary",
    "save_figure",
]

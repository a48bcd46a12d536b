"""
Analysis layer: diagnostics derived from a density grid.

IMPORTANT: This is NOT seen by the grid. One-way derivation only.

- occupancy_histogram: per-cell node counts
- reference_density: coarse field rebuilt in one pass
- compare_with_reference: detect drift in the incremental coarse field
- crowding_summary: occupancy statistics
"""

from ordgrid.analysis.splat import (
    SplatComparison,
    occupancy_histogram,
    reference_density,
    compare_with_reference,
    crowding_summary,
)

__all__ = [
    "SplatComparison",
    "occupancy_histogram",
    "reference_density",
    "compare_with_reference",
    "crowding_summary",
]

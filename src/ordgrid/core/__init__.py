"""
Core density grid primitives.

This layer knows NOTHING about graphs, edges, or annealing.
It only knows:
- A falloff kernel splatted into a coarse density field
- Per-cell FIFO bins of nodes for fine queries
- Node descriptors carrying their last placement
- Add / sub / query, and the two fatal protocol violations
"""

from ordgrid.core.falloff import FalloffKernel, falloff_weights
from ordgrid.core.bins import BinQueue
from ordgrid.core.node import NodeDescriptor
from ordgrid.core.density_grid import DensityGrid, DensityGridConfig
from ordgrid.core.errors import DensityGridError, NodeOutsideGridError, EmptyBinError

__all__ = [
    "FalloffKernel",
    "falloff_weights",
    "BinQueue",
    "NodeDescriptor",
    "DensityGrid",
    "DensityGridConfig",
    "DensityGridError",
    "NodeOutsideGridError",
    "EmptyBinError",
]

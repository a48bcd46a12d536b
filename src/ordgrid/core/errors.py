"""
Fatal protocol violations raised by the density grid.

Both conditions mean the layout driver broke the add/sub contract. They are
never caught inside the library: the computation should stop.
"""


class DensityGridError(RuntimeError):
    """Base exception for density grid protocol violations."""

    pass


class NodeOutsideGridError(DensityGridError):
    """A node's cell (or its kernel footprint) falls outside the grid."""

    pass


class EmptyBinError(DensityGridError, IndexError):
    """Removal from a fine bin that holds no matching entry."""

    pass

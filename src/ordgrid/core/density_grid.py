"""
DensityGrid: node crowding over a discretized square viewport.

The grid tracks crowding at two resolutions:
- Coarse: every placed node splats one falloff-kernel footprint into a
  [G, G] float array. Removing the node subtracts the same footprint.
- Fine: every placed node sits in the FIFO bin of its cell, so queries
  can sum exact distance terms over nearby nodes.

The grid only executes add/sub/query primitives. The layout driver owns
the sequencing (sub at the old position, move, add at the new one) and
must keep nodes inside the padded interior.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Literal

import numpy as np

from ordgrid.core.bins import BinQueue
from ordgrid.core.errors import EmptyBinError, NodeOutsideGridError
from ordgrid.core.falloff import FalloffKernel
from ordgrid.core.node import NodeDescriptor

logger = logging.getLogger(__name__)


# Fine query: inverse-square term per neighbor, stabilized at zero distance
FINE_WEIGHT = 1e-4
FINE_EPSILON = 1e-50


@dataclass
class DensityGridConfig:
    """Configuration for a density grid."""

    grid_size: int = 1000  # G: cells per side
    view_size: float = 4000.0  # V: viewport side length, centered at origin
    radius: int = 10  # R: falloff kernel radius in cells
    boundary_margin: int = 10  # Cells next to each edge that act as a wall
    wall_density: float = 1e4  # Density reported inside the wall

    # How sub() removes a node from its fine bin
    # "fifo": evict the oldest entry of the bin (OpenOrd semantics)
    # "identity": remove exactly the node passed in
    fine_removal: Literal["fifo", "identity"] = "fifo"

    def __post_init__(self):
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.view_size <= 0:
            raise ValueError(f"view_size must be positive, got {self.view_size}")
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        if 2 * self.radius + 1 > self.grid_size:
            raise ValueError(
                f"Kernel of radius {self.radius} does not fit a grid of size {self.grid_size}"
            )
        # The fine scan reads one cell beyond the queried cell
        if self.boundary_margin < 1:
            raise ValueError(
                f"boundary_margin must be at least 1, got {self.boundary_margin}"
            )
        if self.fine_removal not in ("fifo", "identity"):
            raise ValueError(f"Unknown fine_removal mode: {self.fine_removal!r}")

    @property
    def view_to_grid(self) -> float:
        """Scale factor from viewport units to grid cells (G / V)."""
        return self.grid_size / self.view_size

    @classmethod
    def small(cls, **overrides) -> DensityGridConfig:
        """Reduced-scale grid (100 cells over a 400 unit viewport)."""
        params = dict(grid_size=100, view_size=400.0)
        params.update(overrides)
        return cls(**params)


class DensityGrid:
    """
    Coarse density field plus fine per-cell bins.

    All storage is allocated up front: the coarse array at construction,
    and each cell's BinQueue the first time a node lands in it. Bins are
    then reused for the lifetime of the grid.
    """

    def __init__(self, config: DensityGridConfig | None = None):
        self.config = config if config is not None else DensityGridConfig()
        g = self.config.grid_size

        self.falloff = FalloffKernel(self.config.radius)

        # Coarse accumulated density: [G, G], indexed [y, x]
        self.density = np.zeros((g, g), dtype=np.float64)

        # Fine bins: [G, G] of BinQueue, populated on first use
        self.bins = np.empty((g, g), dtype=object)

        self._n_fine = 0

        logger.debug(
            "Allocated density grid %dx%d (%.1f MB coarse), radius=%d",
            g, g, self.density.nbytes / 1e6, self.config.radius,
        )

    def init(self):
        """Recompute the falloff kernel and clear all placements."""
        self.falloff = FalloffKernel(self.config.radius)
        self.clear()

    @property
    def shape(self) -> tuple[int, int]:
        """Return (G, G) grid dimensions."""
        g = self.config.grid_size
        return g, g

    @property
    def n_fine(self) -> int:
        """Number of nodes currently held in fine bins."""
        return self._n_fine

    # ═══════════════════════════════════════════════════════════════
    # COORDINATES
    # ═══════════════════════════════════════════════════════════════

    def to_cell(self, pos: tuple[float, float]) -> tuple[int, int]:
        """
        Map a viewport position to its (x, y) grid cell.

        The half-cell offset is added in viewport units before scaling.
        """
        half_view = self.config.view_size / 2
        scale = self.config.view_to_grid
        x = int((pos[0] + half_view + 0.5) * scale)
        y = int((pos[1] + half_view + 0.5) * scale)
        return x, y

    def is_wall(self, x: int, y: int) -> bool:
        """True if cell (x, y) lies inside the boundary wall."""
        g = self.config.grid_size
        margin = self.config.boundary_margin
        if y < margin or g - margin < y:
            return True
        if x < margin or g - margin < x:
            return True
        return False

    def _window(self, pos: tuple[float, float]) -> tuple[slice, slice]:
        """
        Row and column slices of the kernel footprint centered at pos.

        Raises:
            NodeOutsideGridError: if any part of the footprint leaves the grid
        """
        x, y = self.to_cell(pos)
        r = self.config.radius
        g = self.config.grid_size
        x0, y0 = x - r, y - r
        x1, y1 = x + r + 1, y + r + 1

        if x0 < 0 or g < x1 or y0 < 0 or g < y1:
            logger.error(
                "Kernel window at cell (%d, %d) leaves the %dx%d grid (position %s)",
                x, y, g, g, pos,
            )
            raise NodeOutsideGridError("openord: node outside grid")

        return slice(y0, y1), slice(x0, x1)

    def _bin(self, x: int, y: int) -> BinQueue:
        """Bin for cell (x, y), created on first use."""
        b = self.bins[y, x]
        if b is None:
            b = BinQueue()
            self.bins[y, x] = b
        return b

    # ═══════════════════════════════════════════════════════════════
    # QUERY
    # ═══════════════════════════════════════════════════════════════

    def at(self, pos: tuple[float, float], fine: bool = False) -> float:
        """
        Density at a viewport position.

        Args:
            pos: (x, y) viewport position
            fine: Sum exact distance terms over the 3x3 neighboring bins
                  instead of reading the coarse field

        Returns:
            Wall density near the edges; otherwise the squared coarse value
            or the fine neighbor sum
        """
        x, y = self.to_cell(pos)

        if self.is_wall(x, y):
            return self.config.wall_density

        if not fine:
            d = self.density[y, x]
            return float(d * d)

        px, py = pos
        total = 0.0
        for row in self.bins[y - 1:y + 2, x - 1:x + 2]:
            for b in row:
                if b is None:
                    continue
                for node in b:
                    dx = px - node.sub_pos[0]
                    dy = py - node.sub_pos[1]
                    total += FINE_WEIGHT / (dx * dx + dy * dy + FINE_EPSILON)
        return total

    # ═══════════════════════════════════════════════════════════════
    # MUTATION
    # ═══════════════════════════════════════════════════════════════

    def add(self, node: NodeDescriptor, fine: bool = False) -> None:
        """
        Place a node at its `add_pos`.

        Records `add_pos` in `sub_pos` so the placement can be undone after
        the driver moves the node.

        Raises:
            NodeOutsideGridError: if the node (or, for coarse placement, its
                                  kernel footprint) falls outside the grid
        """
        if fine:
            self._fine_add(node)
        else:
            self._coarse_add(node)

    def _fine_add(self, node: NodeDescriptor):
        x, y = self.to_cell(node.add_pos)
        g = self.config.grid_size
        if not (0 <= x < g and 0 <= y < g):
            logger.error("Node %s at cell (%d, %d) is outside the grid", node.id, x, y)
            raise NodeOutsideGridError("openord: node outside grid")

        node.sub_pos = node.add_pos
        self._bin(x, y).enqueue(node)
        self._n_fine += 1

    def _coarse_add(self, node: NodeDescriptor):
        rows, cols = self._window(node.add_pos)
        node.sub_pos = node.add_pos
        self.density[rows, cols] += self.falloff.weights

    def sub(
        self,
        node: NodeDescriptor,
        first_add: bool,
        fine_first_add: bool,
        fine: bool = False,
    ) -> NodeDescriptor | None:
        """
        Undo a node's previous placement, found through its `sub_pos`.

        Does nothing when the relevant first-add flag says the node has not
        been placed yet.

        Args:
            node: Node to remove
            first_add: Node has no coarse placement yet
            fine_first_add: Node has no fine placement yet
            fine: Remove from the fine bins rather than the coarse field

        Returns:
            The node evicted from the fine bin (fine removal only). In FIFO
            mode this is the oldest node of the bin, which is `node` only if
            the driver removes nodes in insertion order.

        Raises:
            EmptyBinError: fine removal from a bin with no matching entry
        """
        if fine and not fine_first_add:
            return self._fine_sub(node)
        elif not first_add:
            self._coarse_sub(node)
        return None

    def _fine_sub(self, node: NodeDescriptor) -> NodeDescriptor:
        x, y = self.to_cell(node.sub_pos)
        g = self.config.grid_size
        b = self.bins[y, x] if 0 <= x < g and 0 <= y < g else None

        if self.config.fine_removal == "identity":
            if b is None or not b.discard(node):
                logger.error("Node %s not found in bin (%d, %d)", node.id, x, y)
                raise EmptyBinError(f"node {node.id} is not in bin ({x}, {y})")
            evicted = node
        else:
            if b is None:
                logger.error("dequeue from empty bin (%d, %d)", x, y)
                raise EmptyBinError("queue: empty queue")
            evicted = b.dequeue()

        self._n_fine -= 1
        return evicted

    def _coarse_sub(self, node: NodeDescriptor):
        rows, cols = self._window(node.sub_pos)
        self.density[rows, cols] -= self.falloff.weights

    # ═══════════════════════════════════════════════════════════════
    # DIAGNOSTICS
    # ═══════════════════════════════════════════════════════════════

    def density_field(self) -> np.ndarray:
        """Copy of the coarse density field, shape [G, G]."""
        return self.density.copy()

    def coarse_mass(self) -> float:
        """Total coarse density: n_coarse_nodes * kernel total."""
        return float(self.density.sum())

    def bin_counts(self) -> np.ndarray:
        """Number of nodes in each fine bin, shape [G, G]."""
        count = np.frompyfunc(lambda b: 0 if b is None else len(b), 1, 1)
        return count(self.bins).astype(np.int64)

    def clear(self):
        """Remove every placement, keeping all allocated bins."""
        self.density.fill(0.0)
        for b in self.bins.flat:
            if b is not None:
                b.reset()
        self._n_fine = 0
        logger.debug("Cleared density grid")

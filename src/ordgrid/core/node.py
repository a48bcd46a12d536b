"""
NodeDescriptor: the record the layout driver hands to the density grid.

The grid reads `add_pos` when placing a node and remembers that placement
in `sub_pos`, so the driver can move `add_pos` freely and still remove the
old footprint later. `fixed` and `energy` belong to the driver.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(eq=False)
class NodeDescriptor:
    """
    A graph node as seen by the density grid.

    Equality is identity: two descriptors with the same id and position are
    still different entries in a bin.
    """

    id: int
    add_pos: tuple[float, float] = (0.0, 0.0)  # Position for the next add
    sub_pos: tuple[float, float] = (0.0, 0.0)  # Position of the last add
    fixed: bool = False  # Excluded from force movement by the driver
    energy: float = 0.0  # Accumulated energy, opaque to the grid

    def move_to(self, x: float, y: float) -> None:
        """Set the position used by the next add."""
        self.add_pos = (float(x), float(y))

    @property
    def x(self) -> float:
        return self.add_pos[0]

    @property
    def y(self) -> float:
        return self.add_pos[1]

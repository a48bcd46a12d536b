"""
ordgrid: density grid for OpenOrd-style force-directed graph layout.

Approximates how crowded the layout is around any position, at two
resolutions:
- Coarse: each node splats a falloff kernel into a shared density field
- Fine: each node sits in a per-cell FIFO bin for exact distance sums

The layout driver (annealing schedule, forces, coordinate updates) lives
outside this package. It removes a node from its old placement, moves it,
re-adds it, and queries density at candidate positions.
"""

__version__ = "0.1.0"

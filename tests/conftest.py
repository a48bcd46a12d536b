"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def small_config():
    """Configuration for a small 100x100 grid over a 400 unit viewport."""
    from ordgrid.core import DensityGridConfig
    return DensityGridConfig(
        grid_size=100,
        view_size=400.0,
        radius=10,
        boundary_margin=10,
    )


@pytest.fixture
def default_config():
    """The full-size OpenOrd configuration (1000x1000 over 4000 units)."""
    from ordgrid.core import DensityGridConfig
    return DensityGridConfig()


@pytest.fixture
def small_grid(small_config):
    """Empty density grid built from small_config."""
    from ordgrid.core import DensityGrid
    return DensityGrid(small_config)


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)

"""Basic import tests to verify package structure."""


def test_import_ordgrid():
    """Verify main package imports."""
    import ordgrid
    assert ordgrid.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from ordgrid import core
    assert hasattr(core, "DensityGrid")
    assert hasattr(core, "BinQueue")


def test_import_analysis():
    """Verify analysis module structure exists."""
    from ordgrid import analysis
    assert hasattr(analysis, "__doc__")


def test_import_viz():
    """Verify visualization module structure exists."""
    import matplotlib
    matplotlib.use("Agg")
    from ordgrid import viz
    assert hasattr(viz, "plot_density")

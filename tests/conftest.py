import matplotlib

matplotlib.use("Agg")

import pytest

from grid import Geometry
from parameter import Parameter


@pytest.fixture
def geom():
    """Small mesh with exactly representable spacings and hx != hy."""
    return Geometry(Nx=4, Ny=4, Lx=1.0, Ly=0.5)


@pytest.fixture
def cavity_param():
    return Parameter(re=100.0, omega=1.7, alpha=0.9, dt=0.2, tend=1.0, iterMax=500, eps=1e-4, tau=0.5)

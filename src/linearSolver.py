# linearSolver.py
from abc import ABC, abstractmethod

import numpy as np

from iterator import InteriorIterator


class Solver(ABC):
    """
    Relaxation solver for the discrete Poisson equation  lap(p) = rhs.

    A solver keeps no state between calls: ``cycle`` performs one sweep over
    the interior of ``grid`` in place and returns the RMS residual. Boundary
    values are the caller's business and have to be set before each cycle.
    """

    def __init__(self, geom) -> None:
        self.geom = geom

        hx = geom.Deltax
        hy = geom.Deltay
        self.idx2 = 1.0 / (hx * hx)
        self.idy2 = 1.0 / (hy * hy)
        self.diag = 2.0 * (self.idx2 + self.idy2)

    def localRes(self, it, grid, rhs) -> float:
        """Residual of the five-point Laplacian at one cell."""
        return grid.dxx(it) + grid.dyy(it) - rhs[it]

    def _laplacian(self, p: np.ndarray) -> np.ndarray:
        return (
            (p[:-2, 1:-1] - 2.0 * p[1:-1, 1:-1] + p[2:, 1:-1]) * self.idx2
            + (p[1:-1, :-2] - 2.0 * p[1:-1, 1:-1] + p[1:-1, 2:]) * self.idy2
        )

    def residual(self, grid, rhs) -> float:
        """RMS of ``localRes`` over the interior cells."""
        res = self._laplacian(grid.field) - rhs.field[1:-1, 1:-1]
        return float(np.sqrt(np.mean(res * res)))

    @abstractmethod
    def cycle(self, grid, rhs) -> float:
        ...


class SOR(Solver):
    """
    Successive over-relaxation, lexicographic (Gauss-Seidel) ordering.

    Neighbours to the left and below are already updated when a cell is
    visited, so the result depends on the sweep order.
    """

    def __init__(self, geom, omega: float) -> None:
        if not 0.0 < omega < 2.0:
            raise ValueError(f"relaxation factor must lie in (0, 2), got {omega}")
        super().__init__(geom)
        self.omega = float(omega)

    def cycle(self, grid, rhs) -> float:
        omega = self.omega
        idx2 = self.idx2
        idy2 = self.idy2
        diag = self.diag
        p = grid.field
        b = rhs.field

        # interior cells only, so the neighbours never leave the array
        for cell in InteriorIterator(self.geom):
            i, j = cell.pos()
            neighbours = (p[i - 1, j] + p[i + 1, j]) * idx2 + (p[i, j - 1] + p[i, j + 1]) * idy2
            p[i, j] = (1.0 - omega) * p[i, j] + omega * (neighbours - b[i, j]) / diag

        return self.residual(grid, rhs)


class RedBlackSOR(SOR):
    """
    SOR with checkerboard ordering.

    All cells of one colour only couple to cells of the other colour, so each
    half sweep is a single vectorised update. Converges to the same solution
    as ``SOR`` along a different iteration history.
    """

    def __init__(self, geom, omega: float) -> None:
        super().__init__(geom, omega)

        i, j = np.meshgrid(
            np.arange(1, geom.Nx + 1), np.arange(1, geom.Ny + 1), indexing="ij"
        )
        red = (i + j) % 2 == 0
        self.colours = (red, ~red)

    def cycle(self, grid, rhs) -> float:
        p = grid.field
        b = rhs.field[1:-1, 1:-1]
        omega = self.omega

        for colour in self.colours:
            neighbours = (
                (p[:-2, 1:-1] + p[2:, 1:-1]) * self.idx2
                + (p[1:-1, :-2] + p[1:-1, 2:]) * self.idy2
            )
            update = (1.0 - omega) * p[1:-1, 1:-1] + omega * (neighbours - b) / self.diag
            p[1:-1, 1:-1][colour] = update[colour]

        return self.residual(grid, rhs)

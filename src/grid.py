# grid.py
from iterator import BoundaryIterator, BOTTOM, RIGHT, TOP, LEFT
from parameter import readConfig


class Geometry:
    """
    Uniform 2D mesh of a rectangular cavity.

    It stores the number of interior cells (Nx, Ny). Every field on this mesh
    carries one ghost layer on each side, so arrays are (Nx+2, Ny+2).
    The cavity lid moves with ``velocity`` along the top wall.
    """
    def __init__(
            self,
            Nx: int = 128,
            Ny: int = 128,
            Lx: float = 1.0,
            Ly: float = 1.0,
            velocity=(1.0, 0.0),
            pressure: float = 0.0,
            ) -> None:
        if Nx < 1 or Ny < 1:
            raise ValueError(f"mesh needs at least one interior cell, got {Nx}x{Ny}")
        if Lx <= 0.0 or Ly <= 0.0:
            raise ValueError(f"domain lengths must be positive, got {Lx}x{Ly}")

        self.Nx = int(Nx)
        self.Ny = int(Ny)
        self.Lx = float(Lx)
        self.Ly = float(Ly)

        self.Deltax = self.Lx / self.Nx
        self.Deltay = self.Ly / self.Ny

        self.velocity = (float(velocity[0]), float(velocity[1]))
        self.pressure = float(pressure)

    @classmethod
    def load(cls, path) -> "Geometry":
        """Read ``size``, ``length``, ``velocity`` and ``pressure`` from a file."""
        config = readConfig(path)
        kwargs = {}

        for key, values in config.items():
            if key == "size":
                kwargs["Nx"], kwargs["Ny"] = int(values[0]), int(values[-1])
            elif key == "length":
                kwargs["Lx"], kwargs["Ly"] = float(values[0]), float(values[-1])
            elif key == "velocity":
                kwargs["velocity"] = (float(values[0]), float(values[-1]))
            elif key == "pressure":
                kwargs["pressure"] = float(values[0])
            else:
                raise KeyError(f"unknown geometry entry '{key}' in {path}")

        return cls(**kwargs)

    @property
    def size(self):
        return (self.Nx, self.Ny)

    @property
    def length(self):
        return (self.Lx, self.Ly)

    @property
    def mesh(self):
        return (self.Deltax, self.Deltay)

    @property
    def extent(self):
        """Array shape including the ghost layer."""
        return (self.Nx + 2, self.Ny + 2)

    @property
    def cellCount(self) -> int:
        return (self.Nx + 2) * (self.Ny + 2)

    # ------------------------------------------------------------------
    # Boundary conditions of the driven cavity
    # ------------------------------------------------------------------
    def updateU(self, u) -> None:
        """No-slip walls, moving lid on top."""
        it = BoundaryIterator(self, LEFT)
        for cell in it:
            u[cell] = 0.0

        it.setBoundary(RIGHT)
        for cell in it:
            # u lives on the east face, the wall sits at i = Nx
            u[cell] = 0.0
            u[cell.left()] = 0.0

        it.setBoundary(BOTTOM)
        for cell in it:
            u[cell] = -u[cell.top()]

        it.setBoundary(TOP)
        for cell in it:
            u[cell] = 2.0 * self.velocity[0] - u[cell.down()]

    def updateV(self, v) -> None:
        it = BoundaryIterator(self, BOTTOM)
        for cell in it:
            v[cell] = 0.0

        it.setBoundary(TOP)
        for cell in it:
            # v lives on the north face, the lid sits at j = Ny
            v[cell] = self.velocity[1]
            v[cell.down()] = self.velocity[1]

        it.setBoundary(LEFT)
        for cell in it:
            v[cell] = -v[cell.right()]

        it.setBoundary(RIGHT)
        for cell in it:
            v[cell] = -v[cell.left()]

    def updateP(self, p) -> None:
        """Homogeneous Neumann condition on every wall."""
        it = BoundaryIterator(self, BOTTOM)
        for cell in it:
            p[cell] = p[cell.top()]

        it.setBoundary(TOP)
        for cell in it:
            p[cell] = p[cell.down()]

        it.setBoundary(LEFT)
        for cell in it:
            p[cell] = p[cell.right()]

        it.setBoundary(RIGHT)
        for cell in it:
            p[cell] = p[cell.left()]

    def __repr__(self) -> str:
        return (
            f"Geometry(size={self.size}, length={self.length}, "
            f"mesh=({self.Deltax:g}, {self.Deltay:g}))"
        )

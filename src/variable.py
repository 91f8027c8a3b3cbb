# variable.py
import numpy as np

from iterator import Iterator


class Field(object):
    """
    Scalar quantity on the mesh, one ghost layer on each side.

    The values live in ``self.field`` with shape (Nx+2, Ny+2), indexed
    [i, j]. ``offset`` shifts the physical location of the stored values:
    cell (i, j) sits at (i*Deltax - offset[0], j*Deltay - offset[1]).
    A pressure field therefore uses (Deltax/2, Deltay/2), the u velocity
    (0, Deltay/2) and the v velocity (Deltax/2, 0).
    """
    def __init__(self, geom, offset=None, value: float = 0.0, name: str = "") -> None:
        self.geom = geom
        self.name = name

        if offset is None:
            offset = (0.0, 0.0)
        self.offset = (float(offset[0]), float(offset[1]))

        self.field = np.full(geom.extent, float(value), dtype=float)

    def initialize(self, value: float) -> None:
        self.field.fill(value)

    def cell(self, it) -> float:
        return self.field[it.pos()]

    def __getitem__(self, index):
        if isinstance(index, Iterator):
            return self.field[index.pos()]
        return self.field[index]

    def __setitem__(self, index, value):
        if isinstance(index, Iterator):
            index = index.pos()
        self.field[index] = value
        return None

    @property
    def interior(self) -> np.ndarray:
        return self.field[1:-1, 1:-1]

    def copy(self) -> "Field":
        other = Field(self.geom, self.offset, name=self.name)
        other.field[:] = self.field
        return other

    # ------------------------------------------------------------------
    # Difference quotients
    # ------------------------------------------------------------------
    def dx_l(self, it) -> float:
        return (self[it] - self[it.left()]) / self.geom.Deltax

    def dx_r(self, it) -> float:
        return (self[it.right()] - self[it]) / self.geom.Deltax

    def dy_l(self, it) -> float:
        return (self[it] - self[it.down()]) / self.geom.Deltay

    def dy_r(self, it) -> float:
        return (self[it.top()] - self[it]) / self.geom.Deltay

    def dxx(self, it) -> float:
        h = self.geom.Deltax
        return (self[it.right()] - 2.0 * self[it] + self[it.left()]) / (h * h)

    def dyy(self, it) -> float:
        h = self.geom.Deltay
        return (self[it.top()] - 2.0 * self[it] + self[it.down()]) / (h * h)

    # ------------------------------------------------------------------
    # Donor-cell discretisation of the convective terms
    # ------------------------------------------------------------------
    def dc_udu_x(self, it, alpha: float) -> float:
        """d(u^2)/dx at a u node; this field is u."""
        u_w = self[it.left()]
        u_p = self[it]
        u_e = self[it.right()]

        central = ((u_p + u_e) / 2.0) ** 2 - ((u_w + u_p) / 2.0) ** 2
        upwind = abs(u_p + u_e) * (u_p - u_e) - abs(u_w + u_p) * (u_w - u_p)

        return central / self.geom.Deltax + alpha * upwind / (4.0 * self.geom.Deltax)

    def dc_vdv_y(self, it, alpha: float) -> float:
        """d(v^2)/dy at a v node; this field is v."""
        v_s = self[it.down()]
        v_p = self[it]
        v_n = self[it.top()]

        central = ((v_p + v_n) / 2.0) ** 2 - ((v_s + v_p) / 2.0) ** 2
        upwind = abs(v_p + v_n) * (v_p - v_n) - abs(v_s + v_p) * (v_s - v_p)

        return central / self.geom.Deltay + alpha * upwind / (4.0 * self.geom.Deltay)

    def dc_udv_x(self, it, alpha: float, u: "Field") -> float:
        """d(uv)/dx at a v node; this field is v, ``u`` the other velocity."""
        west = it.left()

        # u interpolated to the east and west faces of the v cell
        u_e = (u[it] + u[it.top()]) / 2.0
        u_w = (u[west] + u[west.top()]) / 2.0

        v_w = self[west]
        v_p = self[it]
        v_e = self[it.right()]

        central = u_e * (v_p + v_e) / 2.0 - u_w * (v_w + v_p) / 2.0
        upwind = abs(u_e) * (v_p - v_e) / 2.0 - abs(u_w) * (v_w - v_p) / 2.0

        return (central + alpha * upwind) / self.geom.Deltax

    def dc_vdu_y(self, it, alpha: float, v: "Field") -> float:
        """d(uv)/dy at a u node; this field is u, ``v`` the other velocity."""
        south = it.down()

        # v interpolated to the north and south faces of the u cell
        v_n = (v[it] + v[it.right()]) / 2.0
        v_s = (v[south] + v[south.right()]) / 2.0

        u_s = self[south]
        u_p = self[it]
        u_n = self[it.top()]

        central = v_n * (u_p + u_n) / 2.0 - v_s * (u_s + u_p) / 2.0
        upwind = abs(v_n) * (u_p - u_n) / 2.0 - abs(v_s) * (u_s - u_p) / 2.0

        return (central + alpha * upwind) / self.geom.Deltay

    # ------------------------------------------------------------------
    # Interpolation and reductions
    # ------------------------------------------------------------------
    def interpolate(self, pos) -> float:
        """Bilinear interpolation at the physical coordinate ``pos``."""
        Nx = self.geom.Nx
        Ny = self.geom.Ny

        x = (pos[0] + self.offset[0]) / self.geom.Deltax
        y = (pos[1] + self.offset[1]) / self.geom.Deltay

        i = min(max(int(np.floor(x)), 0), Nx)
        j = min(max(int(np.floor(y)), 0), Ny)

        tx = min(max(x - i, 0.0), 1.0)
        ty = min(max(y - j, 0.0), 1.0)

        f = self.field
        return (
            (1.0 - tx) * (1.0 - ty) * f[i, j]
            + tx * (1.0 - ty) * f[i + 1, j]
            + (1.0 - tx) * ty * f[i, j + 1]
            + tx * ty * f[i + 1, j + 1]
        )

    def max(self) -> float:
        return float(self.interior.max())

    def min(self) -> float:
        return float(self.interior.min())

    def absMax(self) -> float:
        return float(np.abs(self.interior).max())

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        fmt = "{:10.4f}"
        nx, ny = self.field.shape

        lines = [f"Field '{self.name}' (shape={self.field.shape}):"]

        # top row first, so the dump reads like the domain
        for j in range(ny - 1, -1, -1):
            line = "".join(fmt.format(self.field[i, j]) for i in range(nx))
            lines.append(line)

        return "\n".join(lines)

    def print(self) -> None:
        print(self)

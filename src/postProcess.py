# postProcess.py
import matplotlib.pyplot as plt
import numpy as np

# ---------------------------------------------------------------------------
# Post-processing / plotting
# ---------------------------------------------------------------------------

class PostProcessor:
    """
    Handles all visualization for a lid-driven cavity simulation.

    It takes a LidDrivenCavity instance and provides contour plots for
    u, v, p, and |U|. Every plot method returns its figure.
    """

    def __init__(self, cavity) -> None:
        self.cavity = cavity

    def _build_grid_for_field(self, field):
        """Physical (X, Y) coordinates of the interior values of `field`."""
        geom = field.geom
        x = np.arange(1, geom.Nx + 1) * geom.Deltax - field.offset[0]
        y = np.arange(1, geom.Ny + 1) * geom.Deltay - field.offset[1]
        X, Y = np.meshgrid(x, y)
        return X, Y

    def _contour(self, field, label: str, title: str, show: bool):
        X, Y = self._build_grid_for_field(field)
        fig = plt.figure()
        # field arrays are indexed [i, j], meshgrid rows run along y
        cs = plt.contourf(X, Y, field.interior.T, levels=50, cmap="plasma")
        plt.colorbar(cs, label=label)
        plt.title(title)
        plt.xlabel("x")
        plt.ylabel("y")
        plt.axis("equal")
        plt.tight_layout()
        if show:
            plt.show()
        return fig

    def contour_u(self, show: bool = True):
        return self._contour(self.cavity.u, "u", "u-velocity", show)

    def contour_v(self, show: bool = True):
        return self._contour(self.cavity.v, "v", "v-velocity", show)

    def contour_p(self, show: bool = True):
        return self._contour(self.cavity.p, "p", "Pressure", show)

    def contour_speed(self, show: bool = True):
        """Contour of |U| on the cell centres from staggered u and v."""
        return self._contour(self.cavity.velocity(), "|U|", "Velocity magnitude", show)

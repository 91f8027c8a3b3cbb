#!/usr/bin/env python3
# projection.py
import argparse
import logging
import math

import numpy as np

from grid import Geometry
from iterator import InteriorIterator
from linearSolver import SOR, RedBlackSOR
from parameter import Parameter
from variable import Field

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Projection method for the lid-driven cavity
# ---------------------------------------------------------------------------

class LidDrivenCavity:
    """
    Explicit projection (Chorin) scheme on a staggered grid.

    Responsibilities:
    - Owns the velocity and pressure fields and the scratch fields F, G, rhs.
    - Picks the time step from the stability limits.
    - Evaluates the momentum predictor with donor-cell convection.
    - Drives the pressure relaxation until the residual drops below eps.
    - Projects the velocities onto the divergence-free space.
    """

    def __init__(self, geom: Geometry, param: Parameter, solver=None) -> None:
        self.geom = geom
        self.param = param

        hx = geom.Deltax
        hy = geom.Deltay

        # Staggered layout: u on east faces, v on north faces, p in the centre
        self.u = Field(geom, (0.0, 0.5 * hy), name="u")
        self.v = Field(geom, (0.5 * hx, 0.0), name="v")
        self.p = Field(geom, (0.5 * hx, 0.5 * hy), geom.pressure, name="p")

        self.F = Field(geom, (0.0, 0.5 * hy), name="F")
        self.G = Field(geom, (0.5 * hx, 0.0), name="G")
        self.rhs = Field(geom, (0.5 * hx, 0.5 * hy), name="rhs")

        if solver is None:
            solver = SOR(geom, param.omega)
        self.solver = solver

        self.time = 0.0
        self.steps = 0

        # Diffusive stability limit, fixed for the run
        self.dtlimit = 0.5 * param.re / (1.0 / (hx * hx) + 1.0 / (hy * hy))

        geom.updateU(self.u)
        geom.updateV(self.v)
        geom.updateP(self.p)

    # ------------------------------------------------------------------
    # Single steps of the scheme
    # ------------------------------------------------------------------
    def computeTimestep(self) -> float:
        param = self.param
        if param.tau <= 0.0:
            return param.dt

        limits = [self.dtlimit]
        umax = self.u.absMax()
        vmax = self.v.absMax()
        if umax > 0.0:
            limits.append(self.geom.Deltax / umax)
        if vmax > 0.0:
            limits.append(self.geom.Deltay / vmax)

        return min(param.dt, param.tau * min(limits))

    def momentumEquations(self, dt: float) -> None:
        """
        Predictor F, G over the interior, written on array slices.

        Cell for cell this is the Field operators
            F = u + dt*((u.dxx + u.dyy)/re - u.dc_udu_x - u.dc_vdu_y)
            G = v + dt*((v.dxx + v.dyy)/re - v.dc_udv_x - v.dc_vdv_y)
        """
        u = self.u.field
        v = self.v.field
        hx = self.geom.Deltax
        hy = self.geom.Deltay
        re = self.param.re
        alpha = self.param.alpha
        Nx = self.geom.Nx
        Ny = self.geom.Ny

        # u at the cell and its west/east/south/north neighbours
        uP = u[1:-1, 1:-1]
        uW = u[:-2, 1:-1]
        uE = u[2:, 1:-1]
        uS = u[1:-1, :-2]
        uN = u[1:-1, 2:]

        vP = v[1:-1, 1:-1]
        vW = v[:-2, 1:-1]
        vE = v[2:, 1:-1]
        vS = v[1:-1, :-2]
        vN = v[1:-1, 2:]

        # d(u^2)/dx and d(uv)/dy at the u nodes
        duu = (
            (((uP + uE) / 2.0) ** 2 - ((uW + uP) / 2.0) ** 2) / hx
            + alpha * (np.abs(uP + uE) * (uP - uE) - np.abs(uW + uP) * (uW - uP)) / (4.0 * hx)
        )
        v_n = (vP + vE) / 2.0
        v_s = (vS + v[2:, :-2]) / 2.0
        duv = (
            v_n * (uP + uN) / 2.0 - v_s * (uS + uP) / 2.0
            + alpha * (np.abs(v_n) * (uP - uN) / 2.0 - np.abs(v_s) * (uS - uP) / 2.0)
        ) / hy

        # d(uv)/dx and d(v^2)/dy at the v nodes
        u_e = (uP + uN) / 2.0
        u_w = (uW + u[:-2, 2:]) / 2.0
        dvu = (
            u_e * (vP + vE) / 2.0 - u_w * (vW + vP) / 2.0
            + alpha * (np.abs(u_e) * (vP - vE) / 2.0 - np.abs(u_w) * (vW - vP) / 2.0)
        ) / hx
        dvv = (
            (((vP + vN) / 2.0) ** 2 - ((vS + vP) / 2.0) ** 2) / hy
            + alpha * (np.abs(vP + vN) * (vP - vN) - np.abs(vS + vP) * (vS - vP)) / (4.0 * hy)
        )

        lap_u = (uE - 2.0 * uP + uW) / (hx * hx) + (uN - 2.0 * uP + uS) / (hy * hy)
        lap_v = (vE - 2.0 * vP + vW) / (hx * hx) + (vN - 2.0 * vP + vS) / (hy * hy)

        self.F.interior[:] = uP + dt * (lap_u / re - duu - duv)
        self.G.interior[:] = vP + dt * (lap_v / re - dvu - dvv)

        # On the walls the predictor equals the prescribed velocity
        self.F.field[0, 1:Ny + 1] = u[0, 1:Ny + 1]
        self.F.field[Nx, 1:Ny + 1] = u[Nx, 1:Ny + 1]
        self.G.field[1:Nx + 1, 0] = v[1:Nx + 1, 0]
        self.G.field[1:Nx + 1, Ny] = v[1:Nx + 1, Ny]

    def rhsEquation(self, dt: float) -> None:
        F = self.F.field
        G = self.G.field
        self.rhs.interior[:] = (
            (F[1:-1, 1:-1] - F[:-2, 1:-1]) / self.geom.Deltax
            + (G[1:-1, 1:-1] - G[1:-1, :-2]) / self.geom.Deltay
        ) / dt

    def solvePressure(self):
        """Relax the pressure equation. Returns (iterations, residual)."""
        param = self.param
        res = math.inf
        iteration = 0

        while iteration < param.iterMax:
            self.geom.updateP(self.p)
            res = self.solver.cycle(self.p, self.rhs)
            iteration += 1
            if res < param.eps:
                break
        else:
            log.warning(
                "pressure solver did not converge in %d iterations (res=%.3e, eps=%.3e)",
                param.iterMax, res, param.eps,
            )

        self.geom.updateP(self.p)
        return iteration, res

    def newVelocities(self, dt: float) -> None:
        p = self.p.field
        self.u.interior[:] = self.F.interior - dt * (p[2:, 1:-1] - p[1:-1, 1:-1]) / self.geom.Deltax
        self.v.interior[:] = self.G.interior - dt * (p[1:-1, 2:] - p[1:-1, 1:-1]) / self.geom.Deltay

    def timeStep(self, printInfo: bool = False) -> float:
        dt = self.computeTimestep()

        self.geom.updateU(self.u)
        self.geom.updateV(self.v)

        self.momentumEquations(dt)
        self.rhsEquation(dt)
        iterations, res = self.solvePressure()
        self.newVelocities(dt)

        self.geom.updateU(self.u)
        self.geom.updateV(self.v)

        self.time += dt
        self.steps += 1

        message = "step %d: t=%.4f dt=%.4e, %d pressure iterations, res=%.3e"
        if printInfo:
            log.info(message, self.steps, self.time, dt, iterations, res)
        else:
            log.debug(message, self.steps, self.time, dt, iterations, res)
        return dt

    def run(self, tend: float = None) -> int:
        """Advance until ``tend`` (defaults to the parameter). Returns the step count."""
        if tend is None:
            tend = self.param.tend

        start = self.steps
        while self.time < tend:
            self.timeStep(printInfo=(self.steps + 1) % 10 == 0)
        log.info("reached t=%.4f after %d steps", self.time, self.steps - start)
        return self.steps - start

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------
    def velocity(self) -> Field:
        """|U| at the cell centres."""
        hx = self.geom.Deltax
        hy = self.geom.Deltay
        speed = Field(self.geom, (0.5 * hx, 0.5 * hy), name="|U|")

        for cell in InteriorIterator(self.geom):
            i, j = cell.pos()
            centre = ((i - 0.5) * hx, (j - 0.5) * hy)
            uc = self.u.interpolate(centre)
            vc = self.v.interpolate(centre)
            speed[cell] = math.sqrt(uc * uc + vc * vc)

        return speed

    def divergence(self) -> float:
        """Largest discrete divergence of the velocity field over the interior."""
        u = self.u.field
        v = self.v.field
        div = (
            (u[1:-1, 1:-1] - u[:-2, 1:-1]) / self.geom.Deltax
            + (v[1:-1, 1:-1] - v[1:-1, :-2]) / self.geom.Deltay
        )
        return float(np.abs(div).max())


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Lid-driven cavity, projection method.")
    parser.add_argument("--parameter", help="parameter file (re, omg, alpha, dt, tend, iter, eps, tau)")
    parser.add_argument("--geometry", help="geometry file (size, length, velocity, pressure)")
    parser.add_argument("--tend", type=float, help="override the end time")
    parser.add_argument("--red-black", action="store_true", help="use checkerboard ordered SOR")
    parser.add_argument("--plot", action="store_true", help="show contour plots at the end")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    param = Parameter.load(args.parameter) if args.parameter else Parameter()
    geom = Geometry.load(args.geometry) if args.geometry else Geometry()
    log.info("%r, %r", geom, param)

    solver = RedBlackSOR(geom, param.omega) if args.red_black else SOR(geom, param.omega)
    cavity = LidDrivenCavity(geom, param, solver)
    cavity.run(args.tend)

    if args.plot:
        from postProcess import PostProcessor

        post = PostProcessor(cavity)
        post.contour_speed()
        post.contour_p()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

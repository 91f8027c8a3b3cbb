"""Tests for the Field container and its difference operators."""

import numpy as np
import pytest

from grid import Geometry
from iterator import Iterator, InteriorIterator, BoundaryIterator
from variable import Field


def fill_example(grid, values):
    """
    Write a 3x3 block into the bottom-left corner of the array by walking
    with the neighbour steps. ``values`` is given top row first.
    """
    (a, b, c), (d, e, f), (g, h, k) = values
    it = Iterator(grid.geom)
    grid[it] = g
    it = it.right()
    grid[it] = h
    it = it.top()
    grid[it] = e
    it = it.left()
    grid[it] = d
    it = it.top()
    grid[it] = a
    it = it.right()
    grid[it] = b
    it = it.right()
    grid[it] = c
    it = it.down()
    grid[it] = f
    it = it.down()
    grid[it] = k
    return it.left().top()


@pytest.fixture
def example(geom):
    grid = Field(geom, name="example")
    centre = fill_example(grid, [[3, 4, 5], [2, 3, 4], [0, 1, 3]])
    return grid, centre


class TestDifferenceQuotients:
    def test_centre_is_middle_cell(self, example):
        _, centre = example
        assert centre.pos() == (1, 1)

    def test_first_order_centre(self, example, geom):
        grid, it = example
        hx, hy = geom.mesh
        assert np.isclose(grid.dx_l(it), 1.0 / hx)
        assert np.isclose(grid.dx_r(it), 1.0 / hx)
        assert np.isclose(grid.dy_l(it), 2.0 / hy)
        assert np.isclose(grid.dy_r(it), 1.0 / hy)

    def test_second_order_centre(self, example, geom):
        grid, it = example
        hx, hy = geom.mesh
        assert np.isclose(grid.dxx(it), 0.0)
        assert np.isclose(grid.dyy(it), -1.0 / (hy * hy))

    def test_corner_is_one_sided(self, example, geom):
        grid, it = example
        hx, hy = geom.mesh
        corner = it.down().left()
        assert corner.pos() == (0, 0)
        assert np.isclose(grid.dx_l(corner), 0.0)
        assert np.isclose(grid.dx_r(corner), 1.0 / hx)
        assert np.isclose(grid.dy_l(corner), 0.0)
        assert np.isclose(grid.dy_r(corner), 2.0 / hy)
        assert np.isclose(grid.dxx(corner), 1.0 / (hx * hx))
        assert np.isclose(grid.dyy(corner), 2.0 / (hy * hy))

    @pytest.mark.parametrize("axis", ["x", "y"])
    def test_second_derivative_is_second_order(self, axis):
        errors = []
        for n in (8, 16, 32):
            geom = Geometry(Nx=n, Ny=n)
            grid = Field(geom)
            x = np.arange(n + 2) * geom.Deltax
            y = np.arange(n + 2) * geom.Deltay
            X, Y = np.meshgrid(x, y, indexing="ij")
            grid.field[:] = np.sin(2.0 * X) * np.cos(Y) if axis == "x" else np.cos(X) * np.sin(2.0 * Y)

            error = 0.0
            for cell in InteriorIterator(geom):
                i, j = cell.pos()
                if axis == "x":
                    numeric = grid.dxx(cell)
                else:
                    numeric = grid.dyy(cell)
                exact = -4.0 * grid.field[i, j]
                error = max(error, abs(numeric - exact))
            errors.append(error)

        orders = np.log2(np.array(errors[:-1]) / np.array(errors[1:]))
        assert np.all(orders > 1.8)
        assert np.all(orders < 2.2)


class TestDonorCell:
    @pytest.fixture
    def pair(self, geom):
        u = Field(geom, name="u")
        v = Field(geom, name="v")
        it = fill_example(u, [[3, 4, 5], [2, 3, 4], [0, 1, 3]])
        fill_example(v, [[3, 4, 5], [2, 3, 4], [1, 2, 3]])
        return u, v, it

    def test_udu_x(self, pair, geom):
        u, _, it = pair
        assert np.isclose(u.dc_udu_x(it, 0.5), 23.0 / (4.0 * geom.Deltax))

    def test_vdv_y(self, pair, geom):
        _, v, it = pair
        assert np.isclose(v.dc_vdv_y(it, 0.5), 23.0 / (4.0 * geom.Deltay))

    def test_vdu_y(self, pair, geom):
        u, v, it = pair
        assert np.isclose(u.dc_vdu_y(it, 0.5, v), 30.5 / (4.0 * geom.Deltay))

    def test_udv_x(self, pair, geom):
        u, v, it = pair
        assert np.isclose(v.dc_udv_x(it, 0.5, u), 23.0 / (4.0 * geom.Deltax))

    def test_alpha_zero_is_central(self, pair, geom):
        u, _, it = pair
        # ((3+4)/2)^2 - ((2+3)/2)^2 = 6
        assert np.isclose(u.dc_udu_x(it, 0.0), 6.0 / geom.Deltax)

    def test_uniform_flow_has_no_convection(self, geom):
        u = Field(geom, value=2.0)
        v = Field(geom, value=-1.0)
        for cell in InteriorIterator(geom):
            for alpha in (0.0, 0.5, 1.0):
                assert u.dc_udu_x(cell, alpha) == 0.0
                assert v.dc_vdv_y(cell, alpha) == 0.0
                assert u.dc_vdu_y(cell, alpha, v) == 0.0
                assert v.dc_udv_x(cell, alpha, u) == 0.0


class TestInterpolate:
    def test_example_midpoint(self, example, geom):
        grid, _ = example
        point = (0.5 / (geom.extent[0] - 2) * geom.Lx, 0.5 / (geom.extent[1] - 2) * geom.Ly)
        assert np.isclose(grid.interpolate(point), 1.5)

    def test_exact_at_grid_points(self, geom):
        grid = Field(geom)
        grid.field[:] = np.arange(grid.field.size, dtype=float).reshape(grid.field.shape)
        for cell in Iterator(geom):
            i, j = cell.pos()
            assert grid.interpolate((i * geom.Deltax, j * geom.Deltay)) == grid[cell]

    def test_offset_moves_sample_points(self, geom):
        hx, hy = geom.mesh
        grid = Field(geom, (0.5 * hx, 0.5 * hy))
        grid[2, 3] = 7.0
        # cell (2, 3) of a cell centred field sits at (1.5 hx, 2.5 hy)
        assert grid.interpolate((1.5 * hx, 2.5 * hy)) == 7.0
        assert np.isclose(grid.interpolate((2.0 * hx, 2.5 * hy)), 3.5)

    def test_reproduces_linear_functions(self, geom):
        grid = Field(geom, (0.0, 0.5 * geom.Deltay))
        for cell in Iterator(geom):
            i, j = cell.pos()
            x = i * geom.Deltax
            y = j * geom.Deltay - 0.5 * geom.Deltay
            grid[cell] = 2.0 * x - 3.0 * y + 1.0
        for x, y in ((0.1, 0.2), (0.37, 0.05), (0.9, 0.41)):
            assert np.isclose(grid.interpolate((x, y)), 2.0 * x - 3.0 * y + 1.0)

    def test_clamps_to_the_array(self, geom):
        grid = Field(geom, value=4.0)
        assert grid.interpolate((geom.Lx, geom.Ly)) == 4.0
        assert grid.interpolate((-1.0, 10.0)) == 4.0


class TestStorage:
    def test_shape_includes_ghost_layer(self, geom):
        grid = Field(geom)
        assert grid.field.shape == (geom.Nx + 2, geom.Ny + 2)
        assert grid.interior.shape == (geom.Nx, geom.Ny)

    def test_initialize_sets_every_entry(self, geom):
        grid = Field(geom)
        grid.initialize(2.5)
        assert np.all(grid.field == 2.5)

    def test_cell_and_item_access(self, geom):
        grid = Field(geom)
        it = Iterator(geom, 8)
        grid[it] = 3.0
        assert grid.cell(it) == 3.0
        assert grid[it.pos()] == 3.0

    def test_reductions_ignore_ghost_layer(self, geom):
        grid = Field(geom, value=1.0)
        for cell in BoundaryIterator(geom):
            grid[cell] = 100.0
        grid[0, 0] = -100.0
        grid[2, 2] = -3.0
        grid[3, 1] = 2.0
        assert grid.max() == 2.0
        assert grid.min() == -3.0
        assert grid.absMax() == 3.0

    def test_copy_is_independent(self, geom):
        grid = Field(geom, (0.1, 0.2), 1.0, name="p")
        other = grid.copy()
        other[1, 1] = 5.0
        assert grid[1, 1] == 1.0
        assert other.offset == grid.offset
        assert other.name == "p"

    def test_str_prints_top_row_first(self, example):
        grid, _ = example
        lines = str(grid).splitlines()
        assert lines[0].startswith("Field 'example'")
        assert len(lines) == grid.field.shape[1] + 1
        assert lines[-1].split()[:3] == ["0.0000", "1.0000", "3.0000"]

    def test_print(self, example, capsys):
        grid, _ = example
        grid.print()
        assert "Field 'example'" in capsys.readouterr().out

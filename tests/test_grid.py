"""Tests for the Grid module."""

import pytest

from powersnake.grid import Grid
from powersnake.snake import Direction


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.size == 20
        assert grid.cell_count == 400

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 4"):
            Grid(size=3)


class TestGridIndexing:
    def test_row_col_roundtrip(self):
        grid = Grid()
        assert grid.to_row_col(42) == (2, 2)
        assert grid.to_index(2, 2) == 42

    def test_in_bounds(self):
        grid = Grid(size=5)
        assert grid.in_bounds(0)
        assert grid.in_bounds(24)
        assert not grid.in_bounds(-1)
        assert not grid.in_bounds(25)

    def test_wrap(self):
        grid = Grid(size=5)
        assert grid.wrap(-1, 0) == (4, 0)
        assert grid.wrap(0, -1) == (0, 4)
        assert grid.wrap(5, 5) == (0, 0)


class TestGridMovement:
    def test_right_edge_wraps_to_row_start(self):
        grid = Grid()
        assert grid.neighbor(19, Direction.RIGHT) == 0

    def test_left_edge_wraps_to_row_end(self):
        grid = Grid()
        assert grid.neighbor(0, Direction.LEFT) == 19

    def test_vertical_wrap(self):
        grid = Grid()
        assert grid.neighbor(0, Direction.UP) == 380
        assert grid.neighbor(399, Direction.DOWN) == 19

    def test_interior_moves(self):
        grid = Grid()
        assert grid.neighbor(42, Direction.RIGHT) == 43
        assert grid.neighbor(42, Direction.UP) == 22
        assert grid.neighbor(42, Direction.DOWN) == 62

    def test_exits_boundary(self):
        grid = Grid()
        assert grid.exits_boundary(19, Direction.RIGHT)
        assert grid.exits_boundary(0, Direction.LEFT)
        assert grid.exits_boundary(5, Direction.UP)
        assert grid.exits_boundary(385, Direction.DOWN)
        assert not grid.exits_boundary(18, Direction.RIGHT)
        assert not grid.exits_boundary(19, Direction.DOWN)

    def test_every_neighbor_stays_on_grid(self):
        grid = Grid(size=6)
        for cell in range(grid.cell_count):
            for direction in Direction:
                assert grid.in_bounds(grid.neighbor(cell, direction))


class TestGridRing:
    def test_ring_cells(self):
        grid = Grid()
        for cell in (0, 19, 20, 39, 380, 399):
            assert grid.is_wall_cell(cell)
        assert not grid.is_wall_cell(21)
        assert not grid.is_wall_cell(42)

    def test_free_cells(self):
        grid = Grid(size=4)
        assert grid.free_cells().size == 16
        assert grid.free_cells([0, 5, 5]).size == 14

    def test_free_cells_without_ring(self):
        grid = Grid()
        free = grid.free_cells(exclude_ring=True)
        assert free.size == 18 * 18
        assert not any(grid.is_wall_cell(int(c)) for c in free)


class TestGridSerialization:
    def test_to_dict(self):
        d = Grid(size=5).to_dict()
        assert d == {"size": 5, "cell_count": 25}

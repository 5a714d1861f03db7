"""Tests for the CellSampler module."""

import numpy as np

from powersnake.food import CellSampler
from powersnake.grid import Grid


class TestCellSampling:
    def test_sample_avoids_occupied(self):
        grid = Grid(size=5)
        sampler = CellSampler(grid, rng=np.random.default_rng(3))
        occupied = set(range(20))
        for _ in range(50):
            assert sampler.sample(occupied) in {20, 21, 22, 23, 24}

    def test_sample_avoids_ring(self):
        grid = Grid()
        sampler = CellSampler(grid, rng=np.random.default_rng(0))
        for _ in range(100):
            assert not grid.is_wall_cell(sampler.sample(exclude_ring=True))

    def test_full_board_returns_none(self):
        grid = Grid(size=4)
        sampler = CellSampler(grid)
        assert sampler.sample(range(16)) is None

    def test_last_free_cell(self):
        grid = Grid(size=4)
        sampler = CellSampler(grid)
        assert sampler.sample(set(range(16)) - {9}) == 9

    def test_deterministic(self):
        """Same seed produces the same cells."""
        assert self._draw(42) == self._draw(42)

    def test_different_seeds(self):
        assert self._draw(1) != self._draw(2)

    @staticmethod
    def _draw(seed: int) -> list[int]:
        sampler = CellSampler(Grid(), rng=np.random.default_rng(seed))
        return [sampler.sample([42, 41, 40]) for _ in range(5)]


class TestDelays:
    def test_delay_in_window(self):
        sampler = CellSampler(Grid(), rng=np.random.default_rng(5))
        for _ in range(100):
            delay = sampler.delay_ms((10_000, 30_000))
            assert 10_000 <= delay < 30_000

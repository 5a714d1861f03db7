"""Random placement of food, power-ups and stars on free cells."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from powersnake.grid import Grid

logger = logging.getLogger(__name__)


class CellSampler:
    """Draws cells uniformly from the free cells of a grid.

    Uses a seeded NumPy RNG for reproducible placement. Sampling is done
    over the explicit free-cell set, so it always terminates.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def sample(
        self, occupied: Iterable[int] = (), exclude_ring: bool = False,
    ) -> int | None:
        """Return a random free cell, or ``None`` when the board is full."""
        free = self.grid.free_cells(occupied, exclude_ring=exclude_ring)
        if free.size == 0:
            logger.warning("No free cells available for placement.")
            return None
        return int(free[self.rng.integers(free.size)])

    def delay_ms(self, window: tuple[int, int]) -> float:
        """Return a uniform delay in ``[low, high)`` milliseconds."""
        low, high = window
        return float(self.rng.uniform(low, high))

"""Square board addressed by flat cell indices."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from powersnake.snake import Direction


class Grid:
    """Square grid of side ``size`` whose cells are flat indices.

    Cell ``i`` sits at row ``i // size`` and column ``i % size``. Moves wrap
    around the edges; callers decide whether leaving the board is lethal.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        self.size = size
        self.cell_count = size * size
        self._ring = self._build_ring_mask(size)

    @staticmethod
    def _build_ring_mask(size: int) -> np.ndarray:
        mask = np.zeros((size, size), dtype=bool)
        mask[0, :] = True
        mask[-1, :] = True
        mask[:, 0] = True
        mask[:, -1] = True
        return mask.ravel()

    def in_bounds(self, index: int) -> bool:
        """Check whether a flat index lies on the grid."""
        return 0 <= index < self.cell_count

    def to_row_col(self, index: int) -> tuple[int, int]:
        """Return ``(row, col)`` for a flat index."""
        return divmod(index, self.size)

    def to_index(self, row: int, col: int) -> int:
        """Return the flat index for ``(row, col)``."""
        return row * self.size + col

    def wrap(self, row: int, col: int) -> tuple[int, int]:
        """Wrap coordinates around the grid edges."""
        return row % self.size, col % self.size

    def exits_boundary(self, index: int, direction: Direction) -> bool:
        """Return True if moving ``direction`` from ``index`` leaves the board."""
        row, col = self.to_row_col(index)
        dr, dc = direction.value
        return not (0 <= row + dr < self.size and 0 <= col + dc < self.size)

    def neighbor(self, index: int, direction: Direction) -> int:
        """Return the adjacent cell, wrapping around the edges."""
        row, col = self.to_row_col(index)
        dr, dc = direction.value
        return self.to_index(*self.wrap(row + dr, col + dc))

    def is_wall_cell(self, index: int) -> bool:
        """Check whether a cell belongs to the outer ring."""
        return bool(self._ring[index])

    def free_cells(
        self, occupied: Iterable[int] = (), exclude_ring: bool = False,
    ) -> np.ndarray:
        """Return the indices not in ``occupied`` (and not on the ring)."""
        free = np.ones(self.cell_count, dtype=bool)
        taken = np.fromiter(occupied, dtype=np.int64)
        if taken.size:
            free[taken] = False
        if exclude_ring:
            free &= ~self._ring
        return np.flatnonzero(free)

    def to_dict(self) -> dict:
        """Serialize grid geometry to a dictionary."""
        return {"size": self.size, "cell_count": self.cell_count}

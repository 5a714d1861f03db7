"""Snake body and heading."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable


class Direction(enum.Enum):
    """Cardinal movement directions with (row_delta, col_delta) values."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, value: Direction | str) -> Direction:
        """Accept a Direction or its case-insensitive name."""
        if isinstance(value, Direction):
            return value
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {value!r}") from None


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of flat cell indices.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        cells: Iterable[int],
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.body: deque[int] = deque(cells)
        if not self.body:
            raise ValueError("Snake length must be at least 1.")
        self.direction = direction

    @property
    def head(self) -> int:
        """Return the head cell."""
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def moved_body(self, new_head: int, grow: bool) -> list[int]:
        """Return the body after moving to ``new_head`` without mutating."""
        body = [new_head, *self.body]
        if not grow:
            body.pop()
        return body

    def replace(self, body: Iterable[int]) -> None:
        """Commit a new body computed by :meth:`moved_body`."""
        self.body = deque(body)

    def occupies(self, index: int) -> bool:
        """Check whether the snake occupies a given cell."""
        return index in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": list(self.body),
            "direction": self.direction.name.lower(),
        }

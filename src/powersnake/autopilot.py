"""Greedy heading choice for headless play."""

from __future__ import annotations

from typing import TYPE_CHECKING

from powersnake.snake import Direction

if TYPE_CHECKING:
    from powersnake.engine import GameEngine
    from powersnake.grid import Grid


def cell_distance(grid: Grid, a: int, b: int, wrap: bool) -> int:
    """Manhattan distance between two cells, optionally across edges."""
    ar, ac = grid.to_row_col(a)
    br, bc = grid.to_row_col(b)
    dr, dc = abs(ar - br), abs(ac - bc)
    if wrap:
        dr = min(dr, grid.size - dr)
        dc = min(dc, grid.size - dc)
    return dr + dc


def safe_directions(engine: GameEngine) -> list[Direction]:
    """Headings that do not kill the snake on the next tick."""
    grid = engine.grid
    head = engine.snake.head
    invincible = engine.invincible
    # The tail moves out of the way; food is never under the snake.
    body = set(list(engine.snake.body)[:-1])
    safe: list[Direction] = []
    for direction in Direction:
        if direction == engine.direction.opposite:
            continue
        if invincible:
            safe.append(direction)
            continue
        if engine.wall_enabled and grid.exits_boundary(head, direction):
            continue
        nxt = grid.neighbor(head, direction)
        if nxt in body:
            continue
        safe.append(direction)
    return safe


def choose_direction(engine: GameEngine) -> Direction | None:
    """Pick the safe heading closest to the food.

    Returns ``None`` when the current heading is already best, when a
    turn is still queued, or when every move is fatal.
    """
    if engine.pending_directions:
        return None
    safe = safe_directions(engine)
    if not safe:
        return None
    if engine.food is None:
        choice = engine.direction if engine.direction in safe else safe[0]
    else:
        wrap = not engine.wall_enabled or engine.invincible
        head = engine.snake.head
        choice = min(
            safe,
            key=lambda d: (
                cell_distance(engine.grid, engine.grid.neighbor(head, d), engine.food, wrap),
                d != engine.direction,
            ),
        )
    return None if choice == engine.direction else choice

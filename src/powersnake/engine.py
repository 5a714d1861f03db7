"""Tick-driven game engine composing grid, snake, food, walls and power-ups."""

from __future__ import annotations

import enum
import logging
from collections import deque

import numpy as np

from powersnake.config import EngineConfig
from powersnake.events import EventBus, GameEvents
from powersnake.food import CellSampler
from powersnake.grid import Grid
from powersnake.powerups import PowerUpScheduler
from powersnake.snake import Direction, Snake
from powersnake.timers import Clock, Handle, ManualClock
from powersnake.walls import WallSchedule

logger = logging.getLogger(__name__)


class GameStatus(str, enum.Enum):
    """Lifecycle states of a game."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


class GameEngine:
    """Single-snake, real-time game engine.

    The engine owns the board, the snake, the food and every power-up
    timer. It runs on a single-threaded scheduler (``clock``): an asyncio
    event loop in real time, or a :class:`~powersnake.timers.ManualClock`
    in model time. Each tick is applied atomically inside one callback;
    :meth:`advance_one_tick` may also be called directly.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        clock: Clock | None = None,
        seed: int | None = None,
        events: GameEvents | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.clock = clock if clock is not None else ManualClock()
        self.grid = Grid(self.config.grid_size)
        self.rng = np.random.default_rng(seed)
        self.sampler = CellSampler(self.grid, rng=self.rng)
        self.events = EventBus()
        if events is not None:
            self.events.subscribe(events)

        self.powerups = PowerUpScheduler(
            self.config,
            self.clock,
            self.sampler,
            self.events,
            occupied=self._star_exclusions,
            on_speed_change=self._restart_tick_clock,
        )

        self.status = GameStatus.IDLE
        self._tick_handle: Handle | None = None
        self._reset_board()

    def _reset_board(self) -> None:
        cfg = self.config
        self.snake = Snake(cfg.initial_snake, Direction.parse(cfg.initial_direction))
        self._direction_queue: deque[Direction] = deque([self.snake.direction])
        self.walls = WallSchedule(
            next_toggle_on_score=cfg.wall_first_score,
            interval=cfg.wall_first_interval,
            window=cfg.wall_window,
            growth=cfg.wall_interval_growth,
        )
        self.score = 0
        self.tick = 0
        self.food = self.sampler.sample(self.snake.body)

    # --- commands ---

    def start_game(self) -> None:
        """Reset everything and start playing. Legal from any state."""
        self._stop_tick_clock()
        self.powerups.reset()
        self._reset_board()
        self.status = GameStatus.PLAYING
        self.powerups.start()
        self._start_tick_clock()
        logger.info("Game started; food at %s.", self.food)
        self.events.emit("on_start")

    def toggle_pause(self) -> None:
        """Switch between playing and paused, freezing every timer."""
        if self.status == GameStatus.PLAYING:
            self._stop_tick_clock()
            suspended = self.powerups.pause()
            self.status = GameStatus.PAUSED
            logger.info("Paused (%d timers suspended).", suspended)
            self.events.emit("on_pause_toggle", True)
        elif self.status == GameStatus.PAUSED:
            self.status = GameStatus.PLAYING
            resumed = self.powerups.resume()
            self._start_tick_clock()
            logger.info("Resumed (%d timers rescheduled).", resumed)
            self.events.emit("on_pause_toggle", False)

    def set_direction(self, direction: Direction | str) -> None:
        """Queue a heading change for a later tick.

        Ignored unless playing, and when equal or opposite to the most
        recently queued heading.
        """
        direction = Direction.parse(direction)
        if self.status != GameStatus.PLAYING:
            return
        last = self._direction_queue[-1] if self._direction_queue else self.snake.direction
        if direction in (last, last.opposite):
            return
        self._direction_queue.append(direction)

    def subscribe(self, listener: GameEvents) -> None:
        self.events.subscribe(listener)

    # --- tick ---

    def advance_one_tick(self) -> None:
        """Move the snake one cell and resolve everything it runs into."""
        if self.status != GameStatus.PLAYING:
            return

        heading = self.snake.direction
        if self._direction_queue:
            queued = self._direction_queue.popleft()
            if queued != heading.opposite:
                heading = queued
        self.snake.direction = heading

        head = self.snake.head
        invincible = self.powerups.invincible

        # --- wall check ---
        if (
            self.walls.enabled
            and not invincible
            and self.grid.exits_boundary(head, heading)
        ):
            self._game_over("wall")
            return

        new_head = self.grid.neighbor(head, heading)
        eats = new_head == self.food
        body = self.snake.moved_body(new_head, grow=eats)

        # --- self-collision check on the post-move body ---
        if not invincible and new_head in body[1:]:
            self._game_over("self")
            return

        self.snake.replace(body)
        self.tick += 1

        self.powerups.consume_star(new_head)
        if eats:
            self._on_food_eaten()
        self.powerups.try_consume_speed_powerup(new_head)

    def _on_food_eaten(self) -> None:
        self.score += 1
        self.walls.on_score(self.score)
        self.food = self.sampler.sample(
            self.snake.body, exclude_ring=self.walls.enabled,
        )
        if self.score % self.config.powerup_every == 0:
            occupied = set(self.snake.body)
            if self.food is not None:
                occupied.add(self.food)
            self.powerups.spawn_speed_powerup(
                occupied, exclude_ring=self.walls.enabled,
            )
        self.events.emit("on_eat", self.score)

    def _game_over(self, cause: str) -> None:
        self.status = GameStatus.GAME_OVER
        self._stop_tick_clock()
        self.powerups.freeze()
        logger.info(
            "Snake died (%s) at tick %d with score %d.",
            cause, self.tick, self.score,
        )
        self.events.emit("on_game_over", self.score)

    def _star_exclusions(self) -> set[int]:
        occupied = set(self.snake.body)
        if self.food is not None:
            occupied.add(self.food)
        return occupied

    # --- tick clock ---

    @property
    def tick_interval_ms(self) -> float:
        return self.config.tick_interval_ms(self.score, self.powerups.boosted)

    def _on_clock_tick(self) -> None:
        self._tick_handle = None
        self.advance_one_tick()
        if self.status == GameStatus.PLAYING and self._tick_handle is None:
            self._start_tick_clock()

    def _start_tick_clock(self) -> None:
        self._stop_tick_clock()
        self._tick_handle = self.clock.call_later(
            self.tick_interval_ms / 1000.0, self._on_clock_tick,
        )

    def _stop_tick_clock(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _restart_tick_clock(self) -> None:
        if self.status == GameStatus.PLAYING:
            self._start_tick_clock()

    # --- observers ---

    @property
    def direction(self) -> Direction:
        return self.snake.direction

    @property
    def pending_directions(self) -> tuple[Direction, ...]:
        return tuple(self._direction_queue)

    @property
    def wall_enabled(self) -> bool:
        return self.walls.enabled

    @property
    def speed_powerups(self) -> list[int]:
        return list(self.powerups.speed_powerups)

    @property
    def star(self) -> int | None:
        return self.powerups.star

    @property
    def invincible(self) -> bool:
        return self.powerups.invincible

    @property
    def boosted(self) -> bool:
        return self.powerups.boosted

    @property
    def star_remaining(self) -> int | None:
        return self.powerups.countdown_seconds()

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "status": self.status.value,
            "tick": self.tick,
            "score": self.score,
            "food": self.food,
            "snake": self.snake.to_dict(),
            "walls": self.walls.to_dict(),
            "powerups": self.powerups.to_dict(),
            "tick_interval_ms": self.tick_interval_ms,
        }

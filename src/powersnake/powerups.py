"""Speed power-ups, the invincibility star, and their timers."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from functools import partial
from typing import TYPE_CHECKING

from powersnake.timers import Clock, Countdown, TimerGroup

if TYPE_CHECKING:
    from powersnake.config import EngineConfig
    from powersnake.events import EventBus
    from powersnake.food import CellSampler

logger = logging.getLogger(__name__)


class PowerUpScheduler:
    """Spawner and effect applier for power-ups.

    Every timer it owns lives in :attr:`timers`, so pausing the game is a
    single :meth:`pause` call. ``occupied`` returns the cells (snake and
    food) a new star must avoid. ``on_speed_change`` is called whenever the
    boost starts or ends so the owner can retime its tick clock.
    """

    def __init__(
        self,
        config: EngineConfig,
        clock: Clock,
        sampler: CellSampler,
        events: EventBus,
        occupied: Callable[[], Iterable[int]],
        on_speed_change: Callable[[], None] | None = None,
    ) -> None:
        self.config = config
        self.clock = clock
        self.sampler = sampler
        self.events = events
        self._occupied = occupied
        self._on_speed_change = on_speed_change

        self.timers = TimerGroup()
        self.speed_powerups: dict[int, Countdown] = {}
        self.star: int | None = None
        self.boosted = False
        self.invincible = False

        self._star_timer = Countdown(clock, self._expire_star, "star")
        self._invincible_timer = Countdown(
            clock, self._end_invincibility, "invincibility",
        )
        self._boost_timer = Countdown(clock, self._end_boost, "boost")
        self._spawn_timer = Countdown(clock, self.spawn_star, "star-spawn")
        self._register_fixed_timers()

    def _register_fixed_timers(self) -> None:
        for timer in (
            self._star_timer, self._invincible_timer,
            self._boost_timer, self._spawn_timer,
        ):
            self.timers.add(timer)

    # --- lifecycle ---

    def reset(self) -> None:
        """Cancel every timer and clear all power-ups."""
        self.timers.cancel_all()
        self.speed_powerups.clear()
        self.star = None
        self.boosted = False
        self.invincible = False
        self._register_fixed_timers()

    def start(self) -> None:
        """Schedule the first star of a fresh game."""
        delay = self.sampler.delay_ms(self.config.first_star_delay_ms)
        self._spawn_timer.schedule(delay)
        logger.debug("First star in %.0f ms.", delay)

    def pause(self) -> int:
        return self.timers.suspend_all()

    def resume(self) -> int:
        return self.timers.resume_all()

    def freeze(self) -> None:
        """Stop every timer in place; only :meth:`reset` clears them."""
        self.timers.suspend_all()

    # --- speed power-ups ---

    def spawn_speed_powerup(
        self, occupied: Iterable[int] = (), exclude_ring: bool = False,
    ) -> int | None:
        """Place a speed power-up and start its expiry timer."""
        taken = set(occupied) | set(self.speed_powerups)
        if self.star is not None:
            taken.add(self.star)
        cell = self.sampler.sample(taken, exclude_ring=exclude_ring)
        if cell is None:
            return None
        return self.place_speed_powerup(cell)

    def place_speed_powerup(self, cell: int) -> int:
        """Put a speed power-up on ``cell`` with a fresh expiry timer."""
        old = self.speed_powerups.pop(cell, None)
        if old is not None:
            self.timers.discard(old)
        timer = Countdown(
            self.clock,
            partial(self._expire_speed_powerup, cell),
            f"powerup@{cell}",
        )
        self.timers.add(timer)
        timer.schedule(self.config.powerup_lifetime_ms)
        self.speed_powerups[cell] = timer
        logger.debug("Speed power-up spawned at %d.", cell)
        return cell

    def _expire_speed_powerup(self, cell: int) -> None:
        timer = self.speed_powerups.pop(cell, None)
        if timer is not None:
            self.timers.discard(timer)
            logger.debug("Speed power-up at %d expired.", cell)

    def try_consume_speed_powerup(self, cell: int) -> bool:
        """Consume a power-up at ``cell`` and boost, unless already boosted."""
        if self.boosted or cell not in self.speed_powerups:
            return False
        self.timers.discard(self.speed_powerups.pop(cell))
        self.boosted = True
        self._boost_timer.schedule(self.config.boost_duration_ms)
        logger.debug("Boost on for %d ms.", self.config.boost_duration_ms)
        self.events.emit("on_boost", True)
        self._speed_changed()
        return True

    def _end_boost(self) -> None:
        self.boosted = False
        logger.debug("Boost off.")
        self.events.emit("on_boost", False)
        self._speed_changed()

    def _speed_changed(self) -> None:
        if self._on_speed_change is not None:
            self._on_speed_change()

    # --- invincibility star ---

    def spawn_star(self) -> int | None:
        """Place the star on a free cell and start its disappearance timer."""
        taken = set(self._occupied()) | set(self.speed_powerups)
        cell = self.sampler.sample(taken)
        if cell is None:
            self._schedule_next_star()
            return None
        return self.place_star(cell)

    def place_star(self, cell: int) -> int:
        """Put the star on ``cell`` and start its disappearance timer."""
        self._spawn_timer.cancel()
        self.star = cell
        self._star_timer.schedule(self.config.star_lifetime_ms)
        logger.debug("Star spawned at %d.", cell)
        return cell

    def _expire_star(self) -> None:
        logger.debug("Star at %s faded.", self.star)
        self.star = None
        self._schedule_next_star()

    def consume_star(self, cell: int) -> bool:
        """Eat the star at ``cell``, starting the invincibility window."""
        if self.star is None or cell != self.star:
            return False
        self._star_timer.cancel()
        self.star = None
        self.invincible = True
        self._invincible_timer.schedule(self.config.invincibility_ms)
        logger.info("Invincible for %d ms.", self.config.invincibility_ms)
        self.events.emit("on_invincible", True)
        return True

    def _end_invincibility(self) -> None:
        self.invincible = False
        logger.info("Invincibility over.")
        self.events.emit("on_invincible", False)
        self._schedule_next_star()

    def _schedule_next_star(self) -> None:
        delay = self.sampler.delay_ms(self.config.star_respawn_delay_ms)
        self._spawn_timer.schedule(delay)
        logger.debug("Next star in %.0f ms.", delay)

    # --- observers ---

    def countdown_seconds(self) -> int | None:
        """Whole seconds left on the star, or on invincibility once eaten."""
        if self.star is not None:
            remaining = self._star_timer.time_left_ms()
        elif self.invincible:
            remaining = self._invincible_timer.time_left_ms()
        else:
            return None
        return max(0, math.ceil(remaining / 1000))

    def boost_time_left_ms(self) -> float:
        return max(0.0, self._boost_timer.time_left_ms()) if self.boosted else 0.0

    def to_dict(self) -> dict:
        return {
            "speed": list(self.speed_powerups),
            "star": self.star,
            "boosted": self.boosted,
            "invincible": self.invincible,
            "countdown": self.countdown_seconds(),
        }

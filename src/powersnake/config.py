"""Engine configuration: grid size, tick formula, and power-up timings."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Fixed game constants.

    All durations are in milliseconds. Supports JSON serialization so a
    headless run can be reproduced with the same settings.
    """

    # Board
    grid_size: int = 20
    initial_snake: tuple[int, ...] = (42, 41, 40)
    initial_direction: str = "right"

    # Tick clock: max(min_tick_ms, base_tick_ms - (score // speedup_every) * tick_step_ms)
    base_tick_ms: int = 300
    min_tick_ms: int = 100
    tick_step_ms: int = 50
    speedup_every: int = 5

    # Speed power-ups
    powerup_every: int = 5
    powerup_lifetime_ms: int = 10_000
    boost_duration_ms: int = 3_000

    # Invincibility star
    star_lifetime_ms: int = 10_000
    invincibility_ms: int = 10_000
    first_star_delay_ms: tuple[int, int] = (1_000, 10_000)
    star_respawn_delay_ms: tuple[int, int] = (10_000, 30_000)

    # Wall mode
    wall_first_score: int = 10
    wall_first_interval: int = 15
    wall_window: int = 5
    wall_interval_growth: int = 5

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        if not self.initial_snake:
            raise ValueError("initial_snake must hold at least one cell.")
        cells = self.grid_size * self.grid_size
        if any(not 0 <= c < cells for c in self.initial_snake):
            raise ValueError("initial_snake cells must lie on the grid.")
        if len(set(self.initial_snake)) != len(self.initial_snake):
            raise ValueError("initial_snake cells must not repeat.")
        if self.min_tick_ms <= 0 or self.base_tick_ms < self.min_tick_ms:
            raise ValueError("tick interval bounds are inconsistent.")
        if self.speedup_every < 1 or self.powerup_every < 1:
            raise ValueError("score steps must be at least 1.")
        for name in (
            "powerup_lifetime_ms", "boost_duration_ms",
            "star_lifetime_ms", "invincibility_ms",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive.")
        for name in ("first_star_delay_ms", "star_respawn_delay_ms"):
            low, high = getattr(self, name)
            if not 0 <= low < high:
                raise ValueError(f"{name} must be a [low, high) range.")

    def tick_interval_ms(self, score: int, boosted: bool = False) -> float:
        """Return the tick interval for a score, halved while boosted."""
        interval = max(
            self.min_tick_ms,
            self.base_tick_ms - (score // self.speedup_every) * self.tick_step_ms,
        )
        return interval / 2 if boosted else float(interval)

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> EngineConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, raw: dict) -> EngineConfig:
        """Build a config from a plain dict, restoring tuple fields."""
        data = dict(raw)
        for key in ("initial_snake", "first_star_delay_ms", "star_respawn_delay_ms"):
            if key in data:
                data[key] = tuple(data[key])
        return cls(**data)

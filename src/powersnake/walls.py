"""Score-driven wall mode schedule."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class WallSchedule:
    """On/off cadence of the lethal outer ring.

    Walls rise when the score reaches ``next_toggle_on_score`` and drop
    ``window`` points later. Each drop pushes the next rise out by
    ``interval`` and widens the interval by ``growth``.
    """

    next_toggle_on_score: int = 10
    interval: int = 15
    window: int = 5
    growth: int = 5
    enabled: bool = False

    def on_score(self, score: int) -> bool:
        """Apply a new score; return True if the wall state changed."""
        if not self.enabled and score == self.next_toggle_on_score:
            self.enabled = True
            logger.info("Walls up at score %d.", score)
            return True
        if self.enabled and score == self.next_toggle_on_score + self.window:
            self.enabled = False
            self.next_toggle_on_score += self.interval
            self.interval += self.growth
            logger.info(
                "Walls down at score %d; next at %d.",
                score, self.next_toggle_on_score,
            )
            return True
        return False

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "next_toggle_on_score": self.next_toggle_on_score,
            "interval": self.interval,
        }

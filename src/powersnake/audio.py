"""Volume, mute and playback state driven by engine events."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from powersnake.events import GameEvents

logger = logging.getLogger(__name__)


class TrackState(str, enum.Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True)
class PlayedEffect:
    name: str
    volume: float


class AudioController(GameEvents):
    """Tracks what a sound backend should be doing.

    Holds the background track state and the effects requested so far; a
    front end reads it and drives actual playback. Starting while muted
    rewinds the track without playing it.
    """

    EAT = "eat"
    GAME_OVER = "game_over"

    def __init__(self, volume: float = 0.3, muted: bool = False) -> None:
        self._check_volume(volume)
        self.volume = volume
        self.muted = muted
        self.track = TrackState.STOPPED
        self.track_restarts = 0
        self.effects: list[PlayedEffect] = []

    @staticmethod
    def _check_volume(level: float) -> None:
        if not 0.0 <= level <= 1.0:
            raise ValueError("Volume must be between 0 and 1.")

    @property
    def effective_volume(self) -> float:
        return 0.0 if self.muted else self.volume

    def set_volume(self, level: float) -> None:
        self._check_volume(level)
        self.volume = level

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        logger.debug("Muted: %s.", self.muted)
        return self.muted

    def play_effect(self, name: str) -> None:
        self.effects.append(PlayedEffect(name, self.effective_volume))

    # --- engine events ---

    def on_start(self) -> None:
        self.track_restarts += 1
        self.track = TrackState.STOPPED if self.muted else TrackState.PLAYING

    def on_eat(self, score: int) -> None:
        self.play_effect(self.EAT)

    def on_game_over(self, score: int) -> None:
        self.track = TrackState.STOPPED
        self.play_effect(self.GAME_OVER)

    def on_pause_toggle(self, paused: bool) -> None:
        if paused and self.track == TrackState.PLAYING:
            self.track = TrackState.PAUSED
        elif not paused and self.track == TrackState.PAUSED:
            self.track = TrackState.PLAYING

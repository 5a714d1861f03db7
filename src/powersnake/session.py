"""Command surface a front end talks to."""

from __future__ import annotations

from powersnake.audio import AudioController
from powersnake.config import EngineConfig
from powersnake.engine import GameEngine
from powersnake.snake import Direction
from powersnake.timers import Clock


class GameSession:
    """An engine wired to its audio collaborator."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        clock: Clock | None = None,
        seed: int | None = None,
        audio: AudioController | None = None,
    ) -> None:
        self.engine = GameEngine(config=config, clock=clock, seed=seed)
        self.audio = audio if audio is not None else AudioController()
        self.engine.subscribe(self.audio)

    def start_game(self) -> None:
        self.engine.start_game()

    def toggle_pause(self) -> None:
        self.engine.toggle_pause()

    def set_direction(self, direction: Direction | str) -> None:
        self.engine.set_direction(direction)

    def set_volume(self, level: float) -> None:
        self.audio.set_volume(level)

    def toggle_mute(self) -> bool:
        return self.audio.toggle_mute()

    def get_state(self) -> dict:
        state = self.engine.get_state()
        state["audio"] = {
            "volume": self.audio.volume,
            "muted": self.audio.muted,
            "track": self.audio.track.value,
        }
        return state

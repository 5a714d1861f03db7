"""Power Snake — real-time snake engine with power-ups and wall mode."""

from powersnake.audio import AudioController, TrackState
from powersnake.config import EngineConfig
from powersnake.engine import GameEngine, GameStatus
from powersnake.events import GameEvents
from powersnake.grid import Grid
from powersnake.session import GameSession
from powersnake.snake import Direction, Snake
from powersnake.timers import Countdown, ManualClock, TimerGroup
from powersnake.walls import WallSchedule

__all__ = [
    "AudioController",
    "Countdown",
    "Direction",
    "EngineConfig",
    "GameEngine",
    "GameEvents",
    "GameSession",
    "GameStatus",
    "Grid",
    "ManualClock",
    "Snake",
    "TimerGroup",
    "TrackState",
    "WallSchedule",
]

"""Headless drivers: model-time simulation and a real-time asyncio loop."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from powersnake.autopilot import choose_direction
from powersnake.config import EngineConfig
from powersnake.engine import GameStatus
from powersnake.session import GameSession
from powersnake.timers import ManualClock

logger = logging.getLogger(__name__)

_SIM_STEP_MS = 10
_REALTIME_POLL_S = 0.02


@dataclass
class RunResult:
    """Outcome of one headless game."""

    status: str
    score: int
    ticks: int
    snake_length: int
    game_seconds: float
    wall_time_seconds: float
    state: dict

    def summary(self) -> str:
        return (
            f"Run: {self.status} after {self.ticks} ticks "
            f"({self.game_seconds:.1f}s game time, "
            f"{self.wall_time_seconds:.2f}s wall) | "
            f"score {self.score}, length {self.snake_length}"
        )


def _steer(session: GameSession) -> None:
    direction = choose_direction(session.engine)
    if direction is not None:
        session.set_direction(direction)


def _result(
    session: GameSession, status: GameStatus, game_seconds: float, started: float,
) -> RunResult:
    engine = session.engine
    return RunResult(
        status=status.value,
        score=engine.score,
        ticks=engine.tick,
        snake_length=len(engine.snake),
        game_seconds=game_seconds,
        wall_time_seconds=time.perf_counter() - started,
        state=session.get_state(),
    )


def simulate(
    seconds: float = 60.0,
    *,
    config: EngineConfig | None = None,
    seed: int | None = None,
    autopilot: bool = True,
) -> RunResult:
    """Play one game in model time for up to ``seconds`` of game time."""
    clock = ManualClock()
    session = GameSession(config=config, clock=clock, seed=seed)
    started = time.perf_counter()
    session.start_game()

    step = _SIM_STEP_MS / 1000.0
    while session.engine.status == GameStatus.PLAYING and clock.time() < seconds:
        if autopilot:
            _steer(session)
        clock.advance(step)

    result = _result(session, session.engine.status, clock.time(), started)
    logger.info(result.summary())
    return result


async def run_realtime(
    seconds: float = 10.0,
    *,
    config: EngineConfig | None = None,
    seed: int | None = None,
    autopilot: bool = True,
) -> RunResult:
    """Play one game on the running event loop for up to ``seconds``.

    A game still in progress at the deadline is paused so none of its
    timers outlive the call.
    """
    loop = asyncio.get_running_loop()
    session = GameSession(config=config, clock=loop, seed=seed)
    started = time.perf_counter()
    begin = loop.time()
    session.start_game()

    try:
        while (
            session.engine.status == GameStatus.PLAYING
            and loop.time() - begin < seconds
        ):
            if autopilot:
                _steer(session)
            await asyncio.sleep(_REALTIME_POLL_S)
    finally:
        status = session.engine.status
        if status == GameStatus.PLAYING:
            session.toggle_pause()

    result = _result(session, status, loop.time() - begin, started)
    logger.info(result.summary())
    return result

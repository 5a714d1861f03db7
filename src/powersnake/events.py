"""Event hooks the engine fires for its collaborators."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class GameEvents:
    """Base listener with no-op hooks; override the ones you need."""

    def on_start(self) -> None:
        pass

    def on_eat(self, score: int) -> None:
        pass

    def on_game_over(self, score: int) -> None:
        pass

    def on_pause_toggle(self, paused: bool) -> None:
        pass

    def on_boost(self, active: bool) -> None:
        pass

    def on_invincible(self, active: bool) -> None:
        pass


class EventBus:
    """Fans engine events out to every subscribed listener.

    A listener that raises is logged and skipped so a faulty collaborator
    cannot leave a tick half-applied.
    """

    def __init__(self) -> None:
        self._listeners: list[GameEvents] = []

    def subscribe(self, listener: GameEvents) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: GameEvents) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, hook: str, *args) -> None:
        for listener in list(self._listeners):
            try:
                getattr(listener, hook)(*args)
            except Exception:
                logger.exception(
                    "Listener %r failed handling %s.", listener, hook,
                )

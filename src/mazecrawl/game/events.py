from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


class GameEvent(Enum):
    """Events emitted by the maze and the session to notify UI, audio or systems."""

    GAME_STARTED = auto()
    PLAYER_MOVED = auto()
    COIN_COLLECTED = auto()
    KEY_COLLECTED = auto()
    DOOR_OPENED = auto()
    BEAM_FIRED = auto()
    BEAM_BLOCKED = auto()
    ENEMY_KILLED = auto()
    PLAYER_HIT = auto()
    PLAYER_DIED = auto()
    GOAL_REACHED = auto()
    GAME_PAUSED = auto()
    GAME_RESUMED = auto()


Listener = Callable[[GameEvent, Dict[str, Any]], None]

# Audio cues as (frequency Hz, duration s); playback belongs to the audio layer.
Tone = Tuple[int, float]
TONE_MOVE: Tone = (400, 0.1)
TONE_GOAL: Tuple[Tone, ...] = ((800, 0.2), (1000, 0.2))
TONE_BEAM: Tone = (1200, 0.06)
TONE_BEAM_BLOCKED: Tone = (200, 0.06)
TONE_KILL: Tone = (700, 0.08)
TONE_PLAYER_HIT: Tone = (220, 0.12)


class EventEmitter:
    """Listener registry shared by the maze and the session."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: GameEvent, **payload: Any) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception as ex:
                logger.exception("Listener errored on %s: %s", event, ex)

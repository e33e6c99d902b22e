from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from ..config.settings import MAX_CUSTOM_SEED, GameSettings
from ..exceptions import SessionStateError
from ..game.difficulty import maze_dimensions
from ..game.entities import Direction, is_cardinal
from ..game.events import EventEmitter, GameEvent
from ..game.maze import Maze
from .render_state import RenderSnapshot

logger = logging.getLogger(__name__)

DEFAULT_MOVE_INTERVAL_MS = 50


class SessionState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.COMPLETE, SessionState.FAILED)


@dataclass(frozen=True)
class MoveIntent:
    """Input for one frame.

    Attributes:
        move: Cardinal step to take on the next move-tick, or None.
        attack: Fire the beam this frame (subject to the cooldown).
        fire_direction: Direction currently held for aiming, if any.
    """

    move: Optional[Direction] = None
    attack: bool = False
    fire_direction: Optional[Direction] = None


class GameSession(EventEmitter):
    """Owns one game at a time: its maze, the play timer and the win/lose state.

    The session is driven by ``update(now, intent)`` once per rendered frame.
    Player movement and enemy AI only advance on move-ticks, at most one every
    ``move_interval_ms``; the beam is evaluated every frame and gated by the
    ``beam_cooldown_ms`` setting. Maze events are re-emitted to the session's
    own listeners together with the lifecycle events.

    Times are in seconds from ``clock`` (``time.monotonic`` by default); every
    method that needs the current time also accepts it explicitly.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        seed_rng: Optional[random.Random] = None,
        move_interval_ms: int = DEFAULT_MOVE_INTERVAL_MS,
    ) -> None:
        super().__init__()
        self.settings = settings or GameSettings()
        self.clock = clock
        self.move_interval_ms = move_interval_ms
        self._seed_rng = seed_rng or random.Random()

        self.state = SessionState.NOT_STARTED
        self.maze: Optional[Maze] = None
        self.seed: Optional[int] = None
        self.preset: Optional[str] = None

        self._epoch = 0.0
        self._paused_at: Optional[float] = None
        self._finished_at: Optional[float] = None
        self._last_move_tick = 0.0
        self._last_shot: Optional[float] = None
        self._last_move_direction: Optional[Direction] = None
        self._now = 0.0
        self._in_update = False
        self._pause_requested = False

    # ---- Lifecycle -------------------------------------------------------
    def new_game(
        self,
        preset: Optional[str] = None,
        now: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> Maze:
        """Start a fresh game, replacing any current one.

        The seed is, in order: the explicit argument, the settings' custom seed
        (consumed, so the game after this one is random again), or a random one.
        """
        if seed is None and self.settings.custom_seed is not None:
            seed = self.settings.custom_seed
            self.settings.custom_seed = None
            logger.info("Using custom seed %d for this game", seed)
        if seed is None:
            seed = self._seed_rng.randint(0, MAX_CUSTOM_SEED)
        preset = preset or self.settings.difficulty
        return self._start(preset, seed, now)

    def restart(self, now: Optional[float] = None) -> Maze:
        """Replay the current maze from scratch with the same seed and size."""
        if self.seed is None or self.preset is None:
            raise SessionStateError("No game to restart; call new_game() first")
        return self._start(self.preset, self.seed, now)

    def _start(self, preset: str, seed: int, now: Optional[float]) -> Maze:
        now = self._time(now)
        size = maze_dimensions(preset, self.settings.difficulty_value)
        if self.maze is not None:
            self.maze.remove_listener(self._on_maze_event)

        maze = Maze(size, size, seed, self.settings.difficulty_value, self.settings.snapshot())
        maze.add_listener(self._on_maze_event)
        self.maze = maze
        self.seed = seed
        self.preset = preset

        self.state = SessionState.RUNNING
        self._epoch = now
        self._paused_at = None
        self._finished_at = None
        self._last_move_tick = now
        self._last_shot = None
        self._last_move_direction = None
        self._pause_requested = False

        logger.info("Game started: preset=%s size=%d seed=%d", preset, size, seed)
        self._emit(GameEvent.GAME_STARTED, seed=seed, width=size, height=size, preset=preset)
        return maze

    def pause(self, now: Optional[float] = None) -> None:
        """Freeze the timer and all ticks. Idempotent; deferred to the end of a running update."""
        self._require_game()
        if self._in_update:
            self._pause_requested = True
            return
        if self.state is not SessionState.RUNNING:
            return
        self.state = SessionState.PAUSED
        self._paused_at = self._time(now)
        logger.info("Game paused at %.2fs", self.elapsed(self._paused_at))
        self._emit(GameEvent.GAME_PAUSED)

    def resume(self, now: Optional[float] = None) -> None:
        """Continue a paused game; the paused interval is excluded from the timer."""
        self._require_game()
        if self._in_update:
            self._pause_requested = False
            return
        if self.state is not SessionState.PAUSED or self._paused_at is None:
            return
        now = self._time(now)
        paused_for = now - self._paused_at
        self._epoch += paused_for
        self._last_move_tick += paused_for
        if self._last_shot is not None:
            self._last_shot += paused_for
        self._paused_at = None
        self.state = SessionState.RUNNING
        logger.info("Game resumed after %.2fs pause", paused_for)
        self._emit(GameEvent.GAME_RESUMED)

    def toggle_pause(self, now: Optional[float] = None) -> None:
        if self.state is SessionState.PAUSED:
            self.resume(now)
        else:
            self.pause(now)

    # ---- Timer -----------------------------------------------------------
    def elapsed(self, now: Optional[float] = None) -> float:
        """Seconds of play, excluding paused intervals; frozen once the game ends."""
        if self.state is SessionState.NOT_STARTED:
            return 0.0
        if self.state is SessionState.PAUSED and self._paused_at is not None:
            end = self._paused_at
        elif self.state.is_terminal and self._finished_at is not None:
            end = self._finished_at
        else:
            end = self._time(now)
        return max(0.0, end - self._epoch)

    def formatted_time(self, now: Optional[float] = None) -> str:
        total = int(self.elapsed(now))
        minutes, seconds = divmod(total, 60)
        return f"{minutes}:{seconds:02d}"

    def beam_cooldown_remaining(self, now: Optional[float] = None) -> float:
        """Milliseconds until the beam can fire again (0 when ready)."""
        if self._last_shot is None:
            return 0.0
        if self.state is SessionState.PAUSED and self._paused_at is not None:
            reference = self._paused_at
        else:
            reference = self._time(now)
        since_ms = (reference - self._last_shot) * 1000.0
        return max(0.0, self.settings.beam_cooldown_ms - since_ms)

    # ---- Per-frame driving -----------------------------------------------
    def update(self, now: Optional[float] = None, intent: Optional[MoveIntent] = None) -> None:
        """Advance one rendered frame. No-op unless the game is running."""
        if self.state is not SessionState.RUNNING or self.maze is None:
            return
        now = self._time(now)
        intent = intent or MoveIntent()
        maze = self.maze

        self._in_update = True
        try:
            maze.tick_beam()
            if intent.attack:
                self._fire(self._fire_direction(intent), now)

            if self.state is SessionState.RUNNING and (now - self._last_move_tick) * 1000.0 > self.move_interval_ms:
                self._last_move_tick = now
                if intent.move is not None and maze.move_player(*intent.move):
                    self._last_move_direction = intent.move
                if self.state is SessionState.RUNNING:
                    maze.update_enemies()
        finally:
            self._in_update = False

        if self._pause_requested:
            self._pause_requested = False
            self.pause(now)

    def fire(self, direction: Optional[Direction] = None, now: Optional[float] = None) -> int:
        """Fire the beam outside of ``update``; returns kills (0 if on cooldown)."""
        self._require_game()
        if self.state is not SessionState.RUNNING:
            return 0
        if direction is None:
            direction = self._fire_direction(MoveIntent())
        return self._fire(direction, self._time(now))

    def melee(self) -> int:
        self._require_game()
        if self.state is not SessionState.RUNNING or self.maze is None:
            return 0
        return self.maze.player_attack()

    def snapshot(self, now: Optional[float] = None) -> RenderSnapshot:
        self._require_game()
        assert self.maze is not None
        return RenderSnapshot.capture(
            self.maze,
            self.state,
            self.elapsed(now),
            self.beam_cooldown_remaining(now),
        )

    # ---- Internals -------------------------------------------------------
    def _fire(self, direction: Direction, now: float) -> int:
        assert self.maze is not None
        if self._last_shot is not None and (now - self._last_shot) * 1000.0 < self.settings.beam_cooldown_ms:
            return 0
        self._last_shot = now
        return self.maze.player_shoot(*direction)

    def _fire_direction(self, intent: MoveIntent) -> Direction:
        held = intent.fire_direction
        if held is not None and is_cardinal(*held):
            return held
        if self._last_move_direction is not None:
            return self._last_move_direction
        assert self.maze is not None
        return self.maze.facing

    def _on_maze_event(self, event: GameEvent, payload: Dict[str, Any]) -> None:
        self._emit(event, **payload)
        if event is GameEvent.GOAL_REACHED:
            self._finish(SessionState.COMPLETE)
        elif event is GameEvent.PLAYER_DIED:
            self._finish(SessionState.FAILED)

    def _finish(self, state: SessionState) -> None:
        if self.state.is_terminal:
            return
        self.state = state
        self._finished_at = self._now
        self._pause_requested = False
        assert self.maze is not None
        logger.info(
            "Game %s after %s with %d coins (score %d)",
            state.value,
            self.formatted_time(),
            self.maze.coins_collected,
            self.maze.score,
        )

    def _require_game(self) -> None:
        if self.state is SessionState.NOT_STARTED or self.maze is None:
            raise SessionStateError("No game in progress; call new_game() first")

    def _time(self, now: Optional[float]) -> float:
        self._now = self.clock() if now is None else now
        return self._now

    @property
    def is_over(self) -> bool:
        return self.state.is_terminal


__all__ = ["DEFAULT_MOVE_INTERVAL_MS", "GameSession", "MoveIntent", "SessionState"]

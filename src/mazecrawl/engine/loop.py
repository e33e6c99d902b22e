from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .session import GameSession, MoveIntent, SessionState

logger = logging.getLogger(__name__)

IntentProvider = Callable[[GameSession], MoveIntent]


@dataclass
class LoopConfig:
    """Configuration for the headless frame loop.

    Attributes:
        tick_rate: Target frames per second. If 0 or None, runs as fast as possible.
        max_steps: If provided and > 0, the loop stops after this many frames.
    """

    tick_rate: float = 60.0
    max_steps: Optional[int] = None


class GameLoop:
    """Fixed-rate driver that feeds frames into a GameSession.

    Stands in for the renderer's animation-frame callback: each frame asks the
    intent provider for input and calls ``session.update``. Clock and sleep are
    injectable so tests can run the loop on simulated time.
    """

    def __init__(
        self,
        session: GameSession,
        config: Optional[LoopConfig] = None,
        intents: Optional[IntentProvider] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session = session
        self.config = config or LoopConfig()
        self._intents = intents
        self._clock = clock or session.clock
        self._sleep = sleep
        self._running: bool = False
        self._step: int = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def step(self) -> int:
        return self._step

    def start(self) -> None:
        """Start the loop, beginning a new game if the session has none.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._running:
            logger.debug("GameLoop.start() called while already running")
            return
        if self.session.state is SessionState.NOT_STARTED:
            self.session.new_game(now=self._clock())
        self._running = True
        self._step = 0
        logger.info("GameLoop started (tick_rate=%s, max_steps=%s)", self.config.tick_rate, self.config.max_steps)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info("GameLoop stopped at step=%s (state=%s)", self._step, self.session.state.value)

    def update(self, now: float) -> None:
        """Run a single frame at time ``now``."""
        if not self._running:
            logger.debug("update() called while not running; ignored")
            return
        intent = self._intents(self.session) if self._intents is not None else MoveIntent()
        self.session.update(now, intent)
        self._step += 1

        if self.session.is_over:
            self.stop()
        elif self.config.max_steps and self._step >= self.config.max_steps:
            self.stop()

    def run(self) -> SessionState:
        """Run frames until the game ends or max_steps is reached; returns the final state."""
        self.start()
        target_dt = 0.0
        if self.config.tick_rate and self.config.tick_rate > 0:
            target_dt = 1.0 / float(self.config.tick_rate)

        while self._running:
            frame_start = self._clock()
            self.update(frame_start)

            if target_dt > 0:
                remaining = target_dt - (self._clock() - frame_start)
                if remaining > 0:
                    self._sleep(remaining)

        logger.info("Loop complete (steps=%d)", self._step)
        return self.session.state


__all__ = ["GameLoop", "IntentProvider", "LoopConfig"]

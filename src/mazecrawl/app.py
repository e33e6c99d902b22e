from __future__ import annotations

import logging
from typing import Optional

from .config.settings import GameSettings
from .engine.autopilot import Autopilot
from .engine.loop import GameLoop, LoopConfig
from .engine.session import GameSession, SessionState

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 20000


def run_headless(
    settings: Optional[GameSettings] = None,
    seed: Optional[int] = None,
    autoplay: bool = False,
    print_map: bool = False,
    max_steps: Optional[int] = None,
    tick_rate: float = 60.0,
) -> int:
    """Generate a maze and optionally let the autopilot play it in the console.

    Args:
        settings: Game settings; defaults when omitted.
        seed: Fixed seed; otherwise the settings' custom seed or a random one.
        autoplay: Drive the game with the autopilot until it ends.
        print_map: Print the ASCII map after generation (and after autoplay).
        max_steps: Frame limit for autoplay; defaults to DEFAULT_MAX_STEPS.
        tick_rate: Target frames per second for autoplay; 0 runs unthrottled.

    Returns:
        Process exit code: 0 on success, 1 when the player died or on error,
        130 when interrupted.
    """
    if max_steps is None:
        # Always bound the loop when nobody is watching.
        max_steps = DEFAULT_MAX_STEPS

    session = GameSession(settings=settings)
    try:
        maze = session.new_game(seed=seed)
        print(f"Maze Crawl - seed {session.seed}, {maze.width}x{maze.height}, {session.preset}")
        if print_map:
            print(maze)
        if not autoplay:
            return 0

        loop = GameLoop(session, LoopConfig(tick_rate=tick_rate, max_steps=max_steps), intents=Autopilot())
        state = loop.run()
        if print_map:
            print(session.maze)
        print(
            f"Result: {state.value} after {loop.step} frames, time {session.formatted_time()}, "
            f"coins {maze.coins_collected}/{maze.total_coins}, score {maze.score}, hp {maze.player_hp}"
        )
        return 1 if state is SessionState.FAILED else 0
    except KeyboardInterrupt:
        print("Interrupted by user")
        return 130
    except Exception:
        logger.exception("Unhandled exception in headless run")
        return 1


__all__ = ["DEFAULT_MAX_STEPS", "run_headless"]

"""
Engine layer: the game session state machine, the headless frame loop, the
autopilot intent provider and read-only render snapshots.
"""
from .autopilot import Autopilot
from .loop import GameLoop, LoopConfig
from .render_state import BeamView, EnemyView, RenderSnapshot
from .session import GameSession, MoveIntent, SessionState

__all__ = [
    "Autopilot",
    "BeamView",
    "EnemyView",
    "GameLoop",
    "GameSession",
    "LoopConfig",
    "MoveIntent",
    "RenderSnapshot",
    "SessionState",
]

"""
Gameplay layer: the maze model, its entities, combat, enemy AI and events.
"""
from .ai import EnemyController, Strike
from .combat import ShotResult, melee_attack, resolve_beam
from .difficulty import maze_dimensions
from .entities import Beam, Enemy, Player
from .events import EventEmitter, GameEvent, Listener
from .maze import Maze

__all__ = [
    "Beam",
    "Enemy",
    "EnemyController",
    "EventEmitter",
    "GameEvent",
    "Listener",
    "Maze",
    "Player",
    "ShotResult",
    "Strike",
    "maze_dimensions",
    "melee_attack",
    "resolve_beam",
]

from __future__ import annotations

import logging
from typing import Optional

from ..game.entities import Direction
from ..game.maze import Maze
from ..maze.grid import CARDINALS
from ..maze.pathfinding import shortest_path
from .session import GameSession, MoveIntent

logger = logging.getLogger(__name__)


def enemy_in_line(maze: Maze) -> Optional[Direction]:
    """First cardinal direction with a living enemy in clear line of sight, if any."""
    origin = maze.player_pos
    for dx, dy in CARDINALS:
        x, y = origin.x + dx, origin.y + dy
        while not maze.grid.is_wall(x, y):
            if maze.enemy_at(x, y) is not None:
                return dx, dy
            x += dx
            y += dy
    return None


class Autopilot:
    """Intent provider that walks the shortest route to the goal.

    Fires the beam at any enemy it can see along a corridor; movement never
    detours, so an enemy standing on the route just gets shot or walked past.
    """

    def __call__(self, session: GameSession) -> MoveIntent:
        maze = session.maze
        if maze is None:
            return MoveIntent()

        target = enemy_in_line(maze)
        route = shortest_path(maze.grid, maze.player_pos, maze.goal)
        move: Optional[Direction] = None
        if route:
            step = route[0]
            move = (step.x - maze.player_pos.x, step.y - maze.player_pos.y)
        elif route is None:
            logger.warning("No route from %s to goal %s", maze.player_pos, maze.goal)
        return MoveIntent(move=move, attack=target is not None, fire_direction=target)


__all__ = ["Autopilot", "enemy_in_line"]

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..config.settings import GameSettings
from ..exceptions import MazeConfigError
from ..rng import Mulberry32
from .grid import Grid, Point
from .placement import ItemPlacer, Placement
from .tiles import Tile

logger = logging.getLogger(__name__)

MIN_MAZE_SIZE = 21
START = Point(1, 1)

# Two-cell steps: up, right, down, left.
_CARVE_STEPS = ((0, -2), (2, 0), (0, 2), (-2, 0))


@dataclass
class GeneratedMaze:
    grid: Grid
    start: Point
    goal: Point
    reachable: List[Point]
    placement: Placement


def carve_passages(grid: Grid, start: Point, rng: Mulberry32) -> None:
    """
    Randomized depth-first backtracker over odd cells, using an explicit stack.

    Visits cells in the same order as the recursive formulation: a cell's four
    directions are shuffled when it is first entered, then tried one at a time,
    descending into the first uncarved neighbour before trying the rest. The
    outer border is never carved.
    """

    def enter(x: int, y: int) -> list:
        grid.set(x, y, Tile.PATH)
        return [x, y, rng.shuffle(list(_CARVE_STEPS)), 0]

    stack = [enter(start.x, start.y)]
    while stack:
        frame = stack[-1]
        x, y, steps, index = frame
        if index >= len(steps):
            stack.pop()
            continue
        frame[3] = index + 1
        dx, dy = steps[index]
        nx, ny = x + dx, y + dy
        if 0 < nx < grid.width - 1 and 0 < ny < grid.height - 1 and grid.get(nx, ny) is Tile.WALL:
            grid.set(x + dx // 2, y + dy // 2, Tile.PATH)
            stack.append(enter(nx, ny))


def validate_dimensions(width: int, height: int, minimum: int = MIN_MAZE_SIZE) -> None:
    for name, value in (("width", width), ("height", height)):
        if value < minimum:
            raise MazeConfigError(f"Maze {name} must be at least {minimum}, got {value}")
        if value % 2 == 0:
            raise MazeConfigError(f"Maze {name} must be odd, got {value}")


class MazeGenerator:
    """Deterministic maze generator.

    Guarantees:
    - Same (width, height, seed, settings) gives the same grid and placements
    - Start at (1, 1), goal at (width-2, height-2), joined by a walkable path
    - Items and enemies only land on Path cells reachable without crossing the goal
    - Solid wall border so movement never needs to leave the grid
    """

    def __init__(self, seed: int, settings: Optional[GameSettings] = None) -> None:
        self.seed = seed
        self.settings = settings or GameSettings()

    def generate(self, width: int, height: int) -> GeneratedMaze:
        validate_dimensions(width, height)
        logger.info("Generating maze %dx%d (seed=%d)", width, height, self.seed)

        rng = Mulberry32(self.seed)
        grid = Grid(width, height, Tile.WALL)
        carve_passages(grid, START, rng)

        goal = Point(width - 2, height - 2)
        grid.set(START.x, START.y, Tile.PATH)
        grid.set(goal.x, goal.y, Tile.GOAL)

        reachable = grid.reachable_cells(START, through=(Tile.PATH,))
        placement = ItemPlacer(rng, self.settings).place(grid, reachable, START, goal)

        logger.debug("Generated maze:\n%s", grid)
        return GeneratedMaze(grid=grid, start=START, goal=goal, reachable=reachable, placement=placement)


__all__ = [
    "GeneratedMaze",
    "MIN_MAZE_SIZE",
    "MazeGenerator",
    "START",
    "carve_passages",
    "validate_dimensions",
]

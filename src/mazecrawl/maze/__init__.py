"""
Maze systems for Maze Crawl.

Contains the tile set, the bounds-checked grid, the depth-first maze carver,
item/enemy placement and path search used by the autopilot and tests.
"""
from .generator import MIN_MAZE_SIZE, START, GeneratedMaze, MazeGenerator
from .grid import CARDINALS, Grid, Point
from .placement import EnemyStats, Placement
from .tiles import Tile

__all__ = [
    "CARDINALS",
    "EnemyStats",
    "GeneratedMaze",
    "Grid",
    "MIN_MAZE_SIZE",
    "MazeGenerator",
    "Placement",
    "Point",
    "START",
    "Tile",
]

import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from mazecrawl.config.settings import GameSettings  # noqa: E402
from mazecrawl.game.entities import Enemy  # noqa: E402
from mazecrawl.game.maze import Maze  # noqa: E402
from mazecrawl.maze.grid import Grid, Point  # noqa: E402
from mazecrawl.maze.tiles import Tile  # noqa: E402

GLYPH_TILES = {tile.glyph: tile for tile in Tile}


def grid_from_lines(lines):
    grid = Grid(len(lines[0]), len(lines), Tile.WALL)
    for y, row in enumerate(lines):
        for x, ch in enumerate(row):
            grid.set(x, y, GLYPH_TILES[ch])
    return grid


class FakeClock:
    """Manually advanced clock; also usable as the loop's sleep function."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_grid():
    return grid_from_lines


@pytest.fixture
def arena():
    """Factory for a Maze whose grid is replaced by a hand-drawn layout.

    Glyphs follow Tile.glyph ('#' wall, '.' path, 'G' goal, 'c' coin, '$' giant
    coin, 'k' key, '+' door). Enemies are (x, y) or (x, y, hp) tuples.
    """

    def make(lines, player=(1, 1), enemies=(), settings=None, door=None, hidden_room=None):
        settings = settings or GameSettings(peaceful=True)
        maze = Maze(21, 21, seed=7, settings=settings)
        maze.grid = grid_from_lines(lines)
        goals = maze.grid.cells_of(Tile.GOAL)
        maze.goal = goals[0] if goals else Point(-1, -1)
        maze.player.position = Point(*player)
        maze.door = Point(*door) if door else None
        maze.hidden_room = Point(*hidden_room) if hidden_room else None
        maze.hidden_room_visible = False
        maze.enemies = []
        for entry in enemies:
            x, y = entry[0], entry[1]
            hp = entry[2] if len(entry) > 2 else 1
            maze.enemies.append(Enemy(x=x, y=y, hp=hp, damage=1, move_delay=3, attack_delay=2))
        return maze

    return make

from __future__ import annotations

from mazecrawl.maze.grid import Point
from mazecrawl.maze.pathfinding import path_length, shortest_path


def test_shortest_path_around_walls(make_grid):
    grid = make_grid([
        "#####",
        "#...#",
        "###.#",
        "#G..#",
        "#####",
    ])
    path = shortest_path(grid, Point(1, 1), Point(1, 3))
    assert path == [Point(2, 1), Point(3, 1), Point(3, 2), Point(3, 3), Point(2, 3), Point(1, 3)]
    assert path_length(grid, Point(1, 1), Point(1, 3)) == 6


def test_start_equals_goal(make_grid):
    grid = make_grid(["###", "#.#", "###"])
    assert shortest_path(grid, Point(1, 1), Point(1, 1)) == []


def test_unreachable_or_wall_goal(make_grid):
    grid = make_grid([
        "#####",
        "#.#.#",
        "#####",
    ])
    assert shortest_path(grid, Point(1, 1), Point(3, 1)) is None
    assert shortest_path(grid, Point(1, 1), Point(2, 1)) is None
    assert path_length(grid, Point(1, 1), Point(3, 1)) is None

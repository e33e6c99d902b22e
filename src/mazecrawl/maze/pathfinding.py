from collections import deque
from typing import Dict, List, Optional

from .grid import Grid, Point


def shortest_path(grid: Grid, start: Point, goal: Point) -> Optional[List[Point]]:
    """Breadth-first shortest path over walkable tiles; returns the cells after start, or None.

    Uses 4-directional movement. An empty list means start == goal.
    """
    if not grid.is_walkable(start.x, start.y) or not grid.is_walkable(goal.x, goal.y):
        return None

    came_from: Dict[Point, Optional[Point]] = {start: None}
    q = deque([start])
    while q:
        p = q.popleft()
        if p == goal:
            break
        for n in grid.neighbors_4(p.x, p.y):
            if n not in came_from and grid.is_walkable(n.x, n.y):
                came_from[n] = p
                q.append(n)

    if goal not in came_from:
        return None
    path: List[Point] = []
    node: Optional[Point] = goal
    while node is not None and node != start:
        path.append(node)
        node = came_from[node]
    path.reverse()
    return path


def path_length(grid: Grid, start: Point, goal: Point) -> Optional[int]:
    path = shortest_path(grid, start, goal)
    return None if path is None else len(path)

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Collection, Dict, Iterator, List, Optional, Tuple

from .tiles import Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


# Up, right, down, left. Traversal order is part of the reproducible output.
CARDINALS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


class Grid:
    """
    Flat, row-major buffer of tiles addressed by (x, y).

    All tile access goes through the bounds-checked accessors below so callers
    never index the buffer directly. Reads outside the grid either raise
    (``get``) or are treated as walls (``is_wall``); writes outside the grid are
    logged and ignored.
    """

    def __init__(self, width: int, height: int, fill: Tile = Tile.WALL) -> None:
        if width < 3 or height < 3:
            raise ValueError("Grid must be at least 3x3 to maintain wall borders")
        self.width = width
        self.height = height
        self._cells: List[Tile] = [fill] * (width * height)

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y}) not in [0,{self.width})x[0,{self.height})")
        return self._cells[y * self.width + x]

    def set(self, x: int, y: int, tile: Tile) -> None:
        if not self.in_bounds(x, y):
            logger.error("Attempt to write out-of-bounds tile at (%d,%d)", x, y)
            return
        self._cells[y * self.width + x] = tile

    # ---- Query -----------------------------------------------------------
    def is_wall(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self._cells[y * self.width + x] is Tile.WALL

    def is_walkable(self, x: int, y: int) -> bool:
        return not self.is_wall(x, y)

    def neighbors_4(self, x: int, y: int) -> Iterator[Point]:
        for dx, dy in CARDINALS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield Point(nx, ny)

    def cells_of(self, tile: Tile) -> List[Point]:
        return [
            Point(i % self.width, i // self.width)
            for i, t in enumerate(self._cells)
            if t is tile
        ]

    def count(self, tile: Tile) -> int:
        return sum(1 for t in self._cells if t is tile)

    # ---- Search ----------------------------------------------------------
    def reachable_cells(self, start: Point, through: Optional[Collection[Tile]] = None) -> List[Point]:
        """
        Flood fill from start, 4-directional.

        By default every non-wall tile is traversed; pass ``through`` to restrict
        the fill to those tile kinds (start included). Returns cells in
        breadth-first discovery order (start first); the order feeds the seeded
        shuffle during placement, so it must stay stable.
        """

        def passable(p: Point) -> bool:
            if through is None:
                return self.is_walkable(p.x, p.y)
            return self.in_bounds(p.x, p.y) and self.get(p.x, p.y) in through

        if not passable(start):
            return []
        seen = {start}
        order: List[Point] = []
        queue = deque([start])
        while queue:
            p = queue.popleft()
            order.append(p)
            for n in self.neighbors_4(p.x, p.y):
                if n in seen or not passable(n):
                    continue
                seen.add(n)
                queue.append(n)
        return order

    # ---- Export / Compare -----------------------------------------------
    def rows(self) -> Tuple[Tuple[Tile, ...], ...]:
        return tuple(
            tuple(self._cells[y * self.width:(y + 1) * self.width]) for y in range(self.height)
        )

    def to_str_lines(self, markers: Optional[Dict[Point, str]] = None) -> List[str]:
        markers = markers or {}
        lines: List[str] = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                mark = markers.get(Point(x, y))
                row.append(mark if mark else self._cells[y * self.width + x].glyph)
            lines.append("".join(row))
        return lines

    def snapshot(self) -> Tuple[int, ...]:
        """Deterministic, hashable snapshot of the tiles for equality tests."""
        return tuple(t.value for t in self._cells)

    def __iter__(self) -> Iterator[Tuple[Point, Tile]]:
        for i, t in enumerate(self._cells):
            yield Point(i % self.width, i // self.width), t

    def __str__(self) -> str:
        return "\n".join(self.to_str_lines())

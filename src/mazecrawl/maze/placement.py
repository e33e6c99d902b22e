from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from ..config.settings import GameSettings
from ..rng import Mulberry32
from .grid import CARDINALS, Grid, Point
from .tiles import Tile

logger = logging.getLogger(__name__)

MIN_VALID_CELLS = 20
EDGE_MARGIN = 2
KEY_CHANCE = 0.15
MIN_COINS = 15
GIANT_COIN_VALUE = 10


@dataclass(frozen=True)
class EnemyStats:
    """Stats shared by every enemy spawned in one maze."""

    hp: int
    damage: int
    move_delay: int
    attack_delay: int

    @classmethod
    def from_settings(cls, settings: GameSettings) -> "EnemyStats":
        strength = settings.mob_strength
        return cls(
            hp=max(1, math.ceil(strength / 20)),
            damage=max(1, math.ceil(strength / 40)),
            move_delay=_round_half_up(6 - 5 * settings.enemy_speed / 100),
            attack_delay=max(1, _round_half_up(4 - strength / 50)),
        )


@dataclass
class Placement:
    """Where generation put the hidden room, key, coins and enemy spawns."""

    valid_cell_count: int = 0
    hidden_room: Optional[Point] = None
    door: Optional[Point] = None
    key: Optional[Point] = None
    coins: List[Point] = field(default_factory=list)
    total_coins: int = 0
    enemy_spawns: List[Point] = field(default_factory=list)
    enemy_stats: Optional[EnemyStats] = None

    @property
    def skipped(self) -> bool:
        return self.valid_cell_count < MIN_VALID_CELLS


def _round_half_up(value: float) -> int:
    # Halves round up (round() would round them to even).
    return int(math.floor(value + 0.5))


def enemy_count_for(valid_cell_count: int, enemy_amount: int) -> int:
    max_count = max(1, valid_cell_count // 8)
    return _round_half_up(1 + (max_count - 1) * enemy_amount / 100)


class ItemPlacer:
    """
    Places the hidden room, key, coins and enemies on reachable cells.

    Order matters for reproducibility: hidden room, key, coins, enemies. Every
    pass consumes from the same used-cell set so later passes never overwrite
    earlier ones, and all randomness comes from the generation stream.
    """

    def __init__(self, rng: Mulberry32, settings: GameSettings) -> None:
        self.rng = rng
        self.settings = settings

    def place(self, grid: Grid, reachable: Sequence[Point], start: Point, goal: Point) -> Placement:
        valid = [c for c in reachable if c != start and c != goal]
        placement = Placement(valid_cell_count=len(valid))
        if placement.skipped:
            logger.info("Only %d valid cells; skipping item and enemy placement", len(valid))
            return placement

        self.rng.shuffle(valid)
        valid_set = set(valid)
        used: Set[Point] = set()

        self._place_hidden_room(grid, valid_set, used, placement)
        self._place_key(grid, valid, used, placement)
        self._place_coins(grid, valid, used, placement)
        if self.settings.peaceful:
            logger.debug("Peaceful mode; no enemies placed")
        else:
            self._place_enemies(valid, used, placement)

        logger.debug(
            "Placement: hidden_room=%s door=%s key=%s coins=%d enemies=%d",
            placement.hidden_room,
            placement.door,
            placement.key,
            placement.total_coins,
            len(placement.enemy_spawns),
        )
        return placement

    # ---- Passes ----------------------------------------------------------
    def _place_hidden_room(
        self,
        grid: Grid,
        valid_set: Set[Point],
        used: Set[Point],
        placement: Placement,
    ) -> None:
        candidates: List[Point] = []
        for y in range(1, grid.height - 1):
            for x in range(1, grid.width - 1):
                near_edge = (
                    x <= EDGE_MARGIN
                    or x >= grid.width - 1 - EDGE_MARGIN
                    or y <= EDGE_MARGIN
                    or y >= grid.height - 1 - EDGE_MARGIN
                )
                p = Point(x, y)
                if near_edge and grid.get(x, y) is Tile.PATH and p in valid_set:
                    candidates.append(p)
        if not candidates:
            return

        room = candidates[self.rng.next_int(len(candidates))]
        placement.hidden_room = room
        grid.set(room.x, room.y, Tile.HIDDEN_ROOM)
        used.add(room)

        for dx, dy in CARDINALS:
            door = room.offset(dx, dy)
            if door not in used and door in valid_set:
                grid.set(door.x, door.y, Tile.DOOR)
                placement.door = door
                used.add(door)
                break

        # The giant coin sits inside the hidden room itself.
        grid.set(room.x, room.y, Tile.GIANT_COIN)
        placement.total_coins += GIANT_COIN_VALUE

    def _place_key(self, grid: Grid, valid: List[Point], used: Set[Point], placement: Placement) -> None:
        eligible = [c for c in valid if c not in used and c != placement.hidden_room]
        chosen = None
        for cell in eligible:
            if self.rng.next() < KEY_CHANCE:
                chosen = cell
                break
        if chosen is None and eligible:
            chosen = eligible[0]
        if chosen is None:
            return
        grid.set(chosen.x, chosen.y, Tile.KEY)
        placement.key = chosen
        used.add(chosen)

    def _place_coins(self, grid: Grid, valid: List[Point], used: Set[Point], placement: Placement) -> None:
        frequency = max(4, len(valid) // 40)
        for index, cell in enumerate(valid):
            if cell not in used and index % frequency == 0:
                self._drop_coin(grid, cell, used, placement)

        if placement.total_coins < MIN_COINS:
            for cell in valid:
                if placement.total_coins >= MIN_COINS:
                    break
                if cell not in used:
                    self._drop_coin(grid, cell, used, placement)

    @staticmethod
    def _drop_coin(grid: Grid, cell: Point, used: Set[Point], placement: Placement) -> None:
        grid.set(cell.x, cell.y, Tile.COIN)
        used.add(cell)
        placement.coins.append(cell)
        placement.total_coins += 1

    def _place_enemies(self, valid: List[Point], used: Set[Point], placement: Placement) -> None:
        count = enemy_count_for(len(valid), self.settings.enemy_amount)
        placement.enemy_stats = EnemyStats.from_settings(self.settings)
        for cell in valid:
            if len(placement.enemy_spawns) >= count:
                break
            if cell in used or cell == placement.hidden_room:
                continue
            placement.enemy_spawns.append(cell)
            used.add(cell)


__all__ = [
    "EnemyStats",
    "ItemPlacer",
    "MIN_VALID_CELLS",
    "Placement",
    "enemy_count_for",
]

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..maze.grid import Point
from ..maze.placement import EnemyStats

Direction = Tuple[int, int]

PLAYER_START_HP = 5
BEAM_DISPLAY_FRAMES = 14


def is_cardinal(dx: int, dy: int) -> bool:
    return abs(dx) + abs(dy) == 1


@dataclass
class Player:
    position: Point
    facing: Direction = (1, 0)
    hp: int = PLAYER_START_HP
    coins: int = 0
    has_key: bool = False

    @property
    def alive(self) -> bool:
        return self.hp > 0


@dataclass
class Enemy:
    """A maze enemy. Once dead it is never revived; dead enemies stay in the list."""

    x: int
    y: int
    hp: int
    damage: int
    move_delay: int
    attack_delay: int
    alive: bool = True
    move_timer: Optional[int] = None
    attack_cooldown: int = 0
    last_x: int = -1
    last_y: int = -1
    facing: Optional[Direction] = None

    @classmethod
    def spawn(cls, at: Point, stats: EnemyStats) -> "Enemy":
        return cls(
            x=at.x,
            y=at.y,
            hp=stats.hp,
            damage=stats.damage,
            move_delay=stats.move_delay,
            attack_delay=stats.attack_delay,
        )

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def distance_to(self, p: Point) -> int:
        return abs(self.x - p.x) + abs(self.y - p.y)

    def take_damage(self, amount: int) -> bool:
        """Apply damage; returns True when this hit killed the enemy."""
        if not self.alive:
            return False
        self.hp -= amount
        if self.hp <= 0:
            self.alive = False
            return True
        return False

    def kill(self) -> None:
        self.hp = 0
        self.alive = False

    def step(self, dx: int, dy: int) -> None:
        self.last_x, self.last_y = self.x, self.y
        self.x += dx
        self.y += dy
        self.facing = (dx, dy)


@dataclass
class Beam:
    """Resolved ranged attack: travel path end points, hit cells and a display countdown."""

    start: Point
    end: Point
    impacts: List[Point] = field(default_factory=list)
    timer: int = BEAM_DISPLAY_FRAMES

    @property
    def expired(self) -> bool:
        return self.timer <= 0

    def tick(self) -> None:
        if self.timer > 0:
            self.timer -= 1

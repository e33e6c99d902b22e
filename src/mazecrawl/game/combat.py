from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..maze.grid import Grid, Point
from ..maze.tiles import Tile
from .entities import Beam, Enemy, Player, is_cardinal

logger = logging.getLogger(__name__)

MELEE_DAMAGE = 1
SCREEN_SHAKE_MAGNITUDE = 8


@dataclass
class ShotResult:
    """Outcome of one beam shot.

    ``fired`` is False for a no-op shot (zero/diagonal direction or the first
    cell off the map); ``blocked`` is True when a wall sits right in front of
    the shooter, in which case no beam is produced.
    """

    fired: bool = False
    blocked: bool = False
    beam: Optional[Beam] = None
    killed: List[Enemy] = field(default_factory=list)

    @property
    def kills(self) -> int:
        return len(self.killed)


def melee_attack(origin: Point, enemies: Iterable[Enemy]) -> List[Enemy]:
    """Hit every living enemy at Manhattan distance 1; returns the ones killed."""
    killed: List[Enemy] = []
    for enemy in enemies:
        if not enemy.alive or enemy.distance_to(origin) != 1:
            continue
        if enemy.take_damage(MELEE_DAMAGE):
            killed.append(enemy)
    logger.debug("Melee from %s killed %d", origin, len(killed))
    return killed


def resolve_beam(
    grid: Grid,
    origin: Point,
    dx: int,
    dy: int,
    enemies: Iterable[Enemy],
    penetration: bool = False,
) -> ShotResult:
    """
    Trace a beam from origin along (dx, dy) until it leaves the map or meets a wall.

    Every living enemy on the way is killed outright regardless of its hp. Without
    penetration the beam stops at the first kill. The beam's end point is the last
    impact, or the last open cell before the wall/edge when nothing was hit.
    """
    if not is_cardinal(dx, dy):
        return ShotResult()
    first = origin.offset(dx, dy)
    if not grid.in_bounds(first.x, first.y):
        return ShotResult()
    if grid.get(first.x, first.y) is Tile.WALL:
        logger.debug("Beam from %s blocked by adjacent wall", origin)
        return ShotResult(blocked=True)

    occupants: Dict[Point, Enemy] = {}
    for enemy in enemies:
        if enemy.alive:
            occupants.setdefault(enemy.position, enemy)

    result = ShotResult(fired=True)
    impacts: List[Point] = []
    x, y = first.x, first.y
    while grid.in_bounds(x, y):
        if grid.get(x, y) is Tile.WALL:
            break
        enemy = occupants.get(Point(x, y))
        if enemy is not None:
            enemy.kill()
            result.killed.append(enemy)
            impacts.append(Point(x, y))
            if not penetration:
                break
        x += dx
        y += dy

    end = impacts[-1] if impacts else Point(x - dx, y - dy)
    result.beam = Beam(start=origin, end=end, impacts=impacts)
    logger.debug("Beam %s -> %s killed %d (penetration=%s)", origin, end, result.kills, penetration)
    return result


def enemy_strike(enemy: Enemy, player: Player) -> bool:
    """Enemy attacks the player if its cooldown has elapsed; returns True on a hit."""
    if enemy.attack_cooldown > 0:
        return False
    player.hp -= enemy.damage
    enemy.attack_cooldown = enemy.attack_delay
    return True

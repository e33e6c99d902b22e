"""Enemy AI for the maze.

Each enemy is a small state machine advanced once per move-tick (not per
rendered frame):

- On its first tick an enemy draws a random move timer in [0, move_delay) so
  enemies spawned together do not move in lockstep.
- The attack cooldown counts down every tick.
- An enemy next to the player attacks instead of moving, whatever its move
  timer says.
- Otherwise the move timer counts down; when it expires it is re-armed with
  ``move_delay`` plus 0-1 ticks of jitter and the enemy takes one step:
  a greedy step toward the player when it decides to chase, else a random walk.

All randomness comes from the maze's runtime stream so a replayed tick
sequence reproduces the same decisions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..maze.grid import CARDINALS, Grid, Point
from ..rng import Mulberry32
from .combat import enemy_strike
from .entities import Enemy, Player

logger = logging.getLogger(__name__)

APPROACH_BASE_CHANCE = 0.2
APPROACH_NEAR_BONUS = 0.6
APPROACH_MAX_CHANCE = 0.85
NEAR_RANGE = 6
CHASE_RANGE = 10
BACKTRACK_BLOCK_CHANCE = 0.7
MOVE_JITTER = 2


@dataclass
class Strike:
    enemy: Enemy
    damage: int


def approach_chance(distance: int) -> float:
    bonus = APPROACH_NEAR_BONUS if distance <= NEAR_RANGE else 0.0
    return min(APPROACH_MAX_CHANCE, APPROACH_BASE_CHANCE + bonus)


class EnemyController:
    def __init__(self, rng: Mulberry32) -> None:
        self.rng = rng

    def update(self, grid: Grid, enemies: Sequence[Enemy], player: Player) -> List[Strike]:
        """Advance every living enemy by one move-tick; returns the attacks that landed."""
        strikes: List[Strike] = []
        target = player.position
        for enemy in enemies:
            if not enemy.alive:
                continue
            if enemy.move_timer is None:
                enemy.move_timer = self.rng.next_int(max(1, enemy.move_delay))
            if enemy.attack_cooldown > 0:
                enemy.attack_cooldown -= 1

            distance = enemy.distance_to(target)
            if distance == 1:
                if enemy_strike(enemy, player):
                    logger.debug("Enemy at %s hit player for %d", enemy.position, enemy.damage)
                    strikes.append(Strike(enemy=enemy, damage=enemy.damage))
                continue

            if enemy.move_timer > 0:
                enemy.move_timer -= 1
                continue
            enemy.move_timer = max(1, enemy.move_delay) + self.rng.next_int(MOVE_JITTER)

            moved = False
            if self.rng.next() < approach_chance(distance) and distance <= CHASE_RANGE:
                moved = self._chase(grid, enemies, enemy, target)
            if not moved:
                moved = self._wander(grid, enemies, enemy, target)
            if not moved:
                logger.debug("Enemy at %s has nowhere to go", enemy.position)
        return strikes

    def _chase(self, grid: Grid, enemies: Sequence[Enemy], enemy: Enemy, target: Point) -> bool:
        ranked = sorted(
            CARDINALS,
            key=lambda d: abs(enemy.x + d[0] - target.x) + abs(enemy.y + d[1] - target.y),
        )
        return any(self._try_step(grid, enemies, enemy, target, dx, dy) for dx, dy in ranked)

    def _wander(self, grid: Grid, enemies: Sequence[Enemy], enemy: Enemy, target: Point) -> bool:
        order: List[int] = []
        while len(order) < len(CARDINALS):
            idx = self.rng.next_int(len(CARDINALS))
            if idx not in order:
                order.append(idx)
        return any(self._try_step(grid, enemies, enemy, target, *CARDINALS[idx]) for idx in order)

    def _try_step(
        self,
        grid: Grid,
        enemies: Sequence[Enemy],
        enemy: Enemy,
        target: Point,
        dx: int,
        dy: int,
    ) -> bool:
        nx, ny = enemy.x + dx, enemy.y + dy
        if grid.is_wall(nx, ny):
            return False
        if any(other is not enemy and other.alive and other.x == nx and other.y == ny for other in enemies):
            return False
        # Never walk into the player; adjacency is handled as an attack.
        if nx == target.x and ny == target.y:
            return False
        if nx == enemy.last_x and ny == enemy.last_y and self.rng.next() < BACKTRACK_BLOCK_CHANCE:
            return False
        enemy.step(dx, dy)
        return True


__all__ = ["EnemyController", "Strike", "approach_chance"]

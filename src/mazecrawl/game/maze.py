from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from ..config.settings import GameSettings
from ..maze.generator import START, MazeGenerator
from ..maze.grid import Grid, Point
from ..maze.tiles import Tile
from ..rng import Mulberry32
from .ai import EnemyController, Strike
from .combat import SCREEN_SHAKE_MAGNITUDE, melee_attack, resolve_beam
from .entities import Beam, Direction, Enemy, Player, is_cardinal
from .events import (
    TONE_BEAM,
    TONE_BEAM_BLOCKED,
    TONE_GOAL,
    TONE_KILL,
    TONE_MOVE,
    TONE_PLAYER_HIT,
    EventEmitter,
    GameEvent,
)

logger = logging.getLogger(__name__)

POINTS_PER_COIN = 10
HIDDEN_ROOM_REVEAL_RANGE = 2


class Maze(EventEmitter):
    """One playable maze: the generated grid plus all mutable gameplay state.

    Generation and the runtime AI draw from two separate Mulberry32 streams
    seeded with the same seed, so replaying the same inputs reproduces the
    whole game. Every mutation happens through the methods below; renderers
    only read the accessors.
    """

    def __init__(
        self,
        width: int,
        height: int,
        seed: int,
        difficulty_value: int = 500,
        settings: Optional[GameSettings] = None,
    ) -> None:
        super().__init__()
        self.seed = seed
        self.difficulty_value = difficulty_value
        self.settings = settings or GameSettings()

        generated = MazeGenerator(seed, self.settings).generate(width, height)
        placement = generated.placement
        self.grid: Grid = generated.grid
        self.goal: Point = generated.goal
        self.reachable: List[Point] = generated.reachable
        self.hidden_room: Optional[Point] = placement.hidden_room
        self.door: Optional[Point] = placement.door
        self.key: Optional[Point] = placement.key
        self.total_coins: int = placement.total_coins
        self.hidden_room_visible: bool = False

        self.player = Player(position=generated.start)
        self.enemies: List[Enemy] = []
        if placement.enemy_stats is not None:
            self.enemies = [Enemy.spawn(p, placement.enemy_stats) for p in placement.enemy_spawns]
        self.beam: Optional[Beam] = None

        self._ai = EnemyController(Mulberry32(seed))
        self._death_reported = False
        logger.info(
            "Maze ready %dx%d seed=%d: %d coins, %d enemies",
            width,
            height,
            seed,
            self.total_coins,
            len(self.enemies),
        )

    # ---- Accessors -------------------------------------------------------
    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.grid.width, self.grid.height

    @property
    def player_pos(self) -> Point:
        return self.player.position

    @property
    def player_hp(self) -> int:
        return self.player.hp

    @property
    def facing(self) -> Direction:
        return self.player.facing

    @property
    def coins_collected(self) -> int:
        return self.player.coins

    @property
    def has_key(self) -> bool:
        return self.player.has_key

    @property
    def score(self) -> int:
        return self.player.coins * POINTS_PER_COIN

    @property
    def living_enemies(self) -> List[Enemy]:
        return [e for e in self.enemies if e.alive]

    def enemy_at(self, x: int, y: int) -> Optional[Enemy]:
        for enemy in self.enemies:
            if enemy.alive and enemy.x == x and enemy.y == y:
                return enemy
        return None

    def is_player_at_goal(self) -> bool:
        return self.player.position == self.goal

    # ---- Player ----------------------------------------------------------
    def move_player(self, dx: int, dy: int) -> bool:
        """Attempt to move the player by one cardinal step.

        Returns True if the move happened. Walls block; every other tile is
        entered and its pickup (coin, giant coin, key, door) is applied once.
        """
        if not is_cardinal(dx, dy):
            return False
        target = self.player.position.offset(dx, dy)
        if self.grid.is_wall(target.x, target.y):
            logger.debug("Blocked move by (%d, %d) from %s", dx, dy, self.player.position)
            return False

        self.player.position = target
        self.player.facing = (dx, dy)
        self._collect(target)
        self._update_hidden_room_visibility()
        self._emit(GameEvent.PLAYER_MOVED, position=target, tone=TONE_MOVE)

        if self.is_player_at_goal():
            logger.info("Player reached the goal at %s", target)
            self._emit(GameEvent.GOAL_REACHED, position=target, tones=TONE_GOAL)
        return True

    def _collect(self, cell: Point) -> None:
        tile = self.grid.get(cell.x, cell.y)
        if tile.is_coin:
            self.player.coins += tile.coin_value
            self.grid.set(cell.x, cell.y, Tile.PATH)
            logger.debug("Collected %s worth %d at %s", tile.name, tile.coin_value, cell)
            self._emit(
                GameEvent.COIN_COLLECTED,
                position=cell,
                value=tile.coin_value,
                collected=self.player.coins,
                total=self.total_coins,
            )
        elif tile is Tile.KEY:
            self.player.has_key = True
            self.hidden_room_visible = True
            self.grid.set(cell.x, cell.y, Tile.PATH)
            logger.info("Key collected at %s", cell)
            self._emit(GameEvent.KEY_COLLECTED, position=cell)
        elif tile is Tile.DOOR:
            self.grid.set(cell.x, cell.y, Tile.PATH)
            logger.debug("Door opened at %s", cell)
            self._emit(GameEvent.DOOR_OPENED, position=cell)

    def _update_hidden_room_visibility(self) -> None:
        # Only re-evaluated near the door; elsewhere the flag keeps its last value.
        if self.door is None:
            return
        if self.player.position.manhattan(self.door) <= HIDDEN_ROOM_REVEAL_RANGE:
            self.hidden_room_visible = self.player.has_key

    def reset_player(self) -> None:
        """Put the player back on the start cell; items and enemies are untouched."""
        self.player.position = START
        logger.debug("Player reset to %s", START)

    # ---- Combat ----------------------------------------------------------
    def player_attack(self) -> int:
        """Melee every adjacent living enemy for 1 damage; returns the number killed."""
        killed = melee_attack(self.player.position, self.enemies)
        for enemy in killed:
            self._reward_kill(enemy)
        return len(killed)

    def player_shoot(self, dx: int, dy: int) -> int:
        """Fire a beam from the player along (dx, dy); returns the number killed."""
        result = resolve_beam(
            self.grid,
            self.player.position,
            dx,
            dy,
            self.enemies,
            penetration=self.settings.beam_penetration,
        )
        if result.blocked:
            self.beam = None
            self._emit(GameEvent.BEAM_BLOCKED, direction=(dx, dy), tone=TONE_BEAM_BLOCKED)
            return 0
        if not result.fired:
            return 0

        self.beam = result.beam
        self._emit(
            GameEvent.BEAM_FIRED,
            beam=self.beam,
            direction=(dx, dy),
            shake=SCREEN_SHAKE_MAGNITUDE,
            tone=TONE_BEAM,
        )
        for enemy in result.killed:
            self._reward_kill(enemy)
        return result.kills

    def _reward_kill(self, enemy: Enemy) -> None:
        self.player.coins += 1
        logger.debug("Enemy killed at %s", enemy.position)
        self._emit(GameEvent.ENEMY_KILLED, position=enemy.position, tone=TONE_KILL)

    def tick_beam(self) -> None:
        if self.beam is None:
            return
        self.beam.tick()
        if self.beam.expired:
            self.beam = None

    # ---- Enemies ---------------------------------------------------------
    def update_enemies(self) -> List[Strike]:
        """Run one AI move-tick; reports hits and, once, the player's death."""
        strikes = self._ai.update(self.grid, self.enemies, self.player)
        for strike in strikes:
            self._emit(
                GameEvent.PLAYER_HIT,
                position=strike.enemy.position,
                damage=strike.damage,
                hp=self.player.hp,
                tone=TONE_PLAYER_HIT,
            )
        if not self.player.alive and not self._death_reported:
            self._death_reported = True
            logger.info("Player died at %s", self.player.position)
            self._emit(GameEvent.PLAYER_DIED, position=self.player.position)
        return strikes

    # ---- Export ----------------------------------------------------------
    def to_str_lines(self) -> List[str]:
        """ASCII view: '@' player, 'E' living enemy, an unrevealed hidden room drawn as wall."""
        markers: Dict[Point, str] = {}
        if self.hidden_room is not None and not self.hidden_room_visible:
            if self.grid.get(self.hidden_room.x, self.hidden_room.y) is not Tile.PATH:
                markers[self.hidden_room] = Tile.WALL.glyph
        for enemy in self.living_enemies:
            markers[enemy.position] = "E"
        markers[self.player.position] = "@"
        return self.grid.to_str_lines(markers)

    def __str__(self) -> str:
        return "\n".join(self.to_str_lines())


__all__ = ["Maze", "POINTS_PER_COIN"]

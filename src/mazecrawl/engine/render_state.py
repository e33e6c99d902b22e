from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from ..game.entities import Direction
from ..game.maze import Maze
from ..maze.grid import Point
from ..maze.tiles import Tile

if TYPE_CHECKING:
    from .session import SessionState


@dataclass(frozen=True)
class EnemyView:
    x: int
    y: int
    alive: bool
    facing: Optional[Direction]


@dataclass(frozen=True)
class BeamView:
    start: Point
    end: Point
    impacts: Tuple[Point, ...]
    timer: int


@dataclass(frozen=True)
class RenderSnapshot:
    """Immutable copy of everything a renderer may draw for one frame.

    Built from the live maze but sharing no mutable objects with it, so a
    renderer holding on to a snapshot can never change gameplay state.
    """

    state: "SessionState"
    width: int
    height: int
    tiles: Tuple[Tuple[Tile, ...], ...]
    player: Point
    facing: Direction
    goal: Point
    enemies: Tuple[EnemyView, ...]
    beam: Optional[BeamView]
    hidden_room: Optional[Point]
    hidden_room_visible: bool
    hp: int
    coins_collected: int
    total_coins: int
    has_key: bool
    score: int
    elapsed: float
    beam_cooldown_remaining_ms: float
    show_grid: bool

    @classmethod
    def capture(
        cls,
        maze: Maze,
        state: "SessionState",
        elapsed: float,
        beam_cooldown_remaining_ms: float,
    ) -> "RenderSnapshot":
        beam = None
        if maze.beam is not None:
            beam = BeamView(
                start=maze.beam.start,
                end=maze.beam.end,
                impacts=tuple(maze.beam.impacts),
                timer=maze.beam.timer,
            )
        return cls(
            state=state,
            width=maze.width,
            height=maze.height,
            tiles=maze.grid.rows(),
            player=maze.player_pos,
            facing=maze.facing,
            goal=maze.goal,
            enemies=tuple(EnemyView(e.x, e.y, e.alive, e.facing) for e in maze.enemies),
            beam=beam,
            hidden_room=maze.hidden_room,
            hidden_room_visible=maze.hidden_room_visible,
            hp=maze.player_hp,
            coins_collected=maze.coins_collected,
            total_coins=maze.total_coins,
            has_key=maze.has_key,
            score=maze.score,
            elapsed=elapsed,
            beam_cooldown_remaining_ms=beam_cooldown_remaining_ms,
            show_grid=maze.settings.grid_display,
        )


__all__ = ["BeamView", "EnemyView", "RenderSnapshot"]

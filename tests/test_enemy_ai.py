from __future__ import annotations

import pytest

from mazecrawl.game.ai import EnemyController, approach_chance
from mazecrawl.game.entities import Enemy, Player
from mazecrawl.maze.grid import Point
from mazecrawl.rng import Mulberry32

ROOM = [
    "#######",
    "#.....#",
    "#.....#",
    "#.....#",
    "#######",
]

CORRIDOR = [
    "############",
    "#..........#",
    "############",
]


def _enemy(x, y, **kw):
    kw.setdefault("move_delay", 1)
    kw.setdefault("attack_delay", 2)
    return Enemy(x=x, y=y, hp=3, damage=1, **kw)


def test_approach_chance():
    assert approach_chance(1) == pytest.approx(0.8)
    assert approach_chance(6) == pytest.approx(0.8)
    assert approach_chance(7) == pytest.approx(0.2)


def test_adjacent_enemy_attacks_before_move_timer(make_grid):
    grid = make_grid(ROOM)
    player = Player(position=Point(1, 1))
    enemy = _enemy(2, 1, move_timer=5)
    strikes = EnemyController(Mulberry32(1)).update(grid, [enemy], player)

    assert len(strikes) == 1
    assert strikes[0].enemy is enemy
    assert player.hp == 4
    assert enemy.position == Point(2, 1)
    assert enemy.move_timer == 5
    assert enemy.attack_cooldown == 2


def test_attack_cooldown_counts_down_per_tick(make_grid):
    grid = make_grid(ROOM)
    player = Player(position=Point(1, 1), hp=100)
    enemy = _enemy(1, 2)
    ai = EnemyController(Mulberry32(1))
    hits = [len(ai.update(grid, [enemy], player)) for _ in range(6)]
    assert hits == [1, 0, 1, 0, 1, 0]
    assert player.hp == 97


def test_move_timer_bootstrap_and_wait(make_grid):
    grid = make_grid(CORRIDOR)
    player = Player(position=Point(1, 1))
    enemy = _enemy(8, 1, move_delay=4)
    ai = EnemyController(Mulberry32(3))
    ai.update(grid, [enemy], player)
    assert enemy.move_timer is not None
    assert 0 <= enemy.move_timer <= 5

    waiting = _enemy(8, 1, move_timer=3)
    ai.update(grid, [waiting], player)
    assert waiting.position == Point(8, 1)
    assert waiting.move_timer == 2


def test_expired_timer_moves_and_rearms(make_grid):
    grid = make_grid(CORRIDOR)
    player = Player(position=Point(1, 1))
    enemy = _enemy(8, 1, move_delay=3, move_timer=0)
    EnemyController(Mulberry32(5)).update(grid, [enemy], player)
    assert enemy.position in (Point(7, 1), Point(9, 1))
    assert enemy.move_timer in (3, 4)
    assert enemy.facing in ((-1, 0), (1, 0))
    assert (enemy.last_x, enemy.last_y) == (8, 1)


def test_dead_enemies_are_ignored(make_grid):
    grid = make_grid(ROOM)
    player = Player(position=Point(1, 1))
    enemy = _enemy(2, 1)
    enemy.kill()
    assert EnemyController(Mulberry32(1)).update(grid, [enemy], player) == []
    assert player.hp == 5
    assert enemy.move_timer is None


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_enemies_never_overlap_walls_each_other_or_player(make_grid, seed):
    grid = make_grid(ROOM)
    player = Player(position=Point(3, 2), hp=10_000)
    enemies = [_enemy(1, 1), _enemy(5, 3), _enemy(5, 1)]
    ai = EnemyController(Mulberry32(seed))
    for _ in range(200):
        ai.update(grid, enemies, player)
        cells = [e.position for e in enemies]
        assert len(set(cells)) == len(cells)
        for cell in cells:
            assert grid.is_walkable(cell.x, cell.y)
            assert cell != player.position


@pytest.mark.parametrize("seed", [11, 12, 13])
def test_enemy_closes_in_on_player(make_grid, seed):
    grid = make_grid(CORRIDOR)
    player = Player(position=Point(1, 1), hp=10_000)
    enemy = _enemy(6, 1)
    ai = EnemyController(Mulberry32(seed))
    for _ in range(400):
        ai.update(grid, [enemy], player)
    # Once adjacent an enemy only attacks, so it stays put
    assert enemy.distance_to(player.position) == 1
    assert player.hp < 10_000


def test_same_seed_same_decisions(make_grid):
    def run(seed):
        grid = make_grid(ROOM)
        player = Player(position=Point(3, 2), hp=10_000)
        enemies = [_enemy(1, 1), _enemy(5, 3)]
        ai = EnemyController(Mulberry32(seed))
        trail = []
        for _ in range(50):
            ai.update(grid, enemies, player)
            trail.append(tuple(e.position for e in enemies))
        return trail, player.hp

    assert run(21) == run(21)

from __future__ import annotations

from mazecrawl.game.events import GameEvent
from mazecrawl.maze.grid import Point
from mazecrawl.maze.tiles import Tile

CORRIDOR = [
    "###########",
    "#.c$k+....#",
    "###########",
]


def test_blocked_by_walls(arena):
    maze = arena(CORRIDOR)
    events = []
    maze.add_listener(lambda e, p: events.append(e))

    assert maze.move_player(0, -1) is False
    assert maze.move_player(-1, 0) is False
    assert maze.player_pos == Point(1, 1)
    assert events == []


def test_only_cardinal_movement(arena):
    maze = arena(CORRIDOR)
    assert maze.move_player(1, 1) is False
    assert maze.move_player(0, 0) is False
    assert maze.move_player(2, 0) is False
    assert maze.player_pos == Point(1, 1)


def test_move_updates_facing_and_emits(arena):
    maze = arena(CORRIDOR, player=(2, 1))
    events = []
    maze.add_listener(lambda e, p: events.append((e, p)))

    assert maze.move_player(-1, 0) is True
    assert maze.player_pos == Point(1, 1)
    assert maze.facing == (-1, 0)
    event, payload = events[-1]
    assert event is GameEvent.PLAYER_MOVED
    assert payload["tone"] == (400, 0.1)


def test_pickups_apply_once(arena):
    maze = arena(CORRIDOR)
    collected = []
    maze.add_listener(lambda e, p: collected.append(e))

    assert maze.move_player(1, 0)
    assert maze.coins_collected == 1
    assert maze.grid.get(2, 1) is Tile.PATH

    assert maze.move_player(1, 0)
    assert maze.coins_collected == 11
    assert maze.grid.get(3, 1) is Tile.PATH

    assert maze.move_player(1, 0)
    assert maze.has_key is True
    assert maze.grid.get(4, 1) is Tile.PATH

    assert maze.move_player(1, 0)
    assert maze.grid.get(5, 1) is Tile.PATH

    # Walking back over the same cells changes nothing
    for _ in range(4):
        assert maze.move_player(-1, 0)
    assert maze.coins_collected == 11
    assert collected.count(GameEvent.COIN_COLLECTED) == 2
    assert collected.count(GameEvent.KEY_COLLECTED) == 1
    assert collected.count(GameEvent.DOOR_OPENED) == 1


def test_score_is_ten_per_coin(arena):
    maze = arena(CORRIDOR)
    maze.move_player(1, 0)
    maze.move_player(1, 0)
    assert maze.score == 110


def test_hidden_room_revealed_near_door_with_key(arena):
    maze = arena(CORRIDOR, door=(5, 1), hidden_room=(5, 0))

    maze.move_player(1, 0)  # (2,1), 3 from door, no key
    assert maze.hidden_room_visible is False
    maze.move_player(1, 0)  # (3,1)
    maze.move_player(1, 0)  # (4,1) picks up key next to the door
    assert maze.hidden_room_visible is True
    maze.move_player(1, 0)  # (5,1) on the door
    maze.move_player(1, 0)  # (6,1)
    maze.move_player(1, 0)  # (7,1), distance 2
    assert maze.hidden_room_visible is True
    maze.move_player(1, 0)  # (8,1), distance 3: flag left as it was
    assert maze.hidden_room_visible is True
    maze.move_player(1, 0)
    assert maze.hidden_room_visible is True


def test_key_far_from_door_reveals_room(arena):
    maze = arena(
        [
            "############",
            "#.k.......+#",
            "############",
        ],
        door=(10, 1),
        hidden_room=(10, 0),
    )
    assert maze.move_player(1, 0)
    assert maze.has_key is True
    assert maze.hidden_room_visible is True
    for _ in range(4):
        maze.move_player(1, 0)
    assert maze.player_pos == Point(6, 1)
    assert maze.hidden_room_visible is True


def test_room_hides_near_door_without_key(arena):
    maze = arena(
        [
            "#########",
            "#....+..#",
            "#########",
        ],
        door=(5, 1),
        hidden_room=(5, 0),
    )
    maze.hidden_room_visible = True
    maze.move_player(1, 0)  # (2,1), distance 3: untouched
    assert maze.hidden_room_visible is True
    maze.move_player(1, 0)  # (3,1), distance 2 and no key
    assert maze.hidden_room_visible is False


def test_hidden_room_stays_hidden_without_key(arena):
    maze = arena(
        [
            "#########",
            "#....+..#",
            "#########",
        ],
        door=(5, 1),
        hidden_room=(5, 0),
    )
    for _ in range(6):
        maze.move_player(1, 0)
    assert maze.player_pos == Point(7, 1)
    assert maze.hidden_room_visible is False


def test_reaching_goal(arena):
    maze = arena(["#####", "#.G.#", "#####"])
    events = []
    maze.add_listener(lambda e, p: events.append(e))
    assert maze.is_player_at_goal() is False
    assert maze.move_player(1, 0)
    assert maze.is_player_at_goal() is True
    assert GameEvent.GOAL_REACHED in events
    # Goal tile is not consumed
    assert maze.grid.get(2, 1) is Tile.GOAL


def test_reset_player_keeps_items(arena):
    maze = arena(CORRIDOR)
    maze.move_player(1, 0)
    maze.move_player(1, 0)
    maze.reset_player()
    assert maze.player_pos == Point(1, 1)
    assert maze.coins_collected == 11
    assert maze.grid.get(2, 1) is Tile.PATH


def test_reset_player_leaves_room_visibility_alone(arena):
    maze = arena(CORRIDOR, player=(3, 1), door=(5, 1), hidden_room=(5, 0))
    maze.move_player(1, 0)  # (4,1) picks up the key beside the door
    assert maze.hidden_room_visible is True
    maze.reset_player()
    assert maze.player_pos == Point(1, 1)
    assert maze.hidden_room_visible is True


def test_listener_errors_do_not_break_moves(arena):
    maze = arena(CORRIDOR)

    def broken(event, payload):
        raise RuntimeError("boom")

    seen = []
    maze.add_listener(broken)
    maze.add_listener(lambda e, p: seen.append(e))
    assert maze.move_player(1, 0) is True
    assert GameEvent.PLAYER_MOVED in seen
    maze.remove_listener(broken)


def test_ascii_view_marks_player_and_hides_room(arena):
    maze = arena(
        [
            "#####",
            "#.$.#",
            "#####",
        ],
        player=(3, 1),
        enemies=[(1, 1)],
        door=(3, 1),
        hidden_room=(2, 1),
    )
    assert maze.to_str_lines()[1] == "#E#@#"
    maze.hidden_room_visible = True
    assert maze.to_str_lines()[1] == "#E$@#"

from enum import Enum


class Tile(Enum):
    """Semantic kind of a maze cell.

    - WALL: The only non-walkable tile
    - PATH: Open corridor
    - GOAL: Exit; reaching it completes the game
    - COIN / GIANT_COIN: Pickups worth 1 / 10 coins
    - DOOR: Entrance of the hidden room; always passable, opens on entry
    - HIDDEN_ROOM: Transient marker, overwritten by the giant coin during placement
    - KEY: Reveals the hidden room when picked up
    """

    PATH = 0
    WALL = 1
    GOAL = 2
    COIN = 3
    DOOR = 4
    GIANT_COIN = 5
    HIDDEN_ROOM = 6
    KEY = 7

    @property
    def is_coin(self) -> bool:
        return self in {Tile.COIN, Tile.GIANT_COIN}

    @property
    def coin_value(self) -> int:
        return {Tile.COIN: 1, Tile.GIANT_COIN: 10}.get(self, 0)

    @property
    def glyph(self) -> str:
        """A single-character visualization useful for logs/debug."""
        return {
            Tile.PATH: ".",
            Tile.WALL: "#",
            Tile.GOAL: "G",
            Tile.COIN: "c",
            Tile.DOOR: "+",
            Tile.GIANT_COIN: "$",
            Tile.HIDDEN_ROOM: "?",
            Tile.KEY: "k",
        }[self]

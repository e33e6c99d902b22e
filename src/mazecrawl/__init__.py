"""
Maze Crawl package root.

Contains the simulation core of the maze game: seeded generation, the maze
model with its pickups and hidden room, beam/melee combat, enemy AI and the
game session that drives them. Rendering, audio and input devices stay outside
of this package; they consume snapshots and events and feed intents back in.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
]

from __future__ import annotations

import logging

from ..exceptions import MazeConfigError

logger = logging.getLogger(__name__)

BASE_SIZES = {
    "small": 21,
    "medium": 25,
    "large": 31,
}
MAX_EXTRA = 80


def maze_dimensions(preset: str = "medium", difficulty_value: int = 500) -> int:
    """Side length of the square maze for a size preset and a 1..1000 difficulty value.

    The difficulty adds up to 80 cells on top of the preset; the result is
    always odd so the carver's two-cell steps line up with the border.
    """
    if preset not in BASE_SIZES:
        raise MazeConfigError(f"Unknown size preset: {preset!r}")
    value = max(1, min(1000, int(difficulty_value)))
    extra = (value - 1) * MAX_EXTRA // 999
    size = BASE_SIZES[preset] + extra
    if size % 2 == 0:
        size += 1
    logger.debug("Maze size for preset=%s difficulty=%d -> %d", preset, value, size)
    return size

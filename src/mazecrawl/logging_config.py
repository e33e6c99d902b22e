from __future__ import annotations

import logging
import os

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
ENV_LOG_LEVEL = "MAZECRAWL_LOG_LEVEL"


def level_for_verbosity(verbosity: int) -> int:
    """Map the CLI's repeated -v count to a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0) -> int:
    """Configure the root logger for the CLI and return the level applied.

    A level name in MAZECRAWL_LOG_LEVEL (e.g. "debug") overrides the
    verbosity; unknown names are ignored.
    """
    level = level_for_verbosity(verbosity)
    override = os.getenv(ENV_LOG_LEVEL, "").strip().upper()
    if override:
        named = logging.getLevelName(override)
        if isinstance(named, int):
            level = named
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level

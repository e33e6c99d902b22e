from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .app import run_headless
from .config.settings import SIZE_PRESETS, SettingsStore
from .logging_config import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="mazecrawl",
        description="Maze Crawl - seeded maze generation and headless play",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--seed", type=int, default=None, help="Maze seed (random if omitted)")
    parser.add_argument("--size", choices=SIZE_PRESETS, default=None, help="Maze size preset")
    parser.add_argument("--difficulty", type=int, default=None, help="Difficulty value 1..1000 (scales maze size)")
    parser.add_argument("--peaceful", action="store_true", help="Spawn no enemies")
    parser.add_argument("--print", dest="print_map", action="store_true", help="Print the ASCII map")
    parser.add_argument("--autoplay", action="store_true", help="Let the autopilot play the maze")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop autoplay after N frames")
    parser.add_argument("--tick-rate", type=float, default=60.0, help="Autoplay frame rate (Hz, 0 = unthrottled)")
    parser.add_argument("--settings", type=Path, default=None, help="Settings YAML file")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    settings = SettingsStore(args.settings).load()
    # CLI flags win over the settings file
    if args.size is not None:
        settings.difficulty = args.size
    if args.difficulty is not None:
        settings.difficulty_value = args.difficulty
    if args.peaceful:
        settings.peaceful = True

    return run_headless(
        settings=settings,
        seed=args.seed,
        autoplay=args.autoplay,
        print_map=args.print_map,
        max_steps=args.max_steps,
        tick_rate=args.tick_rate,
    )


if __name__ == "__main__":
    sys.exit(main())

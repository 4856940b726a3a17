"""
Command-line entry point for playing in a terminal.

Usage:
    turkey-sweeper [--size N] [--mines M] [--seed S] [--verbose]
"""
import argparse
import logging
import random
from typing import List, Optional

from .board import DEFAULT_CONFIG, BoardConfig
from .errors import ConfigurationError
from .terminal import TerminalGame


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Turkey sweeper - find the flock without spooking it"
    )
    parser.add_argument(
        "--size", type=int, default=DEFAULT_CONFIG.size,
        help="Board size (NxN)",
    )
    parser.add_argument(
        "--mines", type=int, default=DEFAULT_CONFIG.mine_count,
        help="Number of hidden turkeys",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine layout"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Print engine debug messages"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and start a terminal game."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = BoardConfig(args.size, args.mines)
    except ConfigurationError as exc:
        parser.error(str(exc))

    TerminalGame(config, random.Random(args.seed)).run()


if __name__ == "__main__":
    main()

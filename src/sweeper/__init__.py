"""
Turkey sweeper game module.

Provides the core game engine (board, cells, errors) and a text terminal
front end that drives it.
"""
from .cell import Cell, CellState, CellView, MineMark
from .board import (
    Board,
    BoardConfig,
    DEFAULT_CONFIG,
    FlagResult,
    GameStatus,
    RevealResult,
    chord,
    create_board,
    reveal,
    toggle_flag,
)
from .errors import ConfigurationError, CoordinateError, SweeperError

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "MineMark",
    "Board",
    "BoardConfig",
    "DEFAULT_CONFIG",
    "FlagResult",
    "GameStatus",
    "RevealResult",
    "chord",
    "create_board",
    "reveal",
    "toggle_flag",
    "ConfigurationError",
    "CoordinateError",
    "SweeperError",
]

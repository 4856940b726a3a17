"""
Exception types raised by the sweeper engine.

Routine in-grid requests that cannot apply (revealing a revealed cell,
flagging after the game ended, ...) are not errors; the board treats them
as no-ops. Only the conditions below raise.
"""


class SweeperError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(SweeperError, ValueError):
    """Raised when a board is constructed with an invalid size or mine count."""


class CoordinateError(SweeperError, IndexError):
    """Raised when a caller passes a (row, col) outside the grid."""

    def __init__(self, row: int, col: int, size: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside the {size}x{size} board"
        )
        self.row = row
        self.col = col
        self.size = size

"""
Cell module for the sweeper engine.

A Cell is pure game data: its coordinates, whether it holds a mine, its
reveal/flag state and its adjacent mine count. It carries no view handles;
presentation layers receive immutable CellView snapshots instead.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


class MineMark(Enum):
    """Display marks applied to mined cells when the game ends."""

    DETONATED = auto()
    PRESENT = auto()
    SURFACED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single position on the board.

    Attributes:
        row: Row index.
        col: Column index.
        has_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Hidden, revealed or flagged.
        mark: End-of-game display mark, only ever set on mines.
    """

    row: int
    col: int
    has_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    mark: Optional[MineMark] = None

    def reveal(self) -> bool:
        """
        Reveal this cell, clearing any flag on it.

        Returns:
            True if the cell was not revealed before.
        """
        if self.state == CellState.REVEALED:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden and unflagged."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to a single integer code.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.has_mine:
            return 9
        return self.adjacent_mines

    def to_view(self, disclose: bool = False) -> "CellView":
        """
        Snapshot this cell for a presentation layer.

        Mine and count information is withheld (None) unless the cell is
        revealed or ``disclose`` is set, which the board does once the game
        is over.
        """
        visible = disclose or self.is_revealed
        return CellView(
            row=self.row,
            col=self.col,
            revealed=self.is_revealed,
            flagged=self.is_flagged,
            adjacent_mines=(
                (0 if self.has_mine else self.adjacent_mines)
                if visible else None
            ),
            has_mine=self.has_mine if visible else None,
            mark=self.mark,
        )


@dataclass(frozen=True)
class CellView:
    """Read-only snapshot of a cell handed to presentation layers."""

    row: int
    col: int
    revealed: bool
    flagged: bool
    adjacent_mines: Optional[int]
    has_mine: Optional[bool]
    mark: Optional[MineMark] = None

    @property
    def position(self):
        return self.row, self.col

"""
Board module for the sweeper engine.

Implements the game board with lazy mine placement, cell revealing,
flood reveal, chording, flagging and win/loss detection.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

import numpy as np

from .cell import Cell, CellView, MineMark
from .errors import ConfigurationError, CoordinateError


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a square board.

    Attributes:
        size: Number of rows and columns.
        mine_count: Total mines to place.
    """

    size: int = 10
    mine_count: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size <= 0:
            raise ConfigurationError("Board size must be positive")
        if self.mine_count <= 0:
            raise ConfigurationError("Mine count must be positive")
        max_mines = self.total_cells - 1
        if self.mine_count > max_mines:
            raise ConfigurationError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.size * self.size

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.mine_count


DEFAULT_CONFIG = BoardConfig(10, 15)


# ============================================================================
# Operation Results
# ============================================================================

@dataclass
class RevealResult:
    """
    Outcome of a reveal or chord request.

    Attributes:
        status: Game status after the request.
        newly_revealed: Cells whose revealed flag changed, in reveal order.
        detonated: The mine that lost the game, if any.
        all_mines: Every mine, set only when the request lost the game.
        surfaced_mines: Unflagged mines marked when the request won the game.
    """

    status: GameStatus
    newly_revealed: List[CellView] = field(default_factory=list)
    detonated: Optional[CellView] = None
    all_mines: List[CellView] = field(default_factory=list)
    surfaced_mines: List[CellView] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Check if the request changed any cell."""
        return bool(
            self.newly_revealed or self.all_mines or self.surfaced_mines
        )

    def merge(self, other: "RevealResult") -> None:
        """Fold a later result into this one."""
        self.newly_revealed.extend(other.newly_revealed)
        self.all_mines.extend(other.all_mines)
        self.surfaced_mines.extend(other.surfaced_mines)
        if other.detonated is not None:
            self.detonated = other.detonated
        self.status = other.status


@dataclass(frozen=True)
class FlagResult:
    """Outcome of a flag toggle."""

    flagged: bool
    flags_remaining: int


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Sweeper game board.

    Owns a flat list of ``size * size`` cells indexed by
    ``row * size + col`` together with the game counters. Requests that
    cannot apply to an in-grid cell are silent no-ops; only out-of-range
    coordinates raise.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _cells: List[Cell] = field(default_factory=list, repr=False)
    _status: GameStatus = GameStatus.IN_PROGRESS
    _mines_placed: bool = False
    _revealed_safe_count: int = 0
    _flagged_count: int = 0

    def __post_init__(self) -> None:
        """Initialize the cells after dataclass creation."""
        self._init_cells()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_cells(self) -> None:
        """Create default cells in row-major order."""
        size = self.config.size
        self._cells = [
            Cell(row, col) for row in range(size) for col in range(size)
        ]

    def ensure_mines_placed(self, safe_row: int, safe_col: int) -> None:
        """
        Place mines and compute adjacency counts, once.

        Indices are drawn uniformly at random until ``mine_count`` distinct
        cells other than the safe cell hold a mine.

        Args:
            safe_row: Row of the cell that must stay mine-free.
            safe_col: Column of the cell that must stay mine-free.
        """
        self._check_position(safe_row, safe_col)
        if self._mines_placed:
            return

        safe_index = self._index(safe_row, safe_col)
        total = len(self._cells)
        placed = 0
        while placed < self.config.mine_count:
            index = self.rng.randrange(total)
            if index == safe_index or self._cells[index].has_mine:
                continue
            self._cells[index].has_mine = True
            placed += 1

        self._calculate_adjacent_mines()
        self._mines_placed = True
        logger.debug(
            "Placed %d mines on %dx%d board, safe cell (%d, %d)",
            placed, self.config.size, self.config.size, safe_row, safe_col,
        )

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for cell in self._cells:
            if cell.has_mine:
                cell.adjacent_mines = 0
                continue
            cell.adjacent_mines = sum(
                1 for neighbor in self._neighbors(cell) if neighbor.has_mine
            )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _index(self, row: int, col: int) -> int:
        return row * self.config.size + col

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        size = self.config.size
        return 0 <= row < size and 0 <= col < size

    def _check_position(self, row: int, col: int) -> None:
        if not self._is_valid_position(row, col):
            raise CoordinateError(row, col, self.config.size)

    def _cell_at(self, row: int, col: int) -> Cell:
        self._check_position(row, col)
        return self._cells[self._index(row, col)]

    def _neighbors(self, cell: Cell) -> List[Cell]:
        """
        Get the up-to-8 cells adjacent to ``cell``, clipped at the edges.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = cell.row + delta_row
                new_col = cell.col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append(self._cells[self._index(new_row, new_col)])
        return neighbors

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal the cell at the given position.

        On the first reveal, places mines avoiding this cell. A mine loses
        the game; a cell with no adjacent mines opens its empty area.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            The cells that changed and the resulting status.

        Raises:
            CoordinateError: If the position is outside the board.
        """
        cell = self._cell_at(row, col)
        if not self.is_playing or not cell.is_hidden:
            return RevealResult(self._status)

        self.ensure_mines_placed(row, col)

        if cell.has_mine:
            return self._detonate(cell)

        result = RevealResult(self._status)
        self._reveal_safe(cell, result)
        if cell.adjacent_mines == 0:
            self._flood_reveal(cell, result)

        self._check_win_condition(result)
        result.status = self._status
        return result

    def _reveal_safe(self, cell: Cell, result: RevealResult) -> None:
        """Reveal a single non-mine cell and record it."""
        if cell.reveal():
            self._revealed_safe_count += 1
            result.newly_revealed.append(cell.to_view())

    def _flood_reveal(self, start: Cell, result: RevealResult) -> None:
        """
        Breadth-first reveal outward from an empty cell.

        Each cell is visited at most once. Flagged and mined cells are never
        revealed, and cells with a nonzero count are revealed but not
        expanded.
        """
        queue = deque([start])
        visited = {self._index(start.row, start.col)}

        while queue:
            current = queue.popleft()
            for neighbor in self._neighbors(current):
                index = self._index(neighbor.row, neighbor.col)
                if index in visited or neighbor.is_flagged or neighbor.has_mine:
                    continue
                visited.add(index)
                self._reveal_safe(neighbor, result)
                if neighbor.adjacent_mines == 0:
                    queue.append(neighbor)

    def _detonate(self, trigger: Cell) -> RevealResult:
        """Lose the game and reveal every mine."""
        self._status = GameStatus.LOST
        result = RevealResult(self._status)

        for cell in self._cells:
            if not cell.has_mine:
                continue
            if cell.is_flagged:
                self._flagged_count -= 1
            cell.reveal()
            cell.mark = (
                MineMark.DETONATED if cell is trigger else MineMark.PRESENT
            )
            view = cell.to_view(disclose=True)
            result.newly_revealed.append(view)
            result.all_mines.append(view)
            if cell is trigger:
                result.detonated = view

        logger.debug("Game lost at (%d, %d)", trigger.row, trigger.col)
        return result

    def _check_win_condition(self, result: RevealResult) -> None:
        """Win once every non-mine cell is revealed."""
        if self._revealed_safe_count != self.config.safe_cells:
            return

        self._status = GameStatus.WON
        for cell in self._cells:
            if cell.has_mine and not cell.is_flagged:
                cell.mark = MineMark.SURFACED
                result.surfaced_mines.append(cell.to_view(disclose=True))
        logger.debug(
            "Game won with %d flags placed", self._flagged_count
        )

    def chord(self, row: int, col: int) -> RevealResult:
        """
        Chord action: reveal all hidden neighbors if flag count matches.

        Args:
            row: Row index of a revealed numbered cell.
            col: Column index of a revealed numbered cell.

        Returns:
            The aggregated result of every neighbor reveal.
        """
        cell = self._cell_at(row, col)
        result = RevealResult(self._status)
        if not self._can_chord(cell):
            return result

        for neighbor in self._neighbors(cell):
            if neighbor.is_hidden:
                result.merge(self.reveal(neighbor.row, neighbor.col))

        result.status = self._status
        return result

    def _can_chord(self, cell: Cell) -> bool:
        """Check if chord action is valid."""
        if not self.is_playing:
            return False
        if not cell.is_revealed or cell.adjacent_mines == 0:
            return False
        flag_count = sum(
            1 for neighbor in self._neighbors(cell) if neighbor.is_flagged
        )
        return flag_count == cell.adjacent_mines

    def toggle_flag(self, row: int, col: int) -> FlagResult:
        """
        Toggle flag on a hidden cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The cell's flag state and the flags remaining.
        """
        cell = self._cell_at(row, col)
        if self.is_playing and cell.toggle_flag():
            self._flagged_count += 1 if cell.is_flagged else -1
        return FlagResult(cell.is_flagged, self.flags_remaining)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def mine_count(self) -> int:
        return self.config.mine_count

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._status == GameStatus.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.LOST

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def revealed_safe_count(self) -> int:
        return self._revealed_safe_count

    @property
    def flagged_count(self) -> int:
        return self._flagged_count

    @property
    def flags_remaining(self) -> int:
        """Mines left to flag, never below zero."""
        return max(self.config.mine_count - self._flagged_count, 0)

    def get_cell(self, row: int, col: int) -> Cell:
        """Get the cell at a position."""
        return self._cell_at(row, col)

    def view(self, row: int, col: int) -> CellView:
        """Snapshot one cell, disclosing mines once the game is over."""
        return self._cell_at(row, col).to_view(disclose=not self.is_playing)

    def views(self) -> List[CellView]:
        """Snapshot every cell in row-major order."""
        disclose = not self.is_playing
        return [cell.to_view(disclose=disclose) for cell in self._cells]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        codes = [cell.to_observation() for cell in self._cells]
        return np.array(codes, dtype=np.int8).reshape(
            self.config.size, self.config.size
        )


# ============================================================================
# Functional Interface
# ============================================================================

def create_board(
    size: int, mine_count: int, rng: Optional[random.Random] = None
) -> Board:
    """
    Create a fresh board.

    Raises:
        ConfigurationError: If size or mine_count is out of range.
    """
    config = BoardConfig(size, mine_count)
    if rng is None:
        return Board(config)
    return Board(config, rng)


def reveal(board: Board, row: int, col: int) -> RevealResult:
    return board.reveal(row, col)


def chord(board: Board, row: int, col: int) -> RevealResult:
    return board.chord(row, col)


def toggle_flag(board: Board, row: int, col: int) -> FlagResult:
    return board.toggle_flag(row, col)

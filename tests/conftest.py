"""
Pytest configuration and shared fixtures.
"""
import io
import random
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import Board, BoardConfig, Cell
from sweeper.terminal import TerminalGame


# ============================================================================
# Deterministic Mine Layouts
# ============================================================================

class ScriptedRandom(random.Random):
    """
    Random source whose randrange() replays a fixed list of indices.

    Once the script runs out it falls back to the seeded generator.
    """

    def __init__(self, indices: Tuple[int, ...]) -> None:
        super().__init__(0)
        self._indices = list(indices)

    def randrange(self, start, stop=None, step=1):
        if self._indices:
            return self._indices.pop(0)
        return super().randrange(start, stop, step)


def layout_rng(size: int, mines: Iterable[Tuple[int, int]]) -> ScriptedRandom:
    """Build a random source that places mines at the given cells."""
    return ScriptedRandom(tuple(row * size + col for row, col in mines))


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory for a board whose mines land on fixed cells."""

    def _make(
        size: int,
        mines: Iterable[Tuple[int, int]],
        mine_count: Optional[int] = None,
    ) -> Board:
        mines = list(mines)
        config = BoardConfig(size, mine_count or len(mines))
        return Board(config, layout_rng(size, mines))

    return _make


@pytest.fixture
def default_board() -> Board:
    """Create a default 10x10 board with 15 mines."""
    return Board(rng=random.Random(1234))


@pytest.fixture
def corner_board(make_board) -> Board:
    """
    4x4 board with mines at (0, 3) and (3, 3).

    Adjacency counts:
        0 0 1 *
        0 0 1 1
        0 0 1 1
        0 0 1 *
    """
    return make_board(4, [(0, 3), (3, 3)])


@pytest.fixture
def open_board(make_board) -> Board:
    """5x5 board with a single mine in the bottom-right corner."""
    return make_board(5, [(4, 4)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(1, 1, has_mine=True)


# ============================================================================
# Terminal Fixtures
# ============================================================================

@pytest.fixture
def corner_game() -> TerminalGame:
    """Terminal session over the 4x4 corner layout, writing to a buffer."""
    return TerminalGame(
        BoardConfig(4, 2), layout_rng(4, [(0, 3), (3, 3)]), io.StringIO()
    )

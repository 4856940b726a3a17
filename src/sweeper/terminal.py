"""
Text terminal front end for the sweeper engine.

Keeps a glyph map keyed by (row, col) and redraws only the cells that each
engine result reports as changed. Coordinates typed by the player are
1-based.
"""
import random
import sys
from typing import Callable, Dict, Optional, TextIO, Tuple

import numpy as np

from .board import Board, BoardConfig, DEFAULT_CONFIG, GameStatus, RevealResult
from .cell import CellView, MineMark
from .errors import CoordinateError


# ============================================================================
# Constants
# ============================================================================

HIDDEN = "."
FLAG = "F"
TURKEY = "T"
DETONATED = "X"
EMPTY = " "

STATUS_START = "Make your first move."
STATUS_LOST = "Turkey hit! The flock is spooked."
STATUS_WON = "You saved the flock!"

HELP = """Commands:
  r ROW COL  reveal a cell
  f ROW COL  toggle a flag
  c ROW COL  chord around a revealed number
  n          new game
  h          show this help
  q          quit"""

Position = Tuple[int, int]


def glyph_for(view: CellView) -> str:
    """Pick the character drawn for a cell."""
    if view.mark == MineMark.DETONATED:
        return DETONATED
    if view.mark is not None:
        return TURKEY
    if view.flagged:
        return FLAG
    if not view.revealed:
        return HIDDEN
    if view.adjacent_mines:
        return str(view.adjacent_mines)
    return EMPTY


# ============================================================================
# Terminal Game
# ============================================================================

class TerminalGame:
    """
    Interactive game session driven by text commands.

    The session owns one Board at a time; ``n`` discards it and builds a
    fresh one.
    """

    def __init__(
        self,
        config: BoardConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            config: Board configuration used for every new game.
            rng: Random source shared by successive boards.
            out: Stream for all output (default: stdout).
        """
        self.config = config
        self.rng = rng or random.Random()
        self.out = out or sys.stdout
        self.board: Board
        self.glyphs: Dict[Position, str] = {}
        self.status_text = STATUS_START
        self.new_game()

    def new_game(self) -> None:
        """Replace the board and reset the render map."""
        self.board = Board(self.config, self.rng)
        size = self.config.size
        self.glyphs = {
            (row, col): HIDDEN for row in range(size) for col in range(size)
        }
        self.status_text = STATUS_START

    # ========================================================================
    # Command Handling
    # ========================================================================

    def handle(self, line: str) -> bool:
        """
        Execute one command line.

        Returns:
            False when the player asked to quit, True otherwise.
        """
        parts = line.split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command == "q":
            return False
        if command == "n":
            self.new_game()
            return True
        if command == "h":
            self._print(HELP)
            return True
        if command not in ("r", "f", "c"):
            self._print(f"Unknown command: {command} (h for help)")
            return True

        position = self._parse_position(args)
        if position is None:
            return True

        row, col = position
        try:
            if command == "r":
                self._apply(self.board.reveal(row, col))
            elif command == "c":
                self._apply(self.board.chord(row, col))
            else:
                self.board.toggle_flag(row, col)
                self.glyphs[position] = glyph_for(self.board.view(row, col))
        except CoordinateError:
            self._print(f"No cell at row {row + 1}, column {col + 1}")
        return True

    def _parse_position(self, args) -> Optional[Position]:
        if len(args) != 2:
            self._print("Expected ROW and COL")
            return None
        try:
            row, col = int(args[0]), int(args[1])
        except ValueError:
            self._print("ROW and COL must be numbers")
            return None
        return row - 1, col - 1

    def _apply(self, result: RevealResult) -> None:
        """Redraw the cells named by an engine result."""
        for view in result.newly_revealed + result.surfaced_mines:
            self.glyphs[view.position] = glyph_for(view)

        if result.status == GameStatus.LOST:
            self.status_text = STATUS_LOST
        elif result.status == GameStatus.WON:
            self.status_text = STATUS_WON

    # ========================================================================
    # Rendering
    # ========================================================================

    def render(self) -> str:
        """Render header, grid and status line as a string."""
        size = self.config.size
        hidden = int(np.count_nonzero(self.board.get_observation() == -1))
        width = len(str(size))

        lines = [
            f"Grid {size}x{size} | Mines {self.config.mine_count} | "
            f"Flags left {self.board.flags_remaining} | Hidden {hidden}",
            " " * (width + 1)
            + " ".join(str(col + 1).rjust(width) for col in range(size)),
        ]
        for row in range(size):
            cells = " ".join(
                self.glyphs[(row, col)].rjust(width) for col in range(size)
            )
            lines.append(f"{str(row + 1).rjust(width)} {cells}")
        lines.append(self.status_text)
        return "\n".join(lines)

    def run(self, read_line: Optional[Callable[[str], str]] = None) -> None:
        """Play until the player quits or input ends."""
        read_line = read_line or input
        self._print(HELP)
        while True:
            self._print(self.render())
            try:
                line = read_line("> ")
            except EOFError:
                break
            if not self.handle(line):
                break

    def _print(self, text: str) -> None:
        print(text, file=self.out)

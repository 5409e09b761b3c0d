"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their reveal state,
player mark (none/mine/question) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple

from .errors import IllegalAction, InvariantViolation


# ============================================================================
# Constants
# ============================================================================

class Mark(Enum):
    """Player annotation on a hidden cell."""

    NONE = auto()
    MINE = auto()
    QUESTION = auto()


class RevealOutcome(Enum):
    """Result of attempting to reveal a cell."""

    HIT_MINE = auto()
    REVEALED = auto()
    ALREADY_REVEALED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        row: Row index on the board.
        col: Column index on the board.
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        revealed: Whether the cell has been revealed.
        mark: Player mark, only meaningful while hidden.
    """

    row: int = 0
    col: int = 0
    is_mine: bool = False
    adjacent_mines: int = 0
    revealed: bool = False
    mark: Mark = Mark.NONE

    def plant_mine(self) -> None:
        """Place a mine in this cell."""
        if self.is_mine:
            raise InvariantViolation(f"Mine planted twice at {self.coord}")
        self.is_mine = True

    def reveal(self) -> RevealOutcome:
        """
        Reveal this cell.

        A mine is never revealed: the outcome is reported and the cell
        is left untouched. Revealing clears any mark.

        Returns:
            HIT_MINE, ALREADY_REVEALED or REVEALED.
        """
        if self.is_mine:
            return RevealOutcome.HIT_MINE
        if self.revealed:
            return RevealOutcome.ALREADY_REVEALED
        self.revealed = True
        self.mark = Mark.NONE
        return RevealOutcome.REVEALED

    def mark_mine(self) -> None:
        """Mark this cell as a suspected mine."""
        self._set_mark(Mark.MINE)

    def mark_question(self) -> None:
        """Mark this cell as uncertain."""
        self._set_mark(Mark.QUESTION)

    def unmark(self) -> None:
        """Remove any mark from this cell."""
        self._set_mark(Mark.NONE)

    def _set_mark(self, mark: Mark) -> None:
        if self.revealed:
            raise IllegalAction("A revealed cell cannot be marked")
        self.mark = mark

    @property
    def coord(self) -> Tuple[int, int]:
        """(row, col) position of the cell."""
        return self.row, self.col

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return not self.revealed

    @property
    def is_marked_mine(self) -> bool:
        """Check if cell is marked as a mine."""
        return self.mark is Mark.MINE

    @property
    def is_marked_question(self) -> bool:
        """Check if cell is marked as a question."""
        return self.mark is Mark.QUESTION

    def to_observation(self) -> int:
        """
        Convert cell to its snapshot code.

        Returns:
            -1: Hidden, unmarked cell
            -2: Hidden cell marked as a mine
            -3: Hidden cell marked as a question
            0-8: Revealed cell with adjacent mine count
        """
        if self.revealed:
            return self.adjacent_mines
        if self.mark is Mark.MINE:
            return -2
        if self.mark is Mark.QUESTION:
            return -3
        return -1

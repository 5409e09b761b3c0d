"""
Game session for Minesweeper.

Holds the board, the game state and the player's flag budget, and routes
player actions to the board according to the target cell's state.
"""
import logging
from enum import Enum, auto
from typing import List, Optional

from .board import Board, RevealReport
from .cell import Cell, Mark, RevealOutcome
from .errors import IllegalAction, InvariantViolation

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class Action(Enum):
    """Player actions on a single cell."""

    REVEAL = auto()
    MARK_MINE = auto()
    MARK_QUESTION = auto()
    UNMARK = auto()


# Legal actions by mark of a hidden cell, in menu order.
ACTIONS_BY_MARK = {
    Mark.NONE: (Action.REVEAL, Action.MARK_MINE, Action.MARK_QUESTION),
    Mark.MINE: (Action.MARK_QUESTION, Action.UNMARK),
    Mark.QUESTION: (Action.MARK_MINE, Action.UNMARK),
}


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    Session-level state machine.

    The flag budget starts at the mine count and always equals the mine
    count minus the number of cells marked as mines.
    """

    def __init__(self, board: Board) -> None:
        """
        Start a session on a board.

        Args:
            board: Board to play on; initialized here if it is not yet.
        """
        if not board.is_initialized:
            board.initialize()
        self.board = board
        self.state = GameState.PLAYING
        self.flag_budget = board.num_mines
        self.last_report: Optional[RevealReport] = None

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def game_over(self) -> bool:
        return self.state is not GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self.state is GameState.WON

    @property
    def is_lost(self) -> bool:
        return self.state is GameState.LOST

    def legal_actions(self, row: int, col: int) -> List[Action]:
        """
        Actions the player may take on a cell.

        Raises:
            CoordinateOutOfRange: Position is off the board.
            IllegalAction: Game is over or the cell is already revealed.
        """
        cell = self._target(row, col)
        return list(ACTIONS_BY_MARK[cell.mark])

    # ========================================================================
    # Player Actions
    # ========================================================================

    def perform(self, row: int, col: int, action: Action) -> GameState:
        """
        Apply an action to the cell at (row, col).

        Returns:
            Game state after the action.
        """
        cell = self._target(row, col)
        if action not in ACTIONS_BY_MARK[cell.mark]:
            raise IllegalAction(
                f"{action.name.replace('_', ' ').capitalize()} is not "
                f"available for this cell"
            )

        if action is Action.REVEAL:
            self._reveal(cell)
        elif action is Action.MARK_MINE:
            self._mark_mine(cell)
        elif action is Action.MARK_QUESTION:
            self._leave_mine_mark(cell)
            cell.mark_question()
        else:
            self._leave_mine_mark(cell)
            cell.unmark()

        self.check_invariants()
        return self.state

    def reveal(self, row: int, col: int) -> GameState:
        return self.perform(row, col, Action.REVEAL)

    def mark_mine(self, row: int, col: int) -> GameState:
        return self.perform(row, col, Action.MARK_MINE)

    def mark_question(self, row: int, col: int) -> GameState:
        return self.perform(row, col, Action.MARK_QUESTION)

    def unmark(self, row: int, col: int) -> GameState:
        return self.perform(row, col, Action.UNMARK)

    def _target(self, row: int, col: int) -> Cell:
        """Resolve an actionable cell or raise."""
        if self.game_over:
            raise IllegalAction("The game is over")
        self.board.validate_coord(row, col)
        cell = self.board.get_cell(row, col)
        if cell.revealed:
            raise IllegalAction("The cell is already revealed. Select another cell.")
        return cell

    def _reveal(self, cell: Cell) -> None:
        report = self.board.reveal(cell.row, cell.col)
        self.last_report = report
        self.flag_budget += report.cleared_mine_marks

        if report.outcome is RevealOutcome.HIT_MINE:
            self.state = GameState.LOST
            logger.info("Mine hit at (%d, %d); game lost", cell.row, cell.col)
        elif self.board.is_cleared:
            self.state = GameState.WON
            logger.info("All safe cells revealed; game won")

    def _mark_mine(self, cell: Cell) -> None:
        if self.flag_budget <= 0:
            raise IllegalAction(
                "All mines are already marked: some of the marked cells "
                "must not be mines."
            )
        cell.mark_mine()
        self.flag_budget -= 1

    def _leave_mine_mark(self, cell: Cell) -> None:
        """Return the flag to the budget when a mine mark is removed."""
        if cell.is_marked_mine:
            self.flag_budget += 1

    # ========================================================================
    # Invariants
    # ========================================================================

    def check_invariants(self) -> None:
        """Raise InvariantViolation if the session state is inconsistent."""
        self.board.check_invariants()
        marked = sum(1 for cell in self.board.iter_cells() if cell.is_marked_mine)
        if self.flag_budget != self.board.num_mines - marked:
            raise InvariantViolation(
                f"Flag budget {self.flag_budget} does not match "
                f"{marked} mine marks"
            )
        if self.flag_budget < 0:
            raise InvariantViolation("Flag budget went negative")
        if self.is_won != self.board.is_cleared:
            raise InvariantViolation("Win state disagrees with the board")

"""
Error types for the Minesweeper game.

Player-facing problems derive from MinesweeperError and are recoverable
by re-prompting. InvariantViolation signals a bug and is never caught.
"""


class MinesweeperError(Exception):
    """Base class for recoverable, player-facing errors."""


class InputParseError(MinesweeperError):
    """A token that should have been a number was not."""


class CoordinateOutOfRange(MinesweeperError):
    """A coordinate fell outside the board."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Coordinate ({row + 1}, {col + 1}) is outside the board")
        self.row = row
        self.col = col


class IllegalAction(MinesweeperError):
    """The requested action is not allowed in the current state."""


class InvariantViolation(AssertionError):
    """Internal board or game state became inconsistent."""

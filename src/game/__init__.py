"""
Minesweeper game module.

Provides core game logic including board management, cell state,
the session state machine and the text front end.
"""
from .cell import Cell, Mark, RevealOutcome
from .board import (
    Board,
    BoardConfig,
    MinePlacement,
    RevealReport,
    NEIGHBOR_OFFSETS,
)
from .errors import (
    MinesweeperError,
    InputParseError,
    CoordinateOutOfRange,
    IllegalAction,
    InvariantViolation,
)
from .session import Game, GameState, Action
from .renderer import render_board, cell_glyph

__all__ = [
    "Cell",
    "Mark",
    "RevealOutcome",
    "Board",
    "BoardConfig",
    "MinePlacement",
    "RevealReport",
    "NEIGHBOR_OFFSETS",
    "MinesweeperError",
    "InputParseError",
    "CoordinateOutOfRange",
    "IllegalAction",
    "InvariantViolation",
    "Game",
    "GameState",
    "Action",
    "render_board",
    "cell_glyph",
]

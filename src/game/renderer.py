"""
Text rendering of a Minesweeper board.
"""
from typing import List

from .board import Board
from .cell import Cell, Mark

HIDDEN_GLYPH = "X"
MINE_GLYPH = "*"
QUESTION_GLYPH = "?"
EMPTY_GLYPH = " "


def cell_glyph(cell: Cell, reveal_all: bool = False) -> str:
    """
    Glyph for one cell.

    Args:
        cell: Cell to draw.
        reveal_all: Show where the mines are (end of game).
    """
    if not reveal_all:
        if cell.mark is Mark.MINE:
            return MINE_GLYPH
        if cell.mark is Mark.QUESTION:
            return QUESTION_GLYPH
    if cell.revealed:
        if cell.adjacent_mines == 0:
            return EMPTY_GLYPH
        return str(cell.adjacent_mines)
    if reveal_all and cell.is_mine:
        return MINE_GLYPH
    return HIDDEN_GLYPH


def _column_headers(width: int) -> List[str]:
    tens = "   "
    ones = "   "
    for col in range(1, width + 1):
        tens += f" {col // 10 % 10} " if col >= 10 else "   "
        ones += f" {col % 10} "
    return [tens, ones, ""]


def render_board(board: Board, reveal_all: bool = False) -> str:
    """
    Render the board as text.

    Columns are labelled with stacked 1-based numbers (tens above ones)
    and rows with their 1-based number right-aligned in two characters.
    """
    lines = _column_headers(board.width)
    for row_index, row in enumerate(board.rows(), start=1):
        line = f"{row_index:>2} "
        for cell in row:
            line += f" {cell_glyph(cell, reveal_all)} "
        lines.append(line)
    return "\n".join(lines)

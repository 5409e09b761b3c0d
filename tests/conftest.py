"""
Pytest configuration and shared fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import Board, BoardConfig, Cell, Game, MinePlacement


def make_board(height, width, mines):
    """Build an initialized board with mines at 0-based positions."""
    board = Board(BoardConfig(height, width, len(mines)))
    board.initialize(mine_positions=mines)
    return board


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def board_with_mines():
    """Factory for boards with mines at fixed 0-based positions."""
    return make_board


@pytest.fixture
def default_board(rng: random.Random) -> Board:
    """Create an initialized 9x9 board with 10 mines."""
    board = Board(BoardConfig(), rng=rng)
    board.initialize()
    return board


@pytest.fixture
def center_mine_board() -> Board:
    """3x3 board with a single mine in the center."""
    return make_board(3, 3, [(1, 1)])


@pytest.fixture
def corner_mine_board() -> Board:
    """3x3 board with a single mine in the top-left corner."""
    return make_board(3, 3, [(0, 0)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return make_board(5, 5, [])


@pytest.fixture
def walled_board() -> Board:
    """
    5x5 board with a wall of mines in column 2.

    Left side is columns 0-1, right side columns 3-4.
    """
    return make_board(5, 5, [(row, 2) for row in range(5)])


@pytest.fixture
def corner_game(corner_mine_board: Board) -> Game:
    """Game on the corner-mine board."""
    return Game(corner_mine_board)


@pytest.fixture
def center_game(center_mine_board: Board) -> Game:
    """Game on the center-mine board."""
    return Game(center_mine_board)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def sample_config() -> BoardConfig:
    """Configuration using direct sampling for mine placement."""
    return BoardConfig(16, 16, 40, placement=MinePlacement.SAMPLE)

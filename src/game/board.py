"""
Board module for Minesweeper game.

Implements the game board with mine placement, neighbor counting,
flood revealing and the remaining-safe-cell counter.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, Mark, RevealOutcome
from .errors import CoordinateOutOfRange, InvariantViolation

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

# Clockwise from north: N, NE, E, SE, S, SW, W, NW.
NEIGHBOR_OFFSETS: Tuple[Coordinate, ...] = (
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
)

DEFAULT_MAX_SWEEPS = 10_000


class MinePlacement(Enum):
    """Strategy used to plant mines."""

    SWEEP = auto()
    SAMPLE = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        height: Number of rows.
        width: Number of columns.
        num_mines: Total mines to place.
        placement: Mine placement strategy.
        max_sweeps: Sweep passes allowed before the remaining mines are
            sampled directly. None means unlimited.
    """

    height: int = 9
    width: int = 9
    num_mines: int = 10
    placement: MinePlacement = MinePlacement.SWEEP
    max_sweeps: Optional[int] = DEFAULT_MAX_SWEEPS

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")
        if self.max_sweeps is not None and self.max_sweeps < 1:
            raise ValueError("Sweep cap must be at least 1")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.height * self.width

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.total_cells - self.num_mines


# ============================================================================
# Reveal Report
# ============================================================================

@dataclass
class RevealReport:
    """
    What a single reveal did to the board.

    Attributes:
        outcome: Result for the selected cell.
        revealed: Coordinates newly revealed, selected cell first.
        cleared_mine_marks: Mine marks removed by revealing marked cells.
    """

    outcome: RevealOutcome
    revealed: List[Coordinate] = field(default_factory=list)
    cleared_mine_marks: int = 0


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, neighbor counts and
    revealing logic. Win/loss decisions belong to the Game.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _remaining: int = 0
    _initialized: bool = False

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(row, col) for col in range(self.config.width)]
            for row in range(self.config.height)
        ]
        self._remaining = self.config.safe_cells

    def initialize(
        self, mine_positions: Optional[Iterable[Coordinate]] = None
    ) -> None:
        """
        Plant mines and compute neighbor counts.

        Args:
            mine_positions: Exact 0-based (row, col) positions to mine
                instead of random placement. Must hold num_mines distinct
                in-bounds coordinates.
        """
        if self._initialized:
            raise InvariantViolation("Board is already initialized")

        if mine_positions is not None:
            self._plant_positions(mine_positions)
        elif self.config.placement is MinePlacement.SAMPLE:
            self._place_mines_sample()
        else:
            self._place_mines_sweep()

        self._calculate_adjacent_mines()
        self._initialized = True

    def _plant_positions(self, mine_positions: Iterable[Coordinate]) -> None:
        """Plant mines at explicit positions."""
        positions = set(mine_positions)
        if len(positions) != self.config.num_mines:
            raise ValueError(
                f"Expected {self.config.num_mines} mine positions, "
                f"got {len(positions)}"
            )
        for row, col in positions:
            self.validate_coord(row, col)
            self._grid[row][col].plant_mine()

    def _place_mines_sweep(self) -> None:
        """
        Plant mines by repeated row-major sweeps.

        Each non-mine cell is mined when a uniform draw exceeds
        1 - 1/(H*W), so a sweep plants about one mine. Placement stops as
        soon as num_mines are planted. Once max_sweeps passes complete,
        the rest are sampled from the non-mine cells.
        """
        target = self.config.num_mines
        threshold = 1 - 1.0 / self.config.total_cells
        planted = 0
        sweeps = 0

        while planted < target:
            if self.config.max_sweeps is not None and sweeps >= self.config.max_sweeps:
                logger.warning(
                    "Sweep cap of %d reached with %d/%d mines planted; "
                    "sampling the rest",
                    self.config.max_sweeps, planted, target,
                )
                self._sample_into_free_cells(target - planted)
                return
            sweeps += 1
            for cell in self.iter_cells():
                if cell.is_mine:
                    continue
                if self.rng.random() > threshold:
                    cell.plant_mine()
                    planted += 1
                    if planted >= target:
                        break

        logger.debug("Planted %d mines in %d sweeps", planted, sweeps)

    def _place_mines_sample(self) -> None:
        """Plant mines at a uniform sample of distinct positions."""
        self._sample_into_free_cells(self.config.num_mines)
        logger.debug("Sampled %d mine positions", self.config.num_mines)

    def _sample_into_free_cells(self, count: int) -> None:
        """Plant `count` mines among cells that are not mines yet."""
        free = [cell for cell in self.iter_cells() if not cell.is_mine]
        for cell in self.rng.sample(free, count):
            cell.plant_mine()

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for cell in self.iter_cells():
            cell.adjacent_mines = self._count_adjacent_mines(cell.row, cell.col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Coordinate]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples in clockwise order from north.
        """
        neighbors = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self.is_valid_position(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def validate_coord(self, row: int, col: int) -> None:
        """Raise CoordinateOutOfRange unless position is on the board."""
        if not self.is_valid_position(row, col):
            raise CoordinateOutOfRange(row, col)

    # ========================================================================
    # Revealing (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealReport:
        """
        Reveal a cell at the given position.

        Marks are ignored: a marked mine still reports HIT_MINE. If the
        cell has no adjacent mines, its neighborhood is flood-revealed.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            Report of the outcome and every cell newly revealed.
        """
        self.validate_coord(row, col)
        cell = self._grid[row][col]
        report = RevealReport(outcome=RevealOutcome.ALREADY_REVEALED)

        outcome = self._reveal_cell(cell, report)
        report.outcome = outcome
        if outcome is RevealOutcome.REVEALED and cell.adjacent_mines == 0:
            self._flood_reveal(cell, report)
            logger.debug(
                "Flood from (%d, %d) revealed %d cells",
                row, col, len(report.revealed),
            )
        return report

    def _reveal_cell(self, cell: Cell, report: RevealReport) -> RevealOutcome:
        """Reveal a single cell and update the counter."""
        had_mine_mark = cell.is_marked_mine
        outcome = cell.reveal()
        if outcome is not RevealOutcome.REVEALED:
            return outcome

        if had_mine_mark:
            report.cleared_mine_marks += 1
        self._decrement_remaining()
        report.revealed.append(cell.coord)
        return outcome

    def _flood_reveal(self, origin: Cell, report: RevealReport) -> None:
        """Reveal the zero-count region around origin and its border."""
        stack = self._flood_candidates(origin)
        while stack:
            row, col = stack.pop()
            cell = self._grid[row][col]
            if cell.revealed:
                continue
            self._reveal_cell(cell, report)
            if cell.adjacent_mines == 0:
                stack.extend(self._flood_candidates(cell))

    def _flood_candidates(self, cell: Cell) -> List[Coordinate]:
        """Hidden non-mine neighbors, reversed so pops go clockwise."""
        candidates = []
        for neighbor_row, neighbor_col in self.neighbors(cell.row, cell.col):
            neighbor = self._grid[neighbor_row][neighbor_col]
            if not neighbor.is_mine and not neighbor.revealed:
                candidates.append((neighbor_row, neighbor_col))
        candidates.reverse()
        return candidates

    def _decrement_remaining(self) -> None:
        self._remaining -= 1
        if self._remaining < 0:
            raise InvariantViolation("Remaining safe cell count went negative")

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def num_mines(self) -> int:
        return self.config.num_mines

    @property
    def remaining(self) -> int:
        """Hidden cells without a mine."""
        return self._remaining

    @property
    def is_cleared(self) -> bool:
        """Check if every safe cell has been revealed."""
        return self._remaining == 0

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def rows(self) -> List[List[Cell]]:
        """Cells grouped by row, top to bottom."""
        return [list(row) for row in self._grid]

    def iter_cells(self) -> Iterator[Cell]:
        """Iterate over every cell in row-major order."""
        for row in self._grid:
            yield from row

    def mine_mask(self) -> np.ndarray:
        """Boolean array marking mined cells."""
        return np.array(
            [[cell.is_mine for cell in row] for row in self._grid],
            dtype=bool,
        )

    def revealed_mask(self) -> np.ndarray:
        """Boolean array marking revealed cells."""
        return np.array(
            [[cell.revealed for cell in row] for row in self._grid],
            dtype=bool,
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = marked as mine
                -3 = marked as question
                0-8 = revealed with adjacent count
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for cell in self.iter_cells():
            obs[cell.row, cell.col] = cell.to_observation()
        return obs

    def check_invariants(self) -> None:
        """Raise InvariantViolation if counters disagree with the cells."""
        mines = self.mine_mask()
        revealed = self.revealed_mask()

        if self._initialized and int(mines.sum()) != self.config.num_mines:
            raise InvariantViolation(
                f"Board holds {int(mines.sum())} mines, "
                f"expected {self.config.num_mines}"
            )
        if np.any(mines & revealed):
            raise InvariantViolation("A mine was revealed")

        hidden_safe = int(np.count_nonzero(~mines & ~revealed))
        if hidden_safe != self._remaining:
            raise InvariantViolation(
                f"Remaining counter is {self._remaining}, "
                f"board has {hidden_safe} hidden safe cells"
            )
        for cell in self.iter_cells():
            if cell.revealed and cell.mark is not Mark.NONE:
                raise InvariantViolation(f"Revealed cell {cell.coord} is marked")

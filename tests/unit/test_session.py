"""
Unit tests for the Game session.

Tests the action menu, flag budget accounting and win/lose conditions.
"""
import random

import pytest
from game import (
    Action,
    Board,
    BoardConfig,
    CoordinateOutOfRange,
    Game,
    GameState,
    IllegalAction,
    Mark,
)


def mine_marks(game: Game) -> int:
    return sum(1 for cell in game.board.iter_cells() if cell.is_marked_mine)


# ============================================================================
# Setup Tests
# ============================================================================

class TestGameSetup:
    """Test session creation."""

    def test_new_game_is_playing(self, center_game: Game) -> None:
        assert center_game.state is GameState.PLAYING
        assert center_game.game_over is False

    def test_flag_budget_starts_at_mine_count(self) -> None:
        board = Board(BoardConfig(5, 5, 4), rng=random.Random(2))
        game = Game(board)
        assert game.flag_budget == 4

    def test_game_initializes_fresh_board(self) -> None:
        board = Board(BoardConfig(4, 4, 3), rng=random.Random(5))
        Game(board)
        assert board.is_initialized is True
        assert int(board.mine_mask().sum()) == 3


# ============================================================================
# Action Menu Tests
# ============================================================================

class TestLegalActions:
    """Test the state-dependent action menu."""

    def test_unmarked_cell_actions(self, center_game: Game) -> None:
        assert center_game.legal_actions(0, 0) == [
            Action.REVEAL, Action.MARK_MINE, Action.MARK_QUESTION,
        ]

    def test_mine_marked_cell_actions(self, center_game: Game) -> None:
        center_game.mark_mine(0, 0)
        assert center_game.legal_actions(0, 0) == [
            Action.MARK_QUESTION, Action.UNMARK,
        ]

    def test_question_marked_cell_actions(self, center_game: Game) -> None:
        center_game.mark_question(0, 0)
        assert center_game.legal_actions(0, 0) == [
            Action.MARK_MINE, Action.UNMARK,
        ]

    def test_revealed_cell_has_no_actions(self, center_game: Game) -> None:
        center_game.reveal(0, 0)
        with pytest.raises(IllegalAction, match="already revealed"):
            center_game.legal_actions(0, 0)

    def test_off_board_cell_raises(self, center_game: Game) -> None:
        with pytest.raises(CoordinateOutOfRange):
            center_game.legal_actions(3, 0)

    def test_reveal_mine_marked_cell_is_rejected(
        self, center_game: Game
    ) -> None:
        """Reveal is not on the menu of a marked cell."""
        center_game.mark_mine(1, 1)
        with pytest.raises(IllegalAction):
            center_game.reveal(1, 1)
        assert center_game.state is GameState.PLAYING

    def test_unmark_unmarked_cell_is_rejected(self, center_game: Game) -> None:
        with pytest.raises(IllegalAction):
            center_game.unmark(0, 0)

    def test_actions_rejected_after_game_over(
        self, corner_game: Game
    ) -> None:
        corner_game.reveal(0, 0)
        with pytest.raises(IllegalAction, match="game is over"):
            corner_game.mark_mine(2, 2)


# ============================================================================
# Flag Budget Tests
# ============================================================================

class TestFlagBudget:
    """Test flag budget accounting."""

    def test_mark_mine_spends_a_flag(self, center_game: Game) -> None:
        center_game.mark_mine(0, 0)
        assert center_game.flag_budget == 0
        assert center_game.board.get_cell(0, 0).mark is Mark.MINE

    def test_mark_mine_with_empty_budget_is_rejected(
        self, center_game: Game
    ) -> None:
        center_game.mark_mine(0, 0)
        with pytest.raises(IllegalAction, match="already marked"):
            center_game.mark_mine(0, 1)
        assert center_game.flag_budget == 0
        assert center_game.board.get_cell(0, 1).mark is Mark.NONE

    def test_question_to_mine_spends_a_flag(self, center_game: Game) -> None:
        center_game.mark_question(0, 0)
        assert center_game.flag_budget == 1
        center_game.mark_mine(0, 0)
        assert center_game.flag_budget == 0

    def test_question_marks_are_free(self, center_game: Game) -> None:
        center_game.mark_question(0, 0)
        center_game.mark_question(0, 1)
        center_game.unmark(0, 1)
        assert center_game.flag_budget == 1

    def test_repeated_cycles_do_not_drift(self, center_game: Game) -> None:
        """Budget is symmetric across many mark cycles."""
        for _ in range(5):
            center_game.mark_mine(0, 0)
            center_game.mark_question(0, 0)
            center_game.mark_mine(0, 0)
            center_game.unmark(0, 0)
        assert center_game.flag_budget == 1

    def test_flood_returns_cleared_flags(self) -> None:
        """Mine marks wiped by a flood go back to the budget."""
        board = Board(BoardConfig(4, 4, 1))
        board.initialize(mine_positions=[(0, 0)])
        game = Game(board)
        game.mark_mine(3, 3)
        assert game.flag_budget == 0

        game.reveal(2, 2)
        assert board.get_cell(3, 3).revealed is True
        assert game.flag_budget == 1
        assert game.flag_budget == board.num_mines - mine_marks(game)

    @pytest.mark.parametrize("seed", range(5))
    def test_budget_agrees_with_marks(self, seed: int) -> None:
        """Random play keeps the budget equal to mines minus mine marks."""
        rng = random.Random(seed)
        board = Board(BoardConfig(6, 6, 6), rng=random.Random(seed))
        game = Game(board)
        for _ in range(200):
            if game.game_over:
                break
            row, col = rng.randrange(6), rng.randrange(6)
            try:
                actions = game.legal_actions(row, col)
                game.perform(row, col, rng.choice(actions))
            except IllegalAction:
                pass
            assert game.flag_budget >= 0
            assert game.flag_budget == board.num_mines - mine_marks(game)


# ============================================================================
# Win/Lose Condition Tests
# ============================================================================

class TestGameEndConditions:
    """Test win and lose conditions."""

    def test_reveal_mine_loses_game(self, corner_game: Game) -> None:
        assert corner_game.reveal(0, 0) is GameState.LOST
        assert corner_game.game_over is True
        assert corner_game.is_lost is True
        assert not corner_game.board.revealed_mask().any()

    def test_reveal_all_safe_cells_wins(self, center_game: Game) -> None:
        for cell in list(center_game.board.iter_cells()):
            if not cell.is_mine:
                center_game.reveal(cell.row, cell.col)
        assert center_game.is_won is True
        assert center_game.board.remaining == 0

    def test_partial_progress_keeps_playing(self, center_game: Game) -> None:
        assert center_game.reveal(0, 0) is GameState.PLAYING
        assert center_game.board.remaining == 7

    def test_won_iff_cleared(self, corner_game: Game) -> None:
        corner_game.reveal(2, 2)
        assert corner_game.is_won is True
        assert corner_game.board.is_cleared is True

    def test_last_report_kept(self, corner_game: Game) -> None:
        corner_game.reveal(2, 2)
        assert len(corner_game.last_report.revealed) == 8

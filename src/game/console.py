"""
Console front end for Minesweeper.

Reads board settings and moves from a text stream, drives a Game and
prints the board after every turn.

Usage:
    python main.py [--seed N] [--placement {sweep,sample}]
                   [--max-sweeps N] [--log-level LEVEL]
"""
import argparse
import logging
import random
import sys
from typing import Callable, List, Optional, TextIO, Tuple

from .board import DEFAULT_MAX_SWEEPS, Board, BoardConfig, MinePlacement
from .cell import Mark
from .errors import InputParseError, MinesweeperError
from .renderer import render_board
from .session import Action, Game

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "Select a cell to perform a further action.\n"
    "Enter the row and column numbers separated by a space.\n"
    'For example, to select the cell in row 3 and column 8, enter "3 8"'
)

ACTION_LABELS = {
    Action.REVEAL: "Reveal the cell (game over if it holds a mine!)",
    Action.MARK_MINE: "Mark the cell as a mine",
    Action.MARK_QUESTION: "Mark the cell as a question",
    Action.UNMARK: "Unmark the cell",
}

MARKED_ACTION_LABELS = {
    Action.MARK_MINE: "Change the mark to a mine",
    Action.MARK_QUESTION: "Change the mark to a question",
}


def parse_int(text: str) -> int:
    """Parse a decimal integer, raising InputParseError on failure."""
    try:
        return int(text.strip())
    except ValueError:
        raise InputParseError(f"{text.strip()!r} is not a number") from None


def parse_coordinate(line: str) -> Tuple[int, int]:
    """
    Parse a "row col" line into a 0-based (row, col) pair.

    Raises:
        InputParseError: Line does not hold exactly two integers.
    """
    tokens = line.split()
    if len(tokens) != 2:
        raise InputParseError("Enter exactly two numbers: row and column")
    row, col = (parse_int(token) for token in tokens)
    return row - 1, col - 1


def format_menu(actions: List[Action], marked: bool) -> str:
    """Numbered menu of actions, starting at 1."""
    lines = ["Enter the desired operation."]
    for number, action in enumerate(actions, start=1):
        label = ACTION_LABELS[action]
        if marked:
            label = MARKED_ACTION_LABELS.get(action, label)
        lines.append(f"{number}. {label}")
    return "\n".join(lines)


# ============================================================================
# Console Shell
# ============================================================================

class ConsoleShell:
    """
    Interactive text session.

    The input stream is read through this one object for the whole
    session; end of input raises EOFError.
    """

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        rng: Optional[random.Random] = None,
        placement: MinePlacement = MinePlacement.SWEEP,
        max_sweeps: Optional[int] = DEFAULT_MAX_SWEEPS,
    ) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.rng = rng or random.Random()
        self.placement = placement
        self.max_sweeps = max_sweeps
        self.game: Optional[Game] = None

    # ========================================================================
    # Input / Output
    # ========================================================================

    def write(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def prompt(self, text: str) -> str:
        """Show a prompt and read one line."""
        print(text, end="", file=self.stdout)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError("Input ended before the game finished")
        return line.rstrip("\n")

    def prompt_int(self, text: str, check: Callable[[int], Optional[str]]) -> int:
        """
        Prompt until the answer is an integer accepted by `check`.

        Args:
            text: Prompt text.
            check: Returns an error message for unacceptable values.
        """
        while True:
            try:
                value = parse_int(self.prompt(text))
            except InputParseError as error:
                self.write(f"{error}. Please try again.")
                continue
            problem = check(value)
            if problem is None:
                return value
            self.write(f"{problem}. Please try again.")

    # ========================================================================
    # Setup
    # ========================================================================

    def read_config(self) -> BoardConfig:
        """Ask for board height, width and mine count."""
        height = self.prompt_int(
            "Enter the board's height: ",
            lambda value: None if value >= 1 else "The height must be at least 1",
        )
        width = self.prompt_int(
            "Enter the board's width: ",
            lambda value: None if value >= 1 else "The width must be at least 1",
        )
        max_mines = height * width - 1
        mines = self.prompt_int(
            "Enter the number of mines: ",
            lambda value: (
                None if 0 <= value <= max_mines
                else f"The number of mines must be between 0 and {max_mines}"
            ),
        )
        return BoardConfig(
            height=height,
            width=width,
            num_mines=mines,
            placement=self.placement,
            max_sweeps=self.max_sweeps,
        )

    def start(self) -> Game:
        """Build and initialize the board for a new session."""
        config = self.read_config()
        board = Board(config, rng=self.rng)
        board.initialize()
        logger.debug(
            "Started %dx%d board with %d mines",
            config.height, config.width, config.num_mines,
        )
        self.game = Game(board)
        return self.game

    # ========================================================================
    # Turns
    # ========================================================================

    def take_turn(self) -> None:
        """
        Play one turn: show the board, read a cell and an action.

        Raises:
            MinesweeperError: The coordinate or action was rejected.
        """
        game = self.game
        self.write(render_board(game.board))
        self.write(f"Number of mines left: {game.flag_budget}")

        line = self.prompt("Enter the coordinate as instructed to select a cell: ")
        row, col = parse_coordinate(line)
        actions = game.legal_actions(row, col)
        marked = game.board.get_cell(row, col).mark is not Mark.NONE
        action = self.choose_action(actions, marked)
        game.perform(row, col, action)

        if game.is_lost:
            self.write("The cell contains a mine! Game over")
        elif game.is_won:
            self.write("You've revealed all of the safe cells! Game won")

    def choose_action(self, actions: List[Action], marked: bool) -> Action:
        """Show the action menu until a listed number is entered."""
        menu = format_menu(actions, marked)
        while True:
            self.write(menu)
            try:
                choice = parse_int(self.prompt(""))
            except InputParseError:
                choice = 0
            if 1 <= choice <= len(actions):
                return actions[choice - 1]
            self.write("Invalid choice. Please select again.")

    def run(self) -> Game:
        """Play a full session and show the final board."""
        game = self.start()
        self.write(INSTRUCTIONS)

        while not game.game_over:
            try:
                self.take_turn()
            except MinesweeperError as error:
                self.write(str(error))

        self.write(render_board(game.board, reveal_all=True))
        return game


# ============================================================================
# Entry Point
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Text-mode Minesweeper")
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )
    parser.add_argument(
        "--placement",
        choices=[placement.name.lower() for placement in MinePlacement],
        default=MinePlacement.SWEEP.name.lower(),
        help="Mine placement strategy",
    )
    parser.add_argument(
        "--max-sweeps",
        type=int,
        default=DEFAULT_MAX_SWEEPS,
        help="Sweep passes before the remaining mines are sampled",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics on stderr",
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Parse arguments, play one session and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_sweeps < 1:
        parser.error("--max-sweeps must be at least 1")
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    shell = ConsoleShell(
        stdin=stdin,
        stdout=stdout,
        rng=random.Random(args.seed),
        placement=MinePlacement[args.placement.upper()],
        max_sweeps=args.max_sweeps,
    )
    try:
        shell.run()
    except EOFError as error:
        logger.error("%s", error)
        return 1
    except OSError as error:
        logger.error("IO error: %s", error)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0

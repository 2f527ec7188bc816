"""
Decision engine for the TicTacToe agent.

Picks a move by scoring every empty cell with a static heuristic, optionally
after simulating a round of replies. All functions are pure with respect to
the board they are given: speculative placements happen on duplicates.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Optional

from .board import Board, Mark
from .config import GameConfig
from .win_checker import count_open_lines, min_steps

logger = logging.getLogger(__name__)

# Score of an occupied cell (the 32-bit integer minimum)
MIN_UTILITY = -(2 ** 31)


class InvalidDepthError(ValueError):
    """Raised when the search depth is not a positive integer."""


@dataclass(frozen=True)
class Choice:
    """
    A move suggested by the agent.
    """
    row: int                # Row (0-2)
    col: int                # Column (0-2)
    utility: int            # Estimated value of the move


def check_depth(depth: int):
    if isinstance(depth, bool) or not isinstance(depth, numbers.Integral) or depth < 1:
        raise InvalidDepthError(f"Search depth must be an integer >= 1, got {depth!r}")


def _check_mark(mark: Mark):
    if mark is Mark.EMPTY:
        raise ValueError("Cannot search for the EMPTY mark")


def chances_to_win(board: Board, mark: Mark) -> int:
    """
    Get the chances to win. The larger the more likely.

    Counts the winning lines that hold no opponent mark.

    Args:
        board: The board.
        mark: The mark of the player.

    Returns:
        Number of open lines (0-8).
    """
    return count_open_lines(board.cells, mark.polarity)


def minimum_steps_to_win(board: Board, mark: Mark) -> int:
    """
    Get the fewest placements needed to complete a line.

    Lines holding an opponent mark cost 3. A result of 0 means the
    mark has already won.

    Args:
        board: The board.
        mark: The mark of the player.

    Returns:
        The minimum steps (0-3).
    """
    return min_steps(board.cells, mark.polarity)


def evaluate(board: Board, mark: Mark) -> int:
    """
    Score a position for mark with the static heuristic.

    Each term stays within one decimal digit, so the weighting gives a
    strict priority: my closeness to a win, then the opponent's
    closeness to a win, then the opponent's open lines, then mine.
    """
    opponent = mark.opponent()
    opponent_chances = 10 - chances_to_win(board, opponent)
    my_chances = chances_to_win(board, mark)
    opponent_min_steps = minimum_steps_to_win(board, opponent)
    my_min_steps = 10 - minimum_steps_to_win(board, mark)
    return my_min_steps * 1000 + opponent_min_steps * 100 + opponent_chances * 10 + my_chances


def _utility(board: Board, mark: Mark, row: int, col: int, depth: int) -> int:
    if board.get(row, col) is not Mark.EMPTY:
        return MIN_UTILITY

    # Never touch the caller's board
    board = board.duplicate()
    board.place(row, col, mark)

    if depth == 1:
        return evaluate(board, mark)

    opponent = mark.opponent()
    reply = _best_choice(board, opponent, depth - 1)
    if reply is None:
        # Board filled up before the horizon
        return evaluate(board, mark)
    board.place(reply.row, reply.col, opponent)

    mine = _best_choice(board, mark, depth - 1)
    if mine is None:
        return evaluate(board, mark)
    return mine.utility


def _best_choice(board: Board, mark: Mark, depth: int) -> Optional[Choice]:
    best: Optional[Choice] = None
    max_utility = MIN_UTILITY
    for cell in board:
        value = _utility(board, mark, cell.row, cell.col, depth)
        # Strictly greater: ties keep the earliest cell
        if value > max_utility:
            max_utility = value
            best = Choice(cell.row, cell.col, value)
    return best


def utility(board: Board, mark: Mark, row: int, col: int,
            depth: int = GameConfig.DEFAULT_DEPTH) -> int:
    """
    Get the utility of placing mark at (row, col).

    Args:
        board: The board of the game (left untouched).
        mark: The mark to place.
        row: Row index (0-2).
        col: Column index (0-2).
        depth: Plies of lookahead remaining (>= 1).

    Returns:
        The utility, or MIN_UTILITY if the cell is occupied.

    Raises:
        InvalidDepthError: If depth is not an integer >= 1.
    """
    check_depth(depth)
    _check_mark(mark)
    return _utility(board, mark, row, col, depth)


def best_choice(board: Board, mark: Mark,
                depth: int = GameConfig.DEFAULT_DEPTH) -> Optional[Choice]:
    """
    Get the best choice for mark on the given board.

    Cells are scanned in row-major order and the first cell with the
    highest utility wins.

    Args:
        board: The board of the game (left untouched).
        mark: The mark of the player.
        depth: The steps to consider (>= 1, default 1).

    Returns:
        The choice, or None if the board is full.

    Raises:
        InvalidDepthError: If depth is not an integer >= 1.
    """
    check_depth(depth)
    _check_mark(mark)

    choice = _best_choice(board, mark, depth)
    if choice is None:
        logger.info("No empty cell left for %s", mark.name)
    else:
        logger.debug(
            "Best choice for %s at depth %d: (%d, %d) utility %d",
            mark.name, depth, choice.row, choice.col, choice.utility,
        )
    return choice


# Quick test
if __name__ == "__main__":
    board = Board.from_string("AB. .A. ...")
    print(board)
    print(f"\nA should complete the diagonal: {best_choice(board, Mark.A)}")
    print(f"B should block it: {best_choice(board, Mark.B)}")

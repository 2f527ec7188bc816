"""
Win checker for the TicTacToe agent.
Line geometry shared by the board status and the agent's heuristic.

The board keeps its cells as a flat numpy array of mark polarities
(+1 for A, -1 for B, 0 for empty), so each winning line can be pulled
out with a single fancy-index.
"""

from typing import Optional, Tuple

import numpy as np


# All possible winning lines (as flat indices, row * 3 + col)
WINNING_LINES = np.array([
    # Rows
    [0, 1, 2],
    [3, 4, 5],
    [6, 7, 8],
    # Columns
    [0, 3, 6],
    [1, 4, 7],
    [2, 5, 8],
    # Diagonals
    [0, 4, 8],
    [2, 4, 6],
], dtype=np.intp)

LINE_LENGTH = WINNING_LINES.shape[1]


def _lines(cells: np.ndarray) -> np.ndarray:
    """Get an 8x3 matrix with the marks on every winning line."""
    return cells[WINNING_LINES]


def _blocked(lines: np.ndarray, polarity: int) -> np.ndarray:
    """
    Find the lines that hold an opponent mark.

    The opponent of a mark has the negated polarity; for the empty
    mark (0) that is the empty mark itself.
    """
    return (lines == -polarity).any(axis=1)


def count_open_lines(cells: np.ndarray, polarity: int) -> int:
    """
    Count the winning lines that hold no opponent mark.

    Args:
        cells: Flat array of 9 polarities.
        polarity: Polarity of the mark to count for.

    Returns:
        Number of open lines (0-8).
    """
    return int(np.count_nonzero(~_blocked(_lines(cells), polarity)))


def line_costs(cells: np.ndarray, polarity: int) -> np.ndarray:
    """
    Get the number of placements each line still needs.

    A line holding an opponent mark costs LINE_LENGTH (it can never
    be completed); otherwise the cost is the number of cells not yet
    holding the mark.
    """
    lines = _lines(cells)
    own = np.count_nonzero(lines == polarity, axis=1)
    return np.where(_blocked(lines, polarity), LINE_LENGTH, LINE_LENGTH - own)


def min_steps(cells: np.ndarray, polarity: int) -> int:
    """
    Get the fewest placements needed to complete any line.

    Returns:
        0 if a line is already complete, up to 3.
    """
    return int(line_costs(cells, polarity).min())


def winning_line(cells: np.ndarray) -> Optional[Tuple[int, int, int]]:
    """
    Get the first completed line if there is one.

    Args:
        cells: Flat array of 9 polarities.

    Returns:
        The winning line as flat indices, or None.
    """
    sums = _lines(cells).sum(axis=1)
    for line, total in zip(WINNING_LINES, sums):
        if abs(int(total)) == LINE_LENGTH:
            return tuple(int(i) for i in line)
    return None

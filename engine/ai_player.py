"""
AI player for the TicTacToe agent.
Wraps the decision engine with the mark and search depth it plays with.
"""

import logging
from typing import Optional

from .agent import Choice, best_choice, check_depth
from .board import Board, Mark
from .config import GameConfig

logger = logging.getLogger(__name__)


class AIPlayer:
    """
    An AI that plays TicTacToe with the heuristic decision engine.

    The player holds no board state: every call reads the board it is
    given and leaves it untouched.
    """

    def __init__(self, mark: Mark = Mark.B, depth: int = GameConfig.DEFAULT_DEPTH):
        """
        Initialize the AI player.

        Args:
            mark: Which mark the AI places (default: B)
            depth: How many plies to look ahead (>= 1)
        """
        if mark is Mark.EMPTY:
            raise ValueError("The AI player needs mark A or B")
        self.mark = mark
        self.depth = depth

    @property
    def depth(self) -> int:
        return self._depth

    @depth.setter
    def depth(self, value: int):
        check_depth(value)
        self._depth = value

    @classmethod
    def for_difficulty(cls, difficulty: str, mark: Mark = Mark.B) -> "AIPlayer":
        """
        Create a player from a difficulty name (EASY, MEDIUM or HARD).
        """
        try:
            depth = GameConfig.DIFFICULTY_DEPTHS[difficulty.upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty {difficulty!r}") from None
        return cls(mark, depth)

    def get_best_move(self, board: Board) -> Optional[Choice]:
        """
        Get the best move for the current position.

        Args:
            board: Current board.

        Returns:
            The choice, or None if no moves are available.
        """
        choice = best_choice(board, self.mark, self.depth)
        if choice is None:
            logger.info("AI %s has no moves available", self.mark.name)
        return choice

    def get_move_suggestion(self, board: Board) -> str:
        """
        Get a human-readable move suggestion.

        Args:
            board: Current board.

        Returns:
            A string describing the suggested move.
        """
        choice = self.get_best_move(board)

        if choice is None:
            return "No moves available!"

        return (f"Place {self.mark.name} at position ({choice.row}, {choice.col}) "
                f"(utility: {choice.utility})")

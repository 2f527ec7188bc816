"""
Move validator for the TicTacToe agent.
Checks placements coming from a human before they reach the live board.
"""

from dataclasses import dataclass
from typing import Optional

from .board import Board, Mark, Status
from .config import GameConfig


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Game must not be over
    2. Position must be on the board
    3. Can only place on empty cells
    """

    def validate_move(self, board: Board, row: int, col: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            row: Row to place the mark (0-2).
            col: Column to place the mark (0-2).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if board.status() is not Status.RUNNING:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        limit = GameConfig.BOARD_SIZE - 1
        if not (0 <= row <= limit and 0 <= col <= limit):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position ({row}, {col}). Must be 0-{limit}."
            )

        mark = board.get(row, col)
        if mark is not Mark.EMPTY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell ({row}, {col}) is already occupied by {mark.name}"
            )

        return ValidationResult(is_valid=True)

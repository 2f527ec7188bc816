"""
Game state management for the TicTacToe agent.
Owns the live board, whose turn it is and the move history.
"""

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from .agent import Choice
from .ai_player import AIPlayer
from .board import Board, CellListener, Mark, Status
from .move_validator import MoveValidator, ValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    """
    A move in the game.
    """
    mark: Mark              # Who made the move
    row: int                # Row (0-2)
    col: int                # Column (0-2)
    move_number: int        # Which move this is (0-8)


class GameState:
    """
    The state of one TicTacToe game.

    Tracks:
    - The live board (status is always derived from it)
    - Current player
    - Move history

    Placements go through make_move(), which holds a lock while the
    board is written and its listeners run, so front ends may call it
    from a worker thread.
    """

    def __init__(self, first_player: Mark = Mark.A):
        if first_player is Mark.EMPTY:
            raise ValueError("The first player must be A or B")
        self.first_player = first_player
        self.validator = MoveValidator()
        self._lock = threading.Lock()
        self._listeners: List[CellListener] = []
        self._new_board()

    def _new_board(self):
        self.board = Board()
        for listener in self._listeners:
            self.board.add_listener(listener)
        self.current_player = self.first_player
        self.moves: List[Move] = []

    def reset(self):
        """Start a new game on an empty board, keeping the listeners."""
        with self._lock:
            self._new_board()

    # ==================== LISTENERS ====================

    def add_listener(self, listener: CellListener):
        """Register a cell listener that survives reset()."""
        with self._lock:
            self._listeners.append(listener)
            self.board.add_listener(listener)

    def remove_listener(self, listener: CellListener):
        with self._lock:
            self._listeners.remove(listener)
            self.board.remove_listener(listener)

    # ==================== MOVES ====================

    def _place_locked(self, row: int, col: int, mark: Mark):
        """Write mark and record the move. The caller holds the lock."""
        self.board.place(row, col, mark)
        self.moves.append(Move(
            mark=mark,
            row=row,
            col=col,
            move_number=len(self.moves)
        ))
        self.current_player = mark.opponent()

    def make_move(self, row: int, col: int) -> ValidationResult:
        """
        Place the current player's mark at the given position.

        Args:
            row: Row index (0-2).
            col: Column index (0-2).

        Returns:
            The validation result; the board is untouched if it failed.
        """
        with self._lock:
            result = self.validator.validate_move(self.board, row, col)
            if not result.is_valid:
                logger.warning("Refused move by %s: %s",
                               self.current_player.name, result.error_message)
                return result

            self._place_locked(row, col, self.current_player)

        return result

    def play_ai(self, ai: AIPlayer) -> Optional[Choice]:
        """
        Let the AI pick and play a move for its mark.

        The search runs on a snapshot of the board, outside the lock. The
        move is dropped if the board changed while the AI was thinking.

        Args:
            ai: The AI player; its mark must be the current player.

        Returns:
            The choice that was played, or None if none was.
        """
        with self._lock:
            if self.current_player is not ai.mark:
                logger.warning("It's not %s's turn!", ai.mark.name)
                return None
            if self.board.status() is not Status.RUNNING:
                return None
            snapshot = self.board.duplicate()

        choice = ai.get_best_move(snapshot)
        if choice is None:
            return None

        with self._lock:
            if self.current_player is not ai.mark or self.board != snapshot:
                logger.warning("Board changed during %s's search, move (%d, %d) dropped",
                               ai.mark.name, choice.row, choice.col)
                return None
            self._place_locked(choice.row, choice.col, ai.mark)

        return choice

    # ==================== STATUS ====================

    def status(self) -> Status:
        return self.board.status()

    @property
    def is_game_over(self) -> bool:
        return self.status() is not Status.RUNNING

    @property
    def winner(self) -> Optional[Mark]:
        return self.board.winner()

    @property
    def is_draw(self) -> bool:
        return self.status() is Status.DRAWN

"""
TicTacToe Agent
===============
A heuristic TicTacToe player: a 3x3 board model and a shallow,
depth-bounded search that picks the next placement.
"""

from .board import Board, BoardCell, Mark, Status
from .agent import (
    MIN_UTILITY,
    Choice,
    InvalidDepthError,
    best_choice,
    chances_to_win,
    minimum_steps_to_win,
    utility,
)
from .ai_player import AIPlayer
from .move_validator import MoveValidator, ValidationResult
from .game_state import GameState, Move
from .config import GameConfig

__version__ = "1.0.0"

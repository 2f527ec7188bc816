"""
Tests for the decision engine and the AI player.
"""

import logging

import numpy as np
import pytest

from engine.agent import (
    MIN_UTILITY,
    Choice,
    InvalidDepthError,
    best_choice,
    chances_to_win,
    evaluate,
    minimum_steps_to_win,
    utility,
)
from engine.ai_player import AIPlayer
from engine.board import Board, Mark


LAYOUTS = [
    "... ... ...",
    "A.. ... ...",
    "AB. .A. ...",
    "ABA .B. ...",
    "ABA ABB B..",
    "AB. BA. ..B",
]


def test_chances_after_first_placement():
    board = Board()
    board.place(0, 0, Mark.A)
    assert chances_to_win(board, Mark.A) == 8
    assert chances_to_win(board, Mark.B) == 5


def test_chances_on_empty_board():
    board = Board()
    assert chances_to_win(board, Mark.A) == 8
    assert minimum_steps_to_win(board, Mark.A) == 3


def test_completed_row():
    board = Board()
    for col in range(3):
        board.place(0, col, Mark.A)
    assert board.status().name == "A_WINS"
    assert minimum_steps_to_win(board, Mark.A) == 0
    assert minimum_steps_to_win(board, Mark.B) == 3


@pytest.mark.parametrize("layout", LAYOUTS + ["AAA BB. ...", "B.. .B. A.B"])
def test_zero_steps_only_with_complete_line(layout):
    board = Board.from_string(layout)
    for mark in (Mark.A, Mark.B):
        assert (minimum_steps_to_win(board, mark) == 0) == (board.winner() is mark)


def test_blocked_lines_cost_three():
    board = Board.from_string("AB. BA. ..B")
    assert minimum_steps_to_win(board, Mark.A) == 2
    assert minimum_steps_to_win(board, Mark.B) == 2


def test_empty_board_prefers_center():
    assert best_choice(Board(), Mark.A) == Choice(1, 1, 8368)


def test_completes_diagonal():
    board = Board.from_string("AB. .A. ...")
    choice = best_choice(board, Mark.A, 1)

    assert (choice.row, choice.col) == (2, 2)
    assert choice.utility == 10406


def test_blocks_diagonal():
    board = Board.from_string("AB. .A. ...")
    choice = best_choice(board, Mark.B)
    assert (choice.row, choice.col) == (2, 2)


def test_ties_keep_first_cell():
    # All four corners score the same for B
    board = Board.from_string("... .A. ...")
    choice = best_choice(board, Mark.B)

    assert choice == Choice(0, 0, 8254)
    for row, col in [(0, 2), (2, 0), (2, 2)]:
        assert utility(board, Mark.B, row, col) == choice.utility


def test_occupied_cell_has_min_utility():
    board = Board.from_string("AB. ... ...")
    assert utility(board, Mark.A, 0, 0) == MIN_UTILITY
    assert utility(board, Mark.A, 0, 1, 2) == MIN_UTILITY


def test_utility_matches_evaluate():
    board = Board.from_string("AB. ... ...")
    after = board.duplicate()
    after.place(2, 2, Mark.A)
    assert utility(board, Mark.A, 2, 2) == evaluate(after, Mark.A)


@pytest.mark.parametrize("layout", LAYOUTS)
@pytest.mark.parametrize("depth", [1, 2])
def test_best_choice_picks_empty_cell(layout, depth):
    board = Board.from_string(layout)
    for mark in (Mark.A, Mark.B):
        choice = best_choice(board, mark, depth)
        assert choice is not None
        assert board.get(choice.row, choice.col) is Mark.EMPTY


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_search_leaves_board_untouched(depth):
    board = Board.from_string("A.. .B. ...")
    calls = []
    board.add_listener(lambda r, c, m: calls.append((r, c, m)))
    before = board.duplicate()

    best_choice(board, Mark.A, depth)

    assert board == before
    assert calls == []
    assert len(board.listeners) == 1


def test_full_board_has_no_choice():
    board = Board.from_string("ABA ABB BAA")
    assert board.status().name == "DRAWN"
    assert best_choice(board, Mark.A) is None
    assert best_choice(board, Mark.B, 2) is None


def test_deep_search_on_last_cell_uses_static_score():
    board = Board.from_string("ABA ABB BA.")
    assert utility(board, Mark.A, 2, 2, 3) == utility(board, Mark.A, 2, 2, 1)


def test_depth_two_replays_opponent():
    board = Board.from_string("ABA ABB B..")
    # A at (2,1) leaves B only (2,2); A then has no cell left
    after = board.duplicate()
    after.place(2, 1, Mark.A)
    after.place(2, 2, Mark.B)
    assert utility(board, Mark.A, 2, 1, 2) == evaluate(after, Mark.A)


@pytest.mark.parametrize("depth", [0, -1, 1.5, True, None])
def test_invalid_depth(depth):
    with pytest.raises(InvalidDepthError):
        best_choice(Board(), Mark.A, depth)
    with pytest.raises(ValueError):
        utility(Board(), Mark.A, 0, 0, depth)


def test_empty_mark_is_rejected():
    with pytest.raises(ValueError):
        best_choice(Board(), Mark.EMPTY)


def test_no_choice_is_logged(caplog):
    caplog.set_level(logging.INFO, logger="engine.agent")
    best_choice(Board.from_string("ABA ABB BAA"), Mark.B)
    assert "No empty cell left for B" in caplog.text


# ==================== AI PLAYER ====================

def test_ai_player_uses_its_depth():
    board = Board.from_string("A.. .B. ...")
    ai = AIPlayer(Mark.B, depth=2)
    assert ai.get_best_move(board) == best_choice(board, Mark.B, 2)


def test_ai_player_difficulty():
    assert AIPlayer.for_difficulty("easy").depth == 1
    assert AIPlayer.for_difficulty("Hard", Mark.A).depth == 3
    with pytest.raises(ValueError):
        AIPlayer.for_difficulty("impossible")


def test_ai_player_rejects_bad_settings():
    with pytest.raises(InvalidDepthError):
        AIPlayer(Mark.B, depth=0)
    with pytest.raises(ValueError):
        AIPlayer(Mark.EMPTY)

    ai = AIPlayer()
    with pytest.raises(InvalidDepthError):
        ai.depth = -3
    assert ai.depth == 1


def test_move_suggestion():
    ai = AIPlayer(Mark.A)
    assert ai.get_move_suggestion(Board()) == "Place A at position (1, 1) (utility: 8368)"
    assert ai.get_move_suggestion(Board.from_string("ABA ABB BAA")) == "No moves available!"


def test_depth_two_round_trip():
    board = Board.from_string("AB. .A. ...")

    # B takes (2,2); A's best reply completes two threats at (0,2)
    after = board.duplicate()
    after.place(2, 2, Mark.B)
    reply = best_choice(after, Mark.A, 1)
    assert reply == Choice(0, 2, 9293)

    after.place(reply.row, reply.col, Mark.A)
    mine = best_choice(after, Mark.B, 1)
    assert mine == Choice(2, 0, 9291)

    assert utility(board, Mark.B, 2, 2, 2) == mine.utility == 9291


def test_numpy_integer_depth():
    board = Board.from_string("AB. .A. ...")
    assert best_choice(board, Mark.B, np.int64(2)) == best_choice(board, Mark.B, 2)
    assert AIPlayer(Mark.B, depth=np.int64(2)).depth == 2
    with pytest.raises(InvalidDepthError):
        best_choice(board, Mark.B, np.int64(0))

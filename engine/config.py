"""
Game configuration for the TicTacToe agent.
All the settings for the board, the search and the front ends.
"""


class GameConfig:
    """
    Configuration class for game settings.
    Change these values to tune how the agent plays!
    """

    # ==================== BOARD SETTINGS ====================
    # TicTacToe is a 3x3 grid. The heuristic weighting in engine.agent
    # assumes this size, so do not change it.
    BOARD_SIZE = 3
    CELL_COUNT = BOARD_SIZE * BOARD_SIZE  # 9 cells

    # ==================== SEARCH SETTINGS ====================
    # How many plies the agent looks ahead (must be >= 1)
    DEFAULT_DEPTH = 1

    # Difficulty name -> search depth
    DIFFICULTY_DEPTHS = {
        "EASY": 1,
        "MEDIUM": 2,
        "HARD": 3,
    }

    # ==================== PLAYER SETTINGS ====================
    # Mark names, see engine.board.Mark
    HUMAN_MARK = "A"
    AGENT_MARK = "B"

    # Who places the first mark: "human" or "agent"
    FIRST_PLAYER = "human"

    # Symbols used when drawing the board
    SYMBOLS = {
        "A": "O",
        "B": "X",
        "EMPTY": " ",
    }

    # ==================== DEBUG SETTINGS ====================
    DEBUG_MODE = False
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

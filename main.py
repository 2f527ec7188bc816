"""
Main entry point for the TicTacToe agent.

Launches the Tkinter UI by default, or plays a game in the console
with --no-ui. The human places A (O), the agent places B (X).
"""

import argparse
import logging
from typing import List, Optional, Tuple

from engine.ai_player import AIPlayer
from engine.board import Mark
from engine.config import GameConfig
from engine.game_state import GameState


def setup_logging(debug: bool = GameConfig.DEBUG_MODE):
    """Configure the root logger for the front ends."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=GameConfig.LOG_FORMAT,
    )


class ConsoleGame:
    """
    Console controller for a game against the agent.

    Game flow:
    1. Human types a cell (1-9)
    2. Agent calculates its response
    3. Repeat until someone wins or it's a draw
    """

    def __init__(self, agent_first: bool = False, depth: int = GameConfig.DEFAULT_DEPTH):
        self.human_mark = Mark[GameConfig.HUMAN_MARK]
        self.agent_mark = Mark[GameConfig.AGENT_MARK]
        first = self.agent_mark if agent_first else self.human_mark

        self.game_state = GameState(first_player=first)
        self.ai = AIPlayer(self.agent_mark, depth)

        print("\n" + "="*60)
        print("   TicTacToe Agent - Ready!")
        print(f"   Human plays: {GameConfig.SYMBOLS[self.human_mark.name]}")
        print(f"   Agent plays: {GameConfig.SYMBOLS[self.agent_mark.name]} (depth {depth})")
        print("="*60 + "\n")

    def start(self):
        """Play until the game is over."""
        print("Index map:\n1|2|3\n4|5|6\n7|8|9\n")

        while not self.game_state.is_game_over:
            if self.game_state.current_player is self.human_mark:
                print(self.game_state.board, "\n")
                move = self._read_human_move()
                if move is None:
                    print("\nGame quit by user.")
                    return
                self.game_state.make_move(*move)
            else:
                self._agent_move()

        self._show_game_result()

    def _read_human_move(self) -> Optional[Tuple[int, int]]:
        """Ask for a cell until a valid one is typed. 'q' quits."""
        while True:
            text = input("Your move [1-9, q to quit]: ").strip().lower()
            if text == "q":
                return None
            try:
                index = int(text) - 1
            except ValueError:
                print("Please type a number 1..9.")
                continue

            row, col = divmod(index, GameConfig.BOARD_SIZE)
            if index < 0:
                row, col = -1, -1
            result = self.game_state.validator.validate_move(self.game_state.board, row, col)
            if result.is_valid:
                return row, col
            print(f"Illegal move: {result.error_message}")

    def _agent_move(self):
        """Let the agent play its move."""
        print(">>> Agent is thinking...")
        choice = self.game_state.play_ai(self.ai)

        if choice is None:
            print("ERROR: Agent could not find a move!")
            return

        cell = choice.row * GameConfig.BOARD_SIZE + choice.col + 1
        print(f">>> Agent plays at {cell} (utility: {choice.utility})\n")

    def _show_game_result(self):
        """Show the final game result."""
        print("\n" + "="*60)
        print("   GAME OVER!")
        print("="*60 + "\n")

        print(self.game_state.board)

        winner = self.game_state.winner
        if winner is self.human_mark:
            print("\nCongratulations! You won!")
        elif winner is self.agent_mark:
            print("\nAgent wins! Better luck next time!")
        else:
            print("\nIt's a draw! Good game!")

        print("\n" + "="*60)


def parse_args(description: str = "TicTacToe Agent", console_flag: bool = True,
               argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse the command line shared by the console and the UI.

    Args:
        description: Text shown by --help.
        console_flag: Offer --no-ui (only the main entry point has it).
        argv: Arguments to parse (default: sys.argv).

    Returns:
        The parsed arguments. Exits with a usage error for a bad depth.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--agent-first",
        action="store_true",
        help="Let the agent place the first mark"
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=GameConfig.DEFAULT_DEPTH,
        help="Search depth of the agent (>= 1)"
    )
    if console_flag:
        parser.add_argument(
            "--no-ui",
            action="store_true",
            help="Run without UI (console mode)"
        )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=GameConfig.DEBUG_MODE,
        help="Log every decision of the agent"
    )

    args = parser.parse_args(argv)
    if args.depth < 1:
        parser.error("--depth must be >= 1")
    return args


def main():
    """Main entry point."""
    args = parse_args()
    setup_logging(args.debug)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI(agent_first=args.agent_first, depth=args.depth)
        ui.run()
        return

    game = ConsoleGame(agent_first=args.agent_first, depth=args.depth)

    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()

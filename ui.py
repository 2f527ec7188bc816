"""
TicTacToe Agent UI
A graphical interface for playing against the agent using Tkinter.

Shows:
- The 3x3 board (O for the human, X for the agent)
- Game status and the agent's last move
- Difficulty (search depth) and first player selection
"""

import logging
import threading
import tkinter as tk
from enum import Enum
from tkinter import ttk
from typing import Optional

from engine.agent import Choice
from engine.ai_player import AIPlayer
from engine.board import Mark, Status
from engine.config import GameConfig
from engine.game_state import GameState
from engine.win_checker import winning_line

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """AI difficulty levels (search depth)."""
    EASY = GameConfig.DIFFICULTY_DEPTHS["EASY"]
    MEDIUM = GameConfig.DIFFICULTY_DEPTHS["MEDIUM"]
    HARD = GameConfig.DIFFICULTY_DEPTHS["HARD"]


EMPTY_BG = '#16213e'
HUMAN_COLORS = ('#065f46', '#10b981')   # bg, fg
AGENT_COLORS = ('#7f1d1d', '#f87171')
WIN_BG = '#b45309'


class TicTacToeUI:
    """
    Main UI class for the TicTacToe agent.

    The agent's search runs on a worker thread; every widget update is
    handed back to the Tk thread with root.after().
    """

    def __init__(self, agent_first: bool = False, depth: int = GameConfig.DEFAULT_DEPTH):
        """Initialize the UI."""
        self.human_player = Mark[GameConfig.HUMAN_MARK]
        self.agent_player = Mark[GameConfig.AGENT_MARK]
        self.agent_first = agent_first

        self.ai = AIPlayer(self.agent_player, depth)
        self.game_state = GameState(first_player=self._first_player())
        self.game_state.add_listener(self._on_cell_changed)

        self.agent_thinking = False
        self.last_agent_move: Optional[Choice] = None

        self._create_ui()
        self._init_game()

    def _first_player(self) -> Mark:
        return self.agent_player if self.agent_first else self.human_player

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("TicTacToe Agent")
        self.root.configure(bg='#1a1a2e')
        self.root.minsize(420, 560)

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background='#1a1a2e')
        style.configure('TLabel', background='#1a1a2e', foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 12), foreground='#ffd700')
        style.configure('Move.TLabel', font=('Segoe UI', 11), foreground='#00ff88')
        style.configure('TCheckbutton', background='#1a1a2e', foreground='white')

        # Board section
        ttk.Label(main_frame, text="Game Board", style='Title.TLabel').pack(pady=(0, 10))

        board_frame = ttk.Frame(main_frame)
        board_frame.pack(pady=10)

        self.board_cells = []
        for row in range(GameConfig.BOARD_SIZE):
            row_cells = []
            for col in range(GameConfig.BOARD_SIZE):
                cell = tk.Button(
                    board_frame,
                    text="",
                    font=('Segoe UI', 24, 'bold'),
                    width=4,
                    height=2,
                    bg=EMPTY_BG,
                    fg='white',
                    relief='ridge',
                    borderwidth=2,
                    command=lambda r=row, c=col: self._on_cell_clicked(r, c)
                )
                cell.grid(row=row, column=col, padx=2, pady=2)
                row_cells.append(cell)
            self.board_cells.append(row_cells)

        # Legend
        legend_frame = ttk.Frame(main_frame)
        legend_frame.pack(pady=5)
        ttk.Label(legend_frame, text=f"{GameConfig.SYMBOLS['A']} = Human  ",
                  foreground=HUMAN_COLORS[1]).pack(side=tk.LEFT)
        ttk.Label(legend_frame, text=f"{GameConfig.SYMBOLS['B']} = Agent",
                  foreground=AGENT_COLORS[1]).pack(side=tk.LEFT)

        # Game status section
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=10)

        self.status_label = ttk.Label(main_frame, text="Welcome!", style='Status.TLabel')
        self.status_label.pack(pady=5)

        self.agent_move_label = ttk.Label(main_frame, text="Waiting for human...", style='Move.TLabel')
        self.agent_move_label.pack()

        # Difficulty section
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=10)

        diff_frame = ttk.Frame(main_frame)
        diff_frame.pack(pady=5)

        self.diff_buttons = {}
        diff_colors = {
            Difficulty.EASY: "#4ade80",
            Difficulty.MEDIUM: "#fbbf24",
            Difficulty.HARD: "#f87171",
        }
        for difficulty, color in diff_colors.items():
            btn = tk.Button(
                diff_frame,
                text=difficulty.name.capitalize(),
                font=('Segoe UI', 10, 'bold'),
                width=8,
                activebackground=color,
                command=lambda d=difficulty: self._set_difficulty(d)
            )
            btn.pack(side=tk.LEFT, padx=5)
            self.diff_buttons[difficulty] = (btn, color)
        self._paint_difficulty()

        # Controls
        control_frame = ttk.Frame(main_frame)
        control_frame.pack(pady=10)

        self.agent_first_var = tk.BooleanVar(value=self.agent_first)
        ttk.Checkbutton(
            control_frame,
            text="Agent moves first",
            variable=self.agent_first_var,
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="New Game",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12,
            command=self._reset_game
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            main_frame,
            text="Quit",
            font=('Segoe UI', 10),
            bg='#ef4444',
            fg='white',
            width=26,
            command=self._quit
        ).pack(pady=10)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    # ==================== SETTINGS ====================

    def _set_difficulty(self, difficulty: Difficulty):
        """Set the AI search depth."""
        self.ai.depth = difficulty.value
        self._paint_difficulty()
        logger.info("Difficulty set to %s (depth %d)", difficulty.name, difficulty.value)

    def _paint_difficulty(self):
        for difficulty, (btn, color) in self.diff_buttons.items():
            if difficulty.value == self.ai.depth:
                btn.configure(bg=color, fg='black')
            else:
                btn.configure(bg='#2d3748', fg='white')

    # ==================== GAME FLOW ====================

    def _init_game(self):
        """Clear the board display and let the agent open if it goes first."""
        for row_cells in self.board_cells:
            for cell in row_cells:
                cell.configure(text="", bg=EMPTY_BG, state='normal')

        self.last_agent_move = None
        self.status_label.configure(text="Welcome! Your turn.")
        self.agent_move_label.configure(text="Waiting for human...")

        if self.game_state.current_player is self.agent_player:
            self._start_agent_move()

    def _on_cell_clicked(self, row: int, col: int):
        """Handle a human placement."""
        if self.agent_thinking or self.game_state.current_player is not self.human_player:
            return

        result = self.game_state.make_move(row, col)
        if not result.is_valid:
            self.status_label.configure(text=result.error_message)
            return

        if self._check_game_over():
            return
        self._start_agent_move()

    def _start_agent_move(self):
        """Calculate the agent's move in the background."""
        self.agent_thinking = True
        self._set_cells_enabled(False)
        self.agent_move_label.configure(text="Calculating...")
        threading.Thread(target=self._agent_move, daemon=True).start()

    def _agent_move(self):
        """Execute the agent's move (runs in background thread)."""
        choice = self.game_state.play_ai(self.ai)
        self.root.after(0, lambda: self._on_agent_moved(choice))

    def _on_agent_moved(self, choice: Optional[Choice]):
        """Back on the UI thread after the agent played."""
        self.agent_thinking = False
        self.last_agent_move = choice

        if choice is None:
            self.agent_move_label.configure(text="No choices left for the agent")
        else:
            self.agent_move_label.configure(
                text=f"Agent played ({choice.row}, {choice.col}) [utility {choice.utility}]"
            )

        if not self._check_game_over():
            self._set_cells_enabled(True)
            self.status_label.configure(text="Your turn.")

    def _check_game_over(self) -> bool:
        """Show the result if the game is over."""
        status = self.game_state.status()
        if status is Status.RUNNING:
            return False

        if status is Status.DRAWN:
            self.status_label.configure(text="It's a DRAW!")
        else:
            winner = "Human" if self.game_state.winner is self.human_player else "Agent"
            self.status_label.configure(text=f"{winner} WINS!")
            # Queued behind the last cell paint
            self.root.after(0, self._highlight_winning_line)

        self._set_cells_enabled(False)
        return True

    def _highlight_winning_line(self):
        line = winning_line(self.game_state.board.cells)
        if line is None:
            return
        for index in line:
            row, col = divmod(index, GameConfig.BOARD_SIZE)
            self.board_cells[row][col].configure(bg=WIN_BG)

    # ==================== DISPLAY ====================

    def _on_cell_changed(self, row: int, col: int, mark: Mark):
        """Board listener; may be called from the agent's thread."""
        self.root.after(0, lambda: self._paint_cell(row, col, mark))

    def _paint_cell(self, row: int, col: int, mark: Mark):
        bg, fg = HUMAN_COLORS if mark is self.human_player else AGENT_COLORS
        self.board_cells[row][col].configure(
            text=GameConfig.SYMBOLS[mark.name],
            bg=bg,
            fg=fg,
            state='disabled',
            disabledforeground=fg
        )

    def _set_cells_enabled(self, enabled: bool):
        board = self.game_state.board
        for row, row_cells in enumerate(self.board_cells):
            for col, cell in enumerate(row_cells):
                if enabled and board.get(row, col) is Mark.EMPTY:
                    cell.configure(state='normal')
                else:
                    cell.configure(state='disabled')

    def _reset_game(self):
        """Reset the game."""
        if self.agent_thinking:
            return
        self.agent_first = self.agent_first_var.get()
        self.game_state.first_player = self._first_player()
        self.game_state.reset()
        self._init_game()

    def _quit(self):
        """Quit the application."""
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


def main():
    """Main entry point."""
    from main import parse_args, setup_logging

    args = parse_args("TicTacToe Agent UI", console_flag=False)
    setup_logging(args.debug)

    ui = TicTacToeUI(agent_first=args.agent_first, depth=args.depth)
    ui.run()


if __name__ == "__main__":
    main()

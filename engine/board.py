"""
Board state for the TicTacToe agent.
Tracks the 9 cells, applies placements and reports the game status.
"""

from enum import Enum
from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from .config import GameConfig
from .win_checker import min_steps


class Mark(Enum):
    """The mark held by a cell."""
    A = 1
    B = -1
    EMPTY = 0

    @property
    def polarity(self) -> int:
        """+1 for A, -1 for B, 0 for EMPTY."""
        return self.value

    def opponent(self) -> "Mark":
        """Get the opponent mark. EMPTY maps to itself."""
        return Mark(-self.value)


class Status(Enum):
    """The status of the game, derived from the board."""
    RUNNING = "running"
    A_WINS = "a_wins"
    B_WINS = "b_wins"
    DRAWN = "drawn"


class BoardCell(NamedTuple):
    """A read-only view of one cell."""
    row: int
    col: int
    mark: Mark


# Called as listener(row, col, mark) after every placement
CellListener = Callable[[int, int, Mark], None]


# Characters accepted by Board.from_string
_CHAR_MARKS = {
    "A": Mark.A,
    "B": Mark.B,
    ".": Mark.EMPTY,
    "-": Mark.EMPTY,
}


class Board:
    """
    The 3x3 TicTacToe board.

    Cells are stored as a flat numpy array of mark polarities, indexed
    by row * 3 + col. The board only changes through place(), which
    notifies the registered listeners in registration order.
    """

    def __init__(self):
        self._cells = np.zeros(GameConfig.CELL_COUNT, dtype=np.int8)
        self._listeners: List[CellListener] = []

    @classmethod
    def from_string(cls, layout: str) -> "Board":
        """
        Build a board from a row-major layout string.

        Whitespace is ignored, so "AB. .A. ..B" and "AB..A...B" give the
        same board. Use A and B for marks and "." or "-" for empty cells.
        Listeners are not notified (there are none yet).

        Args:
            layout: The 9 cell characters.

        Returns:
            The new board.
        """
        chars = "".join(layout.split())
        if len(chars) != GameConfig.CELL_COUNT:
            raise ValueError(
                f"Layout needs {GameConfig.CELL_COUNT} cells, got {len(chars)}"
            )

        board = cls()
        for index, char in enumerate(chars):
            try:
                board._cells[index] = _CHAR_MARKS[char.upper()].polarity
            except KeyError:
                raise ValueError(f"Unknown cell character {char!r}") from None
        return board

    # ==================== LISTENERS ====================

    def add_listener(self, listener: CellListener):
        """Register a listener called as listener(row, col, mark)."""
        self._listeners.append(listener)

    def remove_listener(self, listener: CellListener):
        """Unregister a listener. Raises ValueError if it is not registered."""
        self._listeners.remove(listener)

    @property
    def listeners(self) -> Tuple[CellListener, ...]:
        """The registered listeners, in registration order."""
        return tuple(self._listeners)

    # ==================== CELLS ====================

    def place(self, row: int, col: int, mark: Mark):
        """
        Place a mark at the given position and notify the listeners.

        Occupancy is not checked here; the agent only ever places on
        empty cells and tests may overwrite on purpose.

        Args:
            row: Row index (0-2).
            col: Column index (0-2).
            mark: The mark to write.
        """
        self._cells[row * GameConfig.BOARD_SIZE + col] = mark.polarity
        for listener in list(self._listeners):
            listener(row, col, mark)

    def place_cell(self, cell: BoardCell):
        """Place cell.mark at (cell.row, cell.col). See place()."""
        self.place(cell.row, cell.col, cell.mark)

    def get(self, row: int, col: int) -> Mark:
        """Get the mark at (row, col)."""
        return self.flat(row * GameConfig.BOARD_SIZE + col)

    def flat(self, index: int) -> Mark:
        """Get the mark at a flat (row-major) index."""
        return Mark(int(self._cells[index]))

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the polarity array."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def __iter__(self) -> Iterator[BoardCell]:
        """Iterate over the 9 cells in row-major order."""
        size = GameConfig.BOARD_SIZE
        for index in range(GameConfig.CELL_COUNT):
            yield BoardCell(index // size, index % size, Mark(int(self._cells[index])))

    def empty_cells(self) -> List[Tuple[int, int]]:
        """
        Get all empty cells on the board.

        Returns:
            List of (row, col) tuples, in row-major order.
        """
        return [(cell.row, cell.col) for cell in self if cell.mark is Mark.EMPTY]

    def is_full(self) -> bool:
        """True when no cell is empty."""
        return bool(np.all(self._cells != Mark.EMPTY.polarity))

    # ==================== STATUS ====================

    def status(self) -> Status:
        """
        Get the status of the game.

        A wins when one of its lines is complete; this is checked before
        B. Otherwise a full board is a draw.
        """
        if min_steps(self._cells, Mark.A.polarity) == 0:
            return Status.A_WINS
        if min_steps(self._cells, Mark.B.polarity) == 0:
            return Status.B_WINS
        if self.is_full():
            return Status.DRAWN
        return Status.RUNNING

    def winner(self) -> Optional[Mark]:
        """Get the winning mark, or None."""
        status = self.status()
        if status is Status.A_WINS:
            return Mark.A
        if status is Status.B_WINS:
            return Mark.B
        return None

    # ==================== COPYING ====================

    def duplicate(self) -> "Board":
        """
        Create an independent copy of the cells.

        The copy has no listeners: it is scratch space for lookahead.
        """
        board = Board()
        board._cells = self._cells.copy()
        return board

    __copy__ = duplicate

    def __deepcopy__(self, memo) -> "Board":
        return self.duplicate()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    __hash__ = None

    def __str__(self) -> str:
        symbols = GameConfig.SYMBOLS
        size = GameConfig.BOARD_SIZE
        rows = []
        for row in range(size):
            rows.append(" | ".join(
                symbols[self.get(row, col).name] for col in range(size)
            ))
        return "\n---------\n".join(rows)

    def __repr__(self) -> str:
        chars = "".join(
            "." if cell.mark is Mark.EMPTY else cell.mark.name for cell in self
        )
        return f"Board({chars!r})"

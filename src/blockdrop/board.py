"""Board representation for the playfield."""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import HEIGHT, WIDTH
from .pieces import Piece

Grid = NDArray[np.uint8]

# Value of an empty cell.  Any other value is a colour token.
EMPTY = 0


def create_empty_grid(height: int = HEIGHT, width: int = WIDTH) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Fixed-size grid holding the merged cells."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(height, width)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """Build a board from nested rows of colour tokens.

        Raises:
            ValueError: If ``rows`` is empty or ragged.
        """

        if not rows or not rows[0]:
            raise ValueError("Grid must have at least one row and column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Grid width mismatch")
        board = cls(width=width, height=len(rows))
        board.grid = np.asarray(rows, dtype=np.uint8).copy()
        return board

    def copy(self) -> "Board":
        board = Board(self.width, self.height)
        board.grid = self.grid.copy()
        return board

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] == EMPTY)
        return False

    def is_clear(self) -> bool:
        return not bool(np.any(self.grid != EMPTY))

    def lock_piece(self, piece: Piece, position: Tuple[int, int]) -> None:
        """Stamp the piece's colour into the grid at ``position``.

        ``position`` is ``(x, y)``.  Cells landing above row ``0`` are
        dropped.

        Raises:
            IndexError: If a visible cell falls outside the board.
        """

        x, y = position
        for dr, dc in piece.cells():
            row, col = y + dr, x + dc
            if row < 0:
                continue
            if row >= self.height or not 0 <= col < self.width:
                raise IndexError("Block out of bounds")
            self.grid[row, col] = np.uint8(piece.color)

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Surviving rows keep their order and the grid is topped up with
        empty rows so the height never changes.
        """

        full_rows = np.all(self.grid != EMPTY, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

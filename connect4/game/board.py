"""
board.py - Grid representation for Connect Four

The Grid owns the cell array and answers geometric questions about it:
where a piece would land, whether the grid is full, and which line (if
any) a given cell belongs to. It knows nothing about turns or players
beyond the integer slot stored in each cell.
"""

from typing import List, Optional

import numpy as np

from connect4.debug import debug
from connect4.utils import (CONNECT_N, DIRECTION_VECTORS, EMPTY, Direction, Position,
                            is_valid_position, render_board_ascii)


class Grid:
    """
    Fixed-size ``height x width`` grid, indexed ``[row, column]`` with row 0 on top.

    Cells are only ever written once; there is no way to clear a cell.
    """

    def __init__(self, height: int, width: int):
        if height < 1 or width < 1:
            raise ValueError(f"Grid dimensions must be positive, got {height}x{width}")

        debug.trace(f"Creating {height}x{width} grid", "board")
        self._cells = np.zeros((height, width), dtype=np.int8)

    @property
    def height(self) -> int:
        return self._cells.shape[0]

    @property
    def width(self) -> int:
        return self._cells.shape[1]

    def __getitem__(self, position: Position) -> int:
        row, col = position
        return int(self._cells[row, col])

    def contains(self, row: int, col: int) -> bool:
        return is_valid_position(self._cells, row, col)

    def is_column_in_range(self, column: int) -> bool:
        return 0 <= column < self.width

    def find_drop_row(self, column: int) -> Optional[int]:
        """
        Find the lowest empty row of a column.

        Args:
            column: Column index (0-indexed)

        Returns:
            Row index, or None if the column is full or out of range
        """
        if not self.is_column_in_range(column):
            return None

        for row in range(self.height - 1, -1, -1):
            if self._cells[row, column] == EMPTY:
                return row
        return None

    def place(self, row: int, column: int, slot: int) -> None:
        """Write ``slot`` into an empty cell."""
        if slot == EMPTY:
            raise ValueError("Cannot place an empty piece")
        if self._cells[row, column] != EMPTY:
            raise ValueError(f"Cell ({row}, {column}) is already occupied")

        self._cells[row, column] = slot

    def is_full(self) -> bool:
        return not (self._cells == EMPTY).any()

    def open_columns(self) -> List[int]:
        """Columns whose top cell is still empty."""
        return [int(col) for col in np.flatnonzero(self._cells[0] == EMPTY)]

    def line_from(self, row: int, col: int, direction: Direction) -> Optional[List[Position]]:
        """
        Return the CONNECT_N cells starting at (row, col) in ``direction``
        if they are all in bounds and owned by the same player.
        """
        slot = self._cells[row, col] if self.contains(row, col) else EMPTY
        if slot == EMPTY:
            return None

        dr, dc = DIRECTION_VECTORS[direction]
        cells = [(row + i * dr, col + i * dc) for i in range(CONNECT_N)]
        if all(self.contains(r, c) and self._cells[r, c] == slot for r, c in cells):
            return cells
        return None

    def line_through(self, row: int, col: int) -> Optional[List[Position]]:
        """
        Find a line of at least CONNECT_N same-owner cells passing through (row, col).

        Every new line must include the most recently placed piece, so checking
        only the lines through it gives the same answer as scanning the whole grid.

        Returns:
            Cells of the line ordered along the direction, or None
        """
        slot = self._cells[row, col]
        if slot == EMPTY:
            return None

        for direction, (dr, dc) in DIRECTION_VECTORS.items():
            # Walk back to the first cell of the run, then forward to its end
            r, c = row, col
            while self.contains(r - dr, c - dc) and self._cells[r - dr, c - dc] == slot:
                r -= dr
                c -= dc

            cells = []
            while self.contains(r, c) and self._cells[r, c] == slot:
                cells.append((r, c))
                r += dr
                c += dc

            if len(cells) >= CONNECT_N:
                debug.trace(f"Line found through ({row}, {col}) going {direction.name}", "board")
                return cells

        return None

    def find_line(self, slot: int) -> Optional[List[Position]]:
        """
        Scan every cell in row-major order for a line owned by ``slot``.

        Returns:
            The first line found, or None
        """
        for row in range(self.height):
            for col in range(self.width):
                if self._cells[row, col] != slot:
                    continue
                for direction in DIRECTION_VECTORS:
                    cells = self.line_from(row, col, direction)
                    if cells:
                        return cells
        return None

    def to_array(self) -> np.ndarray:
        """Copy of the cell array."""
        return self._cells.copy()

    def render(self, symbols=None) -> str:
        return render_board_ascii(self._cells, symbols)

    def __str__(self) -> str:
        return self.render()

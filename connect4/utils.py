"""
utils.py - Constants, enumerations and small helpers shared by the engine

The grid stores plain integers: ``EMPTY`` for a free cell, otherwise the
slot number (1 or 2) of the player owning the piece.
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

import numpy as np

# Game constants
DEFAULT_HEIGHT = 6
DEFAULT_WIDTH = 7
CONNECT_N = 4  # Number of pieces in a row to win
MIN_DIMENSION = CONNECT_N  # Smaller grids can never produce a line on that axis

EMPTY = 0
PLAYER_ONE = 1
PLAYER_TWO = 2

Position = Tuple[int, int]


class GameStatus(Enum):
    """Lifecycle of a game."""
    ONGOING = auto()
    WON = auto()
    TIED = auto()

    def is_terminal(self) -> bool:
        return self != GameStatus.ONGOING


class MoveOutcome(Enum):
    """What a single drop did."""
    MOVED = auto()
    WON = auto()
    TIED = auto()
    IGNORED = auto()


class RejectReason(Enum):
    """Why a drop was ignored."""
    INVALID_COLUMN = auto()
    COLUMN_FULL = auto()
    GAME_OVER = auto()


class Direction(Enum):
    """Line directions checked for four-in-a-row."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# (row, col) steps; row 0 is the top of the grid
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def is_valid_position(grid: np.ndarray, row: int, col: int) -> bool:
    """Check if (row, col) lies inside ``grid``."""
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= col < cols


def render_board_ascii(grid: np.ndarray, symbols: Optional[Dict[int, str]] = None) -> str:
    """
    Render a slot grid as ASCII art with column numbers underneath.

    Args:
        grid: 2D array of slot values
        symbols: Cell glyph per slot value (defaults to X / O)

    Returns:
        Multi-line string
    """
    symbols = symbols or {PLAYER_ONE: "X", PLAYER_TWO: "O"}
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"

    lines: List[str] = [border]
    for row in range(rows):
        cells = [symbols.get(int(grid[row, col]), " ") if grid[row, col] != EMPTY else " "
                 for col in range(cols)]
        lines.append("|" + " ".join(cells) + "|")
    lines.append(border)

    # Column numbers wrap at 10 so wide boards stay aligned
    lines.append("|" + " ".join(str(col % 10) for col in range(cols)) + "|")

    return "\n".join(lines)

"""
utils.py - Constants, enumerations and helpers for the Connect Four game

Row 0 is the top of the board and row ROWS-1 the bottom, so gravity pulls
discs towards higher row indices.
"""

from enum import Enum, auto
from typing import Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of discs in a line needed to win


class Mark(Enum):
    """What a cell holds: nothing, or the disc of one of the two players."""
    EMPTY = 0
    FIRST = 1
    SECOND = 2

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    def other(self) -> 'Mark':
        """Get the opposing mark."""
        if self == Mark.FIRST:
            return Mark.SECOND
        if self == Mark.SECOND:
            return Mark.FIRST
        return Mark.EMPTY

    def is_player(self) -> bool:
        return self != Mark.EMPTY

    def __str__(self):
        return self.symbol


_SYMBOLS = {
    Mark.EMPTY: " ",
    Mark.FIRST: "X",
    Mark.SECOND: "O",
}


class Direction(Enum):
    """The four axes along which a line can be made."""
    VERTICAL = auto()
    HORIZONTAL = auto()
    DIAGONAL_DOWN = auto()  # top-left to bottom-right
    DIAGONAL_UP = auto()  # bottom-left to top-right


# Positive step (row, col) along each axis; the negative step is its mirror
DIRECTION_VECTORS = {
    Direction.VERTICAL: (1, 0),
    Direction.HORIZONTAL: (0, 1),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (-1, 1),
}


def is_valid_position(row: int, col: int) -> bool:
    """Check if a position is within the board boundaries."""
    return 0 <= row < ROWS and 0 <= col < COLS


def is_valid_column(col: int) -> bool:
    if isinstance(col, bool) or not isinstance(col, (int, np.integer)):
        return False
    return 0 <= col < COLS


def count_in_direction(grid: np.ndarray, row: int, col: int,
                       step: Tuple[int, int], value: int) -> int:
    """
    Count cells equal to `value` walking away from (row, col).

    The starting cell itself is not counted; the walk stops at the first
    cell that differs or at the board edge.

    Args:
        grid: The board grid
        row: Starting row
        col: Starting column
        step: (row delta, column delta) for each step
        value: Mark value to match

    Returns:
        Number of contiguous matching cells strictly beyond the start
    """
    dr, dc = step
    count = 0
    r, c = row + dr, col + dc
    while is_valid_position(r, c) and grid[r, c] == value:
        count += 1
        r += dr
        c += dc
    return count


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the grid top-to-bottom with a 1-based column legend.

    Args:
        grid: The board grid

    Returns:
        Multi-line text, one line per row, then a separator and the legend
    """
    lines = []
    for row in range(ROWS):
        cells = "".join(f"| {Mark(int(grid[row, col])).symbol} " for col in range(COLS))
        lines.append(cells + "|")

    lines.append("-" * (COLS * 4 + 1))
    lines.append("".join(f"  {col + 1} " for col in range(COLS)) + " ")

    return "\n".join(lines)

"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class, the only owner of grid state. Discs
enter through place() and leave through undo(); the move history recorded
by place() is what undo() rewinds, one disc at a time.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

from connect_four.debug import debug
from connect_four.utils import (ROWS, COLS, CONNECT_N, Mark, DIRECTION_VECTORS,
                                count_in_direction, is_valid_column, is_valid_position,
                                render_board_ascii)


@dataclass(frozen=True)
class Move:
    """A single placement: which mark landed where."""
    mark: Mark
    row: int
    column: int


class PlaceStatus(Enum):
    PLACED = auto()
    COLUMN_FULL = auto()


@dataclass(frozen=True)
class PlaceResult:
    """
    Outcome of Board.place().

    `row` is the landing row when the disc was placed and None when the
    column was already full.
    """
    status: PlaceStatus
    column: int
    row: Optional[int] = None

    @property
    def placed(self) -> bool:
        return self.status == PlaceStatus.PLACED

    @property
    def column_full(self) -> bool:
        return self.status == PlaceStatus.COLUMN_FULL


class Board:
    """
    Represents a Connect Four game board.

    The grid is a ROWS x COLS numpy array of Mark values with row 0 at the
    top. The history list always holds exactly one Move per occupied cell.
    """

    def __init__(self):
        """Initialize an empty Connect Four board."""
        debug.trace("Initializing new Board", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = np.full((ROWS, COLS), Mark.EMPTY.value, dtype=int)
        self._history: List[Move] = []

    def copy(self) -> 'Board':
        """Create an independent copy of the board and its history."""
        new_board = Board()
        new_board.grid = self.grid.copy()
        new_board._history = list(self._history)
        return new_board

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._history)

    @property
    def move_count(self) -> int:
        return len(self._history)

    @property
    def last_move(self) -> Optional[Move]:
        return self._history[-1] if self._history else None

    def cell(self, row: int, column: int) -> Mark:
        if not is_valid_position(row, column):
            raise ValueError(f"Position ({row}, {column}) is outside the board")
        return Mark(int(self.grid[row, column]))

    def _check_column(self, column: int) -> None:
        if not is_valid_column(column):
            raise ValueError(f"Column {column} out of range (0-{COLS - 1})")

    def place(self, mark: Mark, column: int) -> PlaceResult:
        """
        Drop a disc for `mark` into `column`.

        Args:
            mark: Mark.FIRST or Mark.SECOND
            column: The column to drop into (0-indexed)

        Returns:
            PlaceResult with the landing row, or a COLUMN_FULL status when
            there is no room (the board is left untouched)

        Raises:
            ValueError: for an out-of-range column or a non-player mark
        """
        self._check_column(column)
        if not isinstance(mark, Mark) or not mark.is_player():
            raise ValueError(f"Cannot place mark {mark!r}")

        if self.is_column_full(column):
            debug.debug(f"Column {column} is full", "board")
            return PlaceResult(PlaceStatus.COLUMN_FULL, column)

        for row in range(ROWS - 1, -1, -1):
            if self.grid[row, column] == Mark.EMPTY.value:
                self.grid[row, column] = mark.value
                self._history.append(Move(mark, row, column))
                debug.debug(f"Placed {mark} at ({row}, {column})", "board")
                return PlaceResult(PlaceStatus.PLACED, column, row)

        # The top cell was empty, so the scan above always finds a row
        raise AssertionError(f"No empty cell found in column {column}")

    def undo(self) -> bool:
        """
        Take back the most recent disc.

        Returns:
            True if a disc was removed, False if there were no moves to undo
        """
        if not self._history:
            debug.debug("No moves to undo", "board")
            return False

        move = self._history.pop()
        self.grid[move.row, move.column] = Mark.EMPTY.value
        debug.debug(f"Undid {move.mark} at ({move.row}, {move.column})", "board")
        return True

    def is_column_full(self, column: int) -> bool:
        self._check_column(column)
        return self.grid[0, column] != Mark.EMPTY.value

    def is_board_full(self) -> bool:
        return bool(np.all(self.grid[0] != Mark.EMPTY.value))

    def column_height(self, column: int) -> int:
        """Number of discs currently stacked in `column`."""
        self._check_column(column)
        return int(np.count_nonzero(self.grid[:, column] != Mark.EMPTY.value))

    def valid_columns(self) -> List[int]:
        return [col for col in range(COLS) if not self.is_column_full(col)]

    def _check_placed(self, row: int, column: int, mark: Mark) -> None:
        if not is_valid_position(row, column):
            raise ValueError(f"Position ({row}, {column}) is outside the board")
        if not isinstance(mark, Mark) or not mark.is_player():
            raise ValueError(f"Cannot check mark {mark!r}")
        if self.grid[row, column] != mark.value:
            raise ValueError(f"No {mark} disc at ({row}, {column})")

    def is_winning_placement(self, row: int, column: int, mark: Mark) -> bool:
        """
        Check whether the disc at (row, column) completes a line of CONNECT_N.

        Args:
            row: Row where the disc landed, as returned by place()
            column: Column the disc was dropped into
            mark: The mark that was placed

        Returns:
            True if any axis through the cell holds CONNECT_N or more of `mark`
        """
        return bool(self.winning_line(row, column, mark))

    def winning_line(self, row: int, column: int, mark: Mark = None) -> List[Tuple[int, int]]:
        """
        Get the cells of the first winning line through (row, column).

        Returns:
            List of (row, col) positions forming the line, or [] if no win
        """
        if mark is None:
            mark = self.cell(row, column)
        self._check_placed(row, column, mark)

        for direction, (dr, dc) in DIRECTION_VECTORS.items():
            ahead = count_in_direction(self.grid, row, column, (dr, dc), mark.value)
            behind = count_in_direction(self.grid, row, column, (-dr, -dc), mark.value)

            if ahead + behind + 1 >= CONNECT_N:
                debug.debug(f"{mark} wins {direction.name.lower()} through ({row}, {column})", "board")
                return [(row + i * dr, column + i * dc) for i in range(-behind, ahead + 1)]

        return []

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid as a numpy array."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()

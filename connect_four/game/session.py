"""
session.py - Players and the saveable game session

A GameSession bundles the board, both players and whose turn it is. It has
no behaviour of its own beyond converting to and from a plain dict that the
data layer writes out as JSON.
"""

from typing import Any, Dict

from connect_four.debug import debug
from connect_four.game.board import Board
from connect_four.utils import ROWS, COLS, Mark

SNAPSHOT_VERSION = 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Player:
    """A named player bound to one of the two marks."""

    def __init__(self, name: str, mark: Mark):
        if not isinstance(mark, Mark) or not mark.is_player():
            raise ValueError(f"A player needs Mark.FIRST or Mark.SECOND, got {mark!r}")
        self.name = name
        self._mark = mark

    @property
    def mark(self) -> Mark:
        return self._mark

    @property
    def symbol(self) -> str:
        return self._mark.symbol

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "mark": self._mark.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        if not isinstance(data, dict):
            raise ValueError(f"Player entry must be a mapping, got {data!r}")
        try:
            mark = Mark(data["mark"])
        except (KeyError, ValueError, TypeError) as e:
            raise ValueError(f"Invalid player mark in {data!r}") from e
        name = data.get("name")
        if not isinstance(name, str):
            raise ValueError(f"Invalid player name in {data!r}")
        return cls(name, mark)

    def __eq__(self, other):
        if not isinstance(other, Player):
            return NotImplemented
        return self.name == other.name and self._mark == other._mark

    def __hash__(self):
        # name can change during a session; the mark cannot
        return hash(self._mark)

    def __repr__(self):
        return f"Player(name={self.name!r}, mark={self._mark.name})"


class GameSession:
    """Board, both players, and the player to move next."""

    def __init__(self, board: Board, player_one: Player, player_two: Player, current: Player):
        if player_one.mark == player_two.mark:
            raise ValueError("Both players cannot share the same mark")
        if current not in (player_one, player_two):
            raise ValueError(f"Current player {current!r} is not part of this session")
        self.board = board
        self.player_one = player_one
        self.player_two = player_two
        self.current = current

    @property
    def players(self):
        return self.player_one, self.player_two

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the session to a JSON-friendly dict.

        The board is stored as its move history; the grid is rebuilt by
        replaying those moves on load.
        """
        return {
            "version": SNAPSHOT_VERSION,
            "rows": ROWS,
            "cols": COLS,
            "players": [self.player_one.to_dict(), self.player_two.to_dict()],
            "current": self.current.mark.value,
            "moves": [[move.mark.value, move.row, move.column] for move in self.board.history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameSession':
        """
        Rebuild a session from the dict produced by to_dict().

        Raises:
            ValueError: if the data is from another version, another board
                size, or does not describe a legal sequence of moves
        """
        if not isinstance(data, dict):
            raise ValueError("Snapshot must be a mapping")

        version = data.get("version")
        if version != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version: {version!r}")

        if data.get("rows") != ROWS or data.get("cols") != COLS:
            raise ValueError(f"Snapshot board is {data.get('rows')}x{data.get('cols')}, expected {ROWS}x{COLS}")

        players = data.get("players")
        if not isinstance(players, list) or len(players) != 2:
            raise ValueError("Snapshot must list exactly two players")
        player_one, player_two = (Player.from_dict(p) for p in players)

        current_mark = data.get("current")
        if current_mark == player_one.mark.value:
            current = player_one
        elif current_mark == player_two.mark.value:
            current = player_two
        else:
            raise ValueError(f"Unknown current player mark: {current_mark!r}")

        moves = data.get("moves", [])
        if not isinstance(moves, list):
            raise ValueError(f"Snapshot moves must be a list, got {type(moves).__name__}")

        board = Board()
        for entry in moves:
            if not isinstance(entry, list) or len(entry) != 3 or not all(_is_int(v) for v in entry):
                raise ValueError(f"Invalid move record {entry!r}")
            mark_value, row, column = entry
            try:
                result = board.place(Mark(mark_value), column)
            except ValueError as e:
                raise ValueError(f"Invalid move record {entry!r}") from e
            if not result.placed or result.row != row:
                raise ValueError(f"Move {entry!r} does not replay onto the board")

        debug.debug(f"Restored session with {board.move_count} moves", "session")
        return cls(board, player_one, player_two, current)

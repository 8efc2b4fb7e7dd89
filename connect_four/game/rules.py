"""
rules.py - Turn handling for a two-player Connect Four game

This module provides:
1. The four things a player can ask for on their turn (the intents)
2. apply_intent(), which carries out one intent against a board
3. TurnController, which alternates the two players and knows when the game is over

Columns in PlaceAt are 1-based, as typed by a person; the board itself is
0-based and the translation happens here.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from connect_four.debug import debug
from connect_four.game.board import Board
from connect_four.game.session import GameSession, Player
from connect_four.utils import COLS, Mark


@dataclass(frozen=True)
class PlaceAt:
    column: int  # 1-based


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Intent = Union[PlaceAt, Undo, Save, Quit]


class OutcomeKind(Enum):
    CONTINUE = auto()
    COLUMN_FULL = auto()
    UNDONE = auto()
    NOTHING_TO_UNDO = auto()
    SAVE_REQUESTED = auto()
    WIN = auto()
    DRAW = auto()
    TERMINATED = auto()


TERMINAL_KINDS = frozenset({OutcomeKind.WIN, OutcomeKind.DRAW, OutcomeKind.TERMINATED})


@dataclass(frozen=True)
class TurnOutcome:
    """What happened on a turn; row and column are 0-based and only set for placements."""
    kind: OutcomeKind
    player: Player
    row: Optional[int] = None
    column: Optional[int] = None

    @property
    def advances_turn(self) -> bool:
        return self.kind == OutcomeKind.CONTINUE

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS


def to_board_column(column: int) -> int:
    """Translate a 1-based column number to the board's 0-based index."""
    if isinstance(column, bool) or not isinstance(column, int) or not 1 <= column <= COLS:
        raise ValueError(f"Column must be between 1 and {COLS}, got {column!r}")
    return column - 1


def apply_intent(intent: Intent, player: Player, board: Board) -> TurnOutcome:
    """
    Carry out one intent for `player` on `board`.

    Args:
        intent: PlaceAt, Undo, Save or Quit
        player: The player whose turn it is
        board: The board to act on

    Returns:
        TurnOutcome describing the result; a full column or an empty history
        are ordinary outcomes, not errors
    """
    if isinstance(intent, PlaceAt):
        column = to_board_column(intent.column)
        result = board.place(player.mark, column)

        if result.column_full:
            debug.info(f"{player.name} tried full column {intent.column}", "turn")
            return TurnOutcome(OutcomeKind.COLUMN_FULL, player, column=column)

        if board.is_winning_placement(result.row, column, player.mark):
            debug.info(f"{player.name} wins with a disc at ({result.row}, {column})", "turn")
            return TurnOutcome(OutcomeKind.WIN, player, result.row, column)

        if board.is_board_full():
            debug.info("Board full with no winner", "turn")
            return TurnOutcome(OutcomeKind.DRAW, player, result.row, column)

        return TurnOutcome(OutcomeKind.CONTINUE, player, result.row, column)

    if isinstance(intent, Undo):
        if board.undo():
            return TurnOutcome(OutcomeKind.UNDONE, player)
        return TurnOutcome(OutcomeKind.NOTHING_TO_UNDO, player)

    if isinstance(intent, Save):
        return TurnOutcome(OutcomeKind.SAVE_REQUESTED, player)

    if isinstance(intent, Quit):
        debug.info(f"{player.name} quit the game", "turn")
        return TurnOutcome(OutcomeKind.TERMINATED, player)

    raise TypeError(f"Unknown intent: {intent!r}")


class TurnController:
    """
    Alternates two players over a shared board.

    Only a CONTINUE outcome passes the turn. Undo, save and a full column
    all leave the same player to move again.
    """

    def __init__(self, player_one: Player, player_two: Player,
                 board: Optional[Board] = None, current: Optional[Player] = None):
        if player_one.mark == player_two.mark:
            raise ValueError("Players must have different marks")
        self.player_one = player_one
        self.player_two = player_two
        self.board = board if board is not None else Board()
        self.current = current if current is not None else self._first_player()
        if self.current not in (player_one, player_two):
            raise ValueError(f"{self.current!r} is not playing this game")
        self.last_outcome: Optional[TurnOutcome] = None

    def _first_player(self) -> Player:
        return self.player_one if self.player_one.mark == Mark.FIRST else self.player_two

    @classmethod
    def from_session(cls, session: GameSession) -> 'TurnController':
        return cls(session.player_one, session.player_two, session.board, session.current)

    def snapshot(self) -> GameSession:
        return GameSession(self.board, self.player_one, self.player_two, self.current)

    @property
    def is_finished(self) -> bool:
        return self.last_outcome is not None and self.last_outcome.is_terminal

    def opponent_of(self, player: Player) -> Player:
        if player == self.player_one:
            return self.player_two
        if player == self.player_two:
            return self.player_one
        raise ValueError(f"{player!r} is not playing this game")

    def take_turn(self, intent: Intent) -> TurnOutcome:
        """
        Apply `intent` for the current player and move the turn on if needed.

        Raises:
            RuntimeError: if the game has already been won, drawn or quit
        """
        if self.is_finished:
            raise RuntimeError("The game is over")

        outcome = apply_intent(intent, self.current, self.board)
        self.last_outcome = outcome

        if outcome.advances_turn:
            self.current = self.opponent_of(self.current)
            debug.debug(f"Turn passes to {self.current.name}", "turn")

        return outcome

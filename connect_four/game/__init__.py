"""
connect_four.game - Core game mechanics for Connect Four

This package contains the board, the turn controller and the saveable
game session.
"""

from connect_four.game.board import Board, Move, PlaceResult, PlaceStatus
from connect_four.game.session import GameSession, Player, SNAPSHOT_VERSION
from connect_four.game.rules import (Intent, OutcomeKind, PlaceAt, Quit, Save, TurnController,
                                     TurnOutcome, Undo, apply_intent)

__all__ = ['Board', 'Move', 'PlaceResult', 'PlaceStatus', 'GameSession', 'Player',
           'SNAPSHOT_VERSION', 'Intent', 'OutcomeKind', 'PlaceAt', 'Quit', 'Save',
           'TurnController', 'TurnOutcome', 'Undo', 'apply_intent']

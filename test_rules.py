import pytest

from connect_four.game.board import Board
from connect_four.game.rules import (OutcomeKind, PlaceAt, Quit, Save, TurnController, Undo,
                                     apply_intent, to_board_column)
from connect_four.game.session import Player
from connect_four.utils import COLS, ROWS, Mark

from test_board import fill_without_win


@pytest.fixture
def ann():
    return Player("Ann", Mark.FIRST)


@pytest.fixture
def bob():
    return Player("Bob", Mark.SECOND)


@pytest.fixture
def controller(ann, bob):
    return TurnController(ann, bob)


# --------------------------
# apply_intent
# --------------------------

def test_place_translates_one_based_column(ann):
    b = Board()
    outcome = apply_intent(PlaceAt(1), ann, b)
    assert outcome.kind == OutcomeKind.CONTINUE
    assert (outcome.row, outcome.column) == (ROWS - 1, 0)
    assert b.cell(ROWS - 1, 0) == Mark.FIRST


@pytest.mark.parametrize("column", [0, COLS + 1, -1])
def test_place_outside_one_to_cols_is_rejected(ann, column):
    with pytest.raises(ValueError):
        apply_intent(PlaceAt(column), ann, Board())


def test_to_board_column_bounds():
    assert to_board_column(1) == 0
    assert to_board_column(COLS) == COLS - 1
    with pytest.raises(ValueError):
        to_board_column(True)


def test_full_column_is_a_recoverable_outcome(ann):
    b = Board()
    for _ in range(ROWS):
        b.place(Mark.SECOND, 2)
    outcome = apply_intent(PlaceAt(3), ann, b)
    assert outcome.kind == OutcomeKind.COLUMN_FULL
    assert outcome.column == 2
    assert not outcome.advances_turn
    assert not outcome.is_terminal
    assert b.move_count == ROWS


def test_fourth_disc_wins(ann):
    b = Board()
    for col in range(3):
        b.place(Mark.FIRST, col)
    outcome = apply_intent(PlaceAt(4), ann, b)
    assert outcome.kind == OutcomeKind.WIN
    assert outcome.player == ann
    assert outcome.is_terminal


def test_last_cell_without_win_is_a_draw(ann):
    b = Board()
    fill_without_win(b, skip=(0, COLS - 1))
    # the pattern puts X in the top-right cell
    outcome = apply_intent(PlaceAt(COLS), ann, b)
    assert outcome.kind == OutcomeKind.DRAW
    assert b.is_board_full()


def test_undo_outcomes(ann):
    b = Board()
    assert apply_intent(Undo(), ann, b).kind == OutcomeKind.NOTHING_TO_UNDO
    b.place(Mark.SECOND, 0)
    assert apply_intent(Undo(), ann, b).kind == OutcomeKind.UNDONE
    assert b.move_count == 0


def test_save_and_quit_are_passed_through(ann):
    b = Board()
    assert apply_intent(Save(), ann, b).kind == OutcomeKind.SAVE_REQUESTED
    assert apply_intent(Quit(), ann, b).kind == OutcomeKind.TERMINATED
    assert b.move_count == 0


def test_unknown_intent_is_rejected(ann):
    with pytest.raises(TypeError):
        apply_intent("drop 3", ann, Board())


# --------------------------
# TurnController
# --------------------------

def test_first_mark_moves_first(ann, bob):
    assert TurnController(bob, ann).current == ann


def test_turn_passes_after_a_normal_move(controller, ann, bob):
    controller.take_turn(PlaceAt(4))
    assert controller.current == bob
    controller.take_turn(PlaceAt(4))
    assert controller.current == ann


@pytest.mark.parametrize("intent", [Undo(), Save()])
def test_undo_and_save_keep_the_same_player(controller, bob, intent):
    controller.take_turn(PlaceAt(1))
    assert controller.current == bob
    controller.take_turn(intent)
    assert controller.current == bob


def test_undo_rewinds_one_disc_without_changing_turn(controller, bob):
    controller.take_turn(PlaceAt(1))
    outcome = controller.take_turn(Undo())
    assert outcome.kind == OutcomeKind.UNDONE
    assert outcome.player == bob
    assert controller.board.move_count == 0
    assert controller.current == bob


def test_full_column_keeps_the_same_player(controller):
    for _ in range(ROWS):
        controller.take_turn(PlaceAt(5))
    player = controller.current
    outcome = controller.take_turn(PlaceAt(5))
    assert outcome.kind == OutcomeKind.COLUMN_FULL
    assert controller.current == player


def test_win_ends_the_game(controller, ann):
    for col in [1, 1, 2, 2, 3, 3]:
        controller.take_turn(PlaceAt(col))
    outcome = controller.take_turn(PlaceAt(4))
    assert outcome.kind == OutcomeKind.WIN
    assert outcome.player == ann
    assert controller.is_finished
    assert controller.current == ann
    with pytest.raises(RuntimeError):
        controller.take_turn(PlaceAt(7))


def test_quit_ends_the_game(controller):
    outcome = controller.take_turn(Quit())
    assert outcome.kind == OutcomeKind.TERMINATED
    assert controller.is_finished


def test_snapshot_round_trips_through_from_session(controller, bob):
    controller.take_turn(PlaceAt(3))
    session = controller.snapshot()
    restored = TurnController.from_session(session)
    assert restored.current == bob
    assert restored.board is controller.board


def test_players_must_differ(ann):
    with pytest.raises(ValueError):
        TurnController(ann, Player("Cy", Mark.FIRST))


def test_opponent_of(controller, ann, bob):
    assert controller.opponent_of(ann) == bob
    assert controller.opponent_of(bob) == ann
    with pytest.raises(ValueError):
        controller.opponent_of(Player("Cy", Mark.FIRST))

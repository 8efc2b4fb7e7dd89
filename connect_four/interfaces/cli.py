"""
cli.py - Command-line interface for two-player Connect Four

This module provides the main menu (new game, load game, exit), the player
name prompts and the turn loop. All reading and printing goes through
input_fn / output_fn so the loop can be driven from tests.
"""

import argparse
from typing import Callable, List, Optional

from connect_four.data.data_manager import DEFAULT_SAVE_FILE, load_game, save_game
from connect_four.debug import debug, DebugLevel
from connect_four.game.rules import (Intent, OutcomeKind, PlaceAt, Quit, Save, TurnController,
                                     TurnOutcome, Undo)
from connect_four.game.session import Player
from connect_four.utils import COLS, Mark

UNDO_WORDS = {"u", "undo", "-1"}
SAVE_WORDS = {"s", "save", "-2"}
QUIT_WORDS = {"q", "quit", "exit", "-3"}


def parse_intent(raw: str) -> Intent:
    """
    Turn one line of player input into an intent.

    Raises:
        ValueError: if the input is not a command or a column from 1 to COLS
    """
    s = raw.strip().lower()
    if s in UNDO_WORDS:
        return Undo()
    if s in SAVE_WORDS:
        return Save()
    if s in QUIT_WORDS:
        return Quit()
    if not s.isdigit():
        raise ValueError(f"Invalid input. Enter a column (1-{COLS}), u, s or q.")
    column = int(s)
    if not 1 <= column <= COLS:
        raise ValueError(f"Column must be between 1 and {COLS}.")
    return PlaceAt(column)


class SimpleCLI:
    """Console front end: menu, prompts and the turn loop."""

    def __init__(self, save_file: str = DEFAULT_SAVE_FILE,
                 input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print):
        self.save_file = save_file
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and apply logging options."""
        parser = argparse.ArgumentParser(description='Two-player Connect Four')

        subparsers = parser.add_subparsers(dest='command', help='Skip the menu and go straight to')
        subparsers.add_parser('play', help='Start a new game')
        subparsers.add_parser('load', help='Resume the saved game')

        parser.add_argument('--save-file', default=self.save_file,
                            help=f'Save file to use (default: {DEFAULT_SAVE_FILE})')
        parser.add_argument('--debug', action='store_true', help='Shortcut for --debug-level debug')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (default: warning)')
        parser.add_argument('--log-file', default=None, help='Also write log messages to this file')

        self.args = parser.parse_args(argv)
        self.save_file = self.args.save_file

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> None:
        if self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            controller = self.new_game()
        elif self.args.command == 'load':
            controller = self.load_or_new_game()
        else:
            controller = self.main_menu()

        if controller is not None:
            self.play(controller)

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return self.input_fn(prompt)
        except EOFError:
            return None

    def main_menu(self) -> Optional[TurnController]:
        """Show the menu; returns the game to play, or None to exit."""
        self.output_fn("Welcome to Connect Four!")
        self.output_fn("1. Start New Game")
        self.output_fn("2. Load Game")
        self.output_fn("3. Exit")

        while True:
            choice = self._read("Please enter a choice (1, 2, or 3): ")
            if choice is None:
                return None
            choice = choice.strip()
            if choice == "1":
                return self.new_game()
            if choice == "2":
                return self.load_or_new_game()
            if choice == "3":
                self.output_fn("Exiting the game. Goodbye!")
                return None
            self.output_fn("Invalid choice. Please enter 1, 2, or 3.")

    def prompt_player(self, number: int, mark: Mark) -> Player:
        raw = self._read(f"Enter name for Player {number}: ")
        name = (raw or "").strip() or f"Player {number}"
        return Player(name, mark)

    def new_game(self) -> TurnController:
        player_one = self.prompt_player(1, Mark.FIRST)
        player_two = self.prompt_player(2, Mark.SECOND)
        debug.info(f"New game: {player_one.name} vs {player_two.name}", "cli")
        return TurnController(player_one, player_two)

    def load_or_new_game(self) -> TurnController:
        session = load_game(self.save_file)
        if session is None:
            self.output_fn("Failed to load game. Starting a new game instead...")
            return self.new_game()

        self.output_fn("Game loaded successfully.")
        return TurnController.from_session(session)

    def play(self, controller: TurnController) -> None:
        """Run turns until the game is won, drawn or quit."""
        self.output_fn(controller.board.render())

        while not controller.is_finished:
            player = controller.current
            raw = self._read(
                f"Player {player.name} ({player.symbol}), enter column (1-{COLS}), "
                f"u to undo, s to save, q to quit: "
            )
            if raw is None:
                raw = "q"

            try:
                intent = parse_intent(raw)
            except ValueError as e:
                self.output_fn(str(e))
                continue

            outcome = controller.take_turn(intent)
            self.report(controller, outcome)

        self.output_fn("Thank you for playing!")

    def report(self, controller: TurnController, outcome: TurnOutcome) -> None:
        """Print what a turn did."""
        kind = outcome.kind
        board = controller.board

        if kind == OutcomeKind.COLUMN_FULL:
            self.output_fn(f"Column {outcome.column + 1} is full. Try another column.")
        elif kind == OutcomeKind.UNDONE:
            self.output_fn("Last move undone.")
            self.output_fn(board.render())
        elif kind == OutcomeKind.NOTHING_TO_UNDO:
            self.output_fn("No moves to undo.")
        elif kind == OutcomeKind.SAVE_REQUESTED:
            if save_game(controller.snapshot(), self.save_file):
                self.output_fn(f"Game saved to {self.save_file}.")
            else:
                self.output_fn("Failed to save game.")
        elif kind == OutcomeKind.CONTINUE:
            self.output_fn(board.render())
        elif kind == OutcomeKind.WIN:
            self.output_fn(board.render())
            line = board.winning_line(outcome.row, outcome.column)
            cells = ", ".join(f"({r + 1}, {c + 1})" for r, c in line)
            self.output_fn(f"Player {outcome.player.name} wins! Winning line: {cells}")
        elif kind == OutcomeKind.DRAW:
            self.output_fn(board.render())
            self.output_fn("The grid is full! The game is a draw.")
        elif kind == OutcomeKind.TERMINATED:
            self.output_fn("Exiting the game...")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    cli.run(argv)


if __name__ == "__main__":
    main()

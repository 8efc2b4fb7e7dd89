import pytest

from connect_four.data.data_manager import load_game
from connect_four.game.rules import PlaceAt, Quit, Save, Undo
from connect_four.interfaces.cli import SimpleCLI, parse_intent


def scripted(lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    return fake_input


def make_cli(lines, save_file="unused.json"):
    output = []
    cli = SimpleCLI(save_file=save_file, input_fn=scripted(lines), output_fn=output.append)
    return cli, output


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1", PlaceAt(1)),
        (" 7 ", PlaceAt(7)),
        ("u", Undo()),
        ("-1", Undo()),
        ("SAVE", Save()),
        ("-2", Save()),
        ("q", Quit()),
        ("exit", Quit()),
        ("-3", Quit()),
    ],
)
def test_parse_intent(raw, expected):
    assert parse_intent(raw) == expected


@pytest.mark.parametrize("raw", ["", "0", "8", "abc", "2.5", "-4"])
def test_parse_intent_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        parse_intent(raw)


def test_menu_exit():
    cli, output = make_cli(["3"])
    cli.run([])
    assert "Exiting the game. Goodbye!" in output


def test_menu_reprompts_on_invalid_choice():
    cli, output = make_cli(["9", "3"])
    cli.run([])
    assert "Invalid choice. Please enter 1, 2, or 3." in output


def test_scripted_game_ends_with_a_win():
    cli, output = make_cli(["1", "Ann", "Bob", "1", "1", "2", "2", "3", "3", "4"])
    cli.run([])
    assert any(line.startswith("Player Ann wins!") for line in output)
    assert output[-1] == "Thank you for playing!"


def test_bad_input_and_full_column_are_reported():
    moves = ["5"] * 6
    cli, output = make_cli(["Ann", "Bob", "x"] + moves + ["5", "q"])
    cli.run(["play"])
    assert "Invalid input. Enter a column (1-7), u, s or q." in output
    assert "Column 5 is full. Try another column." in output
    assert "Exiting the game..." in output


def test_undo_on_new_game_reports_nothing_to_undo():
    cli, output = make_cli(["", "", "u"])
    cli.run(["play"])
    assert "No moves to undo." in output
    # end of input quits the game
    assert "Exiting the game..." in output


def test_save_and_resume(tmp_path):
    path = str(tmp_path / "game.json")

    cli, output = make_cli(["Ann", "Bob", "4", "s", "q"])
    cli.run(["--save-file", path, "play"])
    assert f"Game saved to {path}." in output

    session = load_game(path)
    assert session.current.name == "Bob"
    assert session.board.move_count == 1

    cli, output = make_cli(["u", "q"])
    cli.run(["--save-file", path, "load"])
    assert "Game loaded successfully." in output
    assert "Last move undone." in output


def test_load_failure_falls_back_to_new_game(tmp_path):
    cli, output = make_cli(["2", "Ann", "Bob", "q"], save_file=str(tmp_path / "none.json"))
    cli.run([])
    assert "Failed to load game. Starting a new game instead..." in output
    assert "Exiting the game..." in output

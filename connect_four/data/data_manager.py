"""
data_manager.py - Saving and loading Connect Four games

A game is written as the JSON form of a GameSession. Reads and writes take a
file lock next to the save file, and writes go through a temporary file so a
crash mid-save never leaves a half-written game behind.
"""

import json
import os
import shutil
from typing import Any, Optional

import filelock

from connect_four.debug import debug
from connect_four.game.session import GameSession

DEFAULT_SAVE_FILE = "saved_game.json"
LOCK_TIMEOUT = 10  # seconds


def _lock_for(file_path: str) -> filelock.FileLock:
    return filelock.FileLock(f"{file_path}.lock", timeout=LOCK_TIMEOUT)


def safe_read_json(file_path: str) -> Optional[Any]:
    """
    Read a JSON file under its lock.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON data, or None if the file is missing or unreadable
    """
    if not os.path.exists(file_path):
        debug.warning(f"No save file at {file_path}", "data")
        return None

    try:
        with _lock_for(file_path):
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        debug.error(f"Error decoding JSON from {file_path}: {e}", "data")
    except (OSError, filelock.Timeout) as e:
        debug.error(f"Error reading {file_path}: {e}", "data")
    return None


def safe_write_json(file_path: str, data: Any) -> bool:
    """
    Write data to a JSON file atomically under its lock.

    Args:
        file_path: Path to JSON file
        data: Data to write

    Returns:
        True if successful, False otherwise
    """
    directory = os.path.dirname(os.path.abspath(file_path))
    temp_file = f"{file_path}.tmp"
    try:
        os.makedirs(directory, exist_ok=True)
        with _lock_for(file_path):
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            shutil.move(temp_file, file_path)
        return True
    except (OSError, TypeError, filelock.Timeout) as e:
        debug.error(f"Error writing to {file_path}: {e}", "data")
        if os.path.exists(temp_file):
            os.remove(temp_file)
        return False


def save_game(session: GameSession, file_path: str = DEFAULT_SAVE_FILE) -> bool:
    """
    Save a game session.

    Args:
        session: The session to save
        file_path: Where to write it

    Returns:
        True if the game was written, False otherwise
    """
    if safe_write_json(file_path, session.to_dict()):
        debug.info(f"Saved game with {session.board.move_count} moves to {file_path}", "data")
        return True

    debug.error(f"Failed to save game to {file_path}", "data")
    return False


def load_game(file_path: str = DEFAULT_SAVE_FILE) -> Optional[GameSession]:
    """
    Load a game session.

    Args:
        file_path: The save file to read

    Returns:
        The restored GameSession, or None if there is nothing valid to load
    """
    data = safe_read_json(file_path)
    if data is None:
        return None

    try:
        session = GameSession.from_dict(data)
    except ValueError as e:
        debug.error(f"Save file {file_path} is not a valid game: {e}", "data")
        return None

    debug.info(f"Loaded game with {session.board.move_count} moves from {file_path}", "data")
    return session

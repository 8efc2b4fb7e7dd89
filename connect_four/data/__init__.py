"""
connect_four.data - Save files for Connect Four

This package reads and writes game sessions as locked JSON files.
"""

from connect_four.data.data_manager import DEFAULT_SAVE_FILE, load_game, save_game

__all__ = ['DEFAULT_SAVE_FILE', 'load_game', 'save_game']

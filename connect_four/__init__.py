"""
connect_four - Two-player Connect Four for the console

This package provides the board engine (gravity, win detection, undo),
turn handling for two players, saving and loading of games, and a
command-line interface.
"""

# Version number
__version__ = '0.1.0'

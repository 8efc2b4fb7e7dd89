#!/usr/bin/env python3
"""
run.py - Main entry point for two-player Connect Four

Examples:
    # Show the main menu (new game / load game / exit)
    python run.py

    # Start a new game straight away
    python run.py play

    # Resume the game saved in a different file, with debug logging
    python run.py --save-file games/evening.json --debug load
"""

from connect_four.interfaces.cli import main

if __name__ == "__main__":
    main()

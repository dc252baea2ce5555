#!/usr/bin/env python3
"""
run.py - Main entry point for two-player Connect Four

    python run.py
    python run.py --player1 red --player2 yellow
    python run.py --height 8 --width 9 --debug-level info
"""

import sys

from connect4.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())

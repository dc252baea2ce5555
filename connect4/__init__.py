"""
connect4 - Two-player Connect Four

This package provides the game-state engine (grid, move legality, win and
tie detection, turn order) together with a terminal front end and a
Gymnasium host for driving games programmatically.
"""

# Version number
__version__ = '0.1.0'

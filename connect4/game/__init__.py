"""
connect4.game - Core game mechanics for Connect Four

This package contains the grid representation, the game-state engine
and a Gymnasium host built on top of it.
"""

from connect4.game.board import Grid
from connect4.game.rules import (GameEngine, GameListener, GameState, MoveResult, Player,
                                 create_game, drop_piece, find_drop_row)

__all__ = ['Grid', 'GameEngine', 'GameListener', 'GameState', 'MoveResult', 'Player',
           'create_game', 'drop_piece', 'find_drop_row']

import pytest

from connect4.game.rules import GameEngine, Player, create_game, drop_piece


@pytest.fixture
def red() -> Player:
    return Player.from_color("red")


@pytest.fixture
def yellow() -> Player:
    return Player.from_color("yellow")


@pytest.fixture
def state(red, yellow):
    return create_game(6, 7, red, yellow)


@pytest.fixture
def engine(red, yellow) -> GameEngine:
    return GameEngine(red, yellow)


def play(state, columns):
    """Drop pieces into ``columns`` in order and return the last result."""
    result = None
    for column in columns:
        result = drop_piece(state, column)
    return result

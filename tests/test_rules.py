"""Tests for the game-state engine."""

import io
import sys

import pytest

from connect4.debug import DebugLevel, debug
from connect4.game.rules import (GameEngine, GameListener, GameState, Player, create_game,
                                 drop_piece, find_drop_row)
from connect4.utils import GameStatus, MoveOutcome, RejectReason

from conftest import play

# Fills a 4x4 grid without ever forming a line; the last drop ties the game
TIE_4X4 = [0, 1, 0, 1, 2, 3, 2, 3, 1, 0, 1, 0, 3, 2, 3, 2]


def snapshot(state: GameState):
    return state.grid.to_array(), state.active, state.status, list(state.moves_made)


def assert_unchanged(state: GameState, before):
    grid, active, status, moves = before
    assert (state.grid.to_array() == grid).all()
    assert state.active == active
    assert state.status == status
    assert state.moves_made == moves


class TestCreateGame:
    def test_fresh_state(self, red, yellow):
        state = create_game(6, 7, red, yellow)
        assert (state.height, state.width) == (6, 7)
        assert state.active == red
        assert state.status == GameStatus.ONGOING
        assert not state.is_terminal
        assert state.winner is None
        assert state.last_move is None
        assert state.valid_columns() == list(range(7))
        assert all(state.player_at(r, c) is None for r in range(6) for c in range(7))

    def test_duplicate_player_ids_rejected(self):
        with pytest.raises(ValueError, match="distinct"):
            create_game(6, 7, Player("p", "red"), Player("p", "blue"))

    def test_same_color_different_ids_allowed(self):
        state = create_game(6, 7, Player("one", "red"), Player("two", "red"))
        assert state.active.id == "one"

    def test_small_grid_is_accepted(self, red, yellow):
        state = create_game(3, 3, red, yellow)
        result = play(state, [0, 1, 0, 1, 0])
        # Only three rows, a vertical line is impossible
        assert result.outcome == MoveOutcome.MOVED
        assert state.status == GameStatus.ONGOING

    def test_zero_size_grid_rejected(self, red, yellow):
        with pytest.raises(ValueError):
            create_game(0, 7, red, yellow)


class TestDrops:
    def test_pieces_stack_upward(self, state, red, yellow):
        assert find_drop_row(state, 2) == 5
        first = drop_piece(state, 2)
        assert (first.outcome, first.row, first.column, first.player) == (MoveOutcome.MOVED, 5, 2, red)
        assert state.player_at(5, 2) == red

        second = drop_piece(state, 2)
        assert second.row == 4
        assert state.player_at(4, 2) == yellow
        assert find_drop_row(state, 2) == 3
        assert state.last_move == (4, 2)
        assert state.moves_made == [2, 2]

    def test_find_drop_row_is_pure(self, state):
        before = snapshot(state)
        find_drop_row(state, 0)
        assert_unchanged(state, before)

    def test_turns_alternate(self, state, red, yellow):
        movers = [drop_piece(state, col).player for col in (0, 1, 2, 3, 4, 5, 6)]
        assert movers == [red, yellow, red, yellow, red, yellow, red]
        assert state.active == yellow

    @pytest.mark.parametrize("column", [-1, 7, 100])
    def test_out_of_range_column_ignored(self, state, column):
        drop_piece(state, 3)
        before = snapshot(state)
        result = drop_piece(state, column)
        assert result.outcome == MoveOutcome.IGNORED
        assert result.reason == RejectReason.INVALID_COLUMN
        assert not result.accepted
        assert_unchanged(state, before)

    def test_full_column_ignored(self, state, red):
        result = play(state, [0] * 6)
        assert result.outcome == MoveOutcome.MOVED
        assert state.status == GameStatus.ONGOING

        before = snapshot(state)
        result = drop_piece(state, 0)
        assert result.outcome == MoveOutcome.IGNORED
        assert result.reason == RejectReason.COLUMN_FULL
        assert_unchanged(state, before)
        assert state.active == red
        assert find_drop_row(state, 0) is None
        assert 0 not in state.valid_columns()

    def test_ignored_move_keeps_turn(self, state, yellow):
        play(state, [0] * 6 + [1])  # column 0 now full
        drop_piece(state, 0)
        drop_piece(state, -5)
        assert state.active == yellow
        assert drop_piece(state, 2).player == yellow


class TestWins:
    def test_bottom_row_horizontal(self, state, red):
        result = play(state, [0, 0, 1, 1, 2, 2, 3])
        assert result.outcome == MoveOutcome.WON
        assert result.player == red
        assert state.status == GameStatus.WON
        assert state.winner == red
        assert state.winning_line == [(5, 0), (5, 1), (5, 2), (5, 3)]
        assert result.winning_line == state.winning_line

    def test_second_player_can_win(self, state, yellow):
        result = play(state, [0, 1, 0, 2, 0, 3, 6, 4])
        assert result.outcome == MoveOutcome.WON
        assert state.winner == yellow

    def test_vertical(self, state, red):
        result = play(state, [0, 1, 0, 1, 0, 1, 0])
        assert result.outcome == MoveOutcome.WON
        assert state.winner == red
        assert sorted(state.winning_line) == [(2, 0), (3, 0), (4, 0), (5, 0)]

    def test_diagonal_down_right(self, state, red):
        moves = [3, 2, 2, 1, 0, 1, 1, 0, 6, 0, 0]
        assert play(state, moves[:-1]).outcome == MoveOutcome.MOVED
        result = drop_piece(state, moves[-1])
        assert result.outcome == MoveOutcome.WON
        assert state.winner == red
        assert state.winning_line == [(2, 0), (3, 1), (4, 2), (5, 3)]

    def test_diagonal_down_left(self, state, red):
        moves = [3, 4, 4, 5, 6, 5, 5, 6, 0, 6, 6]
        assert play(state, moves[:-1]).outcome == MoveOutcome.MOVED
        result = drop_piece(state, moves[-1])
        assert result.outcome == MoveOutcome.WON
        assert state.winner == red
        assert state.winning_line == [(2, 6), (3, 5), (4, 4), (5, 3)]

    def test_line_through_last_move_matches_full_scan(self, state):
        play(state, [3, 2, 2, 1, 0, 1, 1, 0, 6, 0, 0])
        assert state.grid.find_line(state.slot_of(state.winner)) == state.winning_line

    def test_no_moves_after_win(self, state, red):
        play(state, [0, 0, 1, 1, 2, 2, 3])
        before = snapshot(state)
        for column in (4, 0, 3, 99):
            result = drop_piece(state, column)
            assert result.outcome == MoveOutcome.IGNORED
            assert result.reason == RejectReason.GAME_OVER
        assert_unchanged(state, before)
        assert state.active == red
        assert state.valid_columns() == []


class TestTie:
    def test_full_board_without_line_ties(self, red, yellow):
        state = create_game(4, 4, red, yellow)
        assert play(state, TIE_4X4[:-1]).outcome == MoveOutcome.MOVED
        result = drop_piece(state, TIE_4X4[-1])
        assert result.outcome == MoveOutcome.TIED
        assert result.player == yellow
        assert state.status == GameStatus.TIED
        assert state.winner is None
        assert state.grid.is_full()

    def test_tie_is_terminal(self, red, yellow):
        state = create_game(4, 4, red, yellow)
        play(state, TIE_4X4)
        result = drop_piece(state, 0)
        assert result.reason == RejectReason.GAME_OVER
        assert state.status == GameStatus.TIED


class RecordingListener(GameListener):
    def __init__(self):
        self.events = []

    def piece_placed(self, player, row, column):
        self.events.append(("placed", player.id, row, column))

    def game_won(self, player, line):
        self.events.append(("won", player.id, len(line)))

    def game_tied(self):
        self.events.append(("tied",))

    def move_ignored(self, column, reason):
        self.events.append(("ignored", column, reason))


class TestGameEngine:
    def test_notifications_for_moves_and_win(self, engine):
        listener = RecordingListener()
        engine.add_listener(listener)
        for column in [0, 0, 1, 1, 2, 2, 3]:
            engine.drop(column)

        assert listener.events[:2] == [("placed", "red", 5, 0), ("placed", "yellow", 4, 0)]
        assert listener.events[-2:] == [("placed", "red", 5, 3), ("won", "red", 4)]
        assert engine.is_over

        engine.drop(4)
        assert listener.events[-1] == ("ignored", 4, RejectReason.GAME_OVER)

    def test_notifications_for_tie(self, red, yellow):
        engine = GameEngine(red, yellow, height=4, width=4)
        listener = RecordingListener()
        engine.add_listener(listener)
        for column in TIE_4X4:
            engine.drop(column)
        assert listener.events[-2:] == [("placed", "yellow", 0, 2), ("tied",)]

    def test_ignored_notification(self, engine):
        listener = RecordingListener()
        engine.add_listener(listener)
        engine.drop(7)
        assert listener.events == [("ignored", 7, RejectReason.INVALID_COLUMN)]

    def test_removed_listener_is_silent(self, engine):
        listener = RecordingListener()
        engine.add_listener(listener)
        engine.remove_listener(listener)
        engine.drop(0)
        assert listener.events == []

    def test_new_game_resets_state(self, engine, red):
        for column in [0, 0, 1, 1, 2, 2, 3]:
            engine.drop(column)
        old_state = engine.state

        state = engine.new_game()
        assert state is engine.state
        assert state is not old_state
        assert state.status == GameStatus.ONGOING
        assert state.active == red
        assert engine.find_drop_row(0) == 5
        assert old_state.status == GameStatus.WON

    def test_engines_are_independent(self, red, yellow):
        first = GameEngine(red, yellow)
        second = GameEngine(red, yellow)
        first.drop(0)
        assert second.state.player_at(5, 0) is None
        assert second.state.active == red


@pytest.fixture
def engine_log():
    buffer = io.StringIO()
    previous = debug.level
    debug.configure(level=DebugLevel.INFO, stream=buffer)
    yield buffer
    debug.configure(level=previous, stream=sys.stdout)


def test_game_results_stay_out_of_info_log(engine_log, red, yellow):
    play(create_game(6, 7, red, yellow), [0, 0, 1, 1, 2, 2, 3])
    play(create_game(4, 4, red, yellow), TIE_4X4)
    assert engine_log.getvalue() == ""

"""
rules.py - Game state and turn management for Connect Four

This module provides:
1. Player, GameState and MoveResult value types
2. The engine operations: create_game, find_drop_row and drop_piece
3. GameEngine, which owns one GameState and notifies listeners of every move

The engine never performs I/O. Presentation layers subscribe a GameListener
and react to the notifications, or inspect the returned MoveResult.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from connect4.debug import debug
from connect4.game.board import Grid
from connect4.utils import (DEFAULT_HEIGHT, DEFAULT_WIDTH, MIN_DIMENSION, PLAYER_ONE,
                            PLAYER_TWO, GameStatus, MoveOutcome, Position, RejectReason)


@dataclass(frozen=True)
class Player:
    """A participant: an identifier plus the color the front end draws with."""
    id: str
    color: str

    @classmethod
    def from_color(cls, color: str) -> 'Player':
        """Create a player identified by its color."""
        return cls(id=color, color=color)

    def __str__(self) -> str:
        return self.color


@dataclass
class GameState:
    """
    Everything known about one game.

    Only drop_piece mutates a GameState. Once ``status`` is terminal
    nothing changes anymore.
    """
    grid: Grid
    player1: Player
    player2: Player
    active: Player
    status: GameStatus = GameStatus.ONGOING
    winner: Optional[Player] = None
    winning_line: List[Position] = field(default_factory=list)
    last_move: Optional[Position] = None
    moves_made: List[int] = field(default_factory=list)

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal()

    def slot_of(self, player: Player) -> int:
        if player == self.player1:
            return PLAYER_ONE
        if player == self.player2:
            return PLAYER_TWO
        raise ValueError(f"{player!r} does not play in this game")

    def player_for_slot(self, slot: int) -> Optional[Player]:
        if slot == PLAYER_ONE:
            return self.player1
        if slot == PLAYER_TWO:
            return self.player2
        return None

    def other(self, player: Player) -> Player:
        return self.player2 if player == self.player1 else self.player1

    def player_at(self, row: int, column: int) -> Optional[Player]:
        """Owner of a cell, or None when it is empty."""
        return self.player_for_slot(self.grid[row, column])

    def valid_columns(self) -> List[int]:
        """Columns that would accept a piece right now."""
        if self.is_terminal:
            return []
        return self.grid.open_columns()

    def render(self) -> str:
        return self.grid.render()


@dataclass(frozen=True)
class MoveResult:
    """What happened when a piece was dropped."""
    outcome: MoveOutcome
    player: Player
    column: int
    row: Optional[int] = None
    reason: Optional[RejectReason] = None
    winning_line: List[Position] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.outcome != MoveOutcome.IGNORED


def create_game(height: int, width: int, player1: Player, player2: Player) -> GameState:
    """
    Start a new game with an empty grid and ``player1`` to move.

    Args:
        height: Number of rows
        width: Number of columns
        player1: First player
        player2: Second player, must have a different id

    Returns:
        A fresh, ongoing GameState

    Raises:
        ValueError: If the players share an id or a dimension is below one
    """
    if player1.id == player2.id:
        raise ValueError(f"Players must have distinct ids, both are {player1.id!r}")

    if height < MIN_DIMENSION or width < MIN_DIMENSION:
        debug.warning(f"{height}x{width} grid is smaller than {MIN_DIMENSION} on one axis; "
                      f"no line can be made along it", "game")

    grid = Grid(height, width)
    debug.debug(f"New {height}x{width} game: {player1} vs {player2}", "game")
    return GameState(grid=grid, player1=player1, player2=player2, active=player1)


def find_drop_row(state: GameState, column: int) -> Optional[int]:
    """Lowest empty row of ``column``, or None if it is full or out of range."""
    return state.grid.find_drop_row(column)


def _ignore(state: GameState, column: int, reason: RejectReason) -> MoveResult:
    debug.debug(f"Ignoring drop in column {column}: {reason.name}", "game")
    return MoveResult(MoveOutcome.IGNORED, state.active, column, reason=reason)


def drop_piece(state: GameState, column: int) -> MoveResult:
    """
    Drop the active player's piece into ``column``.

    Rejected moves (finished game, column out of range, full column) leave
    the state untouched and come back as an IGNORED result. An accepted move
    occupies the drop cell, then checks for a win, then for a tie, and only
    if neither happened passes the turn to the other player.

    Returns:
        MoveResult describing the outcome
    """
    if state.is_terminal:
        return _ignore(state, column, RejectReason.GAME_OVER)

    if not state.grid.is_column_in_range(column):
        return _ignore(state, column, RejectReason.INVALID_COLUMN)

    row = find_drop_row(state, column)
    if row is None:
        return _ignore(state, column, RejectReason.COLUMN_FULL)

    mover = state.active
    debug.trace(f"Placing {mover} at ({row}, {column})", "game")
    state.grid.place(row, column, state.slot_of(mover))
    state.last_move = (row, column)
    state.moves_made.append(column)

    debug.start_timer("win_check")
    line = state.grid.line_through(row, column)
    debug.end_timer("win_check", "game")

    if line:
        state.status = GameStatus.WON
        state.winner = mover
        state.winning_line = line
        debug.debug(f"Player {mover} won with the move at ({row}, {column})", "game")
        return MoveResult(MoveOutcome.WON, mover, column, row=row, winning_line=list(line))

    if state.grid.is_full():
        state.status = GameStatus.TIED
        debug.debug("Grid is full, game tied", "game")
        return MoveResult(MoveOutcome.TIED, mover, column, row=row)

    state.active = state.other(mover)
    debug.debug(f"Turn passes to {state.active}", "game")
    return MoveResult(MoveOutcome.MOVED, mover, column, row=row)


class GameListener:
    """
    Receives engine notifications. Subclasses override what they need.

    Notifications are delivered synchronously, inside the engine's drop call.
    """

    def piece_placed(self, player: Player, row: int, column: int) -> None:
        pass

    def game_won(self, player: Player, line: List[Position]) -> None:
        pass

    def game_tied(self) -> None:
        pass

    def move_ignored(self, column: int, reason: RejectReason) -> None:
        pass


class GameEngine:
    """
    Owns a single GameState and turns each activated column into one drop.

    The host application creates the engine, subscribes its listeners, and
    forwards every "column activated" event to drop().
    """

    def __init__(self, player1: Player, player2: Player,
                 height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH):
        self._listeners: List[GameListener] = []
        self._height = height
        self._width = width
        self.state = create_game(height, width, player1, player2)

    def add_listener(self, listener: GameListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: GameListener) -> None:
        self._listeners.remove(listener)

    def new_game(self) -> GameState:
        """Replace the current game with a fresh one between the same players."""
        self.state = create_game(self._height, self._width,
                                 self.state.player1, self.state.player2)
        return self.state

    @property
    def is_over(self) -> bool:
        return self.state.is_terminal

    def find_drop_row(self, column: int) -> Optional[int]:
        return find_drop_row(self.state, column)

    def drop(self, column: int) -> MoveResult:
        """Play ``column`` for the active player and notify listeners."""
        result = drop_piece(self.state, column)
        self._notify(result)
        return result

    def _notify(self, result: MoveResult) -> None:
        for listener in list(self._listeners):
            if result.outcome == MoveOutcome.IGNORED:
                listener.move_ignored(result.column, result.reason)
                continue

            listener.piece_placed(result.player, result.row, result.column)
            if result.outcome == MoveOutcome.WON:
                listener.game_won(result.player, result.winning_line)
            elif result.outcome == MoveOutcome.TIED:
                listener.game_tied()

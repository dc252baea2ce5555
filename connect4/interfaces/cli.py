"""
cli.py - Terminal front end for two-player Connect Four

SimpleCLI asks both players for a color, then forwards every column typed
at the prompt to the engine. Everything drawn on screen comes from the
TerminalPresenter, which listens to engine notifications.
"""

import argparse
import sys
from typing import Callable, Dict, List, Optional, TextIO

from connect4.debug import DebugLevel, debug
from connect4.game.rules import GameEngine, GameListener, Player
from connect4.interfaces.colors import is_color_valid, normalize_color
from connect4.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, PLAYER_ONE, PLAYER_TWO, Position, RejectReason

QUIT_COMMANDS = ('q', 'quit', 'exit')
RESTART_COMMANDS = ('r', 'restart')
NEW_COLORS_COMMANDS = ('c', 'colors')

IGNORED_MESSAGES = {
    RejectReason.INVALID_COLUMN: "There is no column {column}.",
    RejectReason.COLUMN_FULL: "Column {column} is full.",
    RejectReason.GAME_OVER: "The game is over.",
}


class TerminalPresenter(GameListener):
    """Draws the board and announces results on a text stream."""

    def __init__(self, engine: GameEngine, out: TextIO):
        self.engine = engine
        self.out = out

    def _write(self, text: str) -> None:
        print(text, file=self.out)

    def symbols(self) -> Dict[int, str]:
        """First letter of each color, or X / O when the initials are missing or shared."""
        state = self.engine.state
        first1, first2 = state.player1.color[:1], state.player2.color[:1]
        if not (first1.isalpha() and first2.isalpha()) or first1.lower() == first2.lower():
            return {PLAYER_ONE: "X", PLAYER_TWO: "O"}
        return {PLAYER_ONE: first1.upper(), PLAYER_TWO: first2.lower()}

    def show_board(self) -> None:
        self._write(self.engine.state.grid.render(self.symbols()))

    def piece_placed(self, player: Player, row: int, column: int) -> None:
        self.show_board()

    def game_won(self, player: Player, line: List[Position]) -> None:
        self._write(f"Player {player.color} won!")

    def game_tied(self) -> None:
        self._write("Tie!")

    def move_ignored(self, column: int, reason: RejectReason) -> None:
        self._write(IGNORED_MESSAGES[reason].format(column=column))


class SimpleCLI:
    """Interactive two-player game on stdin/stdout."""

    def __init__(self, height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH,
                 input_func: Callable[[str], str] = input, out: TextIO = None):
        self.height = height
        self.width = width
        self.input = input_func
        self.out = out or sys.stdout
        self.engine: Optional[GameEngine] = None
        self.presenter: Optional[TerminalPresenter] = None

    def _write(self, text: str) -> None:
        print(text, file=self.out)

    def ask_colors(self, color1: str = None, color2: str = None) -> Optional[List[Player]]:
        """
        Prompt until two valid, distinct colors are given.

        Colors passed in are tried first. Returns None if input runs out.
        """
        while True:
            try:
                if color1 is None:
                    color1 = self.input("Player 1 color: ")
                if color2 is None:
                    color2 = self.input("Player 2 color: ")
            except EOFError:
                return None

            if is_color_valid(color1, color2):
                return [Player.from_color(normalize_color(color1)),
                        Player.from_color(normalize_color(color2))]

            debug.debug(f"Rejected colors {color1!r} / {color2!r}", "cli")
            self._write("Please provide valid unique color name for both players")
            color1 = color2 = None

    def start_game(self, player1: Player, player2: Player) -> GameEngine:
        self.engine = GameEngine(player1, player2, self.height, self.width)
        self.presenter = TerminalPresenter(self.engine, self.out)
        self.engine.add_listener(self.presenter)

        self._write(f"{player1.color} vs {player2.color}. "
                    f"Enter a column number (0-{self.width - 1}), 'r' to restart, "
                    f"'c' to pick new colors, 'q' to quit.")
        self.presenter.show_board()
        return self.engine

    def play(self, color1: str = None, color2: str = None) -> Optional[GameEngine]:
        """
        Run one interactive session.

        Returns:
            The engine of the last game played, or None if no game was started
        """
        players = self.ask_colors(color1, color2)
        if players is None:
            return None

        engine = self.start_game(*players)
        while True:
            if engine.is_over:
                prompt = "'r' to play again, 'c' to pick new colors, 'q' to quit: "
            else:
                prompt = f"{engine.state.active.color} to move: "

            try:
                line = self.input(prompt).strip().lower()
            except EOFError:
                break

            if line in QUIT_COMMANDS:
                self._write("Quitting game.")
                break

            if line in RESTART_COMMANDS:
                engine.new_game()
                self._write("Game restarted.")
                self.presenter.show_board()
                continue

            if line in NEW_COLORS_COMMANDS:
                players = self.ask_colors()
                if players is None:
                    break
                engine = self.start_game(*players)
                continue

            if engine.is_over:
                self._write("The game is over. Enter 'r', 'c' or 'q'.")
                continue

            try:
                column = int(line)
            except ValueError:
                self._write("Invalid input. Please enter a column number, 'r', 'c' or 'q'.")
                continue

            engine.drop(column)

        return engine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Two-player Connect Four in the terminal')
    parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT,
                        help=f'Number of rows (default: {DEFAULT_HEIGHT})')
    parser.add_argument('--width', type=int, default=DEFAULT_WIDTH,
                        help=f'Number of columns (default: {DEFAULT_WIDTH})')
    parser.add_argument('--player1', type=str, help='Color of player 1 (prompted if omitted)')
    parser.add_argument('--player2', type=str, help='Color of player 2 (prompted if omitted)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug mode (equivalent to --debug-level debug)')
    parser.add_argument('--debug-level',
                        choices=[level.name.lower() for level in DebugLevel],
                        default='warning',
                        help='Logging verbosity (default: warning)')
    parser.add_argument('--log-file', type=str, help='Also write log records to this file')
    return parser


def configure_debug(args: argparse.Namespace) -> None:
    """Apply the logging options from parsed arguments."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)

    if args.log_file:
        debug.configure(log_file=args.log_file)


def main(argv: Optional[List[str]] = None, input_func: Callable[[str], str] = input,
         out: TextIO = None) -> int:
    """Command-line entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_debug(args)

    if args.height < 1 or args.width < 1:
        print(f"Invalid board size {args.height}x{args.width}", file=out or sys.stderr)
        return 2

    cli = SimpleCLI(args.height, args.width, input_func=input_func, out=out)
    cli.play(args.player1, args.player2)
    return 0

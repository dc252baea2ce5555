"""
env.py - Gymnasium host for the Connect Four engine

ConnectFourEnv exposes a GameEngine through the Gymnasium interface: an
action is the activated column and the observation is the slot grid. Both
players are driven through the same step() call, alternating as the engine
dictates.
"""

from typing import Dict, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4.debug import debug
from connect4.game.rules import GameEngine, Player
from connect4.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, PLAYER_ONE, PLAYER_TWO, MoveOutcome

# RGB per slot for rgb_array rendering
SLOT_COLORS = {
    PLAYER_ONE: (255, 0, 0),
    PLAYER_TWO: (255, 255, 0),
}
CELL_PIXELS = 50


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Rewards are given from player one's point of view.
    """

    metadata = {'render_modes': ['ascii', 'human', 'rgb_array'], 'render_fps': 4}

    reward_win = 1.0
    reward_lose = -1.0
    reward_draw = 0.1
    reward_invalid_move = -0.5
    reward_step = -0.01

    def __init__(self, height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH,
                 player1: Optional[Player] = None, player2: Optional[Player] = None,
                 render_mode: Optional[str] = None):
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(low=0, high=2, shape=(height, width), dtype=np.int8)

        self.engine = GameEngine(player1 or Player.from_color("red"),
                                 player2 or Player.from_color("yellow"),
                                 height, width)
        self.render_mode = render_mode

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """Start a new game and return the empty observation."""
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.engine.new_game()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a piece for the active player in column ``action``.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        result = self.engine.drop(int(action))

        if result.outcome == MoveOutcome.IGNORED:
            debug.warning(f"Invalid action {action}: {result.reason.name}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            info['reason'] = result.reason.name
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = False
        if result.outcome == MoveOutcome.WON:
            won_by_one = self.engine.state.slot_of(result.player) == PLAYER_ONE
            reward = self.reward_win if won_by_one else self.reward_lose
            terminated = True
        elif result.outcome == MoveOutcome.TIED:
            reward = self.reward_draw
            terminated = True

        if terminated:
            debug.debug(f"Episode finished: {result.outcome.name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.engine.state.render()

        if self.render_mode == "human":
            print(self.engine.state.render())
            return None

        return self._render_rgb()

    def _render_rgb(self) -> np.ndarray:
        grid = self.engine.state.grid.to_array()
        rows, cols = grid.shape
        frame = np.zeros((rows * CELL_PIXELS, cols * CELL_PIXELS, 3), dtype=np.uint8)
        frame[:, :] = (0, 0, 128)

        # Disc mask shared by every cell
        radius = CELL_PIXELS * 2 // 5
        ys, xs = np.ogrid[:CELL_PIXELS, :CELL_PIXELS]
        center = CELL_PIXELS // 2
        disc = (ys - center) ** 2 + (xs - center) ** 2 <= radius ** 2

        for row in range(rows):
            for col in range(cols):
                cell = frame[row * CELL_PIXELS:(row + 1) * CELL_PIXELS,
                             col * CELL_PIXELS:(col + 1) * CELL_PIXELS]
                cell[disc] = SLOT_COLORS.get(int(grid[row, col]), (0, 0, 0))

        return frame

    def _get_observation(self) -> np.ndarray:
        return self.engine.state.grid.to_array()

    def _get_info(self) -> Dict:
        state = self.engine.state
        valid_moves = state.valid_columns()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': state.slot_of(state.active),
            'game_result': state.status.name,
            'moves_made': len(state.moves_made),
            'winning_line': list(state.winning_line),
            'last_move': state.last_move,
        }

    def close(self):
        pass

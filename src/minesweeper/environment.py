"""
Gymnasium adapter over the Minesweeper board.

Agents reveal cells by flat index and read the board observation.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .display import render_text


# ============================================================================
# Rewards
# ============================================================================

INVALID_REWARD = -0.1
SAFE_REWARD = 1.0
WIN_REWARD = 10.0
LOSS_REWARD = -10.0


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Plays one square board through the gymnasium API.

    The environment never flags; each action is a reveal. Observations
    are ``Board.get_observation()`` unchanged, so covered bombs read as
    -1 and only the revealed bomb of a lost game reads as 9.

    Actions map to cells with the board's own flattening:
    ``i -> (i % dimension, i // dimension)``.

    A reveal the board refuses (visible or flagged target, or a finished
    game) costs INVALID_REWARD. Otherwise the step earns WIN_REWARD or
    LOSS_REWARD when it ends the game, and SAFE_REWARD when it does not,
    however many cells the cascade uncovered.
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Build the board and the matching spaces.

        Args:
            config: Board configuration (default: 8x8 with 10 bombs).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self.render_mode = render_mode

        dimension = self.config.dimension
        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(dimension, dimension),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.size)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Shuffle a new bomb layout and cover every cell.

        A seed reseeds the board's own ``random.Random``, so the same
        seed always deals the same layout. Without one, the generator
        carries on from its current state.

        Args:
            seed: Seed for the board's generator.
            options: Ignored.

        Returns:
            The all-covered observation and the info dict.
        """
        super().reset(seed=seed)
        if seed is not None:
            self.board.rng.seed(seed)
        self.board.reset()
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal the cell behind an action index.

        The episode terminates once the board reports WON or LOST. It is
        never truncated.

        Args:
            action: Flat cell index, ``x + y * dimension``.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(x, y)
        observation = self.board.get_observation()
        terminated = not self.board.is_playing

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        dimension = self.config.dimension
        return int(action) % dimension, int(action) // dimension

    def _calculate_reward(self, x: int, y: int) -> float:
        """Reveal a cell and score the outcome."""
        if not self.board.reveal(x, y):
            return INVALID_REWARD
        if self.board.is_won:
            return WIN_REWARD
        if self.board.is_lost:
            return LOSS_REWARD
        return SAFE_REWARD

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.visible_count,
            "total_safe": self.config.safe_cells,
            "game_state": self.board.game_state.name,
            "valid_actions": len(self.board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_text(self.board)
        if self.render_mode == "human":
            print(render_text(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = covered cell.
        """
        return (self.board.get_observation() == -1).reshape(-1)

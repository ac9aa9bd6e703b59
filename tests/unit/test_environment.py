"""
Unit tests for the gymnasium environment wrapper.
"""
import numpy as np
import pytest
from minesweeper import Board, BoardConfig, MinesweeperEnv
from minesweeper.environment import (
    INVALID_REWARD,
    LOSS_REWARD,
    SAFE_REWARD,
    WIN_REWARD,
)


@pytest.fixture
def env() -> MinesweeperEnv:
    """Environment on a small board."""
    return MinesweeperEnv(config=BoardConfig(5, 4), render_mode="ansi")


@pytest.fixture
def walled_env(walled_board: Board) -> MinesweeperEnv:
    """Environment playing the fixed walled layout."""
    environment = MinesweeperEnv(config=walled_board.config, render_mode="ansi")
    environment.board = walled_board
    return environment


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_spaces_match_board(self, env: MinesweeperEnv) -> None:
        assert env.observation_space.shape == (5, 5)
        assert env.action_space.n == 25

    def test_reset_returns_covered_observation(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=3)
        assert env.observation_space.contains(obs)
        assert np.all(obs == -1)
        assert info["steps"] == 0
        assert info["total_safe"] == 21
        assert info["game_state"] == "PLAYING"

    def test_seeded_reset_is_reproducible(self, env: MinesweeperEnv) -> None:
        env.reset(seed=11)
        first = env.board.get_valid_actions(), [
            (x, y) for x, y, cell in env.board.cells() if cell.is_bomb
        ]
        env.reset(seed=11)
        second = env.board.get_valid_actions(), [
            (x, y) for x, y, cell in env.board.cells() if cell.is_bomb
        ]
        assert first == second

    def test_seed_reseeds_board_generator(self) -> None:
        """Two environments reset with one seed deal the same bombs."""
        layouts = []
        for _ in range(2):
            environment = MinesweeperEnv(config=BoardConfig(6, 8))
            environment.reset(seed=5)
            layouts.append(
                [(x, y) for x, y, cell in environment.board.cells() if cell.is_bomb]
            )
        assert layouts[0] == layouts[1]
        assert len(layouts[0]) == 8


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test rewards and termination."""

    def test_action_maps_to_board_index(self, walled_env: MinesweeperEnv) -> None:
        """Action i reveals (i % dimension, i // dimension)."""
        obs, reward, terminated, truncated, info = walled_env.step(1 + 1 * 5)
        assert obs[1, 1] == 3
        assert reward == SAFE_REWARD
        assert terminated is False
        assert truncated is False
        assert info["revealed"] == 1

    def test_repeat_action_is_invalid(self, walled_env: MinesweeperEnv) -> None:
        walled_env.step(6)
        _, reward, _, _, _ = walled_env.step(6)
        assert reward == INVALID_REWARD

    def test_bomb_terminates_with_loss(self, walled_env: MinesweeperEnv) -> None:
        _, reward, terminated, _, info = walled_env.step(2)
        assert reward == LOSS_REWARD
        assert terminated is True
        assert info["game_state"] == "LOST"

    def test_clearing_board_wins(self, walled_env: MinesweeperEnv) -> None:
        walled_env.step(0)
        _, reward, terminated, _, info = walled_env.step(24)
        assert reward == WIN_REWARD
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_action_mask_tracks_covered_cells(
        self, walled_env: MinesweeperEnv
    ) -> None:
        walled_env.step(6)
        mask = walled_env.get_action_mask()
        assert mask.shape == (25,)
        assert not mask[6]
        assert mask.sum() == 24


# ============================================================================
# Render Tests
# ============================================================================

class TestRender:
    """Test rendering modes."""

    def test_ansi_render(self, walled_env: MinesweeperEnv) -> None:
        walled_env.step(6)
        assert walled_env.render().split("\n")[1] == ". 3 . . ."

    def test_human_render_prints(
        self, walled_board: Board, capsys: pytest.CaptureFixture
    ) -> None:
        environment = MinesweeperEnv(
            config=walled_board.config, render_mode="human"
        )
        assert environment.render() is None
        assert capsys.readouterr().out.count("\n") == 5

"""
Unit tests for the Gymnasium environment.

Tests spaces, reveal/flag actions, rewards, masks and rendering.
"""
import pytest
import numpy as np
from minefield import Board, BoardConfig, MinesweeperEnv, render_observation


@pytest.fixture
def env() -> MinesweeperEnv:
    """4x4 environment reset onto a board with one corner mine."""
    environment = MinesweeperEnv(config=BoardConfig(4, 1), render_mode="ansi")
    environment.reset(seed=0)
    environment.board = Board.from_layout(4, [(0, 0)])
    return environment


def flag_action(row: int, col: int, size: int = 4) -> int:
    """Action index that toggles a flag."""
    return size * size + row * size + col


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_covers_reveal_and_flag(self) -> None:
        """Two actions per cell."""
        environment = MinesweeperEnv(config=BoardConfig(9, 10))
        assert environment.action_space.n == 162

    def test_reset_observation_all_hidden(self) -> None:
        """A fresh episode starts fully hidden."""
        environment = MinesweeperEnv()
        obs, info = environment.reset(seed=3)
        assert obs.shape == (9, 9)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert environment.observation_space.contains(obs)
        assert info["game_state"] == "IN_PROGRESS"
        assert info["flags_remaining"] == 10

    def test_reset_with_seed_is_reproducible(self) -> None:
        """The same reset seed builds the same board."""
        first = MinesweeperEnv()
        second = MinesweeperEnv()
        first.reset(seed=21)
        second.reset(seed=21)
        assert first.board._mines == second.board._mines

    def test_config_seed_fixes_layout(self) -> None:
        """Envs sharing a config seed build the same board on reset."""
        config = BoardConfig(6, 5, seed=3)
        first = MinesweeperEnv(config=config)
        second = MinesweeperEnv(config=config)
        initial = first.board._mines
        first.reset()
        second.reset()
        assert first.board._mines == second.board._mines == initial
        first.reset()
        assert first.board._mines == initial

    def test_explicit_seed_overrides_config_seed(self) -> None:
        """A reset seed takes precedence over the configured one."""
        first = MinesweeperEnv(config=BoardConfig(6, 5, seed=3))
        second = MinesweeperEnv(config=BoardConfig(6, 5))
        first.reset(seed=8)
        second.reset(seed=8)
        assert first.board._mines == second.board._mines

    def test_reset_replaces_board(self, env: MinesweeperEnv) -> None:
        """Reset discards the previous board."""
        old_board = env.board
        env.reset()
        assert env.board is not old_board
        assert env.board.is_playing is True


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test rewards and termination."""

    def test_safe_reveal_rewards_one(self, env: MinesweeperEnv) -> None:
        """Opening safe cells earns +1."""
        obs, reward, terminated, truncated, info = env.step(15)
        assert reward == 1.0
        assert terminated is False
        assert truncated is False
        assert len(info["changed"]) == 15
        assert (0, 0) not in info["changed"]
        assert info["revealed"] == 15
        assert obs[0, 0] == -1

    def test_invalid_reveal_penalized(self, env: MinesweeperEnv) -> None:
        """Revealing an open cell costs -0.1."""
        env.step(15)
        _, reward, terminated, _, info = env.step(15)
        assert reward == pytest.approx(-0.1)
        assert terminated is False
        assert info["changed"] == frozenset()

    def test_mine_ends_episode(self, env: MinesweeperEnv) -> None:
        """Hitting a mine costs -10 and terminates."""
        obs, reward, terminated, _, info = env.step(0)
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"
        assert obs[0, 0] == 9

    def test_flag_toggle_is_free(self, env: MinesweeperEnv) -> None:
        """Toggling a flag earns nothing."""
        obs, reward, _, _, info = env.step(flag_action(2, 2))
        assert reward == 0.0
        assert obs[2, 2] == -2
        assert info["changed"] == frozenset({(2, 2)})
        assert info["flags_remaining"] == 0

    def test_flag_over_budget_penalized(self, env: MinesweeperEnv) -> None:
        """A flag beyond the mine total is refused."""
        env.step(flag_action(2, 2))
        obs, reward, _, _, _ = env.step(flag_action(3, 3))
        assert reward == pytest.approx(-0.1)
        assert obs[3, 3] == -1

    def test_final_flag_wins(self, env: MinesweeperEnv) -> None:
        """Flagging the last mine on a cleared board wins."""
        env.step(15)
        _, reward, terminated, _, info = env.step(flag_action(0, 0))
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_final_reveal_wins(self, env: MinesweeperEnv) -> None:
        """Revealing the last safe cell with mines flagged wins."""
        env.step(flag_action(0, 0))
        _, reward, terminated, _, _ = env.step(15)
        assert reward == 10.0
        assert terminated is True


# ============================================================================
# Action Mask Tests
# ============================================================================

class TestActionMask:
    """Test valid action masks."""

    def test_new_board_mask(self, env: MinesweeperEnv) -> None:
        """Every reveal and every flag is allowed at the start."""
        mask = env.get_action_mask()
        assert mask.shape == (32,)
        assert mask.all()

    def test_mask_after_flood(self, env: MinesweeperEnv) -> None:
        """Only the hidden mine remains revealable or flaggable."""
        env.step(15)
        mask = env.get_action_mask()
        assert np.flatnonzero(mask).tolist() == [0, 16]

    def test_flag_budget_limits_mask(self, env: MinesweeperEnv) -> None:
        """With no flags left only the existing flag can be toggled."""
        env.step(flag_action(1, 1))
        mask = env.get_action_mask()
        assert np.flatnonzero(mask[16:]).tolist() == [5]
        assert not mask[5]

    def test_finished_game_mask_empty(self, env: MinesweeperEnv) -> None:
        """Nothing is valid once the game ends."""
        env.step(0)
        assert not env.get_action_mask().any()


# ============================================================================
# Rendering Tests
# ============================================================================

class TestRender:
    """Test text rendering."""

    def test_render_observation_symbols(self) -> None:
        """Each observation value maps to its symbol."""
        obs = np.array([[-1, -2], [0, 3], [9, 1]], dtype=np.int8)
        assert render_observation(obs) == ". F \n  3 \n* 1 "

    def test_ansi_render_returns_text(self, env: MinesweeperEnv) -> None:
        """ANSI mode returns the rendered grid."""
        env.step(15)
        text = env.render()
        assert text.split("\n")[0] == ". 1     "

    def test_human_render_prints(self, capsys: pytest.CaptureFixture) -> None:
        """Human mode prints instead of returning."""
        environment = MinesweeperEnv(config=BoardConfig(2, 1), render_mode="human")
        environment.reset(seed=0)
        assert environment.render() is None
        assert ". ." in capsys.readouterr().out

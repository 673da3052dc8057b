"""
Gymnasium environment wrapper for the Minesweeper engine.

Provides a standard step/reset interface with reveal and flag actions.
"""
from dataclasses import replace
from typing import Any, Dict, FrozenSet, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, RevealKind


# ============================================================================
# Text Rendering
# ============================================================================

def render_observation(obs: np.ndarray) -> str:
    """
    Render an observation array as ASCII text.

    Hidden cells are ``.``, flags ``F``, mines ``*``, empty revealed
    cells a blank and numbered cells their count.
    """
    lines = []
    for row in range(obs.shape[0]):
        row_str = ""
        for col in range(obs.shape[1]):
            val = obs[row, col]
            if val == -1:
                row_str += "."
            elif val == -2:
                row_str += "F"
            elif val == 9:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str)

    return "\n".join(lines)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * size * size.
        Action i < size * size reveals cell (i // size, i % size).
        Larger actions toggle the flag on cell i - size * size.

    Rewards:
        - +1 for revealing a safe cell
        - 0 for toggling a flag
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self.render_mode = render_mode

        size = self.config.size
        self._cell_count = size * size

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(size, size),
            dtype=np.int8,
        )

        # One reveal action and one flag action per cell
        self.action_space = spaces.Discrete(2 * self._cell_count)

        self._steps = 0
        self._last_changed: FrozenSet[Tuple[int, int]] = frozenset()

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game on a fresh board.

        Args:
            seed: Random seed for reproducibility. Without one the board
                uses the configured seed, or a draw from np_random when the
                configuration has none.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is None and self.config.seed is not None:
            board_seed = self.config.seed
        else:
            board_seed = int(self.np_random.integers(2**31))
        self.board = Board(replace(self.config, seed=board_seed))
        self._steps = 0
        self._last_changed = frozenset()

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Reveal index (row * size + col) or flag index
                (size * size + row * size + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        action = int(action)

        if action < self._cell_count:
            reward = self._reveal(*divmod(action, self.config.size))
        else:
            reward = self._flag(*divmod(action - self._cell_count, self.config.size))

        observation = self.board.get_observation()
        terminated = not self.board.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _reveal(self, row: int, col: int) -> float:
        """Reveal a cell and score the result."""
        result = self.board.reveal(row, col)
        self._last_changed = result.changed

        if result.kind == RevealKind.NOOP:
            return -0.1
        if result.kind == RevealKind.WON:
            return 10.0
        if result.kind == RevealKind.LOST:
            return -10.0
        return 1.0

    def _flag(self, row: int, col: int) -> float:
        """Toggle a flag and score the result."""
        if not self.board.toggle_flag(row, col):
            self._last_changed = frozenset()
            return -0.1
        self._last_changed = frozenset({(row, col)})
        if self.board.is_won:
            return 10.0
        return 0.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "total_safe": self.board.safe_cell_count,
            "flags_remaining": self.board.flags_remaining,
            "changed": self._last_changed,
            "game_state": self.board.outcome.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_observation(self.board.get_observation())
        if self.render_mode == "human":
            print(render_observation(self.board.get_observation()))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action. The first half covers
            reveals, the second half flag toggles.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.board.is_playing:
            return mask

        obs = self.board.get_observation().reshape(-1)
        hidden = obs == -1
        mask[: self._cell_count] = hidden
        flag_mask = obs == -2
        if self.board.flags_remaining > 0:
            flag_mask = flag_mask | hidden
        mask[self._cell_count:] = flag_mask
        return mask

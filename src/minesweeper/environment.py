"""
Gymnasium environment wrapper for Minesweeper.

Drives a Session through the standard RL interface. The environment is
a plain consumer of the engine: it issues reveal/flag calls and follows
the session's notifications to keep its statistics.
"""
import random
from typing import Any, Dict, FrozenSet, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .cell import Cell, FLAGGED_CODE, MINE_CODE
from .engine import Session


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        Array of shape (height, width) where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < width * height reveals cell (i % width, i // width);
        action i >= width * height toggles the flag of cell
        i - width * height.

    Rewards:
        - +1 for a reveal that opens safe cells
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (revealed cell, or reveal of a flag)
        - 0 for toggling a flag without winning
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
        self.render_mode = render_mode
        self._cells = self.config.width * self.config.height

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE,
            high=MINE_CODE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        # Reveal actions first, then flag actions
        self.action_space = spaces.Discrete(2 * self._cells)

        self._steps = 0
        self._revealed = 0
        self._total_safe_cells = self._cells - self.config.num_mines
        self.session = self._new_session()

    def _new_session(self, seed: Optional[int] = None) -> Session:
        session = Session(self.config, rng=random.Random(seed))
        session.on_tiles_changed(self._on_tiles_changed)
        return session

    def _on_tiles_changed(self, cells: FrozenSet[Cell]) -> None:
        self._revealed += sum(
            1 for cell in cells if cell.is_revealed and not cell.is_mine
        )

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self._steps = 0
        self._revealed = 0
        self.session = self._new_session(
            int(self.np_random.integers(0, 2**31 - 1))
        )

        return self.session.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Reveal (y * width + x) or flag (cells + y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag, x, y = self._decode_action(int(action))
        self._steps += 1

        if flag:
            reward = self._flag_reward(x, y)
        else:
            reward = self._reveal_reward(x, y)

        observation = self.session.board.get_observation()
        terminated = self.session.is_over
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, x, y)."""
        flag = action >= self._cells
        index = action - self._cells if flag else action
        return flag, index % self.config.width, index // self.config.width

    def _reveal_reward(self, x: int, y: int) -> float:
        cell = self.session.cell_at(x, y)
        if not cell.is_hidden:
            return -0.1

        self.session.reveal(x, y)

        if self.session.is_won:
            return 10.0
        if self.session.is_lost:
            return -10.0
        return 1.0

    def _flag_reward(self, x: int, y: int) -> float:
        if not self.session.toggle_flag(x, y):
            return -0.1
        return 10.0 if self.session.is_won else 0.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self._revealed,
            "total_safe": self._total_safe_cells,
            "mines_remaining": self.session.mines_remaining(),
            "game_state": self.session.state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.session.board.render()
        if self.render_mode == "human":
            print(self.session.board.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.session.is_over:
            return mask
        for cell in self.session.board.cells():
            index = cell.y * self.config.width + cell.x
            mask[index] = cell.is_hidden
            mask[self._cells + index] = not cell.is_revealed
        return mask

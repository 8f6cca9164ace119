"""
Random agent for Minesweeper.

Serves as a baseline by selecting random valid actions.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent that selects actions uniformly at random.

    With ``flag_probability`` it chooses among flag actions, otherwise
    among reveal actions, falling back to whichever kind is available.
    """

    def __init__(
        self,
        board_height: int = 9,
        board_width: int = 9,
        seed: Optional[int] = None,
        flag_probability: float = 0.0,
    ) -> None:
        """
        Initialize the random agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
            seed: Random seed for reproducibility.
            flag_probability: Chance of picking a flag action.
        """
        super().__init__(board_height, board_width)
        if not 0.0 <= flag_probability <= 1.0:
            raise ValueError("flag_probability must be within [0, 1]")
        self.flag_probability = flag_probability
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a random valid action.

        Args:
            observation: 2D array of cell codes.
            valid_actions: Optional mask of valid actions.

        Returns:
            Random action index from valid actions.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        reveal_indices = np.where(valid_actions[:self.total_cells])[0]
        flag_indices = np.where(valid_actions[self.total_cells:])[0]
        flag_indices = flag_indices + self.total_cells

        want_flag = self.rng.random() < self.flag_probability
        if want_flag and len(flag_indices) > 0:
            candidates = flag_indices
        elif len(reveal_indices) > 0:
            candidates = reveal_indices
        else:
            candidates = flag_indices

        if len(candidates) == 0:
            # No valid actions, return any action (will be invalid)
            return 0

        return int(self.rng.choice(candidates))

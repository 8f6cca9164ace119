"""
Base agent interface for Minesweeper players.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minesweeper agents.

    Agents pick actions for MinesweeperEnv: indices below
    ``total_cells`` reveal a cell, the rest toggle a flag.
    """

    def __init__(self, board_height: int, board_width: int) -> None:
        """
        Initialize the agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
        """
        self.board_height = board_height
        self.board_width = board_width
        self.total_cells = board_height * board_width

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell codes, indexed [y, x].
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index.
        """

    def action_to_position(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, x, y)."""
        flag = action >= self.total_cells
        index = action - self.total_cells if flag else action
        return flag, index % self.board_width, index // self.board_width

    def position_to_action(self, x: int, y: int, flag: bool = False) -> int:
        """Convert (x, y) position to flat action index."""
        index = y * self.board_width + x
        return self.total_cells + index if flag else index

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Args:
            observation: 2D array of cell codes.

        Returns:
            Boolean mask where True = valid action.
        """
        flat_obs = observation.flatten()
        can_reveal = flat_obs == -1
        can_flag = (flat_obs == -1) | (flat_obs == -2)
        return np.concatenate([can_reveal, can_flag])

    def reset(self) -> None:
        """Reset agent state for new episode."""

    def update(
        self,
        observation: np.ndarray,
        action: int,
        reward: float,
        next_observation: np.ndarray,
        done: bool,
    ) -> None:
        """
        Update agent with experience (for learning agents).

        Args:
            observation: State before action.
            action: Action taken.
            reward: Reward received.
            next_observation: State after action.
            done: Whether episode ended.
        """

"""
Evaluation of Minesweeper agents.

Plays batches of games through MinesweeperEnv and aggregates results.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from agents import BaseAgent
from minesweeper import BoardConfig, MinesweeperEnv


logger = logging.getLogger(__name__)


# ============================================================================
# Episode Statistics
# ============================================================================

@dataclass
class EpisodeStats:
    """Statistics for a single episode."""

    total_reward: float = 0.0
    steps: int = 0
    won: bool = False
    lost: bool = False
    revealed_cells: int = 0


# ============================================================================
# Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare agents.

    Every agent sees the same sequence of boards when a seed is given.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        max_steps: int = 1000,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of evaluation episodes.
            max_steps: Maximum steps per episode.
            seed: Seed for the first episode's board.
        """
        if num_episodes < 1:
            raise ValueError("num_episodes must be positive")
        self.board_config = board_config or BoardConfig()
        self.num_episodes = num_episodes
        self.max_steps = max_steps
        self.seed = seed

    def play_episode(
        self,
        env: MinesweeperEnv,
        agent: BaseAgent,
        seed: Optional[int] = None,
    ) -> EpisodeStats:
        """Play one game until it ends or hits ``max_steps``."""
        stats = EpisodeStats()
        observation, info = env.reset(seed=seed)
        agent.reset()

        for _ in range(self.max_steps):
            action = agent.select_action(observation, env.get_action_mask())
            next_observation, reward, terminated, truncated, info = env.step(
                action
            )
            agent.update(
                observation, action, float(reward), next_observation,
                terminated or truncated,
            )
            observation = next_observation

            stats.total_reward += float(reward)
            stats.steps += 1
            if terminated or truncated:
                break

        stats.won = info["game_state"] == "WON"
        stats.lost = info["game_state"] == "LOST"
        stats.revealed_cells = info["revealed"]
        return stats

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = MinesweeperEnv(config=self.board_config)

        episodes = []
        for episode in range(self.num_episodes):
            seed = None if self.seed is None else self.seed + episode
            stats = self.play_episode(env, agent, seed=seed)
            logger.debug(
                "Episode %d: won=%s steps=%d revealed=%d",
                episode, stats.won, stats.steps, stats.revealed_cells,
            )
            episodes.append(stats)

        count = len(episodes)
        return {
            "win_rate": sum(e.won for e in episodes) / count,
            "loss_rate": sum(e.lost for e in episodes) / count,
            "avg_reward": sum(e.total_reward for e in episodes) / count,
            "avg_steps": sum(e.steps for e in episodes) / count,
            "avg_revealed": sum(e.revealed_cells for e in episodes) / count,
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        results = {}
        for name, agent in agents.items():
            logger.info("Evaluating %s over %d games", name, self.num_episodes)
            results[name] = self.evaluate(agent)
        return results

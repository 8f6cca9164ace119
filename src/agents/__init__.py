"""
Minesweeper agents module.

Provides agents that play Minesweeper through MinesweeperEnv:
- BaseAgent: Abstract interface
- RandomAgent: Baseline random selection
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
]

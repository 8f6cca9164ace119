"""
Evaluation module for Minesweeper agents.

Plays batches of games and reports win rate and related metrics.
"""
from .evaluator import EpisodeStats, Evaluator

__all__ = [
    "EpisodeStats",
    "Evaluator",
]

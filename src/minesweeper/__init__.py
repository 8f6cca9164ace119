"""
Minesweeper game engine.

Provides the board, the game session with its rules and notifications,
and a Gymnasium environment built on top of them.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTIES,
)
from .engine import GameState, Session, new_session
from .errors import (
    MinesweeperError,
    ConstructionError,
    InvalidDimensions,
    OutOfBoundsError,
    PlacementError,
    ReentrantCallError,
)
from .events import EventChannel, Subscription
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "GameState",
    "Session",
    "new_session",
    "MinesweeperError",
    "ConstructionError",
    "InvalidDimensions",
    "OutOfBoundsError",
    "PlacementError",
    "ReentrantCallError",
    "EventChannel",
    "Subscription",
    "MinesweeperEnv",
]

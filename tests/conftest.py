"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src and the project root (main.py) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, GameState, Session


# ============================================================================
# Helpers
# ============================================================================

# 5x5 layout used by the flood reveal scenario:
#
#     x: 0 1 2 3 4
#   y=0  . . . 1 1
#   y=1  . . . 1 *
#   y=2  . . . 1 1
#   y=3  1 1 1 1 1
#   y=4  1 * 1 1 *
SCENARIO_MINES = [(4, 1), (1, 4), (4, 4)]


class Recorder:
    """Collects every notification a session sends."""

    def __init__(self, session: Session) -> None:
        self.events = []
        self.tile_batches = []
        self.states = []
        session.on_tiles_changed(self._on_tiles)
        session.on_state_changed(self._on_state)

    def _on_tiles(self, cells) -> None:
        self.events.append(("tiles", cells))
        self.tile_batches.append(cells)

    def _on_state(self, state: GameState) -> None:
        self.events.append(("state", state))
        self.states.append(state)


def brute_force_count(board: Board, x: int, y: int) -> int:
    """Count mines around (x, y) without using Board helpers."""
    count = 0
    for other in board.cells():
        if other.position == (x, y):
            continue
        if abs(other.x - x) <= 1 and abs(other.y - y) <= 1 and other.is_mine:
            count += 1
    return count


def positions(cells) -> set:
    return {cell.position for cell in cells}


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def empty_board() -> Board:
    """Create a 5x5 board with no mines."""
    return Board(5, 5)


@pytest.fixture
def scenario_board() -> Board:
    """5x5 board with the scenario mines placed."""
    board = Board(5, 5)
    for x, y in SCENARIO_MINES:
        board.place_mine(x, y)
    return board


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def default_session() -> Session:
    """Create a seeded beginner session (9x9, 10 mines)."""
    return Session(BoardConfig(9, 9, 10), seed=1234)


@pytest.fixture
def scenario_session() -> Session:
    """Started 5x5 session with three known mines."""
    return Session.with_mines(5, 5, SCENARIO_MINES)


@pytest.fixture
def corner_mine_session() -> Session:
    """Started 3x3 session with one mine at (2, 2)."""
    return Session.with_mines(3, 3, [(2, 2)])


@pytest.fixture
def recorder():
    """Factory attaching a Recorder to a session."""
    return Recorder


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(0, 0, is_mine=True)

"""
Board module for Minesweeper game.

Holds the grid of cells and keeps every safe cell's adjacent mine count
in step with mine placement and removal.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Set, Tuple

import numpy as np

from .cell import Cell
from .errors import ConstructionError, InvalidDimensions, OutOfBoundsError


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper game.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidDimensions(
                f"Board dimensions must be positive, got "
                f"{self.width}x{self.height}"
            )
        if self.num_mines < 0:
            raise ConstructionError("Number of mines cannot be negative")
        max_mines = self.width * self.height
        if self.num_mines > max_mines:
            raise ConstructionError(
                f"Too many mines: {self.num_mines} don't fit into a "
                f"{self.width}x{self.height} grid (max {max_mines})"
            )

    @property
    def total_cells(self) -> int:
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

DIFFICULTIES = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns a ``width x height`` grid of cells and the set of mine cells.
    Board itself knows nothing about game rules; the session decides
    when mines go down and what a reveal means.
    """

    width: int
    height: int
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _mines: Set[Cell] = field(default_factory=set, repr=False)

    def __post_init__(self) -> None:
        """Validate dimensions and build the grid."""
        if self.width < 1 or self.height < 1:
            raise InvalidDimensions(
                f"Board dimensions must be positive, got "
                f"{self.width}x{self.height}"
            )
        self._init_grid()

    @classmethod
    def create(cls, width: int, height: int) -> "Board":
        """Create an empty board with no mines."""
        return cls(width, height)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells, indexed as ``_grid[y][x]``."""
        self._grid = [
            [Cell(x, y) for x in range(self.width)]
            for y in range(self.height)
        ]
        self._mines = set()

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """
        Get the Moore neighborhood of a cell.

        Args:
            x: Column of center cell.
            y: Row of center cell.

        Returns:
            Up to 8 (x, y) positions, clamped to the board. Never wraps.
        """
        result = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.in_bounds(new_x, new_y):
                    result.append((new_x, new_y))
        return result

    def neighbor_cells(self, x: int, y: int) -> Iterator[Cell]:
        """Iterate over the cells around (x, y)."""
        for neighbor_x, neighbor_y in self.neighbors(x, y):
            yield self._grid[neighbor_y][neighbor_x]

    def count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(1 for cell in self.neighbor_cells(x, y) if cell.is_mine)

    # ========================================================================
    # Mine Placement (Mid-level)
    # ========================================================================

    def place_mine(self, x: int, y: int) -> bool:
        """
        Put a mine on (x, y).

        Every safe neighbor's adjacent count goes up by one.

        Returns:
            True if a mine was placed, False if the cell already held one.
        """
        self._check_bounds(x, y)
        cell = self._grid[y][x]
        if cell.is_mine:
            return False

        cell.is_mine = True
        self._mines.add(cell)
        for neighbor in self.neighbor_cells(x, y):
            if not neighbor.is_mine:
                neighbor.adjacent_mines += 1
        return True

    def remove_mine(self, x: int, y: int) -> bool:
        """
        Take the mine off (x, y), undoing ``place_mine``.

        The cell gets its own count back from its neighborhood and every
        safe neighbor's count goes down by one.

        Returns:
            True if a mine was removed, False if there was none.
        """
        self._check_bounds(x, y)
        cell = self._grid[y][x]
        if not cell.is_mine:
            return False

        cell.is_mine = False
        self._mines.discard(cell)
        cell.adjacent_mines = self.count_adjacent_mines(x, y)
        for neighbor in self.neighbor_cells(x, y):
            if not neighbor.is_mine:
                neighbor.adjacent_mines -= 1
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def cell_at(self, x: int, y: int) -> Cell:
        """Get cell at position, raising OutOfBoundsError if invalid."""
        self._check_bounds(x, y)
        return self._grid[y][x]

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell in row-major order."""
        for row in self._grid:
            yield from row

    @property
    def mines(self) -> FrozenSet[Cell]:
        """Cells currently holding a mine."""
        return frozenset(self._mines)

    @property
    def mine_count(self) -> int:
        return len(self._mines)

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            Array of shape (height, width), indexed ``[y, x]``, where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for cell in self.cells():
            obs[cell.y, cell.x] = cell.to_observation()
        return obs

    def render(self) -> str:
        """Render board as ASCII, one line per row."""
        return "\n".join(
            " ".join(cell.to_char() for cell in row) for row in self._grid
        )

"""
Cell module for Minesweeper game.

A cell is one grid position: either a mine or a safe square carrying
the number of mines around it.
"""
from dataclasses import dataclass
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Visible state of a cell, as a presentation layer would draw it."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation codes for numeric consumers
HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(eq=False)
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Cells compare and hash by identity, so a set of cells is a set of
    grid positions.

    Attributes:
        x: Column index.
        y: Row index.
        is_mine: Whether this cell contains a mine.
        is_revealed: Whether the cell has been uncovered.
        is_flagged: Whether the player has marked the cell.
        adjacent_mines: Mines among the neighboring cells (0-8).
            Only meaningful when ``is_mine`` is False.
    """

    x: int
    y: int
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0

    @property
    def position(self) -> tuple:
        """(x, y) coordinate of this cell."""
        return self.x, self.y

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return not self.is_revealed and not self.is_flagged

    @property
    def state(self) -> CellState:
        """Visible state; a revealed cell reads as revealed even if flagged."""
        if self.is_revealed:
            return CellState.REVEALED
        if self.is_flagged:
            return CellState.FLAGGED
        return CellState.HIDDEN

    def to_observation(self) -> int:
        """
        Convert cell to an integer code.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.is_revealed:
            return MINE_CODE if self.is_mine else self.adjacent_mines
        if self.is_flagged:
            return FLAGGED_CODE
        return HIDDEN_CODE

    def to_char(self) -> str:
        """Single character used by text dumps of the board."""
        if self.is_revealed:
            if self.is_mine:
                return "*"
            return str(self.adjacent_mines) if self.adjacent_mines else " "
        if self.is_flagged:
            return "F"
        return "."

    def __repr__(self) -> str:
        flags = "".join((
            "M" if self.is_mine else "",
            "R" if self.is_revealed else "",
            "F" if self.is_flagged else "",
        ))
        return f"Cell({self.x}, {self.y}, {flags or '-'}, n={self.adjacent_mines})"

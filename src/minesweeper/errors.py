"""
Exceptions raised by the Minesweeper engine.

Every error derives from MinesweeperError. Leaf classes also derive from
the closest built-in exception so callers can catch either.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class ConstructionError(MinesweeperError, ValueError):
    """A board or session could not be built from the given parameters."""


class InvalidDimensions(ConstructionError):
    """Width or height is not a positive integer."""


class OutOfBoundsError(MinesweeperError, IndexError):
    """A coordinate lies outside the board."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"({x}, {y}) is outside the {width}x{height} board"
        )
        self.x = x
        self.y = y


class PlacementError(MinesweeperError, RuntimeError):
    """Mines cannot be placed around the first click."""


class ReentrantCallError(MinesweeperError, RuntimeError):
    """A listener tried to mutate the session while being notified."""

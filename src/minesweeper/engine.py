"""
Game session for Minesweeper.

A Session binds one Board to the game rules: deferred mine placement on
the first reveal, flood reveal, flag toggling, and win/lose detection.
Every change is announced through two notification channels.
"""
import logging
import random
from enum import Enum, auto
from typing import Callable, FrozenSet, Iterable, List, Optional, Set, Tuple

from .board import Board, BoardConfig
from .cell import Cell
from .errors import OutOfBoundsError, PlacementError, ReentrantCallError
from .events import EventChannel, Subscription


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of a session."""

    NOT_STARTED = auto()
    ACTIVE = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GameState.WON, GameState.LOST)


TilesListener = Callable[[FrozenSet[Cell]], None]
StateListener = Callable[[GameState], None]


# ============================================================================
# Session Class
# ============================================================================

class Session:
    """
    One game of Minesweeper.

    The board starts empty. Mines are placed on the first reveal so
    that the first click always opens a region with no adjacent mines.

    Listeners registered with ``on_tiles_changed`` receive a frozenset of
    every cell touched by one operation; listeners registered with
    ``on_state_changed`` receive the new GameState. Both are called
    synchronously, in registration order, before the operation returns.
    Listeners must not call ``reveal``, ``toggle_flag``, ``spawn_mine`` or
    ``randomize``; doing so raises ReentrantCallError. An exception raised
    by a listener propagates out of the operation that sent the
    notification and the rest of that operation does not run. After a
    failed tile notification the win check may have been skipped, so the
    session can stay ACTIVE with every mine already flagged.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Create a session.

        Args:
            config: Board size and mine count (default: beginner).
            rng: Random source for mine placement.
            seed: Seed for a new random source when ``rng`` is omitted.
        """
        self.config = config or BoardConfig()
        self.board = Board(self.config.width, self.config.height)
        self._rng = rng if rng is not None else random.Random(seed)
        self._state = GameState.NOT_STARTED
        self._mines_to_find = self.config.num_mines
        self._tiles_changed: EventChannel[FrozenSet[Cell]] = EventChannel(
            "tiles_changed"
        )
        self._state_changed: EventChannel[GameState] = EventChannel(
            "state_changed"
        )
        self._dispatching = False

    @classmethod
    def from_config(cls, config: BoardConfig, **kwargs) -> "Session":
        return cls(config, **kwargs)

    @classmethod
    def with_mines(
        cls,
        width: int,
        height: int,
        mines: Iterable[Tuple[int, int]],
        **kwargs,
    ) -> "Session":
        """
        Create an already started session with mines at fixed positions.

        Random placement is skipped, so the first reveal is treated like
        any other.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: (x, y) positions of the mines; duplicates collapse.

        Returns:
            Session in the ACTIVE state.
        """
        positions = set(mines)
        config = BoardConfig(width, height, len(positions))
        for x, y in positions:
            if not (0 <= x < width and 0 <= y < height):
                raise OutOfBoundsError(x, y, width, height)

        session = cls(config, **kwargs)
        for x, y in sorted(positions):
            session.board.place_mine(x, y)
        session._state = GameState.ACTIVE
        return session

    # ========================================================================
    # Notifications (Low-level)
    # ========================================================================

    def on_tiles_changed(self, listener: TilesListener) -> Subscription:
        """Subscribe to batches of changed cells."""
        return self._tiles_changed.subscribe(listener)

    def on_state_changed(self, listener: StateListener) -> Subscription:
        """Subscribe to game state transitions."""
        return self._state_changed.subscribe(listener)

    def _publish(self, channel: EventChannel, payload) -> None:
        self._dispatching = True
        try:
            channel.publish(payload)
        finally:
            self._dispatching = False

    def _tiles_update(self, cells: Iterable[Cell]) -> None:
        self._publish(self._tiles_changed, frozenset(cells))

    def _change_state(self, new_state: GameState) -> None:
        self._state = new_state
        self._publish(self._state_changed, new_state)

    def _guard_reentry(self, operation: str) -> None:
        if self._dispatching:
            raise ReentrantCallError(
                f"{operation}() called from inside a listener"
            )

    # ========================================================================
    # Mine Placement (Mid-level)
    # ========================================================================

    def randomize(self, x: int, y: int) -> None:
        """
        Place the session's mines at random, keeping (x, y) safe.

        No mine lands on (x, y) or on any of its neighbors, so the cell's
        adjacent count stays 0. Moves the session to ACTIVE. Does nothing
        once the session has started.

        Raises:
            OutOfBoundsError: If (x, y) is not on the board.
            PlacementError: If the mines do not fit outside the safe area.
        """
        self._guard_reentry("randomize")
        first = self.board.cell_at(x, y)
        if self._state is not GameState.NOT_STARTED:
            return

        self._place_mines(first, self.config.num_mines)
        self._change_state(GameState.ACTIVE)

    def _place_mines(self, first: Cell, count: int) -> None:
        """Retry random positions until ``count`` mines are down."""
        safe_cells = 1 + len(self.board.neighbors(first.x, first.y))
        capacity = self.board.total_cells - safe_cells
        if count > capacity:
            raise PlacementError(
                f"{count} mines don't fit on a {self.board.width}x"
                f"{self.board.height} board around ({first.x}, {first.y}) "
                f"(room for {capacity})"
            )

        attempts = 0
        remaining = count
        while remaining > 0:
            attempts += 1
            x = self._rng.randrange(self.board.width)
            y = self._rng.randrange(self.board.height)
            if (x, y) == first.position:
                continue
            if not self.board.place_mine(x, y):
                continue
            if first.adjacent_mines != 0:
                self.board.remove_mine(x, y)
                continue
            remaining -= 1

        logger.debug(
            "Placed %d mines around (%d, %d) in %d attempts",
            count, first.x, first.y, attempts,
        )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal the cell at (x, y).

        On the first reveal, mines are placed around this cell. A mine
        loses the game. Otherwise the cell is opened and, if it has no
        adjacent mines, the whole connected empty region with its
        numbered border is opened too.

        Args:
            x: Column to reveal.
            y: Row to reveal.

        Returns:
            True if any cell changed, False if the call was a no-op.

        Raises:
            OutOfBoundsError: If (x, y) is not on the board.
        """
        self._guard_reentry("reveal")
        cell = self.board.cell_at(x, y)
        if self._state.is_terminal:
            return False

        if self._state is GameState.NOT_STARTED:
            self.randomize(x, y)

        if cell.is_mine:
            self._lose()
            return True

        return self._flood_reveal(cell)

    def _flood_reveal(self, start: Cell) -> bool:
        """Open the empty region around ``start`` with an explicit stack."""
        changed: List[Cell] = []
        visited: Set[Tuple[int, int]] = set()
        stack = [start.position]

        while stack:
            position = stack.pop()
            if position in visited:
                continue
            visited.add(position)

            cell = self.board.cell_at(*position)
            if cell.is_revealed:
                continue

            # A flagged cell loses its flag when uncovered
            if cell.is_flagged:
                cell.is_flagged = False
                self._mines_to_find += 1

            cell.is_revealed = True
            changed.append(cell)

            if cell.adjacent_mines != 0:
                continue
            stack.extend(self.board.neighbors(*position))

        if not changed:
            return False

        logger.debug(
            "Revealed %d cells from (%d, %d)", len(changed), start.x, start.y
        )
        self._tiles_update(changed)
        self._check_win()
        return True

    def _lose(self) -> None:
        """Uncover every mine and end the game."""
        self._state = GameState.LOST
        mines = self.board.mines
        for mine in mines:
            mine.is_revealed = True

        logger.info("Game lost with %d mines unflagged", self._unflagged_mines())
        self._tiles_update(mines)
        self._change_state(GameState.LOST)

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Place or remove a flag at (x, y).

        Args:
            x: Column.
            y: Row.

        Returns:
            True if the flag was toggled, False if the cell is revealed
            or the game is over.

        Raises:
            OutOfBoundsError: If (x, y) is not on the board.
        """
        self._guard_reentry("toggle_flag")
        cell = self.board.cell_at(x, y)
        if self._state.is_terminal or cell.is_revealed:
            return False

        cell.is_flagged = not cell.is_flagged
        self._mines_to_find += -1 if cell.is_flagged else 1

        self._tiles_update((cell,))
        self._check_win()
        return True

    def spawn_mine(self, x: int, y: int) -> bool:
        """
        Add one more mine at (x, y) while the game is running.

        The player has one more mine to find. Only unrevealed cells of an
        ACTIVE session take a new mine.

        Returns:
            True if a mine was added, False if the cell already held one,
            is revealed, or the session is not ACTIVE.

        Raises:
            OutOfBoundsError: If (x, y) is not on the board.
        """
        self._guard_reentry("spawn_mine")
        cell = self.board.cell_at(x, y)
        if self._state is not GameState.ACTIVE or cell.is_revealed:
            return False
        if not self.board.place_mine(x, y):
            return False

        self._mines_to_find += 1
        logger.debug("Spawned mine at (%d, %d)", x, y)
        self._tiles_update((cell,))
        self._check_win()
        return True

    def _check_win(self) -> None:
        """Win once exactly the mines are flagged."""
        if self._state is not GameState.ACTIVE:
            return
        if self._mines_to_find != 0:
            return
        if self._unflagged_mines():
            return

        uncovered = []
        for cell in self.board.cells():
            if cell.is_mine or cell.is_revealed:
                continue
            cell.is_revealed = True
            uncovered.append(cell)

        logger.info(
            "Game won on %dx%d board with %d mines",
            self.board.width, self.board.height, self.board.mine_count,
        )
        self._tiles_update(uncovered)
        self._change_state(GameState.WON)

    def _unflagged_mines(self) -> int:
        return sum(1 for mine in self.board.mines if not mine.is_flagged)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def cell_at(self, x: int, y: int) -> Cell:
        """Get cell at position, raising OutOfBoundsError if invalid."""
        return self.board.cell_at(x, y)

    def current_state(self) -> GameState:
        return self._state

    def mines_remaining(self) -> int:
        """Mines left to flag; negative when the player over-flags."""
        return self._mines_to_find

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def mines_to_find(self) -> int:
        return self._mines_to_find

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def mine_count(self) -> int:
        """Mines this session plays with, spawned ones included."""
        if self._state is GameState.NOT_STARTED:
            return self.config.num_mines
        return self.board.mine_count

    @property
    def is_over(self) -> bool:
        return self._state.is_terminal

    @property
    def is_won(self) -> bool:
        return self._state is GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._state is GameState.LOST

    def __str__(self) -> str:
        return self.board.render()

    def __repr__(self) -> str:
        return (
            f"Session(width={self.width}, height={self.height}, "
            f"mines={self.mine_count}, state={self._state.name}, "
            f"mines_to_find={self._mines_to_find})"
        )


# ============================================================================
# Factory
# ============================================================================

def new_session(
    width: int,
    height: int,
    mine_count: int,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> Session:
    """
    Create a session for a ``width x height`` board with ``mine_count`` mines.

    Raises:
        InvalidDimensions: If width or height is not positive.
        ConstructionError: If mine_count is negative or exceeds the board.
    """
    return Session(BoardConfig(width, height, mine_count), rng=rng, seed=seed)

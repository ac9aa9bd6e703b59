"""
Board module for the Minesweeper engine.

Implements the square game board: mine placement, adjacency counts,
revealing with flood fill, flagging and win/loss evaluation.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell, Visibility
from .events import BoardReset, CellFlagged, CellsRevealed, EventBus, GameEnded

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    if (dx, dy) != (0, 0)
)

LAYOUT_BOMB = "*"
LAYOUT_EMPTY = "."


class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_over(self) -> bool:
        """Check if the state is terminal."""
        return self is not GameState.PLAYING


class BoardConfigError(ValueError):
    """Raised when a board configuration is inconsistent."""


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a square Minesweeper board.

    Attributes:
        dimension: Side length of the grid.
        bomb_count: Total bombs to place.
    """

    dimension: int = 8
    bomb_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.dimension < 1:
            raise BoardConfigError("Board dimension must be positive")
        if self.bomb_count < 0:
            raise BoardConfigError("Number of bombs cannot be negative")
        if self.bomb_count > self.size:
            raise BoardConfigError(f"Too many bombs (max {self.size})")

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.dimension * self.dimension

    @property
    def safe_cells(self) -> int:
        """Number of cells without a bomb."""
        return self.size - self.bomb_count

    @property
    def density(self) -> float:
        """Fraction of cells holding a bomb."""
        return self.bomb_count / self.size


# Preset difficulty levels
BEGINNER = BoardConfig(9, 10)
INTERMEDIATE = BoardConfig(16, 40)
EXPERT = BoardConfig(24, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns every cell of a ``dimension x dimension`` grid, flattened with
    ``index = x + y * dimension``. The game state is recomputed from the
    visible cells after every reveal; only ``reset`` sets it directly.

    Observers registered with :meth:`subscribe` are notified after each
    command has fully settled.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: Optional[random.Random] = field(
        default=None, repr=False, compare=False
    )
    _cells: List[Cell] = field(default_factory=list, repr=False)
    _game_state: GameState = GameState.PLAYING
    _events: EventBus = field(
        default_factory=EventBus, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Populate the grid after dataclass creation."""
        if self.rng is None:
            self.rng = random.Random()
        self.reset()

    @classmethod
    def from_layout(cls, rows: Sequence[str]) -> "Board":
        """
        Build a board with a fixed bomb layout.

        Args:
            rows: One string per row (``y``), one character per column
                (``x``): ``*`` for a bomb, ``.`` for an empty cell.

        Returns:
            A board in the PLAYING state with every cell covered. A later
            ``reset`` shuffles the same number of bombs at random.
        """
        dimension = len(rows)
        if any(len(row) != dimension for row in rows):
            raise BoardConfigError("Layout must be square")
        marks = "".join(rows)
        unknown = set(marks) - {LAYOUT_BOMB, LAYOUT_EMPTY}
        if unknown:
            raise BoardConfigError(
                f"Unknown layout marks: {''.join(sorted(unknown))}"
            )
        bombs = [mark == LAYOUT_BOMB for mark in marks]
        board = cls(BoardConfig(dimension, sum(bombs)))
        board._build(bombs)
        return board

    # ========================================================================
    # Grid Construction (Low-level)
    # ========================================================================

    def reset(self) -> None:
        """Rebuild the board with freshly shuffled bombs."""
        layout = [
            index < self.config.bomb_count for index in range(self.config.size)
        ]
        # random.shuffle is a Fisher-Yates shuffle
        self.rng.shuffle(layout)
        self._build(layout)

    def _build(self, layout: Sequence[bool]) -> None:
        """Create covered cells for a flattened bomb layout."""
        dimension = self.config.dimension
        cells = []
        for index, is_bomb in enumerate(layout):
            if is_bomb:
                cells.append(Cell(is_bomb=True))
                continue
            x, y = index % dimension, index // dimension
            count = sum(
                1
                for nx, ny in self._neighbors(x, y)
                if layout[self._index(nx, ny)]
            )
            cells.append(Cell(adjacent_bombs=count))
        self._cells = cells
        self._game_state = GameState.PLAYING
        logger.debug(
            "Board reset: %dx%d with %d bombs",
            dimension, dimension, self.config.bomb_count,
        )
        self._events.publish(BoardReset(dimension, self.config.bomb_count))

    # ========================================================================
    # Position Utilities (Low-level)
    # ========================================================================

    def _index(self, x: int, y: int) -> int:
        return x + y * self.config.dimension

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        dimension = self.config.dimension
        return 0 <= x < dimension and 0 <= y < dimension

    def _checked_index(self, x: int, y: int) -> int:
        """Index of a position, raising IndexError when out of bounds."""
        if not self._is_valid_position(x, y):
            dimension = self.config.dimension
            raise IndexError(
                f"Position ({x}, {y}) is outside the "
                f"{dimension}x{dimension} board"
            )
        return self._index(x, y)

    def _neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        """Yield in-bounds neighbouring positions."""
        for dx, dy in NEIGHBOR_OFFSETS:
            if self._is_valid_position(x + dx, y + dy):
                yield x + dx, y + dy

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal the cell at the given position.

        Covered cells become visible. A visible empty cell with no
        adjacent bombs cascades to its covered neighbours. Flagged and
        visible cells are left alone, as are out-of-range positions and
        any cell once the game is over. The game state is recomputed
        afterwards in every case.

        Args:
            x: Column index to reveal.
            y: Row index to reveal.

        Returns:
            True if at least one cell was revealed, False otherwise.
        """
        revealed: List[Tuple[int, int]] = []
        if self.is_playing and self._is_valid_position(x, y):
            revealed = self._flood_reveal(x, y)

        previous = self._game_state
        self._game_state = self._evaluate_state()

        if revealed:
            self._events.publish(
                CellsRevealed(tuple(revealed), self._game_state)
            )
        if self._game_state.is_over and not previous.is_over:
            logger.debug("Game over: %s", self._game_state.name)
            self._events.publish(GameEnded(self._game_state))
        return bool(revealed)

    def _flood_reveal(self, x: int, y: int) -> List[Tuple[int, int]]:
        """Reveal from a position, cascading through zero-count cells."""
        revealed = []
        stack = [(x, y)]
        while stack:
            cx, cy = stack.pop()
            index = self._index(cx, cy)
            cell = self._cells[index]
            if not cell.is_covered:
                continue
            self._cells[index] = cell.revealed()
            revealed.append((cx, cy))
            if cell.spreads:
                stack.extend(self._neighbors(cx, cy))
        return revealed

    def _evaluate_state(self) -> GameState:
        """Derive the game state from the visible cells."""
        won = True
        for cell in self._cells:
            if cell.is_bomb and cell.is_visible:
                return GameState.LOST
            if cell.is_empty and not cell.is_visible:
                won = False
        return GameState.WON if won else GameState.PLAYING

    def flag(self, x: int, y: int) -> bool:
        """
        Toggle the flag on a cell.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            True if the flag was toggled, False for visible cells or
            once the game is over.

        Raises:
            IndexError: If the position is outside the board.
        """
        index = self._checked_index(x, y)
        if not self.is_playing:
            return False
        cell = self._cells[index]
        toggled = cell.toggled()
        if toggled is cell:
            return False
        self._cells[index] = toggled
        self._events.publish(CellFlagged(x, y, toggled.visibility))
        return True

    def subscribe(self, callback: Callable[[object], None]) -> Callable[[], None]:
        """
        Register a callback for board events.

        Returns:
            A function that unregisters the callback.
        """
        return self._events.subscribe(callback)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def dimension(self) -> int:
        return self.config.dimension

    @property
    def bomb_count(self) -> int:
        return self.config.bomb_count

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._game_state == GameState.LOST

    @property
    def flag_count(self) -> int:
        return sum(1 for cell in self._cells if cell.is_flagged)

    @property
    def remaining_bombs(self) -> int:
        """Bombs not yet accounted for by a flag (may go negative)."""
        return self.config.bomb_count - self.flag_count

    @property
    def visible_count(self) -> int:
        return sum(1 for cell in self._cells if cell.is_visible)

    def cell_at(self, x: int, y: int) -> Cell:
        """
        Get the cell at a position.

        Raises:
            IndexError: If the position is outside the board.
        """
        return self._cells[self._checked_index(x, y)]

    def __getitem__(self, position: Tuple[int, int]) -> Cell:
        x, y = position
        return self.cell_at(x, y)

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield ``(x, y, cell)`` for every cell in index order."""
        dimension = self.config.dimension
        for index, cell in enumerate(self._cells):
            yield index % dimension, index // dimension, cell

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for an agent.

        Returns:
            2D array indexed ``[y, x]`` where:
                -1 = covered
                -2 = flagged
                0-8 = visible with adjacent count
                9 = visible bomb
        """
        dimension = self.config.dimension
        obs = np.array(
            [cell.to_observation() for cell in self._cells], dtype=np.int8
        )
        return obs.reshape((dimension, dimension))

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of covered (x, y) positions.
        """
        return [
            (x, y)
            for x, y, cell in self.cells()
            if cell.visibility == Visibility.COVERED
        ]

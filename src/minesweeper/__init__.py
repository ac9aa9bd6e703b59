"""
Minesweeper board engine.

Provides the board state machine, cell values, change notifications and
thin presentation helpers built on top of them.
"""
from .cell import Cell, Visibility
from .board import (
    Board,
    BoardConfig,
    BoardConfigError,
    GameState,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .events import BoardReset, CellFlagged, CellsRevealed, EventBus, GameEnded
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "Visibility",
    "Board",
    "BoardConfig",
    "BoardConfigError",
    "GameState",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "BoardReset",
    "CellFlagged",
    "CellsRevealed",
    "EventBus",
    "GameEnded",
    "MinesweeperEnv",
]

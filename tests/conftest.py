"""
Pytest configuration and shared fixtures.
"""
import random
from typing import List

import pytest

from minesweeper import Board, BoardConfig, Cell


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 8x8 board with 10 bombs."""
    return Board(rng=random.Random(1234))


@pytest.fixture
def beginner_board() -> Board:
    """Create a beginner difficulty board."""
    return Board(BoardConfig(9, 10), rng=random.Random(42))


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no bombs for cascade testing."""
    return Board(BoardConfig(5, 0))


@pytest.fixture
def corner_board() -> Board:
    """
    4x4 board with a single bomb in the bottom-right corner.

    Counts:
        0 0 0 0
        0 0 0 0
        0 0 1 1
        0 0 1 *
    """
    return Board.from_layout([
        "....",
        "....",
        "....",
        "...*",
    ])


@pytest.fixture
def walled_board() -> Board:
    """
    5x5 board whose bombs split the grid into two regions.

    Counts:
        0 2 * 2 0
        0 3 * 3 0
        0 2 * 2 0
        1 2 1 1 0
        * 1 0 0 0
    """
    return Board.from_layout([
        "..*..",
        "..*..",
        "..*..",
        ".....",
        "*....",
    ])


@pytest.fixture
def recorder(default_board: Board) -> List[object]:
    """Collect every event published by the default board."""
    events: List[object] = []
    default_board.subscribe(events.append)
    return events


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def covered_cell() -> Cell:
    """Create a covered empty cell."""
    return Cell()


@pytest.fixture
def bomb_cell() -> Cell:
    """Create a covered bomb cell."""
    return Cell(is_bomb=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 10)

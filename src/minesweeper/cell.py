"""
Cell module for the Minesweeper engine.

A cell pairs its contents (bomb, or empty with an adjacent bomb count)
with its visibility (covered/flagged/visible). Cells are immutable values;
the board swaps in an updated copy when a cell changes.
"""
from dataclasses import dataclass, replace
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

class Visibility(Enum):
    """Possible visibility states of a cell."""

    COVERED = auto()
    FLAGGED = auto()
    VISIBLE = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Represents a single square of the Minesweeper grid.

    Attributes:
        is_bomb: Whether this cell holds a bomb.
        adjacent_bombs: Bombs among the neighbouring cells (0-8). Bombs
            keep a placeholder of 0.
        visibility: Current visibility (covered, flagged or visible).
    """

    is_bomb: bool = False
    adjacent_bombs: int = 0
    visibility: Visibility = Visibility.COVERED

    def revealed(self) -> "Cell":
        """Return a copy of this cell made visible."""
        return replace(self, visibility=Visibility.VISIBLE)

    def toggled(self) -> "Cell":
        """
        Return a copy with the flag toggled.

        Covered cells become flagged and flagged cells become covered.
        Visible cells are returned unchanged.
        """
        if self.visibility == Visibility.COVERED:
            return replace(self, visibility=Visibility.FLAGGED)
        if self.visibility == Visibility.FLAGGED:
            return replace(self, visibility=Visibility.COVERED)
        return self

    @property
    def is_empty(self) -> bool:
        """Check if cell holds no bomb."""
        return not self.is_bomb

    @property
    def is_covered(self) -> bool:
        return self.visibility == Visibility.COVERED

    @property
    def is_flagged(self) -> bool:
        return self.visibility == Visibility.FLAGGED

    @property
    def is_visible(self) -> bool:
        return self.visibility == Visibility.VISIBLE

    @property
    def spreads(self) -> bool:
        """Check if revealing this cell cascades to its neighbours."""
        return not self.is_bomb and self.adjacent_bombs == 0

    def to_observation(self) -> int:
        """
        Convert cell to observation value for an agent.

        Returns:
            -1: Covered cell
            -2: Flagged cell
            0-8: Visible empty cell with adjacent bomb count
            9: Visible bomb (game over state)
        """
        if self.visibility == Visibility.COVERED:
            return -1
        if self.visibility == Visibility.FLAGGED:
            return -2
        if self.is_bomb:
            return 9
        return self.adjacent_bombs

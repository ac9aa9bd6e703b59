"""
Display helpers for a presentation layer.

Chooses labels, titles and background tints from the game state and a
cell. Nothing here mutates the board.
"""
from typing import Tuple

from .board import Board, GameState
from .cell import Cell, Visibility


# ============================================================================
# Constants
# ============================================================================

BOMB_GLYPH = "\U0001F4A3"
FLAG_GLYPH = "\U0001F38C"
BLANK = " "

# RGB tints, components in [0, 1]
LOST_TINT = (1.0, 0.7, 0.7)
WON_TINT = (0.7, 1.0, 0.7)
VISIBLE_SHADE = (0.95, 0.95, 0.95)
COVERED_SHADE = (0.90, 0.90, 0.90)

# Plain-text marks used by render_text. "." means covered here, unlike
# board.LAYOUT_EMPTY which marks an empty cell in Board.from_layout.
TEXT_MARKS = {
    "covered": ".",
    "flagged": "F",
    "bomb": "*",
    "zero": " ",
}

Color = Tuple[float, float, float]


# ============================================================================
# Labels
# ============================================================================

def contents_label(cell: Cell) -> str:
    """Label for a cell's contents regardless of visibility."""
    if cell.is_bomb:
        return BOMB_GLYPH
    return str(cell.adjacent_bombs) if cell.adjacent_bombs else BLANK


def cell_label(game_state: GameState, cell: Cell) -> str:
    """
    Label shown on a cell.

    Once the game is over every cell shows its contents. While playing,
    covered cells are blank, flagged cells show a flag and visible cells
    show their contents.
    """
    if game_state.is_over:
        return contents_label(cell)
    if cell.visibility == Visibility.COVERED:
        return BLANK
    if cell.visibility == Visibility.FLAGGED:
        return FLAG_GLYPH
    return contents_label(cell)


def title(game_state: GameState) -> str:
    """Headline for the current game state."""
    if game_state == GameState.LOST:
        return "You lost!"
    if game_state == GameState.WON:
        return "You won!"
    return BLANK


def cell_color(game_state: GameState, cell: Cell) -> Color:
    """Background tint for a cell."""
    if game_state == GameState.LOST:
        return LOST_TINT
    if game_state == GameState.WON:
        return WON_TINT
    if cell.is_visible:
        return VISIBLE_SHADE
    return COVERED_SHADE


# ============================================================================
# Text Rendering
# ============================================================================

def _text_mark(game_state: GameState, cell: Cell) -> str:
    if not game_state.is_over and cell.is_covered:
        return TEXT_MARKS["covered"]
    if not game_state.is_over and cell.is_flagged:
        return TEXT_MARKS["flagged"]
    if cell.is_bomb:
        return TEXT_MARKS["bomb"]
    if cell.adjacent_bombs == 0:
        return TEXT_MARKS["zero"]
    return str(cell.adjacent_bombs)


def render_text(board: Board, coordinates: bool = False) -> str:
    """
    Render the board as plain text, one line per row.

    Args:
        board: Board to render.
        coordinates: Prefix rows and columns with their indices.

    Returns:
        Multi-line string using ASCII marks only.
    """
    dimension = board.dimension
    width = len(str(dimension - 1))
    lines = []
    if coordinates:
        header = " ".join(str(x).rjust(width) for x in range(dimension))
        lines.append(" " * (width + 1) + header)
    for y in range(dimension):
        marks = [
            _text_mark(board.game_state, board.cell_at(x, y)).rjust(width)
            for x in range(dimension)
        ]
        row = " ".join(marks)
        if coordinates:
            row = f"{str(y).rjust(width)} {row}"
        lines.append(row)
    return "\n".join(lines)

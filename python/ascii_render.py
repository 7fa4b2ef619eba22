"""
ASCII rendering for nonogram grids.

Draws the column clues above the grid and the row clues to its left, two
characters per clue, and every cell two characters wide. Clues of solved lines
are colored green.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_types import Cell, Clues, Crossed, Empty, Filled, Maybed, Measured, Point
from nonogram import Grid, SolvedState

logger = logging.getLogger(__name__)

# Every 5 cells the empty-cell pattern alternates, to make cells easier to count
SEPARATING_POINT = 5


@dataclass(frozen=True)
class RenderStyle:
    """Glyphs and coloring used by render_grid. Every glyph is two characters."""

    color: bool = True
    empty: str = "  "
    empty_alt: str = ". "
    filled: str = "##"
    crossed: str = "xx"
    maybed: str = "??"
    measured: str = "mm"
    cursor: str = "<>"


def _identity(s: str) -> str:
    return s


def _empty_glyph(point: Point, style: RenderStyle) -> str:
    x_reached_point = point.x // SEPARATING_POINT % 2 == 0
    y_reached_point = point.y // SEPARATING_POINT % 2 == 0
    return style.empty_alt if x_reached_point ^ y_reached_point else style.empty


def render_cell(cell: Cell, point: Point, style: RenderStyle, highlighted: bool = False) -> str:
    """Render a single cell as two (possibly colored) characters."""
    colorize: Callable[[str], str] = _identity

    match cell:
        case Empty():
            glyph = _empty_glyph(point, style)
        case Filled():
            glyph = style.filled
            colorize = chalk.bgWhite.black
        case Crossed():
            glyph = style.crossed
            colorize = chalk.bgRed
        case Maybed():
            glyph = style.maybed
            colorize = chalk.bgBlue
        case Measured(ordinal=ordinal):
            glyph = style.measured if ordinal is None else f"{ordinal % 100:>2}"
            colorize = chalk.bgGreen.black
        case _:
            raise ValueError(f"Unknown cell type: {cell}")

    if highlighted:
        if not style.color:
            return style.cursor
        colorize = chalk.bgYellow.black
    return colorize(glyph) if style.color else glyph


def _clue_color(solved: bool, style: RenderStyle) -> Callable[[str], str]:
    if style.color and solved:
        return chalk.green
    return _identity


def render_top_clues(grid: Grid, solved_columns: tuple[bool, ...], style: RenderStyle) -> list[str]:
    """Column clues, bottom-aligned, one output line per clue slot."""
    height = grid.max_clues_size.height
    margin = " " * grid.max_clues_size.width
    lines: list[str] = []
    for slot in range(height):
        parts: list[str] = []
        for x, clues in enumerate(grid.vertical_clues_solutions):
            offset = slot - (height - len(clues))
            text = f"{clues[offset]:<2}" if offset >= 0 else "  "
            parts.append(_clue_color(solved_columns[x], style)(text))
        lines.append(margin + "".join(parts))
    return lines


def render_left_clues(clues: Clues, width: int, solved: bool, style: RenderStyle) -> str:
    """Row clues, right-aligned within width characters."""
    text = "".join(f"{clue:>2}" for clue in clues)
    return " " * (width - len(text)) + _clue_color(solved, style)(text)


def render_grid(
    grid: Grid,
    cursor: Point | None = None,
    style: RenderStyle | None = None,
    state: SolvedState | None = None,
) -> str:
    """
    Render a grid with its clues.

    Args:
        grid: The grid to render
        cursor: Optional cell to highlight
        style: Glyphs and coloring (defaults to RenderStyle())
        state: Solved state to color clues by; evaluated from grid when omitted

    Returns:
        Rendered string, with ANSI color codes if style.color is set
    """
    if style is None:
        style = RenderStyle()
    if state is None:
        state = grid.solved_state()

    width, height = grid.size.width, grid.size.height
    lines = render_top_clues(grid, state.solved_columns, style)

    for y in range(height):
        row = render_left_clues(
            grid.horizontal_clues_solutions[y], grid.max_clues_size.width, state.solved_rows[y], style
        )
        for x in range(width):
            point = Point(x, y)
            row += render_cell(grid.get_cell(point), point, style, highlighted=point == cursor)
        lines.append(row)

    logger.debug("render_grid: %dx%d grid, %d lines", width, height, len(lines))
    return "\n".join(lines)


def render_status(state: SolvedState) -> str:
    """One-line completion summary."""
    if state.is_solved:
        return "Solved!"
    return f"{state.percentage:.0f}% solved ({state.solved_cell_count}/{state.cells_to_be_filled} cells)"

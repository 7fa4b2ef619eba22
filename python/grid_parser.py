"""
Text format for nonogram patterns.

One grid row per line, one character per cell:
  * '1' or '#': Filled
  * ' ', '_' or '.': Empty
  * 'x': Crossed
  * '?': Maybed
  * 'm': Measured (the trace ordinal is not stored)

Rows shorter than the longest row are padded with Empty cells. Saved files
write '.' for Empty so that trailing whitespace stripping cannot change them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from grid_types import Cell, Crossed, Empty, Filled, Maybed, Measured, Size
from nonogram import Grid

__all__ = ["parse_lines", "parse_pattern", "format_cells", "grid_from_lines", "load_grid", "save_grid"]

logger = logging.getLogger(__name__)


CELL_CHARS: dict[str, Cell] = {
    "1": Filled(),
    "#": Filled(),
    " ": Empty(),
    "_": Empty(),
    ".": Empty(),
    "x": Crossed(),
    "?": Maybed(),
    "m": Measured(),
}


def _cell_char(cell: Cell) -> str:
    match cell:
        case Empty():
            return "."
        case Filled():
            return "1"
        case Crossed():
            return "x"
        case Maybed():
            return "?"
        case Measured():
            return "m"
        case _:
            raise ValueError(f"Unknown cell type: {cell}")


def parse_lines(lines: Sequence[str]) -> tuple[Size, list[Cell]]:
    """
    Parse pattern rows into a size and a flat row-major cell list.

    Args:
        lines: One string per grid row

    Returns:
        (size, cells) ready to pass to Grid

    Raises:
        ValueError: If there are no rows or a character is not a valid cell
    """
    if not lines or not any(lines):
        raise ValueError("Pattern has no cells")

    rows: list[list[Cell]] = []
    for row_idx, line in enumerate(lines):
        row: list[Cell] = []
        for col_idx, char in enumerate(line):
            if char not in CELL_CHARS:
                raise ValueError(
                    f"Invalid character '{char}' in pattern\n"
                    f"  Row {row_idx}, column {col_idx}: \"{line}\"\n"
                    f"  Valid characters: '1' or '#' (filled), ' ', '_' or '.' (empty), "
                    f"'x' (crossed), '?' (maybed), 'm' (measured)"
                )
            row.append(CELL_CHARS[char])
        rows.append(row)

    width = max(len(row) for row in rows)
    cells: list[Cell] = []
    for row in rows:
        cells.extend(row)
        # Pad with Empty cells
        cells.extend([Empty()] * (width - len(row)))

    return Size(width, len(rows)), cells


def parse_pattern(text: str) -> tuple[Size, list[Cell]]:
    """
    Parse a pattern from text, one grid row per line.

    Empty lines before the first row and after the last are ignored. A line of
    spaces is a row of Empty cells.
    """
    lines = text.split("\n")
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return parse_lines(lines)


def format_cells(size: Size, cells: Sequence[Cell]) -> str:
    """Format cells in the pattern text format. Measured ordinals are dropped."""
    if len(cells) != size.product():
        raise ValueError(f"Expected {size.product()} cells, got {len(cells)}")
    lines = []
    for y in range(size.height):
        row = cells[y * size.width : (y + 1) * size.width]
        lines.append("".join(_cell_char(cell) for cell in row))
    return "\n".join(lines) + "\n"


def grid_from_lines(lines: Sequence[str]) -> Grid:
    """
    Build a grid whose solution is given by the Filled cells of lines.

    Example:
        grid_from_lines([
            "111 1",
            "11111",
            "1 111",
        ])
    """
    size, cells = parse_lines(lines)
    return Grid(size, cells)


def load_grid(path: str | Path) -> Grid:
    """Load a puzzle file. Its Filled cells become the solution of a fresh grid."""
    path = Path(path)
    size, cells = parse_pattern(path.read_text(encoding="utf-8"))
    logger.info("Loaded %dx%d grid from %s", size.width, size.height, path)
    return Grid(size, cells)


def save_grid(path: str | Path, grid: Grid) -> None:
    """Save the player's current marks, so a drawn picture can be loaded as a new puzzle."""
    path = Path(path)
    path.write_text(format_cells(grid.size, grid.cells), encoding="utf-8")
    logger.info("Saved %dx%d grid to %s", grid.size.width, grid.size.height, path)

"""
Nonogram grid: clue derivation, player marks with undo/redo, and solved-state evaluation.

The grid is built once from a hidden fill pattern. Its row and column clues are
derived from that pattern and frozen; the live cells start out empty and only
change through recorded operations, so any point in the history can be rebuilt
by replaying the log from a blank grid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import groupby
from typing import Iterable, Sequence

from grid_types import (
    Cell,
    Clues,
    Direction,
    Empty,
    Measured,
    Point,
    Size,
    is_filled,
)
from history import Clear, Fill, Measure, Operation, SetCell, UndoRedoBuffer

logger = logging.getLogger(__name__)


# =============================================================================
# Clue Derivation
# =============================================================================


def derive_clues(line: Iterable[bool]) -> Clues:
    """
    Run-length encode a line and keep the lengths of the filled runs.

    Args:
        line: For each cell along the row or column, whether it is filled

    Returns:
        The clue lengths in order of appearance; empty if nothing is filled
    """
    return tuple(sum(1 for _ in run) for filled, run in groupby(line) if filled)


def get_index(width: int, point: Point) -> int:
    """Row-major index of point in a grid of the given width."""
    return point.y * width + point.x


def horizontal_clues(cells: Sequence[Cell], width: int, y: int) -> Clues:
    """Clues of row y, read left to right."""
    return derive_clues(is_filled(cells[y * width + x]) for x in range(width))


def vertical_clues(cells: Sequence[Cell], width: int, height: int, x: int) -> Clues:
    """Clues of column x, read top to bottom."""
    return derive_clues(is_filled(cells[y * width + x]) for y in range(height))


# =============================================================================
# Grid
# =============================================================================


class Grid:
    """
    The puzzle grid and everything the player does to it.

    Attributes:
        size: Width and height in cells
        cells: The player's marks, row-major; all Empty after construction
        horizontal_clues_solutions: Row clues derived from the initial pattern
        vertical_clues_solutions: Column clues derived from the initial pattern
        max_clues_size: Space the clues need when drawn (two characters per row clue)
        cells_to_be_filled: Number of Filled cells in the initial pattern
        undo_redo_buffer: Operations applied to this grid
    """

    def __init__(self, size: Size, initial_pattern: Sequence[Cell]) -> None:
        if size.width < 1 or size.height < 1:
            raise ValueError(f"Grid size must be at least 1x1, got {size.width}x{size.height}")
        if len(initial_pattern) != size.product():
            raise ValueError(
                f"Pattern has {len(initial_pattern)} cells, "
                f"expected {size.product()} for a {size.width}x{size.height} grid"
            )

        pattern = list(initial_pattern)
        self.size = size
        self.horizontal_clues_solutions: tuple[Clues, ...] = tuple(
            horizontal_clues(pattern, size.width, y) for y in range(size.height)
        )
        self.vertical_clues_solutions: tuple[Clues, ...] = tuple(
            vertical_clues(pattern, size.width, size.height, x) for x in range(size.width)
        )
        self.max_clues_size = Size(
            max(len(clues) for clues in self.horizontal_clues_solutions) * 2,
            max(len(clues) for clues in self.vertical_clues_solutions),
        )
        self.cells_to_be_filled = sum(1 for cell in pattern if is_filled(cell))

        self.cells: list[Cell] = [Empty()] * size.product()
        self.undo_redo_buffer = UndoRedoBuffer()

    # -------------------------------------------------------------------------
    # Addressing
    # -------------------------------------------------------------------------

    def contains(self, point: Point) -> bool:
        """Whether point lies within the grid."""
        return 0 <= point.x < self.size.width and 0 <= point.y < self.size.height

    def _index(self, point: Point) -> int:
        index = get_index(self.size.width, point)
        if not self.contains(point):
            raise IndexError(f"cell access at {point} with index {index} is out of bounds")
        return index

    def get_cell(self, point: Point) -> Cell:
        return self.cells[self._index(point)]

    def put_cell(self, point: Point, cell: Cell) -> None:
        """
        Write a cell without recording it.

        Only tools and replay call this; anything else should go through
        set_cell so that undo/redo can reproduce the change.
        """
        self.cells[self._index(point)] = cell

    def get_horizontal_clues(self, y: int) -> Clues:
        """Clues of the player's marks in row y."""
        return horizontal_clues(self.cells, self.size.width, y)

    def get_vertical_clues(self, x: int) -> Clues:
        """Clues of the player's marks in column x."""
        return vertical_clues(self.cells, self.size.width, self.size.height, x)

    # -------------------------------------------------------------------------
    # Recorded mutations
    # -------------------------------------------------------------------------

    def set_cell(self, point: Point, cell: Cell) -> None:
        self.put_cell(point, cell)
        self.undo_redo_buffer.push(SetCell(point, cell))

    def fill(self, point: Point, fill_cell: Cell) -> bool:
        """
        Flood fill the region around point with fill_cell.

        Returns:
            False if the cell at point already equals fill_cell (nothing recorded)
        """
        first_cell = self.get_cell(point)
        if first_cell == fill_cell:
            return False
        count = flood_fill(self, point, first_cell, fill_cell)
        logger.debug("Filled %d cells from %s with %s", count, point, fill_cell)
        self.undo_redo_buffer.push(Fill(point, first_cell, fill_cell))
        return True

    def measure(self, points: Sequence[Point]) -> bool:
        """
        Mark a measurement trace, numbering cells in trace order.

        Returns:
            False for an empty trace (nothing recorded)
        """
        if not points:
            return False
        set_measured_cells(self, points)
        self.undo_redo_buffer.push(Measure(tuple(points)))
        return True

    def clear(self) -> None:
        self._reset()
        self.undo_redo_buffer.push(Clear())

    # -------------------------------------------------------------------------
    # Undo / Redo
    # -------------------------------------------------------------------------

    def undo(self) -> bool:
        """Step the history back by one operation. Returns False at the start of history."""
        if not self.undo_redo_buffer.can_undo():
            return False
        self.undo_redo_buffer.index -= 1
        self.rebuild()
        return True

    def redo(self) -> bool:
        """Reapply the last undone operation. Returns False when nothing was undone."""
        if not self.undo_redo_buffer.can_redo():
            return False
        self.undo_redo_buffer.index += 1
        self.rebuild()
        return True

    def rebuild(self) -> None:
        """Reset all cells and replay the applied part of the history."""
        self._reset()
        applied = self.undo_redo_buffer.applied()
        logger.debug("Rebuilding grid from %d operations", len(applied))
        for operation in applied:
            self._apply(operation)

    def _apply(self, operation: Operation) -> None:
        match operation:
            case SetCell(point=point, cell=cell):
                self.put_cell(point, cell)
            case Fill(point=point, first_cell=first_cell, fill_cell=fill_cell):
                flood_fill(self, point, first_cell, fill_cell)
            case Measure(points=points):
                set_measured_cells(self, points)
            case Clear():
                self._reset()
            case _:
                raise ValueError(f"Unknown operation: {operation}")

    def _reset(self) -> None:
        self.cells = [Empty()] * self.size.product()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def solved_state(self) -> SolvedState:
        return evaluate(self)


# =============================================================================
# Tools
# =============================================================================


def flood_fill(grid: Grid, start: Point, first_cell: Cell, fill_cell: Cell) -> int:
    """
    Replace the 4-connected region of first_cell around start with fill_cell.

    Diagonal neighbors are not connected. Runs against whatever the grid holds
    right now, which during replay is the state rebuilt by earlier operations.

    Returns:
        Number of cells changed
    """
    if first_cell == fill_cell:
        return 0

    changed = 0
    stack = [start]
    while stack:
        point = stack.pop()
        if not grid.contains(point) or grid.get_cell(point) != first_cell:
            continue
        grid.put_cell(point, fill_cell)
        changed += 1
        for direction in Direction:
            stack.append(point.step(direction))
    return changed


def set_measured_cells(grid: Grid, points: Sequence[Point]) -> None:
    """Mark each point as Measured, numbered by its position in the trace."""
    for point in points:
        # Validate the whole trace before writing any of it
        grid.get_cell(point)
    for ordinal, point in enumerate(points):
        grid.put_cell(point, Measured(ordinal))


# =============================================================================
# Solved State
# =============================================================================


@dataclass(frozen=True)
class SolvedState:
    """Result of comparing the player's marks against the solution clues."""

    solved_rows: tuple[bool, ...]
    solved_columns: tuple[bool, ...]
    solved_cell_count: int  # Filled cells on at least one solved line, each counted once
    cells_to_be_filled: int

    @property
    def is_solved(self) -> bool:
        return all(self.solved_rows) and all(self.solved_columns)

    @property
    def percentage(self) -> float:
        """Completion percentage, for display only."""
        if self.cells_to_be_filled == 0:
            return 100.0
        return min(100.0, self.solved_cell_count / self.cells_to_be_filled * 100)


def evaluate(grid: Grid) -> SolvedState:
    """
    Compare every row and column of the live grid against its solution clues.

    A line is solved when its live clues equal the solution exactly. The grid
    is solved when every line is.
    """
    width, height = grid.size.width, grid.size.height
    solved_rows = tuple(
        grid.get_horizontal_clues(y) == grid.horizontal_clues_solutions[y] for y in range(height)
    )
    solved_columns = tuple(
        grid.get_vertical_clues(x) == grid.vertical_clues_solutions[x] for x in range(width)
    )

    counted: set[Point] = set()
    for y in range(height):
        for x in range(width):
            if not (solved_rows[y] or solved_columns[x]):
                continue
            point = Point(x, y)
            if is_filled(grid.get_cell(point)):
                counted.add(point)

    return SolvedState(solved_rows, solved_columns, len(counted), grid.cells_to_be_filled)



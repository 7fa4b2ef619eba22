"""
Operation log for undo/redo.

The buffer only records what happened. Replaying it is the grid's job
(see Grid.rebuild in nonogram.py), so undo never needs inverse operations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from grid_types import Cell, Point

logger = logging.getLogger(__name__)


# =============================================================================
# Operations
# =============================================================================


@dataclass(frozen=True)
class SetCell:
    """A single cell set to a new value."""

    point: Point
    cell: Cell


@dataclass(frozen=True)
class Fill:
    """A flood fill from point, replacing the region of first_cell with fill_cell."""

    point: Point
    first_cell: Cell
    fill_cell: Cell


@dataclass(frozen=True)
class Measure:
    """One measurement trace, in the order the points were visited."""

    points: tuple[Point, ...]


@dataclass(frozen=True)
class Clear:
    """Every cell reset to Empty."""

    pass


Operation = SetCell | Fill | Measure | Clear


def describe(operation: Operation) -> str:
    """Human-readable description of an operation."""
    match operation:
        case SetCell(point=point, cell=cell):
            return f"Set {point} to {type(cell).__name__}"
        case Fill(point=point, first_cell=first_cell, fill_cell=fill_cell):
            return f"Fill {type(first_cell).__name__} at {point} with {type(fill_cell).__name__}"
        case Measure(points=points):
            return f"Measure {len(points)} cells"
        case Clear():
            return "Clear grid"
        case _:
            raise ValueError(f"Unknown operation: {operation}")


# =============================================================================
# Buffer
# =============================================================================


@dataclass
class UndoRedoBuffer:
    """
    Linear history with a play-head.

    buffer[:index] is the applied history, buffer[index:] is what redo can
    bring back. Pushing while behind the tail discards that undone tail.
    """

    buffer: list[Operation] = field(default_factory=list)
    index: int = 0

    def push(self, operation: Operation) -> None:
        if self.index != len(self.buffer):
            logger.debug("Discarding %d undone operations", len(self.buffer) - self.index)
            del self.buffer[self.index:]
        self.buffer.append(operation)
        self.index += 1

    def can_undo(self) -> bool:
        return self.index > 0

    def can_redo(self) -> bool:
        return self.index < len(self.buffer)

    def applied(self) -> list[Operation]:
        """Operations currently in effect, oldest first."""
        return self.buffer[: self.index]

    def undo_description(self) -> str | None:
        """Description of the operation undo would revert."""
        if not self.can_undo():
            return None
        return describe(self.buffer[self.index - 1])

    def redo_description(self) -> str | None:
        """Description of the operation redo would reapply."""
        if not self.can_redo():
            return None
        return describe(self.buffer[self.index])

    def info(self) -> dict[str, Any]:
        """Summary of the history state, for status lines."""
        return {
            "total_operations": len(self.buffer),
            "index": self.index,
            "can_undo": self.can_undo(),
            "can_redo": self.can_redo(),
            "undo_description": self.undo_description(),
            "redo_description": self.redo_description(),
        }

"""
Shared type definitions for the nonogram engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Direction(Enum):
    """Cardinal direction for neighbor lookups."""

    N = "N"  # Up (decreasing y)
    S = "S"  # Down (increasing y)
    E = "E"  # Right (increasing x)
    W = "W"  # Left (decreasing x)


# (dx, dy) per direction
DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.N: (0, -1),
    Direction.S: (0, 1),
    Direction.E: (1, 0),
    Direction.W: (-1, 0),
}


# =============================================================================
# Geometry
# =============================================================================


@dataclass(frozen=True)
class Point:
    """A cell position. x is the column, y is the row."""

    x: int
    y: int

    def step(self, direction: Direction) -> Point:
        dx, dy = DELTAS[direction]
        return Point(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Size:
    """Grid dimensions."""

    width: int
    height: int

    def product(self) -> int:
        return self.width * self.height


# =============================================================================
# Cell Types
# =============================================================================


@dataclass(frozen=True)
class Empty:
    """An unmarked cell."""

    pass


@dataclass(frozen=True)
class Filled:
    """A cell marked as part of the picture."""

    pass


@dataclass(frozen=True)
class Maybed:
    """A cell that may be filled. Used for "what if" reasoning."""

    pass


@dataclass(frozen=True)
class Crossed:
    """A cell marked as certainly empty."""

    pass


@dataclass(frozen=True)
class Measured:
    """A cell touched by the measurement tool.

    The ordinal only labels the trace order on screen. It takes no part in
    equality or hashing, and it is dropped when a grid is saved.
    """

    ordinal: int | None = field(default=None, compare=False)


Cell = Empty | Filled | Maybed | Crossed | Measured


# A single clue: the length of one run of filled cells
Clue = int
# All clues of one row or column, in order of appearance
Clues = tuple[Clue, ...]


def is_filled(cell: Cell) -> bool:
    """Only Filled cells count towards clues."""
    return isinstance(cell, Filled)

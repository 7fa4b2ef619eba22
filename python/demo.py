"""
Demonstration script for the nonogram engine.
"""

from ascii_render import RenderStyle, render_grid, render_status
from grid_parser import format_cells, grid_from_lines
from grid_types import Crossed, Filled, Point
from nonogram import Grid


def show(title: str, grid: Grid) -> None:
    print("=" * 40)
    print(title)
    print("=" * 40)
    print(render_grid(grid, style=RenderStyle(color=False)))
    print(render_status(grid.solved_state()))
    print()


def demo() -> None:
    """Walk through marking, filling, measuring and undo/redo on a small grid."""
    grid = grid_from_lines([
        "1 1 111 1 ",
        " 1 11 111 ",
        "1111 11  1",
        "1 11 1  11",
        "1  111  11",
    ])
    show("Fresh 10x5 grid:", grid)

    for x in (0, 2, 4, 5, 6, 8):
        grid.set_cell(Point(x, 0), Filled())
    show("First row marked:", grid)

    grid.fill(Point(1, 0), Crossed())
    show("Flood fill with crosses from (1, 0):", grid)

    grid.measure([Point(x, 4) for x in range(6)])
    show("Measured along the bottom row:", grid)

    grid.undo()
    grid.undo()
    show("After two undos:", grid)

    grid.redo()
    show("After one redo:", grid)

    print("History:", grid.undo_redo_buffer.info())
    print()
    print("Saved form:")
    print(format_cells(grid.size, grid.cells))


if __name__ == "__main__":
    demo()

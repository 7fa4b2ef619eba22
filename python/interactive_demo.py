"""
Interactive nonogram session.
Display a grid with its clues and mark cells with keyboard commands.
"""

import logging
import sys
from pathlib import Path

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_grid, render_status
from grid_parser import grid_from_lines, load_grid, save_grid
from grid_types import Cell, Crossed, Direction, Empty, Filled, Maybed, Point
from nonogram import Grid

MOVE_KEYS = {
    "w": Direction.N,
    "s": Direction.S,
    "a": Direction.W,
    "d": Direction.E,
    readchar.key.UP: Direction.N,
    readchar.key.DOWN: Direction.S,
    readchar.key.LEFT: Direction.W,
    readchar.key.RIGHT: Direction.E,
}

MARK_KEYS: dict[str, Cell] = {
    " ": Filled(),
    "x": Crossed(),
    "e": Maybed(),
}

FILL_KEYS: dict[str, Cell] = {
    "f": Filled(),
    "g": Crossed(),
    "h": Empty(),
}


class InteractiveDemo:
    """Keyboard-driven nonogram session."""

    def __init__(self, grid: Grid, save_path: Path | None = None) -> None:
        self.grid = grid
        self.save_path = save_path
        self.cursor = Point(0, 0)
        self.trace: list[Point] | None = None  # Measurement in progress
        self.console = Console()
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        state = self.grid.solved_state()
        grid_text = render_grid(self.grid, cursor=self.cursor, state=state)

        status = Text()
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Progress: ", style="bold")
        status.append(render_status(state) + "\n")
        status.append("Cursor: ", style="bold")
        status.append(f"{self.cursor}\n")
        if self.trace is not None:
            status.append("Measuring: ", style="bold yellow")
            status.append(f"{len(self.trace)} cells\n")
        status.append("\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  WASD/arrows - Move\n")
        status.append("  Space/X/E - Toggle filled/crossed/maybed\n")
        status.append("  F/G/H - Flood fill with filled/crossed/empty\n")
        status.append("  M - Start/finish measuring\n")
        status.append("  U/R - Undo/Redo\n")
        status.append("  C - Clear grid\n")
        status.append("  P - Save\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        border_style = "green" if state.is_solved else "blue"
        return Panel(status, title="Nonogram", border_style=border_style)

    def move(self, direction: Direction) -> None:
        target = self.cursor.step(direction)
        if not self.grid.contains(target):
            self.status_message = f"Edge reached moving {direction.value}"
            return
        self.cursor = target
        if self.trace is not None and target not in self.trace:
            self.trace.append(target)

    def toggle(self, cell: Cell) -> None:
        """Set the cursor cell, or clear it if it already holds that mark."""
        current = self.grid.get_cell(self.cursor)
        new_cell = Empty() if current == cell else cell
        self.grid.set_cell(self.cursor, new_cell)
        self.status_message = f"Set {self.cursor} to {type(new_cell).__name__}"

    def flood_fill(self, cell: Cell) -> None:
        if self.grid.fill(self.cursor, cell):
            self.status_message = f"Filled from {self.cursor} with {type(cell).__name__}"
        else:
            self.status_message = f"Nothing to fill: {self.cursor} is already {type(cell).__name__}"

    def toggle_measure(self) -> None:
        """Start a measurement trace at the cursor, or record the one in progress."""
        if self.trace is None:
            self.trace = [self.cursor]
            self.status_message = "Measuring: move to extend, M to finish"
            return
        trace, self.trace = self.trace, None
        self.grid.measure(trace)
        self.status_message = f"Measured {len(trace)} cells"

    def undo(self) -> None:
        description = self.grid.undo_redo_buffer.undo_description()
        if self.grid.undo():
            self.status_message = f"Undid: {description}"
        else:
            self.status_message = "Nothing to undo"

    def redo(self) -> None:
        description = self.grid.undo_redo_buffer.redo_description()
        if self.grid.redo():
            self.status_message = f"Redid: {description}"
        else:
            self.status_message = "Nothing to redo"

    def save(self) -> None:
        if self.save_path is None:
            self.status_message = "No save path given"
            return
        save_grid(self.save_path, self.grid)
        self.status_message = f"Saved to {self.save_path}"

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the session should end."""
        if key in MOVE_KEYS:
            self.move(MOVE_KEYS[key])
            return True

        key = key.lower()
        if key == "q":
            self.status_message = "Quitting..."
            return False
        elif key in MARK_KEYS:
            self.toggle(MARK_KEYS[key])
        elif key in FILL_KEYS:
            self.flood_fill(FILL_KEYS[key])
        elif key == "m":
            self.toggle_measure()
        elif key == "u":
            self.undo()
        elif key == "r":
            self.redo()
        elif key == "c":
            self.grid.clear()
            self.trace = None
            self.status_message = "Grid cleared"
        elif key == "p":
            self.save()
        else:
            self.status_message = f"Unknown key: {repr(key)}"
        return True

    def run(self) -> None:
        """Run the session until the player quits."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    if not self.handle_key(readchar.readkey()):
                        live.update(self.generate_display())
                        break
            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


LAYOUTS = dict(
    heart=[
        " 11 11 ",
        "1111111",
        "1111111",
        " 11111 ",
        "  111  ",
        "   1   ",
    ],
    arrow=[
        "    1     ",
        "    11    ",
        "1111111   ",
        "11111111  ",
        "1111111   ",
        "    11    ",
        "    1     ",
    ],
    blank=["     "] * 5,
)


def load_layout(name: str) -> Grid:
    """A built-in layout by name, or a puzzle file by path."""
    if name in LAYOUTS:
        return grid_from_lines(LAYOUTS[name])
    return load_grid(name)


def main(grid: Grid, save_path: Path | None = None) -> None:
    """Run an interactive session on grid."""
    demo = InteractiveDemo(grid, save_path=save_path)
    demo.run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == 'sublime':
        # Running from IDE - just render the initial state
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

        print('Running from IDE - rendering initial state')
        print()

        grid = load_layout('heart')
        print(render_grid(grid))
        print(render_status(grid.solved_state()))
    else:
        grid = load_layout(sys.argv[1] if len(sys.argv) > 1 else 'heart')
        save_path = Path(sys.argv[2]) if len(sys.argv) > 2 else None
        main(grid, save_path)

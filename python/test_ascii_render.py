"""Tests for ascii_render module."""

from ascii_render import RenderStyle, render_cell, render_grid, render_status
from grid_parser import grid_from_lines
from grid_types import Crossed, Empty, Filled, Maybed, Measured, Point

PLAIN = RenderStyle(color=False)


class TestRenderCell:
    """Tests for single cell rendering."""

    def test_plain_glyphs(self) -> None:
        """Each cell kind has its own two-character glyph."""
        origin = Point(0, 0)
        assert render_cell(Empty(), origin, PLAIN) == "  "
        assert render_cell(Filled(), origin, PLAIN) == "##"
        assert render_cell(Crossed(), origin, PLAIN) == "xx"
        assert render_cell(Maybed(), origin, PLAIN) == "??"
        assert render_cell(Measured(), origin, PLAIN) == "mm"

    def test_measured_shows_ordinal(self) -> None:
        """Measured cells show their trace ordinal."""
        assert render_cell(Measured(3), Point(0, 0), PLAIN) == " 3"
        assert render_cell(Measured(42), Point(0, 0), PLAIN) == "42"

    def test_empty_checker(self) -> None:
        """Empty cells alternate pattern every five cells."""
        assert render_cell(Empty(), Point(4, 0), PLAIN) == "  "
        assert render_cell(Empty(), Point(5, 0), PLAIN) == ". "
        assert render_cell(Empty(), Point(0, 5), PLAIN) == ". "
        assert render_cell(Empty(), Point(5, 5), PLAIN) == "  "

    def test_highlight(self) -> None:
        """The highlighted cell is drawn with the cursor glyph."""
        assert render_cell(Filled(), Point(0, 0), PLAIN, highlighted=True) == "<>"

    def test_colored_cell(self) -> None:
        """Colored rendering keeps the glyph."""
        assert "##" in render_cell(Filled(), Point(0, 0), RenderStyle())


class TestRenderGrid:
    """Tests for whole grid rendering."""

    def test_layout(self) -> None:
        """Column clues on top, row clues on the left, cells two characters wide."""
        grid = grid_from_lines(["1 1", " 11"])

        result = render_grid(grid, style=PLAIN)

        assert result == "\n".join([
            "    1 1 2 ",
            " 1 1      ",
            "   2      ",
        ])

    def test_marks_and_cursor(self) -> None:
        """Marks and the cursor show up in place."""
        grid = grid_from_lines(["1 1", " 11"])
        grid.set_cell(Point(0, 0), Filled())
        grid.measure([Point(0, 1), Point(1, 1)])

        result = render_grid(grid, cursor=Point(2, 1), style=PLAIN)

        lines = result.split("\n")
        assert lines[1] == " 1 1##    "
        assert lines[2] == "   2 0 1<>"

    def test_bottom_aligned_column_clues(self) -> None:
        """Shorter column clue lists sit at the bottom of the clue area."""
        grid = grid_from_lines(["1 ", "  ", "11"])

        lines = render_grid(grid, style=PLAIN).split("\n")

        # column 0 has clues (1, 1), column 1 has (1,)
        assert lines[0] == "  1   "
        assert lines[1] == "  1 1 "

    def test_no_clues(self) -> None:
        """A blank grid renders only its cells."""
        grid = grid_from_lines(["      "])
        assert render_grid(grid, style=PLAIN) == "          . "

    def test_colored_render(self) -> None:
        """Colored rendering still contains every clue."""
        grid = grid_from_lines(["1 1 111 1 "])
        result = render_grid(grid)

        assert isinstance(result, str)
        assert "3" in result


class TestRenderStatus:
    """Tests for the status line."""

    def test_unsolved(self) -> None:
        """Unsolved grids report progress."""
        grid = grid_from_lines(["11", "1 "])
        assert render_status(grid.solved_state()) == "0% solved (0/3 cells)"

    def test_solved(self) -> None:
        """Solved grids say so."""
        grid = grid_from_lines(["  "])
        assert render_status(grid.solved_state()) == "Solved!"

"""Tests for grid_parser module."""

import pytest

from grid_parser import format_cells, grid_from_lines, load_grid, parse_lines, parse_pattern, save_grid
from grid_types import Crossed, Empty, Filled, Maybed, Measured, Point, Size


class TestParsePattern:
    """Tests for the pattern text parser."""

    def test_simple_pattern(self) -> None:
        """Parse filled and empty cells."""
        size, cells = parse_pattern("1 1\n 1 \n")

        assert size == Size(3, 2)
        assert cells == [Filled(), Empty(), Filled(), Empty(), Filled(), Empty()]

    def test_all_cell_kinds(self) -> None:
        """Every cell character maps to its cell type."""
        size, cells = parse_lines(["1#_.", "x?m "])

        assert size == Size(4, 2)
        assert cells == [
            Filled(), Filled(), Empty(), Empty(),
            Crossed(), Maybed(), Measured(), Empty(),
        ]

    def test_short_rows_padded(self) -> None:
        """Rows shorter than the longest are padded with Empty cells."""
        size, cells = parse_lines(["111", "1", ""])

        assert size == Size(3, 3)
        assert cells[3:] == [Filled(), Empty(), Empty(), Empty(), Empty(), Empty()]

    def test_surrounding_empty_lines_ignored(self) -> None:
        """Empty lines before and after the rows are not part of the grid."""
        size, _ = parse_pattern("\n\n11\n11\n\n")
        assert size == Size(2, 2)

    def test_row_of_spaces_kept(self) -> None:
        """A line of spaces is a row of Empty cells."""
        size, cells = parse_pattern("   \n 1 \n")
        assert size == Size(3, 2)
        assert cells[:3] == [Empty()] * 3

    def test_error_invalid_character(self) -> None:
        """Error on a character that is not a cell."""
        with pytest.raises(ValueError, match="Invalid character '@'"):
            parse_lines(["1 1", "1@1"])

    def test_error_reports_position(self) -> None:
        """The error names the row and column of the bad character."""
        with pytest.raises(ValueError, match="Row 1, column 1"):
            parse_lines(["1 1", "1@1"])

    def test_error_no_cells(self) -> None:
        """Error when there is nothing to parse."""
        with pytest.raises(ValueError, match="no cells"):
            parse_pattern("\n\n")


class TestFormatCells:
    """Tests for writing cells back to text."""

    def test_format(self) -> None:
        """Each cell becomes one character, one line per row."""
        cells = [Filled(), Empty(), Crossed(), Maybed(), Measured(4), Filled()]
        assert format_cells(Size(3, 2), cells) == "1.x\n?m1\n"

    def test_measured_ordinal_dropped(self) -> None:
        """Measured cells are saved without their ordinal."""
        _, cells = parse_pattern(format_cells(Size(2, 1), [Measured(0), Measured(1)]))
        assert [cell.ordinal for cell in cells] == [None, None]

    def test_length_mismatch(self) -> None:
        """Formatting the wrong number of cells is an error."""
        with pytest.raises(ValueError, match="Expected 4 cells"):
            format_cells(Size(2, 2), [Empty()] * 3)


class TestGridFiles:
    """Tests for building, loading and saving grids."""

    def test_grid_from_lines(self) -> None:
        """Filled cells become the solution."""
        grid = grid_from_lines(["11 1", " 1  "])

        assert grid.size == Size(4, 2)
        assert grid.horizontal_clues_solutions == ((2, 1), (1,))
        assert grid.vertical_clues_solutions == ((1,), (2,), (), (1,))

    def test_load_grid(self, tmp_path) -> None:
        """A puzzle file loads into a fresh grid."""
        path = tmp_path / "puzzle.txt"
        path.write_text("1 1\n111\n", encoding="utf-8")

        grid = load_grid(path)

        assert grid.horizontal_clues_solutions == ((1, 1), (3,))
        assert grid.cells == [Empty()] * 6
        assert grid.cells_to_be_filled == 5

    def test_save_then_load_as_puzzle(self, tmp_path) -> None:
        """A saved drawing loads as a puzzle whose solution is the drawing."""
        grid = grid_from_lines(["   ", "   "])
        grid.set_cell(Point(0, 0), Filled())
        grid.set_cell(Point(1, 0), Filled())
        grid.set_cell(Point(2, 1), Crossed())
        grid.measure([Point(0, 1)])
        path = tmp_path / "drawing.txt"

        save_grid(path, grid)

        assert path.read_text(encoding="utf-8") == "11.\nm.x\n"
        loaded = load_grid(str(path))
        assert loaded.horizontal_clues_solutions == ((2,), ())
        assert loaded.vertical_clues_solutions == ((1,), (1,), ())

    def test_load_missing_file(self, tmp_path) -> None:
        """Loading a file that does not exist raises."""
        with pytest.raises(FileNotFoundError):
            load_grid(tmp_path / "missing.txt")

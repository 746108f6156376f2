"""Tests for grid_parser module."""

import pytest

from beam_types import Grid, InconsistentRowLength, InvalidTileCharacter, Tile
from grid_parser import parse_grid, parse_tile


class TestParseTile:
    """Tests for single-character tile parsing."""

    @pytest.mark.parametrize(
        "char,expected",
        [
            (".", Tile.EMPTY),
            ("/", Tile.MIRROR_FORWARD),
            ("\\", Tile.MIRROR_BACKWARD),
            ("|", Tile.SPLITTER_VERTICAL),
            ("-", Tile.SPLITTER_HORIZONTAL),
        ],
    )
    def test_valid_characters(self, char: str, expected: Tile) -> None:
        """Each of the five symbols maps to its tile kind."""
        assert parse_tile(char) is expected

    @pytest.mark.parametrize("char", ["x", "#", " ", "", "..", "\\\\"])
    def test_invalid_character_raises(self, char: str) -> None:
        """Anything else is rejected."""
        with pytest.raises(InvalidTileCharacter) as exc_info:
            parse_tile(char)
        assert exc_info.value.char == char

    def test_invalid_character_is_value_error(self) -> None:
        """Callers catching ValueError also catch bad tiles."""
        with pytest.raises(ValueError):
            parse_tile("?")


class TestParseGrid:
    """Tests for whole-grid parsing."""

    def test_simple_grid(self) -> None:
        """Parse a small grid and check dimensions and tiles."""
        grid = parse_grid(".|.\n\\-/")

        assert grid.width == 3
        assert grid.height == 2
        assert grid.rows() == [
            (Tile.EMPTY, Tile.SPLITTER_VERTICAL, Tile.EMPTY),
            (Tile.MIRROR_BACKWARD, Tile.SPLITTER_HORIZONTAL, Tile.MIRROR_FORWARD),
        ]

    def test_tiles_are_row_major(self) -> None:
        """The flat tile sequence runs along rows first."""
        grid = parse_grid("./\n|-")
        assert grid.tiles == (
            Tile.EMPTY,
            Tile.MIRROR_FORWARD,
            Tile.SPLITTER_VERTICAL,
            Tile.SPLITTER_HORIZONTAL,
        )

    def test_surrounding_blank_lines_ignored(self) -> None:
        """Blank lines around the block and trailing newlines do not add rows."""
        grid = parse_grid("\n\n..\n..\n\n")
        assert grid.width == 2
        assert grid.height == 2

    def test_windows_line_endings(self) -> None:
        """CRLF input parses like LF input."""
        assert parse_grid("./\r\n-|\r\n") == parse_grid("./\n-|\n")

    def test_single_row(self) -> None:
        """A grid may be a single row."""
        grid = parse_grid("..|..")
        assert (grid.width, grid.height) == (5, 1)

    def test_single_column(self) -> None:
        """A grid may be a single column."""
        grid = parse_grid(".\n-\n.")
        assert (grid.width, grid.height) == (1, 3)
        assert grid.get(1, 0) is Tile.SPLITTER_HORIZONTAL

    def test_invalid_character_reports_position(self) -> None:
        """The error names the row and column of the bad character."""
        with pytest.raises(InvalidTileCharacter) as exc_info:
            parse_grid("...\n.x.")

        error = exc_info.value
        assert error.char == "x"
        assert error.row == 1
        assert error.col == 1
        assert "Row 1, column 1" in str(error)
        assert "Valid characters" in str(error)

    def test_inconsistent_row_length_raises_error(self) -> None:
        """Non-rectangular input is rejected."""
        with pytest.raises(InconsistentRowLength):
            parse_grid("...\n..\n...")

    def test_inconsistent_row_length_error_details(self) -> None:
        """The error lists each mismatched row."""
        with pytest.raises(InconsistentRowLength) as exc_info:
            parse_grid("...\n..\n....")

        message = str(exc_info.value)
        assert "Expected: 3 tiles" in message
        assert "Row 1: 2 tiles" in message
        assert "Row 2: 4 tiles" in message

    def test_empty_input_raises_error(self) -> None:
        """Input with no rows cannot form a grid."""
        with pytest.raises(ValueError, match="no rows"):
            parse_grid("\n\n")


class TestGrid:
    """Tests for the Grid container."""

    def test_get_in_bounds(self) -> None:
        """Lookup returns the tile at (row, col)."""
        grid = parse_grid("./\n|-")
        assert grid.get(0, 1) is Tile.MIRROR_FORWARD
        assert grid.get(1, 0) is Tile.SPLITTER_VERTICAL

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (2, 0), (0, 3), (5, 5)])
    def test_get_out_of_bounds(self, row: int, col: int) -> None:
        """Lookup outside the grid returns None."""
        grid = parse_grid("...\n...")
        assert grid.get(row, col) is None

    def test_from_rows(self) -> None:
        """Grids can be built from nested rows."""
        grid = Grid.from_rows([[Tile.EMPTY, Tile.MIRROR_FORWARD], [Tile.EMPTY, Tile.EMPTY]])
        assert grid == parse_grid("./\n..")

    def test_from_rows_rejects_ragged_rows(self) -> None:
        """Nested rows must agree on length."""
        with pytest.raises(InconsistentRowLength):
            Grid.from_rows([[Tile.EMPTY], [Tile.EMPTY, Tile.EMPTY]])

    def test_tile_count_must_match_dimensions(self) -> None:
        """A grid cannot be built with the wrong number of tiles."""
        with pytest.raises(ValueError):
            Grid(2, 2, (Tile.EMPTY,) * 3)

    def test_dimensions_must_be_positive(self) -> None:
        """Zero-sized grids are rejected."""
        with pytest.raises(ValueError):
            Grid(0, 0, ())

    def test_grid_is_immutable(self) -> None:
        """Grids are frozen once built."""
        grid = parse_grid("..")
        with pytest.raises(AttributeError):
            grid.width = 5  # type: ignore[misc]

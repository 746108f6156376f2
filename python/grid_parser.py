"""
Grid parsing utilities for beamgrid.

Input is a block of text with one character per tile and one line per row:
    .   empty space
    /   forward mirror
    \\   backward mirror
    |   vertical splitter
    -   horizontal splitter
"""

from __future__ import annotations

from beam_types import Grid, InconsistentRowLength, InvalidTileCharacter, Tile

__all__ = ["parse_tile", "parse_grid"]


def parse_tile(char: str) -> Tile:
    """Map a single input character to its tile kind."""
    try:
        return Tile(char)
    except ValueError:
        raise InvalidTileCharacter(char) from None


def parse_grid(text: str) -> Grid:
    """
    Parse a grid from its text form.

    Leading and trailing blank lines are ignored, as is trailing whitespace on
    each line. The first row's length becomes the grid width.

    Example:
        \"\"\"
        .|.
        \\-/
        \"\"\"
        Creates a 3x2 grid:
        [[EMPTY, SPLITTER_VERTICAL, EMPTY],
         [MIRROR_BACKWARD, SPLITTER_HORIZONTAL, MIRROR_FORWARD]]

    Args:
        text: Grid text, rows separated by newlines

    Returns:
        The parsed Grid

    Raises:
        InvalidTileCharacter: If a character is not one of the five tile symbols
        InconsistentRowLength: If rows differ in length
        ValueError: If the text contains no rows
    """
    row_strings = [line.rstrip() for line in text.strip("\n").splitlines()]
    # Drop blank lines around the block (e.g. from triple-quoted literals)
    while row_strings and not row_strings[0]:
        row_strings.pop(0)
    while row_strings and not row_strings[-1]:
        row_strings.pop()

    if not row_strings:
        raise ValueError("Cannot parse grid: input contains no rows")

    rows: list[tuple[Tile, ...]] = []
    for row_idx, row_str in enumerate(row_strings):
        cells: list[Tile] = []
        for col_idx, char in enumerate(row_str):
            try:
                cells.append(parse_tile(char))
            except InvalidTileCharacter:
                raise InvalidTileCharacter(char, row_idx, col_idx) from None
        rows.append(tuple(cells))

    # Validate all rows have same length
    width = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != width]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in grid\n"
            f"  Expected: {width} tiles (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual in mismatched:
            error_msg += f"    Row {row_idx}: {actual} tiles - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of tiles"
        raise InconsistentRowLength(error_msg)

    return Grid(width, len(rows), tuple(tile for row in rows for tile in row))

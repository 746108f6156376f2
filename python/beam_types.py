"""
Shared type definitions for the beamgrid system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class Direction(Enum):
    """Cardinal direction of beam travel."""

    UP = "U"  # decreasing row
    DOWN = "D"  # increasing row
    LEFT = "L"  # decreasing col
    RIGHT = "R"  # increasing col

    @property
    def delta(self) -> tuple[int, int]:
        """(row_delta, col_delta) for one step in this direction."""
        return _DELTAS[self]

    @property
    def arrow(self) -> str:
        return _ARROWS[self]


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_ARROWS = {
    Direction.UP: "^",
    Direction.DOWN: "v",
    Direction.LEFT: "<",
    Direction.RIGHT: ">",
}


class Tile(Enum):
    """Contents of a single grid cell. The value is the input character."""

    EMPTY = "."
    MIRROR_FORWARD = "/"
    MIRROR_BACKWARD = "\\"
    SPLITTER_VERTICAL = "|"
    SPLITTER_HORIZONTAL = "-"


# =============================================================================
# Errors
# =============================================================================


class InvalidTileCharacter(ValueError):
    """Raised when input text contains a character that is not a tile."""

    def __init__(self, char: str, row: int | None = None, col: int | None = None) -> None:
        self.char = char
        self.row = row
        self.col = col
        message = f"Invalid tile character: {char!r}\n"
        if row is not None and col is not None:
            message += f"  Row {row}, column {col}\n"
        message += "  Valid characters: " + " ".join(repr(t.value) for t in Tile)
        super().__init__(message)


class InconsistentRowLength(ValueError):
    """Raised when grid rows do not all have the same number of tiles."""


class InternalBoundsInvariantViolation(RuntimeError):
    """A bounds check and a tile lookup disagreed. Indicates a logic defect."""


# =============================================================================
# Beams and Grids
# =============================================================================


@dataclass(frozen=True)
class Beam:
    """A beam head: a position plus a direction of travel."""

    row: int
    col: int
    direction: Direction

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)

    def advance(self, direction: Direction) -> Beam:
        """Return the beam one step ahead, travelling in ``direction``."""
        dr, dc = direction.delta
        return Beam(self.row + dr, self.col + dc, direction)


@dataclass(frozen=True)
class Grid:
    """A rectangular, row-major grid of tiles."""

    width: int
    height: int
    tiles: tuple[Tile, ...]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if len(self.tiles) != self.width * self.height:
            raise ValueError(
                f"Grid of {self.width}x{self.height} needs {self.width * self.height} tiles, "
                f"got {len(self.tiles)}"
            )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Tile]]) -> Grid:
        """Build a grid from nested rows of tiles."""
        if not rows:
            raise ValueError("Grid must have at least one row")
        width = len(rows[0])
        mismatched = [i for i, row in enumerate(rows) if len(row) != width]
        if mismatched:
            raise InconsistentRowLength(
                f"Inconsistent row lengths: expected {width} tiles, rows {mismatched} differ"
            )
        return cls(width, len(rows), tuple(tile for row in rows for tile in row))

    def rows(self) -> list[tuple[Tile, ...]]:
        return [
            self.tiles[r * self.width : (r + 1) * self.width] for r in range(self.height)
        ]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, row: int, col: int) -> Tile | None:
        """Return the tile at (row, col), or None outside the grid."""
        if not self.in_bounds(row, col):
            return None
        return self.tiles[row * self.width + col]

"""
ASCII rendering for beamgrid traces.

Provides three views of a grid:
1. Energized map - '#' for every cell a beam touched, '.' elsewhere
2. Path map - tiles, with beam arrows drawn over empty cells
3. Boxed colour view - the path map with ANSI colouring for terminals
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from beam_types import Beam, Direction, Grid, Tile
from beamgrid import BeamTrace

logger = logging.getLogger(__name__)


def render_energized(grid: Grid, trace: BeamTrace) -> str:
    """Render energized cells as '#' and all others as '.'."""
    energized = trace.energized
    return "\n".join(
        "".join("#" if (r, c) in energized else "." for c in range(grid.width))
        for r in range(grid.height)
    )


def path_char(tile: Tile, directions: frozenset[Direction]) -> str:
    """
    Character shown for one cell of the path map.

    Non-empty tiles always show their own symbol. Empty tiles show the arrow
    of the one beam that crossed them, or the number of directions when
    beams crossed in several.
    """
    if tile is not Tile.EMPTY or not directions:
        return tile.value
    if len(directions) == 1:
        (direction,) = directions
        return direction.arrow
    return str(len(directions))


def render_paths(grid: Grid, trace: BeamTrace) -> str:
    """Render the grid with beam paths drawn over empty tiles."""
    lines = []
    for r, row in enumerate(grid.rows()):
        lines.append(
            "".join(path_char(tile, trace.visited.get((r, c), frozenset())) for c, tile in enumerate(row))
        )
    return "\n".join(lines)


def render_grid(
    grid: Grid,
    trace: BeamTrace | None = None,
    highlight: Beam | None = None,
    title: str = "beams",
    cell_width: int = 1,
) -> str:
    """
    Render a grid as a bordered box with colours.

    Args:
        grid: The grid to render
        trace: Optional trace; energized cells are coloured and paths drawn
        highlight: Optional beam whose cell is highlighted (e.g. the entry)
        title: Title centered in the top border when it fits
        cell_width: Characters per cell (default 1)

    Returns:
        Rendered string with ANSI color codes
    """
    border: Callable[[str], str] = chalk.blue
    lit: Callable[[str], str] = chalk.yellowBright
    splitter: Callable[[str], str] = chalk.cyan
    mirror: Callable[[str], str] = chalk.magenta

    grid_width = grid.width * cell_width + 2
    label = f" {title} "

    lines: list[str] = []

    # Top border with title
    title_line = "┌" + "─" * (grid_width - 2) + "┐"
    if len(label) <= grid_width - 2:
        title_start = (grid_width - len(label)) // 2
        title_line = (
            "┌" +
            "─" * (title_start - 1) +
            label +
            "─" * (grid_width - title_start - len(label) - 1) +
            "┐"
        )
    lines.append(border(title_line))

    for r_idx, row in enumerate(grid.rows()):
        line_parts = [border("│")]

        for c_idx, tile in enumerate(row):
            directions = frozenset()
            if trace is not None:
                directions = trace.visited.get((r_idx, c_idx), frozenset())
            char = path_char(tile, directions)
            content = char if cell_width == 1 else char.center(cell_width)

            if highlight is not None and highlight.position == (r_idx, c_idx):
                content = chalk.bgWhite.black(content)
            elif directions:
                content = lit(content)
            elif tile in (Tile.SPLITTER_VERTICAL, Tile.SPLITTER_HORIZONTAL):
                content = splitter(content)
            elif tile in (Tile.MIRROR_FORWARD, Tile.MIRROR_BACKWARD):
                content = mirror(content)

            line_parts.append(content)

        line_parts.append(border("│"))
        lines.append("".join(line_parts))

    # Bottom border
    lines.append(border("└" + "─" * (grid_width - 2) + "┘"))

    logger.debug("render_grid: %dx%d grid, cell_width=%d", grid.width, grid.height, cell_width)
    return "\n".join(lines)

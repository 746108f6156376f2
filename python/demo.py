#!/usr/bin/env python3
"""
Command-line demo: energize a grid from its top-left corner, then find the
best boundary entry.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ascii_render import render_energized, render_paths
from beam_types import Beam, Direction, Grid
from beamgrid import Executor, SweepSettings, best_entry_result, trace
from grid_parser import parse_grid

SAMPLE_GRID = r"""
.|...\....
|.-.\.....
.....|-...
........|.
..........
.........\
..../.\\..
.-.-/..|..
.|....-|.\
..//.|....
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trace beams through a grid of mirrors and splitters.")
    parser.add_argument("path", nargs="?", type=Path, help="Grid file (default: built-in sample)")
    parser.add_argument("--render", action="store_true", help="Print energized and path maps")
    parser.add_argument(
        "--executor",
        choices=[e.value for e in Executor],
        default=Executor.PROCESS.value,
        help="How to run the boundary sweep",
    )
    parser.add_argument("--workers", type=int, default=None, help="Worker count for the sweep")
    parser.add_argument("--verbose", action="store_true", help="Enable INFO logging")
    return parser


def load_grid(path: Path | None) -> Grid:
    if path is None:
        return parse_grid(SAMPLE_GRID)
    return parse_grid(path.read_text())


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        grid = load_grid(args.path)
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    settings = SweepSettings(executor=Executor(args.executor), max_workers=args.workers)

    corner = trace(grid, Beam(0, 0, Direction.RIGHT))
    print(f"Grid: {grid.width}x{grid.height}")
    print(f"Energized from (0, 0) heading RIGHT: {corner.energized_count}")
    if args.render:
        print()
        print(render_paths(grid, corner))
        print()
        print(render_energized(grid, corner))
        print()

    best = best_entry_result(grid, settings)
    print(
        f"Best entry: ({best.entry.row}, {best.entry.col}) heading "
        f"{best.entry.direction.name} energizes {best.energized}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

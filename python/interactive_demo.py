"""
Interactive explorer for beamgrid boundary entries.
Display the beams from one entry at a time and step around the boundary with
keyboard commands.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_grid
from beam_types import Beam, Grid
from beamgrid import (
    BeamTermination,
    EntryResult,
    Executor,
    SweepSettings,
    best_entry_result,
    boundary_entries,
    trace,
)
from demo import SAMPLE_GRID
from grid_parser import parse_grid


class EntryExplorer:
    """Interactive walk over the boundary entries of a grid."""

    def __init__(self, grid: Grid, settings: SweepSettings | None = None) -> None:
        self.grid = grid
        self.settings = settings or SweepSettings(executor=Executor.THREAD)
        self.entries = boundary_entries(grid)
        self.index = 0
        self.best: EntryResult | None = None
        self.console = Console()
        self.status_message = "Ready"

    @property
    def current_entry(self) -> Beam:
        return self.entries[self.index]

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        entry = self.current_entry
        result = trace(self.grid, entry)
        grid_text = render_grid(self.grid, result, highlight=entry, title=f"{self.grid.width}x{self.grid.height}")

        status = Text()
        status.append("Entry: ", style="bold")
        status.append(
            f"({entry.row}, {entry.col}) heading {entry.direction.name}"
            f"  [{self.index + 1}/{len(self.entries)}]\n"
        )
        status.append("Energized: ", style="bold")
        status.append(f"{result.energized_count}\n")
        status.append("Beams split: ", style="bold")
        status.append(f"{result.beams_spawned}  ")
        status.append("Loops cut: ", style="bold")
        status.append(f"{result.terminations.get(BeamTermination.CYCLE_DETECTED, 0)}\n")
        if self.best is not None:
            status.append("Best: ", style="bold")
            status.append(
                f"({self.best.entry.row}, {self.best.entry.col}) heading "
                f"{self.best.entry.direction.name} -> {self.best.energized}\n"
            )
        status.append("\n")

        # Convert ANSI-colored grid text to Rich Text properly
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  D - Next entry\n")
        status.append("  A - Previous entry\n")
        status.append("  B - Jump to best entry\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Beamgrid Entry Explorer", border_style="green", width=80)

    def select(self, offset: int) -> None:
        """Move ``offset`` entries around the boundary, wrapping at the ends."""
        self.index = (self.index + offset) % len(self.entries)
        entry = self.current_entry
        self.status_message = f"Selected ({entry.row}, {entry.col}) heading {entry.direction.name}"

    def jump_to_best(self) -> None:
        """Run the full sweep (once) and select its winning entry."""
        if self.best is None:
            self.best = best_entry_result(self.grid, self.settings)
        self.index = self.entries.index(self.best.entry)
        self.status_message = f"✓ Best entry energizes {self.best.energized} cells"

    def run(self) -> None:
        """Run the explorer until the user quits."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == "d" or key == readchar.key.RIGHT:
                        self.select(1)
                    elif key.lower() == "a" or key == readchar.key.LEFT:
                        self.select(-1)
                    elif key.lower() == "b":
                        self.jump_to_best()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(grid: Grid) -> None:
    """Run the explorer over ``grid``."""
    EntryExplorer(grid).run()


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    if len(sys.argv) > 1:
        grid = parse_grid(Path(sys.argv[1]).read_text())
    else:
        grid = parse_grid(SAMPLE_GRID)
    main(grid)

"""
Beam propagation through a grid of mirrors and splitters.
Traces a beam, and every beam split off from it, until all of them have left
the grid or repeated an earlier (position, direction) state.
"""

from __future__ import annotations

import logging
from collections import Counter, deque
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from functools import partial

from beam_types import Beam, Direction, Grid, InternalBoundsInvariantViolation, Tile

logger = logging.getLogger(__name__)


class BeamTermination(Enum):
    """Reason why a single beam stopped propagating."""

    EXITED_GRID = "exited_grid"  # Stepped outside the grid
    CYCLE_DETECTED = "cycle_detected"  # Repeated a (position, direction) state


class Executor(Enum):
    """How a sweep distributes its simulations."""

    PROCESS = "process"
    THREAD = "thread"
    SERIAL = "serial"


@dataclass(frozen=True)
class SweepSettings:
    """Settings governing the boundary-entry sweep."""

    executor: Executor = Executor.PROCESS
    max_workers: int | None = None  # None = executor default
    chunksize: int = 8  # Only used by the process pool


# =============================================================================
# Propagation Rule
# =============================================================================

_FORWARD_REFLECTIONS = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.UP,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.DOWN,
}

_BACKWARD_REFLECTIONS = {
    Direction.UP: Direction.LEFT,
    Direction.LEFT: Direction.UP,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
}

_HORIZONTAL = (Direction.LEFT, Direction.RIGHT)
_VERTICAL = (Direction.UP, Direction.DOWN)


def step(tile: Tile, direction: Direction) -> tuple[Direction, ...]:
    """
    Outgoing direction(s) of a beam entering ``tile`` while travelling ``direction``.

    Mirrors reflect, splitters struck side-on split into two beams, splitters
    struck end-on and empty tiles let the beam pass unchanged.

    Returns:
        One direction, or two when the beam splits. The first is the beam that
        continues, the second is the newly spawned beam.
    """
    match tile:
        case Tile.EMPTY:
            return (direction,)
        case Tile.MIRROR_FORWARD:
            return (_FORWARD_REFLECTIONS[direction],)
        case Tile.MIRROR_BACKWARD:
            return (_BACKWARD_REFLECTIONS[direction],)
        case Tile.SPLITTER_VERTICAL:
            return _VERTICAL if direction in _HORIZONTAL else (direction,)
        case Tile.SPLITTER_HORIZONTAL:
            return _HORIZONTAL if direction in _VERTICAL else (direction,)
    raise ValueError(f"Unknown tile: {tile!r}")


# =============================================================================
# Simulator
# =============================================================================

# One bit per direction; each grid cell stores the mask of directions seen there
_DIRECTION_BITS = {
    Direction.UP: 1,
    Direction.DOWN: 2,
    Direction.LEFT: 4,
    Direction.RIGHT: 8,
}


@dataclass
class _Propagation:
    """Mutable bookkeeping for one simulation run."""

    seen: bytearray
    energized: int = 0
    spawned: int = 0
    terminations: Counter[BeamTermination] = field(default_factory=Counter)


@dataclass(frozen=True)
class BeamTrace:
    """Everything a simulation run touched, keyed by grid position."""

    entry: Beam
    visited: dict[tuple[int, int], frozenset[Direction]]
    beams_spawned: int
    terminations: dict[BeamTermination, int]

    @property
    def energized(self) -> frozenset[tuple[int, int]]:
        return frozenset(self.visited)

    @property
    def energized_count(self) -> int:
        return len(self.visited)


def _propagate(grid: Grid, entry: Beam) -> _Propagation:
    """Run the worklist until every beam has exited or looped."""
    width = grid.width
    state = _Propagation(seen=bytearray(width * grid.height))
    seen = state.seen
    beams = deque([entry])

    while beams:
        beam = beams.popleft()
        while True:
            if not grid.in_bounds(beam.row, beam.col):
                state.terminations[BeamTermination.EXITED_GRID] += 1
                break

            index = beam.row * width + beam.col
            bit = _DIRECTION_BITS[beam.direction]
            mask = seen[index]
            if mask & bit:
                # Same cell, same direction: the rest of this path repeats
                state.terminations[BeamTermination.CYCLE_DETECTED] += 1
                break
            if not mask:
                state.energized += 1
            seen[index] = mask | bit

            tile = grid.get(beam.row, beam.col)
            if tile is None:
                raise InternalBoundsInvariantViolation(
                    f"Tile lookup failed at in-bounds position {beam.position}\n"
                    f"  Grid: {grid.width}x{grid.height}"
                )

            directions = step(tile, beam.direction)
            if len(directions) == 2:
                beams.append(beam.advance(directions[1]))
                state.spawned += 1
            beam = beam.advance(directions[0])

    return state


def simulate(grid: Grid, entry: Beam) -> int:
    """
    Count the cells energized by a beam entering at ``entry``.

    A cell crossed in several directions is counted once. An entry outside
    the grid energizes nothing.
    """
    return _propagate(grid, entry).energized


def trace(grid: Grid, entry: Beam) -> BeamTrace:
    """Simulate like simulate() but keep the full visited-state map."""
    state = _propagate(grid, entry)

    visited: dict[tuple[int, int], frozenset[Direction]] = {}
    for index, mask in enumerate(state.seen):
        if mask:
            visited[divmod(index, grid.width)] = frozenset(
                d for d, bit in _DIRECTION_BITS.items() if mask & bit
            )

    logger.debug(
        "trace from %s: energized=%d, spawned=%d, exited=%d, cycles=%d",
        entry,
        state.energized,
        state.spawned,
        state.terminations[BeamTermination.EXITED_GRID],
        state.terminations[BeamTermination.CYCLE_DETECTED],
    )
    return BeamTrace(entry, visited, state.spawned, dict(state.terminations))


# =============================================================================
# Entry Optimizer
# =============================================================================


@dataclass(frozen=True)
class EntryResult:
    """Energized count for one boundary entry."""

    entry: Beam
    energized: int


def boundary_entries(grid: Grid) -> list[Beam]:
    """
    Every edge cell paired with the direction pointing into the grid.

    Order: left edge heading right, top edge heading down, right edge heading
    left, bottom edge heading up. Corner cells appear once per adjoining edge.
    """
    last_row = grid.height - 1
    last_col = grid.width - 1
    return [
        *(Beam(r, 0, Direction.RIGHT) for r in range(grid.height)),
        *(Beam(0, c, Direction.DOWN) for c in range(grid.width)),
        *(Beam(r, last_col, Direction.LEFT) for r in range(grid.height)),
        *(Beam(last_row, c, Direction.UP) for c in range(grid.width)),
    ]


def sweep(grid: Grid, settings: SweepSettings = SweepSettings()) -> list[EntryResult]:
    """
    Simulate every boundary entry independently.

    Each simulation only reads the grid, so they run in parallel without any
    coordination beyond collecting results.

    Returns:
        One EntryResult per entry, in boundary_entries() order
    """
    entries = boundary_entries(grid)
    run = partial(simulate, grid)

    match settings.executor:
        case Executor.SERIAL:
            counts = [run(entry) for entry in entries]
        case Executor.THREAD:
            with ThreadPoolExecutor(max_workers=settings.max_workers) as pool:
                counts = list(pool.map(run, entries))
        case Executor.PROCESS:
            with ProcessPoolExecutor(max_workers=settings.max_workers) as pool:
                counts = list(pool.map(run, entries, chunksize=settings.chunksize))

    results = [EntryResult(entry, count) for entry, count in zip(entries, counts)]
    logger.info(
        "sweep: %d entries over %dx%d grid (executor=%s, max_workers=%s)",
        len(results),
        grid.width,
        grid.height,
        settings.executor.value,
        settings.max_workers,
    )
    return results


def best_entry_result(grid: Grid, settings: SweepSettings = SweepSettings()) -> EntryResult:
    """The first boundary entry reaching the maximum energized count."""
    best = max(sweep(grid, settings), key=lambda result: result.energized)
    logger.info("best entry: %s energizes %d cells", best.entry, best.energized)
    return best


def best_entry(grid: Grid, settings: SweepSettings = SweepSettings()) -> int:
    """Maximum energized count over all boundary entries."""
    return best_entry_result(grid, settings).energized

"""Tower placement engine — cutoff-pruned search for the longest maze.

Algorithm overview:
  1. Score the current configuration: shortest spawn→exit distance under
     the towers placed so far.  Unsolvable configurations are dead leaves.
  2. Keep every placement tied for the longest distance seen.
  3. If towers remain, the only cells worth trying are the cells on the
     current shortest path: a tower anywhere else leaves that path intact.
  4. Try each candidate in turn (tower on, recurse, tower off).  A cell
     that has been fully explored at a given remaining budget is marked
     exhausted there and skipped by later siblings at that budget and
     by every deeper level that still sees it excluded.
  5. After each sibling, conclusions drawn one level down are dropped:
     they belong to that sibling's ancestor placement only.

The search is single-threaded and mutates the grid in place; every cell
it touches is restored before it returns.
"""

from __future__ import annotations

import logging
import time

from mazebuilder.maze.grid import MazeGrid
from mazebuilder.maze.models import Coord
from mazebuilder.maze.pathfinder import find_all_shortest, find_shortest_path

from .models import BuildResult, BuilderConfig, SearchState


log = logging.getLogger(__name__)


# ── Main entry point ───────────────────────────────────────────────


def build_towers(
    grid: MazeGrid,
    *,
    max_towers: int | None = None,
    config: BuilderConfig | None = None,
) -> BuildResult:
    """Find every placement of up to *max_towers* towers that makes the
    shortest spawn→exit path as long as possible.

    Parameters
    ----------
    grid : MazeGrid
        The maze.  Mutated during the search and restored afterwards.
    max_towers : int | None
        Obstacle budget.  Overrides ``config.max_towers`` when given.
    config : BuilderConfig | None
        Tuneable parameters.  Uses defaults when *None*.

    Returns
    -------
    BuildResult
        Tied-best placements, their distance, configurations scored and
        elapsed time.  Empty when the grid has no spawn or no exit, or is
        unsolvable even without towers.
    """
    if config is None:
        config = BuilderConfig()
    if max_towers is None:
        max_towers = config.max_towers
    if max_towers < 0:
        raise ValueError(f"max_towers must be >= 0, got {max_towers}")

    start = grid.spawn()
    goals = grid.exits()
    if start is None:
        log.warning("Builder: map has no spawn tile — nothing to search")
        return BuildResult(duration_s=0.0, best_towers=[])
    if not goals:
        log.warning("Builder: map has no exit tile — nothing to search")
        return BuildResult(duration_s=0.0, best_towers=[])

    log.info("Builder: starting — %d×%d grid, spawn=%s, %d exits, max_towers=%d%s",
             grid.width, grid.height, tuple(start), len(goals), max_towers,
             " (exhaustive paths)" if config.exhaustive_paths else "")

    state = SearchState(max_towers=max_towers, goals=goals)

    start_time = time.monotonic()
    _search(grid, start, state, config, [], max_towers)
    elapsed = time.monotonic() - start_time

    log.info("Builder: N: %d t: %.0fms — best distance %s, %d tied placements",
             state.combinations, elapsed * 1000.0, state.best_distance,
             len(state.best_towers))
    if state.best_distance is None:
        log.warning("Builder: map is unsolvable even with no towers")

    return BuildResult(
        duration_s=elapsed,
        best_towers=state.best_towers,
        best_distance=state.best_distance,
        combinations=state.combinations,
    )


# ── Recursive search ───────────────────────────────────────────────


def _score(
    grid: MazeGrid,
    start: Coord,
    state: SearchState,
    config: BuilderConfig,
) -> tuple[int, set[Coord]] | None:
    if config.exhaustive_paths:
        return find_all_shortest(grid, start)
    return find_shortest_path(grid, start, state.goals)


def _search(
    grid: MazeGrid,
    start: Coord,
    state: SearchState,
    config: BuilderConfig,
    placement: list[Coord],
    towers_left: int,
) -> None:
    state.combinations += 1
    if config.log_progress_every and state.combinations % config.log_progress_every == 0:
        log.debug("Builder: %d configurations, depth %d, best %s",
                  state.combinations, len(placement), state.best_distance)

    result = _score(grid, start, state, config)

    # Unsolvable: the last tower sealed every exit
    if result is None:
        if towers_left > 0 and placement:
            state.mark_exhausted(towers_left, placement[-1])
        return

    dist, path_cells = result
    state.record(dist, placement)

    if towers_left == 0:
        return

    # Only cells on the current shortest path can lengthen it
    candidates = path_cells - state.excluded(towers_left)

    for coord in sorted(candidates, key=lambda c: (c.y, c.x)):
        if not grid.is_buildable(coord):
            continue

        with grid.occupy(coord):
            _search(grid, start, state, config, placement + [coord], towers_left - 1)

        state.mark_exhausted(towers_left, coord)
        if towers_left > 1:
            state.clear_level(towers_left - 1)

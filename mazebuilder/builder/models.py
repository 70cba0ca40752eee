"""Builder configuration, search state and output dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from mazebuilder.config import BUILD_RULES
from mazebuilder.maze.models import Coord


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass
class BuildResult:
    """Every tower placement tied for the longest shortest path."""

    duration_s: float
    best_towers: list[list[Coord]]
    best_distance: int | None = None
    combinations: int = 0               # configurations scored

    @property
    def ok(self) -> bool:
        return len(self.best_towers) > 0

    @property
    def duration_ms(self) -> float:
        return self.duration_s * 1000.0

    @property
    def tower_count(self) -> int:
        """Largest number of towers used by any best placement."""
        return max((len(t) for t in self.best_towers), default=0)


# ── Builder configuration ──────────────────────────────────────────


@dataclass
class BuilderConfig:
    """All tuneable search parameters in one place."""

    max_towers: int = BUILD_RULES.default_max_towers
    exhaustive_paths: bool = False      # candidates from every tied-shortest path (BFS)
    log_progress_every: int = 0         # debug line every N configurations; 0 = off


# ── Search state ───────────────────────────────────────────────────


@dataclass
class SearchState:
    """Bookkeeping for one top-level search.

    ``exhausted`` maps "towers left" to the cells already fully explored
    at that depth; a cell there is not tried again by a later sibling
    with the same remaining budget.
    """

    max_towers: int
    goals: list[Coord]
    combinations: int = 0
    best_distance: int | None = None
    best_towers: list[list[Coord]] = field(default_factory=list)
    exhausted: dict[int, set[Coord]] = field(default_factory=dict)
    _seen: set[frozenset[Coord]] = field(default_factory=set, repr=False)

    def __post_init__(self) -> None:
        for level in range(1, self.max_towers + 1):
            self.exhausted.setdefault(level, set())

    def record(self, distance: int, placement: list[Coord]) -> None:
        """Score a solvable configuration against the best so far."""
        if self.best_distance is None or distance > self.best_distance:
            self.best_distance = distance
            self.best_towers = [list(placement)]
            self._seen = {frozenset(placement)}
        elif distance == self.best_distance:
            key = frozenset(placement)
            if key not in self._seen:
                self._seen.add(key)
                self.best_towers.append(list(placement))

    def mark_exhausted(self, towers_left: int, coord: Coord) -> None:
        self.exhausted[towers_left].add(coord)

    def excluded(self, towers_left: int) -> set[Coord]:
        """Cells exhausted at *towers_left* or any level above it."""
        out: set[Coord] = set()
        for level in range(towers_left, self.max_towers + 1):
            out |= self.exhausted[level]
        return out

    def clear_level(self, towers_left: int) -> None:
        self.exhausted[towers_left].clear()

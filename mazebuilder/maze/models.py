"""Maze data types — tile kinds, coordinates, nodes and the raw map."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple


# ── Tile kinds ─────────────────────────────────────────────────────


class TileKind(IntEnum):
    """Discrete category of a grid cell.  Values are the map file codes."""

    FREE = 0
    UNBUILDABLE = 1
    VOID = 2
    SPAWN = 3
    EXIT = 4
    OCCUPIED = 5
    PATH = 6

    @property
    def traversable(self) -> bool:
        return self in _TRAVERSABLE

    @property
    def buildable(self) -> bool:
        return self in _BUILDABLE


_TRAVERSABLE = frozenset({
    TileKind.FREE, TileKind.UNBUILDABLE, TileKind.SPAWN,
    TileKind.EXIT, TileKind.PATH,
})
_BUILDABLE = frozenset({TileKind.FREE, TileKind.PATH})


# ── Coordinates and nodes ──────────────────────────────────────────


class Coord(NamedTuple):
    """A grid cell position.  x is the column, y is the row."""
    x: int
    y: int


@dataclass
class Node:
    """One grid cell.

    ``neighbors`` is filled once when the grid is built and never
    changes afterwards; occupancy is checked at query time.
    ``visited`` and ``distance`` are scratch fields owned by the
    breadth-first search and reset before every run.
    """

    coord: Coord
    kind: TileKind
    neighbors: list[Coord] = field(default_factory=list)
    visited: bool = False
    distance: int = 0

    @property
    def traversable(self) -> bool:
        return self.kind.traversable

    @property
    def buildable(self) -> bool:
        return self.kind.buildable


# ── Raw map ────────────────────────────────────────────────────────


@dataclass
class MapInfo:
    """A rectangular table of tile kinds, row-major (``tiles[y][x]``)."""

    tiles: list[list[TileKind]]

    @property
    def height(self) -> int:
        return len(self.tiles)

    @property
    def width(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    def count(self, kind: TileKind) -> int:
        return sum(row.count(kind) for row in self.tiles)


class MapError(ValueError):
    """Raised when a map document cannot be turned into a MapInfo."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid map: {reason}")

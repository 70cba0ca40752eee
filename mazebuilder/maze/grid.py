"""Maze grid — a flat, row-major arena of nodes indexed by coordinate.

Neighbor lists are computed once at construction: a node only links to
4-connected cells that are traversable at that moment, and a node that is
itself non-traversable gets no links at all.  Later changes to a cell's
kind (placing or removing a tower) do not touch neighbor lists; the
pathfinders re-check traversability when they expand a node.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Sequence

from .models import Coord, MapInfo, Node, TileKind


# 4-connected directions: (dx, dy)
DIRS = ((0, 1), (-1, 0), (1, 0), (0, -1))


class MazeGrid:
    """A 2-D tile grid shared by the pathfinders and the tower search.

    The search mutates tile kinds in place (tower on, tower off), so a
    single MazeGrid must not be searched from two threads at once.
    """

    def __init__(self, tiles: Sequence[Sequence[TileKind | int]]) -> None:
        self.height = len(tiles)
        self.width = len(tiles[0]) if self.height else 0

        self._nodes: list[Node] = []
        for y, row in enumerate(tiles):
            for x, kind in enumerate(row):
                self._nodes.append(Node(Coord(x, y), TileKind(kind)))

        self._link_neighbors()

    @classmethod
    def from_map(cls, info: MapInfo) -> "MazeGrid":
        return cls(info.tiles)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[TileKind | int]]) -> "MazeGrid":
        """Build a grid from nested lists of TileKind members or raw codes."""
        return cls(rows)

    def _link_neighbors(self) -> None:
        W = self.width
        H = self.height
        nodes = self._nodes
        for node in nodes:
            if not node.traversable:
                continue
            x, y = node.coord
            for dx, dy in DIRS:
                nx, ny = x + dx, y + dy
                if not (0 <= nx < W and 0 <= ny < H):
                    continue
                if not nodes[ny * W + nx].traversable:
                    continue
                node.neighbors.append(Coord(nx, ny))

    # ── Access ─────────────────────────────────────────────────────

    def in_bounds(self, coord: Coord) -> bool:
        return 0 <= coord[0] < self.width and 0 <= coord[1] < self.height

    def node(self, coord: Coord) -> Node:
        x, y = coord
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"{coord} is outside a {self.width}×{self.height} grid")
        return self._nodes[y * self.width + x]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    # ── Cell queries ───────────────────────────────────────────────

    def kind(self, coord: Coord) -> TileKind:
        return self.node(coord).kind

    def is_traversable(self, coord: Coord) -> bool:
        return self.node(coord).traversable

    def is_buildable(self, coord: Coord) -> bool:
        return self.node(coord).buildable

    def find(self, kind: TileKind) -> list[Coord]:
        """All coordinates currently of *kind*, in row-major order."""
        return [n.coord for n in self._nodes if n.kind == kind]

    def spawn(self) -> Coord | None:
        """The first spawn cell in row-major order, or None."""
        for n in self._nodes:
            if n.kind == TileKind.SPAWN:
                return n.coord
        return None

    def exits(self) -> list[Coord]:
        return self.find(TileKind.EXIT)

    def kinds(self) -> list[list[TileKind]]:
        """The current tile kinds as a row-major table."""
        W = self.width
        return [
            [n.kind for n in self._nodes[y * W:(y + 1) * W]]
            for y in range(self.height)
        ]

    # ── Cell mutation ──────────────────────────────────────────────

    def set_kind(self, coord: Coord, kind: TileKind) -> None:
        self.node(coord).kind = TileKind(kind)

    @contextmanager
    def occupy(self, coord: Coord) -> Iterator[Node]:
        """Place a tower on *coord* for the duration of the block.

        The cell's previous kind is put back on exit, whatever happens
        inside the block.
        """
        node = self.node(coord)
        previous = node.kind
        node.kind = TileKind.OCCUPIED
        try:
            yield node
        finally:
            node.kind = previous

    def reset_search(self) -> None:
        """Clear the breadth-first scratch fields on every node."""
        for n in self._nodes:
            n.visited = False
            n.distance = 0

    # ── Snapshot / restore ─────────────────────────────────────────

    def snapshot(self) -> list[TileKind]:
        """Return a copy of every cell's kind for later restore."""
        return [n.kind for n in self._nodes]

    def restore(self, snap: Sequence[TileKind]) -> None:
        """Restore tile kinds from a snapshot.  Neighbor lists are untouched."""
        for n, kind in zip(self._nodes, snap):
            n.kind = kind

    def with_towers(self, towers: Sequence[Coord]) -> "MazeGrid":
        """Return a new grid built from the current kinds with *towers* occupied.

        Neighbor lists of the copy match this grid's: they are derived
        from the kinds before the towers go down.
        """
        g = MazeGrid(self.kinds())
        for coord in towers:
            g.set_kind(coord, TileKind.OCCUPIED)
        return g

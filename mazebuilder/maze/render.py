"""Plain-text rendering of a maze, optionally with towers and a path."""

from __future__ import annotations

from typing import Iterable, Sequence

from .grid import MazeGrid
from .models import Coord, TileKind
from .pathfinder import find_shortest_path


TILE_CHARS: dict[TileKind, str] = {
    TileKind.FREE: ".",
    TileKind.UNBUILDABLE: ":",
    TileKind.VOID: " ",
    TileKind.SPAWN: "S",
    TileKind.EXIT: "E",
    TileKind.OCCUPIED: "#",
    TileKind.PATH: "~",
}
TOWER_CHAR = "T"
ROUTE_CHAR = "o"


def render_grid(
    grid: MazeGrid,
    towers: Iterable[Coord] = (),
    route: Iterable[Coord] = (),
) -> str:
    """Render *grid* one character per cell, rows separated by newlines.

    Towers are drawn over their cell.  Route cells are drawn only on plain
    walkable tiles so spawn and exits stay visible.
    """
    tower_set = set(towers)
    route_set = set(route)
    lines: list[str] = []
    for y, row in enumerate(grid.kinds()):
        chars: list[str] = []
        for x, kind in enumerate(row):
            c = Coord(x, y)
            if c in tower_set:
                chars.append(TOWER_CHAR)
            elif c in route_set and kind in (TileKind.FREE, TileKind.UNBUILDABLE, TileKind.PATH):
                chars.append(ROUTE_CHAR)
            else:
                chars.append(TILE_CHARS[kind])
        lines.append("".join(chars))
    return "\n".join(lines)


def render_placement(grid: MazeGrid, towers: Sequence[Coord]) -> str:
    """Render *grid* with *towers* placed and the route the adversary takes.

    The route is one shortest spawn→exit path with the towers down.  A
    placement that seals every exit is drawn without a route.
    """
    towered = grid.with_towers(towers)
    route: Iterable[Coord] = ()
    start = towered.spawn()
    if start is not None:
        found = find_shortest_path(towered, start, towered.exits())
        if found is not None:
            route = found[1]
    return render_grid(grid, towers=towers, route=route)

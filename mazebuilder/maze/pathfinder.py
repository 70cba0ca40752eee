"""Shortest-path searches over the maze grid.

Two searches, both with unit step cost over 4-connected cells:
  - find_shortest_path: A* towards the nearest of several exits.  Used in
    the hot loop of the tower search; reports the cells of one optimal path.
  - find_all_shortest:  breadth-first search that reports the cells of
    every tied-shortest path.  Slower; used for validation and for the
    exhaustive candidate mode of the tower search.

Both treat Occupied exactly like Void: the cell is never entered.
"""

from __future__ import annotations

import heapq
from collections import deque
from typing import Iterable

from .grid import MazeGrid
from .models import Coord, TileKind


def find_shortest_path(
    grid: MazeGrid,
    start: Coord,
    goals: Iterable[Coord],
) -> tuple[int, set[Coord]] | None:
    """A* from *start* to the nearest reachable goal.

    The heuristic is the Manhattan distance to the closest goal, which is
    admissible and consistent for unit steps.

    Returns ``(distance, cells)`` where *cells* holds every coordinate on
    one optimal path, both endpoints included, or None if no goal can be
    reached under the grid's current occupancy.
    """
    goal_set = set(goals)
    if not goal_set:
        return None

    W = grid.width
    nodes = grid._nodes

    if not nodes[start[1] * W + start[0]].traversable:
        return None
    if start in goal_set:
        return (0, {start})

    goal_xs = tuple(g[0] for g in goal_set)
    goal_ys = tuple(g[1] for g in goal_set)
    n_goals = len(goal_xs)

    def min_h(x: int, y: int) -> int:
        best = abs(x - goal_xs[0]) + abs(y - goal_ys[0])
        for i in range(1, n_goals):
            d = abs(x - goal_xs[i]) + abs(y - goal_ys[i])
            if d < best:
                best = d
        return best

    counter = 0
    heap: list[tuple[int, int, int, Coord]] = [(min_h(*start), 0, counter, start)]
    g_scores: dict[Coord, int] = {start: 0}
    parents: dict[Coord, Coord] = {}
    closed: set[Coord] = set()

    while heap:
        _f, cur_g, _cnt, cur = heapq.heappop(heap)

        if cur in closed:
            continue
        closed.add(cur)

        if cur in goal_set:
            path = {cur}
            c = cur
            while c in parents:
                c = parents[c]
                path.add(c)
            return (cur_g, path)

        for nb in nodes[cur[1] * W + cur[0]].neighbors:
            if nb in closed:
                continue
            if not nodes[nb[1] * W + nb[0]].traversable:
                continue

            tentative_g = cur_g + 1
            if nb not in g_scores or tentative_g < g_scores[nb]:
                g_scores[nb] = tentative_g
                parents[nb] = cur
                counter += 1
                heapq.heappush(heap, (tentative_g + min_h(*nb), tentative_g, counter, nb))

    return None


def find_all_shortest(
    grid: MazeGrid,
    start: Coord,
) -> tuple[int, set[Coord]] | None:
    """Breadth-first search from *start* to the first Exit cell reached.

    Resets the grid's scratch fields, records the level of every visited
    node, then walks back from the exit through neighbors exactly one
    level closer to collect every cell on any tied-shortest path.

    Returns ``(distance, cells)`` with both endpoints included, or None if
    no exit is reachable.
    """
    grid.reset_search()

    start_node = grid.node(start)
    if not start_node.traversable:
        return None

    start_node.visited = True
    queue = deque([start_node])

    while queue:
        node = queue.popleft()

        if node.kind == TileKind.EXIT:
            return (node.distance, _collect_shortest_cells(grid, node.coord))

        for nb in node.neighbors:
            neighbor = grid.node(nb)
            if neighbor.visited or not neighbor.traversable:
                continue
            neighbor.visited = True
            neighbor.distance = node.distance + 1
            queue.append(neighbor)

    return None


def _collect_shortest_cells(grid: MazeGrid, end: Coord) -> set[Coord]:
    """Walk back from *end* along strictly decreasing BFS levels."""
    cells = {end}
    stack = [end]
    while stack:
        node = grid.node(stack.pop())
        for nb in node.neighbors:
            if nb in cells:
                continue
            neighbor = grid.node(nb)
            if neighbor.visited and neighbor.distance == node.distance - 1:
                cells.add(nb)
                stack.append(nb)
    return cells

"""Tests for the A* and breadth-first shortest-path searches."""

from __future__ import annotations

import unittest

from mazebuilder.maze import Coord, TileKind
from mazebuilder.maze.pathfinder import find_all_shortest, find_shortest_path
from tests.maze_fixtures import CORRIDOR, DETOUR, OPEN_3X3, SEALED, TWO_EXITS, make_grid


def _is_connected_walk(cells: set[Coord], start: Coord, end: Coord) -> bool:
    """True if *cells* link start to end through 4-connected steps."""
    seen = {start}
    stack = [start]
    while stack:
        x, y = stack.pop()
        for nb in (Coord(x + 1, y), Coord(x - 1, y), Coord(x, y + 1), Coord(x, y - 1)):
            if nb in cells and nb not in seen:
                seen.add(nb)
                stack.append(nb)
    return end in seen


class TestAStar(unittest.TestCase):

    def test_corridor(self):
        grid = make_grid(CORRIDOR)
        dist, cells = find_shortest_path(grid, grid.spawn(), grid.exits())
        self.assertEqual(dist, 3)
        self.assertEqual(cells, {Coord(0, 0), Coord(1, 0), Coord(2, 0), Coord(3, 0)})

    def test_open_field_returns_one_path(self):
        """Only one of the tied-optimal paths is reported."""
        grid = make_grid(OPEN_3X3)
        dist, cells = find_shortest_path(grid, grid.spawn(), grid.exits())
        self.assertEqual(dist, 4)
        self.assertEqual(len(cells), dist + 1)
        self.assertTrue(_is_connected_walk(cells, Coord(0, 0), Coord(2, 2)))

    def test_nearest_of_several_exits(self):
        grid = make_grid(TWO_EXITS)
        dist, cells = find_shortest_path(grid, grid.spawn(), grid.exits())
        self.assertEqual(dist, 2)
        self.assertEqual(cells, {Coord(0, 0), Coord(1, 0), Coord(2, 0)})

    def test_occupied_is_a_wall(self):
        grid = make_grid(DETOUR)
        grid.set_kind(Coord(2, 0), TileKind.OCCUPIED)
        dist, cells = find_shortest_path(grid, grid.spawn(), grid.exits())
        self.assertEqual(dist, 6)
        self.assertNotIn(Coord(2, 0), cells)

    def test_unreachable(self):
        grid = make_grid(SEALED)
        self.assertIsNone(find_shortest_path(grid, grid.spawn(), grid.exits()))

    def test_blocked_corridor(self):
        grid = make_grid(CORRIDOR)
        grid.set_kind(Coord(1, 0), TileKind.OCCUPIED)
        self.assertIsNone(find_shortest_path(grid, grid.spawn(), grid.exits()))

    def test_no_goals(self):
        grid = make_grid(OPEN_3X3)
        self.assertIsNone(find_shortest_path(grid, grid.spawn(), []))


class TestBreadthFirst(unittest.TestCase):

    def test_all_tied_paths(self):
        """Every cell of an open 3×3 lies on some shortest path."""
        grid = make_grid(OPEN_3X3)
        dist, cells = find_all_shortest(grid, grid.spawn())
        self.assertEqual(dist, 4)
        self.assertEqual(len(cells), 9)

    def test_detour_single_path(self):
        grid = make_grid(DETOUR)
        dist, cells = find_all_shortest(grid, grid.spawn())
        self.assertEqual(dist, 4)
        self.assertEqual(cells, {Coord(x, 0) for x in range(5)})

    def test_tied_detours(self):
        """With the top row cut, both detour columns are reported."""
        grid = make_grid(DETOUR)
        grid.set_kind(Coord(2, 0), TileKind.OCCUPIED)
        dist, cells = find_all_shortest(grid, grid.spawn())
        self.assertEqual(dist, 6)
        self.assertIn(Coord(1, 0), cells)
        self.assertIn(Coord(3, 0), cells)
        self.assertIn(Coord(2, 1), cells)
        self.assertNotIn(Coord(2, 2), cells)

    def test_agrees_with_astar(self):
        for rows in (CORRIDOR, OPEN_3X3, DETOUR):
            grid = make_grid(rows)
            a_dist, a_cells = find_shortest_path(grid, grid.spawn(), grid.exits())
            b_dist, b_cells = find_all_shortest(grid, grid.spawn())
            self.assertEqual(a_dist, b_dist)
            self.assertTrue(a_cells <= b_cells)

    def test_unreachable(self):
        grid = make_grid(SEALED)
        self.assertIsNone(find_all_shortest(grid, grid.spawn()))

    def test_scratch_fields_reset_between_runs(self):
        grid = make_grid(DETOUR)
        find_all_shortest(grid, grid.spawn())
        grid.set_kind(Coord(2, 0), TileKind.OCCUPIED)
        dist, _ = find_all_shortest(grid, grid.spawn())
        self.assertEqual(dist, 6)
        grid.set_kind(Coord(2, 0), TileKind.FREE)
        dist, _ = find_all_shortest(grid, grid.spawn())
        self.assertEqual(dist, 4)


if __name__ == "__main__":
    unittest.main()

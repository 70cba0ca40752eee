"""Tests for map loading, validation, rendering and result serialization."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from mazebuilder.builder import BuildResult, build_towers, parse_result, result_to_dict
from mazebuilder.maze import (
    Coord, MapError, MapInfo, TileKind,
    load_map, map_to_dict, parse_map, render_grid, render_placement, validate_map,
)
from mazebuilder.maze.pathfinder import find_shortest_path
from tests.maze_fixtures import CORRIDOR, DETOUR, NO_SPAWN, make_grid


class TestParseMap(unittest.TestCase):

    def test_parse_valid(self):
        info = parse_map({"map": DETOUR})
        self.assertEqual(info.width, 5)
        self.assertEqual(info.height, 3)
        self.assertEqual(info.tiles[0][0], TileKind.SPAWN)
        self.assertEqual(info.tiles[1][1], TileKind.UNBUILDABLE)

    def test_round_trip(self):
        info = parse_map({"map": DETOUR})
        self.assertEqual(map_to_dict(info), {"map": DETOUR})

    def test_missing_key(self):
        with self.assertRaises(MapError):
            parse_map({"tiles": DETOUR})

    def test_empty_map(self):
        with self.assertRaises(MapError):
            parse_map({"map": []})

    def test_ragged_rows(self):
        with self.assertRaises(MapError) as ctx:
            parse_map({"map": [[3, 0, 4], [0, 0]]})
        self.assertIn("row 1", ctx.exception.reason)

    def test_unknown_code(self):
        with self.assertRaises(MapError) as ctx:
            parse_map({"map": [[3, 7, 4]]})
        self.assertIn("(1, 0)", ctx.exception.reason)

    def test_non_integer_code(self):
        for bad in ("0", 1.5, None, True):
            with self.assertRaises(MapError):
                parse_map({"map": [[3, bad, 4]]})

    def test_map_error_is_value_error(self):
        self.assertTrue(issubclass(MapError, ValueError))


class TestLoadMap(unittest.TestCase):

    def test_load_from_disk(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "data.json"
            p.write_text(json.dumps({"map": CORRIDOR}), encoding="utf-8")
            info = load_map(p)
        self.assertEqual(info.width, 4)
        self.assertEqual(info.count(TileKind.EXIT), 1)

    def test_bad_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "data.json"
            p.write_text("{not json", encoding="utf-8")
            with self.assertRaises(MapError):
                load_map(p)

    def test_not_utf8(self):
        """Undecodable bytes are reported as a map error, not a crash."""
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "data.json"
            p.write_bytes(b'{"map": [[3, 0, 4]]}\xff')
            with self.assertRaises(MapError) as ctx:
                load_map(p)
        self.assertIn("UTF-8", ctx.exception.reason)


class TestValidateMap(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(validate_map(parse_map({"map": DETOUR})), [])

    def test_no_spawn(self):
        errors = validate_map(parse_map({"map": NO_SPAWN}))
        self.assertEqual(len(errors), 1)
        self.assertIn("spawn", errors[0])

    def test_two_spawns_no_exit(self):
        errors = validate_map(parse_map({"map": [[3, 0, 3]]}))
        self.assertEqual(len(errors), 2)

    def test_too_large(self):
        info = MapInfo(tiles=[[TileKind.SPAWN] + [TileKind.FREE] * 8 + [TileKind.EXIT]])
        errors = validate_map(info, max_cells=5)
        self.assertTrue(any("limit" in e for e in errors))


class TestRender(unittest.TestCase):

    def test_plain(self):
        grid = make_grid([[3, 0, 1, 2, 5, 6, 4]])
        self.assertEqual(render_grid(grid), "S.: #~E")

    def test_towers_and_route(self):
        grid = make_grid(DETOUR)
        grid.set_kind(Coord(2, 0), TileKind.OCCUPIED)
        _, route = find_shortest_path(grid, grid.spawn(), grid.exits())
        grid.set_kind(Coord(2, 0), TileKind.FREE)
        text = render_grid(grid, towers=[Coord(2, 0)], route=route)
        lines = text.splitlines()
        self.assertEqual(len(lines), 3)
        self.assertEqual(lines[0][0], "S")
        self.assertEqual(lines[0][2], "T")
        self.assertEqual(lines[0][4], "E")
        self.assertIn("o", lines[1])

    def test_placement_draws_route(self):
        grid = make_grid(DETOUR)
        text = render_placement(grid, [Coord(2, 0)])
        lines = text.splitlines()
        self.assertEqual(lines[0][2], "T")
        # distance 6 leaves five route cells between spawn and exit
        self.assertEqual(text.count("o"), 5)
        self.assertEqual(grid.kind(Coord(2, 0)), TileKind.FREE)

    def test_placement_sealed_has_no_route(self):
        grid = make_grid(CORRIDOR)
        text = render_placement(grid, [Coord(1, 0)])
        self.assertEqual(text, "ST.E")


class TestResultSerialization(unittest.TestCase):

    def test_round_trip(self):
        result = build_towers(make_grid(DETOUR), max_towers=1)
        data = json.loads(json.dumps(result_to_dict(result)))
        back = parse_result(data)
        self.assertEqual(back.best_distance, result.best_distance)
        self.assertEqual(back.best_towers, result.best_towers)
        self.assertEqual(back.combinations, result.combinations)
        self.assertIsInstance(back.best_towers[0][0], Coord)

    def test_empty_result(self):
        data = result_to_dict(BuildResult(duration_s=0.0, best_towers=[]))
        self.assertIsNone(data["best_distance"])
        self.assertFalse(parse_result(data).ok)


if __name__ == "__main__":
    unittest.main()

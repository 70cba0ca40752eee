"""Maze — the grid model and its shortest-path searches.

Submodules:
  models        Tile kinds, coordinates, nodes, raw map, MapError.
  grid          Flat row-major node arena with fixed neighbor lists.
  pathfinder    A* to the nearest exit, BFS over all tied-shortest paths.
  parsing       JSON map loading (parse_map, load_map, map_to_dict).
  validation    Pre-search map checks (validate_map).
  render        Plain-text rendering with towers and routes.
"""

from .models import TileKind, Coord, Node, MapInfo, MapError
from .grid import MazeGrid
from .pathfinder import find_shortest_path, find_all_shortest
from .parsing import parse_map, load_map, map_to_dict
from .validation import validate_map
from .render import render_grid, render_placement

__all__ = [
    # Models
    "TileKind", "Coord", "Node", "MapInfo", "MapError",
    # Grid
    "MazeGrid",
    # Pathfinding
    "find_shortest_path", "find_all_shortest",
    # Parsing / validation
    "parse_map", "load_map", "map_to_dict", "validate_map",
    # Rendering
    "render_grid", "render_placement",
]

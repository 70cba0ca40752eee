"""Map parsing — convert raw dicts/JSON into MapInfo.

Format (the ``data.json`` document)::

    {"map": [[3, 0, 0, 4],
             [1, 2, 0, 0]]}

Each row is a list of tile codes ``0..6`` (see TileKind).  All rows must
have the same length.
"""

from __future__ import annotations

import json
from pathlib import Path

from .models import MapError, MapInfo, TileKind


_VALID_CODES = frozenset(int(k) for k in TileKind)


def parse_map(data: dict) -> MapInfo:
    """Parse a raw dict (from JSON / request body) into a MapInfo.

    Raises MapError for anything that is not a rectangular table of
    known tile codes.
    """
    if not isinstance(data, dict) or "map" not in data:
        raise MapError("document has no 'map' key")
    return MapInfo(tiles=parse_rows(data["map"]))


def parse_rows(rows: list) -> list[list[TileKind]]:
    """Validate and convert a nested list of tile codes."""
    if not isinstance(rows, list) or not rows:
        raise MapError("'map' must be a non-empty list of rows")

    width: int | None = None
    tiles: list[list[TileKind]] = []
    for y, row in enumerate(rows):
        if not isinstance(row, list):
            raise MapError(f"row {y} is not a list")
        if not row:
            raise MapError(f"row {y} is empty")
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise MapError(f"row {y} has {len(row)} cells, expected {width}")

        parsed: list[TileKind] = []
        for x, code in enumerate(row):
            # bool is an int subclass; reject it explicitly
            if isinstance(code, bool) or not isinstance(code, int) or code not in _VALID_CODES:
                raise MapError(f"cell ({x}, {y}) has unknown tile code {code!r}")
            parsed.append(TileKind(code))
        tiles.append(parsed)
    return tiles


def load_map(path: str | Path) -> MapInfo:
    """Read and parse a map document from disk."""
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise MapError(f"{p.name} is not UTF-8 text") from e
    except json.JSONDecodeError as e:
        raise MapError(f"{p.name} is not valid JSON ({e.msg} at line {e.lineno})") from e
    return parse_map(data)


def map_to_dict(info: MapInfo) -> dict:
    """Serialize a MapInfo to a JSON-safe dict."""
    return {"map": [[int(k) for k in row] for row in info.tiles]}

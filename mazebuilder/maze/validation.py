"""Map validation — check a parsed map before running a search."""

from __future__ import annotations

from mazebuilder.config import BUILD_RULES

from .models import MapInfo, TileKind


def validate_map(info: MapInfo, *, max_cells: int = BUILD_RULES.max_grid_cells) -> list[str]:
    """Validate a MapInfo. Returns error messages (empty = valid)."""
    errors: list[str] = []

    # ── Size ──
    cells = info.width * info.height
    if cells == 0:
        errors.append("Map is empty")
    elif cells > max_cells:
        errors.append(f"Map has {cells} cells, limit is {max_cells}")

    # ── Exactly one spawn ──
    spawns = info.count(TileKind.SPAWN)
    if spawns == 0:
        errors.append("Map has no spawn tile")
    elif spawns > 1:
        errors.append(f"Map has {spawns} spawn tiles, expected exactly one")

    # ── At least one exit ──
    if info.count(TileKind.EXIT) == 0:
        errors.append("Map has no exit tile")

    return errors

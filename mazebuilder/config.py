"""Shared constants for the maze builder.

The loader, the validator, the search engine, the CLI and the HTTP
service all derive their limits and defaults from this single source of
truth.  Change a value here and every stage stays in sync.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BuildRules:
    """Defaults and hard limits for a tower-placement search."""

    default_max_towers: int = 8
    """Obstacle budget used when the caller does not pick one."""

    default_map_file: str = "data.json"
    """Map document read by the CLI when ``--map`` is omitted."""

    max_grid_cells: int = 10_000
    """Largest map (width × height) the validator accepts.  The search
    is exponential in the budget, so bigger maps are rejected up front."""

    tower_budget_headroom: int = 4
    """How far above the default budget callers may go."""

    http_max_grid_cells: int = 256
    """Largest map the HTTP service searches.  Requests run inside the
    server process with no deadline, so the bound is much tighter."""

    http_max_towers: int = 6
    """Largest obstacle budget the HTTP service accepts."""

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def max_supported_towers(self) -> int:
        """Upper bound on ``max_towers`` accepted by the CLI."""
        return self.default_max_towers + self.tower_budget_headroom


# Module-level singleton — importable everywhere.
BUILD_RULES = BuildRules()

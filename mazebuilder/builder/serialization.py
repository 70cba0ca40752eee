"""Build result serialization — JSON conversion."""

from __future__ import annotations

from mazebuilder.maze.models import Coord

from .models import BuildResult


def result_to_dict(result: BuildResult) -> dict:
    """Serialize a BuildResult to a JSON-safe dict."""
    return {
        "best_distance": result.best_distance,
        "best_towers": [
            [list(c) for c in towers]
            for towers in result.best_towers
        ],
        "combinations": result.combinations,
        "duration_ms": round(result.duration_ms, 3),
    }


def parse_result(data: dict) -> BuildResult:
    """Parse a result dict back into a BuildResult."""
    best_towers = [
        [Coord(int(c[0]), int(c[1])) for c in towers]
        for towers in data.get("best_towers", [])
    ]
    return BuildResult(
        duration_s=float(data.get("duration_ms", 0.0)) / 1000.0,
        best_towers=best_towers,
        best_distance=data.get("best_distance"),
        combinations=int(data.get("combinations", 0)),
    )

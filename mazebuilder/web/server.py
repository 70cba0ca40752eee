"""
FastAPI web server — validate maps and run tower searches over HTTP.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from mazebuilder.builder import BuilderConfig, build_towers, result_to_dict
from mazebuilder.config import BUILD_RULES
from mazebuilder.maze import MapError, MazeGrid, MapInfo, parse_map, render_placement, validate_map

log = logging.getLogger(__name__)

# ── .env loader ────────────────────────────────────────────────────

def _load_env():
    root = Path(__file__).resolve().parents[2]
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v

_load_env()


def default_max_towers() -> int:
    """Budget for requests that omit one (``MAZEBUILDER_MAX_TOWERS``)."""
    raw = os.environ.get("MAZEBUILDER_MAX_TOWERS")
    if not raw:
        return min(BUILD_RULES.default_max_towers, BUILD_RULES.http_max_towers)
    try:
        value = int(raw)
    except ValueError:
        log.warning("Ignoring non-integer MAZEBUILDER_MAX_TOWERS=%r", raw)
        return min(BUILD_RULES.default_max_towers, BUILD_RULES.http_max_towers)
    return max(0, min(value, BUILD_RULES.http_max_towers))


# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="MazeBuilder")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Models ─────────────────────────────────────────────────────────

class MapRequest(BaseModel):
    map: list[list[int]]


class BuildRequest(BaseModel):
    map: list[list[int]]
    max_towers: int | None = Field(default=None, ge=0, le=BUILD_RULES.http_max_towers)
    exhaustive: bool = False
    show: int = Field(default=1, ge=0)


def _parse_or_400(rows: list[list[int]]) -> MapInfo:
    try:
        info = parse_map({"map": rows})
    except MapError as e:
        raise HTTPException(400, [e.reason])
    errors = validate_map(info, max_cells=BUILD_RULES.http_max_grid_cells)
    if errors:
        raise HTTPException(400, errors)
    return info


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/health")
def health():
    return {"status": "ok", "default_max_towers": default_max_towers()}


@app.post("/api/validate")
def validate(req: MapRequest):
    """Return the map's validation errors (empty list = valid)."""
    try:
        info = parse_map({"map": req.map})
    except MapError as e:
        return {"valid": False, "errors": [e.reason]}
    errors = validate_map(info, max_cells=BUILD_RULES.http_max_grid_cells)
    return {"valid": not errors, "errors": errors}


@app.post("/api/build")
def build(req: BuildRequest):
    """Run the tower search and return every tied-best placement."""
    info = _parse_or_400(req.map)
    max_towers = req.max_towers if req.max_towers is not None else default_max_towers()

    grid = MazeGrid.from_map(info)
    config = BuilderConfig(max_towers=max_towers, exhaustive_paths=req.exhaustive)
    result = build_towers(grid, config=config)

    payload = result_to_dict(result)
    payload["max_towers"] = max_towers
    payload["layouts"] = [
        render_placement(grid, towers)
        for towers in result.best_towers[:req.show]
    ]
    return payload


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("mazebuilder.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()

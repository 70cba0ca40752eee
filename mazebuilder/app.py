import argparse
import json
import logging
import sys
from pathlib import Path

from mazebuilder.builder import BuilderConfig, build_towers, result_to_dict
from mazebuilder.config import BUILD_RULES
from mazebuilder.maze import MapError, MazeGrid, load_map, render_placement, validate_map


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mazebuilder", description="Tower placement → longest maze")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    b = sub.add_parser("build", help="Search tower placements for a map file")
    b.add_argument("--map", default=BUILD_RULES.default_map_file, help="Path to the map JSON")
    b.add_argument("--towers", type=int, default=BUILD_RULES.default_max_towers,
                   help="Maximum number of towers to place")
    b.add_argument("--exhaustive", action="store_true",
                   help="Take candidate cells from every tied-shortest path")
    b.add_argument("--json", action="store_true", help="Print the result as JSON")
    b.add_argument("--show", type=int, default=1, help="How many best layouts to draw")

    sv = sub.add_parser("serve", help="Start the HTTP server")
    sv.add_argument("--host", default="127.0.0.1", help="Host to bind")
    sv.add_argument("--port", type=int, default=8000, help="Port to bind")

    return p


def run_build(args: argparse.Namespace) -> int:
    try:
        info = load_map(Path(args.map))
    except (MapError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    errors = validate_map(info)
    if not 0 <= args.towers <= BUILD_RULES.max_supported_towers:
        errors.append(f"--towers must be between 0 and {BUILD_RULES.max_supported_towers}")
    if errors:
        for err in errors:
            print(f"error: {err}", file=sys.stderr)
        return 2

    grid = MazeGrid.from_map(info)
    config = BuilderConfig(max_towers=args.towers, exhaustive_paths=args.exhaustive)
    result = build_towers(grid, config=config)

    if args.json:
        print(json.dumps(result_to_dict(result), indent=2))
    else:
        print(f"N: {result.combinations} t: {result.duration_ms:.0f}ms")
        print(f"best distance: {result.best_distance}, "
              f"{len(result.best_towers)} tied placements")
        for towers in result.best_towers[:max(args.show, 0)]:
            print()
            print(render_placement(grid, towers))

    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "build":
        return run_build(args)

    if args.cmd == "serve":
        from mazebuilder.web.server import main as serve_main
        serve_main(host=args.host, port=args.port)
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .config.kernels import get_kernel_preset, load_search_defaults
from .core.astar import Pathfinder
from .core.grid import Coordinate
from .core.heuristics import get_heuristic
from .exceptions import NoPathFoundError, PathfindingError, SearchBudgetExceededError
from .io.image_grid import SearchCanvas, grid_from_image
from .io.text_grid import format_path, load_text_grid
from .logging_config import get_logger, set_log_level, set_run_id

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_NO_PATH = 1
EXIT_INVALID = 2


def _parse_xy(value: str) -> Tuple[int, int]:
    parts = value.split(",", 1)
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Invalid x,y pair: {value!r}")
    try:
        return int(parts[0].strip()), int(parts[1].strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid x,y pair: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridpath-find",
        description="Find a minimum-cost path on a text or image grid.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--grid", type=Path, help="Text grid: whitespace-separated integers, negative = obstacle")
    source.add_argument("--image", type=Path, help="Image grid: black pixels are obstacles")
    parser.add_argument("--start", type=_parse_xy, required=True, help="Start cell as x,y")
    parser.add_argument("--goal", type=_parse_xy, required=True, help="Goal cell as x,y")
    parser.add_argument("--kernel", default=None, help="Kernel preset name (see kernels.yaml)")
    parser.add_argument("--kernels-file", type=Path, default=None, help="Alternative kernel preset file")
    parser.add_argument("--max-expansions", type=int, default=None, help="Abort after this many expansions")
    parser.add_argument("--output", type=Path, default=None, help="Write the rendered search (image input only)")
    parser.add_argument("--log-level", default=None, help="Console log level (DEBUG/INFO/WARNING)")
    parser.add_argument("--run-id", default=None, help="Run identifier attached to log lines")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        set_log_level(args.log_level)
    if args.run_id:
        set_run_id(args.run_id)

    if args.output is not None and args.image is None:
        parser.error("--output requires --image")

    try:
        defaults = load_search_defaults(args.kernels_file)
        preset = get_kernel_preset(args.kernel or defaults.kernel, args.kernels_file)
        max_expansions = args.max_expansions if args.max_expansions is not None else defaults.max_expansions

        canvas = None
        if args.image is not None:
            grid = grid_from_image(args.image)
            canvas = SearchCanvas(args.image)
        else:
            grid = load_text_grid(args.grid)

        finder = Pathfinder(
            grid,
            heuristic=get_heuristic(preset.heuristic),
            on_node_finalized=canvas.on_node_finalized if canvas else None,
            on_path_emitted=canvas.on_path_emitted if canvas else None,
            max_expansions=max_expansions,
        )
        logger.info(
            "searching %s -> %s on %dx%d grid with kernel '%s'",
            args.start, args.goal, grid.width, grid.height, preset.name,
        )
        result = finder.search(Coordinate(*args.start), Coordinate(*args.goal), preset.kernel)
    except (PathfindingError, FileNotFoundError, OSError, ValueError) as e:
        logger.error("invalid input: %s", e)
        return EXIT_INVALID

    if canvas is not None and args.output is not None:
        out = canvas.save(args.output)
        logger.info("rendered search written to %s", out)

    if not result.reachable:
        err = (
            SearchBudgetExceededError("search budget exhausted", f"expanded={result.expanded}")
            if result.reason == "max_expansions_reached"
            else NoPathFoundError(f"no path from {args.start} to {args.goal}", f"expanded={result.expanded}")
        )
        logger.warning("%s", err)
        print(f"[GRIDPATH] {err}")
        return EXIT_NO_PATH

    if args.image is None:
        print(format_path(grid, result.path))
    print(f"[GRIDPATH] path length={len(result.path)} cost={result.cost:.4f} expanded={result.expanded}")
    print("[GRIDPATH] path=" + " ".join(f"({c.x},{c.y})" for c in result.path))
    logger.info("path found: length=%d cost=%.4f", len(result.path), result.cost)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

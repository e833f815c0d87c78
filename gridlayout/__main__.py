"""
gridlayout — command line entry point.

Usage:
    python -m gridlayout layout cells.json                 # JSON to stdout
    python -m gridlayout layout cells.json --lines --out grid.json
    python -m gridlayout place cells.json --column-count 3

The input file holds ``{"cells": [...], "options": {...}}``; flags
override the options from the file.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .lines import create_lines
from .models import ConfigurationError
from .pipeline import layout_grid, place
from .serialization import lines_to_dict, parse_cells, parse_config, placement_to_dict


log = logging.getLogger("gridlayout")

_OPTION_FLAGS = (
    ("column_count", "--column-count"),
    ("row_gap", "--row-gap"),
    ("column_gap", "--column-gap"),
    ("x_start", "--x-start"),
    ("y_start", "--y-start"),
    ("min_row_height", "--min-row-height"),
    ("min_column_width", "--min-column-width"),
)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gridlayout", description="Grid auto-placement and sizing")
    sub = p.add_subparsers(dest="cmd", required=True)

    lay = sub.add_parser("layout", help="Place, size and position cells")
    lay.add_argument("input", help="Path to a cells JSON file")
    lay.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    lay.add_argument("--lines", action="store_true", help="Include grid lines and intersections")
    for dest, flag in _OPTION_FLAGS:
        lay.add_argument(flag, dest=dest, type=int, default=None)
    lay.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    pl = sub.add_parser("place", help="Place cells by row and column only")
    pl.add_argument("input", help="Path to a cells JSON file")
    pl.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    pl.add_argument("--column-count", dest="column_count", type=int, default=None)
    pl.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    return p


def _load(path: Path) -> tuple[list, dict]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, list):
        return raw, {}
    if not isinstance(raw, dict) or "cells" not in raw:
        raise ConfigurationError(f"{path}: expected a list of cells or an object with 'cells'")
    return raw["cells"], raw.get("options") or {}


def run(args: argparse.Namespace) -> dict:
    """Execute one command and return the JSON-safe result."""
    raw_cells, raw_options = _load(Path(args.input))
    cells = parse_cells(raw_cells)
    config = parse_config(raw_options)
    overrides = {dest: getattr(args, dest, None) for dest, _ in _OPTION_FLAGS}
    config = config.merged(**overrides)

    if args.cmd == "place":
        return placement_to_dict(place(cells, config))

    result = layout_grid(cells, config)
    out = placement_to_dict(result)
    if args.lines:
        out["lines"] = lines_to_dict(create_lines(
            result.cells, row_gap=config.row_gap, column_gap=config.column_gap,
        ))
    return out


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = run(args)
    except (ConfigurationError, OSError, json.JSONDecodeError) as exc:
        log.error("%s", exc)
        return 2

    text = json.dumps(result, indent=2)
    if args.out:
        Path(args.out).write_text(text + "\n", encoding="utf-8")
        log.info("Wrote %s", args.out)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())

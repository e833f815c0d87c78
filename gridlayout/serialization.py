"""Layout serialization — JSON conversion of cells, placements and lines."""

from __future__ import annotations

from dataclasses import fields

from .config import LayoutConfig
from .models import Cell, ConfigurationError, GridLines, Placement


_CELL_FIELDS = tuple(f.name for f in fields(Cell))
_INT_OPTIONS = ("column_count", "row_gap", "column_gap", "x_start", "y_start",
                "min_row_height", "min_column_width")


def cell_to_dict(c: Cell) -> dict:
    """Serialize a Cell to a dict (``data`` is passed through as-is)."""
    return {name: getattr(c, name) for name in _CELL_FIELDS}


def parse_cell(data: dict) -> Cell:
    """Parse a cell dict; missing fields take the Cell defaults."""
    if not isinstance(data, dict):
        raise ConfigurationError(f"Cell must be an object, got {type(data).__name__}")
    unknown = sorted(set(data) - set(_CELL_FIELDS))
    if unknown:
        raise ConfigurationError(f"Unknown cell field(s): {', '.join(unknown)}")
    for name in ("row_span", "column_span", "cell_height", "cell_width"):
        if name in data and (not isinstance(data[name], int) or isinstance(data[name], bool)):
            raise ConfigurationError(f"Cell field '{name}' must be an integer, got {data[name]!r}")
    return Cell(**data)


def cells_to_list(cells: list[Cell]) -> list[dict]:
    return [cell_to_dict(c) for c in cells]


def parse_cells(data: list) -> list[Cell]:
    if not isinstance(data, list):
        raise ConfigurationError(f"'cells' must be a list, got {type(data).__name__}")
    return [parse_cell(c) for c in data]


def placement_to_dict(placement: Placement) -> dict:
    """Serialize a Placement to a JSON-safe dict."""
    return {
        "row_count": placement.row_count,
        "column_count": placement.column_count,
        "cells": cells_to_list(placement.cells),
    }


def parse_placement(data: dict) -> Placement:
    """Parse a placement dict back into a Placement."""
    return Placement(
        cells=parse_cells(data["cells"]),
        row_count=data["row_count"],
        column_count=data["column_count"],
    )


def lines_to_dict(lines: GridLines) -> dict:
    """Serialize GridLines to a JSON-safe dict.

    Intersections become a list sorted by (y, x) because JSON objects
    cannot be keyed by coordinate pairs.
    """
    return {
        "horizontal_lines": [[list(p1), list(p2)] for p1, p2 in lines.horizontal_lines],
        "vertical_lines": [[list(p1), list(p2)] for p1, p2 in lines.vertical_lines],
        "intersections": [
            {"x": x, "y": y, "directions": sorted(dirs)}
            for (x, y), dirs in sorted(lines.intersections.items(),
                                       key=lambda item: (item[0][1], item[0][0]))
        ],
    }


def parse_config(data: dict | None) -> LayoutConfig:
    """Build a LayoutConfig from an options dict (e.g. from a JSON file)."""
    if not data:
        return LayoutConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"'options' must be an object, got {type(data).__name__}")

    options = dict(data)
    for name in _INT_OPTIONS:
        if name in options and (not isinstance(options[name], int)
                                or isinstance(options[name], bool)):
            raise ConfigurationError(f"Option '{name}' must be an integer, "
                                     f"got {options[name]!r}")
    if options.get("empty") is not None:
        options["empty"] = parse_cell(options["empty"])

    return LayoutConfig().merged(**options)

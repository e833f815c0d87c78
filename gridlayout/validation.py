"""Layout validation — check configs, tilings and positioned cells.

Every check returns a list of human-readable problems (empty = valid).
Geometric checks build shapely boxes for cell footprints so overlaps and
holes are measured as areas rather than slot by slot.
"""

from __future__ import annotations

from shapely.geometry import box as shapely_box
from shapely.ops import unary_union
from shapely.strtree import STRtree

from .config import LayoutConfig
from .models import Cell, Placement


def validate_config(config: LayoutConfig) -> list[str]:
    """Validate option values. Returns error messages (empty = valid)."""
    errors: list[str] = []

    for name in ("column_count", "row_gap", "column_gap", "x_start",
                 "y_start", "min_row_height", "min_column_width"):
        value = getattr(config, name)
        if not isinstance(value, int) or isinstance(value, bool):
            errors.append(f"'{name}' must be an integer, got {value!r}")

    if errors:
        return errors

    if config.column_count < 1:
        errors.append(f"'column_count' must be >= 1, got {config.column_count}")
    for name in ("row_gap", "column_gap", "min_row_height", "min_column_width"):
        if getattr(config, name) < 0:
            errors.append(f"'{name}' must be >= 0, got {getattr(config, name)}")

    if config.empty is not None and not isinstance(config.empty, Cell):
        errors.append(f"'empty' must be a Cell, got {type(config.empty).__name__}")

    return errors


def _label(c: Cell) -> str:
    kind = "filler" if c.empty else repr(c.data)
    return f"{kind} at ({c.row}, {c.column})"


def validate_tiling(placement: Placement) -> list[str]:
    """Check that placed cells cover the grid exactly once.

    Also reports fillers that should have been merged: two empty cells
    with the same column range on vertically consecutive rows.
    """
    cells, row_count, column_count = placement
    errors: list[str] = []

    unplaced = [c for c in cells if c.row is None or c.column is None]
    if unplaced:
        return [f"{len(unplaced)} cell(s) have no row/column"]

    grid = shapely_box(0, 0, column_count, row_count)
    rects = [shapely_box(c.column, c.row, c.last_column, c.last_row) for c in cells]

    # ── Footprints inside the grid ──
    for c, r in zip(cells, rects):
        if not grid.contains(r):
            errors.append(f"Cell {_label(c)} extends outside the "
                          f"{row_count}x{column_count} grid")

    # ── No overlaps ──
    tree = STRtree(rects) if rects else None
    for i, r in enumerate(rects):
        for j in tree.query(r):
            j = int(j)
            if j <= i:
                continue
            if r.intersection(rects[j]).area > 0:
                errors.append(f"Cell {_label(cells[i])} overlaps "
                              f"cell {_label(cells[j])}")

    # ── No holes ──
    covered = unary_union(rects) if rects else None
    uncovered = grid.area if covered is None else grid.difference(covered).area
    if uncovered > 0:
        errors.append(f"{uncovered:.0f} slot(s) of the grid are not covered")

    # ── Fillers merged ──
    open_fillers: dict[tuple[int, int], Cell] = {}
    for c in sorted((c for c in cells if c.empty), key=lambda c: (c.row, c.column)):
        key = (c.column, c.column_span)
        above = open_fillers.get(key)
        if above is not None and above.last_row == c.row:
            errors.append(f"Filler {_label(c)} was not merged with "
                          f"filler {_label(above)}")
        open_fillers[key] = c

    return errors


def validate_positions(
    cells: list[Cell],
    row_gap: int = 0,
    column_gap: int = 0,
) -> list[str]:
    """Check that positioned cells never overlap nor crowd each other.

    Any two cells must be at least ``min(row_gap, column_gap)`` apart.
    """
    errors: list[str] = []
    if not cells:
        return errors

    unpositioned = [c for c in cells if c.x is None or c.y is None]
    if unpositioned:
        return [f"{len(unpositioned)} cell(s) have no x/y"]

    min_gap = min(row_gap, column_gap)
    rects = [shapely_box(c.x, c.y, c.x + c.cell_width, c.y + c.cell_height)
             for c in cells]
    tree = STRtree(rects)

    for i, r in enumerate(rects):
        minx, miny, maxx, maxy = r.bounds
        probe = shapely_box(minx - min_gap, miny - min_gap,
                            maxx + min_gap, maxy + min_gap)
        for j in tree.query(probe):
            j = int(j)
            if j <= i:
                continue
            other = rects[j]
            if r.intersection(other).area > 0:
                errors.append(f"Cell {_label(cells[i])} overlaps "
                              f"cell {_label(cells[j])}")
            elif r.distance(other) < min_gap:
                errors.append(
                    f"Cells {_label(cells[i])} and {_label(cells[j])} are "
                    f"{r.distance(other):.0f} apart (gap {min_gap})"
                )

    return errors

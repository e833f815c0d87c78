"""Line builder — boundary segments and junctions for positioned cells.

        0 1 2 3 4
      0 ╭───┬───╮   (row_gap=1, column_gap=1)
      1 │ A │ B │
      2 ├───┼───┤
      3 │ C │ D │
      4 ╰───┴───╯

Each cell is outlined half a gap outside its own rectangle, so the line
shared by two neighbours runs through the middle of the gap between
them.  Odd gaps put the extra unit on the top / left side.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from ..config import LINE_COLUMN_GAP, LINE_ROW_GAP
from ..models import DOWN, LEFT, RIGHT, UP, Cell, GridLines, Point
from .segments import Triple, merge_segments


log = logging.getLogger(__name__)


def split_gap(gap: int) -> tuple[int, int]:
    """Return ``(near, far)`` with ``near = gap // 2`` and ``far`` the rest."""
    near = gap // 2
    return near, gap - near


def create_lines(
    cells: list[Cell],
    *,
    row_gap: int = LINE_ROW_GAP,
    column_gap: int = LINE_COLUMN_GAP,
) -> GridLines:
    """Derive the grid lines and their intersections from positioned cells.

    Parameters
    ----------
    cells : list[Cell]
        Cells with ``x``, ``y``, ``cell_width`` and ``cell_height`` set
        (the output of ``position_cells``).
    row_gap, column_gap : int
        The gaps the cells were positioned with.

    Returns
    -------
    GridLines
        Maximal horizontal / vertical segments as endpoint pairs and, for
        every cell corner, the set of directions lines leave it in.
    """
    row_near, row_far = split_gap(row_gap)
    column_near, column_far = split_gap(column_gap)

    horizontal: list[Triple] = []
    vertical: list[Triple] = []
    junctions: dict[Point, set[str]] = defaultdict(set)

    for c in cells:
        left = c.x - column_far
        right = c.x + c.cell_width + column_near
        top = c.y - row_far
        bottom = c.y + c.cell_height + row_near

        horizontal.append((top, left, right))
        horizontal.append((bottom, left, right))
        vertical.append((left, top, bottom))
        vertical.append((right, top, bottom))

        junctions[(left, top)].update((RIGHT, DOWN))
        junctions[(right, top)].update((LEFT, DOWN))
        junctions[(left, bottom)].update((RIGHT, UP))
        junctions[(right, bottom)].update((LEFT, UP))

    h_lines = [((x1, y), (x2, y)) for y, x1, x2 in merge_segments(horizontal)]
    v_lines = [((x, y1), (x, y2)) for x, y1, y2 in merge_segments(vertical)]

    log.debug("Lines: %d cells -> %d horizontal, %d vertical, %d intersections",
              len(cells), len(h_lines), len(v_lines), len(junctions))

    return GridLines(
        horizontal_lines=h_lines,
        vertical_lines=v_lines,
        intersections={p: frozenset(d) for p, d in junctions.items()},
    )

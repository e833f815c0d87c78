"""Positioner — converts row/column slots into absolute x/y offsets.

        (x_start, y_start) = (0, 0)
           x=0  1   2   3   4   5
            |   |   |   |   |   |
      y=0 ─ ╭───╮   ╭───╮   ╭───╮
            │ A │   │ B │   │ C │
        1 ─ ╰───╯   ╰───╯   ╰───╯ ┐
                                  ┊ row_gap=1
        2 ─ ╭───╮   ╭───────────╮ ┘
            │ D │   │ E       E │
        3 ─ ╰───╯   ╰───────────╯
                └─┄─┘
             column_gap=1

A cell spanning several rows or columns absorbs the gaps inside its
footprint, so E above is 3 wide rather than 2.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from .config import COLUMN_GAP, ROW_GAP, X_START, Y_START
from .models import Cell


log = logging.getLogger(__name__)


def position_cells(
    cells: list[Cell],
    *,
    row_gap: int = ROW_GAP,
    column_gap: int = COLUMN_GAP,
    x_start: int = X_START,
    y_start: int = Y_START,
) -> list[Cell]:
    """Set ``x`` / ``y`` of sized cells and widen spanning cells by their gaps.

    ``cells`` must be sorted row-major, with every cell in a row sharing
    the row height and every cell in a column the column width (i.e.
    the output of ``size_cells``).  This is not re-checked.

    The offset of a row / column is recorded the first time a cell ending
    just before it is seen; later cells reuse that offset.
    """
    y_by_row: dict[int, int] = {}
    x_by_column: dict[int, int] = {}
    positioned: list[Cell] = []

    for c in cells:
        x = x_by_column.get(c.column, x_start)
        y = y_by_row.get(c.row, y_start)
        c = replace(
            c, x=x, y=y,
            cell_height=c.cell_height + (c.row_span - 1) * row_gap,
            cell_width=c.cell_width + (c.column_span - 1) * column_gap,
        )
        y_by_row.setdefault(c.last_row, y + c.cell_height + row_gap)
        x_by_column.setdefault(c.last_column, x + c.cell_width + column_gap)
        positioned.append(c)

    log.debug("Positioned %d cells (row_gap=%d, column_gap=%d, origin=(%d, %d))",
              len(positioned), row_gap, column_gap, x_start, y_start)
    return positioned

"""Sizing engine — resolves row heights and column widths."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..config import MIN_COLUMN_WIDTH, MIN_ROW_HEIGHT
from ..models import Cell, sort_key
from .tracks import COLUMNS, ROWS, check_bounds, spanned_size, track_sizes


log = logging.getLogger(__name__)


def size_cells(
    cells: list[Cell],
    row_count: int,
    column_count: int,
    *,
    min_row_height: int = MIN_ROW_HEIGHT,
    min_column_width: int = MIN_COLUMN_WIDTH,
) -> list[Cell]:
    """Give every cell the height of its rows and the width of its columns.

    Each row becomes as tall as its tallest single-row cell; a cell
    spanning several rows grows those rows evenly when it needs more
    than they provide.  Columns follow the same rule with widths.
    ``cell_height`` / ``cell_width`` of the returned cells are the sums
    over the spanned rows / columns.

    Parameters
    ----------
    cells : list[Cell]
        Placed cells (``row`` / ``column`` set), normally the output of
        ``place_cells``.
    row_count, column_count : int
        Grid dimensions the cells were placed in.
    min_row_height, min_column_width : int
        Size of rows / columns no cell constrains.

    Returns
    -------
    list[Cell]
        New cells, in the input order, with resolved sizes.

    Raises
    ------
    ConfigurationError
        If a cell is unplaced or reaches outside the given dimensions.
    """
    check_bounds(cells, row_count, ROWS)
    check_bounds(cells, column_count, COLUMNS)

    ordered = sorted(cells, key=sort_key)
    heights = track_sizes(ordered, row_count, ROWS, min_row_height)
    widths = track_sizes(ordered, column_count, COLUMNS, min_column_width)

    log.info("Sized %d rows (total %d) x %d columns (total %d)",
             row_count, sum(heights), column_count, sum(widths))

    return [
        replace(
            c,
            cell_height=spanned_size(heights, c.row, c.row_span),
            cell_width=spanned_size(widths, c.column, c.column_span),
        )
        for c in cells
    ]

"""Main placement engine — row-major auto-placement with filler cells."""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum, auto

from ..config import COLUMN_COUNT
from ..models import Cell, ConfigurationError, Placement, sort_key
from .merge import merge_empty_cells
from .occupancy import OccupancySet


log = logging.getLogger(__name__)


class SlotState(Enum):
    """What the placer finds at the cursor, one action per state."""

    OCCUPIED = auto()               # reserved by a spanning cell above
    GAP_FILL = auto()               # no demand left, reserved slot ahead on row
    ROW_FILL = auto()               # no demand left, rest of row free
    BLOCKED_BY_GAP = auto()         # next cell wider than the gap
    BLOCKED_BY_ROW_END = auto()     # next cell wider than the rest of the row
    FITS_BEFORE_GAP = auto()
    FITS_TO_ROW_END = auto()
    ROW_COMPLETE_CONTINUE = auto()
    ROW_COMPLETE_DONE = auto()


def classify_slot(
    row: int,
    column: int,
    pending: Cell | None,
    occupied: OccupancySet,
    column_count: int,
) -> SlotState:
    """Classify the cursor slot given the next demand cell (or None)."""
    if column >= column_count:
        if pending is None and not occupied.has_row(row + 1):
            return SlotState.ROW_COMPLETE_DONE
        return SlotState.ROW_COMPLETE_CONTINUE

    if occupied.peek() == (row, column):
        return SlotState.OCCUPIED

    gap_end = occupied.next_on_row(row)

    if pending is None:
        return SlotState.ROW_FILL if gap_end is None else SlotState.GAP_FILL

    if gap_end is not None:
        if gap_end - column >= pending.column_span:
            return SlotState.FITS_BEFORE_GAP
        return SlotState.BLOCKED_BY_GAP

    if column + pending.column_span <= column_count:
        return SlotState.FITS_TO_ROW_END
    return SlotState.BLOCKED_BY_ROW_END


def _make_filler(template: Cell, row: int, column: int, width: int) -> Cell:
    return replace(
        template,
        row=row, column=column,
        row_span=1, column_span=width,
        empty=True,
    )


def effective_column_count(cells: list[Cell], column_count: int) -> int:
    """Grow ``column_count`` so the widest cell fits on one row."""
    if not cells:
        return column_count
    return max(column_count, max(c.column_span for c in cells))


def _check_inputs(cells: list[Cell], column_count: int) -> None:
    if column_count < 1:
        raise ConfigurationError(f"column_count must be >= 1, got {column_count}")
    for i, c in enumerate(cells):
        if c.row_span < 1 or c.column_span < 1:
            raise ConfigurationError(
                f"Cell {i} ({c.data!r}): spans must be >= 1, "
                f"got row_span={c.row_span}, column_span={c.column_span}"
            )


# ── Main placement function ───────────────────────────────────────


def place_cells(
    cells: list[Cell],
    *,
    column_count: int = COLUMN_COUNT,
    empty: Cell | None = None,
) -> Placement:
    """Assign every cell a row and column, filling gaps with empty cells.

    Cells are placed in the order given, left to right and top to
    bottom.  A cell that does not fit in the space left before the next
    reserved slot (or the row end) is retried after an empty filler has
    been inserted in its place.  Vertically stacked fillers of the same
    width are merged afterwards.

    Parameters
    ----------
    cells : list[Cell]
        Demand cells.  Their ``row`` / ``column`` are ignored.
    column_count : int
        Minimum number of columns (grown to the widest ``column_span``).
    empty : Cell | None
        Template for filler cells.

    Returns
    -------
    Placement
        Row-major cells tiling the whole grid, plus its dimensions.

    Raises
    ------
    ConfigurationError
        If ``column_count`` or a cell span is below 1.
    """
    _check_inputs(cells, column_count)
    template = empty if empty is not None else Cell(None)
    column_count = effective_column_count(cells, column_count)

    explicit = sum(1 for c in cells if c.row is not None or c.column is not None)
    if explicit:
        log.debug("Ignoring explicit row/column on %d cell(s): "
                  "only auto-placement is supported", explicit)

    placed: list[Cell] = []
    occupied = OccupancySet()
    row = column = 0
    next_index = 0

    while True:
        pending = cells[next_index] if next_index < len(cells) else None
        state = classify_slot(row, column, pending, occupied, column_count)

        if state is SlotState.OCCUPIED:
            occupied.pop()
            column += 1

        elif state in (SlotState.GAP_FILL, SlotState.BLOCKED_BY_GAP):
            width = occupied.next_on_row(row) - column
            placed.append(_make_filler(template, row, column, width))
            log.debug("Filler at (%d, %d) width=%d before reserved slot",
                      row, column, width)
            column += width

        elif state in (SlotState.ROW_FILL, SlotState.BLOCKED_BY_ROW_END):
            width = column_count - column
            placed.append(_make_filler(template, row, column, width))
            log.debug("Filler at (%d, %d) width=%d to row end",
                      row, column, width)
            column = column_count

        elif state in (SlotState.FITS_BEFORE_GAP, SlotState.FITS_TO_ROW_END):
            c = replace(pending, row=row, column=column)
            placed.append(c)
            if c.row_span > 1:
                occupied.reserve(c)
            column += c.column_span
            next_index += 1

        elif state is SlotState.ROW_COMPLETE_CONTINUE:
            row += 1
            column = 0

        else:   # ROW_COMPLETE_DONE
            break

    row_count = row + 1
    result = sorted(merge_empty_cells(placed), key=sort_key)

    log.info("Placed %d cells (%d fillers) in %d rows x %d columns",
             len(cells), sum(1 for c in result if c.empty),
             row_count, column_count)

    return Placement(cells=result, row_count=row_count, column_count=column_count)

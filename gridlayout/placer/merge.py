"""Filler post-pass — coalesce vertically stacked empty cells.

Before:                After:

  ╭───┬──────╮           ╭───┬──────╮
  │ 1 │ E  E │           │ 1 │ E  E │
  ├───┼──────┤           ├───┤      │
  │ 3 │ E  E │           │ 3 │ E  E │
  ╰───┴──────╯           ╰───┴──────╯
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..models import Cell, sort_key


log = logging.getLogger(__name__)


def merge_empty_cells(cells: list[Cell]) -> list[Cell]:
    """Merge fillers sharing ``column`` and ``column_span`` on consecutive rows.

    The merged filler keeps the top row and the summed ``row_span``.
    Non-empty cells are passed through untouched.  Returns new filler
    objects; the input list is not modified.
    """
    result: list[Cell] = []
    # (column, column_span) -> latest filler that can still grow downwards
    open_fillers: dict[tuple[int, int], Cell] = {}
    merged = 0

    for c in sorted(cells, key=sort_key):
        if not c.empty:
            result.append(c)
            continue

        key = (c.column, c.column_span)
        candidate = open_fillers.get(key)
        if candidate is not None and candidate.last_row == c.row:
            candidate.row_span += c.row_span
            merged += 1
            continue

        filler = replace(c)
        open_fillers[key] = filler
        result.append(filler)

    if merged:
        log.debug("Merged %d filler(s) into taller fillers", merged)
    return result

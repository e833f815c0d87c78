"""Per-axis track sizing.

A *track* is one row or one column.  Rows and columns are sized by the
same two-phase rule, so everything here works on an ``Axis`` that names
the Cell attributes to read:

  phase 1   every track gets the largest demand of the single-span cells
            in it, never less than the axis minimum
  phase 2   spanning cells, in row-major order, spread whatever their
            demand exceeds the tracks they cover evenly over those
            tracks; the first ``excess % span`` tracks get one extra unit
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..models import Cell, ConfigurationError


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Axis:
    """Attribute names describing one grid axis on a Cell."""

    name: str       # "row" or "column"
    index: str
    span: str
    size: str

    def start(self, cell: Cell) -> int:
        return getattr(cell, self.index)

    def extent(self, cell: Cell) -> int:
        return getattr(cell, self.span)

    def demand(self, cell: Cell) -> int:
        return getattr(cell, self.size)


ROWS = Axis(name="row", index="row", span="row_span", size="cell_height")
COLUMNS = Axis(name="column", index="column", span="column_span", size="cell_width")


def check_bounds(cells: list[Cell], count: int, axis: Axis) -> None:
    """Raise ConfigurationError if a cell reaches outside ``count`` tracks."""
    if count < 0:
        raise ConfigurationError(f"{axis.name}_count must be >= 0, got {count}")
    for c in cells:
        start = axis.start(c)
        if start is None:
            raise ConfigurationError(
                f"Cell {c.data!r} has no {axis.name}; place the cells first"
            )
        end = start + axis.extent(c)
        if start < 0 or end > count:
            raise ConfigurationError(
                f"Cell {c.data!r} covers {axis.name}s {start}..{end - 1} "
                f"but the grid has only {count} {axis.name}(s)"
            )


def base_sizes(cells: list[Cell], count: int, axis: Axis, minimum: int) -> list[int]:
    """Phase 1: sizes from single-span demands and the minimum."""
    sizes = [minimum] * count
    for c in cells:
        if axis.extent(c) == 1:
            t = axis.start(c)
            sizes[t] = max(sizes[t], axis.demand(c))
    return sizes


def spanned_size(sizes: list[int], start: int, span: int) -> int:
    return sum(sizes[start:start + span])


def distribute_excess(sizes: list[int], start: int, span: int, demand: int) -> int:
    """Grow ``sizes[start:start+span]`` in place until they sum to ``demand``.

    Returns the amount added (0 if the tracks were already big enough).
    """
    excess = demand - spanned_size(sizes, start, span)
    if excess <= 0:
        return 0
    share, remainder = divmod(excess, span)
    for i in range(span):
        sizes[start + i] += share + (1 if i < remainder else 0)
    return excess


def track_sizes(cells: list[Cell], count: int, axis: Axis, minimum: int) -> list[int]:
    """Resolve every track size along ``axis``.

    ``cells`` must already be in row-major order: spanning cells are
    applied in list order and see the growth caused by earlier ones.
    """
    sizes = base_sizes(cells, count, axis, minimum)
    for c in cells:
        span = axis.extent(c)
        if span < 2:
            continue
        added = distribute_excess(sizes, axis.start(c), span, axis.demand(c))
        if added:
            log.debug("%s-spanning cell %r: +%d over %ss %d..%d",
                      axis.name.capitalize(), c.data, added, axis.name,
                      axis.start(c), axis.start(c) + span - 1)
    return sizes

"""Ordered set of slots claimed by the future rows of spanning cells.

Only slots *below* the cursor row are ever inserted: when a cell with
``row_span > 1`` is placed, its footprint on the following rows is
reserved here so the placer skips it when the cursor gets there.
Because the cursor walks the grid row-major and pops reserved slots as
it reaches them, the minimum entry is always the next reserved slot at
or after the cursor.
"""

from __future__ import annotations

import heapq

from ..models import Cell


class OccupancySet:
    """Binary heap of ``(row, column)`` slots with O(1) membership."""

    def __init__(self) -> None:
        self._heap: list[tuple[int, int]] = []
        self._members: set[tuple[int, int]] = set()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, slot: tuple[int, int]) -> bool:
        return slot in self._members

    def add(self, slot: tuple[int, int]) -> None:
        if slot in self._members:
            return
        self._members.add(slot)
        heapq.heappush(self._heap, slot)

    def reserve(self, cell: Cell) -> None:
        """Reserve the footprint of a placed cell below its first row."""
        for r in range(cell.row + 1, cell.last_row):
            for c in range(cell.column, cell.last_column):
                self.add((r, c))

    def peek(self) -> tuple[int, int] | None:
        """Smallest reserved slot, or None when nothing is reserved."""
        return self._heap[0] if self._heap else None

    def pop(self) -> tuple[int, int]:
        slot = heapq.heappop(self._heap)
        self._members.discard(slot)
        return slot

    def next_on_row(self, row: int) -> int | None:
        """Column of the next reserved slot on ``row``, if any."""
        head = self.peek()
        if head is not None and head[0] == row:
            return head[1]
        return None

    def has_row(self, row: int) -> bool:
        """True if any slot on ``row`` is reserved.

        Valid for rows at or after the cursor row: earlier slots have
        already been popped.
        """
        head = self.peek()
        if head is None or head[0] > row:
            return False
        if head[0] == row:
            return True
        return any(r == row for r, _ in self._heap)

    def to_list(self) -> list[tuple[int, int]]:
        """Reserved slots in row-major order."""
        return sorted(self._heap)

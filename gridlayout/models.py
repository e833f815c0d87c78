"""Grid dataclasses shared by every stage — cells, placements, lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, NamedTuple


# ── Directions ─────────────────────────────────────────────────────

UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)


# ── Cells ──────────────────────────────────────────────────────────


@dataclass
class Cell:
    """A unit of content with a grid footprint and a size.

    ``cell_height`` / ``cell_width`` hold the intrinsic demand on input
    and the resolved size once the sizer and positioner have run.
    ``row`` / ``column`` are set by the placer, ``x`` / ``y`` by the
    positioner.
    """

    data: Any = None
    row: int | None = None
    column: int | None = None
    row_span: int = 1
    column_span: int = 1
    cell_height: int = 1
    cell_width: int = 1
    empty: bool = False         # synthetic filler
    x: int | None = None
    y: int | None = None

    @property
    def last_row(self) -> int:
        """Row index just past the footprint."""
        return self.row + self.row_span

    @property
    def last_column(self) -> int:
        """Column index just past the footprint."""
        return self.column + self.column_span

    def footprint(self) -> Iterator[tuple[int, int]]:
        """Yield every (row, column) slot the placed cell covers."""
        for r in range(self.row, self.last_row):
            for c in range(self.column, self.last_column):
                yield (r, c)


def cell(data: Any = None, **options: Any) -> Cell:
    """Create a cell; ``options`` are any of the Cell fields."""
    return Cell(data, **options)


def sort_key(c: Cell) -> tuple[int, int]:
    """Row-major ordering key for placed cells."""
    return (c.row, c.column)


# ── Stage outputs ──────────────────────────────────────────────────


class Placement(NamedTuple):
    """Placed cells plus the resolved grid dimensions."""

    cells: list[Cell]
    row_count: int
    column_count: int


Point = tuple[int, int]
Segment = tuple[Point, Point]


@dataclass
class GridLines:
    """Boundary segments and junctions derived from positioned cells."""

    horizontal_lines: list[Segment] = field(default_factory=list)
    vertical_lines: list[Segment] = field(default_factory=list)
    intersections: dict[Point, frozenset[str]] = field(default_factory=dict)


# ── Errors ─────────────────────────────────────────────────────────


class ConfigurationError(Exception):
    """Raised when options or cells contradict the grid they describe."""

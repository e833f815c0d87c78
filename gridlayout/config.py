"""Layout options shared by the placer, sizer and positioner.

The defaults below are the single source of truth: every stage function
takes its keyword defaults from the module-level constants derived from
``DEFAULT_CONFIG``, and the ``layout`` facade passes a ``LayoutConfig``
through all three stages so they stay in sync.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

from .models import Cell, ConfigurationError


@dataclass
class LayoutConfig:
    """All tuneable layout parameters in one place.

    Sizes and offsets are opaque integer units.
    """

    column_count: int = 1
    """Minimum grid width.  Grown when a cell spans more columns."""

    row_gap: int = 1
    """Spacing between adjacent rows."""

    column_gap: int = 1
    """Spacing between adjacent columns."""

    x_start: int = 0
    """x coordinate of the first column."""

    y_start: int = 0
    """y coordinate of the first row."""

    min_row_height: int = 1
    """Height given to rows no cell constrains."""

    min_column_width: int = 1
    """Width given to columns no cell constrains."""

    empty: Cell | None = None
    """Template for synthetic filler cells (``Cell(None)`` when unset)."""

    def merged(self, **overrides) -> LayoutConfig:
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(f"Unknown layout option(s): {', '.join(unknown)}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


# Module-level defaults (used when no LayoutConfig is passed)
DEFAULT_CONFIG = LayoutConfig()

COLUMN_COUNT = DEFAULT_CONFIG.column_count
ROW_GAP = DEFAULT_CONFIG.row_gap
COLUMN_GAP = DEFAULT_CONFIG.column_gap
X_START = DEFAULT_CONFIG.x_start
Y_START = DEFAULT_CONFIG.y_start
MIN_ROW_HEIGHT = DEFAULT_CONFIG.min_row_height
MIN_COLUMN_WIDTH = DEFAULT_CONFIG.min_column_width

# Line building centres each gridline in the gap it is given; by default
# cells are assumed to touch.
LINE_ROW_GAP = 0
LINE_COLUMN_GAP = 0

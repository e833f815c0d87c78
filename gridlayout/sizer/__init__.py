"""Sizer — resolves row heights and column widths from cell demands.

Submodules:
  tracks        Per-axis two-phase track sizing.
  engine        size_cells (both axes, writes sizes back to cells).
"""

from .tracks import Axis, ROWS, COLUMNS, track_sizes, distribute_excess
from .engine import size_cells

__all__ = [
    "Axis", "ROWS", "COLUMNS", "track_sizes", "distribute_excess",
    "size_cells",
]

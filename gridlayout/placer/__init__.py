"""Placer — assigns every cell a row and column slot.

Submodules:
  occupancy     Ordered set of slots reserved by row-spanning cells.
  merge         Post-pass coalescing vertically stacked fillers.
  engine        Main placement algorithm (slot-state walk, fillers).
"""

from .occupancy import OccupancySet
from .merge import merge_empty_cells
from .engine import SlotState, classify_slot, effective_column_count, place_cells

__all__ = [
    "OccupancySet",
    "merge_empty_cells",
    "SlotState", "classify_slot", "effective_column_count", "place_cells",
]

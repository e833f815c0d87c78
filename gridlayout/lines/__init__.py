"""Lines — boundary segments and junction metadata for drawing a grid.

Submodules:
  segments      Collinear segment merging.
  engine        create_lines (per-cell outlines, intersections).
"""

from .segments import merge_segments
from .engine import create_lines, split_gap

__all__ = ["merge_segments", "create_lines", "split_gap"]

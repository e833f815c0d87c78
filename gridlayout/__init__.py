"""gridlayout — grid auto-placement, sizing, positioning and grid lines.

Stages, in order:

  placer        assign each cell a row / column slot, fill gaps with
                empty cells
  sizer         resolve row heights and column widths from cell demands
  positioner    turn slots into x / y offsets with gaps between cells
  lines         boundary segments and junctions for drawing the grid

``layout`` runs the first three; ``create_lines`` consumes its output.
"""

from .config import LayoutConfig
from .models import (
    Cell, cell, Placement, GridLines, ConfigurationError,
    UP, DOWN, LEFT, RIGHT,
)
from .placer import place_cells
from .sizer import size_cells
from .positioner import position_cells
from .lines import create_lines
from .pipeline import place, layout, layout_grid

__all__ = [
    # Models
    "Cell", "cell", "Placement", "GridLines", "ConfigurationError",
    "UP", "DOWN", "LEFT", "RIGHT",
    "LayoutConfig",
    # Stages
    "place_cells", "size_cells", "position_cells", "create_lines",
    # Facade
    "place", "layout", "layout_grid",
]

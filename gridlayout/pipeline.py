"""Layout pipeline — runs the stages in order with one shared config.

  place       placer only (rows / columns, fillers)
  layout      placer → sizer → positioner
"""

from __future__ import annotations

import logging

from .config import LayoutConfig
from .models import Cell, ConfigurationError, Placement
from .placer import place_cells
from .positioner import position_cells
from .sizer import size_cells
from .validation import validate_config


log = logging.getLogger(__name__)


def _resolve(config: LayoutConfig | None, overrides: dict) -> LayoutConfig:
    cfg = (config or LayoutConfig()).merged(**overrides)
    errors = validate_config(cfg)
    if errors:
        raise ConfigurationError("; ".join(errors))
    return cfg


def place(cells: list[Cell], config: LayoutConfig | None = None, **overrides) -> Placement:
    """Place cells by row and column only.

    Sizes and positions are left untouched.  Only ``column_count`` and
    ``empty`` are used from the config.
    """
    cfg = _resolve(config, overrides)
    return place_cells(cells, column_count=cfg.column_count, empty=cfg.empty)


def layout_grid(cells: list[Cell], config: LayoutConfig | None = None, **overrides) -> Placement:
    """Place, size and position cells; keep the grid dimensions."""
    cfg = _resolve(config, overrides)
    log.info("Layout: %d cells, column_count=%d, gaps=(%d, %d)",
             len(cells), cfg.column_count, cfg.row_gap, cfg.column_gap)

    placed, row_count, column_count = place_cells(
        cells, column_count=cfg.column_count, empty=cfg.empty,
    )
    sized = size_cells(
        placed, row_count, column_count,
        min_row_height=cfg.min_row_height,
        min_column_width=cfg.min_column_width,
    )
    positioned = position_cells(
        sized,
        row_gap=cfg.row_gap, column_gap=cfg.column_gap,
        x_start=cfg.x_start, y_start=cfg.y_start,
    )
    return Placement(cells=positioned, row_count=row_count, column_count=column_count)


def layout(cells: list[Cell], config: LayoutConfig | None = None, **overrides) -> list[Cell]:
    """Place, size and position cells.

    Sets ``row``, ``column``, ``cell_height``, ``cell_width``, ``x`` and
    ``y`` on every returned cell, fillers included.
    """
    return layout_grid(cells, config, **overrides).cells


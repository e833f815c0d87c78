"""Tests for the placer (auto-placement, fillers, filler merging).

Validates:
  - Cells are placed row-major in the order given
  - Gaps are filled with empty cells of the largest possible width
  - Stacked fillers of the same width are merged
  - column_count grows to fit the widest cell
  - Every placement tiles the grid exactly (checked with shapely)
"""

from __future__ import annotations

import random
import unittest

from shapely.geometry import box as shapely_box
from shapely.ops import unary_union

from gridlayout import Cell, ConfigurationError, Placement, cell
from gridlayout.placer import (
    OccupancySet, SlotState, classify_slot, effective_column_count,
    merge_empty_cells, place_cells,
)
from gridlayout.validation import validate_tiling
from tests.grid_fixture import by_data, covered_slots, make_dashboard_cells


def E(**kw) -> Cell:
    """Expected filler cell."""
    return Cell(None, empty=True, **kw)


class TestOccupancySet(unittest.TestCase):

    def test_pops_in_row_major_order(self):
        occ = OccupancySet()
        for slot in [(2, 0), (1, 3), (1, 1), (2, 2)]:
            occ.add(slot)
        popped = [occ.pop() for _ in range(len(occ))]
        self.assertEqual(popped, [(1, 1), (1, 3), (2, 0), (2, 2)])

    def test_deduplicates(self):
        occ = OccupancySet()
        occ.add((1, 0))
        occ.add((1, 0))
        self.assertEqual(len(occ), 1)
        self.assertIn((1, 0), occ)

    def test_reserve_skips_first_row(self):
        occ = OccupancySet()
        occ.reserve(Cell("x", row=0, column=1, row_span=3, column_span=2))
        self.assertEqual(occ.to_list(), [(1, 1), (1, 2), (2, 1), (2, 2)])

    def test_reserve_single_row_cell_is_noop(self):
        occ = OccupancySet()
        occ.reserve(Cell("x", row=0, column=0, column_span=3))
        self.assertFalse(occ)
        self.assertIsNone(occ.peek())

    def test_next_on_row_and_has_row(self):
        occ = OccupancySet()
        occ.add((1, 2))
        occ.add((2, 0))
        self.assertEqual(occ.next_on_row(1), 2)
        self.assertIsNone(occ.next_on_row(0))
        self.assertTrue(occ.has_row(1))
        self.assertTrue(occ.has_row(2))
        self.assertFalse(occ.has_row(3))


class TestClassifySlot(unittest.TestCase):

    def setUp(self):
        self.occ = OccupancySet()
        self.occ.add((0, 2))

    def test_occupied(self):
        self.assertIs(classify_slot(0, 2, cell("a"), self.occ, 4), SlotState.OCCUPIED)

    def test_fits_before_gap(self):
        state = classify_slot(0, 0, cell("a", column_span=2), self.occ, 4)
        self.assertIs(state, SlotState.FITS_BEFORE_GAP)

    def test_blocked_by_gap(self):
        state = classify_slot(0, 0, cell("a", column_span=3), self.occ, 4)
        self.assertIs(state, SlotState.BLOCKED_BY_GAP)

    def test_gap_fill_without_demand(self):
        self.assertIs(classify_slot(0, 0, None, self.occ, 4), SlotState.GAP_FILL)

    def test_row_states_without_reservations(self):
        occ = OccupancySet()
        self.assertIs(classify_slot(0, 1, None, occ, 4), SlotState.ROW_FILL)
        self.assertIs(classify_slot(0, 1, cell("a", column_span=3), occ, 4),
                      SlotState.FITS_TO_ROW_END)
        self.assertIs(classify_slot(0, 2, cell("a", column_span=3), occ, 4),
                      SlotState.BLOCKED_BY_ROW_END)

    def test_row_complete(self):
        occ = OccupancySet()
        self.assertIs(classify_slot(0, 4, None, occ, 4), SlotState.ROW_COMPLETE_DONE)
        self.assertIs(classify_slot(0, 4, cell("a"), occ, 4),
                      SlotState.ROW_COMPLETE_CONTINUE)
        occ.add((1, 0))
        self.assertIs(classify_slot(0, 4, None, occ, 4),
                      SlotState.ROW_COMPLETE_CONTINUE)


class TestPlaceCells(unittest.TestCase):
    """Hand-checked placements."""

    def test_no_cells_single_column(self):
        self.assertEqual(
            place_cells([], column_count=1),
            ([E(row=0, column=0)], 1, 1),
        )

    def test_no_cells_fills_configured_width(self):
        for n in (2, 3):
            with self.subTest(column_count=n):
                self.assertEqual(
                    place_cells([], column_count=n),
                    ([E(row=0, column=0, column_span=n)], 1, n),
                )

    def test_single_cell(self):
        cells, rows, cols = place_cells([cell(None)])
        self.assertEqual(cells, [Cell(None, row=0, column=0)])
        self.assertEqual((rows, cols), (1, 1))

    def test_wide_cell_grows_column_count(self):
        self.assertEqual(
            place_cells([cell(None, column_span=2)], column_count=1),
            ([Cell(None, row=0, column=0, column_span=2)], 1, 2),
        )

    def test_one_column_stacks_cells(self):
        self.assertEqual(
            place_cells([cell(None), cell(None)], column_count=1),
            ([Cell(None, row=0, column=0), Cell(None, row=1, column=0)], 2, 1),
        )

    def test_two_cells_on_one_row(self):
        self.assertEqual(
            place_cells([cell(None), cell(None)], column_count=2),
            ([Cell(None, row=0, column=0), Cell(None, row=0, column=1)], 1, 2),
        )

    def test_remaining_row_filled(self):
        self.assertEqual(
            place_cells([cell(None), cell(None)], column_count=3),
            ([
                Cell(None, row=0, column=0),
                Cell(None, row=0, column=1),
                E(row=0, column=2),
            ], 1, 3),
        )

    def test_wide_cell_fits_rest_of_row(self):
        self.assertEqual(
            place_cells([cell(None), cell(None, column_span=2)], column_count=3),
            ([
                Cell(None, row=0, column=0),
                Cell(None, row=0, column=1, column_span=2),
            ], 1, 3),
        )

    def test_row_span_leaves_filler_below(self):
        """column_count=2, A 1x1 then B row_span=2: filler at (1, 0)."""
        cells, rows, cols = place_cells(
            [cell("A"), cell("B", row_span=2)], column_count=2,
        )
        self.assertEqual(cells, [
            Cell("A", row=0, column=0),
            Cell("B", row=0, column=1, row_span=2),
            E(row=1, column=0),
        ])
        self.assertEqual((rows, cols), (2, 2))

    def test_wide_cell_beside_tall_cell(self):
        self.assertEqual(
            place_cells([
                cell(None, row_span=2),
                cell(None, column_span=2),
                cell(None, column_span=2),
            ], column_count=3),
            ([
                Cell(None, row=0, column=0, row_span=2),
                Cell(None, row=0, column=1, column_span=2),
                Cell(None, row=1, column=1, column_span=2),
            ], 2, 3),
        )

    def test_three_tall_cells(self):
        cells, rows, cols = place_cells(
            [cell(None, row_span=2) for _ in range(3)], column_count=3,
        )
        self.assertEqual([(c.row, c.column) for c in cells], [(0, 0), (0, 1), (0, 2)])
        self.assertEqual((rows, cols), (2, 3))

    def test_full_width_cells_stack(self):
        cells, rows, cols = place_cells(
            [cell(None, column_span=2) for _ in range(3)], column_count=2,
        )
        self.assertEqual([(c.row, c.column) for c in cells], [(0, 0), (1, 0), (2, 0)])
        self.assertEqual((rows, cols), (3, 2))

    def test_blocked_fillers_merge_into_column(self):
        """Three 2-wide cells in 3 columns leave one 3-tall filler."""
        self.assertEqual(
            place_cells([cell(None, column_span=2) for _ in range(3)], column_count=3),
            ([
                Cell(None, row=0, column=0, column_span=2),
                E(row=0, column=2, row_span=3),
                Cell(None, row=1, column=0, column_span=2),
                Cell(None, row=2, column=0, column_span=2),
            ], 3, 3),
        )

    def test_cell_too_wide_for_gap_is_retried(self):
        """A 3-wide cell cannot fit beside a tall cell and moves down."""
        cells, rows, cols = place_cells(
            [cell("T", row_span=2), cell("a"), cell("a2"), cell("W", column_span=3)],
            column_count=3,
        )
        placed = by_data(cells)
        self.assertEqual((placed["W"].row, placed["W"].column), (2, 0))
        fillers = [c for c in cells if c.empty]
        self.assertEqual(fillers, [E(row=1, column=1, column_span=2)])
        self.assertEqual((rows, cols), (3, 3))

    def test_filler_between_reserved_slots(self):
        """Gap between two tall cells is filled when demand runs out."""
        cells, rows, cols = place_cells(
            [cell("L", row_span=2), cell("m"), cell("R", row_span=2)],
            column_count=3,
        )
        self.assertIn(E(row=1, column=1), cells)
        self.assertEqual((rows, cols), (2, 3))

    def test_dashboard(self):
        cells, rows, cols = place_cells(make_dashboard_cells(), column_count=3)
        self.assertEqual([(c.data, c.row, c.column, c.empty) for c in cells], [
            ("A", 0, 0, False),
            ("B", 0, 1, False),
            ("C", 1, 1, False),
            (None, 1, 2, True),
            ("D", 2, 0, False),
        ])
        self.assertEqual(cells[3].row_span, 2)
        self.assertEqual((rows, cols), (3, 3))

    def test_explicit_positions_are_ignored(self):
        cells, _, _ = place_cells([cell("a", row=5, column=3)], column_count=1)
        self.assertEqual((cells[0].row, cells[0].column), (0, 0))

    def test_inputs_not_mutated(self):
        demand = [cell("a", row_span=2), cell("b")]
        place_cells(demand, column_count=2)
        self.assertEqual(demand, [cell("a", row_span=2), cell("b")])

    def test_custom_empty_template(self):
        template = Cell("blank", cell_height=3, cell_width=2)
        cells, _, _ = place_cells([cell("a")], column_count=2, empty=template)
        self.assertEqual(cells[1], Cell("blank", row=0, column=1, cell_height=3,
                                        cell_width=2, empty=True))
        self.assertFalse(template.empty)

    def test_returns_placement(self):
        result = place_cells([cell("a")])
        self.assertIsInstance(result, Placement)
        self.assertEqual(result.row_count, 1)


class TestPlaceCellsErrors(unittest.TestCase):

    def test_zero_column_count(self):
        with self.assertRaises(ConfigurationError):
            place_cells([cell("a")], column_count=0)

    def test_zero_span(self):
        with self.assertRaises(ConfigurationError):
            place_cells([cell("a", row_span=0)])
        with self.assertRaises(ConfigurationError):
            place_cells([cell("a", column_span=0)])


class TestMergeEmptyCells(unittest.TestCase):

    def test_consecutive_fillers_merge(self):
        merged = merge_empty_cells([
            E(row=0, column=1, column_span=2),
            Cell("a", row=0, column=0),
            Cell("b", row=1, column=0),
            E(row=1, column=1, column_span=2),
        ])
        self.assertEqual(merged, [
            Cell("a", row=0, column=0),
            E(row=0, column=1, column_span=2, row_span=2),
            Cell("b", row=1, column=0),
        ])

    def test_different_widths_kept(self):
        fillers = [E(row=0, column=1), E(row=1, column=1, column_span=2)]
        self.assertEqual(merge_empty_cells(fillers), fillers)

    def test_non_consecutive_rows_kept(self):
        fillers = [E(row=0, column=0), E(row=2, column=0)]
        self.assertEqual(merge_empty_cells(fillers), fillers)

    def test_chain_of_three(self):
        merged = merge_empty_cells([E(row=r, column=0) for r in range(3)])
        self.assertEqual(merged, [E(row=0, column=0, row_span=3)])

    def test_input_fillers_untouched(self):
        fillers = [E(row=0, column=0), E(row=1, column=0)]
        merge_empty_cells(fillers)
        self.assertEqual(fillers[0].row_span, 1)


def _random_cells(rng: random.Random, n: int) -> list[Cell]:
    spans = [1] * 10 + [2] * 4 + [3] * 3 + [4, 5, 6]
    return [
        cell(f"c{i}",
             row_span=rng.choice(spans),
             column_span=rng.choice(spans),
             cell_height=rng.randint(1, 200),
             cell_width=rng.randint(1, 200))
        for i in range(n)
    ]


class TestPlacementProperties(unittest.TestCase):
    """Seeded random workloads — tiling must always be exact."""

    def test_random_placements_tile_grid(self):
        rng = random.Random(1234)
        for trial in range(40):
            cells = _random_cells(rng, rng.randint(0, 60))
            column_count = rng.randint(1, 10)
            with self.subTest(trial=trial):
                result = place_cells(cells, column_count=column_count)
                self.assertEqual(validate_tiling(result), [])

                slots = covered_slots(result.cells)
                self.assertEqual(len(slots), len(set(slots)))
                self.assertEqual(len(slots), result.row_count * result.column_count)

                self.assertGreaterEqual(
                    result.column_count,
                    effective_column_count(cells, column_count),
                )
                # Demand order survives: the cursor only moves forward.
                self.assertEqual(
                    [c.data for c in result.cells if not c.empty],
                    [c.data for c in cells],
                )

    def test_shapely_union_matches_grid(self):
        rng = random.Random(99)
        result = place_cells(_random_cells(rng, 30), column_count=4)
        union = unary_union([
            shapely_box(c.column, c.row, c.last_column, c.last_row)
            for c in result.cells
        ])
        grid = shapely_box(0, 0, result.column_count, result.row_count)
        self.assertAlmostEqual(union.area, grid.area)
        self.assertTrue(union.equals(grid))

    def test_row_count_is_minimal(self):
        """The last row is never made of fillers only."""
        rng = random.Random(7)
        for _ in range(20):
            result = place_cells(_random_cells(rng, 25), column_count=rng.randint(1, 6))
            last = result.row_count - 1
            self.assertTrue(all(c.last_row <= result.row_count for c in result.cells))
            self.assertTrue(any(
                not c.empty and c.row <= last < c.last_row for c in result.cells
            ))


if __name__ == "__main__":
    unittest.main()

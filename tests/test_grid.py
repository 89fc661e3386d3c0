"""
Laser Reveal — Grid & Order Tests
Partitioning, remainder cells, and every traversal mode.

Run with: pytest tests/test_grid.py -v
"""

import os
import random
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reveal.grid import Cell, build_offsets, compute_grid, compute_order


# ---------------------------------------------------------------------------
# PARTITION
# ---------------------------------------------------------------------------

class TestComputeGrid:

    def test_even_split(self):
        grid = compute_grid(100, 50, 50, "ltr")
        assert grid.cols == 2
        assert grid.rows == 1
        assert grid.col_widths == [50, 50]
        assert grid.row_heights == [50]
        assert grid.col_offsets == [0, 50]
        assert grid.row_offsets == [0]
        assert grid.order == [Cell(0, 0), Cell(1, 0)]

    def test_last_cell_absorbs_remainder(self):
        grid = compute_grid(70, 30, 32)
        assert grid.col_widths == [32, 32, 6]
        assert grid.row_heights == [30]
        assert grid.col_offsets == [0, 32, 64]

    @pytest.mark.parametrize("width,height,cell", [
        (100, 50, 16), (70, 30, 32), (1, 1, 16), (333, 17, 7), (64, 64, 1), (50, 50, 2.5),
    ])
    def test_sizes_sum_to_surface(self, width, height, cell):
        grid = compute_grid(width, height, cell)
        assert sum(grid.col_widths) == pytest.approx(width)
        assert sum(grid.row_heights) == pytest.approx(height)
        assert len(grid.col_widths) == grid.cols
        assert len(grid.row_heights) == grid.rows
        assert len(grid.order) == grid.cols * grid.rows

    def test_cell_size_clamped_to_one(self):
        grid = compute_grid(5, 3, 0)
        assert grid.cols == 5
        assert grid.rows == 3
        assert grid.col_widths == [1, 1, 1, 1, 1]

    def test_negative_cell_size_clamped(self):
        grid = compute_grid(4, 4, -10)
        assert grid.cols == 4

    def test_zero_area_surface_still_has_one_cell(self):
        grid = compute_grid(0, 0, 16)
        assert grid.cols == 1
        assert grid.rows == 1
        assert grid.col_widths == [0]
        assert grid.row_heights == [0]

    def test_cell_larger_than_surface(self):
        grid = compute_grid(10, 10, 50)
        assert grid.cols == 1
        assert grid.col_widths == [10]

    def test_infinite_cell_size_is_one_whole_cell(self):
        grid = compute_grid(40, 20, float("inf"))
        assert (grid.cols, grid.rows) == (1, 1)
        assert grid.col_widths == [40]
        assert grid.row_heights == [20]

    def test_cell_rect(self):
        grid = compute_grid(70, 30, 32)
        assert grid.cell_rect(Cell(2, 0)) == (64, 0, 6, 30)

    def test_offsets_are_prefix_sums(self):
        assert build_offsets([3, 4, 5]) == [0, 3, 7]
        assert build_offsets([]) == []


# ---------------------------------------------------------------------------
# ORDER
# ---------------------------------------------------------------------------

class TestComputeOrder:

    def test_ltr(self):
        assert compute_order(2, 3, "ltr") == [
            (0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1),
        ]

    def test_rtl(self):
        assert compute_order(2, 3, "rtl") == [
            (2, 0), (1, 0), (0, 0), (2, 1), (1, 1), (0, 1),
        ]

    def test_zigzag(self):
        assert compute_order(2, 3, "zigzag") == [
            (0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1),
        ]

    def test_entries_are_cells(self):
        cell = compute_order(1, 1, "ltr")[0]
        assert cell.col == 0 and cell.row == 0

    @pytest.mark.parametrize("mode", ["ltr", "rtl", "zigzag", "random"])
    @pytest.mark.parametrize("rows,cols", [(1, 1), (1, 7), (5, 1), (4, 6), (9, 13)])
    def test_order_is_permutation_of_grid(self, mode, rows, cols):
        order = compute_order(rows, cols, mode)
        assert len(order) == rows * cols
        assert set(order) == {(c, r) for r in range(rows) for c in range(cols)}

    @pytest.mark.parametrize("mode", ["ltr", "rtl", "zigzag"])
    def test_deterministic_modes_repeat(self, mode):
        assert compute_order(6, 5, mode) == compute_order(6, 5, mode)

    def test_random_uses_supplied_rng(self):
        a = compute_order(6, 6, "random", rng=random.Random(3))
        b = compute_order(6, 6, "random", rng=random.Random(3))
        assert a == b
        assert a != compute_order(6, 6, "ltr")

    def test_unknown_mode_behaves_like_ltr(self):
        assert compute_order(3, 3, "diagonal") == compute_order(3, 3, "ltr")

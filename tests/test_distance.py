"""
Laser Reveal — Distance Table Tests
Cumulative path distances, binary search, and the cell-edge boundary policy.

Run with: pytest tests/test_distance.py -v
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reveal.grid import compute_grid
from reveal.distance import (
    DistanceMetrics, build_cumulative, compute_distances,
    find_block_at_distance, locate_position,
)


@pytest.fixture
def two_cell_metrics():
    grid = compute_grid(100, 50, 50, "ltr")
    return compute_distances(grid.order, grid)


class TestComputeDistances:

    def test_two_cell_scenario(self, two_cell_metrics):
        assert two_cell_metrics.block_distances == [50, 50]
        assert two_cell_metrics.cumulative == [50, 100]
        assert two_cell_metrics.total_distance == 100

    def test_cost_is_column_width_not_row_height(self):
        grid = compute_grid(70, 100, 32, "zigzag")
        metrics = compute_distances(grid.order, grid)
        for cell, cost in zip(grid.order, metrics.block_distances):
            assert cost == grid.col_widths[cell.col]
        # every row covers the full width once
        assert metrics.total_distance == 70 * grid.rows

    def test_cumulative_invariant(self):
        grid = compute_grid(333, 71, 16, "rtl")
        metrics = compute_distances(grid.order, grid)
        prev = 0
        for block, cum in zip(metrics.block_distances, metrics.cumulative):
            assert cum == prev + block
            assert cum >= prev
            prev = cum
        assert metrics.cumulative[-1] == metrics.total_distance

    def test_empty_order(self):
        metrics = compute_distances([], compute_grid(10, 10, 5))
        assert metrics.cumulative == []
        assert metrics.total_distance == 0

    def test_build_cumulative(self):
        assert build_cumulative([1, 2, 3]) == [1, 3, 6]


class TestFindBlock:

    def test_search_property_over_whole_path(self):
        grid = compute_grid(70, 40, 16)
        cumulative = compute_distances(grid.order, grid).cumulative
        for d in [0, 0.5, 1, 15.99, 16, 16.01, 47, 69.9, 70, 100, cumulative[-1]]:
            i, _ = find_block_at_distance(cumulative, d)
            assert cumulative[i] >= d
            assert i == 0 or cumulative[i - 1] < d

    def test_local_offset(self, two_cell_metrics):
        assert find_block_at_distance(two_cell_metrics.cumulative, 30) == (0, 30)
        assert find_block_at_distance(two_cell_metrics.cumulative, 75) == (1, 25)

    def test_exact_edge_stays_on_lower_index(self, two_cell_metrics):
        assert find_block_at_distance(two_cell_metrics.cumulative, 50) == (0, 50)

    def test_beyond_end_clamps(self, two_cell_metrics):
        index, _ = find_block_at_distance(two_cell_metrics.cumulative, 500)
        assert index == 1


class TestLocatePosition:

    def test_start(self, two_cell_metrics):
        assert locate_position(two_cell_metrics, 0) == (0, 0)

    def test_mid_cell(self, two_cell_metrics):
        assert locate_position(two_cell_metrics, 25) == (0, 25)

    def test_exact_cell_edge_advances(self, two_cell_metrics):
        """Distance 50 finishes cell 0: next cell, nothing swept yet."""
        assert locate_position(two_cell_metrics, 50) == (1, 0)

    def test_just_before_edge(self, two_cell_metrics):
        index, sweep = locate_position(two_cell_metrics, 49.999)
        assert index == 0
        assert sweep == pytest.approx(49.999)

    def test_total_is_fully_revealed(self, two_cell_metrics):
        assert locate_position(two_cell_metrics, 100) == (2, 0)
        assert locate_position(two_cell_metrics, 1e9) == (2, 0)

    def test_zero_total(self):
        assert locate_position(DistanceMetrics(), 0) == (0, 0)

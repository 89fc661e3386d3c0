"""
Laser Reveal — Grid Partitioner & Order Generator

Splits a surface into cells of `cell_size` pixels. Every column/row is
exactly `cell_size` except the last, which absorbs the remainder.
The remainder can be zero or negative for degenerate surfaces; drawing
code clips those cells to nothing.

Order modes:
    ltr    — row-major, ascending column
    rtl    — row-major, descending column
    zigzag — even rows ascending, odd rows descending (boustrophedon)
    random — ltr, then Fisher-Yates shuffled
"""

import math
import random
from dataclasses import dataclass, field
from typing import NamedTuple


class Cell(NamedTuple):
    col: int
    row: int


@dataclass
class GridMetrics:
    """Partition of a surface plus the traversal order over its cells."""
    cols: int = 0
    rows: int = 0
    col_widths: list = field(default_factory=list)
    row_heights: list = field(default_factory=list)
    col_offsets: list = field(default_factory=list)
    row_offsets: list = field(default_factory=list)
    order: list = field(default_factory=list)

    def cell_rect(self, cell):
        """(x, y, w, h) of a cell in surface coordinates."""
        return (
            self.col_offsets[cell.col],
            self.row_offsets[cell.row],
            self.col_widths[cell.col],
            self.row_heights[cell.row],
        )


EMPTY_GRID = GridMetrics()


def _sizes(total, cell_size, count):
    return [
        total - cell_size * (count - 1) if i == count - 1 else cell_size
        for i in range(count)
    ]


def build_offsets(sizes):
    """Prefix sums starting at 0."""
    offsets = []
    acc = 0
    for size in sizes:
        offsets.append(acc)
        acc += size
    return offsets


def compute_order(rows: int, cols: int, mode: str = "ltr", rng=None) -> list[Cell]:
    """Visiting sequence over a rows x cols grid. Each cell appears once.

    Args:
        rows, cols: Grid dimensions.
        mode: Traversal mode (unknown modes behave like "ltr").
        rng: Optional random.Random for "random" mode.
    """
    order = []
    for row in range(rows):
        if mode == "rtl" or (mode == "zigzag" and row % 2 == 1):
            columns = range(cols - 1, -1, -1)
        else:
            columns = range(cols)
        order.extend(Cell(col, row) for col in columns)

    if mode == "random":
        rng = rng or random
        for i in range(len(order) - 1, 0, -1):
            j = rng.randint(0, i)
            order[i], order[j] = order[j], order[i]

    return order


def compute_grid(surface_width, surface_height, cell_size, mode: str = "ltr", rng=None) -> GridMetrics:
    """Partition a surface into cells and compute their traversal order.

    Pure function of its inputs (except "random" mode), so results can be
    memoized by (width, height, cell_size, mode).
    """
    # One cell never needs to be larger than the surface
    cell_size = min(max(1, cell_size), max(surface_width, surface_height, 1))
    cols = max(1, math.ceil(surface_width / cell_size))
    rows = max(1, math.ceil(surface_height / cell_size))

    col_widths = _sizes(surface_width, cell_size, cols)
    row_heights = _sizes(surface_height, cell_size, rows)

    return GridMetrics(
        cols=cols,
        rows=rows,
        col_widths=col_widths,
        row_heights=row_heights,
        col_offsets=build_offsets(col_widths),
        row_offsets=build_offsets(row_heights),
        order=compute_order(rows, cols, mode, rng=rng),
    )

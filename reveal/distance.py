"""
Laser Reveal — Distance Table

Flattens the traversal into one path coordinate. Each visited cell costs
its column width (the sweep inside a cell is always horizontal), so

    cumulative[i] = cumulative[i-1] + col_widths[order[i].col]

Elapsed time maps linearly onto this coordinate; a binary search turns a
path distance back into (cell index, offset inside the cell).
"""

from bisect import bisect_left
from dataclasses import dataclass, field


@dataclass
class DistanceMetrics:
    block_distances: list = field(default_factory=list)
    cumulative: list = field(default_factory=list)
    total_distance: float = 0


def build_cumulative(distances):
    cumulative = []
    acc = 0
    for value in distances:
        acc += value
        cumulative.append(acc)
    return cumulative


def compute_distances(order, grid) -> DistanceMetrics:
    block_distances = [grid.col_widths[cell.col] for cell in order]
    cumulative = build_cumulative(block_distances)
    return DistanceMetrics(
        block_distances=block_distances,
        cumulative=cumulative,
        total_distance=cumulative[-1] if cumulative else 0,
    )


def find_block_at_distance(cumulative, distance):
    """Smallest index i with cumulative[i] >= distance, plus the local offset.

    Returns:
        (index, local_x) where local_x = distance - cumulative[i-1]
        (or distance itself for i == 0). Distances past the end clamp to
        the last index.
    """
    if not cumulative:
        return 0, distance
    index = min(bisect_left(cumulative, distance), len(cumulative) - 1)
    prev = cumulative[index - 1] if index > 0 else 0
    return index, distance - prev


def locate_position(metrics: DistanceMetrics, distance):
    """Path distance -> (current_index, sweep_x) as the renderer sees it.

    A target landing exactly on a cell's right edge counts that cell as
    done: the index advances and the sweep restarts at 0.
    Distances >= total_distance are fully revealed.
    """
    count = len(metrics.block_distances)
    if distance >= metrics.total_distance:
        return count, 0
    index, local_x = find_block_at_distance(metrics.cumulative, distance)
    if local_x >= metrics.block_distances[index]:
        return index + 1, 0
    return index, local_x

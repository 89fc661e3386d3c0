"""
Laser Reveal — Metric Caches

Grid and distance tables are O(n) to build and are read every frame.
Each cache holds one (key, value) pair; keys are typed tuples of exactly
the parameters the value depends on, compared by value.
"""

import logging
from typing import NamedTuple

logger = logging.getLogger(__name__)


class GridKey(NamedTuple):
    width: int
    height: int
    cell_size: float
    order_mode: str


class DistanceKey(NamedTuple):
    rows: int
    cols: int
    order_mode: str


class KeyedCache:
    """Single-slot memo. Empty until first access, rebuilt on key change."""

    def __init__(self, name=""):
        self.name = name
        self.key = None
        self.value = None
        self.builds = 0

    def get(self, key, build):
        if self.value is not None and self.key == key:
            return self.value
        self.value = build()
        self.key = key
        self.builds += 1
        logger.debug("%s cache rebuilt for %s", self.name or "metric", key)
        return self.value

    def clear(self):
        self.key = None
        self.value = None

    @property
    def is_empty(self):
        return self.value is None

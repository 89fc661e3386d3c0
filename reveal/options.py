"""
Laser Reveal — Engine Options

One explicit value type for everything the engine can be told.
Updates are pure merges: unspecified fields keep their current value.

Numeric fields are never rejected. They are clamped on read so a
host can pass whatever its slider produced:
    cell_size   >= 1 px, NaN/Inf -> 16
    duration_ms >= 50 ms, NaN/Inf -> 6000
    order_mode  unknown names fall back to "ltr"
"""

import math
from dataclasses import dataclass, fields, replace


ORDER_MODES = ("ltr", "rtl", "zigzag", "random")

MIN_CELL_SIZE = 1
MIN_DURATION_MS = 50
DEFAULT_CELL_SIZE = 16
DEFAULT_DURATION_MS = 6000

# Fields that change grid / order / distance tables
GOVERNING_FIELDS = ("cell_size", "order_mode")


@dataclass
class LaserOptions:
    """Reveal configuration.

    cell_size: Grid cell edge length in pixels.
    duration_ms: Total reveal duration in milliseconds.
    order_mode: "ltr" | "rtl" | "zigzag" | "random"
    background_color: Fill beneath the unrevealed area. Color name, hex,
        (r, g, b) / (r, g, b, a) tuple, or "transparent".
    highlight_enabled: Draw the boundary highlight (never in random mode).
    """
    cell_size: float = DEFAULT_CELL_SIZE
    duration_ms: float = DEFAULT_DURATION_MS
    order_mode: str = "ltr"
    background_color: object = "transparent"
    highlight_enabled: bool = True

    @property
    def effective_cell_size(self):
        if not math.isfinite(self.cell_size):
            return DEFAULT_CELL_SIZE
        return max(MIN_CELL_SIZE, self.cell_size)

    @property
    def effective_duration_ms(self):
        if not math.isfinite(self.duration_ms):
            return DEFAULT_DURATION_MS
        return max(MIN_DURATION_MS, self.duration_ms)

    @property
    def effective_order_mode(self):
        return self.order_mode if self.order_mode in ORDER_MODES else "ltr"

    @property
    def show_highlight(self):
        """Highlight is suppressed automatically in random mode."""
        return bool(self.highlight_enabled) and self.effective_order_mode != "random"

    def merged(self, partial=None, **changes):
        """Return a new LaserOptions with `partial` and `changes` applied.

        Keys starting with "_" are ignored. Unknown keys raise TypeError.
        """
        updates = {}
        if partial:
            updates.update(partial)
        updates.update(changes)
        updates = {k: v for k, v in updates.items() if not k.startswith("_")}
        return replace(self, **updates)

    def governing_key(self):
        return (self.effective_cell_size, self.effective_order_mode)

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


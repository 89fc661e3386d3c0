"""
Laser Reveal — Reveal Engine

Progressively discloses an image on a drawing surface, one grid cell at a
time, over a fixed duration. Elapsed time maps linearly onto the
traversal path (see reveal/distance.py); each frame redraws the
revealed cells plus the partially swept active cell.

States:
    IDLE       no source image, start() is a no-op
    READY      image loaded, not running
    RUNNING    frames scheduled, elapsed time advancing
    COMPLETED  elapsed reached duration (READY, fully revealed)
    DESTROYED  terminal, source released

Threading: none. Every public method and every frame callback runs on
the host's single loop. pause/reset/destroy cancel the pending frame
synchronously, so no stale frame fires after them.

Usage:
    canvas = Canvas()
    engine = LaserEngine(canvas, {"cell_size": 24, "order_mode": "zigzag"})
    engine.set_image(frame)
    engine.start()
    while engine.running:
        engine.scheduler.run_pending(now_ms())
"""

import logging
from enum import Enum

from reveal.cache import DistanceKey, GridKey, KeyedCache
from reveal.canvas import Canvas, image_size
from reveal.distance import DistanceMetrics, compute_distances, locate_position
from reveal.grid import EMPTY_GRID, compute_grid
from reveal.options import LaserOptions
from reveal.renderer import render_frame
from reveal.safety import UnsupportedSurface
from reveal.scheduler import FrameScheduler
from highlights import get_highlight

logger = logging.getLogger(__name__)


class EngineState(Enum):
    IDLE = "idle"
    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"
    DESTROYED = "destroyed"


def _acquire_context(surface):
    getter = getattr(surface, "get_context", None)
    context = getter("2d") if callable(getter) else None
    if context is None:
        raise UnsupportedSurface(
            f"No 2D drawing context available on {type(surface).__name__}"
        )
    return context


def _as_options(value):
    if value is None:
        return LaserOptions()
    if isinstance(value, LaserOptions):
        return LaserOptions().merged(value.to_dict())
    return LaserOptions().merged(value)


class LaserEngine:
    """Block-by-block reveal of one image on one surface.

    Args:
        surface: Destination with get_context("2d"), width, height and
            resize(width, height). Canvas is the stock implementation.
        options: LaserOptions or a partial dict of its fields.
        scheduler: FrameScheduler to request frames from. The host pumps it.
        highlight: Highlight name from the highlights registry, a callable
            fn(ctx, HighlightParams), or None for no highlight.
        rng: Optional random.Random used by "random" order mode.

    Raises:
        UnsupportedSurface: If the surface has no drawing context.
    """

    def __init__(self, surface, options=None, scheduler=None, highlight="laser", rng=None):
        self.context = _acquire_context(surface)
        self.surface = surface
        self.options = _as_options(options)
        self.scheduler = scheduler or FrameScheduler()
        self.highlight = get_highlight(highlight) if isinstance(highlight, str) else highlight
        self.rng = rng

        self.source = None
        self.running = False
        self.destroyed = False
        self.current_index = 0
        self.sweep_x = 0
        self.elapsed_ms = 0.0

        self._last_time = None
        self._frame_handle = None
        self._grid_cache = KeyedCache("grid")
        self._distance_cache = KeyedCache("distance")

    # --- state ---------------------------------------------------------

    @property
    def state(self) -> EngineState:
        if self.destroyed:
            return EngineState.DESTROYED
        if self.source is None:
            return EngineState.IDLE
        if self.running:
            return EngineState.RUNNING
        if self.elapsed_ms >= self.options.effective_duration_ms:
            return EngineState.COMPLETED
        return EngineState.READY

    @property
    def progress(self):
        """Elapsed fraction of the duration (0-1)."""
        return min(1.0, self.elapsed_ms / self.options.effective_duration_ms)

    @property
    def fully_revealed(self):
        return self.source is not None and self.current_index >= len(self.grid_metrics().order)

    # --- cached metrics ------------------------------------------------

    def _reset_caches(self):
        self._grid_cache.clear()
        self._distance_cache.clear()

    def grid_metrics(self):
        if self.source is None:
            return EMPTY_GRID
        width, height = self.surface.width, self.surface.height
        cell_size = self.options.effective_cell_size
        mode = self.options.effective_order_mode

        def build():
            # A new grid invalidates the distance table even if rows/cols match
            self._distance_cache.clear()
            return compute_grid(width, height, cell_size, mode, rng=self.rng)

        return self._grid_cache.get(GridKey(width, height, cell_size, mode), build)

    def distance_metrics(self, grid=None) -> DistanceMetrics:
        grid = grid or self.grid_metrics()
        if not grid.order:
            return DistanceMetrics()
        key = DistanceKey(grid.rows, grid.cols, self.options.effective_order_mode)
        return self._distance_cache.get(key, lambda: compute_distances(grid.order, grid))

    def _update_position(self):
        grid = self.grid_metrics()
        metrics = self.distance_metrics(grid)
        if metrics.total_distance <= 0:
            self.current_index, self.sweep_x = len(grid.order), 0
            return
        distance = metrics.total_distance * self.progress
        self.current_index, self.sweep_x = locate_position(metrics, distance)

    # --- public operations ---------------------------------------------

    def set_image(self, image):
        """Take a copy of `image`, resize the surface to it and redraw at the start."""
        if self.destroyed:
            return
        width, height = image_size(image)
        self.surface.resize(width, height)

        source = Canvas(width, height)
        source_ctx = source.get_context("2d")
        if source_ctx is None:
            return
        source_ctx.draw_image(image, 0, 0, width, height, 0, 0, composite="copy")
        self.source = source
        logger.debug("Image set: %dx%d", width, height)

        self.reset()
        self.draw()

    def set_options(self, partial=None, **changes):
        """Merge option changes over the current options.

        Grid/order/distance caches are dropped only when cell size or order
        mode change, so a color change never reshuffles a random order.
        When not running, the position is recomputed from the current
        elapsed time and redrawn immediately.
        """
        if self.destroyed:
            return
        if isinstance(partial, LaserOptions):
            partial = partial.to_dict()
        previous = self.options.governing_key()
        self.options = self.options.merged(partial, **changes)
        if self.options.governing_key() != previous:
            self._reset_caches()
        if not self.running:
            self._update_position()
            self.draw()

    def start(self):
        """Begin (or resume) the reveal. Replays from the start once completed."""
        if self.destroyed or self.source is None or self.running:
            return
        if self.state is EngineState.COMPLETED:
            self.elapsed_ms = 0.0
            self.current_index, self.sweep_x = 0, 0
        self.running = True
        self._last_time = None
        self._frame_handle = self.scheduler.request_frame(self._tick)
        logger.debug("Started at %.0fms", self.elapsed_ms)

    def _cancel_frame(self):
        self.scheduler.cancel(self._frame_handle)
        self._frame_handle = None

    def pause(self):
        self.running = False
        self._last_time = None
        self._cancel_frame()

    def reset(self):
        """Back to the first cell, not running. Caches are dropped."""
        self.current_index = 0
        self.sweep_x = 0
        self.elapsed_ms = 0.0
        self._last_time = None
        self._reset_caches()
        self._cancel_frame()
        self.running = False

    def draw(self):
        """Redraw the surface for the current state."""
        if self.destroyed or self.source is None:
            return
        render_frame(
            self.context, self.source, self.grid_metrics(),
            self.current_index, self.sweep_x, self.options,
            self.surface.width, self.surface.height,
            highlight=self.highlight,
        )

    def destroy(self):
        """Stop scheduling and release the source copy. Terminal."""
        self.pause()
        self.source = None
        self._reset_caches()
        self.destroyed = True

    # --- frame loop ----------------------------------------------------

    def _tick(self, timestamp):
        self._frame_handle = None
        if self.destroyed or not self.running or self.source is None:
            return

        # First frame of a run only sets the time origin
        if self._last_time is None:
            self._last_time = timestamp
        dt = max(0.0, timestamp - self._last_time)
        self._last_time = timestamp

        duration = self.options.effective_duration_ms
        self.elapsed_ms = min(duration, self.elapsed_ms + dt)
        self._update_position()

        if self.elapsed_ms >= duration:
            self.running = False
            self._last_time = None
            logger.debug("Reveal completed after %.0fms", self.elapsed_ms)

        self.draw()
        if self.running:
            self._frame_handle = self.scheduler.request_frame(self._tick)


def create_laser_engine(surface, initial_options=None, **kwargs) -> LaserEngine:
    return LaserEngine(surface, initial_options, **kwargs)

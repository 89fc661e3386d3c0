"""
Laser Reveal — Offline Rendering
Drives an engine with a synthetic clock: one scheduler pump per output
frame, timestamps advancing by 1000/fps ms. The first pump establishes
the time origin, so frame 0 always shows the unrevealed image.
"""

import math

from reveal.canvas import Canvas
from reveal.engine import LaserEngine
from reveal.scheduler import FrameScheduler


def frame_count(duration_ms, fps, hold_sec=0.0) -> int:
    """Frames an offline render of this length produces (including frame 0)."""
    return math.ceil(duration_ms * fps / 1000.0) + 1 + int(round(hold_sec * fps))


def render_reveal_frames(image, options=None, fps=30, hold_sec=0.0, highlight="laser", rng=None):
    """Yield (H, W, 4) RGBA frames of a full reveal.

    Args:
        image: Source raster (ndarray, PIL image or Canvas).
        options: LaserOptions or partial dict.
        fps: Output frame rate.
        hold_sec: Seconds to repeat the final, fully revealed frame.
    """
    canvas = Canvas()
    scheduler = FrameScheduler()
    engine = LaserEngine(canvas, options, scheduler=scheduler, highlight=highlight, rng=rng)
    engine.set_image(image)
    engine.start()

    step = 1000.0 / fps
    timestamp = 0.0
    try:
        while engine.running:
            scheduler.run_pending(timestamp)
            yield canvas.to_array()
            timestamp += step
        for _ in range(int(round(hold_sec * fps))):
            yield canvas.to_array()
    finally:
        engine.destroy()


def render_still(image, elapsed_ms, options=None, highlight="laser", rng=None):
    """Single RGBA frame of the reveal `elapsed_ms` after start."""
    canvas = Canvas()
    scheduler = FrameScheduler()
    engine = LaserEngine(canvas, options, scheduler=scheduler, highlight=highlight, rng=rng)
    engine.set_image(image)
    engine.start()
    scheduler.run_pending(0.0)
    if elapsed_ms > 0:
        scheduler.run_pending(float(elapsed_ms))
    frame = canvas.to_array()
    engine.destroy()
    return frame

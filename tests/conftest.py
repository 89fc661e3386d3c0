"""
Conftest: shared fixtures for all Laser Reveal test modules.

1. Synthetic images — gradients, so every cell has distinct pixels
2. Engine factory — canvas + manual scheduler, no highlight by default
   so pixel assertions are exact
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reveal.canvas import Canvas
from reveal.engine import LaserEngine
from reveal.scheduler import FrameScheduler


def _make_test_image(width=100, height=50):
    """Synthetic opaque RGB image (gradient, not blank)."""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, :, 0] = np.linspace(10, 255, width, dtype=np.uint8)[np.newaxis, :]
    image[:, :, 1] = np.linspace(20, 200, height, dtype=np.uint8)[:, np.newaxis]
    image[:, :, 2] = 128
    return image


@pytest.fixture
def image_100x50():
    return _make_test_image(100, 50)


@pytest.fixture
def image_70x30():
    """Width and height not multiples of common cell sizes."""
    return _make_test_image(70, 30)


@pytest.fixture
def make_engine():
    """Factory: make_engine(image=None, highlight=None, **options) -> engine.

    The engine gets its own FrameScheduler (engine.scheduler); pump it
    with engine.scheduler.run_pending(ms).
    """
    def _make(image=None, highlight=None, rng=None, **options):
        engine = LaserEngine(Canvas(), options, scheduler=FrameScheduler(),
                             highlight=highlight, rng=rng)
        if image is not None:
            engine.set_image(image)
        return engine
    return _make


def run_to_completion(engine, step_ms=16.0, limit=100000):
    """Start and pump until the engine stops. Returns frames pumped."""
    engine.start()
    t = 0.0
    frames = 0
    while engine.running and frames < limit:
        engine.scheduler.run_pending(t)
        t += step_ms
        frames += 1
    return frames

"""
Laser Reveal — Laser Highlight

Glowing vertical bar at the reveal edge, additive ("lighter") blend:
    glow  — wide warm gradient band, ~1.4x cell size
    core  — narrow white gradient band
    spark — cell-sized square riding the edge, jittered +-1px

Jitter is seeded from the edge position, so redrawing the same state
produces the same pixels while a moving edge still flickers.
"""

import numpy as np


def _jitter(laser_x, block_top, seed=0):
    rng = np.random.RandomState((int(laser_x * 1000) + int(block_top) * 7919 + seed) % (2 ** 32))
    return (rng.random_sample() - 0.5) * 2


def render_laser(ctx, params, seed=0):
    """Draw the laser at params.laser_x spanning the cell's height.

    Args:
        ctx: Context2D to draw on.
        params: HighlightParams (laser_x, laser_y, laser_size, block_top, block_height).
    """
    laser_x = params.laser_x
    laser_size = params.laser_size
    jitter = _jitter(laser_x, params.block_top, seed)
    core_width = max(2, laser_size * 0.25)
    glow_width = laser_size * 1.4

    ctx.fill_linear_gradient(
        laser_x - glow_width / 2, params.block_top, glow_width, params.block_height,
        [(0.0, (255, 255, 255, 0)), (0.5, (255, 230, 190, 89)), (1.0, (255, 255, 255, 0))],
        composite="lighter",
    )
    ctx.fill_linear_gradient(
        laser_x - core_width / 2, params.block_top, core_width, params.block_height,
        [(0.0, (255, 255, 255, 0)), (0.5, (255, 255, 255, 242)), (1.0, (255, 255, 255, 0))],
        composite="lighter",
    )
    ctx.fill_rect(
        laser_x - laser_size / 2, params.laser_y + jitter, laser_size, laser_size,
        (255, 255, 255, 178),
        composite="lighter",
    )


def render_edge(ctx, params):
    """Plain 1px white line at the reveal edge."""
    ctx.fill_rect(params.laser_x, params.block_top, 1, params.block_height, (255, 255, 255, 255))

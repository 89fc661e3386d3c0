"""
Laser Reveal — Frame Renderer

Draw order, every frame:
    1. background (clear, then fill with background_color)
    2. every cell before current_index, copied 1:1 from the source
    3. the current cell, from its left edge to sweep_x
    4. the highlight at the reveal edge (optional, never in random mode)
    5. when fully revealed, the whole source once more so rounding
       can't leave gaps

The highlight is a strategy callback: fn(ctx, HighlightParams). Reveal
correctness never depends on it.
"""

from dataclasses import dataclass


@dataclass
class HighlightParams:
    laser_x: float
    laser_y: float
    laser_size: float
    block_top: float
    block_height: float


def draw_background(ctx, width, height, color):
    ctx.clear_rect(0, 0, width, height)
    ctx.fill_rect(0, 0, width, height, color)


def draw_completed_blocks(ctx, source, grid, current_index):
    for cell in grid.order[:current_index]:
        x, y, w, h = grid.cell_rect(cell)
        ctx.draw_image(source, x, y, w, h, x, y)


def draw_current_block(ctx, source, grid, current_index, sweep_x, options, highlight=None):
    """Partially reveal the active cell. Returns True if a highlight was drawn."""
    if current_index >= len(grid.order):
        return False
    cell = grid.order[current_index]
    x, y, block_width, block_height = grid.cell_rect(cell)
    reveal_width = min(sweep_x, block_width)

    if reveal_width > 0:
        ctx.draw_image(source, x, y, reveal_width, block_height, x, y)

    if highlight is None or not options.show_highlight:
        return False
    if not (0 < reveal_width < block_width):
        return False

    laser_size = options.effective_cell_size
    highlight(ctx, HighlightParams(
        laser_x=x + reveal_width,
        laser_y=y + (block_height - laser_size) / 2,
        laser_size=laser_size,
        block_top=y,
        block_height=block_height,
    ))
    return True


def render_frame(ctx, source, grid, current_index, sweep_x, options, width, height, highlight=None):
    """Draw one full frame. No-op for zero-area surfaces."""
    if source is None or width <= 0 or height <= 0:
        return
    draw_background(ctx, width, height, options.background_color)
    draw_completed_blocks(ctx, source, grid, current_index)
    draw_current_block(ctx, source, grid, current_index, sweep_x, options, highlight)
    if current_index >= len(grid.order):
        ctx.draw_image(source, 0, 0)

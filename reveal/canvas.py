"""
Laser Reveal — Drawing Surface

A small 2D drawing surface over an RGBA numpy buffer (H, W, 4) uint8.
The engine draws only through Context2D, so any host surface exposing
`get_context()` with the same methods can stand in for Canvas.

Coordinates may be fractional; rectangles snap to whole pixels by
rounding both edges, so neighbouring cells always tile without gaps.

Composite modes:
    source-over — normal alpha blend (default)
    lighter     — additive, used by glow highlights
    copy        — replace destination
"""

import logging

import numpy as np
from PIL import Image, ImageColor

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)
COMPOSITE_MODES = ("source-over", "lighter", "copy")


def parse_color(value) -> tuple[int, int, int, int]:
    """Color name, hex, (r, g, b[, a]) or "transparent" -> RGBA 0-255.

    Unparseable values fall back to transparent (with a warning), the way
    a canvas ignores a bad fillStyle.
    """
    if value is None:
        return TRANSPARENT
    if isinstance(value, (tuple, list)):
        if len(value) not in (3, 4):
            logger.warning("Ignoring color with %d components: %r", len(value), value)
            return TRANSPARENT
        channels = [int(np.clip(round(float(c)), 0, 255)) for c in value]
        if len(channels) == 3:
            channels.append(255)
        return tuple(channels)
    if isinstance(value, str):
        if value.strip().lower() in ("", "transparent", "none"):
            return TRANSPARENT
        try:
            rgb = ImageColor.getrgb(value.strip())
        except ValueError:
            logger.warning("Ignoring unknown color: %r", value)
            return TRANSPARENT
        return tuple(rgb) if len(rgb) == 4 else (*rgb, 255)
    logger.warning("Ignoring color of type %s", type(value).__name__)
    return TRANSPARENT


def image_size(image) -> tuple[int, int]:
    """Natural (width, height) of a drawable raster source."""
    if isinstance(image, Canvas):
        return image.width, image.height
    if isinstance(image, Image.Image):
        return image.size
    if isinstance(image, np.ndarray):
        return image.shape[1], image.shape[0]
    if hasattr(image, "width") and hasattr(image, "height"):
        return int(image.width), int(image.height)
    arr = np.asarray(image)
    return arr.shape[1], arr.shape[0]


def to_rgba(image) -> np.ndarray:
    """Any raster source -> (H, W, 4) uint8 RGBA array.

    Canvas sources are returned without copying.
    """
    if isinstance(image, Canvas):
        return image.pixels
    if isinstance(image, Image.Image):
        return np.asarray(image.convert("RGBA"))

    arr = np.asarray(image)
    if arr.dtype != np.uint8:
        arr = np.clip(arr, 0, 255).astype(np.uint8)
    if arr.ndim == 2:
        arr = np.stack([arr, arr, arr], axis=-1)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise TypeError(f"Unsupported image shape: {arr.shape}")
    if arr.shape[2] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=-1)
    return arr


def _span(start, length, limit):
    """Round [start, start+length) to whole pixels, clipped to [0, limit)."""
    if length <= 0:
        return None
    a = max(0, int(round(start)))
    b = min(limit, int(round(start + length)))
    if b <= a:
        return None
    return a, b


class Canvas:
    """RGBA pixel buffer. Resizing clears it, like an HTML canvas."""

    def __init__(self, width: int = 300, height: int = 150):
        self.pixels = np.zeros((max(0, int(height)), max(0, int(width)), 4), dtype=np.uint8)
        self._context = None

    @property
    def width(self):
        return self.pixels.shape[1]

    @property
    def height(self):
        return self.pixels.shape[0]

    def resize(self, width, height):
        self.pixels = np.zeros((max(0, int(height)), max(0, int(width)), 4), dtype=np.uint8)

    def get_context(self, kind: str = "2d"):
        if kind != "2d":
            return None
        if self._context is None:
            self._context = Context2D(self)
        return self._context

    def to_array(self, mode="RGBA"):
        """Copy of the pixels; mode "RGB" drops alpha."""
        if mode == "RGB":
            return self.pixels[:, :, :3].copy()
        return self.pixels.copy()


class Context2D:
    """Drawing operations on a Canvas."""

    def __init__(self, canvas: Canvas):
        self.canvas = canvas

    def _bounds(self, x, y, w, h):
        xs = _span(x, w, self.canvas.width)
        ys = _span(y, h, self.canvas.height)
        if xs is None or ys is None:
            return None
        return xs[0], ys[0], xs[1], ys[1]

    def _composite(self, x0, y0, x1, y1, src, composite):
        """Blend float RGBA (0-1, straight alpha) into the region."""
        region = self.canvas.pixels[y0:y1, x0:x1]
        if composite == "copy":
            region[...] = np.clip(np.round(src * 255), 0, 255).astype(np.uint8)
            return

        dst = region.astype(np.float32) / 255.0
        sa = src[..., 3:4]
        da = dst[..., 3:4]
        if composite == "lighter":
            out_p = np.minimum(1.0, src[..., :3] * sa + dst[..., :3] * da)
            out_a = np.minimum(1.0, sa + da)
        else:
            out_a = sa + da * (1.0 - sa)
            out_p = src[..., :3] * sa + dst[..., :3] * da * (1.0 - sa)

        rgb = np.divide(out_p, out_a, out=np.zeros_like(out_p), where=out_a > 0)
        out = np.concatenate([rgb, out_a], axis=-1)
        region[...] = np.clip(np.round(out * 255), 0, 255).astype(np.uint8)

    def clear_rect(self, x, y, w, h):
        bounds = self._bounds(x, y, w, h)
        if bounds is None:
            return
        x0, y0, x1, y1 = bounds
        self.canvas.pixels[y0:y1, x0:x1] = 0

    def fill_rect(self, x, y, w, h, color, composite="source-over"):
        rgba = parse_color(color)
        if rgba[3] == 0 and composite != "copy":
            return
        bounds = self._bounds(x, y, w, h)
        if bounds is None:
            return
        x0, y0, x1, y1 = bounds
        if rgba[3] == 255 and composite in ("source-over", "copy"):
            self.canvas.pixels[y0:y1, x0:x1] = rgba
            return
        src = np.empty((y1 - y0, x1 - x0, 4), dtype=np.float32)
        src[...] = np.array(rgba, dtype=np.float32) / 255.0
        self._composite(x0, y0, x1, y1, src, composite)

    def fill_linear_gradient(self, x, y, w, h, stops, composite="source-over"):
        """Fill a rect with a horizontal gradient running from x to x + w.

        Args:
            stops: [(offset 0-1, color), ...] in ascending offset order.
        """
        bounds = self._bounds(x, y, w, h)
        if bounds is None or not stops:
            return
        x0, y0, x1, y1 = bounds
        offsets = np.array([s[0] for s in stops], dtype=np.float32)
        colors = np.array([parse_color(s[1]) for s in stops], dtype=np.float32) / 255.0

        t = (np.arange(x0, x1, dtype=np.float32) + 0.5 - x) / float(w)
        row = np.stack([np.interp(t, offsets, colors[:, c]) for c in range(4)], axis=-1)
        src = np.broadcast_to(row[np.newaxis, :, :], (y1 - y0, x1 - x0, 4)).astype(np.float32)
        self._composite(x0, y0, x1, y1, src, composite)

    def draw_image(self, image, sx=0, sy=0, sw=None, sh=None, dx=None, dy=None,
                   composite="source-over"):
        """Copy a source rectangle 1:1 onto the canvas.

        Defaults draw the whole source at the same position. Rectangles
        with no area, or fully outside either surface, draw nothing.
        """
        src = to_rgba(image)
        src_h, src_w = src.shape[:2]
        sw = src_w if sw is None else sw
        sh = src_h if sh is None else sh
        dx = sx if dx is None else dx
        dy = sy if dy is None else dy
        if sw <= 0 or sh <= 0:
            return

        sx0, sy0 = int(round(sx)), int(round(sy))
        sx1, sy1 = int(round(sx + sw)), int(round(sy + sh))
        ox, oy = int(round(dx)) - sx0, int(round(dy)) - sy0

        sx0 = max(sx0, 0, -ox)
        sy0 = max(sy0, 0, -oy)
        sx1 = min(sx1, src_w, self.canvas.width - ox)
        sy1 = min(sy1, src_h, self.canvas.height - oy)
        if sx1 <= sx0 or sy1 <= sy0:
            return

        patch = src[sy0:sy1, sx0:sx1]
        x0, y0, x1, y1 = sx0 + ox, sy0 + oy, sx1 + ox, sy1 + oy
        if composite == "copy" or (composite == "source-over" and patch[..., 3].min() == 255):
            self.canvas.pixels[y0:y1, x0:x1] = patch
            return
        self._composite(x0, y0, x1, y1, patch.astype(np.float32) / 255.0, composite)

"""
Laser Reveal — Errors & Input Guards

The engine itself only raises UnsupportedSurface (at construction).
Degenerate input there is a no-op, and numeric options are clamped.

Host-side preflight checks run before loading or rendering anything and
raise SafetyError, so a bad path or a 40k-pixel-wide image fails fast
instead of exhausting memory mid-render.
"""

import os
import math
from pathlib import Path

# --- Configurable Limits ---
MAX_FILE_MB = 100            # Maximum input image size on disk
MAX_PIXELS = 40_000_000      # Maximum decoded image area (w * h)
MAX_FPS = 120
MAX_DURATION_MS = 10 * 60 * 1000
MAX_HOLD_SEC = 60
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".tif", ".tiff"}
OUTPUT_EXTENSIONS = {".mp4", ".mov", ".webm", ".gif"}


class UnsupportedSurface(Exception):
    """Raised when a destination surface has no 2D drawing context."""
    pass


class SafetyError(Exception):
    """Raised when a preflight check fails."""
    pass


def preflight_image(input_path: str) -> dict:
    """Check an image file before decoding it.

    Returns:
        dict with path, size_mb, extension.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SafetyError: If the file is too large or not an image type.
    """
    real_path = os.path.realpath(str(input_path))
    if not os.path.isfile(real_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    size_mb = os.path.getsize(real_path) / (1024 * 1024)
    if size_mb > MAX_FILE_MB:
        raise SafetyError(
            f"Input file is {size_mb:.0f}MB, exceeds {MAX_FILE_MB}MB limit."
        )

    ext = Path(real_path).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise SafetyError(
            f"File type '{ext}' not allowed. "
            f"Supported: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    return {"path": real_path, "size_mb": size_mb, "extension": ext}


def validate_image_size(width: int, height: int) -> None:
    if width * height > MAX_PIXELS:
        raise SafetyError(
            f"Image is {width}x{height} ({width * height / 1e6:.1f}MP), "
            f"max is {MAX_PIXELS / 1e6:.0f}MP. Downscale it first."
        )


def _finite(value, name):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise SafetyError(f"{name} must be a number. Got: {value!r}")
    if math.isnan(value) or math.isinf(value):
        raise SafetyError(f"NaN/Inf not allowed for {name}")
    return value


def validate_render_settings(fps, duration_ms, hold_sec=0.0) -> None:
    """Check offline render settings.

    The engine clamps its own options; these limits only bound how many
    frames an offline render may produce.
    """
    fps = _finite(fps, "fps")
    if not 1 <= fps <= MAX_FPS:
        raise SafetyError(f"fps must be between 1 and {MAX_FPS}. Got: {fps:g}")
    duration_ms = _finite(duration_ms, "duration_ms")
    if duration_ms > MAX_DURATION_MS:
        raise SafetyError(
            f"Duration {duration_ms / 1000:.0f}s exceeds {MAX_DURATION_MS // 1000}s limit."
        )
    hold_sec = _finite(hold_sec, "hold")
    if not 0 <= hold_sec <= MAX_HOLD_SEC:
        raise SafetyError(f"hold must be between 0 and {MAX_HOLD_SEC}s. Got: {hold_sec:g}")


def validate_output_path(output_path: str) -> Path:
    """A directory (PNG sequence) or a video file with a known extension."""
    path = Path(output_path)
    if path.suffix and path.suffix.lower() not in OUTPUT_EXTENSIONS:
        raise SafetyError(
            f"Output type '{path.suffix}' not supported. "
            f"Use a directory or one of: {', '.join(sorted(OUTPUT_EXTENSIONS))}"
        )
    return path

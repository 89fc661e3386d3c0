"""
Laser Reveal — Image I/O
Loads source images (Pillow) and writes rendered frames out as a PNG
sequence or, through an FFmpeg subprocess, as a video file.
The engine never touches files; only hosts (CLI, preview) use this.
"""

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

import numpy as np
from PIL import Image

from reveal.safety import preflight_image, validate_image_size

logger = logging.getLogger(__name__)

FRAME_PATTERN = "frame_%06d.png"


def get_ffmpeg():
    """Find FFmpeg binary."""
    path = shutil.which("ffmpeg")
    if not path:
        raise RuntimeError("FFmpeg not found. Install with: brew install ffmpeg")
    return path


def load_image(image_path: str) -> np.ndarray:
    """Load an image file as (H, W, 4) uint8 RGBA after preflight checks."""
    info = preflight_image(image_path)
    with Image.open(info["path"]) as img:
        validate_image_size(*img.size)
        return np.array(img.convert("RGBA"))


def save_frame(array: np.ndarray, output_path: str):
    """Save an (H, W, 3|4) array as PNG."""
    img = Image.fromarray(np.clip(array, 0, 255).astype(np.uint8))
    img.save(str(output_path))


def write_frame_sequence(frames, output_dir: str) -> list[Path]:
    """Write frames as frame_000001.png, frame_000002.png, ..."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for i, frame in enumerate(frames, start=1):
        path = output_dir / (FRAME_PATTERN % i)
        save_frame(frame, path)
        paths.append(path)
    return paths


def reassemble_video(frames_dir: str, output_path: str, fps: float, quality: str = "mid") -> Path:
    """Encode a PNG sequence into a video file.

    Args:
        frames_dir: Directory containing frame_XXXXXX.png files.
        output_path: .mp4 / .mov / .webm / .gif
        fps: Frames per second.
        quality: 'lo' or 'mid' (h264 crf 28 / 23), 'hi' (prores 422).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = [
        get_ffmpeg(),
        "-y",
        "-framerate", str(fps),
        "-i", str(Path(frames_dir) / FRAME_PATTERN),
    ]

    suffix = output_path.suffix.lower()
    if suffix == ".gif":
        cmd += ["-vf", "split[a][b];[a]palettegen[p];[b][p]paletteuse"]
    elif suffix == ".webm":
        cmd += ["-c:v", "libvpx-vp9", "-b:v", "0", "-crf", "32", "-pix_fmt", "yuva420p"]
    elif quality == "hi":
        cmd += ["-c:v", "prores_ks", "-profile:v", "2", "-pix_fmt", "yuv422p10le"]
        if suffix == ".mp4":
            output_path = output_path.with_suffix(".mov")
    else:
        crf = "23" if quality == "mid" else "28"
        # yuv420p needs even dimensions
        cmd += ["-vf", "pad=ceil(iw/2)*2:ceil(ih/2)*2",
                "-c:v", "libx264", "-crf", crf, "-preset", "medium", "-pix_fmt", "yuv420p"]

    cmd.append(str(output_path))
    subprocess.run(cmd, capture_output=True, check=True, timeout=600)

    if not output_path.exists():
        raise RuntimeError(f"Failed to create output video: {output_path}")
    return output_path


def export_frames(frames, output_path: str, fps: float, quality: str = "mid") -> Path:
    """Write frames to a directory (no suffix) or encode them to a video file."""
    output_path = Path(output_path)
    if not output_path.suffix:
        write_frame_sequence(frames, output_path)
        return output_path

    with tempfile.TemporaryDirectory(prefix="laser_reveal_") as tmp:
        count = len(write_frame_sequence(frames, tmp))
        logger.debug("Encoding %d frames to %s", count, output_path)
        try:
            return reassemble_video(tmp, output_path, fps, quality=quality)
        except subprocess.CalledProcessError:
            logger.exception("FFmpeg failed encoding %s", output_path)
            raise

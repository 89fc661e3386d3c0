#!/usr/bin/env python3
"""
Laser Reveal — Block-by-block image reveal
CLI entry point. Also importable as a library.

Usage:
    python laser_reveal.py render photo.png out.mp4 --order zigzag --cell-size 24
    python laser_reveal.py render photo.png frames/ --fps 24 --hold 1
    python laser_reveal.py still photo.png half.png --at 3000
    python laser_reveal.py preview photo.png --preset scanner
    python laser_reveal.py info photo.png --cell-size 32
    python laser_reveal.py list-presets
    python laser_reveal.py list-highlights
"""

import argparse
import logging
import os
import sys

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from reveal.image_io import load_image, export_frames, save_frame
from reveal.options import LaserOptions, ORDER_MODES
from reveal.preview import frame_count, render_reveal_frames, render_still
from reveal.safety import validate_output_path, validate_render_settings
from reveal.grid import compute_grid
from reveal.distance import compute_distances
from highlights import HIGHLIGHTS, list_highlights
from presets import BUILT_IN_PRESETS, get_preset, list_preset_names

__version__ = "0.1.0"


def _build_options(args):
    """Preset (if any), then explicit flags on top. Returns (options, highlight)."""
    options = LaserOptions()
    highlight = "laser"
    if getattr(args, "preset", None):
        preset = get_preset(args.preset)
        if preset is None:
            raise ValueError(
                f"Unknown preset: {args.preset}. Available: {', '.join(list_preset_names())}"
            )
        options = options.merged(preset["options"])
        highlight = preset.get("highlight", highlight)

    changes = {}
    if args.cell_size is not None:
        changes["cell_size"] = args.cell_size
    if args.duration is not None:
        changes["duration_ms"] = args.duration
    if args.order is not None:
        changes["order_mode"] = args.order
    if args.background is not None:
        changes["background_color"] = args.background
    if args.no_highlight:
        changes["highlight_enabled"] = False
    if args.highlight is not None:
        highlight = args.highlight
    return options.merged(changes), highlight


def cmd_render(args):
    """Render the whole reveal to a video file or PNG sequence."""
    options, highlight = _build_options(args)
    validate_render_settings(args.fps, options.effective_duration_ms, args.hold)
    output = validate_output_path(args.output)
    image = load_image(args.image)
    h, w = image.shape[:2]
    total = frame_count(options.effective_duration_ms, args.fps, args.hold)
    print(f"Rendering {w}x{h} reveal: {options.effective_order_mode}, "
          f"cell {options.effective_cell_size}px, {options.effective_duration_ms / 1000:.1f}s "
          f"@ {args.fps}fps (~{total} frames)")
    frames = list(render_reveal_frames(image, options, fps=args.fps, hold_sec=args.hold,
                                       highlight=highlight))
    path = export_frames(frames, output, args.fps, quality=args.quality)
    print(f"Output: {path}")


def cmd_still(args):
    """Render one frame at a given time."""
    options, highlight = _build_options(args)
    image = load_image(args.image)
    frame = render_still(image, args.at, options, highlight=highlight)
    save_frame(frame, args.output)
    print(f"Frame at {args.at:.0f}ms: {args.output}")


def cmd_preview(args):
    """Open a live preview window."""
    from reveal.performer import PreviewWindow
    options, highlight = _build_options(args)
    image = load_image(args.image)
    PreviewWindow(image, options, highlight=highlight, autostart=not args.no_autostart).run()


def cmd_info(args):
    """Show the grid a reveal of this image would use."""
    options, _ = _build_options(args)
    image = load_image(args.image)
    h, w = image.shape[:2]
    grid = compute_grid(w, h, options.effective_cell_size, options.effective_order_mode)
    distances = compute_distances(grid.order, grid)
    print(f"\n  {args.image}")
    print(f"  {'—' * 40}")
    print(f"  Size:        {w}x{h}")
    print(f"  Grid:        {grid.cols} cols x {grid.rows} rows ({len(grid.order)} cells)")
    print(f"  Edge cells:  {grid.col_widths[-1]}px wide, {grid.row_heights[-1]}px high")
    print(f"  Path length: {distances.total_distance}px")
    speed = distances.total_distance / (options.effective_duration_ms / 1000)
    print(f"  Sweep speed: {speed:.0f}px/s over {options.effective_duration_ms / 1000:.1f}s")
    print()


def cmd_list_presets(args):
    print(f"\n  Presets ({len(BUILT_IN_PRESETS)} available)")
    print(f"  {'—' * 50}")
    for p in BUILT_IN_PRESETS:
        print(f"    {p['name']:15s} — {p['description']}")
        params_str = ", ".join(f"{k}={v}" for k, v in p["options"].items())
        print(f"    {'':15s}   {params_str}, highlight={p['highlight']}")
    print()


def cmd_list_highlights(args):
    print()
    for h in list_highlights():
        print(f"    {h['name']:10s} — {h['description']}")
    print()


def _add_option_flags(p):
    p.add_argument("--preset", help="Named preset (see list-presets)")
    p.add_argument("--cell-size", type=float, help="Cell edge length in px (default 16, min 1)")
    p.add_argument("--duration", type=float, help="Reveal duration in ms (default 6000, min 50)")
    p.add_argument("--order", choices=ORDER_MODES, help="Traversal order (default ltr)")
    p.add_argument("--background", help="Background color: name, hex or 'transparent'")
    p.add_argument("--highlight", choices=list(HIGHLIGHTS.keys()), help="Edge highlight style")
    p.add_argument("--no-highlight", action="store_true", help="Disable the edge highlight")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="laser-reveal",
        description="Laser Reveal — progressive block-by-block image reveal",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    # render
    p = sub.add_parser("render", help="Render the reveal to a video or PNG sequence")
    p.add_argument("image", help="Source image")
    p.add_argument("output", help="Output video (.mp4/.mov/.webm/.gif) or directory")
    p.add_argument("--fps", type=float, default=30, help="Frames per second")
    p.add_argument("--hold", type=float, default=0.0, help="Seconds to hold the final frame")
    p.add_argument("--quality", choices=["lo", "mid", "hi"], default="mid")
    _add_option_flags(p)

    # still
    p = sub.add_parser("still", help="Render a single frame")
    p.add_argument("image", help="Source image")
    p.add_argument("output", help="Output PNG")
    p.add_argument("--at", type=float, default=0.0, help="Elapsed time in ms")
    _add_option_flags(p)

    # preview
    p = sub.add_parser("preview", help="Live preview window (pygame)")
    p.add_argument("image", help="Source image")
    p.add_argument("--no-autostart", action="store_true", help="Wait for Space to start")
    _add_option_flags(p)

    # info
    p = sub.add_parser("info", help="Show grid and timing for an image")
    p.add_argument("image", help="Source image")
    _add_option_flags(p)

    sub.add_parser("list-presets", help="List built-in presets")
    sub.add_parser("list-highlights", help="List highlight styles")

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    commands = {
        "render": cmd_render,
        "still": cmd_still,
        "preview": cmd_preview,
        "info": cmd_info,
        "list-presets": cmd_list_presets,
        "list-highlights": cmd_list_highlights,
    }

    if args.command in commands:
        try:
            commands[args.command](args)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

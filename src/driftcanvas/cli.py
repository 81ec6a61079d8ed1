"""
CLI entry point.

Usage:
    driftcanvas flow [options]
    driftcanvas harmonograph [options]
"""

import argparse
import sys
import time
from pathlib import Path

from driftcanvas.driver import create_driver
from driftcanvas.encoder import encode_video, ffmpeg_available
from driftcanvas.harmonograph import HarmonographConfig
from driftcanvas.particles import FlowFieldConfig

PROFILES = {
    "low": {"width": 1280, "height": 720, "fps": 30, "quality": "fast"},
    "medium": {"width": 1920, "height": 1080, "fps": 60, "quality": "medium"},
    "high": {"width": 3840, "height": 2160, "fps": 60, "quality": "high"},
}


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  frame {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        if current % max(1, total // 20) == 0 or current >= total:
            print(f"{pct:5.1f}%  frame {current}/{total}", flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="driftcanvas",
        description="Procedural flow-field and harmonograph animation renderer",
    )
    parser.add_argument(
        "scene",
        choices=["flow", "harmonograph"],
        help="Scene to render",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output MP4 path (default: driftcanvas_<scene>.mp4)",
    )

    # Resolution & Profile
    parser.add_argument(
        "-p", "--profile", type=str, default="medium",
        choices=["low", "medium", "high"],
        help="Target profile (low: 720p 30fps, medium: 1080p 60fps, high: 4k 60fps)",
    )
    parser.add_argument("--width", type=int, default=None, help="Video width (overrides profile)")
    parser.add_argument("--height", type=int, default=None, help="Video height (overrides profile)")
    parser.add_argument("-f", "--fps", type=int, default=None, help="Frames per second (overrides profile)")

    # Length
    parser.add_argument("--frames", type=int, default=None, help="Number of frames to render")
    parser.add_argument(
        "--duration", type=float, default=10.0,
        help="Seconds to render when --frames is not given (default: 10)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")

    # Flow field
    parser.add_argument("--count", type=int, default=1400, help="Ambient particle count (flow)")
    parser.add_argument("--speed", type=float, default=1.9, help="Particle speed in px/frame (flow)")
    parser.add_argument(
        "--trail-alpha", type=float, default=0.038,
        help="Background fade per frame, lower = longer trails (flow)",
    )
    parser.add_argument("--burst-size", type=int, default=80, help="Burst pool size (flow)")

    # Harmonograph
    parser.add_argument("--steps-per-frame", type=int, default=500, help="Path points per frame (harmonograph)")
    parser.add_argument("--total-steps", type=int, default=90000, help="Points per figure (harmonograph)")
    parser.add_argument("--pause-after", type=int, default=120, help="Frames to hold a figure (harmonograph)")
    parser.add_argument("--no-glow", action="store_true", help="Disable glow (harmonograph)")

    parser.add_argument("--preview", action="store_true", help="Open a live window instead of encoding")
    parser.add_argument(
        "-q", "--quality", type=str, default=None,
        choices=["high", "medium", "fast"],
        help="Encoding quality (defaults to profile quality)",
    )
    return parser


def build_config(args: argparse.Namespace, width: int, height: int, fps: int):
    if args.scene == "flow":
        return FlowFieldConfig(
            width=width,
            height=height,
            fps=fps,
            count=args.count,
            speed=args.speed,
            trail_alpha=args.trail_alpha,
            burst_size=args.burst_size,
        )
    return HarmonographConfig(
        width=width,
        height=height,
        fps=fps,
        steps_per_frame=args.steps_per_frame,
        total_steps=args.total_steps,
        pause_after=args.pause_after,
        glow=0 if args.no_glow else HarmonographConfig.glow,
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    p_cfg = PROFILES[args.profile]
    width = args.width if args.width is not None else p_cfg["width"]
    height = args.height if args.height is not None else p_cfg["height"]
    fps = args.fps if args.fps is not None else p_cfg["fps"]
    quality = args.quality or p_cfg["quality"]

    if width <= 0 or height <= 0 or fps <= 0:
        print("Error: width, height and fps must be positive", file=sys.stderr)
        sys.exit(1)

    total_frames = args.frames if args.frames is not None else int(args.duration * fps)
    if total_frames <= 0:
        print("Error: nothing to render (frame count must be positive)", file=sys.stderr)
        sys.exit(1)

    config = build_config(args, width, height, fps)
    driver = create_driver(args.scene, config, seed=args.seed)

    if args.preview:
        from driftcanvas.preview import run_preview

        frames = run_preview(driver, fps=fps, title=f"driftcanvas {args.scene}")
        print(f"Rendered {frames} frames")
        return

    if not ffmpeg_available():
        print("Error: ffmpeg not found on PATH", file=sys.stderr)
        sys.exit(1)

    output = args.output or Path(f"driftcanvas_{args.scene}.mp4")

    print(f"Rendering {total_frames} frames at {width}x{height} @ {fps}fps")
    print(f"  Scene: {args.scene}, Profile: {args.profile}, Quality: {quality}")
    t0 = time.time()

    frame_gen = driver.frames(total_frames, progress_callback=_progress_bar)
    encode_video(
        frame_iterator=frame_gen,
        output_path=output,
        width=width,
        height=height,
        fps=fps,
        quality=quality,
        total_frames=total_frames,
    )

    elapsed = time.time() - t0
    file_size_mb = output.stat().st_size / 1024 / 1024

    print(f"\nDone! {file_size_mb:.1f} MB")
    print(f"  Render+encode took {elapsed:.1f}s ({total_frames / max(elapsed, 0.01):.1f} fps)")
    print(f"  Output: {output}")


if __name__ == "__main__":
    main()

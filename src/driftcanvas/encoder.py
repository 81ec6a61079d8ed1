"""
FFmpeg video encoder.

Streams rendered frames into ffmpeg's stdin as raw rgb24 and writes a
silent H.264 MP4.
"""

import shutil
import subprocess
from pathlib import Path
from typing import Callable, Iterable

import numpy as np


# Quality presets: (preset, crf, pix_fmt)
QUALITY_PRESETS = {
    "high": ("slow", "18", "yuv444p"),
    "medium": ("medium", "23", "yuv420p"),
    "fast": ("ultrafast", "28", "yuv420p"),
}


def ffmpeg_available() -> bool:
    return shutil.which("ffmpeg") is not None


def ffmpeg_command(output_path: Path, width: int, height: int, fps: int, quality: str) -> list[str]:
    """Argument list for a raw-rgb24-in, silent-MP4-out ffmpeg process."""
    preset, crf, pix_fmt = QUALITY_PRESETS.get(quality, QUALITY_PRESETS["high"])
    return [
        "ffmpeg", "-y", "-loglevel", "error",
        "-f", "rawvideo", "-pix_fmt", "rgb24",
        "-s", f"{width}x{height}", "-r", str(fps),
        "-i", "pipe:0",
        "-c:v", "libx264", "-preset", preset, "-crf", crf, "-pix_fmt", pix_fmt,
        "-an",
        str(output_path),
    ]


def encode_video(
    frame_iterator: Iterable[np.ndarray],
    output_path: Path,
    width: int = 1920,
    height: int = 1080,
    fps: int = 60,
    quality: str = "high",
    total_frames: int | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> Path:
    """
    Encode frames to a silent MP4.

    Args:
        frame_iterator: Yields (H, W, 3) uint8 arrays.
        output_path: Output MP4 path; parent directories are created.
        width, height, fps: Stream geometry and rate.
        quality: "high", "medium", or "fast".
        total_frames: Frame count for progress reporting.
        progress_callback: Optional callback(current_frame, total_frames).

    Returns:
        Path to the output file.

    Raises:
        RuntimeError: ffmpeg exited non-zero (message carries its stderr).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    proc = subprocess.Popen(
        ffmpeg_command(output_path, width, height, fps, quality),
        stdin=subprocess.PIPE,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
    )

    try:
        for count, frame in enumerate(frame_iterator, start=1):
            proc.stdin.write(np.ascontiguousarray(frame, dtype=np.uint8).tobytes())
            if progress_callback and total_frames:
                progress_callback(count, total_frames)
    except BrokenPipeError:
        # ffmpeg died early; its stderr explains why
        pass
    finally:
        proc.stdin.close()

    stderr = proc.stderr.read().decode("utf-8", errors="replace").strip()
    if proc.wait() != 0:
        raise RuntimeError(f"ffmpeg exited with code {proc.returncode}: {stderr[-500:]}")
    return output_path

"""
Persistent pixel surface.

A float RGB buffer that executes render commands. Strokes are rasterized
with Pillow's RGBA-blending ImageDraw and merged back only where pixels
changed, so the slow trail fade keeps its float precision everywhere else.
"""

from typing import Iterable, List, Tuple

import numpy as np
from PIL import Image, ImageDraw

from driftcanvas.colorgrade import fade_toward, screen_glow, to_uint8
from driftcanvas.trails import ClearSurface, Command, FillRect, StrokeSegment


class PixelSurface:
    """
    2-D pixel buffer with clear, fill and stroke primitives.

    Args:
        width: Surface width in pixels.
        height: Surface height in pixels.
        background: Initial fill color.
    """

    def __init__(self, width: int, height: int, background: Tuple[int, int, int] = (0, 0, 0)):
        self.width = width
        self.height = height
        self.background = background
        self.buffer = np.zeros((height, width, 3), dtype=np.float32)
        self.clear(background)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def resize(self, width: int, height: int):
        """Reallocate the buffer; contents are discarded."""
        self.width = width
        self.height = height
        self.buffer = np.zeros((height, width, 3), dtype=np.float32)
        self.clear(self.background)

    def clear(self, color: Tuple[int, int, int] | None = None):
        color = self.background if color is None else color
        self.buffer[...] = np.asarray(color, dtype=np.float32) / 255.0

    def fill_rect(self, color: Tuple[int, int, int], alpha: float):
        fade_toward(self.buffer, color, alpha)

    def stroke(self, segments: Iterable[StrokeSegment]):
        """Rasterize a batch of segments (glow first, then the lines)."""
        segments = list(segments)
        if not segments:
            return

        glowing = [s for s in segments if s.glow_radius > 0 and s.glow_color is not None]
        if glowing:
            layer = Image.new("RGB", self.size, (0, 0, 0))
            draw = ImageDraw.Draw(layer)
            for seg in glowing:
                r, g, b, a = seg.glow_color
                draw.line(
                    [seg.start, seg.end],
                    fill=(int(r * a), int(g * a), int(b * a)),
                    width=max(1, int(round(seg.width))),
                )
            radius = max(s.glow_radius for s in glowing)
            screen_glow(self.buffer, layer, radius)

        before = to_uint8(self.buffer)
        img = Image.fromarray(before)
        draw = ImageDraw.Draw(img, "RGBA")
        for seg in segments:
            r, g, b, a = seg.color
            if a <= 0:
                continue
            draw.line(
                [seg.start, seg.end],
                fill=(r, g, b, int(round(a * 255))),
                width=max(1, int(round(seg.width))),
            )
        after = np.asarray(img)
        changed = np.any(after != before, axis=-1)
        self.buffer[changed] = after[changed].astype(np.float32) / 255.0

    def apply(self, commands: Iterable[Command]):
        """Execute commands in order, batching consecutive strokes."""
        pending: List[StrokeSegment] = []
        for cmd in commands:
            if isinstance(cmd, StrokeSegment):
                pending.append(cmd)
                continue
            self.stroke(pending)
            pending = []
            if isinstance(cmd, ClearSurface):
                self.clear(cmd.color)
            elif isinstance(cmd, FillRect):
                self.fill_rect(cmd.color, cmd.alpha)
            else:
                raise TypeError(f"Unknown render command: {cmd!r}")
        self.stroke(pending)

    def to_array(self) -> np.ndarray:
        """(H, W, 3) uint8 RGB snapshot."""
        return to_uint8(self.buffer)

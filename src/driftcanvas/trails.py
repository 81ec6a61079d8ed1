"""
Per-frame compositing commands.

Scenes never touch pixels directly: each tick returns a list of commands
(clear, fade, stroke) that a surface executes in order. The trail renderer
builds those commands with the time-varying hue and alpha curves for
particle segments and harmonograph path segments.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from driftcanvas.colorgrade import RGBA, hsla_to_rgba
from driftcanvas.particles import Particle

Point = Tuple[float, float]
RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class ClearSurface:
    """Replace every pixel with ``color``."""
    color: RGB = (0, 0, 0)


@dataclass(frozen=True)
class FillRect:
    """Paint ``color`` at ``alpha`` over the whole surface (trail fade)."""
    color: RGB
    alpha: float


@dataclass(frozen=True)
class StrokeSegment:
    """A single line segment with optional glow."""
    start: Point
    end: Point
    color: RGBA
    width: float = 1.0
    glow_radius: float = 0.0
    glow_color: Optional[RGBA] = None


Command = Union[ClearSurface, FillRect, StrokeSegment]


class TrailRenderer:
    """
    Builds the incremental visual delta for one frame.

    Args:
        background: Color the trails fade toward.
        trail_alpha: Per-frame fade opacity (lower = longer trails).
        line_width: Stroke width in pixels.
        glow: Glow blur radius for path segments (0 disables).
    """

    # Flow-field particle strokes
    PARTICLE_SATURATION = 78.0
    PARTICLE_LIGHTNESS = 52.0
    PARTICLE_LIGHTNESS_GAIN = 18.0
    PARTICLE_PEAK_ALPHA = 0.7

    # Harmonograph path strokes
    PATH_HUE_SWEEP = 240.0
    PATH_ALPHA_START = 0.88
    PATH_ALPHA_SLOPE = 0.65
    PATH_ALPHA_FLOOR = 0.06

    def __init__(
        self,
        background: RGB = (0, 0, 0),
        trail_alpha: float = 0.0,
        line_width: float = 1.0,
        glow: float = 0.0,
    ):
        self.background = background
        self.trail_alpha = trail_alpha
        self.line_width = line_width
        self.glow = glow

    def clear(self) -> ClearSurface:
        return ClearSurface(self.background)

    def fade(self) -> FillRect:
        return FillRect(self.background, self.trail_alpha)

    def particle_stroke(self, p: Particle, global_hue: float) -> StrokeSegment:
        """Segment from the particle's previous to current position.

        Alpha rises and falls with ``sin(progress * pi)``; lightness climbs
        linearly with age.
        """
        progress = p.age / p.max_life if p.max_life > 0 else 1.0
        alpha = math.sin(progress * math.pi) * self.PARTICLE_PEAK_ALPHA
        hue = (global_hue + p.hue_offset + 360.0) % 360.0
        lum = self.PARTICLE_LIGHTNESS + progress * self.PARTICLE_LIGHTNESS_GAIN
        return StrokeSegment(
            start=(p.px, p.py),
            end=(p.x, p.y),
            color=hsla_to_rgba(hue, self.PARTICLE_SATURATION, lum, alpha),
            width=self.line_width,
        )

    def path_stroke(
        self,
        prev: Point,
        curr: Point,
        progress: float,
        hue_base: float,
    ) -> StrokeSegment:
        """Harmonograph segment: hue sweeps along the figure, alpha dims to a floor."""
        hue = (hue_base + progress * self.PATH_HUE_SWEEP) % 360.0
        alpha = max(self.PATH_ALPHA_FLOOR, self.PATH_ALPHA_START - progress * self.PATH_ALPHA_SLOPE)
        glow_color = hsla_to_rgba(hue, 100.0, 70.0, 0.35) if self.glow > 0 else None
        return StrokeSegment(
            start=prev,
            end=curr,
            color=hsla_to_rgba(hue, 85.0, 62.0, alpha),
            width=self.line_width,
            glow_radius=self.glow,
            glow_color=glow_color,
        )

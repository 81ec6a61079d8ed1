"""
Color conversion and buffer blending.

HSLA values are the lingua franca of the scenes (hue in degrees, saturation
and lightness in percent, alpha 0-1); the surface works on float RGB
buffers in [0, 1].
"""

import colorsys
from typing import Tuple

import numpy as np
from PIL import Image, ImageFilter

RGBA = Tuple[int, int, int, float]


def hsla_to_rgba(hue: float, saturation: float, lightness: float, alpha: float) -> RGBA:
    """
    Convert CSS-style HSLA to an (r, g, b, a) tuple.

    Args:
        hue: Degrees, any real value (wrapped mod 360).
        saturation: Percent (0-100).
        lightness: Percent (0-100).
        alpha: Opacity (0-1), clamped.

    Returns:
        (r, g, b) as 0-255 ints and alpha as a float.
    """
    h = (hue % 360.0) / 360.0
    s = min(max(saturation / 100.0, 0.0), 1.0)
    l = min(max(lightness / 100.0, 0.0), 1.0)
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    a = min(max(alpha, 0.0), 1.0)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), a)


def fade_toward(
    buffer: np.ndarray,
    color: Tuple[int, int, int],
    alpha: float,
) -> np.ndarray:
    """
    Blend a float RGB buffer toward a solid color, in place.

    Equivalent to painting a full-surface rectangle of ``color`` at
    ``alpha`` opacity. Kept in float so long trails decay to the exact
    background instead of leaving quantization ghosts.
    """
    if alpha <= 0:
        return buffer
    target = np.asarray(color, dtype=np.float32) / 255.0
    buffer += (target - buffer) * np.float32(min(alpha, 1.0))
    return buffer


def screen_glow(
    buffer: np.ndarray,
    layer: Image.Image,
    radius: float,
) -> np.ndarray:
    """
    Screen-blend a gaussian-blurred glow layer onto a float buffer, in place.

    Args:
        buffer: (H, W, 3) float32 array in [0, 1].
        layer: RGB image of glow strokes, pre-multiplied by their alpha.
        radius: Blur radius in pixels (canvas ``shadowBlur`` is twice the sigma).

    Returns:
        The same buffer.
    """
    if radius <= 0:
        return buffer
    blurred = layer.filter(ImageFilter.GaussianBlur(radius=radius / 2.0))
    glow = np.asarray(blurred, dtype=np.float32) / 255.0

    # Screen blend: result = 1 - (1-a)(1-b)
    buffer[...] = 1.0 - (1.0 - buffer) * (1.0 - glow)
    return buffer


def to_uint8(buffer: np.ndarray) -> np.ndarray:
    """(H, W, 3) float [0, 1] -> uint8."""
    return (np.clip(buffer, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)

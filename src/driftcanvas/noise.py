"""
2-D gradient noise.

Perlin-style noise over a shuffled, doubled permutation table. The gradient
set is the reduced four-direction variant (x+y, -x+y, x-y, -x-y) selected by
the low two bits of each corner hash.
"""

import math
import random


def _fade(t: float) -> float:
    # 6t^5 - 15t^4 + 10t^3
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _grad(h: int, x: float, y: float) -> float:
    h &= 3
    if h == 0:
        return x + y
    if h == 1:
        return -x + y
    if h == 2:
        return x - y
    return -x - y


def shuffled_base(rng) -> list[int]:
    """
    Fisher-Yates shuffle of 0..255.

    Only ``rng.random()`` is consumed, so any object exposing it can drive
    the shuffle.
    """
    base = list(range(256))
    for i in range(255, 0, -1):
        j = int(rng.random() * (i + 1))
        base[i], base[j] = base[j], base[i]
    return base


class NoiseField:
    """
    Deterministic 2-D gradient noise field.

    The permutation table is built once from ``rng`` and never mutated.
    ``sample`` is total over all real inputs and returns values in roughly
    [-1, 1].
    """

    def __init__(self, rng: random.Random | None = None, seed: int | None = None):
        rng = rng or random.Random(seed)
        self.base: tuple[int, ...] = tuple(shuffled_base(rng))
        self.perm: tuple[int, ...] = tuple(self.base[i & 255] for i in range(512))

    def sample(self, x: float, y: float) -> float:
        fx = math.floor(x)
        fy = math.floor(y)
        xi = fx & 255
        yi = fy & 255
        xf = x - fx
        yf = y - fy
        u = _fade(xf)
        v = _fade(yf)

        p = self.perm
        aa = p[p[xi] + yi]
        ab = p[p[xi] + yi + 1]
        ba = p[p[xi + 1] + yi]
        bb = p[p[xi + 1] + yi + 1]

        return _lerp(
            _lerp(_grad(aa, xf, yf), _grad(ba, xf - 1, yf), u),
            _lerp(_grad(ab, xf, yf - 1), _grad(bb, xf - 1, yf - 1), u),
            v,
        )

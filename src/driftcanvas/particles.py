"""
Flow-field particles.

One record type for every particle; ambient and burst particles differ only
in the ``burst`` flag. Motion, expiry and respawn are plain functions over
that record so they can be driven and inspected one tick at a time.
"""

import math
import random
from dataclasses import dataclass
from typing import List, Tuple

from driftcanvas.context import FrameContext

# Squared distance below which pointer repulsion is skipped.
REPULSION_EPSILON = 0.001


@dataclass
class FlowFieldConfig:
    """Configuration for the flow-field scene."""
    width: int = 1920
    height: int = 1080
    fps: int = 60

    count: int = 1400  # ambient particles
    speed: float = 1.9  # pixels per tick
    scale: float = 0.0028  # noise sampling scale
    turn: float = 4 * math.pi  # noise value -> heading angle
    max_life: float = 130  # base lifetime in ticks
    trail_alpha: float = 0.038  # background fade per tick
    mouse_radius: float = 130  # repulsion radius in px
    mouse_push: float = 5  # repulsion strength
    hue_range: float = 80  # per-particle hue spread (+/- half)
    margin: float = 12  # off-canvas slack before respawn

    burst_size: int = 80
    burst_jitter: float = 10  # full width of the burst scatter box
    warm_start: bool = True

    time_step: float = 0.004
    hue_step: float = 0.15
    start_hue: float = 210  # blue
    background: Tuple[int, int, int] = (0, 0, 0)


@dataclass
class Particle:
    """A single advected particle with a bounded lifetime."""
    x: float
    y: float
    px: float
    py: float
    age: int = 0
    max_life: float = 130.0
    hue_offset: float = 0.0
    burst: bool = False


def repulsion(
    x: float,
    y: float,
    pointer: Tuple[float, float],
    radius: float,
    strength: float,
) -> Tuple[float, float]:
    """
    Push vector away from the pointer.

    Linear falloff: ``strength`` at the pointer, zero at ``radius``.
    Within ``REPULSION_EPSILON`` of the pointer no push is applied.
    """
    dx = x - pointer[0]
    dy = y - pointer[1]
    d_sq = dx * dx + dy * dy
    if d_sq >= radius * radius or d_sq <= REPULSION_EPSILON:
        return 0.0, 0.0
    d = math.sqrt(d_sq)
    push = (radius - d) / radius * strength
    return dx / d * push, dy / d * push


def spawn(cfg: FlowFieldConfig, width: float, height: float, rng, burst: bool = False) -> Particle:
    """New particle at a uniformly random position."""
    x = rng.random() * width
    y = rng.random() * height
    return Particle(
        x=x, y=y, px=x, py=y,
        age=0,
        max_life=cfg.max_life * rng.uniform(0.5, 1.5),
        hue_offset=rng.uniform(-cfg.hue_range / 2, cfg.hue_range / 2),
        burst=burst,
    )


def respawn(p: Particle, ctx: FrameContext, cfg: FlowFieldConfig, rng):
    """Reset ``p`` in place at a fresh random position.

    Burst particles keep their lifetime and hue offset; those are re-seeded
    by ``ParticlePopulation.trigger_burst``.
    """
    p.x = rng.random() * ctx.width
    p.y = rng.random() * ctx.height
    p.px, p.py = p.x, p.y
    p.age = 0
    if not p.burst:
        p.max_life = cfg.max_life * rng.uniform(0.5, 1.5)
        p.hue_offset = rng.uniform(-cfg.hue_range / 2, cfg.hue_range / 2)


def expired(p: Particle, ctx: FrameContext, margin: float) -> bool:
    return (
        p.age > p.max_life
        or p.x < -margin or p.x > ctx.width + margin
        or p.y < -margin or p.y > ctx.height + margin
    )


def advance(p: Particle, ctx: FrameContext, noise, cfg: FlowFieldConfig, rng) -> bool:
    """
    Move ``p`` one tick through the field.

    Returns True when the particle expired and was respawned.
    """
    p.px, p.py = p.x, p.y

    n = noise.sample(p.x * cfg.scale, p.y * cfg.scale + ctx.time)
    angle = n * cfg.turn
    p.x += math.cos(angle) * cfg.speed
    p.y += math.sin(angle) * cfg.speed

    push_x, push_y = repulsion(p.x, p.y, ctx.pointer, cfg.mouse_radius, cfg.mouse_push)
    p.x += push_x
    p.y += push_y

    p.age += 1

    if expired(p, ctx, cfg.margin):
        respawn(p, ctx, cfg, rng)
        return True
    return False


class ParticlePopulation:
    """
    Ambient particles plus a reusable burst pool.

    Both pools are allocated once and respawned in place forever. The burst
    pool advances with the ambient pool but is force-reset by
    ``trigger_burst``.
    """

    def __init__(
        self,
        config: FlowFieldConfig | None = None,
        rng: random.Random | None = None,
        width: int | None = None,
        height: int | None = None,
    ):
        self.cfg = config or FlowFieldConfig()
        self.rng = rng or random.Random()
        w = self.cfg.width if width is None else width
        h = self.cfg.height if height is None else height

        self.ambient: List[Particle] = [spawn(self.cfg, w, h, self.rng) for _ in range(self.cfg.count)]
        self.burst: List[Particle] = [
            spawn(self.cfg, w, h, self.rng, burst=True) for _ in range(self.cfg.burst_size)
        ]

        if self.cfg.warm_start:
            # Stagger ages so the field is already populated on frame one
            for p in self.ambient:
                p.age = int(self.rng.random() * p.max_life)

    @property
    def particles(self) -> List[Particle]:
        return self.ambient + self.burst

    def __len__(self) -> int:
        return len(self.ambient) + len(self.burst)

    def trigger_burst(self, x: float, y: float):
        """Gather the whole burst pool at (x, y), regardless of age."""
        jitter = self.cfg.burst_jitter
        for p in self.burst:
            p.x = p.px = x + (self.rng.random() - 0.5) * jitter
            p.y = p.py = y + (self.rng.random() - 0.5) * jitter
            p.age = 0
            p.max_life = self.cfg.max_life * self.rng.uniform(0.7, 1.3)

    def advance(self, ctx: FrameContext, noise) -> int:
        """Advance every particle (ambient first). Returns the respawn count."""
        respawned = 0
        for p in self.ambient:
            respawned += advance(p, ctx, noise, self.cfg, self.rng)
        for p in self.burst:
            respawned += advance(p, ctx, noise, self.cfg, self.rng)
        return respawned

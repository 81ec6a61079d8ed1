"""
Flow-field scene.

Particles follow a vector field derived from 2-D gradient noise while the
global hue drifts slowly around the wheel. The pointer repels particles and
a click gathers the burst pool at the click point.
"""

import random
from typing import List, Tuple

from driftcanvas.context import OFF_CANVAS, FrameContext
from driftcanvas.noise import NoiseField
from driftcanvas.particles import FlowFieldConfig, ParticlePopulation
from driftcanvas.trails import Command, TrailRenderer


class FlowField:
    """
    Flow-field scene: population, noise field and the global clock/hue.

    ``noise`` may be any object with a ``sample(x, y)`` method.
    """

    def __init__(
        self,
        config: FlowFieldConfig | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
        noise=None,
    ):
        self.cfg = config or FlowFieldConfig()
        self.rng = rng or random.Random(seed)
        self.noise = noise or NoiseField(self.rng)
        self.width = self.cfg.width
        self.height = self.cfg.height
        self.population = ParticlePopulation(self.cfg, self.rng, self.width, self.height)
        self.trails = TrailRenderer(
            background=self.cfg.background,
            trail_alpha=self.cfg.trail_alpha,
        )
        self.time = 0.0
        self.global_hue = self.cfg.start_hue

    def context(self, pointer: Tuple[float, float] = OFF_CANVAS) -> FrameContext:
        return FrameContext(
            width=self.width,
            height=self.height,
            pointer=pointer,
            time=self.time,
            global_hue=self.global_hue,
        )

    def start(self) -> List[Command]:
        return [self.trails.clear()]

    def resize(self, width: int, height: int) -> List[Command]:
        # Particles only need the new bounds; the buffer is reallocated by the surface
        self.width = width
        self.height = height
        return [self.trails.clear()]

    def trigger(self, x: float, y: float) -> List[Command]:
        self.population.trigger_burst(x, y)
        return []

    def tick(self, pointer: Tuple[float, float] = OFF_CANVAS) -> List[Command]:
        ctx = self.context(pointer)
        commands: List[Command] = [self.trails.fade()]

        self.population.advance(ctx, self.noise)
        for p in self.population.particles:
            commands.append(self.trails.particle_stroke(p, ctx.global_hue))

        self.time += self.cfg.time_step
        self.global_hue = (self.global_hue + self.cfg.hue_step) % 360
        return commands

"""
Simulated two-pendulum harmonograph.

Each axis is driven by a primary and a slightly detuned secondary damped
oscillator. Frequencies come from a small catalogue of integer ratios, so
figures close (or nearly close) before damping pulls them into the centre.

Lifecycle per figure:
- RUNNING: sample ``steps_per_frame`` points per tick until ``total_steps``.
- PAUSED: hold the finished figure for ``pause_after`` ticks.
- restart: clear, draw fresh parameters, back to RUNNING.
A trigger (click/tap) or resize restarts from any state.
"""

import enum
import math
import random
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from driftcanvas.context import OFF_CANVAS
from driftcanvas.trails import Command, TrailRenderer

Point = Tuple[float, float]

# Frequency ratios that produce stable, pleasing figures
RATIOS: List[Tuple[int, int]] = [
    (2, 3), (3, 4), (3, 5), (4, 5),
    (5, 6), (4, 7), (5, 7), (5, 8),
]

PRIMARY_WEIGHT = 0.65
SECONDARY_WEIGHT = 0.35
RADIUS_FRACTION = 0.42
DETUNE_SPREAD = 0.012  # +/- 0.6%


@dataclass
class HarmonographConfig:
    """Configuration for the harmonograph scene."""
    width: int = 1920
    height: int = 1080
    fps: int = 60

    steps_per_frame: int = 500  # path points per tick
    total_steps: int = 90000  # points per figure
    dt: float = 0.025  # time increment per point
    damping: float = 0.0006  # base amplitude decay rate
    line_width: float = 1.0
    glow: float = 10  # glow blur radius (0 disables)
    pause_after: int = 120  # ticks to hold a finished figure
    background: Tuple[int, int, int] = (0, 0, 0)


class Oscillator(NamedTuple):
    frequency: float
    phase: float
    damping: float

    def value(self, t: float) -> float:
        return math.sin(self.frequency * t + self.phase) * math.exp(-self.damping * t)


class HarmonographParams(NamedTuple):
    x_primary: Oscillator
    x_secondary: Oscillator
    y_primary: Oscillator
    y_secondary: Oscillator
    ratio: Tuple[int, int]


def randomize_params(rng, damping: float) -> HarmonographParams:
    """
    Draw a full parameter set.

    Uses only ``rng.random()`` / ``rng.uniform()``, so a random source fixed
    to one value yields identical parameter sets on every call.
    """
    a, b = RATIOS[min(int(rng.random() * len(RATIOS)), len(RATIOS) - 1)]
    base = rng.uniform(0.8, 1.2)

    def osc(ratio: int) -> Oscillator:
        detune = 1.0 + (rng.random() - 0.5) * DETUNE_SPREAD
        return Oscillator(
            frequency=base * ratio * detune,
            phase=rng.random() * 2 * math.pi,
            damping=damping * rng.uniform(0.7, 1.3),
        )

    return HarmonographParams(
        x_primary=osc(a),
        x_secondary=osc(a),
        y_primary=osc(b),
        y_secondary=osc(b),
        ratio=(a, b),
    )


def position(t: float, params: HarmonographParams, center: Point, radius: float) -> Point:
    """Pen position at time ``t``."""
    x = radius * (
        PRIMARY_WEIGHT * params.x_primary.value(t)
        + SECONDARY_WEIGHT * params.x_secondary.value(t)
    )
    y = radius * (
        PRIMARY_WEIGHT * params.y_primary.value(t)
        + SECONDARY_WEIGHT * params.y_secondary.value(t)
    )
    return center[0] + x, center[1] + y


class Phase(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"


class Harmonograph:
    """
    Harmonograph scene: owns the parameter set and the drawing state machine.
    """

    def __init__(self, config: HarmonographConfig | None = None, rng: random.Random | None = None,
                 seed: int | None = None):
        self.cfg = config or HarmonographConfig()
        self.rng = rng or random.Random(seed)
        self.trails = TrailRenderer(
            background=self.cfg.background,
            line_width=self.cfg.line_width,
            glow=self.cfg.glow,
        )
        self.width = self.cfg.width
        self.height = self.cfg.height
        self._measure()

        self.params = randomize_params(self.rng, self.cfg.damping)
        self.t = 0.0
        self.step = 0
        self.hue_base = 0.0
        self.phase = Phase.RUNNING
        self.pause_frame = 0
        self.prev = self.center
        self.figures = 0

    def _measure(self):
        self.center = (self.width / 2, self.height / 2)
        self.radius = min(self.width, self.height) * RADIUS_FRACTION

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED

    def position(self, t: float) -> Point:
        return position(t, self.params, self.center, self.radius)

    def start(self) -> List[Command]:
        """Clear and begin a new figure."""
        self.params = randomize_params(self.rng, self.cfg.damping)
        self.hue_base = self.rng.random() * 360
        self.t = 0.0
        self.step = 0
        self.phase = Phase.RUNNING
        self.pause_frame = 0
        self.prev = self.position(0.0)
        self.figures += 1
        return [self.trails.clear()]

    def resize(self, width: int, height: int) -> List[Command]:
        # Every spatial parameter derives from the radius, so restart
        self.width = width
        self.height = height
        self._measure()
        return self.start()

    def trigger(self, x: float, y: float) -> List[Command]:
        return self.start()

    def tick(self, pointer: Point = OFF_CANVAS) -> List[Command]:
        commands: List[Command] = []
        if self.phase is Phase.PAUSED:
            self.pause_frame += 1
            if self.pause_frame >= self.cfg.pause_after:
                commands.extend(self.start())
            return commands

        cfg = self.cfg
        drawn = 0
        while drawn < cfg.steps_per_frame and self.step < cfg.total_steps:
            self.t += cfg.dt
            curr = self.position(self.t)
            progress = self.step / cfg.total_steps
            commands.append(self.trails.path_stroke(self.prev, curr, progress, self.hue_base))
            self.prev = curr
            self.step += 1
            drawn += 1

        if self.step >= cfg.total_steps:
            self.phase = Phase.PAUSED
        return commands

"""
Frame driver.

Owns one scene, the pixel surface and the shared input state. Each tick
consumes pending input once, asks the scene for that frame's render
commands and paints them. Scheduling is external: a display loop, the
video encoder, or a test calls ``tick`` once per frame.
"""

import random
from typing import Any, Callable, Iterator, List

import numpy as np

from driftcanvas.context import InputState
from driftcanvas.flowfield import FlowField
from driftcanvas.harmonograph import Harmonograph, HarmonographConfig
from driftcanvas.particles import FlowFieldConfig
from driftcanvas.surface import PixelSurface
from driftcanvas.trails import Command

SCENES = {
    "flow": (FlowField, FlowFieldConfig),
    "harmonograph": (Harmonograph, HarmonographConfig),
}


class AnimationDriver:
    """
    Per-frame loop for a single scene.

    Args:
        scene: A ``FlowField`` or ``Harmonograph`` (anything with
            ``start``, ``tick``, ``trigger`` and ``resize``).
        surface: Target surface; created from the scene config if omitted.
        inputs: Shared input state written by event handlers.
    """

    def __init__(self, scene: Any, surface: PixelSurface | None = None, inputs: InputState | None = None):
        self.scene = scene
        self.surface = surface or PixelSurface(scene.cfg.width, scene.cfg.height, scene.cfg.background)
        self.inputs = inputs or InputState()
        self.frame_index = 0
        self.surface.apply(self.scene.start())

    def tick(self) -> List[Command]:
        """Advance one frame and paint it. Returns the commands applied."""
        commands: List[Command] = []

        size = self.inputs.take_resize()
        if size is not None:
            self.surface.resize(*size)
            commands.extend(self.scene.resize(*size))

        trig = self.inputs.take_trigger()
        if trig is not None:
            commands.extend(self.scene.trigger(*trig))

        commands.extend(self.scene.tick(self.inputs.pointer))
        self.surface.apply(commands)
        self.frame_index += 1
        return commands

    def frames(self, n_frames: int, progress_callback: Callable[[int, int], None] | None = None) -> Iterator[np.ndarray]:
        """Yield ``n_frames`` rendered (H, W, 3) uint8 frames."""
        for i in range(n_frames):
            self.tick()
            yield self.surface.to_array()
            if progress_callback:
                progress_callback(i + 1, n_frames)


def create_driver(scene: str, config: Any = None, seed: int | None = None) -> AnimationDriver:
    """Build a driver for a named scene ("flow" or "harmonograph")."""
    if scene not in SCENES:
        raise ValueError(f"Unknown scene {scene!r}; expected one of {sorted(SCENES)}")
    scene_cls, config_cls = SCENES[scene]
    return AnimationDriver(scene_cls(config or config_cls(), rng=random.Random(seed)))

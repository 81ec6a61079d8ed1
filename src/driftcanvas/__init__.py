"""Procedural flow-field and harmonograph animation engine."""

from driftcanvas.context import OFF_CANVAS, FrameContext, InputState
from driftcanvas.driver import AnimationDriver, create_driver
from driftcanvas.flowfield import FlowField
from driftcanvas.harmonograph import Harmonograph, HarmonographConfig
from driftcanvas.noise import NoiseField
from driftcanvas.particles import FlowFieldConfig, Particle, ParticlePopulation
from driftcanvas.surface import PixelSurface
from driftcanvas.trails import TrailRenderer

__version__ = "0.1.0"
__all__ = [
    "OFF_CANVAS",
    "FrameContext",
    "InputState",
    "AnimationDriver",
    "create_driver",
    "FlowField",
    "FlowFieldConfig",
    "Harmonograph",
    "HarmonographConfig",
    "NoiseField",
    "Particle",
    "ParticlePopulation",
    "PixelSurface",
    "TrailRenderer",
]

"""Pytest configuration and shared fixtures."""

import random

import pytest

from driftcanvas.context import FrameContext


class FixedRandom(random.Random):
    """Random source that returns the same value for every draw."""

    def __init__(self, value: float = 0.5):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


class ZeroNoise:
    """Noise field that is zero everywhere (heading is always +x)."""

    def sample(self, x: float, y: float) -> float:
        return 0.0


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible tests."""
    return random.Random(1234)


@pytest.fixture
def fixed_rng() -> FixedRandom:
    return FixedRandom(0.5)


@pytest.fixture
def zero_noise() -> ZeroNoise:
    return ZeroNoise()


@pytest.fixture
def canvas() -> FrameContext:
    """800x600 context with the pointer off-canvas."""
    return FrameContext(width=800, height=600)

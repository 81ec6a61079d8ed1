"""Tests for render commands and stroke styling."""

import math

import pytest

from driftcanvas.colorgrade import hsla_to_rgba
from driftcanvas.particles import Particle
from driftcanvas.trails import ClearSurface, FillRect, StrokeSegment, TrailRenderer


def _particle(age, max_life=100.0, hue_offset=0.0) -> Particle:
    return Particle(x=10.0, y=20.0, px=8.0, py=19.0, age=age, max_life=max_life, hue_offset=hue_offset)


class TestParticleStroke:
    def test_segment_endpoints(self):
        seg = TrailRenderer().particle_stroke(_particle(50), 210.0)
        assert seg.start == (8.0, 19.0)
        assert seg.end == (10.0, 20.0)
        assert seg.width == 1.0
        assert seg.glow_radius == 0.0

    def test_alpha_envelope(self):
        trails = TrailRenderer()
        assert trails.particle_stroke(_particle(0), 0.0).color[3] == pytest.approx(0.0)
        assert trails.particle_stroke(_particle(50), 0.0).color[3] == pytest.approx(0.7)
        assert trails.particle_stroke(_particle(100), 0.0).color[3] == pytest.approx(0.0, abs=1e-9)
        quarter = trails.particle_stroke(_particle(25), 0.0).color[3]
        assert quarter == pytest.approx(math.sin(math.pi / 4) * 0.7)

    def test_hue_and_lightness(self):
        trails = TrailRenderer()
        seg = trails.particle_stroke(_particle(100, hue_offset=-40.0), 20.0)
        # (20 - 40) wraps to 340, lightness 70 at end of life
        assert seg.color[:3] == hsla_to_rgba(340.0, 78.0, 70.0, 0.0)[:3]
        seg = trails.particle_stroke(_particle(0, hue_offset=30.0), 350.0)
        assert seg.color[:3] == hsla_to_rgba(20.0, 78.0, 52.0, 0.0)[:3]


class TestPathStroke:
    def test_alpha_fades_to_floor(self):
        trails = TrailRenderer(glow=10)
        assert trails.path_stroke((0, 0), (1, 1), 0.0, 0.0).color[3] == pytest.approx(0.88)
        assert trails.path_stroke((0, 0), (1, 1), 0.5, 0.0).color[3] == pytest.approx(0.555)
        assert trails.path_stroke((0, 0), (1, 1), 1.0, 0.0).color[3] == pytest.approx(0.23)
        # Floor applies once the slope would go below it
        trails.PATH_ALPHA_SLOPE = 2.0
        assert trails.path_stroke((0, 0), (1, 1), 1.0, 0.0).color[3] == pytest.approx(0.06)

    def test_hue_sweep(self):
        trails = TrailRenderer()
        a = trails.path_stroke((0, 0), (1, 1), 0.5, 300.0)
        assert a.color[:3] == hsla_to_rgba(60.0, 85.0, 62.0, 1.0)[:3]

    def test_glow_optional(self):
        assert TrailRenderer(glow=0).path_stroke((0, 0), (1, 1), 0.1, 0.0).glow_color is None
        seg = TrailRenderer(glow=10).path_stroke((0, 0), (1, 1), 0.1, 0.0)
        assert seg.glow_radius == 10
        assert seg.glow_color[3] == pytest.approx(0.35)


class TestFrameCommands:
    def test_fade(self):
        assert TrailRenderer(background=(1, 2, 3), trail_alpha=0.04).fade() == FillRect((1, 2, 3), 0.04)

    def test_clear(self):
        assert TrailRenderer(background=(9, 9, 9)).clear() == ClearSurface((9, 9, 9))

    def test_commands_are_frozen(self):
        seg = StrokeSegment((0, 0), (1, 1), (255, 0, 0, 1.0))
        with pytest.raises(AttributeError):
            seg.width = 3

"""Tests for the gradient noise field."""

import random

import pytest

from driftcanvas.noise import NoiseField, shuffled_base

from conftest import FixedRandom


class TestPermutationTable:
    def test_base_is_permutation(self, rng):
        field = NoiseField(rng)
        assert sorted(field.base) == list(range(256))

    def test_doubled_table(self, rng):
        field = NoiseField(rng)
        assert len(field.perm) == 512
        assert field.perm[:256] == field.perm[256:]
        assert sorted(field.perm[:256]) == list(range(256))
        assert all(0 <= v <= 255 for v in field.perm)

    def test_table_is_immutable(self, rng):
        field = NoiseField(rng)
        with pytest.raises(TypeError):
            field.perm[0] = 1

    def test_fixed_source_still_permutes(self):
        base = shuffled_base(FixedRandom(0.999))
        assert sorted(base) == list(range(256))

    def test_shuffle_actually_shuffles(self, rng):
        assert shuffled_base(rng) != list(range(256))


class TestSample:
    def test_deterministic_for_seed(self):
        a = NoiseField(seed=7)
        b = NoiseField(seed=7)
        pts = [(0.3, 0.7), (12.5, -3.25), (200.1, 99.9)]
        assert [a.sample(*p) for p in pts] == [b.sample(*p) for p in pts]

    def test_different_seeds_differ(self):
        a = NoiseField(seed=1)
        b = NoiseField(seed=2)
        pts = [(i * 0.37, i * 0.53) for i in range(1, 50)]
        assert [a.sample(*p) for p in pts] != [b.sample(*p) for p in pts]

    def test_zero_at_lattice_points(self, rng):
        field = NoiseField(rng)
        for x in range(-3, 4):
            for y in range(-3, 4):
                assert field.sample(float(x), float(y)) == 0.0

    def test_range(self):
        field = NoiseField(seed=99)
        draw = random.Random(5)
        for _ in range(5000):
            x = draw.uniform(-500, 500)
            y = draw.uniform(-500, 500)
            assert -1.2 <= field.sample(x, y) <= 1.2

    def test_not_constant(self, rng):
        field = NoiseField(rng)
        values = {round(field.sample(i * 0.31 + 0.1, i * 0.17 + 0.2), 6) for i in range(100)}
        assert len(values) > 50

    def test_continuous_across_cell_boundaries(self, rng):
        """Dense sampling across several integer boundaries has small steps."""
        field = NoiseField(rng)
        step = 1e-3
        for y in (0.25, 3.6, 41.9):
            prev = field.sample(-0.5, y)
            x = -0.5
            while x < 4.5:
                x += step
                curr = field.sample(x, y)
                # Gradients have magnitude <= sqrt(2), so slope is bounded
                assert abs(curr - prev) < 0.01
                prev = curr

    def test_boundary_limits_match(self, rng):
        field = NoiseField(rng)
        for xi in range(1, 6):
            left = field.sample(xi - 1e-9, 0.4)
            right = field.sample(xi + 1e-9, 0.4)
            assert left == pytest.approx(right, abs=1e-6)

    def test_wraps_every_256_cells(self, rng):
        field = NoiseField(rng)
        assert field.sample(3.3, 4.7) == pytest.approx(field.sample(259.3, 4.7))
        assert field.sample(3.3, 4.7) == pytest.approx(field.sample(3.3, 260.7))

    def test_negative_inputs(self, rng):
        field = NoiseField(rng)
        value = field.sample(-1000.25, -0.75)
        assert -1.2 <= value <= 1.2

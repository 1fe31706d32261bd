"""
Tests for the ground height field and grid mesh.
"""

import math

import numpy as np
import pytest

from truck_lab.ground import (
    Ground,
    GroundConfig,
    WaveParams,
    compute_height,
    default_waves,
    max_amplitude,
)


@pytest.fixture
def waves():
    return default_waves()


def test_height_is_deterministic(waves):
    for x, z in [(0.0, 0.0), (3.5, -7.25), (-40.0, 12.0)]:
        assert compute_height(x, z, waves) == compute_height(x, z, waves)


def test_height_is_bounded_by_amplitudes(waves):
    rng = np.random.default_rng(42)
    xs = rng.uniform(-200, 200, 5000)
    zs = rng.uniform(-200, 200, 5000)
    heights = compute_height(xs, zs, waves)
    assert np.all(np.abs(heights) <= max_amplitude(waves) + 1e-9)


def test_height_is_zero_at_origin(waves):
    assert compute_height(0.0, 0.0, waves) == pytest.approx(0.0)


def test_single_wave():
    wave = WaveParams(2.0, 0.5, (1.0, 0.0))
    x = math.pi  # sin(0.5 * pi) = 1
    assert compute_height(x, 123.0, [wave]) == pytest.approx(2.0)


def test_scalar_and_array_agree(waves):
    xs = np.array([1.0, -2.0, 5.5])
    zs = np.array([0.5, 3.0, -8.0])
    batch = compute_height(xs, zs, waves)
    for i in range(3):
        assert batch[i] == pytest.approx(compute_height(float(xs[i]), float(zs[i]), waves))


def test_direction_is_normalized():
    wave = WaveParams(1.0, 1.0, (-2.0, 1.0))
    assert math.hypot(*wave.direction) == pytest.approx(1.0)


def test_zero_direction_rejected():
    with pytest.raises(ValueError):
        WaveParams(1.0, 1.0, (0.0, 0.0))


class TestGroundMesh:

    def test_grid_shape(self):
        ground = Ground(GroundConfig(size=10.0, resolution=4))
        assert ground.vertices.shape == (25, 3)
        assert ground.colors.shape == (25, 3)
        # Two triangles per cell
        assert len(ground.indices) == 4 * 4 * 6
        assert ground.indices.max() < len(ground.vertices)

    def test_vertices_displaced_by_height(self):
        ground = Ground(GroundConfig(size=20.0, resolution=10))
        x, y, z = ground.vertices[:, 0], ground.vertices[:, 1], ground.vertices[:, 2]
        assert np.allclose(y, compute_height(x.astype(np.float64), z.astype(np.float64),
                                             ground.waves), atol=1e-5)
        assert x.min() == pytest.approx(-10.0)
        assert z.max() == pytest.approx(10.0)

    def test_colors_between_low_and_high(self):
        color = (0.2, 0.4, 0.6)
        ground = Ground(GroundConfig(size=50.0, resolution=20, color=color))
        low = np.array(color) * 0.5
        high = np.clip(np.array(color) * 1.5, 0.0, 1.0)
        assert np.all(ground.colors >= low - 1e-6)
        assert np.all(ground.colors <= high + 1e-6)

        # Highest vertex gets the high color
        top = np.argmax(ground.vertices[:, 1])
        assert np.allclose(ground.colors[top], high, atol=1e-6)

    def test_flat_ground_uses_low_color(self):
        ground = Ground(GroundConfig(size=10.0, resolution=2, color=(0.4, 0.4, 0.4), waves=[]))
        assert np.allclose(ground.vertices[:, 1], 0.0)
        assert np.allclose(ground.colors, 0.2)

    def test_height_method(self):
        ground = Ground(GroundConfig(size=10.0, resolution=2))
        assert ground.height(1.0, 2.0) == compute_height(1.0, 2.0, ground.waves)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            Ground(GroundConfig(size=0.0))

    def test_from_dict(self):
        cfg = GroundConfig.from_dict({'ground': {
            'size': 30.0,
            'resolution': 15,
            'waves': [{'amplitude': 0.5, 'omega': 1.0, 'direction': [0, 2]}],
        }})
        assert cfg.size == 30.0
        assert cfg.resolution == 15
        assert len(cfg.waves) == 1
        assert cfg.waves[0].direction == pytest.approx((0.0, 1.0))

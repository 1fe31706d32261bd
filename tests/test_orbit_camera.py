"""
Tests for the orbit camera and matrix helpers.
"""

import math

import numpy as np
import pytest

from truck_lab.orbit_camera import CameraConfig, OrbitCamera
from truck_lab.rendering import transforms


@pytest.fixture
def camera():
    return OrbitCamera(1280, 720, CameraConfig(position=(12.0, 4.0, -12.0)))


def test_initial_eye_matches_config(camera):
    assert np.allclose(camera.eye, [12.0, 4.0, -12.0])


def test_view_matrix_centers_target(camera):
    view = camera.view_matrix()
    target_in_view = transforms.transform_point(view, camera.look_at)
    # Target lies straight ahead on the -z axis
    assert target_in_view[0] == pytest.approx(0.0, abs=1e-9)
    assert target_in_view[1] == pytest.approx(0.0, abs=1e-9)
    assert target_in_view[2] == pytest.approx(-camera.radius)


def test_orbit_keeps_distance(camera):
    radius = camera.radius
    camera.update_orbit((40.0, -25.0), 0.0)
    assert np.linalg.norm(camera.eye - camera.look_at) == pytest.approx(radius)


def test_pitch_is_clamped(camera):
    camera.update_orbit((0.0, -1e6), 0.0)
    assert camera.pitch == pytest.approx(math.radians(camera.config.max_pitch_deg))
    camera.update_orbit((0.0, 1e6), 0.0)
    assert camera.pitch == pytest.approx(-math.radians(camera.config.max_pitch_deg))


def test_zoom_in_and_out(camera):
    radius = camera.radius
    camera.zoom(1)
    assert camera.radius < radius
    camera.zoom(-2)
    assert camera.radius > radius


def test_zoom_has_minimum(camera):
    for _ in range(1000):
        camera.zoom(5)
    assert camera.radius == pytest.approx(camera.config.min_radius)


def test_eye_follows_target(camera):
    offset = camera.eye - camera.look_at
    camera.look_at[:] = (5.0, 1.0, 3.0)
    assert np.allclose(camera.eye - camera.look_at, offset)


def test_resize_changes_aspect(camera):
    camera.resize(800, 800)
    assert camera.aspect == pytest.approx(1.0)
    proj = camera.projection_matrix()
    assert proj[0, 0] == pytest.approx(proj[1, 1])


def test_camera_on_target_rejected():
    with pytest.raises(ValueError):
        OrbitCamera(100, 100, CameraConfig(position=(0.0, 0.0, 0.0)))


class TestTransforms:

    def test_rotation_y_quarter_turn(self):
        m = transforms.rotation_y(math.pi / 2)
        assert np.allclose(transforms.transform_point(m, (1, 0, 0)), [0, 0, -1])

    def test_trs_order(self):
        m = (transforms.translation((1, 2, 3))
             @ transforms.rotation_z(math.pi / 2)
             @ transforms.scale(2, 1, 1))
        # scale, then rotate, then translate
        assert np.allclose(transforms.transform_point(m, (1, 0, 0)), [1, 4, 3])

    def test_to_gl_is_column_major(self):
        m = transforms.translation((1, 2, 3))
        gl = transforms.to_gl(m)
        assert gl.dtype == np.float32
        assert np.allclose(gl.ravel()[12:15], [1, 2, 3])

    def test_perspective_maps_near_plane_to_minus_one(self):
        proj = transforms.perspective(math.radians(60), 1.5, 0.1, 100.0)
        assert transforms.transform_point(proj, (0, 0, -0.1))[2] == pytest.approx(-1.0)
        assert transforms.transform_point(proj, (0, 0, -100.0))[2] == pytest.approx(1.0)

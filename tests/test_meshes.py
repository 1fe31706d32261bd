"""
Tests for the primitive meshes.
"""

import numpy as np
import pytest

from truck_lab.rendering import create_cube, create_cylinder


def test_cube_is_unit_and_centered():
    cube = create_cube()
    assert cube.vertices.shape == (8, 3)
    assert np.allclose(cube.vertices.min(axis=0), -0.5)
    assert np.allclose(cube.vertices.max(axis=0), 0.5)
    assert cube.triangle_count == 12


def test_cylinder_layout():
    cylinder = create_cylinder(16)
    assert cylinder.vertices.shape == (2 + 2 * 16, 3)
    # Two cap triangles and two side triangles per segment
    assert cylinder.triangle_count == 4 * 16
    assert cylinder.indices.max() < len(cylinder.vertices)

    rims = cylinder.vertices[2:]
    assert np.allclose(np.hypot(rims[:, 0], rims[:, 1]), 1.0)
    assert set(np.round(cylinder.vertices[:, 2], 6)) == {-0.5, 0.5}


def test_cylinder_needs_three_segments():
    with pytest.raises(ValueError):
        create_cylinder(2)

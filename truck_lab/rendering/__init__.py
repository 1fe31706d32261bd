"""
Rendering Module for the Pickup Scene

- transforms: numpy 4x4 matrix helpers
- meshes: cube/cylinder primitives
- renderer: pygame window + OpenGL drawing
- screenshot: framebuffer capture

Only `transforms` and `meshes` are imported here so the kinematics can
be used without a GL context.
"""

from .transforms import (
    identity,
    translation,
    scale,
    rotation_x,
    rotation_y,
    rotation_z,
    perspective,
    look_at,
    transform_point,
)
from .meshes import Mesh, create_cube, create_cylinder

__all__ = [
    'identity',
    'translation',
    'scale',
    'rotation_x',
    'rotation_y',
    'rotation_z',
    'perspective',
    'look_at',
    'transform_point',
    'Mesh',
    'create_cube',
    'create_cylinder',
]

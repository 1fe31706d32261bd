"""
4x4 Transform Helpers

Row-major numpy matrices acting on column vectors (p' = M @ p).
Convert to OpenGL's column-major layout with `to_gl()` before upload.
"""

import math

import numpy as np


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


def translation(offset) -> np.ndarray:
    m = identity()
    m[:3, 3] = offset
    return m


def scale(sx: float, sy: float, sz: float) -> np.ndarray:
    return np.diag([sx, sy, sz, 1.0]).astype(np.float64)


def rotation_x(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    m = identity()
    m[1, 1], m[1, 2] = c, -s
    m[2, 1], m[2, 2] = s, c
    return m


def rotation_y(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    m = identity()
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def rotation_z(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    m = identity()
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """
    Perspective projection (same layout as gluPerspective).

    Args:
        fov_y: Vertical field of view in radians
        aspect: Width / height
        near: Near clip distance
        far: Far clip distance

    Returns:
        4x4 projection matrix
    """
    f = 1.0 / math.tan(fov_y / 2.0)
    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = 2.0 * far * near / (near - far)
    m[3, 2] = -1.0
    return m


def look_at(eye, target, up=(0.0, 1.0, 0.0)) -> np.ndarray:
    """
    View matrix placing the camera at `eye` looking toward `target`.

    Args:
        eye: Camera position
        target: Point the camera looks at
        up: World up direction

    Returns:
        4x4 view matrix
    """
    eye = np.asarray(eye, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)
    up = np.asarray(up, dtype=np.float64)

    forward = target - eye
    forward /= np.linalg.norm(forward)
    right = np.cross(forward, up)
    right /= np.linalg.norm(right)
    true_up = np.cross(right, forward)

    m = identity()
    m[0, :3] = right
    m[1, :3] = true_up
    m[2, :3] = -forward
    m[:3, 3] = -m[:3, :3] @ eye
    return m


def transform_point(matrix: np.ndarray, point) -> np.ndarray:
    """Apply a 4x4 matrix to a 3D point."""
    p = np.append(np.asarray(point, dtype=np.float64), 1.0)
    out = matrix @ p
    return out[:3] / out[3]


def to_gl(matrix: np.ndarray) -> np.ndarray:
    """Column-major float32 copy for glLoadMatrixf."""
    return np.ascontiguousarray(matrix.T, dtype=np.float32)

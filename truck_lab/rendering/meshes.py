"""
Primitive meshes used by the pickup.

- Cube: unit edge length, centered on the origin
- Cylinder: radius 1, length 1 along z, centered on the origin
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class Mesh:
    """Indexed triangle mesh."""
    vertices: np.ndarray                 # (N, 3) float32
    indices: np.ndarray                  # (M,) uint32
    colors: Optional[np.ndarray] = None  # (N, 3) float32, None for flat color

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3


def create_cube() -> Mesh:
    vertices = np.array([
        [-0.5, -0.5, -0.5],
        [0.5, -0.5, -0.5],
        [0.5, 0.5, -0.5],
        [-0.5, 0.5, -0.5],
        [-0.5, -0.5, 0.5],
        [0.5, -0.5, 0.5],
        [0.5, 0.5, 0.5],
        [-0.5, 0.5, 0.5],
    ], dtype=np.float32)

    indices = np.array([
        0, 2, 1, 0, 3, 2,   # back
        4, 5, 6, 4, 6, 7,   # front
        0, 4, 7, 0, 7, 3,   # left
        1, 2, 6, 1, 6, 5,   # right
        3, 7, 6, 3, 6, 2,   # top
        0, 1, 5, 0, 5, 4,   # bottom
    ], dtype=np.uint32)

    return Mesh(vertices, indices)


def create_cylinder(segments: int = 32) -> Mesh:
    """
    Closed cylinder along the z axis.

    Args:
        segments: Number of sides around the circumference

    Returns:
        Mesh with 2 center vertices followed by the two rims
    """
    if segments < 3:
        raise ValueError("A cylinder needs at least 3 segments")

    angles = np.linspace(0.0, 2.0 * np.pi, segments, endpoint=False)
    ring = np.stack([np.cos(angles), np.sin(angles)], axis=1)

    back_rim = np.column_stack([ring, np.full(segments, -0.5)])
    front_rim = np.column_stack([ring, np.full(segments, 0.5)])
    centers = np.array([[0.0, 0.0, -0.5], [0.0, 0.0, 0.5]])
    vertices = np.vstack([centers, back_rim, front_rim]).astype(np.float32)

    back_start = 2
    front_start = 2 + segments
    indices = []
    for i in range(segments):
        j = (i + 1) % segments
        # Caps
        indices += [0, back_start + j, back_start + i]
        indices += [1, front_start + i, front_start + j]
        # Side
        indices += [back_start + i, back_start + j, front_start + j]
        indices += [back_start + i, front_start + j, front_start + i]

    return Mesh(vertices, np.array(indices, dtype=np.uint32))

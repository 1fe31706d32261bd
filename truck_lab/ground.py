"""
Ground Height Field

Static wavy ground plane built from a small sum of sine waves.
The grid is displaced and colored once at construction and never
changes afterwards.

Author: Truck Lab
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np


@dataclass
class WaveParams:
    """One sine wave of the height field."""
    amplitude: float
    omega: float
    direction: Tuple[float, float]

    def __post_init__(self):
        d = np.asarray(self.direction, dtype=np.float64)
        norm = np.linalg.norm(d)
        if norm == 0:
            raise ValueError("Wave direction must be non-zero")
        d = d / norm
        self.direction = (float(d[0]), float(d[1]))


def default_waves() -> List[WaveParams]:
    return [
        WaveParams(0.9, 0.35, (0.0, 1.0)),
        WaveParams(0.7, 0.4, (1.0, 0.0)),
        WaveParams(1.1, 0.1, (-2.0, 1.0)),
        WaveParams(0.3, 0.8, (-1.0, -2.5)),
    ]


def compute_height(x, z, waves: Sequence[WaveParams]):
    """
    Ground displacement at (x, z).

    Works on scalars and on numpy arrays of matching shape.

    Args:
        x: World x coordinate(s)
        z: World z coordinate(s)
        waves: Wave parameters

    Returns:
        Height(s), same shape as the input
    """
    height = np.zeros_like(np.asarray(x, dtype=np.float64))
    for w in waves:
        height = height + w.amplitude * np.sin(w.omega * (x * w.direction[0] + z * w.direction[1]))
    if np.ndim(height) == 0:
        return float(height)
    return height


def max_amplitude(waves: Sequence[WaveParams]) -> float:
    """Upper bound of |height| over the whole plane."""
    return float(sum(abs(w.amplitude) for w in waves))


@dataclass
class GroundConfig:
    """Configuration for the ground grid."""
    size: float = 100.0         # Edge length of the square grid
    resolution: int = 100       # Cells per edge
    color: Tuple[float, float, float] = (0.15, 0.45, 0.15)
    waves: List[WaveParams] = field(default_factory=default_waves)

    @classmethod
    def from_dict(cls, config: dict = None) -> 'GroundConfig':
        """
        Build from the `ground` section of the YAML config.

        Args:
            config: Full configuration dictionary

        Returns:
            GroundConfig instance
        """
        ground_config = (config or {}).get('ground', {})
        cfg = cls()
        cfg.size = float(ground_config.get('size', cfg.size))
        cfg.resolution = int(ground_config.get('resolution', cfg.resolution))
        cfg.color = tuple(ground_config.get('color', cfg.color))
        if 'waves' in ground_config:
            cfg.waves = [
                WaveParams(w['amplitude'], w['omega'], tuple(w['direction']))
                for w in ground_config['waves']
            ]
        return cfg


class Ground:
    """
    Ground mesh: grid vertices displaced by the height field.

    Attributes:
        vertices: (N, 3) float32 positions
        colors: (N, 3) float32 RGB in [0, 1]
        indices: (M,) uint32 triangle indices
    """

    def __init__(self, config: GroundConfig = None):
        """
        Build the grid.

        Args:
            config: Ground configuration

        Raises:
            ValueError: If size or resolution are not positive
        """
        self.config = config or GroundConfig()
        if self.config.size <= 0 or self.config.resolution <= 0:
            raise ValueError("Ground size and resolution must be positive")

        self.waves = list(self.config.waves)
        self.vertices, self.indices = self._build_grid()
        self.colors = self._compute_colors(self.vertices[:, 1])

    def height(self, x, z):
        """Height of the ground at (x, z)."""
        return compute_height(x, z, self.waves)

    def _build_grid(self) -> Tuple[np.ndarray, np.ndarray]:
        n = self.config.resolution
        half = self.config.size / 2.0
        coords = np.linspace(-half, half, n + 1)
        xs, zs = np.meshgrid(coords, coords)
        ys = compute_height(xs, zs, self.waves)

        vertices = np.stack([xs.ravel(), ys.ravel(), zs.ravel()], axis=1).astype(np.float32)

        # Two triangles per cell
        row = np.arange(n)
        i, j = np.meshgrid(row, row, indexing='ij')
        top_left = (i * (n + 1) + j).ravel()
        top_right = top_left + 1
        bottom_left = top_left + (n + 1)
        bottom_right = bottom_left + 1
        indices = np.stack([top_left, bottom_left, top_right,
                            top_right, bottom_left, bottom_right], axis=1)

        return vertices, indices.astype(np.uint32).ravel()

    def _compute_colors(self, heights: np.ndarray) -> np.ndarray:
        color = np.asarray(self.config.color, dtype=np.float64)
        low_color = color * 0.5
        high_color = color * 1.5

        min_height = heights.min()
        max_height = heights.max()
        span = max_height - min_height
        if span > 0:
            t = (heights - min_height) / span
        else:
            t = np.zeros_like(heights)

        colors = low_color * (1.0 - t[:, None]) + high_color * t[:, None]
        return np.clip(colors, 0.0, 1.0).astype(np.float32)

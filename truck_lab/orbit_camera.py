"""
Orbit Camera

Camera that circles a look-at target:
- Mouse drag changes yaw/pitch around the target
- Scroll changes the distance to the target
- Target is either fixed (origin) or follows the pickup

Author: Truck Lab
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .rendering import transforms


@dataclass
class CameraConfig:
    """Configuration for the orbit camera."""
    fov_deg: float = 45.0
    near: float = 0.01
    far: float = 500.0
    position: Tuple[float, float, float] = (12.0, 4.0, -12.0)
    orbit_sensitivity: float = 0.005   # rad per pixel of mouse drag
    zoom_speed: float = 0.05           # radius fraction per scroll step
    min_radius: float = 2.0
    max_pitch_deg: float = 89.0

    @classmethod
    def from_dict(cls, config: dict = None) -> 'CameraConfig':
        camera_config = (config or {}).get('camera', {})
        cfg = cls()
        for name in ('fov_deg', 'near', 'far', 'orbit_sensitivity',
                     'zoom_speed', 'min_radius', 'max_pitch_deg'):
            if name in camera_config:
                setattr(cfg, name, float(camera_config[name]))
        if 'position' in camera_config:
            cfg.position = tuple(camera_config['position'])
        return cfg


class OrbitCamera:
    """
    Perspective camera orbiting `look_at`.

    The eye position is kept in spherical coordinates relative to the
    target, so moving the target drags the eye along with it.
    """

    def __init__(self, width: int, height: int, config: CameraConfig = None):
        """
        Initialize the camera.

        Args:
            width: Viewport width in pixels
            height: Viewport height in pixels
            config: Camera configuration
        """
        self.config = config or CameraConfig()
        self.width = width
        self.height = height
        self.look_at = np.zeros(3, dtype=np.float64)

        offset = np.asarray(self.config.position, dtype=np.float64)
        self.radius = float(np.linalg.norm(offset))
        if self.radius == 0:
            raise ValueError("Camera position must differ from the look-at target")
        self.yaw = math.atan2(offset[2], offset[0])
        self.pitch = math.asin(offset[1] / self.radius)

    @property
    def aspect(self) -> float:
        return self.width / max(self.height, 1)

    @property
    def eye(self) -> np.ndarray:
        """World position of the camera."""
        cos_pitch = math.cos(self.pitch)
        offset = np.array([
            self.radius * cos_pitch * math.cos(self.yaw),
            self.radius * math.sin(self.pitch),
            self.radius * cos_pitch * math.sin(self.yaw),
        ])
        return self.look_at + offset

    def update_orbit(self, mouse_delta: Tuple[float, float], zoom_delta: float):
        """
        Orbit and zoom.

        Args:
            mouse_delta: (dx, dy) drag in pixels since the last event
            zoom_delta: Relative change of the distance (negative = closer)
        """
        dx, dy = mouse_delta
        self.yaw -= dx * self.config.orbit_sensitivity
        max_pitch = math.radians(self.config.max_pitch_deg)
        self.pitch = float(np.clip(self.pitch - dy * self.config.orbit_sensitivity,
                                   -max_pitch, max_pitch))
        self.radius = max(self.radius * (1.0 + zoom_delta), self.config.min_radius)

    def zoom(self, scroll_steps: float):
        """Scroll wheel zoom (positive steps move closer)."""
        self.update_orbit((0.0, 0.0), -self.config.zoom_speed * scroll_steps)

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height

    def view_matrix(self) -> np.ndarray:
        return transforms.look_at(self.eye, self.look_at)

    def projection_matrix(self) -> np.ndarray:
        return transforms.perspective(math.radians(self.config.fov_deg), self.aspect,
                                      self.config.near, self.config.far)

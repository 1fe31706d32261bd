"""
Pickup Scene

Holds everything the frame loop updates and draws:
- Orbit camera (fixed on the origin or following the pickup)
- Wavy ground
- Pickup truck

The scene is created by the application and passed through the loop;
nothing here is global.

Author: Truck Lab
"""

from dataclasses import dataclass

from .controls import InputState
from .ground import Ground, GroundConfig
from .orbit_camera import CameraConfig, OrbitCamera
from .pickup_vehicle import PickupVehicle, VehicleConfig, create_vehicle


@dataclass
class SceneConfig:
    """Scene-level settings."""
    follow_vehicle: bool = False   # Camera mode 2 at startup
    follow_terrain: bool = True    # Fit the pickup to the ground every frame
    sky_color: tuple = (135 / 255, 206 / 255, 235 / 255)

    @classmethod
    def from_dict(cls, config: dict = None) -> 'SceneConfig':
        scene_config = (config or {}).get('scene', {})
        cfg = cls()
        cfg.follow_vehicle = bool(scene_config.get('follow_vehicle', cfg.follow_vehicle))
        cfg.follow_terrain = bool(scene_config.get('follow_terrain', cfg.follow_terrain))
        cfg.sky_color = tuple(scene_config.get('sky_color', cfg.sky_color))
        return cfg


class Scene:
    """Camera, ground and pickup with their per-frame update."""

    def __init__(self, width: int, height: int, config: dict = None,
                 vehicle: PickupVehicle = None):
        """
        Set up the scene.

        Args:
            width: Viewport width in pixels
            height: Viewport height in pixels
            config: Configuration dictionary (YAML contents)
            vehicle: Prebuilt vehicle (built from config when None)
        """
        self.config = config or {}
        self.scene_config = SceneConfig.from_dict(self.config)

        self.camera = OrbitCamera(width, height, CameraConfig.from_dict(self.config))
        self.ground = Ground(GroundConfig.from_dict(self.config))
        self.vehicle = vehicle or create_vehicle(VehicleConfig.from_dict(self.config))

        self.follow_vehicle = False
        if self.scene_config.follow_vehicle:
            self.set_camera_follow()
        if self.scene_config.follow_terrain:
            self.vehicle.fit_to_terrain(self.ground.height)

    def set_camera_fixed(self):
        """Camera mode 1: orbit the world origin."""
        if self.follow_vehicle:
            print("Camera mode: fixed")
        self.follow_vehicle = False
        self.camera.look_at[:] = 0.0

    def set_camera_follow(self):
        """Camera mode 2: orbit the pickup."""
        if not self.follow_vehicle:
            print("Camera mode: follow pickup")
        self.follow_vehicle = True
        self.camera.look_at[:] = self.vehicle.position

    def reset_vehicle(self):
        self.vehicle.reset()
        if self.scene_config.follow_terrain:
            self.vehicle.fit_to_terrain(self.ground.height)

    def update(self, dt: float, input_state: InputState):
        """
        Move the pickup according to the held keys and update the camera.

        Args:
            dt: Seconds since the last frame
            input_state: Currently held keys
        """
        self.vehicle.update(
            dt,
            move_forward=input_state.move_forward,
            move_backward=input_state.move_backward,
            turn_left=input_state.turn_left,
            turn_right=input_state.turn_right
        )

        if self.scene_config.follow_terrain:
            self.vehicle.fit_to_terrain(self.ground.height)

        if self.follow_vehicle:
            self.camera.look_at[:] = self.vehicle.position

    def draw(self, renderer):
        """Draw the ground and every pickup part."""
        renderer.begin_frame(self.scene_config.sky_color,
                             self.camera.projection_matrix(),
                             self.camera.view_matrix())
        renderer.draw_ground(self.ground)
        renderer.draw_pickup(self.vehicle.parts)

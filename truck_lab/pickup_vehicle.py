"""
Pickup Vehicle Model

Kinematic model of the pickup truck driven around the scene:
- Steering angle integration (snap or rate-limited with self-centering)
- Heading update from a simplified Ackermann turning rate
- Wheel spin from travelled distance and wheel radius
- Optional fit of the chassis to the terrain under the four wheels

All part transforms (chassis, cockpit, four wheels, spare) are rebuilt
from the vehicle state on every update.

Author: Truck Lab
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional

import numpy as np

from .rendering import transforms


# ============================================================================
# VEHICLE CONFIGURATION
# ============================================================================

class SteeringPolicy(Enum):
    """How the front wheels follow the steering keys."""
    SNAP = 0            # Jump straight to the target angle
    RATE_LIMITED = 1    # Turn at a fixed rate, self-center when released


@dataclass
class VehicleConfig:
    """Configuration for the pickup truck."""
    # Chassis
    chassis_length: float = 4.0
    chassis_width: float = 1.5
    chassis_height: float = 1.0
    chassis_y: float = 2.0              # Center height of the chassis box

    # Cockpit (sits on the front half of the chassis)
    cockpit_length: float = 1.4
    cockpit_height: float = 1.0

    # Wheels
    front_wheel_radius: float = 0.7
    rear_wheel_radius: float = 1.0
    wheel_thickness: float = 0.2
    wheel_track: float = 1.9            # Distance between left and right wheels
    front_axle_x: float = 1.25
    rear_axle_x: float = -1.0

    # Motion
    move_speed: float = 5.0                         # Units per second
    max_steering_angle: float = math.radians(30.0)  # rad
    turning_angle_per_meter: Optional[float] = None # deg/m, derived when None

    # Steering behaviour
    steering_policy: SteeringPolicy = SteeringPolicy.RATE_LIMITED
    steering_rate: float = math.radians(120.0)      # rad/s toward the target
    steering_decay: float = 6.0                     # 1/s when released
    steering_dead_band: float = math.radians(0.5)

    # Wrap wheel spin into (-2pi, 2pi)
    wrap_wheel_spin: bool = False

    @property
    def wheel_base(self) -> float:
        return self.front_axle_x - self.rear_axle_x

    @classmethod
    def from_dict(cls, config: dict = None) -> 'VehicleConfig':
        """
        Build a configuration from the `vehicle` section of the YAML config.

        Angles are given in degrees in the file.

        Args:
            config: Full configuration dictionary

        Returns:
            VehicleConfig instance
        """
        vehicle_config = (config or {}).get('vehicle', {})
        cfg = cls()

        for name in ('chassis_length', 'chassis_width', 'chassis_height', 'chassis_y',
                     'cockpit_length', 'cockpit_height', 'front_wheel_radius',
                     'rear_wheel_radius', 'wheel_thickness', 'wheel_track',
                     'front_axle_x', 'rear_axle_x', 'move_speed',
                     'turning_angle_per_meter', 'steering_decay', 'wrap_wheel_spin'):
            if name in vehicle_config:
                setattr(cfg, name, vehicle_config[name])

        # Angles are stored in degrees in the YAML file
        if 'max_steering_angle_deg' in vehicle_config:
            cfg.max_steering_angle = math.radians(vehicle_config['max_steering_angle_deg'])
        if 'steering_rate_deg' in vehicle_config:
            cfg.steering_rate = math.radians(vehicle_config['steering_rate_deg'])
        if 'steering_dead_band_deg' in vehicle_config:
            cfg.steering_dead_band = math.radians(vehicle_config['steering_dead_band_deg'])

        policy = vehicle_config.get('steering_policy')
        if policy is not None:
            cfg.steering_policy = parse_steering_policy(policy)

        return cfg


def parse_steering_policy(name: str) -> SteeringPolicy:
    """
    Map a config/CLI string to a steering policy.

    Args:
        name: 'snap' or 'rate' (also accepts the enum names)

    Returns:
        SteeringPolicy
    """
    key = str(name).strip().lower()
    if key in ('snap', 'instant'):
        return SteeringPolicy.SNAP
    if key in ('rate', 'rate_limited', 'smooth'):
        return SteeringPolicy.RATE_LIMITED
    raise ValueError(f"Unknown steering policy: {name!r}")


def calculate_turning_angle_per_meter(wheel_base: float,
                                      turning_angle: float,
                                      width: float) -> float:
    """
    Approximate how far the vehicle turns per meter travelled.

    Uses the turning radius of a bicycle model, reduced by the vehicle
    width to get the inner radius.

    Args:
        wheel_base: Distance between front and rear axle
        turning_angle: Steering angle of the front wheels (rad)
        width: Vehicle width

    Returns:
        Heading change in degrees per meter
    """
    turning_radius = wheel_base / math.tan(turning_angle)
    inner_turning_radius = turning_radius - width
    return 360.0 / (2.0 * inner_turning_radius * math.pi)


@dataclass
class TerrainFit:
    """Result of fitting the chassis to the ground under the wheels."""
    height: float   # Vehicle origin height
    pitch: float    # Nose-up rotation (rad)
    roll: float     # Right-side-up rotation (rad)


@dataclass
class PartTransforms:
    """World matrices of all drawable pickup parts."""
    chassis: np.ndarray
    cockpit: np.ndarray
    wheel_front_left: np.ndarray
    wheel_front_right: np.ndarray
    wheel_rear_left: np.ndarray
    wheel_rear_right: np.ndarray
    spare: np.ndarray

    def as_dict(self) -> Dict[str, np.ndarray]:
        return {
            'chassis': self.chassis,
            'cockpit': self.cockpit,
            'wheel_front_left': self.wheel_front_left,
            'wheel_front_right': self.wheel_front_right,
            'wheel_rear_left': self.wheel_rear_left,
            'wheel_rear_right': self.wheel_rear_right,
            'spare': self.spare,
        }


# ============================================================================
# PICKUP VEHICLE
# ============================================================================

class PickupVehicle:
    """
    Pickup truck state and per-frame kinematics.

    Vehicle frame: +x forward, +y up, +z toward the right side.
    The heading is measured so that the forward direction in world space
    is (cos(heading), 0, sin(heading)).
    """

    def __init__(self, config: VehicleConfig = None):
        """
        Initialize the pickup.

        Args:
            config: Vehicle configuration

        Raises:
            ValueError: If the geometry or motion parameters are invalid
        """
        self.config = config or VehicleConfig()
        self._validate_config()

        if self.config.turning_angle_per_meter is None:
            self.turning_angle_per_meter = calculate_turning_angle_per_meter(
                self.config.wheel_base,
                self.config.max_steering_angle,
                self.config.chassis_width
            )
        else:
            self.turning_angle_per_meter = float(self.config.turning_angle_per_meter)
        if self.turning_angle_per_meter <= 0:
            raise ValueError(
                f"Turning angle per meter must be positive, got {self.turning_angle_per_meter:.3f} "
                "(steering angle too large for this wheel base and width?)"
            )

        # Dynamic state
        self.position = np.zeros(3, dtype=np.float64)
        self.heading = 0.0
        self.steering_angle = 0.0
        self.wheel_spin_front = 0.0
        self.wheel_spin_rear = 0.0
        self.pitch = 0.0
        self.roll = 0.0

        self.parts = self._build_part_transforms()

    def _validate_config(self):
        cfg = self.config
        if cfg.front_wheel_radius <= 0 or cfg.rear_wheel_radius <= 0:
            raise ValueError("Wheel radii must be positive")
        if cfg.move_speed <= 0:
            raise ValueError("Move speed must be positive")
        if not 0.0 < cfg.max_steering_angle < math.pi / 2:
            raise ValueError("Max steering angle must be in (0, pi/2)")
        if cfg.wheel_base <= 0:
            raise ValueError("Front axle must be ahead of the rear axle")

    # ------------------------------------------------------------------
    # Kinematics
    # ------------------------------------------------------------------

    def update(self, dt: float,
               move_forward: bool = False,
               move_backward: bool = False,
               turn_left: bool = False,
               turn_right: bool = False) -> None:
        """
        Advance the vehicle by one frame.

        Args:
            dt: Time since the last frame (s)
            move_forward: Forward key held
            move_backward: Backward key held
            turn_left: Steer-left key held
            turn_right: Steer-right key held
        """
        # Longitudinal distance this frame (forward wins over backward)
        if move_forward:
            direction = 1.0
        elif move_backward:
            direction = -1.0
        else:
            direction = 0.0
        distance = direction * self.config.move_speed * dt

        # Steering
        if turn_left:
            steer_input = 1.0
        elif turn_right:
            steer_input = -1.0
        else:
            steer_input = 0.0
        self._update_steering(steer_input, dt)

        # Heading (only while steering and moving). Left is -z, so a left
        # steer lowers the heading.
        if self.steering_angle != 0.0 and distance != 0.0:
            self.heading -= (math.copysign(1.0, self.steering_angle)
                             * math.radians(self.turning_angle_per_meter)
                             * distance)

        # Position
        self.position += self.forward_vector() * distance

        # Wheel spin
        self.wheel_spin_front += distance / self.config.front_wheel_radius
        self.wheel_spin_rear += distance / self.config.rear_wheel_radius
        if self.config.wrap_wheel_spin:
            self.wheel_spin_front = math.fmod(self.wheel_spin_front, 2 * math.pi)
            self.wheel_spin_rear = math.fmod(self.wheel_spin_rear, 2 * math.pi)

        self.parts = self._build_part_transforms()

    def _update_steering(self, steer_input: float, dt: float):
        """Move the steering angle according to the configured policy."""
        max_angle = self.config.max_steering_angle
        target = steer_input * max_angle

        if self.config.steering_policy == SteeringPolicy.SNAP:
            self.steering_angle = target
            return

        if steer_input != 0.0:
            max_step = self.config.steering_rate * dt
            delta = np.clip(target - self.steering_angle, -max_step, max_step)
            self.steering_angle += float(delta)
        else:
            # Self-centering
            self.steering_angle *= math.exp(-self.config.steering_decay * dt)
            if abs(self.steering_angle) < self.config.steering_dead_band:
                self.steering_angle = 0.0

        self.steering_angle = float(np.clip(self.steering_angle, -max_angle, max_angle))

    def forward_vector(self) -> np.ndarray:
        """Unit forward direction in world space (ignores pitch)."""
        return np.array([math.cos(self.heading), 0.0, math.sin(self.heading)])

    # ------------------------------------------------------------------
    # Terrain
    # ------------------------------------------------------------------

    def wheel_contact_points(self) -> np.ndarray:
        """
        Local (x, z) contact points of the four wheels.

        Returns:
            Array of shape (4, 2), order FL, FR, RL, RR
        """
        half_track = self.config.wheel_track / 2.0
        fx = self.config.front_axle_x
        rx = self.config.rear_axle_x
        return np.array([
            [fx, -half_track],
            [fx, half_track],
            [rx, -half_track],
            [rx, half_track],
        ])

    def local_to_world_xz(self, local_xz: np.ndarray) -> np.ndarray:
        """Map local (x, z) points onto the ground plane (yaw only)."""
        c, s = math.cos(self.heading), math.sin(self.heading)
        lx = local_xz[:, 0]
        lz = local_xz[:, 1]
        wx = self.position[0] + lx * c - lz * s
        wz = self.position[2] + lx * s + lz * c
        return np.stack([wx, wz], axis=1)

    def fit_to_terrain(self, height_fn: Callable) -> TerrainFit:
        """
        Fit the chassis to the ground under the four wheels.

        A plane y = a*x + b*z + c is fitted (least squares) through the
        ground heights at the wheel contact points, in vehicle coordinates.

        Args:
            height_fn: Ground height function height(x, z)

        Returns:
            TerrainFit that has also been applied to the vehicle
        """
        local_xz = self.wheel_contact_points()
        world_xz = self.local_to_world_xz(local_xz)
        heights = np.array([height_fn(x, z) for x, z in world_xz], dtype=np.float64)

        design = np.column_stack([local_xz, np.ones(len(local_xz))])
        (slope_x, slope_z, height), *_ = np.linalg.lstsq(design, heights, rcond=None)

        fit = TerrainFit(
            height=float(height),
            pitch=math.atan(slope_x),
            roll=math.atan(slope_z)
        )

        self.position[1] = fit.height
        self.pitch = fit.pitch
        self.roll = fit.roll
        self.parts = self._build_part_transforms()
        return fit

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def world_transform(self) -> np.ndarray:
        """Vehicle frame -> world."""
        return (transforms.translation(self.position)
                @ transforms.rotation_y(-self.heading)
                @ transforms.rotation_z(self.pitch)
                @ transforms.rotation_x(-self.roll))

    def _build_part_transforms(self) -> PartTransforms:
        """Rebuild all part matrices from the current state."""
        cfg = self.config
        world = self.world_transform()

        chassis = (transforms.translation((0.0, cfg.chassis_y, 0.0))
                   @ transforms.scale(cfg.chassis_length, cfg.chassis_height, cfg.chassis_width))

        cockpit_x = cfg.chassis_length / 4.0
        cockpit_y = cfg.chassis_y + (cfg.chassis_height + cfg.cockpit_height) / 2.0
        cockpit = (transforms.translation((cockpit_x, cockpit_y, 0.0))
                   @ transforms.scale(cfg.cockpit_length, cfg.cockpit_height, cfg.chassis_width))

        # Wheel meshes are unit cylinders along z: spin about z, steer about y
        half_track = cfg.wheel_track / 2.0
        front_scale = transforms.scale(cfg.front_wheel_radius, cfg.front_wheel_radius,
                                       cfg.wheel_thickness)
        rear_scale = transforms.scale(cfg.rear_wheel_radius, cfg.rear_wheel_radius,
                                      cfg.wheel_thickness)
        front_rot = (transforms.rotation_y(self.steering_angle)
                     @ transforms.rotation_z(-self.wheel_spin_front))
        rear_rot = transforms.rotation_z(-self.wheel_spin_rear)

        def wheel(x, radius, z, rotation, wheel_scale):
            return transforms.translation((x, radius, z)) @ rotation @ wheel_scale

        fr = cfg.front_wheel_radius
        rr = cfg.rear_wheel_radius

        # Spare hangs on the tailgate, facing backwards
        spare_x = -cfg.chassis_length / 2.0 - cfg.wheel_thickness
        spare_y = cfg.chassis_y + cfg.chassis_height * 0.6
        spare = (transforms.translation((spare_x, spare_y, 0.0))
                 @ transforms.rotation_y(math.pi / 2)
                 @ front_scale)

        return PartTransforms(
            chassis=world @ chassis,
            cockpit=world @ cockpit,
            wheel_front_left=world @ wheel(cfg.front_axle_x, fr, -half_track, front_rot, front_scale),
            wheel_front_right=world @ wheel(cfg.front_axle_x, fr, half_track, front_rot, front_scale),
            wheel_rear_left=world @ wheel(cfg.rear_axle_x, rr, -half_track, rear_rot, rear_scale),
            wheel_rear_right=world @ wheel(cfg.rear_axle_x, rr, half_track, rear_rot, rear_scale),
            spare=world @ spare,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def reset(self):
        """Put the truck back at the origin, wheels straight."""
        self.position[:] = 0.0
        self.heading = 0.0
        self.steering_angle = 0.0
        self.wheel_spin_front = 0.0
        self.wheel_spin_rear = 0.0
        self.pitch = 0.0
        self.roll = 0.0
        self.parts = self._build_part_transforms()

    def get_state(self) -> dict:
        """
        Get current vehicle state.

        Returns:
            Dictionary with vehicle state
        """
        return {
            'x': float(self.position[0]),
            'y': float(self.position[1]),
            'z': float(self.position[2]),
            'heading': self.heading,
            'steering_angle': self.steering_angle,
            'wheel_spin_front': self.wheel_spin_front,
            'wheel_spin_rear': self.wheel_spin_rear,
            'pitch': self.pitch,
            'roll': self.roll,
        }


def create_vehicle(config: VehicleConfig = None,
                   steering_policy: SteeringPolicy = None) -> PickupVehicle:
    """
    Factory function to create the pickup.

    Args:
        config: Vehicle configuration
        steering_policy: Overrides the configured steering policy

    Returns:
        PickupVehicle instance
    """
    config = config or VehicleConfig()
    if steering_policy is not None:
        config = replace(config, steering_policy=steering_policy)
    return PickupVehicle(config)

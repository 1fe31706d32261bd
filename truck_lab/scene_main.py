"""
Main Module for the Pickup Scene

Runs the interactive scene:
- pygame window with an OpenGL context
- Keyboard driving (W/S/A/D), camera modes (1/2), screenshot (P)
- Mouse orbit (left drag) and zoom (scroll)

Frame loop: poll input -> Scene.update(dt) -> Scene.draw(renderer).

Author: Truck Lab
"""

import argparse
import sys

import pygame

from .config import load_config
from .controls import (
    InputState,
    SceneAction,
    handle_key,
    handle_mouse_button,
    handle_mouse_motion,
)
from .pickup_vehicle import VehicleConfig, create_vehicle, parse_steering_policy
from .rendering.renderer import GLRenderer, RenderConfig
from .rendering.screenshot import save_screenshot
from .scene import Scene


class SceneApp:
    """
    Pickup scene application.

    Manages:
    - Window and renderer
    - Input state
    - Scene update and drawing
    - Screenshots
    """

    def __init__(self, config_path: str = None, steering_policy: str = None):
        """
        Initialize the application.

        Args:
            config_path: Path to configuration YAML file
            steering_policy: 'snap' or 'rate', overrides the config file
        """
        self.config = load_config(config_path)
        self.render_config = RenderConfig.from_dict(self.config)

        vehicle_config = VehicleConfig.from_dict(self.config)
        if steering_policy is not None:
            vehicle_config.steering_policy = parse_steering_policy(steering_policy)

        self.renderer = GLRenderer(self.render_config)
        self.input_state = InputState()
        self.scene = Scene(self.render_config.width, self.render_config.height,
                           self.config, vehicle=create_vehicle(vehicle_config))
        self.screenshot_path = self.config.get('screenshot_path', 'screenshot.png')

        self.clock = None
        self.running = False
        self.frame_count = 0
        self.screenshot_pending = False

    def start(self) -> bool:
        """
        Open the window.

        Returns:
            True if successful

        Raises:
            RuntimeError: If the window cannot be created
        """
        print("Starting Pickup Scene...")
        print("=" * 50)
        self.renderer.open()
        self.clock = pygame.time.Clock()
        self.running = True

        policy = self.scene.vehicle.config.steering_policy.name
        print(f"Steering policy: {policy}")
        print("W/S drive, A/D steer, 1/2 camera mode, P screenshot, R reset, ESC quit")
        print("=" * 50)
        return True

    def stop(self):
        """Close the window."""
        self.running = False
        self.renderer.close()
        print(f"Pickup scene stopped after {self.frame_count} frames")

    def perform(self, action: SceneAction):
        """Carry out a one-shot key action."""
        if action == SceneAction.QUIT:
            self.running = False
        elif action == SceneAction.SCREENSHOT:
            # Captured after the next draw, before the buffer swap
            self.screenshot_pending = True
        elif action == SceneAction.CAMERA_FIXED:
            self.scene.set_camera_fixed()
        elif action == SceneAction.CAMERA_FOLLOW:
            self.scene.set_camera_follow()
        elif action == SceneAction.RESET_VEHICLE:
            self.scene.reset_vehicle()

    def process_events(self):
        """Translate pending pygame events into input state and actions."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                action = handle_key(self.input_state, event.key,
                                    event.type == pygame.KEYDOWN)
                self.perform(action)
            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                handle_mouse_button(self.input_state, event.button,
                                    event.type == pygame.MOUSEBUTTONDOWN, event.pos)
            elif event.type == pygame.MOUSEMOTION:
                diff = handle_mouse_motion(self.input_state, event.pos)
                if diff is not None:
                    self.scene.camera.update_orbit(diff, 0.0)
            elif event.type == pygame.MOUSEWHEEL:
                self.scene.camera.zoom(event.y)
            elif event.type == pygame.VIDEORESIZE:
                self.renderer.resize(event.w, event.h)
                self.scene.camera.resize(event.w, event.h)

    def run(self):
        """Main frame loop."""
        while self.running:
            self.process_events()
            if not self.running:
                break

            # Seconds since the last frame
            dt = self.clock.tick(self.render_config.fps_limit) / 1000.0
            self.scene.update(dt, self.input_state)

            self.render_frame()

    def render_frame(self):
        """Draw the scene, save a pending screenshot, then swap buffers."""
        self.scene.draw(self.renderer)
        if self.screenshot_pending:
            save_screenshot(self.renderer, self.screenshot_path)
            self.screenshot_pending = False
        self.renderer.end_frame()
        self.frame_count += 1


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Truck Lab - interactive pickup scene'
    )
    parser.add_argument('--config', type=str, default=None,
                        help='Path to configuration YAML file')
    parser.add_argument('--steering', choices=['snap', 'rate'], default=None,
                        help='Steering policy (overrides the config file)')

    args = parser.parse_args(argv)

    try:
        app = SceneApp(config_path=args.config, steering_policy=args.steering)
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        app.start()
    except RuntimeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        app.run()
    except KeyboardInterrupt:
        print("\nInterrupted by user")
    finally:
        app.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())

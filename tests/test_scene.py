"""
Tests for input handling and the scene update (no window needed).
"""

import numpy as np
import pygame
import pytest
import yaml

from truck_lab.controls import (
    InputState,
    SceneAction,
    handle_key,
    handle_mouse_button,
    handle_mouse_motion,
)
from truck_lab.pickup_vehicle import SteeringPolicy, VehicleConfig, create_vehicle
from truck_lab.scene import Scene

SMALL_GROUND = {'ground': {'size': 20.0, 'resolution': 10}}


class TestControls:

    @pytest.mark.parametrize("key, attr", [
        (pygame.K_w, 'move_forward'),
        (pygame.K_s, 'move_backward'),
        (pygame.K_a, 'turn_left'),
        (pygame.K_d, 'turn_right'),
    ])
    def test_movement_keys_are_held(self, key, attr):
        state = InputState()
        assert handle_key(state, key, True) == SceneAction.NONE
        assert getattr(state, attr) is True
        handle_key(state, key, False)
        assert getattr(state, attr) is False

    @pytest.mark.parametrize("key, action", [
        (pygame.K_ESCAPE, SceneAction.QUIT),
        (pygame.K_p, SceneAction.SCREENSHOT),
        (pygame.K_1, SceneAction.CAMERA_FIXED),
        (pygame.K_2, SceneAction.CAMERA_FOLLOW),
    ])
    def test_action_keys_fire_on_press_only(self, key, action):
        state = InputState()
        assert handle_key(state, key, True) == action
        assert handle_key(state, key, False) == SceneAction.NONE

    def test_unknown_key(self):
        assert handle_key(InputState(), pygame.K_z, True) == SceneAction.NONE

    def test_mouse_drag(self):
        state = InputState()
        assert handle_mouse_motion(state, (10, 10)) is None

        handle_mouse_button(state, 1, True, (100, 50))
        assert handle_mouse_motion(state, (90, 60)) == (10, -10)
        assert handle_mouse_motion(state, (90, 60)) == (0, 0)

        handle_mouse_button(state, 1, False, (90, 60))
        assert handle_mouse_motion(state, (0, 0)) is None

    def test_right_button_ignored(self):
        state = InputState()
        handle_mouse_button(state, 3, True, (5, 5))
        assert state.mouse_left_pressed is False


class TestScene:

    def make_scene(self, follow_terrain=False, **scene_options):
        config = dict(SMALL_GROUND)
        config['scene'] = dict(follow_terrain=follow_terrain, **scene_options)
        return Scene(640, 480, config)

    def test_idle_update_keeps_vehicle(self):
        scene = self.make_scene()
        before = scene.vehicle.get_state()
        scene.update(0.1, InputState())
        assert scene.vehicle.get_state() == before

    def test_forward_input_moves_vehicle(self):
        scene = self.make_scene()
        scene.update(0.5, InputState(move_forward=True))
        speed = scene.vehicle.config.move_speed
        assert scene.vehicle.position[0] == pytest.approx(0.5 * speed)

    def test_follow_mode_tracks_vehicle(self):
        scene = self.make_scene()
        scene.set_camera_follow()
        scene.update(1.0, InputState(move_forward=True))
        assert np.allclose(scene.camera.look_at, scene.vehicle.position)

    def test_fixed_mode_resets_target(self):
        scene = self.make_scene(follow_vehicle=True)
        scene.update(1.0, InputState(move_forward=True))
        scene.set_camera_fixed()
        scene.update(1.0, InputState(move_forward=True))
        assert np.allclose(scene.camera.look_at, 0.0)

    def test_terrain_follow_sets_height(self):
        scene = self.make_scene(follow_terrain=True)
        scene.update(0.2, InputState(move_forward=True))
        vehicle = scene.vehicle
        world_xz = vehicle.local_to_world_xz(vehicle.wheel_contact_points())
        mean_height = np.mean([scene.ground.height(x, z) for x, z in world_xz])
        # Symmetric wheel layout about the track: plane height near the wheel mean
        assert vehicle.position[1] != 0.0
        assert abs(vehicle.position[1] - mean_height) < 1.0

    def test_prebuilt_vehicle_is_used(self):
        vehicle = create_vehicle(VehicleConfig(steering_policy=SteeringPolicy.SNAP))
        scene = Scene(640, 480, dict(SMALL_GROUND, scene={'follow_terrain': False}),
                      vehicle=vehicle)
        assert scene.vehicle is vehicle

    def test_reset_vehicle(self):
        scene = self.make_scene()
        scene.update(1.0, InputState(move_forward=True, turn_left=True))
        scene.reset_vehicle()
        assert np.allclose(scene.vehicle.position, 0.0)

    def test_draw_calls_renderer(self):
        calls = []

        class RecordingRenderer:
            def begin_frame(self, clear_color, projection, view):
                calls.append(('begin', projection.shape, view.shape))

            def draw_ground(self, ground):
                calls.append(('ground',))

            def draw_pickup(self, parts):
                calls.append(('pickup', len(parts.as_dict())))

        self.make_scene().draw(RecordingRenderer())
        assert calls == [('begin', (4, 4), (4, 4)), ('ground',), ('pickup', 7)]


class TestSceneAppFrame:

    @pytest.fixture
    def app(self, tmp_path, monkeypatch):
        from truck_lab import scene_main

        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump(dict(SMALL_GROUND, scene={'follow_terrain': False})))

        calls = []

        class RecordingRenderer:
            width, height = 640, 480

            def begin_frame(self, clear_color, projection, view):
                calls.append('begin')

            def draw_ground(self, ground):
                calls.append('ground')

            def draw_pickup(self, parts):
                calls.append('pickup')

            def end_frame(self):
                calls.append('swap')

        monkeypatch.setattr(scene_main, 'save_screenshot',
                            lambda renderer, path: calls.append('screenshot'))

        app = scene_main.SceneApp(config_path=str(config_path))
        app.renderer = RecordingRenderer()
        app.calls = calls
        return app

    def test_screenshot_waits_for_drawn_frame(self, app):
        app.perform(SceneAction.SCREENSHOT)
        assert app.calls == []

        app.render_frame()
        assert app.calls == ['begin', 'ground', 'pickup', 'screenshot', 'swap']

    def test_screenshot_taken_once(self, app):
        app.perform(SceneAction.SCREENSHOT)
        app.render_frame()
        app.render_frame()
        assert app.calls.count('screenshot') == 1
        assert app.frame_count == 2

"""
Keyboard and mouse handling for the pickup scene.

Input state is owned by the application and passed to the scene each
frame. pygame events are translated into intents here so the scene
itself never touches pygame.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import pygame


class SceneAction(Enum):
    """One-shot actions triggered by a key press."""
    NONE = 0
    QUIT = 1
    SCREENSHOT = 2
    CAMERA_FIXED = 3
    CAMERA_FOLLOW = 4
    RESET_VEHICLE = 5


@dataclass
class InputState:
    """Held keys and mouse drag state."""
    move_forward: bool = False     # W
    move_backward: bool = False    # S
    turn_left: bool = False        # A
    turn_right: bool = False       # D
    mouse_left_pressed: bool = False
    mouse_press_start: Tuple[int, int] = (0, 0)


# Held keys -> InputState attribute
MOVEMENT_KEYS = {
    pygame.K_w: 'move_forward',
    pygame.K_s: 'move_backward',
    pygame.K_a: 'turn_left',
    pygame.K_d: 'turn_right',
}

# Pressed keys -> one-shot action
ACTION_KEYS = {
    pygame.K_ESCAPE: SceneAction.QUIT,
    pygame.K_p: SceneAction.SCREENSHOT,
    pygame.K_1: SceneAction.CAMERA_FIXED,
    pygame.K_2: SceneAction.CAMERA_FOLLOW,
    pygame.K_r: SceneAction.RESET_VEHICLE,
}


def handle_key(input_state: InputState, key: int, pressed: bool) -> SceneAction:
    """
    Update held-key intents and report one-shot actions.

    Args:
        input_state: State to update
        key: pygame key code
        pressed: True on key down, False on key up

    Returns:
        Action to perform (NONE for movement keys and releases)
    """
    attr = MOVEMENT_KEYS.get(key)
    if attr is not None:
        setattr(input_state, attr, pressed)
        return SceneAction.NONE

    if pressed:
        return ACTION_KEYS.get(key, SceneAction.NONE)
    return SceneAction.NONE


def handle_mouse_button(input_state: InputState, button: int, pressed: bool,
                        pos: Tuple[int, int]):
    """Start or stop an orbit drag with the left mouse button."""
    if button == 1:
        input_state.mouse_left_pressed = pressed
        input_state.mouse_press_start = tuple(pos)


def handle_mouse_motion(input_state: InputState,
                        pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
    """
    Drag delta since the last motion event.

    Args:
        input_state: State to update
        pos: Current cursor position

    Returns:
        (dx, dy) as start - current, or None when not dragging
    """
    if not input_state.mouse_left_pressed:
        return None
    start_x, start_y = input_state.mouse_press_start
    diff = (start_x - pos[0], start_y - pos[1])
    input_state.mouse_press_start = tuple(pos)
    return diff

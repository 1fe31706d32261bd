"""
OpenGL Renderer

pygame window + PyOpenGL fixed-function drawing for the pickup scene.
Matrices come from numpy (see transforms.py) and are loaded directly,
so the GL matrix stack only ever holds projection and view/model.

Author: Truck Lab
"""

from dataclasses import dataclass
from typing import Tuple

import pygame
from pygame.locals import DOUBLEBUF, OPENGL, RESIZABLE
from OpenGL.GL import *

from . import transforms
from .meshes import Mesh, create_cube, create_cylinder


@dataclass
class RenderConfig:
    """Window and color settings."""
    width: int = 1280
    height: int = 720
    title: str = "Truck Lab - Pickup Scene"
    fps_limit: int = 60
    chassis_color: Tuple[float, float, float] = (0.8, 0.1, 0.1)
    cockpit_color: Tuple[float, float, float] = (0.2, 0.2, 0.8)
    wheel_color: Tuple[float, float, float] = (0.3, 0.3, 0.3)
    outline_color: Tuple[float, float, float] = (0.05, 0.05, 0.05)

    @classmethod
    def from_dict(cls, config: dict = None) -> 'RenderConfig':
        window_config = (config or {}).get('window', {})
        cfg = cls()
        cfg.width = int(window_config.get('width', cfg.width))
        cfg.height = int(window_config.get('height', cfg.height))
        cfg.title = window_config.get('title', cfg.title)
        cfg.fps_limit = int(window_config.get('fps_limit', cfg.fps_limit))
        colors = window_config.get('colors', {})
        cfg.chassis_color = tuple(colors.get('chassis', cfg.chassis_color))
        cfg.cockpit_color = tuple(colors.get('cockpit', cfg.cockpit_color))
        cfg.wheel_color = tuple(colors.get('wheels', cfg.wheel_color))
        return cfg


class GLRenderer:
    """
    Owns the window/GL context and draws meshes with model matrices.
    """

    def __init__(self, config: RenderConfig = None):
        self.config = config or RenderConfig()
        self.width = self.config.width
        self.height = self.config.height
        self.is_open = False

        self._cube = None
        self._cylinder = None
        self._ground_mesh = None
        self._ground_id = None

    def open(self) -> bool:
        """
        Create the window and GL context.

        Returns:
            True if successful

        Raises:
            RuntimeError: If the window cannot be created
        """
        pygame.init()
        try:
            pygame.display.set_mode((self.width, self.height), DOUBLEBUF | OPENGL | RESIZABLE)
        except pygame.error as e:
            pygame.quit()
            raise RuntimeError(f"Could not create OpenGL window: {e}") from e
        pygame.display.set_caption(self.config.title)

        glEnable(GL_DEPTH_TEST)
        glViewport(0, 0, self.width, self.height)

        self._cube = create_cube()
        self._cylinder = create_cylinder()
        self.is_open = True

        print(f"OpenGL window opened ({self.width}x{self.height})")
        print(f"  Renderer: {glGetString(GL_RENDERER).decode(errors='replace')}")
        return True

    def close(self):
        if self.is_open:
            pygame.quit()
            self.is_open = False
            print("OpenGL window closed")

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height
        glViewport(0, 0, width, height)

    def begin_frame(self, clear_color, projection, view):
        """Clear the framebuffer and load projection and view."""
        glClearColor(clear_color[0], clear_color[1], clear_color[2], 1.0)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        glMatrixMode(GL_PROJECTION)
        glLoadMatrixf(transforms.to_gl(projection))
        glMatrixMode(GL_MODELVIEW)
        glLoadMatrixf(transforms.to_gl(view))

    def end_frame(self):
        pygame.display.flip()

    def draw_mesh(self, mesh: Mesh, model, color=None, outline: bool = False):
        """
        Draw an indexed mesh.

        Args:
            mesh: Mesh to draw
            model: 4x4 model matrix
            color: Flat RGB color (ignored when the mesh has vertex colors)
            outline: Overlay the triangle edges in the outline color
        """
        glPushMatrix()
        glMultMatrixf(transforms.to_gl(model))

        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(3, GL_FLOAT, 0, mesh.vertices)

        if mesh.colors is not None:
            glEnableClientState(GL_COLOR_ARRAY)
            glColorPointer(3, GL_FLOAT, 0, mesh.colors)
        else:
            glColor3f(*color)

        glDrawElements(GL_TRIANGLES, len(mesh.indices), GL_UNSIGNED_INT, mesh.indices)

        if outline:
            glDisableClientState(GL_COLOR_ARRAY)
            glColor3f(*self.config.outline_color)
            glPolygonMode(GL_FRONT_AND_BACK, GL_LINE)
            glEnable(GL_POLYGON_OFFSET_LINE)
            glPolygonOffset(-1.0, -1.0)
            glDrawElements(GL_TRIANGLES, len(mesh.indices), GL_UNSIGNED_INT, mesh.indices)
            glDisable(GL_POLYGON_OFFSET_LINE)
            glPolygonMode(GL_FRONT_AND_BACK, GL_FILL)

        glDisableClientState(GL_COLOR_ARRAY)
        glDisableClientState(GL_VERTEX_ARRAY)
        glPopMatrix()

    def draw_ground(self, ground):
        # Ground never changes, build its mesh once
        if self._ground_id != id(ground):
            self._ground_mesh = Mesh(ground.vertices, ground.indices, ground.colors)
            self._ground_id = id(ground)
        self.draw_mesh(self._ground_mesh, transforms.identity())

    def draw_pickup(self, parts):
        """
        Draw all seven pickup parts.

        Args:
            parts: PartTransforms of the vehicle
        """
        cfg = self.config
        self.draw_mesh(self._cube, parts.chassis, cfg.chassis_color, outline=True)
        self.draw_mesh(self._cube, parts.cockpit, cfg.cockpit_color, outline=True)

        for model in (parts.wheel_front_left, parts.wheel_front_right,
                      parts.wheel_rear_left, parts.wheel_rear_right, parts.spare):
            self.draw_mesh(self._cylinder, model, cfg.wheel_color, outline=True)

    def read_pixels(self) -> bytes:
        """Raw RGB bytes of the current framebuffer (bottom row first)."""
        glPixelStorei(GL_PACK_ALIGNMENT, 1)
        return glReadPixels(0, 0, self.width, self.height, GL_RGB, GL_UNSIGNED_BYTE)

"""
Debug Visualization for the Vision Exercises

Tiles labelled result images into one canvas so an exercise opens a
single window instead of one window per intermediate image:

+-----------+-----------+-----------+
| Original  | Canny     | Sobel     |
+-----------+-----------+-----------+
| Laplacian |           |           |
+-----------+-----------+-----------+

Author: Truck Lab
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2
import numpy as np


@dataclass
class ViewerConfig:
    """Configuration for the exercise viewer."""
    tile_width: int = 448
    tile_height: int = 336
    columns: int = 3
    font_scale: float = 0.6
    line_thickness: int = 1
    label_height: int = 24
    show_windows: bool = True

    @classmethod
    def from_dict(cls, config: dict = None) -> 'ViewerConfig':
        viewer_config = (config or {}).get('viewer', {})
        cfg = cls()
        cfg.tile_width = int(viewer_config.get('tile_width', cfg.tile_width))
        cfg.tile_height = int(viewer_config.get('tile_height', cfg.tile_height))
        cfg.columns = int(viewer_config.get('columns', cfg.columns))
        cfg.font_scale = float(viewer_config.get('font_scale', cfg.font_scale))
        return cfg


class ExerciseViewer:
    """
    Builds and shows labelled image grids.
    """

    # Color scheme
    COLORS = {
        'cyan': (255, 255, 0),
        'panel_bg': (30, 30, 30),
        'panel_border': (80, 80, 80),
    }

    def __init__(self, config: ViewerConfig = None):
        """
        Initialize the viewer.

        Args:
            config: Viewer configuration
        """
        self.config = config or ViewerConfig()
        self.open_windows: List[str] = []

    @staticmethod
    def _to_bgr(image: np.ndarray) -> np.ndarray:
        """uint8 BGR copy of any gray/BGR/float image."""
        if image.dtype != np.uint8:
            image = cv2.normalize(image, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)
        if image.ndim == 2:
            return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        return image

    def _fit_tile(self, image: np.ndarray) -> np.ndarray:
        """Scale into the tile keeping the aspect ratio, centered on the background."""
        tw, th = self.config.tile_width, self.config.tile_height
        tile = np.zeros((th, tw, 3), dtype=np.uint8)
        tile[:] = self.COLORS['panel_bg']

        h, w = image.shape[:2]
        factor = min(tw / w, th / h)
        new_w = max(1, int(w * factor))
        new_h = max(1, int(h * factor))
        resized = cv2.resize(self._to_bgr(image), (new_w, new_h))

        x = (tw - new_w) // 2
        y = (th - new_h) // 2
        tile[y:y + new_h, x:x + new_w] = resized
        return tile

    def make_grid(self, images: List[Tuple[str, np.ndarray]]) -> np.ndarray:
        """
        Arrange labelled images in a grid.

        Args:
            images: List of (label, image)

        Returns:
            BGR canvas
        """
        if not images:
            raise ValueError("Nothing to show")

        cfg = self.config
        columns = min(cfg.columns, len(images))
        rows = math.ceil(len(images) / columns)
        cell_h = cfg.tile_height + cfg.label_height

        canvas = np.zeros((rows * cell_h, columns * cfg.tile_width, 3), dtype=np.uint8)
        canvas[:] = self.COLORS['panel_bg']

        for i, (label, image) in enumerate(images):
            row, col = divmod(i, columns)
            x0 = col * cfg.tile_width
            y0 = row * cell_h

            # Label bar
            cv2.putText(canvas, label, (x0 + 8, y0 + cfg.label_height - 7),
                        cv2.FONT_HERSHEY_SIMPLEX, cfg.font_scale,
                        self.COLORS['cyan'], cfg.line_thickness)

            tile_y = y0 + cfg.label_height
            canvas[tile_y:tile_y + cfg.tile_height, x0:x0 + cfg.tile_width] = self._fit_tile(image)
            cv2.rectangle(canvas, (x0, tile_y),
                          (x0 + cfg.tile_width - 1, tile_y + cfg.tile_height - 1),
                          self.COLORS['panel_border'], 1)

        return canvas

    def show(self, window_name: str, images: List[Tuple[str, np.ndarray]]) -> Optional[np.ndarray]:
        """
        Show a grid in a window (no-op when windows are disabled).

        Returns:
            The canvas that was (or would have been) shown
        """
        canvas = self.make_grid(images)
        if self.config.show_windows:
            cv2.imshow(window_name, canvas)
            self.open_windows.append(window_name)
        return canvas

    def wait(self):
        """Block until a key is pressed, then close all windows."""
        if not self.open_windows:
            return
        cv2.waitKey(0)
        cv2.destroyAllWindows()
        self.open_windows = []

"""
Perspective Warp Exercise

Maps a rectangle of the image onto a trapezoid. The result has two
non-parallel sides, which no affine transform can produce since affine
maps keep parallel lines parallel.

Author: Truck Lab
"""

from dataclasses import dataclass
from typing import List, Tuple

import cv2
import numpy as np


@dataclass
class PerspectiveResult:
    """Container for the warp results."""
    resized: np.ndarray
    warped: np.ndarray
    matrix: np.ndarray   # 3x3 homography


class PerspectiveWarper:
    """
    Estimates a homography from four point pairs and warps the image.
    """

    def __init__(self, config: dict = None):
        """
        Initialize the warper.

        Args:
            config: Configuration dictionary with point sets
        """
        self.config = config or {}
        warp_config = self.config.get('perspective_warp', {})

        self.size = tuple(warp_config.get('size', [600, 400]))

        # Points in the original
        self.src_points = self._points(
            warp_config.get('src', [[100, 100], [500, 100], [100, 400], [500, 400]]))
        # Points in the perspective view
        self.dst_points = self._points(
            warp_config.get('dst', [[200, 120], [400, 120], [80, 400], [520, 400]]))

    @staticmethod
    def _points(points: List[Tuple[float, float]]) -> np.ndarray:
        pts = np.asarray(points, dtype=np.float32)
        if pts.shape != (4, 2):
            raise ValueError(f"Expected 4 (x, y) points, got shape {pts.shape}")
        return pts

    def compute_matrix(self) -> np.ndarray:
        return cv2.getPerspectiveTransform(self.src_points, self.dst_points)

    def warp(self, image: np.ndarray) -> PerspectiveResult:
        """
        Resize and warp an image.

        Args:
            image: Input image

        Returns:
            PerspectiveResult with the resized input, warped output and matrix
        """
        resized = cv2.resize(image, self.size)
        matrix = self.compute_matrix()
        h, w = resized.shape[:2]
        warped = cv2.warpPerspective(resized, matrix, (w, h))
        return PerspectiveResult(resized=resized, warped=warped, matrix=matrix)

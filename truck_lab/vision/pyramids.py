"""
Gaussian / Laplacian Pyramid Exercise

Going down the Gaussian pyramid the image gets smaller and blurrier:
fine detail (high frequencies) disappears while large structures and
color gradients (low frequencies) remain.

Each Laplacian level keeps exactly what was lost between two Gaussian
levels, i.e. the edges and fine detail of that scale.

Author: Truck Lab
"""

from dataclasses import dataclass
from typing import List

import cv2
import numpy as np


@dataclass
class PyramidResult:
    """Both pyramids, finest level first."""
    gaussian: List[np.ndarray]
    laplacian: List[np.ndarray]


class PyramidBuilder:
    """Builds Gaussian and Laplacian pyramids."""

    def __init__(self, config: dict = None):
        self.config = config or {}
        pyramid_config = self.config.get('pyramids', {})

        self.size = tuple(pyramid_config.get('size', [448, 336]))
        self.levels = int(pyramid_config.get('levels', 4))
        self.blur_kernel = int(pyramid_config.get('blur_kernel', 5))

        if self.levels < 1:
            raise ValueError("Pyramid needs at least one level below the original")

    def gaussian_pyramid(self, image: np.ndarray) -> List[np.ndarray]:
        """
        Original plus `levels` blurred, half-size levels.

        Args:
            image: Input image (already resized)

        Returns:
            List of levels, finest first
        """
        pyramid = [image]
        current = image.copy()
        k = self.blur_kernel
        for _ in range(self.levels):
            current = cv2.GaussianBlur(current, (k, k), 0)
            current = cv2.pyrDown(current)
            pyramid.append(current)
        return pyramid

    @staticmethod
    def laplacian_pyramid(gaussian: List[np.ndarray]) -> List[np.ndarray]:
        """
        Difference between each level and the upsampled next level.

        Args:
            gaussian: Gaussian pyramid, finest first

        Returns:
            len(gaussian) - 1 levels
        """
        laplacian = []
        for i in range(len(gaussian) - 1):
            h, w = gaussian[i].shape[:2]
            up = cv2.pyrUp(gaussian[i + 1], dstsize=(w, h))
            # Saturating subtraction
            laplacian.append(cv2.subtract(gaussian[i], up))
        return laplacian

    def build(self, image: np.ndarray) -> PyramidResult:
        resized = cv2.resize(image, self.size)
        gaussian = self.gaussian_pyramid(resized)
        return PyramidResult(gaussian=gaussian,
                             laplacian=self.laplacian_pyramid(gaussian))

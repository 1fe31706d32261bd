"""
Edge Detection Exercise

Compares Canny (thresholds derived from Otsu), Sobel and Laplacian on
a blurred grayscale image.

Author: Truck Lab
"""

from dataclasses import dataclass

import cv2
import numpy as np

from .image_io import to_gray


@dataclass
class EdgeDetection:
    """Container for edge detection results."""
    original: np.ndarray
    canny: np.ndarray
    sobel: np.ndarray
    laplacian: np.ndarray
    otsu_threshold: float
    low_threshold: float
    high_threshold: float


class EdgeDetector:
    """
    Runs the three edge detectors on one image.
    """

    def __init__(self, config: dict = None):
        """
        Initialize the detector.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        edge_config = self.config.get('edge_detection', {})

        self.size = tuple(edge_config.get('size', [448, 336]))
        self.blur_kernel = int(edge_config.get('blur_kernel', 5))
        self.blur_sigma = float(edge_config.get('blur_sigma', 1.0))
        # Canny low threshold as a fraction of the Otsu threshold
        self.low_ratio = float(edge_config.get('low_ratio', 0.5))

    def otsu_thresholds(self, blurred: np.ndarray):
        """
        Canny thresholds from Otsu's method.

        Returns:
            (otsu, low, high)
        """
        otsu, _ = cv2.threshold(blurred, 0, 255, cv2.THRESH_BINARY | cv2.THRESH_OTSU)
        return otsu, otsu * self.low_ratio, otsu

    def detect(self, image: np.ndarray) -> EdgeDetection:
        """
        Detect edges.

        Args:
            image: Input image (gray or BGR)

        Returns:
            EdgeDetection with all three edge maps
        """
        gray = cv2.resize(to_gray(image), self.size)
        k = self.blur_kernel
        blurred = cv2.GaussianBlur(gray, (k, k), self.blur_sigma)

        otsu, low, high = self.otsu_thresholds(blurred)
        canny = cv2.Canny(blurred, low, high)

        sobel_x = cv2.Sobel(blurred, cv2.CV_16S, 1, 0)
        sobel_y = cv2.Sobel(blurred, cv2.CV_16S, 0, 1)
        sobel = cv2.convertScaleAbs(cv2.add(sobel_x, sobel_y))

        laplacian = cv2.convertScaleAbs(cv2.Laplacian(blurred, cv2.CV_16S))

        return EdgeDetection(
            original=gray,
            canny=canny,
            sobel=sobel,
            laplacian=laplacian,
            otsu_threshold=float(otsu),
            low_threshold=float(low),
            high_threshold=float(high)
        )

"""
Image loading shared by the vision exercises.
"""

import sys
from typing import Optional, Tuple

import cv2
import numpy as np


def load_image(path: str,
               grayscale: bool = False,
               size: Optional[Tuple[int, int]] = None) -> Optional[np.ndarray]:
    """
    Read an image and optionally resize it.

    Args:
        path: Image file
        grayscale: Load as single channel
        size: (width, height) to resize to

    Returns:
        Image, or None if it could not be read (message on stderr)
    """
    flags = cv2.IMREAD_GRAYSCALE if grayscale else cv2.IMREAD_COLOR
    image = cv2.imread(str(path), flags)
    if image is None or image.size == 0:
        print(f"Error: could not read image file '{path}'", file=sys.stderr)
        return None

    if size is not None:
        image = cv2.resize(image, tuple(size))
    return image


def to_gray(image: np.ndarray) -> np.ndarray:
    """Single-channel copy of a BGR or gray image."""
    if image.ndim == 2:
        return image
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

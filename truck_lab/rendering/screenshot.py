"""
Framebuffer screenshots written with OpenCV.
"""

import cv2
import numpy as np


def pixels_to_image(data: bytes, width: int, height: int) -> np.ndarray:
    """
    Convert raw glReadPixels RGB output to a BGR image.

    Args:
        data: Tightly packed RGB bytes, bottom row first
        width: Framebuffer width
        height: Framebuffer height

    Returns:
        BGR uint8 image, top row first (OpenCV format)
    """
    rgb = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 3)
    return cv2.cvtColor(np.flipud(rgb), cv2.COLOR_RGB2BGR)


def save_screenshot(renderer, path: str = "screenshot.png") -> bool:
    """
    Save the current framebuffer.

    Args:
        renderer: Open GLRenderer
        path: Output file

    Returns:
        True if the file was written
    """
    image = pixels_to_image(renderer.read_pixels(), renderer.width, renderer.height)
    ok = cv2.imwrite(path, image)
    if ok:
        print(f"Screenshot saved: {path}")
    else:
        print(f"Error: could not write screenshot to {path}")
    return ok

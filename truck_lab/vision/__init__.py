"""
Vision Exercises

Small OpenCV pipelines, one per exercise:
- Perspective warp (homography from four point pairs)
- Gaussian / Laplacian pyramids
- Gabor filter bank with per-pixel max combination
- Edge detection (Canny with Otsu thresholds, Sobel, Laplacian)
- Keypoint matching (AKAZE / BRISK, brute-force Hamming)
"""

from .image_io import load_image, to_gray
from .perspective_warp import (
    PerspectiveWarper,
    PerspectiveResult
)
from .pyramids import (
    PyramidBuilder,
    PyramidResult
)
from .gabor_bank import (
    GaborFilterBank,
    GaborParams,
    GaborResponse
)
from .edge_detector import (
    EdgeDetector,
    EdgeDetection
)
from .keypoint_matcher import (
    KeypointMatcher,
    MatchResult,
    DetectorType,
    apply_rotation,
    apply_scale,
    apply_brightness,
    default_transformations
)

__all__ = [
    'load_image',
    'to_gray',
    # Perspective
    'PerspectiveWarper',
    'PerspectiveResult',
    # Pyramids
    'PyramidBuilder',
    'PyramidResult',
    # Gabor
    'GaborFilterBank',
    'GaborParams',
    'GaborResponse',
    # Edges
    'EdgeDetector',
    'EdgeDetection',
    # Keypoints
    'KeypointMatcher',
    'MatchResult',
    'DetectorType',
    'apply_rotation',
    'apply_scale',
    'apply_brightness',
    'default_transformations',
]

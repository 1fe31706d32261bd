"""
Keypoint Matching Exercise

Detects AKAZE or BRISK keypoints on an image and on transformed copies
(rotation, scale, brightness) and matches the binary descriptors with a
brute-force Hamming matcher.

Good matches: distance <= max(ratio * min_distance, floor), with the
minimum distance starting at 100 as in the classic OpenCV tutorial.

Author: Truck Lab
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import cv2
import numpy as np


class DetectorType(Enum):
    """Supported binary feature detectors."""
    AKAZE = 'AKAZE'
    BRISK = 'BRISK'


@dataclass
class MatchResult:
    """Container for one matching run."""
    name: str
    detector: DetectorType
    keypoints_1: List[cv2.KeyPoint]
    keypoints_2: List[cv2.KeyPoint]
    matches: List[cv2.DMatch]
    good_matches: List[cv2.DMatch]
    threshold: float
    visualization: Optional[np.ndarray] = field(default=None, repr=False)

    def summary(self) -> str:
        return (f"{self.name}:\n"
                f"  Keypoints: {len(self.keypoints_1)} / {len(self.keypoints_2)}\n"
                f"  Total matches: {len(self.matches)}\n"
                f"  Good matches: {len(self.good_matches)}")


# ============================================================================
# TEST TRANSFORMATIONS
# ============================================================================

def apply_rotation(image: np.ndarray, angle: float) -> np.ndarray:
    """
    Rotate about the center, growing the canvas so nothing is cut off.

    Args:
        image: Input image
        angle: Angle in degrees (counter-clockwise)

    Returns:
        Rotated image
    """
    h, w = image.shape[:2]
    center = (w / 2.0, h / 2.0)
    rot_mat = cv2.getRotationMatrix2D(center, angle, 1.0)

    abs_cos = abs(rot_mat[0, 0])
    abs_sin = abs(rot_mat[0, 1])
    new_w = int(h * abs_sin + w * abs_cos)
    new_h = int(h * abs_cos + w * abs_sin)

    rot_mat[0, 2] += new_w / 2.0 - center[0]
    rot_mat[1, 2] += new_h / 2.0 - center[1]

    return cv2.warpAffine(image, rot_mat, (new_w, new_h))


def apply_scale(image: np.ndarray, factor: float) -> np.ndarray:
    return cv2.resize(image, None, fx=factor, fy=factor, interpolation=cv2.INTER_LINEAR)


def apply_brightness(image: np.ndarray, alpha: float, beta: float) -> np.ndarray:
    """alpha * image + beta, saturated to uint8."""
    return cv2.convertScaleAbs(image, alpha=alpha, beta=beta)


# ============================================================================
# MATCHER
# ============================================================================

class KeypointMatcher:
    """
    Feature detection + brute-force Hamming matching.
    """

    def __init__(self, detector: DetectorType = DetectorType.AKAZE, config: dict = None):
        """
        Initialize the matcher.

        Args:
            detector: Which detector to use
            config: Configuration dictionary
        """
        self.config = config or {}
        kp_config = self.config.get('keypoints', {})

        self.detector_type = detector
        self.ratio = float(kp_config.get('ratio', 2.5))
        self.min_threshold = float(kp_config.get('min_threshold', 30.0))
        self.initial_min_distance = float(kp_config.get('initial_min_distance', 100.0))

        if detector == DetectorType.AKAZE:
            self.detector = cv2.AKAZE_create()
        elif detector == DetectorType.BRISK:
            self.detector = cv2.BRISK_create()
        else:
            raise ValueError(f"Unsupported detector: {detector}")

        self.matcher = cv2.BFMatcher(cv2.NORM_HAMMING)

    def detect_and_compute(self, image: np.ndarray) -> Tuple[List[cv2.KeyPoint], Optional[np.ndarray]]:
        keypoints = self.detector.detect(image, None)
        keypoints, descriptors = self.detector.compute(image, keypoints)
        return list(keypoints), descriptors

    def filter_matches(self, matches: List[cv2.DMatch]) -> Tuple[List[cv2.DMatch], float]:
        """
        Keep matches close to the best one.

        Args:
            matches: All matches

        Returns:
            (good matches, distance threshold used)
        """
        min_dist = self.initial_min_distance
        for m in matches:
            if m.distance < min_dist:
                min_dist = m.distance

        threshold = max(self.ratio * min_dist, self.min_threshold)
        good = [m for m in matches if m.distance <= threshold]
        return good, threshold

    def match(self, image_1: np.ndarray, image_2: np.ndarray, name: str = "",
              draw: bool = True) -> MatchResult:
        """
        Detect, match and filter keypoints between two images.

        Args:
            image_1: Reference image
            image_2: Transformed image
            name: Label for printing and window titles
            draw: Build a side-by-side visualization of the good matches

        Returns:
            MatchResult
        """
        keypoints_1, descriptors_1 = self.detect_and_compute(image_1)
        keypoints_2, descriptors_2 = self.detect_and_compute(image_2)

        # compute() returns None descriptors when nothing was found
        if descriptors_1 is None or descriptors_2 is None:
            matches = []
        else:
            matches = list(self.matcher.match(descriptors_1, descriptors_2))

        good_matches, threshold = self.filter_matches(matches)

        visualization = None
        if draw:
            visualization = cv2.drawMatches(image_1, keypoints_1, image_2, keypoints_2,
                                            good_matches, None)

        return MatchResult(
            name=name,
            detector=self.detector_type,
            keypoints_1=keypoints_1,
            keypoints_2=keypoints_2,
            matches=matches,
            good_matches=good_matches,
            threshold=threshold,
            visualization=visualization
        )


def default_transformations(image: np.ndarray, config: dict = None) -> List[Tuple[str, np.ndarray]]:
    """
    The three test transformations of the exercise.

    Args:
        image: Reference image
        config: Configuration dictionary

    Returns:
        List of (name, transformed image)
    """
    kp_config = (config or {}).get('keypoints', {})
    angle = kp_config.get('rotation_deg', 45)
    factor = kp_config.get('scale', 0.7)
    alpha = kp_config.get('brightness_alpha', 1.3)
    beta = kp_config.get('brightness_beta', 20)

    return [
        (f"Rotation {angle:g} deg", apply_rotation(image, angle)),
        (f"Scale {factor:g}x", apply_scale(image, factor)),
        ("Brightness", apply_brightness(image, alpha, beta)),
    ]

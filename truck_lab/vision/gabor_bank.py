"""
Gabor Filter Bank Exercise

Filters the image with Gabor kernels at four orientations and combines
the responses with a per-pixel maximum, once per parameter set.

Effect of the parameters:
- sigma: width of the Gaussian envelope. Larger sigma gives coarser,
  smoother edges; smaller sigma keeps fine, sharp detail.
- wavelength: period of the sinusoid. Larger wavelengths highlight broad
  patterns, smaller ones closely spaced texture.
- aspect ratio (gamma): ellipticity of the envelope. gamma < 1 makes the
  filter more orientation selective (straighter, edgier features);
  gamma = 1 responds to all orientations alike (rounder features).

Author: Truck Lab
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

import cv2
import numpy as np


@dataclass
class GaborParams:
    """One Gabor parameter set."""
    sigma: float
    wavelength: float
    aspect_ratio: float


@dataclass
class GaborResponse:
    """Combined response of one parameter set."""
    params: GaborParams
    combined: np.ndarray   # uint8, normalized to 0..255


DEFAULT_PARAMS = [
    GaborParams(2.0, 5.0, 0.5),
    GaborParams(4.0, 10.0, 0.5),
    GaborParams(6.0, 20.0, 0.8),
]

DEFAULT_ORIENTATIONS = [0.0, math.pi / 4, math.pi / 2, 3 * math.pi / 4]


class GaborFilterBank:
    """Bank of Gabor kernels over orientations x parameter sets."""

    def __init__(self, config: dict = None):
        self.config = config or {}
        gabor_config = self.config.get('gabor', {})

        self.size = tuple(gabor_config.get('size', [448, 336]))
        self.kernel_size = int(gabor_config.get('kernel_size', 31))

        if 'orientations_deg' in gabor_config:
            self.orientations = [math.radians(a) for a in gabor_config['orientations_deg']]
        else:
            self.orientations = list(DEFAULT_ORIENTATIONS)

        if 'params' in gabor_config:
            self.params = [GaborParams(*p) for p in gabor_config['params']]
        else:
            self.params = list(DEFAULT_PARAMS)

    def kernel(self, params: GaborParams, theta: float) -> np.ndarray:
        k = self.kernel_size
        return cv2.getGaborKernel((k, k), params.sigma, theta, params.wavelength,
                                  params.aspect_ratio, 0, ktype=cv2.CV_32F)

    def combined_response(self, image: np.ndarray, params: GaborParams) -> np.ndarray:
        """
        Per-pixel maximum over all orientations, scaled to uint8.

        Args:
            image: Input image (already resized)
            params: Gabor parameters

        Returns:
            uint8 image with the same shape as the input
        """
        combined = None
        for theta in self.orientations:
            filtered = cv2.filter2D(image, cv2.CV_32F, self.kernel(params, theta))
            combined = filtered if combined is None else np.maximum(combined, filtered)

        combined = cv2.normalize(combined, None, 0, 255, cv2.NORM_MINMAX)
        return combined.astype(np.uint8)

    def apply(self, image: np.ndarray) -> List[GaborResponse]:
        resized = cv2.resize(image, self.size)
        return [GaborResponse(params=p, combined=self.combined_response(resized, p))
                for p in self.params]

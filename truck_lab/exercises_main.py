#!/usr/bin/env python3
"""
Vision Exercise Runner

Runs one of the OpenCV exercises on image files from the working
directory and shows the results.

Usage:
    truck-lab-exercises warp
    truck-lab-exercises pyramids --image photo.jpg
    truck-lab-exercises edges --image img.jpg img2.jpg
    truck-lab-exercises keypoints --no-display

Each exercise prints its results and, unless --no-display is given,
opens a window and waits for a key press.

Author: Truck Lab
"""

import argparse
import sys

from .config import load_config
from .utils import ExerciseViewer, ViewerConfig
from .vision import (
    DetectorType,
    EdgeDetector,
    GaborFilterBank,
    KeypointMatcher,
    PerspectiveWarper,
    PyramidBuilder,
    default_transformations,
    load_image,
)


def run_warp(images, config: dict, viewer: ExerciseViewer) -> int:
    image = load_image(images[0])
    if image is None:
        return 1

    warper = PerspectiveWarper(config)
    result = warper.warp(image)

    print("Perspective transform matrix:")
    print(result.matrix)
    viewer.show("Perspective Transform", [
        ("Original", result.resized),
        ("Perspective Transform", result.warped),
    ])
    return 0


def run_pyramids(images, config: dict, viewer: ExerciseViewer) -> int:
    image = load_image(images[0])
    if image is None:
        return 1

    builder = PyramidBuilder(config)
    result = builder.build(image)

    for i, level in enumerate(result.gaussian):
        print(f"Gaussian level {i}: {level.shape[1]}x{level.shape[0]}")

    viewer.show("Gaussian Pyramid",
                [(f"Gaussian Level {i}", level) for i, level in enumerate(result.gaussian)])
    viewer.show("Laplacian Pyramid",
                [(f"Laplacian Level {i}", level) for i, level in enumerate(result.laplacian)])
    return 0


def run_gabor(images, config: dict, viewer: ExerciseViewer) -> int:
    image = load_image(images[0])
    if image is None:
        return 1

    bank = GaborFilterBank(config)
    responses = bank.apply(image)

    tiles = []
    for i, response in enumerate(responses):
        p = response.params
        print(f"Parameter set {i}: sigma={p.sigma}, wavelength={p.wavelength}, "
              f"aspect={p.aspect_ratio}")
        tiles.append((f"Combined Gabor Parameter set {i}", response.combined))
    viewer.show("Gabor Filter Bank", tiles)
    return 0


def run_edges(images, config: dict, viewer: ExerciseViewer) -> int:
    detector = EdgeDetector(config)
    processed = 0

    for path in images:
        image = load_image(path, grayscale=True)
        if image is None:
            # Skip to the next image
            continue

        result = detector.detect(image)
        print(f"{path}: Otsu threshold={result.otsu_threshold:.1f} "
              f"(Canny low={result.low_threshold:.1f}, high={result.high_threshold:.1f})")

        viewer.show(f"Edges - {path}", [
            (f"Original - {path}", result.original),
            (f"Canny (Otsu) - {path}", result.canny),
            (f"Sobel - {path}", result.sobel),
            (f"Laplacian - {path}", result.laplacian),
        ])
        processed += 1

    return 0 if processed else 1


def run_keypoints(images, config: dict, viewer: ExerciseViewer) -> int:
    size = tuple(config.get('keypoints', {}).get('size', [448, 336]))
    image = load_image(images[0], grayscale=True, size=size)
    if image is None:
        return 1

    print(f"Image loaded: {image.shape[1]}x{image.shape[0]}")
    print("")

    transformed = default_transformations(image, config)

    for detector_type in (DetectorType.AKAZE, DetectorType.BRISK):
        print(f"=== {detector_type.value} Detector ===")
        matcher = KeypointMatcher(detector_type, config)
        for name, other in transformed:
            result = matcher.match(image, other, name=name,
                                   draw=viewer.config.show_windows)
            print(result.summary())
            if result.visualization is not None:
                viewer.show(f"{detector_type.value} - {name}",
                            [(f"{detector_type.value} - {name}", result.visualization)])
        print("")

    return 0


EXERCISES = {
    'warp': (run_warp, ['img.jpg']),
    'pyramids': (run_pyramids, ['img.jpg']),
    'gabor': (run_gabor, ['img.jpg']),
    'edges': (run_edges, ['img.jpg', 'img2.jpg']),
    'keypoints': (run_keypoints, ['img.jpg']),
}


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description='Truck Lab - OpenCV exercises')
    parser.add_argument('exercise', choices=sorted(EXERCISES),
                        help='Exercise to run')
    parser.add_argument('--image', nargs='+', default=None,
                        help='Input image(s), defaults to the exercise\'s usual files')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to configuration YAML file')
    parser.add_argument('--no-display', action='store_true',
                        help='Print results only, do not open windows')

    args = parser.parse_args(argv)

    config = load_config(args.config)
    viewer_config = ViewerConfig.from_dict(config)
    viewer_config.show_windows = not args.no_display
    viewer = ExerciseViewer(viewer_config)

    run, default_images = EXERCISES[args.exercise]
    images = args.image or default_images

    try:
        status = run(images, config, viewer)
        viewer.wait()
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return status


if __name__ == "__main__":
    sys.exit(main())

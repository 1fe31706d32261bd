"""
Tests for the vision exercises on synthetic images.
"""

import cv2
import numpy as np
import pytest

from truck_lab.vision import (
    DetectorType,
    EdgeDetector,
    GaborFilterBank,
    GaborParams,
    KeypointMatcher,
    PerspectiveWarper,
    PyramidBuilder,
    apply_brightness,
    apply_rotation,
    apply_scale,
    default_transformations,
    load_image,
)


@pytest.fixture
def color_image():
    """Blocky random texture, 640x480 BGR."""
    rng = np.random.default_rng(7)
    blocks = rng.integers(0, 256, size=(30, 40, 3), dtype=np.uint8)
    return cv2.resize(blocks, (640, 480), interpolation=cv2.INTER_NEAREST)


@pytest.fixture
def gray_image(color_image):
    gray = cv2.cvtColor(color_image, cv2.COLOR_BGR2GRAY)
    return cv2.resize(gray, (448, 336))


class TestImageIO:

    def test_missing_file(self, tmp_path, capsys):
        assert load_image(tmp_path / "missing.jpg") is None
        assert "could not read" in capsys.readouterr().err

    def test_load_and_resize(self, tmp_path, color_image):
        path = tmp_path / "img.png"
        cv2.imwrite(str(path), color_image)

        image = load_image(path, size=(448, 336))
        assert image.shape == (336, 448, 3)

        gray = load_image(path, grayscale=True)
        assert gray.shape == (480, 640)


class TestPerspectiveWarp:

    def test_output_size(self, color_image):
        result = PerspectiveWarper().warp(color_image)
        assert result.resized.shape == (400, 600, 3)
        assert result.warped.shape == (400, 600, 3)
        assert result.matrix.shape == (3, 3)

    def test_matrix_maps_src_to_dst(self):
        warper = PerspectiveWarper()
        pts = warper.src_points.reshape(-1, 1, 2)
        mapped = cv2.perspectiveTransform(pts, warper.compute_matrix()).reshape(-1, 2)
        assert np.allclose(mapped, warper.dst_points, atol=1e-3)

    def test_bad_points(self):
        with pytest.raises(ValueError):
            PerspectiveWarper({'perspective_warp': {'src': [[0, 0], [1, 1]]}})


class TestPyramids:

    def test_level_sizes(self, color_image):
        result = PyramidBuilder().build(color_image)
        sizes = [level.shape[:2] for level in result.gaussian]
        assert sizes == [(336, 448), (168, 224), (84, 112), (42, 56), (21, 28)]

    def test_laplacian_matches_gaussian_levels(self, color_image):
        result = PyramidBuilder().build(color_image)
        assert len(result.laplacian) == len(result.gaussian) - 1
        for lap, gauss in zip(result.laplacian, result.gaussian):
            assert lap.shape == gauss.shape
            assert lap.dtype == np.uint8

    def test_flat_image_has_empty_laplacian(self):
        flat = np.full((336, 448, 3), 120, dtype=np.uint8)
        result = PyramidBuilder().build(flat)
        for level in result.laplacian:
            assert level.max() <= 1

    def test_invalid_levels(self):
        with pytest.raises(ValueError):
            PyramidBuilder({'pyramids': {'levels': 0}})


class TestGabor:

    def test_one_response_per_parameter_set(self, color_image):
        responses = GaborFilterBank().apply(color_image)
        assert len(responses) == 3
        for response in responses:
            assert response.combined.dtype == np.uint8
            assert response.combined.shape == (336, 448, 3)
            assert response.combined.min() == 0
            assert response.combined.max() == 255

    def test_config_overrides(self, gray_image):
        bank = GaborFilterBank({'gabor': {
            'orientations_deg': [0, 90],
            'params': [[3.0, 8.0, 1.0]],
            'kernel_size': 15,
        }})
        assert len(bank.orientations) == 2
        assert bank.params == [GaborParams(3.0, 8.0, 1.0)]
        assert bank.kernel(bank.params[0], 0.0).shape == (15, 15)
        assert bank.apply(gray_image)[0].combined.shape == (336, 448)


class TestEdges:

    def test_outputs(self, color_image):
        result = EdgeDetector().detect(color_image)
        for image in (result.original, result.canny, result.sobel, result.laplacian):
            assert image.shape == (336, 448)
            assert image.dtype == np.uint8
        assert result.low_threshold == pytest.approx(0.5 * result.high_threshold)
        assert result.high_threshold == result.otsu_threshold

    def test_canny_is_binary(self, gray_image):
        result = EdgeDetector().detect(gray_image)
        assert set(np.unique(result.canny)) <= {0, 255}
        assert result.canny.max() == 255

    def test_step_edge_found(self):
        image = np.zeros((336, 448), dtype=np.uint8)
        image[:, 224:] = 200
        result = EdgeDetector().detect(image)
        column = result.canny[:, 215:235]
        assert column.max() == 255
        assert result.canny[:, :150].max() == 0


class TestKeypoints:

    def test_transformations(self, gray_image):
        rotated = apply_rotation(gray_image, 90)
        assert rotated.shape == (448, 336)

        rotated_45 = apply_rotation(gray_image, 45)
        assert rotated_45.shape[0] > gray_image.shape[0]
        assert rotated_45.shape[1] > gray_image.shape[1]

        assert apply_scale(gray_image, 0.5).shape == (168, 224)

        brighter = apply_brightness(gray_image, 1.3, 20)
        assert brighter.dtype == np.uint8
        expected = np.clip(gray_image.astype(np.float64) * 1.3 + 20, 0, 255)
        assert np.abs(brighter.astype(np.float64) - expected).max() <= 1.0

    def test_default_transformations(self, gray_image):
        names = [name for name, _ in default_transformations(gray_image)]
        assert names == ["Rotation 45 deg", "Scale 0.7x", "Brightness"]

    @pytest.mark.parametrize("detector", [DetectorType.AKAZE, DetectorType.BRISK])
    def test_self_match_is_all_good(self, gray_image, detector):
        result = KeypointMatcher(detector).match(gray_image, gray_image, name="self")
        assert len(result.keypoints_1) > 0
        assert len(result.matches) == len(result.keypoints_1)
        assert len(result.good_matches) == len(result.matches)
        assert result.threshold == 30.0
        assert result.visualization is not None

    def test_blank_image_has_no_matches(self, gray_image):
        blank = np.zeros_like(gray_image)
        result = KeypointMatcher(DetectorType.AKAZE).match(gray_image, blank, draw=False)
        assert result.matches == []
        assert result.good_matches == []
        assert result.visualization is None

    def test_filter_matches(self):
        matcher = KeypointMatcher(DetectorType.BRISK)
        matches = [cv2.DMatch(0, 0, d) for d in (20.0, 45.0, 50.0, 60.0)]
        good, threshold = matcher.filter_matches(matches)
        assert threshold == pytest.approx(50.0)
        assert [m.distance for m in good] == [20.0, 45.0, 50.0]

    def test_filter_matches_uses_floor(self):
        matcher = KeypointMatcher(DetectorType.AKAZE)
        matches = [cv2.DMatch(0, 0, d) for d in (4.0, 25.0, 31.0)]
        good, threshold = matcher.filter_matches(matches)
        assert threshold == 30.0
        assert len(good) == 2

    def test_summary(self, gray_image):
        result = KeypointMatcher(DetectorType.AKAZE).match(gray_image, gray_image,
                                                           name="Brightness", draw=False)
        text = result.summary()
        assert text.startswith("Brightness:")
        assert "Good matches:" in text

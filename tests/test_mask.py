"""Tests for wall mask generation."""

import numpy as np
import pytest

from wallhue.errors import BufferSizeMismatch, InvalidHexColor
from wallhue.image.mask import MaskGenerator


@pytest.fixture
def banded_image():
    """100x100 image whose top 30 rows hold the wall color."""
    image = np.full((100, 100, 3), (20, 40, 60), dtype=np.uint8)
    image[:30] = (200, 180, 160)
    return image


def _expected_band_mask(width, height, rows):
    xs = np.arange(width)[None, :]
    ys = np.arange(height)[:, None]
    sides = (xs < 0.2 * width) | (xs > 0.8 * width)
    return (ys < rows) & sides


class TestMaskGenerator:
    """Color and position gating."""

    def setup_method(self):
        self.generator = MaskGenerator()

    def test_upper_band_mask(self, banded_image):
        mask = self.generator.generate_mask(banded_image, "#C8B4A0", tolerance=30)

        expected = _expected_band_mask(100, 100, 30)
        assert mask.shape == (100, 100, 3)
        assert mask.dtype == np.uint8
        np.testing.assert_array_equal(mask[..., 0] == 255, expected)

    def test_channels_are_replicated(self, banded_image):
        mask = self.generator.generate_mask(banded_image, "#C8B4A0", tolerance=30)

        np.testing.assert_array_equal(mask[..., 0], mask[..., 1])
        np.testing.assert_array_equal(mask[..., 0], mask[..., 2])

    def test_mask_is_binary(self):
        rng = np.random.default_rng(9)
        image = rng.integers(0, 256, size=(64, 48, 3), dtype=np.uint8)

        mask = self.generator.generate_mask(image, (128, 128, 128), tolerance=150)

        assert set(np.unique(mask)).issubset({0, 255})

    def test_upper_center_is_not_wall_enough(self, banded_image):
        mask = self.generator.generate_mask(banded_image, "#C8B4A0", tolerance=30)

        assert (mask[:30, 30:70] == 0).all()

    def test_lower_threshold_includes_upper_center(self, banded_image):
        generator = MaskGenerator(wall_threshold=0.3)

        mask = generator.generate_mask(banded_image, "#C8B4A0", tolerance=30)

        assert (mask[:30] == 255).all()
        assert (mask[30:] == 0).all()

    def test_rgb_tuple_target(self, banded_image):
        by_hex = self.generator.generate_mask(banded_image, "#C8B4A0", tolerance=30)
        by_rgb = self.generator.generate_mask(banded_image, (200, 180, 160), tolerance=30)

        np.testing.assert_array_equal(by_hex, by_rgb)

    def test_workers_give_identical_mask(self, banded_image):
        threaded = MaskGenerator(workers=4).generate_mask(banded_image, "#C8B4A0", 30)
        single = self.generator.generate_mask(banded_image, "#C8B4A0", 30)

        np.testing.assert_array_equal(threaded, single)

    def test_flat_buffer(self, banded_image):
        mask = self.generator.generate_mask(
            banded_image.tobytes(), "#C8B4A0", 30, width=100, height=100
        )
        assert mask.shape == (100, 100, 3)

    def test_invalid_color(self, banded_image):
        with pytest.raises(InvalidHexColor):
            self.generator.generate_mask(banded_image, "beige")

    def test_buffer_mismatch(self):
        with pytest.raises(BufferSizeMismatch):
            self.generator.generate_mask(bytes(5), "#FFFFFF", width=2, height=2)

    def test_input_not_modified(self, banded_image):
        original = banded_image.copy()
        self.generator.generate_mask(banded_image, "#C8B4A0")
        np.testing.assert_array_equal(banded_image, original)

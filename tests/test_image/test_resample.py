"""
Tests for physical-size resampling.
"""

import unittest

import numpy as np

from halftone.image.resample import resize, round_half_up, target_size


class TestTargetSize(unittest.TestCase):
    """Test target_size."""

    def test_width_from_physical_size(self):
        """Test width = round(cm / 2.54 * dpi)."""
        width, _ = target_size(1000, 1000, 10.0, 300)
        self.assertEqual(width, round_half_up(10.0 / 2.54 * 300))
        self.assertEqual(width, 1181)

    def test_aspect_ratio_preserved(self):
        """Test height = round(width * h / w) exactly."""
        for src_w, src_h in [(100, 50), (640, 480), (333, 1000), (1920, 1081)]:
            width, height = target_size(src_w, src_h, 12.5, 600)
            self.assertEqual(height, round_half_up(width * src_h / src_w))

    def test_rounds_half_up(self):
        """Test halves round up rather than to even."""
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(3.5), 4)
        self.assertEqual(round_half_up(2.49), 2)
        # 25 * 10 / 100 = 2.5 -> 3
        self.assertEqual(target_size(100, 10, 2.54, 25), (25, 3))

    def test_hundred_pixels(self):
        """Test 1 cm at 254 DPI is 100 px."""
        self.assertEqual(target_size(100, 50, 1.0, 254), (100, 50))

    def test_invalid_source(self):
        """Test non-positive source size raises."""
        with self.assertRaises(ValueError):
            target_size(0, 10, 10.0, 300)

    def test_empty_target(self):
        """Test a target that rounds to zero raises."""
        with self.assertRaises(ValueError):
            target_size(10000, 1, 1.0, 10)


class TestResize(unittest.TestCase):
    """Test resize."""

    def test_output_shape(self):
        """Test resized array has the requested size."""
        image = np.zeros((50, 100, 4), dtype=np.uint8)
        out = resize(image, 40, 20)
        self.assertEqual(out.shape, (20, 40, 4))
        self.assertEqual(out.dtype, np.uint8)

    def test_uniform_image_stays_uniform(self):
        """Test a solid color survives resampling."""
        image = np.full((30, 60, 4), 200, dtype=np.uint8)
        image[..., 3] = 255
        out = resize(image, 90, 45)
        self.assertTrue(np.all(out[..., :3] == 200))

    def test_deterministic(self):
        """Test repeated resizes are identical."""
        rng = np.random.default_rng(5)
        image = rng.integers(0, 256, size=(37, 51, 4), dtype=np.uint8)
        np.testing.assert_array_equal(resize(image, 20, 14), resize(image, 20, 14))

    def test_same_size_is_copy(self):
        """Test resizing to the same size returns an equal copy."""
        image = np.arange(2 * 3 * 4, dtype=np.uint8).reshape(2, 3, 4)
        out = resize(image, 3, 2)
        np.testing.assert_array_equal(out, image)
        self.assertIsNot(out, image)

    def test_invalid_target(self):
        """Test non-positive target size raises."""
        image = np.zeros((4, 4, 4), dtype=np.uint8)
        with self.assertRaises(ValueError):
            resize(image, 0, 4)


if __name__ == '__main__':
    unittest.main()

import unittest

import numpy as np

from videowall import Raster, ScaleMode, resample

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def coordinate_raster(width, height):
    """Raster whose pixel at (x, y) is (x, y, 7) so positions can be checked."""
    ys, xs = np.indices((height, width))
    pixels = np.stack([xs, ys, np.full_like(xs, 7)], axis=-1).astype(np.uint8)
    return Raster(pixels)


class TestExactSize(unittest.TestCase):
    def test_returns_identical_copy(self):
        src = coordinate_raster(6, 4)
        for mode in ScaleMode:
            out = resample(src, 6, 4, mode)
            self.assertEqual(out, src)
            self.assertIsNot(out.pixels, src.pixels)

    def test_copy_is_independent(self):
        src = Raster.solid(3, 3, RED)
        out = resample(src, 3, 3, ScaleMode.CROP)
        out.pixels[0, 0] = BLUE
        self.assertEqual(tuple(src.pixels[0, 0]), RED)


class TestCrop(unittest.TestCase):
    def test_centered_window(self):
        src = coordinate_raster(10, 8)
        out = resample(src, 4, 2, ScaleMode.CROP)
        self.assertEqual(out.size, (4, 2))
        # origin (10 // 2 - 4 // 2, 8 // 2 - 2 // 2) == ((10 - 4) // 2, (8 - 2) // 2)
        np.testing.assert_array_equal(out.pixels, src.pixels[3:5, 3:7])

    def test_odd_sizes(self):
        src = coordinate_raster(9, 7)
        out = resample(src, 5, 3, ScaleMode.CROP)
        np.testing.assert_array_equal(out.pixels, src.pixels[2:5, 2:7])

    def test_undersized_source_is_padded_black(self):
        src = Raster.solid(2, 2, RED)
        out = resample(src, 4, 4, ScaleMode.CROP)
        self.assertEqual(out.size, (4, 4))
        # origin is (-1, -1): source lands in the middle
        np.testing.assert_array_equal(out.pixels[1:3, 1:3], src.pixels)
        mask = np.ones((4, 4), dtype=bool)
        mask[1:3, 1:3] = False
        self.assertFalse(out.pixels[mask].any())

    def test_source_smaller_in_one_axis(self):
        src = coordinate_raster(6, 2)
        out = resample(src, 4, 4, ScaleMode.CROP)
        # origin (1, -1)
        np.testing.assert_array_equal(out.pixels[1:3], src.pixels[0:2, 1:5])
        self.assertFalse(out.pixels[0].any())
        self.assertFalse(out.pixels[3].any())

    def test_rgba_padding_is_transparent(self):
        src = Raster.solid(1, 1, (10, 20, 30, 255))
        out = resample(src, 3, 3, ScaleMode.CROP)
        self.assertEqual(out.channels, 4)
        self.assertEqual(tuple(out.pixels[1, 1]), (10, 20, 30, 255))
        self.assertEqual(tuple(out.pixels[0, 0]), (0, 0, 0, 0))


class TestStretch(unittest.TestCase):
    def test_output_size_is_target(self):
        for w, h in [(1, 1), (3, 7), (8, 4), (600, 20), (280, 77)]:
            out = resample(Raster.solid(w, h, BLUE), 280, 76, ScaleMode.STRETCH)
            self.assertEqual(out.size, (280, 76))
            self.assertEqual(out.pixels.shape, (76, 280, 3))

    def test_single_pixel_fills_target(self):
        out = resample(Raster.solid(1, 1, RED), 4, 3, ScaleMode.STRETCH)
        self.assertTrue((out.pixels == RED).all())

    def test_nearest_neighbour_upscale(self):
        src = Raster(np.array([[RED, BLUE]], dtype=np.uint8))
        out = resample(src, 4, 1, ScaleMode.STRETCH)
        self.assertEqual([tuple(p) for p in out.pixels[0]], [RED, RED, BLUE, BLUE])

    def test_deterministic(self):
        src = coordinate_raster(13, 11)
        a = resample(src, 5, 4, ScaleMode.STRETCH)
        b = resample(src, 5, 4, ScaleMode.STRETCH)
        self.assertEqual(a, b)

    def test_keeps_alpha_channel(self):
        out = resample(Raster.solid(2, 2, (1, 2, 3, 4)), 3, 3, ScaleMode.STRETCH)
        self.assertEqual(out.channels, 4)

    def test_source_not_modified(self):
        src = coordinate_raster(8, 4)
        before = src.pixels.copy()
        resample(src, 3, 3, ScaleMode.STRETCH)
        resample(src, 3, 3, ScaleMode.CROP)
        np.testing.assert_array_equal(src.pixels, before)


class TestInvalidArguments(unittest.TestCase):
    def test_bad_target_size(self):
        with self.assertRaises(ValueError):
            resample(Raster.solid(2, 2, RED), 0, 2, ScaleMode.STRETCH)

    def test_bad_mode(self):
        with self.assertRaises(ValueError):
            resample(Raster.solid(2, 2, RED), 4, 4, 3)

    def test_int_modes_accepted(self):
        out = resample(Raster.solid(2, 2, RED), 4, 4, 2)
        self.assertTrue((out.pixels == RED).all())


if __name__ == "__main__":
    unittest.main()

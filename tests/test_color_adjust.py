import cv2
import numpy as np

from color_adjust import ColorAdjuster


class TestBrightness:

    def test_zero_is_identity(self, color_image):
        assert ColorAdjuster.apply_brightness(color_image, 0) is color_image

    def test_positive_saturates_at_255(self):
        img = np.array([[[10, 200, 250]]], dtype=np.uint8)
        out = ColorAdjuster.apply_brightness(img, 50)
        assert out.tolist() == [[[60, 250, 255]]]

    def test_negative_saturates_at_zero(self):
        img = np.array([[[10, 200, 250]]], dtype=np.uint8)
        out = ColorAdjuster.apply_brightness(img, -50)
        assert out.tolist() == [[[0, 150, 200]]]


class TestHue:

    def test_wraps_above_range(self):
        h = np.array([170], dtype=np.uint8)
        assert ColorAdjuster.shift_hue(h, 20).tolist() == [10]

    def test_wraps_below_zero(self):
        h = np.array([5], dtype=np.uint8)
        assert ColorAdjuster.shift_hue(h, -20).tolist() == [165]

    def test_in_range_shift(self):
        h = np.array([0, 90, 179], dtype=np.uint8)
        assert ColorAdjuster.shift_hue(h, 1).tolist() == [1, 91, 0]

    def test_full_turn_is_identity(self):
        h = np.arange(180, dtype=np.uint8)
        assert np.array_equal(ColorAdjuster.shift_hue(h, 180), h)

    def test_hsv_hue_shift_on_image(self):
        hsv = np.full((4, 4, 3), (170, 255, 255), dtype=np.uint8)
        bgr = cv2.cvtColor(hsv, cv2.COLOR_HSV2BGR)

        out = ColorAdjuster.apply_hsv_adjustments(bgr, hue_shift=20)

        out_hue = cv2.cvtColor(out, cv2.COLOR_BGR2HSV)[:, :, 0]
        assert np.all(np.abs(out_hue.astype(int) - 10) <= 1)

    def test_no_adjustment_is_identity(self, color_image):
        assert ColorAdjuster.apply_hsv_adjustments(color_image) is color_image


class TestSaturation:

    def test_scale_clips(self):
        s = np.array([0, 100, 200], dtype=np.uint8)
        assert ColorAdjuster.scale_saturation(s, 2.0).tolist() == [0, 200, 255]

    def test_scale_rounds_to_nearest(self):
        s = np.array([3, 5, 101], dtype=np.uint8)
        # 1.5 -> 2, 2.5 -> 2, 50.5 -> 50 (half to even, as cv2 saturate_cast)
        assert ColorAdjuster.scale_saturation(s, 0.5).tolist() == [2, 2, 50]

    def test_zero_saturation_is_gray(self, color_image):
        out = ColorAdjuster.apply_hsv_adjustments(color_image, saturation_scale=0.0)
        assert out.shape == color_image.shape
        # All channels equal once saturation is gone
        assert np.array_equal(out[:, :, 0], out[:, :, 1])
        assert np.array_equal(out[:, :, 1], out[:, :, 2])


class TestGradientFade:

    def test_factors(self):
        alpha = ColorAdjuster.fade_factors(4, 100)
        assert np.allclose(alpha, [1.0, 0.75, 0.5, 0.25])

    def test_zero_strength_is_identity(self, color_image):
        out = ColorAdjuster.apply_gradient_fade(color_image, 0)
        assert np.array_equal(out, color_image)

    def test_rows_darken_top_to_bottom(self):
        img = np.full((8, 3, 3), 200, dtype=np.uint8)
        out = ColorAdjuster.apply_gradient_fade(img, 50)

        assert out.dtype == np.uint8
        assert np.all(out[0] == 200)
        assert np.all(out[4] == 150)
        # Row 7: 200 * (1 - 7/8 * 0.5) = 112.5
        assert np.all(out[7] == 112)
        column = out[:, 0, 0].astype(int)
        assert np.all(np.diff(column) <= 0)

    def test_truncates(self):
        img = np.full((3, 1, 3), 100, dtype=np.uint8)
        out = ColorAdjuster.apply_gradient_fade(img, 100)
        # 100 * 2/3 = 66.67 -> 66
        assert out[1, 0, 0] == 66
        assert out[2, 0, 0] == 33

    def test_grayscale_input(self):
        img = np.full((4, 4), 100, dtype=np.uint8)
        out = ColorAdjuster.apply_gradient_fade(img, 100)
        assert out.shape == (4, 4)
        assert out[3, 0] == 25

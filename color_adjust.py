import cv2
import numpy as np

HUE_RANGE = 180 # OpenCV stores hue as 0-179 for uint8 images


class ColorAdjuster:
    """
    Handles color adjustments for images: brightness, hue, saturation,
    and the vertical gradient fade.
    """

    @staticmethod
    def apply_brightness(image, value):
        """
        Applies additive brightness.
        value: int [-100, 100], the Brightness slider range
        """
        if value == 0:
            return image

        # Using cv2.add/subtract to handle saturation automatically (clipping 0-255)
        if value > 0:
            matrix = np.full(image.shape, value, dtype=np.uint8)
            return cv2.add(image, matrix)
        else:
            matrix = np.full(image.shape, abs(value), dtype=np.uint8)
            return cv2.subtract(image, matrix)

    @staticmethod
    def shift_hue(h, shift):
        """
        Shifts a hue channel and wraps the result back into [0, 180).
        e.g. 170 + 20 -> 10
        """
        h = h.astype(np.int16) + shift
        return (h % HUE_RANGE).astype(np.uint8)

    @staticmethod
    def scale_saturation(s, scale):
        # Round to nearest like cv2 saturate_cast
        s = np.rint(s.astype(np.float32) * scale)
        return np.clip(s, 0, 255).astype(np.uint8)

    @staticmethod
    def apply_hsv_adjustments(image, saturation_scale=1.0, hue_shift=0):
        """
        Applies Saturation and Hue adjustments in HSV space.
        saturation_scale: float, 1.0 is original.
        hue_shift: int, added to the OpenCV hue channel and wrapped.
        """
        if saturation_scale == 1.0 and hue_shift == 0:
            return image

        if image.ndim == 2:
            image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)

        hsv = cv2.cvtColor(image, cv2.COLOR_BGR2HSV)
        h, s, v = cv2.split(hsv)

        if saturation_scale != 1.0:
            s = ColorAdjuster.scale_saturation(s, saturation_scale)

        if hue_shift != 0:
            h = ColorAdjuster.shift_hue(h, hue_shift)

        final_hsv = cv2.merge([h, s, v])
        return cv2.cvtColor(final_hsv, cv2.COLOR_HSV2BGR)

    @staticmethod
    def fade_factors(rows, strength):
        """
        Per-row multipliers for the gradient fade.
        strength: percent [0, 100]; row y gets 1 - y / rows * strength / 100.
        """
        y = np.arange(rows, dtype=np.float64)
        alpha = 1.0 - y / rows * (strength / 100.0)
        return np.clip(alpha, 0.0, 1.0)

    @staticmethod
    def apply_gradient_fade(image, strength):
        """
        Darkens the image progressively from top to bottom.
        The top row is untouched, the bottom row is scaled by ~(1 - strength/100).
        """
        alpha = ColorAdjuster.fade_factors(image.shape[0], strength)
        # Broadcast over columns (and channels when present)
        alpha = alpha.reshape((-1,) + (1,) * (image.ndim - 1))
        return (image * alpha).astype(np.uint8)

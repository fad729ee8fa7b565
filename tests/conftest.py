"""
Pytest configuration and shared fixtures for the editor tests.

Images are synthetic uint8 numpy arrays in OpenCV's BGR layout.
"""

import numpy as np
import pytest

from history import EditHistory


@pytest.fixture
def color_image():
    """100x100 3-channel image with a distinct value in every pixel row/column."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(100, 100, 3), dtype=np.uint8)


@pytest.fixture
def wide_image():
    """Non-square 40 (h) x 60 (w) image whose pixels encode their own coordinates."""
    img = np.zeros((40, 60, 3), dtype=np.uint8)
    img[:, :, 0] = np.arange(60, dtype=np.uint8)[None, :]
    img[:, :, 1] = np.arange(40, dtype=np.uint8)[:, None]
    img[:, :, 2] = 200
    return img


@pytest.fixture
def history(color_image):
    """EditHistory with color_image freshly loaded."""
    h = EditHistory()
    h.load_new(color_image)
    return h

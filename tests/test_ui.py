import numpy as np
import pytest

pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtGui import QImage  # noqa: E402

from ui import to_qimage  # noqa: E402


def test_color_image_is_rgb(wide_image):
    q_img = to_qimage(wide_image)

    assert (q_img.width(), q_img.height()) == (60, 40)
    assert q_img.format() == QImage.Format_RGB888
    # BGR (x, y, 200) is shown as RGB (200, y, x)
    pixel = q_img.pixelColor(5, 7)
    assert (pixel.red(), pixel.green(), pixel.blue()) == (200, 7, 5)


def test_grayscale_image():
    img = np.arange(12, dtype=np.uint8).reshape(3, 4)
    q_img = to_qimage(img)

    assert q_img.format() == QImage.Format_Grayscale8
    assert q_img.pixelColor(3, 2).red() == 11


def test_read_only_view_is_accepted(history):
    q_img = to_qimage(history.current)
    assert not q_img.isNull()

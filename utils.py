import logging
import os
from datetime import datetime
from pathlib import Path

import cv2
import numpy as np

from errors import DimensionsExceedBounds, InvalidDimensions, LoadFailure, SaveFailure

logger = logging.getLogger(__name__)

SAVE_NAME_FORMAT = "%Y%m%d-%H%M%S"
DEFAULT_SAVE_EXTENSION = ".png"


def parse_dimension(text):
    """Parse a crop width/height typed by the user. Must be a positive integer."""
    try:
        value = int(str(text).strip())
    except (TypeError, ValueError):
        raise InvalidDimensions("Please enter valid numbers for both dimensions!")
    if value <= 0:
        raise InvalidDimensions("Dimensions must be positive values!")
    return value


def crop_center(image, w, h):
    """
    Extract a w x h region centred in the image.
    Origin is ((W - w) // 2, (H - h) // 2).
    """
    if w <= 0 or h <= 0:
        raise InvalidDimensions("Dimensions must be positive values!")
    ih, iw = image.shape[:2]
    if w > iw or h > ih:
        raise DimensionsExceedBounds(
            f"Crop dimensions ({w}x{h}) exceed image size ({iw}x{ih})!")
    x = (iw - w) // 2
    y = (ih - h) // 2
    return image[y:y + h, x:x + w].copy()


def flip_image(image, flip_code):
    """
    Flip image: 0 for vertical, 1 for horizontal, -1 for both.
    """
    return cv2.flip(image, flip_code)


def to_grayscale(image):
    """Grayscale that keeps three channels so later color ops still apply."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


def read_image(path):
    """
    Decode an image file as 3-channel BGR.
    Reads raw bytes first so non-ASCII paths work on every platform.
    """
    try:
        with open(path, "rb") as stream:
            bytes_data = bytearray(stream.read())
    except OSError as e:
        raise LoadFailure(f"Could not open or find the image!\n{e}") from e

    numpyarray = np.asarray(bytes_data, dtype=np.uint8)
    img = cv2.imdecode(numpyarray, cv2.IMREAD_COLOR) if numpyarray.size else None
    if img is None:
        raise LoadFailure("Could not open or find the image!")
    logger.info("Loaded %s (%dx%d)", path, img.shape[1], img.shape[0])
    return img


def write_image(path, image):
    """Encode the image using the format implied by the file extension and write it."""
    ext = Path(path).suffix.lower()
    if not ext:
        raise SaveFailure("Failed to save image: no file extension given.")
    try:
        ok, buf = cv2.imencode(ext, image)
    except cv2.error as e:
        raise SaveFailure(f"Failed to save image: unsupported format '{ext}'.") from e
    if not ok:
        raise SaveFailure(f"Failed to save image: unsupported format '{ext}'.")
    try:
        buf.tofile(str(path))
    except OSError as e:
        raise SaveFailure(f"Failed to save image.\n{e}") from e
    logger.info("Saved %s", path)


def default_save_path(now=None, home=None):
    """~/YYYYMMDD-HHMMSS.png"""
    now = now or datetime.now()
    home = Path(home) if home is not None else Path.home()
    return home / (now.strftime(SAVE_NAME_FORMAT) + DEFAULT_SAVE_EXTENSION)


def describe_image_file(path, image):
    """
    Returns a dictionary describing a loaded image file:
    file name, size on disk, pixel dimensions, color depth and modification time.
    """
    path = Path(path)
    st = os.stat(path)
    h, w = image.shape[:2]
    channels = 1 if image.ndim == 2 else image.shape[2]
    return {
        'file_name': path.name,
        'file_size_kb': st.st_size / 1024.0,
        'width': w,
        'height': h,
        'color_depth': "Grayscale" if channels == 1 else "Color (RGB)",
        'last_modified': datetime.fromtimestamp(st.st_mtime).strftime("%Y-%m-%d %H:%M:%S"),
    }


def format_image_info(info):
    """Render describe_image_file() output as the HTML shown in the info panel."""
    return (
        f"<b>File Name:</b> {info['file_name']}<br>"
        f"<b>File Size:</b> {info['file_size_kb']:.2f} KB<br>"
        f"<b>Dimensions:</b> {info['width']} x {info['height']} pixels<br>"
        f"<b>Color Depth:</b> {info['color_depth']}<br>"
        f"<b>Last Modified:</b> {info['last_modified']}"
    )


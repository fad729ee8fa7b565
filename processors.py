import logging
from abc import ABC, abstractmethod

import cv2

from color_adjust import ColorAdjuster
from history import FLIP, GRAYSCALE
from utils import crop_center, flip_image, parse_dimension, to_grayscale

logger = logging.getLogger(__name__)


class Filter(ABC):
    """
    Abstract Base Class for editor operations.
    """
    # Name of the EditHistory flag this filter toggles, or None for a plain edit
    toggle_flag = None

    @property
    @abstractmethod
    def name(self):
        pass

    @property
    @abstractmethod
    def description(self):
        pass

    def get_params(self):
        """
        Returns a list of parameter dictionaries.
        Format:
        {
            'name': 'ksize',
            'type': 'int' | 'text',
            'label': 'Kernel Size',
            'default': 5,
            'min': 1,       # Optional for numbers
            'max': 31,      # Optional for numbers
        }
        """
        return []

    def default_params(self):
        return {p['name']: p['default'] for p in self.get_params()}

    @abstractmethod
    def apply(self, image, params):
        """
        Apply filter to image using params.
        """
        pass


class GaussianBlur(Filter):
    name = "Blur"
    description = "Smooths image using Gaussian kernel."

    MAX_KSIZE = 31

    def get_params(self):
        return [
            {'name': 'ksize', 'type': 'int', 'label': 'Kernel Size', 'default': 5, 'min': 1, 'max': self.MAX_KSIZE},
        ]

    @classmethod
    def kernel_size(cls, value):
        k = value + 1 if value % 2 == 0 else value # Ensure odd
        return max(1, min(k, cls.MAX_KSIZE))

    def apply(self, image, params):
        k = self.kernel_size(int(params['ksize']))
        return cv2.GaussianBlur(image, (k, k), 0)


class Brightness(Filter):
    name = "Brightness"
    description = "Adds a constant to every pixel."

    def get_params(self):
        return [
            {'name': 'value', 'type': 'int', 'label': 'Brightness', 'default': 0, 'min': -100, 'max': 100},
        ]

    def apply(self, image, params):
        return ColorAdjuster.apply_brightness(image, int(params['value']))


class Hue(Filter):
    name = "Hue"
    description = "Rotates hue, wrapping around the OpenCV 0-180 range."

    def get_params(self):
        return [
            {'name': 'shift', 'type': 'int', 'label': 'Hue', 'default': 0, 'min': -180, 'max': 180},
        ]

    def apply(self, image, params):
        return ColorAdjuster.apply_hsv_adjustments(image, hue_shift=int(params['shift']))


class Saturation(Filter):
    name = "Saturation"
    description = "Scales saturation by a percentage (100 is unchanged)."

    def get_params(self):
        return [
            {'name': 'percent', 'type': 'int', 'label': 'Saturation', 'default': 100, 'min': 0, 'max': 200},
        ]

    def apply(self, image, params):
        return ColorAdjuster.apply_hsv_adjustments(image, saturation_scale=params['percent'] / 100.0)


class GradientFade(Filter):
    name = "Gradient"
    description = "Fades the image towards black from top to bottom."

    def get_params(self):
        return [
            {'name': 'strength', 'type': 'int', 'label': 'Gradient', 'default': 50, 'min': 0, 'max': 100},
        ]

    def apply(self, image, params):
        return ColorAdjuster.apply_gradient_fade(image, int(params['strength']))


class CenterCrop(Filter):
    name = "Crop"
    description = "Cuts a width x height region out of the centre of the image."

    def get_params(self):
        return [
            {'name': 'width', 'type': 'text', 'label': 'Width', 'default': ''},
            {'name': 'height', 'type': 'text', 'label': 'Height', 'default': ''},
        ]

    def apply(self, image, params):
        w = parse_dimension(params['width'])
        h = parse_dimension(params['height'])
        return crop_center(image, w, h)


class Grayscale(Filter):
    name = "Grayscale"
    description = "Toggles a grayscale version of the original."
    toggle_flag = GRAYSCALE

    def apply(self, image, params):
        return to_grayscale(image)


class FlipHorizontal(Filter):
    name = "Flip Horizontal"
    description = "Toggles a left-right mirror of the original."
    toggle_flag = FLIP

    def apply(self, image, params):
        return flip_image(image, 1)


class FlipVertical(Filter):
    name = "Flip Vertical"
    description = "Toggles an upside-down version of the original."
    toggle_flag = FLIP

    def apply(self, image, params):
        return flip_image(image, 0)


class FilterRegistry:
    _filters = {}

    @classmethod
    def register(cls, filter_class):
        instance = filter_class()
        cls._filters[instance.name] = instance

    @classmethod
    def get_filter(cls, name):
        return cls._filters.get(name)

    @classmethod
    def get_filter_names(cls):
        # Registration order, which is also the order of the controls in the UI
        return list(cls._filters.keys())


def run_filter(history, processor, params=None):
    """
    Route a filter through the edit history.
    Toggle filters flip their flag against the original; everything else is a
    regular edit of the original.
    """
    if params is None:
        params = processor.default_params()

    def operation(image):
        return processor.apply(image, params)

    if processor.toggle_flag is not None:
        result = history.toggle(processor.toggle_flag, operation)
    else:
        result = history.apply_edit(operation)
    logger.info("Applied %s %s", processor.name, params)
    return result


# Register all
FilterRegistry.register(GaussianBlur)
FilterRegistry.register(CenterCrop)
FilterRegistry.register(Grayscale)
FilterRegistry.register(FlipHorizontal)
FilterRegistry.register(FlipVertical)
FilterRegistry.register(Hue)
FilterRegistry.register(Saturation)
FilterRegistry.register(Brightness)
FilterRegistry.register(GradientFade)

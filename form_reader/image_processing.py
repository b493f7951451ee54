# image_processing.py
"""
Functions for loading, cropping and preprocessing form images.
"""
import logging
from collections import OrderedDict

import cv2
import numpy as np

from .errors import InvalidImage

logger = logging.getLogger(__name__)


def load_image(image_path):
    """Loads an image from the specified path."""
    image = cv2.imread(image_path)
    if image is None:
        raise InvalidImage(f"Could not read image at {image_path}")
    logger.info("Loaded image: %s (shape=%s)", image_path, image.shape)
    return image


def decode_image(raw_bytes):
    """Decodes an in-memory encoded image (JPEG, PNG, ...) to a BGR array."""
    if not raw_bytes:
        raise InvalidImage("Image data is empty")
    image = cv2.imdecode(np.frombuffer(raw_bytes, np.uint8), cv2.IMREAD_COLOR)
    if image is None:
        raise InvalidImage("Image data could not be decoded")
    return image


def validate_image(image):
    """Raises InvalidImage unless the image is an array with a positive area."""
    if image is None or not isinstance(image, np.ndarray):
        raise InvalidImage("No image was supplied")
    if image.ndim not in (2, 3) or image.size == 0 or image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidImage(f"Image has no area (shape={getattr(image, 'shape', None)})")
    if image.ndim == 3 and image.shape[2] not in (1, 3, 4):
        raise InvalidImage(f"Image must have 1, 3 or 4 channels, got {image.shape[2]}")
    if image.dtype != np.uint8:
        raise InvalidImage(f"Image must be 8-bit, got {image.dtype}")
    return image


def crop_roi(image, roi):
    """
    Crops the image to roi = (x, y, width, height), clipped to the image bounds.
    Returns the crop and the (x, y) offset of its top-left corner.
    """
    validate_image(image)
    if roi is None:
        return image, (0, 0)

    height, width = image.shape[:2]
    x, y, w, h = roi
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(width, x + w), min(height, y + h)
    if x1 <= x0 or y1 <= y0:
        raise InvalidImage(f"Region of interest {roi} lies outside the image (shape={image.shape})")

    if (x0, y0, x1, y1) != (x, y, x + w, y + h):
        logger.debug("Region of interest %s clipped to (%d, %d, %d, %d)", roi, x0, y0, x1 - x0, y1 - y0)
    return image[y0:y1, x0:x1], (x0, y0)


def to_grayscale(image):
    if image.ndim == 2:
        return image
    if image.shape[2] == 1:
        return np.ascontiguousarray(image[:, :, 0])
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def preprocess_stages(image, config):
    """
    Runs every preprocessing step and returns the intermediate images in order:
    gray, equalized (only when enabled), blurred, threshold and edges.
    """
    validate_image(image)

    stages = OrderedDict()
    gray = to_grayscale(image)
    stages['gray'] = gray
    logger.debug("Converted to grayscale. Shape: %s", gray.shape)

    if config.equalize:
        gray = cv2.equalizeHist(gray)
        stages['equalized'] = gray

    kernel = (config.blur_kernel, config.blur_kernel)
    blurred = cv2.GaussianBlur(gray, kernel, 0)
    stages['blurred'] = blurred

    # Pixels brighter than the threshold become foreground
    _, thresholded = cv2.threshold(blurred, config.threshold, 255, cv2.THRESH_BINARY)
    stages['threshold'] = thresholded

    stages['edges'] = cv2.Canny(blurred, config.canny_low, config.canny_high)
    logger.debug("Preprocessed image with %dx%d blur, shape source '%s'",
                 config.blur_kernel, config.blur_kernel, config.shape_source)
    return stages


def preprocess(image, config):
    """Returns the single channel image the region detector works on."""
    return preprocess_stages(image, config)[config.shape_source]

# annotator.py
"""
Functions for visual feedback: the annotated form and diagnostic stage images.
"""
import os
import logging

import cv2

from . import config
from .errors import StorageUnavailable

logger = logging.getLogger(__name__)


def annotate(original_image, regions, roi_offset=(0, 0), answers=None, numbered=False):
    """
    Draws every detected region onto a copy of the original image. Regions are
    in ROI coordinates and are shifted by roi_offset. With numbered=True the
    question number, and the answer when given, is written above each box.
    """
    if original_image.ndim == 2 or original_image.shape[2] == 1:
        vis_image = cv2.cvtColor(original_image, cv2.COLOR_GRAY2BGR)
    else:
        vis_image = original_image.copy()

    dx, dy = roi_offset
    for number, region in enumerate(regions, start=1):
        top_left = (region.x + dx, region.y + dy)
        bottom_right = (region.x + dx + region.width, region.y + dy + region.height)
        cv2.rectangle(vis_image, top_left, bottom_right, config.VIS_REGION_COLOR, config.VIS_THICKNESS_REGION)

        if numbered:
            text = str(number)
            if answers is not None and number <= len(answers) and answers[number - 1]:
                text = f"{number}:{answers[number - 1]}"
            position = (top_left[0] + config.VIS_LABEL_X_OFFSET, top_left[1] + config.VIS_LABEL_Y_OFFSET)
            cv2.putText(vis_image, text, position, config.VIS_LABEL_FONT, config.VIS_LABEL_FONT_SCALE,
                        config.VIS_TEXT_COLOR, config.VIS_LABEL_FONT_THICKNESS)

    logger.debug("Annotated %d regions.", len(regions))
    return vis_image


def save_diagnostics(stages, directory):
    """Writes each intermediate image as <stage>_image.jpg and returns the paths."""
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise StorageUnavailable(f"Could not create diagnostics directory {directory}: {e}") from e

    saved = []
    for name, image in stages.items():
        if image is None or image.size == 0:
            logger.warning("Diagnostic image '%s' is empty, not saved.", name)
            continue
        path = os.path.join(directory, f"{name}_image.jpg")
        if not cv2.imwrite(path, image):
            raise StorageUnavailable(f"Could not write diagnostic image {path}")
        logger.info("Saved diagnostic image to %s", path)
        saved.append(path)
    return saved

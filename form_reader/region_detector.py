# region_detector.py
"""
Functions to detect candidate answer regions in a preprocessed image.
"""
import logging
from typing import NamedTuple

import cv2

from .errors import NoRegionsFound

logger = logging.getLogger(__name__)


class Region(NamedTuple):
    """Axis-aligned rectangle of one answer box, in processed image coordinates."""
    x: int
    y: int
    width: int
    height: int

    @property
    def sort_key(self):
        # Top row first, left to right within a row
        return (self.y, self.x)


def find_contours(processed_image, retrieval_mode):
    """Traces the boundaries of every connected foreground shape."""
    contours, _ = cv2.findContours(processed_image, retrieval_mode, cv2.CHAIN_APPROX_SIMPLE)
    logger.info("Total contours found: %d", len(contours))
    return list(contours)


def _in_size_window(rect, config):
    _, _, w, h = rect
    return (config.min_size <= w <= config.max_size and
            config.min_size <= h <= config.max_size)


def _is_answer_box(contour, rect, config):
    """A box must approximate to a quadrilateral larger than the minimum size."""
    _, _, w, h = rect
    if not (w > config.min_box_size and h > config.min_box_size):
        return False
    perimeter = cv2.arcLength(contour, True)
    approx = cv2.approxPolyDP(contour, config.poly_epsilon * perimeter, True)
    return len(approx) == 4


def select_regions(contours, config):
    """
    Filters contours by the configured acceptance policy and returns their
    bounding rectangles ordered by (y, x).
    """
    regions = []
    for contour in contours:
        rect = cv2.boundingRect(contour)
        if config.acceptance == 'size_window':
            accepted = _in_size_window(rect, config)
        else:
            accepted = _is_answer_box(contour, rect, config)
        if accepted:
            regions.append(Region(*(int(v) for v in rect)))

    # sorted() is stable, exact ties keep the order the contours came in
    regions = sorted(regions, key=lambda r: r.sort_key)
    logger.info("Filtered to %d answer regions (%s policy).", len(regions), config.acceptance)
    return regions


def detect(processed_image, config):
    """Finds the ordered answer regions, raising NoRegionsFound if there are none."""
    contours = find_contours(processed_image, config.retrieval_mode)
    if not contours:
        raise NoRegionsFound("No contours found in the processed image")

    regions = select_regions(contours, config)
    if not regions:
        raise NoRegionsFound(
            f"None of the {len(contours)} contours passed the '{config.acceptance}' acceptance policy"
        )
    return regions

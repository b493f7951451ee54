# answer_classifier.py
"""
Functions to decide which option is marked inside each answer region.
"""
import logging
from enum import Enum

import numpy as np

logger = logging.getLogger(__name__)


class AnswerLabel(str, Enum):
    A = 'A'
    B = 'B'
    C = 'C'
    D = 'D'
    E = 'E'
    BLANK = ''

    def __str__(self):
        return self.value

    @property
    def is_blank(self):
        return self is AnswerLabel.BLANK


def column_width(region, option_count):
    """
    Width of one option sub-column. Integer division, the leftover pixels at the
    right edge of the region belong to no sub-column.
    """
    return region.width // option_count


def classify_by_position(region, options):
    """Reads the answer from where the box sits, ignoring pixel content."""
    width = column_width(region, len(options))
    if width == 0:
        return AnswerLabel.BLANK

    x_center = region.x + region.width // 2
    index = x_center // width
    if 0 <= index < len(options):
        return AnswerLabel(options[index])
    return AnswerLabel.BLANK


def fill_percentages(region, processed_image, option_count):
    """
    Percentage of non-zero pixels in each sub-column of the region. Parts of a
    sub-column outside the image count as background.
    """
    width = column_width(region, option_count)
    area = width * region.height
    if area == 0:
        return [0.0] * option_count

    percentages = []
    for i in range(option_count):
        x0 = region.x + i * width
        column = processed_image[max(region.y, 0):region.y + region.height,
                                 max(x0, 0):x0 + width]
        filled = int(np.count_nonzero(column))
        percentages.append(100.0 * filled / area)
    return percentages


def classify_by_fill(region, processed_image, options, threshold):
    """Picks the fullest sub-column when it is filled beyond the threshold."""
    percentages = fill_percentages(region, processed_image, len(options))
    # argmax returns the first occurrence, so ties go to the earlier option
    best = int(np.argmax(percentages))
    if percentages[best] > threshold:
        return AnswerLabel(options[best])
    return AnswerLabel.BLANK


def classify(region, processed_image, options, config):
    """Returns exactly one label for the region, BLANK when nothing is marked."""
    if config.decision == 'position':
        return classify_by_position(region, options)
    return classify_by_fill(region, processed_image, options, config.fill_threshold)


def classify_all(regions, processed_image, config):
    """Classifies every region in order. Index 0 is question 1."""
    answers = [classify(region, processed_image, config.options, config) for region in regions]
    blanks = sum(1 for a in answers if a.is_blank)
    logger.info("Extracted answers for %d questions (%d blank).", len(answers), blanks)
    return answers

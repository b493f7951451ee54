# config.py
"""
Configuration constants for the optical form reader.

Module level constants hold the defaults. A PipelineConfig bundles one complete
strategy (preprocessing, detection and classification) and the two strategies
the reader supports are available by name from PRESETS.
"""
import os
import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple

import cv2

# --- Core Paths ---
# Base directory is one level up from the package directory where this file lives
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

DATA_DIR = os.environ.get('FORM_READER_DATA_DIR', os.path.join(BASE_DIR, 'form_data'))
DIAGNOSTICS_DIR = os.path.join(DATA_DIR, 'processed_images')

ANSWER_KEY_NAME = 'answerkey.xml'
SUBMISSION_NAME = 'submission.xml'


# --- Answer Options ---
OPTIONS = ('A', 'B', 'C', 'D', 'E')


# --- Region Of Interest ---
# (x, y, width, height) of the answer block on the printed form
FORM_ROI = (0, 540, 1190, 1050)


# --- Preprocessing Parameters ---
BINARY_THRESHOLD = 125
CANNY_LOWER_THRESH = 100
CANNY_UPPER_THRESH = 200
BUBBLE_BLUR_KERNEL = 3
BOX_BLUR_KERNEL = 5


# --- Region Detection Parameters ---
# Inclusive bounds for the width and height of a bubble sized blob
REGION_MIN_SIZE = 25
REGION_MAX_SIZE = 70
# Width and height of a rectangular answer box must exceed this
BOX_MIN_SIZE = 50
# Polygon approximation tolerance as a fraction of the contour perimeter
POLY_EPSILON_FACTOR = 0.02


# --- Answer Classification Parameters ---
# Percentage of foreground pixels a sub-column needs to count as marked
FILL_PERCENT_THRESHOLD = 10.0


# --- Visualization Parameters ---
VIS_REGION_COLOR = (255, 0, 0)   # Blue
VIS_TEXT_COLOR = (0, 0, 255)     # Red
VIS_THICKNESS_REGION = 2
VIS_LABEL_FONT = cv2.FONT_HERSHEY_SIMPLEX
VIS_LABEL_FONT_SCALE = 0.5
VIS_LABEL_FONT_THICKNESS = 1
VIS_LABEL_X_OFFSET = -4
VIS_LABEL_Y_OFFSET = -4


SHAPE_SOURCES = ('threshold', 'edges')
RETRIEVAL_MODES = {
    'tree': cv2.RETR_TREE,
    'external': cv2.RETR_EXTERNAL,
}
ACCEPTANCE_POLICIES = ('size_window', 'quadrilateral')
DECISION_POLICIES = ('position', 'fill_ratio')


@dataclass(frozen=True)
class PipelineConfig:
    """One complete strategy for turning a form image into answers."""

    roi: Optional[Tuple[int, int, int, int]] = None
    equalize: bool = False
    blur_kernel: int = BUBBLE_BLUR_KERNEL
    threshold: int = BINARY_THRESHOLD
    canny_low: int = CANNY_LOWER_THRESH
    canny_high: int = CANNY_UPPER_THRESH
    shape_source: str = 'threshold'
    retrieval: str = 'tree'
    acceptance: str = 'size_window'
    min_size: int = REGION_MIN_SIZE
    max_size: int = REGION_MAX_SIZE
    min_box_size: int = BOX_MIN_SIZE
    poly_epsilon: float = POLY_EPSILON_FACTOR
    decision: str = 'position'
    fill_threshold: float = FILL_PERCENT_THRESHOLD
    options: Tuple[str, ...] = OPTIONS

    def __post_init__(self):
        if self.shape_source not in SHAPE_SOURCES:
            raise ValueError(f"Unknown shape source '{self.shape_source}', expected one of {SHAPE_SOURCES}")
        if self.retrieval not in RETRIEVAL_MODES:
            raise ValueError(f"Unknown retrieval mode '{self.retrieval}', expected one of {tuple(RETRIEVAL_MODES)}")
        if self.acceptance not in ACCEPTANCE_POLICIES:
            raise ValueError(f"Unknown acceptance policy '{self.acceptance}', expected one of {ACCEPTANCE_POLICIES}")
        if self.decision not in DECISION_POLICIES:
            raise ValueError(f"Unknown decision policy '{self.decision}', expected one of {DECISION_POLICIES}")
        if self.blur_kernel <= 0 or self.blur_kernel % 2 == 0:
            raise ValueError(f"Blur kernel must be a positive odd number, got {self.blur_kernel}")
        if self.min_size > self.max_size:
            raise ValueError(f"Size window is empty: {self.min_size} > {self.max_size}")
        if not self.options:
            raise ValueError("At least one answer option is required")
        unknown = [o for o in self.options if o not in OPTIONS]
        if unknown:
            raise ValueError(f"Unknown answer options {unknown}, expected a subset of {OPTIONS}")
        if self.roi is not None and (len(self.roi) != 4 or self.roi[2] <= 0 or self.roi[3] <= 0):
            raise ValueError(f"ROI must be (x, y, width, height) with a positive size, got {self.roi}")

    @property
    def retrieval_mode(self):
        return RETRIEVAL_MODES[self.retrieval]

    def with_overrides(self, **changes):
        """Returns a copy of this config with the given fields replaced."""
        return dataclasses.replace(self, **changes)


PRESETS = {
    # One blob per bubble on the thresholded image, answer read from box position
    'bubble': PipelineConfig(
        roi=FORM_ROI,
        equalize=False,
        blur_kernel=BUBBLE_BLUR_KERNEL,
        shape_source='threshold',
        retrieval='tree',
        acceptance='size_window',
        decision='position',
    ),
    # One rectangle per question on the edge map, answer read from fill ratio
    'box': PipelineConfig(
        roi=None,
        equalize=True,
        blur_kernel=BOX_BLUR_KERNEL,
        shape_source='edges',
        retrieval='external',
        acceptance='quadrilateral',
        decision='fill_ratio',
    ),
}

DEFAULT_PRESET = 'box'


def get_preset(name=None):
    """Looks up a named pipeline strategy, the default one when name is None."""
    name = name or DEFAULT_PRESET
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown preset '{name}', expected one of {sorted(PRESETS)}") from None

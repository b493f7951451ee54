"""Synthetic answer sheets drawn with OpenCV primitives."""
import cv2
import numpy as np
import pytest

BOX_WIDTH = 500
BOX_HEIGHT = 100
BOX_BORDER = 3
BOX_GAP = 40
BOX_LEFT = 30
BOX_TOP = 30
OPTION_COUNT = 5


def _hatch(image, x0, y0, x1, y1):
    # Horizontal pen strokes, each one yields two edges after Canny
    for y in range(y0, y1, 7):
        cv2.line(image, (x0, y), (x1, y), (0, 0, 0), 3)


def draw_box_sheet(marks):
    """
    White sheet with one bordered answer box per question, stacked top to bottom.
    marks[i] is the option index hatched inside box i, or None for a blank box.
    """
    height = BOX_TOP * 2 + len(marks) * (BOX_HEIGHT + BOX_GAP)
    width = BOX_LEFT * 2 + BOX_WIDTH
    image = np.full((height, width, 3), 255, dtype=np.uint8)

    column = BOX_WIDTH // OPTION_COUNT
    for i, mark in enumerate(marks):
        top = BOX_TOP + i * (BOX_HEIGHT + BOX_GAP)
        cv2.rectangle(image, (BOX_LEFT, top), (BOX_LEFT + BOX_WIDTH, top + BOX_HEIGHT), (0, 0, 0), BOX_BORDER)
        if mark is not None:
            x0 = BOX_LEFT + mark * column + 10
            _hatch(image, x0, top + 15, x0 + column - 20, top + BOX_HEIGHT - 15)
    return image


def draw_bubble_sheet(squares, shape=(200, 400)):
    """White sheet with a dark 40x40 square at each (x, y) top-left corner."""
    image = np.full((shape[0], shape[1], 3), 255, dtype=np.uint8)
    for x, y in squares:
        cv2.rectangle(image, (x, y), (x + 39, y + 39), (0, 0, 0), -1)
    return image


@pytest.fixture
def box_sheet():
    return draw_box_sheet


@pytest.fixture
def bubble_sheet():
    return draw_bubble_sheet


def rect_contour(x, y, w, h):
    """Four-point contour whose bounding rectangle is exactly (x, y, w, h)."""
    return np.array([[[x, y]], [[x + w - 1, y]], [[x + w - 1, y + h - 1]], [[x, y + h - 1]]], dtype=np.int32)


@pytest.fixture
def make_contour():
    return rect_contour

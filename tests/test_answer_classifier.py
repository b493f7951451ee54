import numpy as np
import pytest

from form_reader import answer_classifier
from form_reader.answer_classifier import AnswerLabel
from form_reader.config import OPTIONS, PipelineConfig
from form_reader.region_detector import Region

FILL = PipelineConfig(decision='fill_ratio')
POSITION = PipelineConfig(decision='position')

# 100 px wide, 60 px tall: five 20 px sub-columns of 1200 pixels each
REGION = Region(0, 0, 100, 60)


def _image(shape=(60, 100)):
    return np.zeros(shape, dtype=np.uint8)


def _fill(image, column, rows, region=REGION, width=20):
    x0 = region.x + column * width
    image[region.y:region.y + rows, x0:x0 + width] = 255
    return image


def test_labels():
    assert [label.value for label in AnswerLabel] == ['A', 'B', 'C', 'D', 'E', '']
    assert AnswerLabel.BLANK.is_blank
    assert not AnswerLabel.C.is_blank
    assert AnswerLabel.A == 'A'
    assert str(AnswerLabel.E) == 'E'
    assert not AnswerLabel.BLANK


def test_column_width_uses_integer_division():
    assert answer_classifier.column_width(Region(0, 0, 103, 10), 5) == 20
    assert answer_classifier.column_width(Region(0, 0, 4, 10), 5) == 0


@pytest.mark.parametrize('region, expected', [
    (Region(0, 0, 50, 30), AnswerLabel.C),     # center 25, column width 10
    (Region(0, 0, 40, 40), AnswerLabel.C),     # center 20, column width 8
    (Region(5, 0, 40, 40), AnswerLabel.D),     # center 25
    (Region(-10, 0, 40, 40), AnswerLabel.B),   # center 10
    (Region(100, 0, 50, 30), AnswerLabel.BLANK),
    (Region(0, 0, 4, 30), AnswerLabel.BLANK),  # narrower than the option count
])
def test_position_policy(region, expected):
    assert answer_classifier.classify_by_position(region, OPTIONS) == expected


def test_position_policy_ignores_pixels():
    region = Region(0, 0, 50, 30)
    empty = answer_classifier.classify(region, _image(), OPTIONS, POSITION)
    full = answer_classifier.classify(region, np.full((60, 100), 255, np.uint8), OPTIONS, POSITION)
    assert empty == full == AnswerLabel.C


def test_fill_percentages():
    image = _fill(_image(), 3, 30)
    assert answer_classifier.fill_percentages(REGION, image, 5) == [0.0, 0.0, 0.0, 50.0, 0.0]


def test_fill_ratio_selects_fullest_column():
    image = _fill(_image(), 1, 20)
    image = _fill(image, 3, 45)
    assert answer_classifier.classify(REGION, image, OPTIONS, FILL) == AnswerLabel.D


def test_fill_ratio_blank_below_threshold():
    image = _fill(_image(), 2, 3)  # 5 percent
    assert answer_classifier.classify(REGION, image, OPTIONS, FILL) == AnswerLabel.BLANK


def test_fill_ratio_threshold_is_strict():
    exactly = _fill(_image(), 2, 6)  # 120 of 1200 pixels
    above = _fill(_image(), 2, 7)
    assert answer_classifier.classify(REGION, exactly, OPTIONS, FILL) == AnswerLabel.BLANK
    assert answer_classifier.classify(REGION, above, OPTIONS, FILL) == AnswerLabel.C


def test_fill_ratio_threshold_is_configurable():
    image = _fill(_image(), 2, 12)  # 20 percent
    assert answer_classifier.classify(REGION, image, OPTIONS, FILL) == AnswerLabel.C
    assert answer_classifier.classify(REGION, image, OPTIONS, FILL.with_overrides(fill_threshold=30.0)) == \
        AnswerLabel.BLANK


def test_fill_ratio_ties_go_to_earlier_option():
    image = _fill(_image(), 1, 24)  # 40 percent
    image = _fill(image, 4, 24)
    assert answer_classifier.classify(REGION, image, OPTIONS, FILL) == AnswerLabel.B


@pytest.mark.parametrize('column', range(5))
def test_raising_one_column_above_the_rest_selects_it(column):
    image = _image()
    for c in range(5):
        _fill(image, c, 9)  # 15 percent everywhere, first column wins the tie
    assert answer_classifier.classify(REGION, image, OPTIONS, FILL) == AnswerLabel.A

    _fill(image, column, 10)
    assert answer_classifier.classify(REGION, image, OPTIONS, FILL) == AnswerLabel(OPTIONS[column])


def test_remainder_pixels_are_ignored():
    region = Region(0, 0, 103, 60)
    image = _image((60, 103))
    image[:, 100:] = 255
    assert answer_classifier.classify(region, image, OPTIONS, FILL) == AnswerLabel.BLANK


def test_fill_ratio_in_offset_region():
    region = Region(40, 30, 100, 60)
    image = _image((120, 200))
    _fill(image, 0, 60, region=region)
    image[:30, :] = 255  # outside the region
    assert answer_classifier.classify(region, image, OPTIONS, FILL) == AnswerLabel.A


def test_region_past_image_edge_counts_missing_pixels_as_background():
    region = Region(50, 0, 100, 60)
    image = np.full((60, 100), 255, dtype=np.uint8)
    # Columns A and B lie inside the image, C is cut off, D and E are outside
    assert answer_classifier.fill_percentages(region, image, 5) == [100.0, 100.0, 50.0, 0.0, 0.0]
    assert answer_classifier.classify(region, image, OPTIONS, FILL) == AnswerLabel.A


def test_fewer_options():
    region = Region(0, 0, 80, 60)
    image = _fill(_image((60, 80)), 3, 60)
    assert answer_classifier.classify(region, image, ('A', 'B', 'C', 'D'), FILL) == AnswerLabel.D


def test_classify_all_keeps_region_order():
    image = _image((200, 100))
    regions = [Region(0, 0, 100, 60), Region(0, 70, 100, 60), Region(0, 140, 100, 60)]
    _fill(image, 4, 60, region=regions[0])
    _fill(image, 0, 60, region=regions[2])

    answers = answer_classifier.classify_all(regions, image, FILL)
    assert answers == [AnswerLabel.E, AnswerLabel.BLANK, AnswerLabel.A]

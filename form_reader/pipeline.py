# pipeline.py
"""
The image-to-answers pipeline: crop, preprocess, detect, classify, annotate.
"""
import logging
from typing import NamedTuple

from . import config as settings
from . import annotator, answer_classifier, image_processing, region_detector

logger = logging.getLogger(__name__)


class PipelineResult(NamedTuple):
    answers: list
    annotated: object
    regions: list
    stages: dict


def run_pipeline(image, config=None, numbered=False):
    """
    Reads the answers from one form image.

    Raises InvalidImage for an image without area and NoRegionsFound when no
    answer region is detected. Returns the answers, the annotated copy of the
    image, the ordered regions and the intermediate preprocessing images.
    """
    config = config or settings.get_preset()
    image_processing.validate_image(image)

    cropped, offset = image_processing.crop_roi(image, config.roi)
    stages = image_processing.preprocess_stages(cropped, config)
    processed = stages[config.shape_source]

    regions = region_detector.detect(processed, config)
    answers = answer_classifier.classify_all(regions, processed, config)

    annotated = annotator.annotate(image, regions, roi_offset=offset, answers=answers, numbered=numbered)
    return PipelineResult(answers, annotated, regions, stages)


def capture(image, name, store, config=None, numbered=False):
    """Runs the pipeline and saves the answers under name. A failed run saves nothing."""
    result = run_pipeline(image, config, numbered=numbered)
    store.write(name, result.answers)
    logger.info("Captured %d answers as '%s'.", len(result.answers), name)
    return result

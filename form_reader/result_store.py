# result_store.py
"""
Reading and writing answer lists as XML files.

    <Answers>
      <Question number="1">A</Question>
      <Question number="2" />
    </Answers>

An empty Question element is an unanswered question.
"""
import os
import logging
import tempfile
import xml.etree.ElementTree as ET

from .answer_classifier import AnswerLabel
from .errors import StorageUnavailable

logger = logging.getLogger(__name__)

ROOT_TAG = 'Answers'
QUESTION_TAG = 'Question'
NUMBER_ATTRIBUTE = 'number'

# Blank markers written by older versions of the reader
LEGACY_BLANK_MARKERS = ('Boş', 'BLANK', 'EMPTY')


def parse_label(text):
    text = (text or '').strip()
    if text in LEGACY_BLANK_MARKERS:
        return AnswerLabel.BLANK
    return AnswerLabel(text)


def build_document(answers):
    root = ET.Element(ROOT_TAG)
    for number, answer in enumerate(answers, start=1):
        question = ET.SubElement(root, QUESTION_TAG, {NUMBER_ATTRIBUTE: str(number)})
        question.text = AnswerLabel(answer).value or None
    tree = ET.ElementTree(root)
    ET.indent(tree, space='  ')
    return tree


class ResultStore:
    """Named answer lists kept as XML files in one directory."""

    def __init__(self, directory):
        self.directory = directory

    def path_for(self, name):
        return os.path.join(self.directory, name)

    def write(self, name, answers):
        """Saves the answers under name, replacing any earlier file."""
        path = self.path_for(name)
        tree = build_document(answers)
        tmp_path = None
        try:
            os.makedirs(self.directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.' + name, suffix='.tmp', dir=self.directory)
            with os.fdopen(fd, 'wb') as f:
                tree.write(f, encoding='utf-8', xml_declaration=True)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageUnavailable(f"Could not write answers to {path}: {e}") from e
        logger.info("Saved %d answers to %s", len(answers), path)

    def read(self, name):
        """Loads the answers saved under name. A missing file is an empty list."""
        path = self.path_for(name)
        if not os.path.exists(path):
            logger.info("No saved answers at %s", path)
            return []

        try:
            root = ET.parse(path).getroot()
        except (OSError, ET.ParseError) as e:
            raise StorageUnavailable(f"Could not read answers from {path}: {e}") from e
        if root.tag != ROOT_TAG:
            raise StorageUnavailable(f"Unexpected root element <{root.tag}> in {path}")

        try:
            answers = [parse_label(q.text) for q in root.iter(QUESTION_TAG)]
        except ValueError as e:
            raise StorageUnavailable(f"Unknown answer label in {path}: {e}") from e
        logger.info("Loaded %d answers from %s", len(answers), path)
        return answers

# scorer.py
"""
Functions for scoring a submitted answer list against an answer key.
"""
import logging
from typing import NamedTuple

import pandas as pd

logger = logging.getLogger(__name__)

CORRECT = 'correct'
INCORRECT = 'incorrect'
BLANK = 'blank'


class ScoreTally(NamedTuple):
    correct: int = 0
    incorrect: int = 0
    blank: int = 0

    @property
    def total(self):
        return self.correct + self.incorrect + self.blank

    @property
    def percentage(self):
        return (100.0 * self.correct / self.total) if self.total else 0.0


def question_status(key, submitted, index):
    """Status of question index (0-based) of the key."""
    if index >= len(submitted) or not submitted[index]:
        return BLANK
    if submitted[index] == key[index]:
        return CORRECT
    return INCORRECT


def compare(key, submitted):
    """
    Tallies the submission against the key. Only the key's questions are
    counted, missing submitted answers are blank.
    """
    counts = {CORRECT: 0, INCORRECT: 0, BLANK: 0}
    for i in range(len(key)):
        counts[question_status(key, submitted, i)] += 1

    tally = ScoreTally(counts[CORRECT], counts[INCORRECT], counts[BLANK])
    logger.info("Grading complete. Correct: %d, Incorrect: %d, Blank: %d (%.2f%%)",
                tally.correct, tally.incorrect, tally.blank, tally.percentage)
    return tally


def grade_report(key, submitted):
    """Per-question breakdown of the comparison as a DataFrame."""
    rows = []
    for i in range(len(key)):
        rows.append({
            'question': i + 1,
            'key': str(key[i]),
            'submitted': str(submitted[i] or '') if i < len(submitted) else '',
            'status': question_status(key, submitted, i),
        })
    return pd.DataFrame(rows, columns=['question', 'key', 'submitted', 'status'])

"""
SUS Score Calculator.

Converts one respondent's ten answers into a 0-100 usability score.
"""

import logging
from typing import Any, Optional, Sequence

from sus_survey.models.question import SUS_QUESTIONS, SCALE_MIN, SCALE_MAX, SurveyQuestion
from sus_survey.models.submission import RawSubmission
import config.settings as settings

logger = logging.getLogger(__name__)

SCORE_MULTIPLIER = 2.5


def parse_answer(value: Any) -> Optional[int]:
    """
    Parse a raw answer into an integer.

    Accepts ints and integer strings ("4", " 4 "). Floats are accepted only
    when integral. Booleans, blanks and anything else parse to None.
    Range is not checked here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def is_valid_answer(value: Any) -> bool:
    """True if value is an integer answer on the 1-5 scale."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and SCALE_MIN <= value <= SCALE_MAX
    )


class ScoreCalculator:
    """
    Computes SUS scores.

    Each answer is normalized to a 0-4 contribution where higher is better:
    value - 1 for positive items, 5 - value for negative items. The ten
    contributions are summed and multiplied by 2.5.
    """

    def __init__(self, questions: Sequence[SurveyQuestion] = SUS_QUESTIONS):
        """
        Initialize calculator.

        Args:
            questions: Fixed question list providing the polarity of each item
        """
        self.questions = tuple(questions)

    def compute(self, answers: Sequence[Any]) -> Optional[float]:
        """
        Compute the SUS score for one respondent.

        Args:
            answers: One raw answer per question, in question order

        Returns:
            Score in [0, 100] at one-decimal precision, or None when any
            question is unanswered or out of range (incomplete)
        """
        total_points = 0
        completed = 0

        for question in self.questions:
            value = parse_answer(answers[question.index]) if question.index < len(answers) else None
            if not is_valid_answer(value):
                continue

            completed += 1
            if question.is_positive:
                total_points += value - SCALE_MIN
            else:
                total_points += SCALE_MAX - value

        if completed != len(self.questions):
            logger.debug(f"Incomplete answer set: {completed}/{len(self.questions)} answered")
            return None

        return round(total_points * SCORE_MULTIPLIER, settings.SCORE_PRECISION)

    def compute_submission(self, raw: RawSubmission) -> Optional[float]:
        """Compute the score for a parsed form submission."""
        return self.compute(raw.answers)


_default_calculator = ScoreCalculator()


def compute_score(answers: Sequence[Any]) -> Optional[float]:
    """Score answers against the standard SUS questions. None means incomplete."""
    return _default_calculator.compute(answers)

"""
Survey Service.

Coordinates scoring, interpretation, storage and aggregation for the
presentation layer.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

import pandas as pd

from sus_survey.aggregation.statistics import StatisticsAggregator
from sus_survey.errors import StorageUnavailable, ValidationError
from sus_survey.forms import ANSWERS_INCOMPLETE, parse_form, parse_nickname
from sus_survey.models.question import SUS_QUESTIONS
from sus_survey.models.statistics import AggregateStatistics
from sus_survey.models.submission import Interpretation, ScoredSubmission
from sus_survey.scoring.calculator import ScoreCalculator
from sus_survey.scoring.interpreter import interpret
from sus_survey.utils.export import export_results, results_table
from sus_survey.utils.storage import ResponseRepository
import config.settings as settings

logger = logging.getLogger(__name__)

STORAGE_WARNING = "Your score was calculated but could not be saved."


@dataclass(frozen=True)
class SubmissionOutcome:
    """
    Result of one submit attempt, ready for rendering.

    On a validation error only nickname and error are set. A storage
    failure still carries the score and interpretation.
    """
    nickname: Optional[str]
    score: Optional[float] = None
    interpretation: Optional[Interpretation] = None
    error: Optional[str] = None
    storage_warning: Optional[str] = None
    submission: Optional[ScoredSubmission] = None

    @property
    def saved(self) -> bool:
        return self.submission is not None and self.storage_warning is None


class SurveyService:
    """
    Entry point for the presentation layer.

    Flow for a submission:
    1. Parse form → 2. Score → 3. Interpret → 4. Append to repository

    Statistics are recomputed from repository.list_all() on every call.
    """

    def __init__(
        self,
        repository: ResponseRepository,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize survey service.

        Args:
            repository: Response store, created once at startup
            clock: Source of submission timestamps
        """
        self.repository = repository
        self.clock = clock
        self.questions = SUS_QUESTIONS
        self.calculator = ScoreCalculator(self.questions)
        self.aggregator = StatisticsAggregator(self.questions)

    def start(self, nickname: Optional[str]) -> str:
        """
        Validate the nickname entered before the questionnaire is shown.

        Raises:
            ValidationError: If the nickname is missing or blank
        """
        return parse_nickname(nickname)

    def submit(self, form: Mapping[str, Any]) -> SubmissionOutcome:
        """
        Score and store one submitted form.

        Args:
            form: Raw form payload (nickname, q0..q9)

        Returns:
            SubmissionOutcome describing what to show the respondent
        """
        try:
            raw = parse_form(form, self.questions)
        except ValidationError as e:
            logger.info(f"Rejected submission: {e}")
            return SubmissionOutcome(nickname=None, error=str(e))

        score = self.calculator.compute_submission(raw)
        if score is None:
            logger.info(f"Incomplete submission from '{raw.nickname}'")
            return SubmissionOutcome(
                nickname=raw.nickname,
                error=ANSWERS_INCOMPLETE.format(count=len(self.questions))
            )

        interpretation = interpret(score)
        submission = ScoredSubmission(
            nickname=raw.nickname,
            timestamp=self.clock().replace(microsecond=0),
            score=score,
            responses=raw.answers
        )

        try:
            self.repository.append(submission)
        except StorageUnavailable as e:
            logger.error(f"Failed to store submission from '{raw.nickname}': {e}")
            return SubmissionOutcome(
                nickname=raw.nickname,
                score=score,
                interpretation=interpretation,
                storage_warning=STORAGE_WARNING,
                submission=submission
            )

        logger.info(
            f"Submission from '{raw.nickname}': score {score} "
            f"({interpretation.rating}/{interpretation.grade})"
        )
        return SubmissionOutcome(
            nickname=raw.nickname,
            score=score,
            interpretation=interpretation,
            submission=submission
        )

    def statistics(self) -> AggregateStatistics:
        """
        Aggregate all stored submissions.

        Raises:
            StorageUnavailable: If the repository cannot be read
        """
        submissions = self.repository.list_all()
        return self.aggregator.aggregate(submissions)

    def results(self) -> pd.DataFrame:
        """All stored submissions as a results table."""
        return results_table(self.repository.list_all())

    def export(self, output_dir: str = str(settings.EXPORT_ROOT)) -> str:
        """Export all stored submissions to CSV and return the file path."""
        return export_results(self.repository.list_all(), output_dir=output_dir)

"""
Statistics Aggregator.

Recomputes per-question descriptive statistics, the question x answer
heatmap and the chronological score trend from all stored submissions.
"""

import logging
import math
from collections import Counter
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence

from sus_survey.models.question import SUS_QUESTIONS, SCALE_MIN, SCALE_MAX, SurveyQuestion
from sus_survey.models.statistics import (
    AggregateStatistics,
    ModeSummary,
    QuestionStatistics,
    TrendPoint,
)
from sus_survey.models.submission import ScoredSubmission
from sus_survey.scoring.calculator import is_valid_answer
import config.settings as settings

logger = logging.getLogger(__name__)

ANSWER_VALUES = list(range(SCALE_MIN, SCALE_MAX + 1))


class StatisticsAggregator:
    """
    Aggregates a complete submission set into dashboard statistics.

    Stateless: every call starts from scratch. Responses that are not
    integers in [1, 5] are skipped per question so one damaged record
    never aborts aggregation of the rest.
    """

    def __init__(self, questions: Sequence[SurveyQuestion] = SUS_QUESTIONS):
        """
        Initialize aggregator.

        Args:
            questions: Fixed question list (defines rows and labels)
        """
        self.questions = tuple(questions)

    def aggregate(self, submissions: Sequence[ScoredSubmission]) -> AggregateStatistics:
        """
        Compute statistics for all submissions.

        Args:
            submissions: Submissions in submission order

        Returns:
            AggregateStatistics (all-null/zero structure for an empty input)
        """
        question_stats = [
            self._question_statistics(question, submissions)
            for question in self.questions
        ]

        heatmap = [list(q.frequency) for q in question_stats]
        trend = self._score_trend(submissions)

        logger.info(
            f"Aggregated {len(submissions)} submissions "
            f"({len(trend)} trend points)"
        )

        return AggregateStatistics(
            questions=question_stats,
            heatmap=heatmap,
            score_trend=trend,
            total_submissions=len(submissions)
        )

    def _question_statistics(
        self,
        question: SurveyQuestion,
        submissions: Sequence[ScoredSubmission]
    ) -> QuestionStatistics:
        """Compute mean, population std dev, frequency and mode for one question."""
        values = self._collect_values(question.index, submissions)
        n = len(values)

        if n == 0:
            return QuestionStatistics(
                index=question.index,
                label=question.label,
                mean=None,
                std_dev=None,
                frequency=[0] * len(ANSWER_VALUES),
                mode=ModeSummary(value=None, count=0, percent=0),
                values=[]
            )

        mean = sum(values) / n
        variance = sum((v - mean) ** 2 for v in values) / n

        counts = Counter(values)
        frequency = [counts.get(v, 0) for v in ANSWER_VALUES]

        return QuestionStatistics(
            index=question.index,
            label=question.label,
            mean=round_half_up(mean, settings.STATISTIC_PRECISION),
            std_dev=round_half_up(math.sqrt(variance), settings.STATISTIC_PRECISION),
            frequency=frequency,
            mode=self._mode(frequency, n),
            values=values
        )

    @staticmethod
    def _collect_values(index: int, submissions: Sequence[ScoredSubmission]) -> List[int]:
        """Collect valid answers to one question, dropping anything malformed."""
        values = []
        skipped = 0
        for submission in submissions:
            responses = submission.responses or ()
            value = responses[index] if index < len(responses) else None
            if is_valid_answer(value):
                values.append(value)
            else:
                skipped += 1

        if skipped:
            logger.debug(f"Question {index + 1}: skipped {skipped} invalid responses")
        return values

    @staticmethod
    def _mode(frequency: List[int], n: int) -> ModeSummary:
        """Most frequent answer; ties go to the lowest value."""
        max_count = max(frequency)
        value = ANSWER_VALUES[frequency.index(max_count)]
        return ModeSummary(
            value=value,
            count=max_count,
            percent=round_half_up(100 * max_count / n, settings.PERCENT_PRECISION)
        )

    @staticmethod
    def _score_trend(submissions: Sequence[ScoredSubmission]) -> List[TrendPoint]:
        """
        One (date, score) point per submission, oldest first.

        Equal timestamps keep their submission order and equal dates are
        never merged. Records without a timestamp or score are left out.
        """
        dated = []
        for submission in submissions:
            if submission.timestamp is None or not _is_number(submission.score):
                logger.warning(
                    f"Skipping trend point for '{submission.nickname}': "
                    f"missing timestamp or score"
                )
                continue
            dated.append(submission)

        dated.sort(key=lambda s: s.timestamp)

        return [
            TrendPoint(
                date=s.timestamp.strftime(settings.TREND_DATE_FORMAT),
                score=s.score
            )
            for s in dated
        ]


def _is_number(value: Optional[float]) -> bool:
    if value is None or isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and not math.isnan(value)


_default_aggregator = StatisticsAggregator()


def aggregate(submissions: Sequence[ScoredSubmission]) -> AggregateStatistics:
    """Aggregate submissions against the standard SUS questions."""
    return _default_aggregator.aggregate(submissions)


def round_half_up(value: float, places: int) -> float:
    """Round to a fixed number of decimals with exact ties going up (2.125 -> 2.13)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))

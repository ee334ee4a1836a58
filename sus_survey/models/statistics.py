"""
Aggregate statistics data model.

Output of the statistics aggregator, consumed by the dashboard view.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ModeSummary:
    """Most frequently selected answer for one question."""
    value: Optional[int]
    count: int
    percent: float


@dataclass(frozen=True)
class QuestionStatistics:
    """Descriptive statistics for a single question."""
    index: int
    label: str
    mean: Optional[float]
    std_dev: Optional[float]  # Population standard deviation
    frequency: List[int]  # frequency[v - 1] = count of answer v
    mode: ModeSummary
    values: List[int] = field(default_factory=list)  # Valid answers, submission order

    @property
    def count(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class TrendPoint:
    """One submission's score on the chronological trend line."""
    date: str
    score: float


@dataclass(frozen=True)
class AggregateStatistics:
    """
    Full dashboard statistics.
    Recomputed from the complete submission set on every read.
    """
    questions: List[QuestionStatistics]
    heatmap: List[List[int]]  # questions x answer values
    score_trend: List[TrendPoint]
    total_submissions: int = 0

    @property
    def labels(self) -> List[str]:
        return [q.label for q in self.questions]

    def to_dict(self) -> dict:
        """Convert to the JSON-serializable structure the dashboard renders."""
        return {
            "labels": self.labels,
            "averages": [q.mean for q in self.questions],
            "std_devs": [q.std_dev for q in self.questions],
            "distributions": [list(q.values) for q in self.questions],
            "frequencies": [list(q.frequency) for q in self.questions],
            "most_frequent": [
                {
                    "value": q.mode.value,
                    "count": q.mode.count,
                    "percent": q.mode.percent
                }
                for q in self.questions
            ],
            "heatmap": [list(row) for row in self.heatmap],
            "score_trend": {
                "dates": [p.date for p in self.score_trend],
                "scores": [p.score for p in self.score_trend]
            },
            "total_submissions": self.total_submissions
        }

"""
Submission data models.

RawSubmission is the typed form payload handed to the score calculator.
ScoredSubmission is what the response store persists.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class RawSubmission:
    """
    A respondent's answers before scoring.
    Never persisted directly.
    """
    nickname: str
    answers: Tuple[Optional[int], ...]  # One slot per question, None when unanswered


@dataclass(frozen=True)
class ScoredSubmission:
    """
    A completed, scored submission.

    Submissions built by the survey service always carry ten responses in
    [1, 5] and a score reproducible from them. Records read back from
    storage may be damaged: unreadable slots hold None.
    """
    nickname: str
    timestamp: Optional[datetime]
    score: Optional[float]
    responses: Tuple[Optional[int], ...]

    def to_dict(self) -> dict:
        """Convert to a flat dict in export column order."""
        data = {
            "nickname": self.nickname,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "score": self.score,
        }
        for i, value in enumerate(self.responses):
            data[f"Q{i + 1}"] = value
        return data


@dataclass(frozen=True)
class Interpretation:
    """Qualitative reading of a SUS score. Derived, never stored."""
    rating: str
    grade: str  # A-F


def export_columns(num_questions: int) -> List[str]:
    """Column order shared by every tabular export."""
    return ["nickname", "timestamp", "score"] + [f"Q{i + 1}" for i in range(num_questions)]

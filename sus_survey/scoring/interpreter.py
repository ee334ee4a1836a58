"""
SUS score interpretation.

Maps a completed score to a rating label and letter grade.
"""

from typing import List, Tuple

from sus_survey.models.submission import Interpretation

# Inclusive lower bounds, evaluated highest first
SCORE_BANDS: List[Tuple[float, str, str]] = [
    (80.3, "Excellent", "A"),
    (70.0, "Good", "B"),
    (68.0, "Neutral", "C"),
    (50.0, "Below Average", "D"),
]

FALLBACK_BAND = ("Poor", "F")


def interpret(score: float) -> Interpretation:
    """
    Classify a SUS score.

    Args:
        score: Completed score in [0, 100]

    Returns:
        Interpretation with rating label and grade A-F
    """
    for lower_bound, rating, grade in SCORE_BANDS:
        if score >= lower_bound:
            return Interpretation(rating=rating, grade=grade)
    rating, grade = FALLBACK_BAND
    return Interpretation(rating=rating, grade=grade)

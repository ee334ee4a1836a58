"""
Form payload parsing.

Converts the loosely-typed, string-keyed form payload (nickname, q0..q9)
into a typed RawSubmission before it reaches the score calculator.
"""

from typing import Any, Mapping, Optional, Sequence

from sus_survey.errors import ValidationError
from sus_survey.models.question import SUS_QUESTIONS, SurveyQuestion
from sus_survey.models.submission import RawSubmission
from sus_survey.scoring.calculator import parse_answer

NICKNAME_REQUIRED = "Nickname is required to start the survey."
ANSWERS_INCOMPLETE = "Please answer all {count} questions."


def parse_nickname(value: Optional[Any]) -> str:
    """
    Validate and trim a respondent nickname.

    Raises:
        ValidationError: If the nickname is missing or blank
    """
    nickname = str(value).strip() if value is not None else ""
    if not nickname:
        raise ValidationError(NICKNAME_REQUIRED)
    return nickname


def parse_form(
    payload: Mapping[str, Any],
    questions: Sequence[SurveyQuestion] = SUS_QUESTIONS
) -> RawSubmission:
    """
    Parse a submitted form.

    Unparsable or missing answers become None; range checks are left to
    the score calculator.

    Args:
        payload: Form fields keyed "nickname" and "q0".."q9"
        questions: Question list defining the answer fields

    Returns:
        RawSubmission

    Raises:
        ValidationError: If the nickname is missing or blank
    """
    nickname = parse_nickname(payload.get("nickname"))
    answers = tuple(parse_answer(payload.get(q.form_field)) for q in questions)
    return RawSubmission(nickname=nickname, answers=answers)

"""
Survey question data model.

The ten standard System Usability Scale items.
"""

from dataclasses import dataclass
from typing import List, Tuple

POSITIVE = "positive"
NEGATIVE = "negative"

SCALE_MIN = 1
SCALE_MAX = 5


@dataclass(frozen=True)
class SurveyQuestion:
    """
    One SUS item.
    Agreement with a positive item means better usability, agreement with
    a negative item means worse usability.
    """
    index: int  # 0-9
    text: str
    polarity: str  # "positive" or "negative"

    def __post_init__(self):
        if self.polarity not in (POSITIVE, NEGATIVE):
            raise ValueError(
                f"Invalid polarity: {self.polarity}. Must be '{POSITIVE}' or '{NEGATIVE}'"
            )

    @property
    def is_positive(self) -> bool:
        return self.polarity == POSITIVE

    @property
    def label(self) -> str:
        """Short dashboard label (P1..P10)."""
        return f"P{self.index + 1}"

    @property
    def form_field(self) -> str:
        """Form payload key carrying this question's answer (q0..q9)."""
        return f"q{self.index}"


_QUESTION_TEXTS = [
    ("I think that I would like to use this system frequently.", POSITIVE),
    ("I found the system unnecessarily complex.", NEGATIVE),
    ("I thought the system was easy to use.", POSITIVE),
    ("I think that I would need the support of a technical person to be able to use this system.", NEGATIVE),
    ("I found the various functions in this system were well integrated.", POSITIVE),
    ("I thought there was too much inconsistency in this system.", NEGATIVE),
    ("I would imagine that most people would learn to use this system very quickly.", POSITIVE),
    ("I found the system very cumbersome to use.", NEGATIVE),
    ("I felt very confident using the system.", POSITIVE),
    ("I needed to learn a lot of things before I could get going with this system.", NEGATIVE),
]

SUS_QUESTIONS: Tuple[SurveyQuestion, ...] = tuple(
    SurveyQuestion(index=i, text=text, polarity=polarity)
    for i, (text, polarity) in enumerate(_QUESTION_TEXTS)
)

NUM_QUESTIONS = len(SUS_QUESTIONS)


def question_labels(questions=SUS_QUESTIONS) -> List[str]:
    """Return dashboard labels in question order."""
    return [q.label for q in questions]

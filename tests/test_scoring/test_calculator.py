"""
Unit tests for the SUS score calculator and interpreter.
"""

import itertools

import pytest
from sus_survey.models.question import SUS_QUESTIONS, SurveyQuestion
from sus_survey.models.submission import RawSubmission
from sus_survey.scoring.calculator import ScoreCalculator, compute_score, parse_answer
from sus_survey.scoring.interpreter import interpret


def best_answers():
    """5 on every positive item, 1 on every negative item."""
    return [5 if q.is_positive else 1 for q in SUS_QUESTIONS]


def worst_answers():
    return [1 if q.is_positive else 5 for q in SUS_QUESTIONS]


def test_question_catalogue():
    """Ten questions alternating positive/negative, starting positive."""
    assert len(SUS_QUESTIONS) == 10
    assert [q.index for q in SUS_QUESTIONS] == list(range(10))
    assert [q.is_positive for q in SUS_QUESTIONS] == [True, False] * 5
    assert SUS_QUESTIONS[0].label == "P1"
    assert SUS_QUESTIONS[9].form_field == "q9"


def test_invalid_polarity():
    with pytest.raises(ValueError):
        SurveyQuestion(index=0, text="Test", polarity="neutral")


def test_best_and_worst_scores():
    assert compute_score(best_answers()) == 100.0
    assert compute_score(worst_answers()) == 0.0


def test_all_neutral_answers():
    """3 everywhere contributes 2 per item: 20 * 2.5 = 50."""
    assert compute_score([3] * 10) == 50.0


def test_typical_submission():
    # Positive: 4,5,4,5,4 -> 3+4+3+4+3 = 17; negative: 2,1,2,1,2 -> 3+4+3+4+3 = 17
    answers = [4, 2, 5, 1, 4, 2, 5, 1, 4, 2]
    assert compute_score(answers) == 85.0


def test_scores_are_multiples_of_two_and_a_half():
    """Sampled answer sets always land on the 2.5 grid within [0, 100]."""
    for pattern in itertools.product([1, 3, 5], repeat=4):
        answers = list(pattern) + [2, 4, 1, 5, 3, 2]
        score = compute_score(answers)
        assert 0 <= score <= 100
        assert (score / 2.5).is_integer()


def test_string_answers_are_parsed():
    answers = ["4", "2", " 5 ", "1", "4", "2", "5", "1", "4", "2"]
    assert compute_score(answers) == 85.0


@pytest.mark.parametrize("bad_value", [None, "", "abc", 0, 6, -1, "7", 2.5, True])
def test_any_invalid_answer_is_incomplete(bad_value):
    answers = [3] * 10
    answers[4] = bad_value
    assert compute_score(answers) is None


def test_missing_answers_are_incomplete():
    assert compute_score([3] * 9) is None
    assert compute_score([]) is None


def test_compute_submission():
    calculator = ScoreCalculator()
    raw = RawSubmission(nickname="alice", answers=tuple(best_answers()))
    assert calculator.compute_submission(raw) == 100.0


def test_parse_answer():
    assert parse_answer("3") == 3
    assert parse_answer(4) == 4
    assert parse_answer(4.0) == 4
    assert parse_answer(4.5) is None
    assert parse_answer("x") is None
    assert parse_answer(False) is None
    assert parse_answer(None) is None


@pytest.mark.parametrize("score,grade,rating", [
    (100.0, "A", "Excellent"),
    (80.3, "A", "Excellent"),
    (80.2, "B", "Good"),
    (70.0, "B", "Good"),
    (69.9, "C", "Neutral"),
    (68.0, "C", "Neutral"),
    (67.9, "D", "Below Average"),
    (50.0, "D", "Below Average"),
    (49.9, "F", "Poor"),
    (0.0, "F", "Poor"),
])
def test_interpret_boundaries(score, grade, rating):
    interpretation = interpret(score)
    assert interpretation.grade == grade
    assert interpretation.rating == rating


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

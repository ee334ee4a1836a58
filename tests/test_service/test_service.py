"""
Unit tests for the Survey Service.

Uses the in-memory repository; storage failures are simulated with mocks.
"""

import os
import tempfile
from datetime import datetime
from unittest.mock import Mock

import pytest
from sus_survey.errors import StorageUnavailable, ValidationError
from sus_survey.forms import parse_form
from sus_survey.service import STORAGE_WARNING, SurveyService
from sus_survey.utils.storage import CsvResponseRepository, InMemoryResponseRepository


def make_form(nickname="alice", answers=(4, 2, 5, 1, 4, 2, 5, 1, 4, 2)):
    form = {"nickname": nickname}
    for i, value in enumerate(answers):
        form[f"q{i}"] = str(value)
    return form


@pytest.fixture
def service():
    clock = Mock(return_value=datetime(2024, 6, 1, 12, 0, 0, 123456))
    return SurveyService(InMemoryResponseRepository(), clock=clock)


def test_parse_form():
    raw = parse_form({"nickname": "  bob  ", "q0": "3", "q1": "x"})

    assert raw.nickname == "bob"
    assert raw.answers[0] == 3
    assert raw.answers[1] is None
    assert len(raw.answers) == 10


def test_start_requires_nickname(service):
    assert service.start(" alice ") == "alice"
    with pytest.raises(ValidationError):
        service.start("   ")
    with pytest.raises(ValidationError):
        service.start(None)


def test_successful_submission(service):
    outcome = service.submit(make_form())

    assert outcome.error is None
    assert outcome.score == 85.0
    assert outcome.interpretation.grade == "A"
    assert outcome.saved

    stored = service.repository.list_all()
    assert len(stored) == 1
    assert stored[0].nickname == "alice"
    assert stored[0].responses == (4, 2, 5, 1, 4, 2, 5, 1, 4, 2)
    assert stored[0].timestamp == datetime(2024, 6, 1, 12, 0, 0)


def test_missing_nickname(service):
    outcome = service.submit(make_form(nickname=""))

    assert outcome.error == "Nickname is required to start the survey."
    assert outcome.nickname is None
    assert outcome.score is None
    assert service.repository.list_all() == []


def test_incomplete_submission_keeps_nickname(service):
    form = make_form()
    del form["q7"]
    outcome = service.submit(form)

    assert outcome.error == "Please answer all 10 questions."
    assert outcome.nickname == "alice"
    assert outcome.score is None
    assert service.repository.list_all() == []


def test_out_of_range_answer_is_incomplete(service):
    outcome = service.submit(make_form(answers=(4, 2, 5, 1, 9, 2, 5, 1, 4, 2)))

    assert outcome.error is not None
    assert outcome.nickname == "alice"


def test_storage_failure_still_reports_score():
    repository = Mock()
    repository.append.side_effect = StorageUnavailable("disk full")
    service = SurveyService(repository)

    outcome = service.submit(make_form())

    assert outcome.score == 85.0
    assert outcome.interpretation.rating == "Excellent"
    assert outcome.storage_warning == STORAGE_WARNING
    assert outcome.error is None
    assert not outcome.saved


def test_statistics_read_failure_propagates():
    repository = Mock()
    repository.list_all.side_effect = StorageUnavailable("unreachable")
    service = SurveyService(repository)

    with pytest.raises(StorageUnavailable):
        service.statistics()


def test_statistics_after_submissions(service):
    service.submit(make_form("alice", answers=(5, 1) * 5))
    service.submit(make_form("bob", answers=(1, 5) * 5))

    stats = service.statistics()

    assert stats.total_submissions == 2
    assert [p.score for p in stats.score_trend] == [100.0, 0.0]
    assert stats.questions[0].frequency == [1, 0, 0, 0, 1]
    assert stats.questions[0].mode.value == 1


def test_stored_score_is_reproducible(service):
    """Every stored score can be recomputed from its responses."""
    service.submit(make_form("alice"))
    service.submit(make_form("carol", answers=(3, 3, 4, 2, 3, 3, 4, 2, 3, 3)))

    for record in service.repository.list_all():
        assert service.calculator.compute(record.responses) == record.score


def test_end_to_end_with_csv_repository():
    with tempfile.TemporaryDirectory() as tmpdir:
        repository = CsvResponseRepository(os.path.join(tmpdir, "results.csv"))
        service = SurveyService(repository)

        service.submit(make_form("alice"))
        service.submit(make_form("bob", answers=(3,) * 10))

        df = service.results()
        assert list(df["nickname"]) == ["alice", "bob"]

        stats = service.statistics()
        assert stats.total_submissions == 2
        assert len(stats.score_trend) == 2

        output_path = service.export(output_dir=tmpdir)
        assert os.path.exists(output_path)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Error types for the SUS survey.
"""


class SurveyError(Exception):
    """Base class for all survey errors."""


class ValidationError(SurveyError, ValueError):
    """
    A submission the respondent can correct (missing nickname, unanswered
    questions). Shown back to the user, never treated as a system fault.
    """


class MalformedRecord(SurveyError):
    """A stored record with missing fields or a non-numeric response."""

    def __init__(self, message: str, line_number: int = None):
        super().__init__(message)
        self.line_number = line_number


class StorageUnavailable(SurveyError):
    """The response store could not be written to or read from."""

"""
Response storage.

Append-only persistence of scored submissions behind a small repository
contract, with a semicolon-delimited CSV backend and an in-memory backend.
"""

import csv
import io
import logging
import math
import os
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

import pandas as pd

from sus_survey.errors import MalformedRecord, StorageUnavailable
from sus_survey.models.question import NUM_QUESTIONS
from sus_survey.models.submission import ScoredSubmission, export_columns
from sus_survey.scoring.calculator import parse_answer
import config.settings as settings

logger = logging.getLogger(__name__)

EXTRA_FIELDS = "__extra__"


class ResponseRepository(ABC):
    """
    Contract every response store fulfils.

    Appends are atomic per record. Reads return every stored submission
    ordered by timestamp and may lag behind a concurrent append.
    """

    @abstractmethod
    def append(self, record: ScoredSubmission) -> None:
        """
        Persist one submission.

        Raises:
            StorageUnavailable: If the record could not be written
        """

    @abstractmethod
    def list_all(self) -> List[ScoredSubmission]:
        """
        Return all stored submissions, oldest first.

        Raises:
            StorageUnavailable: If the store could not be read
        """


class InMemoryResponseRepository(ResponseRepository):
    """Process-local store, used as a fake in tests and for dry runs."""

    def __init__(self, records: Optional[List[ScoredSubmission]] = None):
        self._records: List[ScoredSubmission] = list(records or [])
        self._lock = threading.Lock()

    def append(self, record: ScoredSubmission) -> None:
        with self._lock:
            self._records.append(record)

    def list_all(self) -> List[ScoredSubmission]:
        with self._lock:
            snapshot = list(self._records)
        return _sort_by_timestamp(snapshot)


class CsvResponseRepository(ResponseRepository):
    """
    Stores submissions in a single CSV file.

    Columns: nickname, timestamp, score, Q1..Q10 (delimiter from settings).
    Each record is rendered in memory and written with one write call
    under a lock, so readers never observe a partial row.
    """

    def __init__(self, results_file: str, delimiter: str = settings.CSV_DELIMITER):
        """
        Initialize CSV repository.

        Args:
            results_file: Path to the results CSV (created on first append)
            delimiter: Field delimiter
        """
        self.results_file = str(results_file)
        self.delimiter = delimiter
        self.columns = export_columns(NUM_QUESTIONS)
        self._lock = threading.Lock()

        directory = os.path.dirname(self.results_file)
        if directory:
            os.makedirs(directory, exist_ok=True)

        logger.info(f"Initialized CsvResponseRepository with results_file={self.results_file}")

    def append(self, record: ScoredSubmission) -> None:
        """Append one submission, writing the header if the file is new."""
        row = pd.DataFrame([record.to_dict()], columns=self.columns, dtype=object)

        with self._lock:
            try:
                write_header = not self._has_content()
                content = row.to_csv(
                    None,
                    sep=self.delimiter,
                    index=False,
                    header=write_header,
                    lineterminator="\n"
                )
                with open(self.results_file, "a", encoding="utf-8") as f:
                    f.write(content)
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                logger.error(f"Failed to append submission to {self.results_file}: {e}")
                raise StorageUnavailable(f"Could not write results: {e}") from e

        logger.info(f"Stored submission for '{record.nickname}' (score {record.score})")

    def list_all(self) -> List[ScoredSubmission]:
        """
        Read all submissions.

        A missing file means no submissions yet. Damaged rows are kept with
        None in the unreadable slots. Rows with too few or too many columns
        are skipped.
        """
        if not os.path.exists(self.results_file):
            logger.debug(f"No results file at {self.results_file}")
            return []

        try:
            with open(self.results_file, "r", encoding="utf-8") as f:
                data = f.read()
        except OSError as e:
            logger.error(f"Failed to read results from {self.results_file}: {e}")
            raise StorageUnavailable(f"Could not read results: {e}") from e

        if not data.strip():
            return []

        # DictReader keeps short and long rows distinguishable (missing
        # fields are None, extra fields land under EXTRA_FIELDS)
        reader = csv.DictReader(
            io.StringIO(data),
            delimiter=self.delimiter,
            restkey=EXTRA_FIELDS
        )

        rows = []
        try:
            for row in reader:
                rows.append((reader.line_num, row))
        except csv.Error as e:
            logger.error(f"Failed to parse results file {self.results_file}: {e}")
            raise StorageUnavailable(f"Could not parse results: {e}") from e

        records = []
        for line_number, row in rows:
            try:
                record, problems = self._parse_row(row, line_number)
            except MalformedRecord as e:
                logger.warning(f"{e} (line {e.line_number}), skipping row")
                continue

            if problems:
                logger.warning(
                    f"Malformed record in {self.results_file}: {', '.join(problems)} "
                    f"(line {line_number}), keeping readable fields"
                )
            records.append(record)

        logger.debug(f"Loaded {len(records)} submissions from {self.results_file}")
        return _sort_by_timestamp(records)

    def _has_content(self) -> bool:
        return os.path.exists(self.results_file) and os.path.getsize(self.results_file) > 0

    def _parse_row(self, row: dict, line_number: int) -> Tuple[ScoredSubmission, List[str]]:
        """
        Rebuild a ScoredSubmission from a CSV row.

        Unreadable fields become None and are listed in the returned
        problems.

        Raises:
            MalformedRecord: If the row has too few or too many columns
        """
        missing = [c for c in self.columns if row.get(c) is None]
        if missing:
            raise MalformedRecord(
                f"Row in {self.results_file} has too few columns "
                f"(missing {', '.join(missing)})",
                line_number=line_number
            )
        if row.get(EXTRA_FIELDS):
            raise MalformedRecord(
                f"Row in {self.results_file} has {len(row[EXTRA_FIELDS])} extra columns",
                line_number=line_number
            )

        problems = []

        nickname = str(row.get("nickname") or "").strip()
        if not nickname:
            problems.append("missing nickname")

        timestamp = _parse_timestamp(row.get("timestamp"))
        if timestamp is None:
            problems.append("unreadable timestamp")

        score = _parse_score(row.get("score"))
        if score is None:
            problems.append("unreadable score")

        responses = []
        for i in range(NUM_QUESTIONS):
            raw = row.get(f"Q{i + 1}")
            value = parse_answer(raw)
            if value is None:
                problems.append(f"non-numeric Q{i + 1}={raw!r}")
            responses.append(value)

        record = ScoredSubmission(
            nickname=nickname,
            timestamp=timestamp,
            score=score,
            responses=tuple(responses)
        )
        return record, problems


def _parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp; offset-aware values become naive local time."""
    if not value:
        return None
    try:
        timestamp = datetime.fromisoformat(str(value).strip())
    except ValueError:
        return None
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone().replace(tzinfo=None)
    return timestamp


def _parse_score(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(score) else score


def _sort_by_timestamp(records: List[ScoredSubmission]) -> List[ScoredSubmission]:
    """Stable sort, oldest first; records without a timestamp go last."""
    return sorted(
        records,
        key=lambda r: (r.timestamp is None, r.timestamp or datetime.min)
    )

"""
Tabular export of stored submissions.

Column order is fixed: nickname, timestamp, score, then Q1..Q10.
"""

import logging
import os
from datetime import datetime
from typing import List, Sequence

import pandas as pd

from sus_survey.models.question import NUM_QUESTIONS
from sus_survey.models.statistics import AggregateStatistics
from sus_survey.models.submission import ScoredSubmission, export_columns
import config.settings as settings

logger = logging.getLogger(__name__)


def results_table(submissions: Sequence[ScoredSubmission]) -> pd.DataFrame:
    """
    Build the results table shown to administrators.

    Args:
        submissions: Stored submissions, oldest first

    Returns:
        DataFrame with one row per submission in export column order
    """
    columns = export_columns(NUM_QUESTIONS)
    rows = [s.to_dict() for s in submissions]
    return pd.DataFrame(rows, columns=columns, dtype=object)


def export_results(
    submissions: Sequence[ScoredSubmission],
    output_dir: str = str(settings.EXPORT_ROOT),
    delimiter: str = settings.CSV_DELIMITER
) -> str:
    """
    Write all submissions to a timestamped CSV file.

    Args:
        submissions: Stored submissions, oldest first
        output_dir: Directory to save the export
        delimiter: Field delimiter

    Returns:
        Path to the generated CSV file
    """
    df = results_table(submissions)

    os.makedirs(output_dir, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_path = os.path.join(output_dir, f"sus_results_{stamp}.csv")
    df.to_csv(output_path, sep=delimiter, index=False)

    logger.info(f"Exported {len(df)} submissions to {output_path}")
    return output_path


def statistics_table(stats: AggregateStatistics) -> pd.DataFrame:
    """
    Per-question summary table for the dashboard.

    Columns: Question, Mean, StdDev, 1..5 answer counts, Mode, ModeCount, ModePercent.
    """
    rows: List[dict] = []
    for q in stats.questions:
        row = {
            "Question": q.label,
            "Mean": q.mean,
            "StdDev": q.std_dev
        }
        for value, count in enumerate(q.frequency, start=1):
            row[str(value)] = count
        row["Mode"] = q.mode.value
        row["ModeCount"] = q.mode.count
        row["ModePercent"] = q.mode.percent
        rows.append(row)
    return pd.DataFrame(rows)

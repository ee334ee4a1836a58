"""
Configuration settings for the SUS survey.

Centralized configuration for storage, scoring precision and logging.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("SUS_DATA_ROOT", PROJECT_ROOT / "data"))
EXPORT_ROOT = PROJECT_ROOT / "output"

# Storage
RESULTS_FILE = Path(os.getenv("SUS_RESULTS_FILE", DATA_ROOT / "sus_results.csv"))
CSV_DELIMITER = ";"
TREND_DATE_FORMAT = "%Y-%m-%d"

# Scoring and statistics precision (decimal places)
SCORE_PRECISION = 1
STATISTIC_PRECISION = 2
PERCENT_PRECISION = 1

# Logging
LOG_LEVEL = os.getenv("SUS_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "sus_survey.log"

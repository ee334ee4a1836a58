"""
SUS Survey - System Usability Scale scoring and statistics.

Scores ten-item SUS questionnaires, stores submissions and aggregates
them into dashboard statistics.
"""

__version__ = "1.0.0"

"""
Data models for the SUS survey.

- Question: the fixed SUS item catalogue
- Submission: raw and scored submissions, interpretations
- Statistics: aggregate dashboard statistics
"""

"""
Utility modules for the SUS survey.

Cross-cutting concerns:
- Storage: response repository contract and backends
- Export: tabular results and statistics tables
"""

"""
Data models for CivicPulse.

Classification records, feedback submissions, aggregation results,
narrative reports and scheduled reports.
"""

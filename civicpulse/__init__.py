"""
CivicPulse - feedback sentiment pipeline for government services.

Classifies citizen feedback, aggregates classifications per office and
date range, and assembles narrative reports.
"""

from civicpulse.analysis.pipeline import SentimentPipeline, analyze
from civicpulse.analysis.aggregation import aggregate
from civicpulse.reporting.assembler import assemble_report

__all__ = ["SentimentPipeline", "analyze", "aggregate", "assemble_report"]

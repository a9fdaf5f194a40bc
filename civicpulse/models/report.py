"""
Report data models.

The narrative report value object and the context it is generated for.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import config.settings as settings
from civicpulse.models.classification import IssueCategory, Sentiment


@dataclass(frozen=True)
class DateRange:
    start: str = settings.DEFAULT_START_LABEL
    end: str = settings.DEFAULT_END_LABEL


@dataclass(frozen=True)
class ReviewSample:
    """A feedback text quoted in the full analysis."""
    text: str
    sentiment: Sentiment
    category: Optional[IssueCategory] = None


@dataclass(frozen=True)
class ReportContext:
    """
    What a report is about: the office, the period, and sample feedback.
    """
    office_name: str = settings.DEFAULT_OFFICE_NAME
    date_range: DateRange = field(default_factory=DateRange)
    samples: List[ReviewSample] = field(default_factory=list)


@dataclass(frozen=True)
class NarrativeReport:
    """
    Human-readable report derived from an aggregation result.
    """
    summary: str
    key_insights: List[str]
    recommendations: List[str]
    trend_analysis: str
    full_analysis: str
    source: str = "deterministic"  # "deterministic" or "gemini"

    def to_dict(self) -> dict:
        """Convert to the JSON payload returned to API callers."""
        return {
            "summary": self.summary,
            "keyInsights": list(self.key_insights),
            "recommendations": list(self.recommendations),
            "trendAnalysis": self.trend_analysis,
            "fullAnalysis": self.full_analysis,
            "source": self.source
        }

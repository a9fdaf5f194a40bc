"""
Aggregation data model.

Sentiment breakdown and ranked issue list derived from many
classification records. Recomputed on demand, never stored on its own.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from civicpulse.models.classification import IssueCategory, Sentiment


ISSUE_LABELS: Dict[IssueCategory, str] = {
    IssueCategory.WAITING_TIME: "Long Waiting Times",
    IssueCategory.STAFF_BEHAVIOR: "Staff Behavior Issues",
    IssueCategory.CORRUPTION: "Corruption Concerns",
    IssueCategory.FACILITY_CONDITION: "Facility Conditions",
    IssueCategory.PROCESS_COMPLEXITY: "Complex Procedures",
}


def issue_label(category) -> str:
    """Human-readable name for an issue category."""
    if category in ISSUE_LABELS:
        return ISSUE_LABELS[IssueCategory(category)]
    raw = category.value if isinstance(category, IssueCategory) else str(category)
    return raw.replace("_", " ").title()


def percent_of(count: int, total: int) -> int:
    """
    Whole-number percentage of count in total, rounding halves up.

    Returns 0 when total is 0.
    """
    if total <= 0:
        return 0
    return int(math.floor(count / total * 100 + 0.5))


@dataclass(frozen=True)
class IssueCount:
    """One entry of the ranked top-issues list."""
    category: IssueCategory
    count: int
    percentage: int

    @property
    def label(self) -> str:
        return issue_label(self.category)

    def to_dict(self) -> dict:
        return {
            "issue": self.category.value,
            "label": self.label,
            "count": self.count,
            "percentage": self.percentage
        }


def _zero_counts() -> Dict[Sentiment, int]:
    return {sentiment: 0 for sentiment in Sentiment}


@dataclass(frozen=True)
class AggregationResult:
    """
    Sentiment counts and top issues for a collection of records.
    """
    counts: Dict[Sentiment, int] = field(default_factory=_zero_counts)
    top_issues: List[IssueCount] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def count(self, sentiment: Sentiment) -> int:
        return self.counts.get(sentiment, 0)

    def percentage(self, sentiment: Sentiment) -> int:
        return percent_of(self.count(sentiment), self.total)

    def percentages(self) -> Dict[Sentiment, int]:
        """Percentages for all three sentiments (0 when total is 0)."""
        return {sentiment: self.percentage(sentiment) for sentiment in Sentiment}

    def top_issue(self, rank: int = 0) -> Optional[IssueCount]:
        """Issue at the given rank, or None if fewer issues were found."""
        if rank < len(self.top_issues):
            return self.top_issues[rank]
        return None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "positive": self.count(Sentiment.POSITIVE),
            "neutral": self.count(Sentiment.NEUTRAL),
            "negative": self.count(Sentiment.NEGATIVE),
            "total": self.total,
            "topIssues": [issue.to_dict() for issue in self.top_issues]
        }

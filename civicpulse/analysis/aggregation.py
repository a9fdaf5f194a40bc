"""
Sentiment Aggregator.

Summarizes classification records into sentiment counts and a ranked
top-issues list, with office and date-range filtering of sentiment logs.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from civicpulse.models.aggregation import AggregationResult, IssueCount, percent_of
from civicpulse.models.classification import (
    ClassificationRecord,
    Sentiment,
    SentimentLog,
)
from civicpulse.models.report import ReviewSample

logger = logging.getLogger(__name__)

TOP_ISSUES_LIMIT = 5


def aggregate(
    records: Iterable[ClassificationRecord],
    top_issues_limit: int = TOP_ISSUES_LIMIT
) -> AggregationResult:
    """
    Aggregate classification records.

    Args:
        records: Classification records (not modified)
        top_issues_limit: Maximum number of issues to rank

    Returns:
        AggregationResult with counts for every sentiment and the top issues,
        ordered by count with ties in first-seen order
    """
    sentiment_counts = Counter({sentiment: 0 for sentiment in Sentiment})
    category_counts = Counter()

    for record in records:
        sentiment_counts[record.sentiment] += 1
        if record.category is not None:
            category_counts[record.category] += 1

    total = sum(sentiment_counts.values())

    # Stable sort: equal counts keep first-seen order
    ranked = sorted(category_counts.items(), key=lambda item: item[1], reverse=True)
    top_issues = [
        IssueCount(
            category=category,
            count=count,
            percentage=percent_of(count, total)
        )
        for category, count in ranked[:top_issues_limit]
    ]

    return AggregationResult(
        counts={sentiment: sentiment_counts[sentiment] for sentiment in Sentiment},
        top_issues=top_issues
    )


def filter_logs(
    logs: Iterable[SentimentLog],
    office_id: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None
) -> List[SentimentLog]:
    """
    Select sentiment logs for one office and an inclusive date range.

    Args:
        logs: Sentiment logs to filter
        office_id: Keep only this office (all offices if None)
        start_date: Earliest date, YYYY-MM-DD (unbounded if None)
        end_date: Latest date, YYYY-MM-DD (unbounded if None)

    Returns:
        Matching logs in their original order
    """
    selected = []
    for log in logs:
        if office_id and log.office_id != office_id:
            continue
        # ISO dates compare correctly as strings
        if start_date and log.date < start_date:
            continue
        if end_date and log.date > end_date:
            continue
        selected.append(log)
    return selected


def select_samples(logs: Sequence[SentimentLog], limit: int = 10) -> List[ReviewSample]:
    """
    Pick feedback samples for a report, newest first.

    Logs without text are skipped.
    """
    with_text = [log for log in logs if log.text and log.text.strip()]
    newest_first = sorted(with_text, key=lambda log: log.date, reverse=True)
    return [
        ReviewSample(
            text=log.text,
            sentiment=log.record.sentiment,
            category=log.record.category
        )
        for log in newest_first[:limit]
    ]


class SentimentAggregator:
    """
    Aggregates persisted sentiment logs for reporting.
    """

    def __init__(self, top_issues_limit: int = TOP_ISSUES_LIMIT):
        self.top_issues_limit = top_issues_limit

    def aggregate_logs(
        self,
        logs: Iterable[SentimentLog],
        office_id: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ) -> AggregationResult:
        """
        Filter logs by office and date range, then aggregate them.

        Returns:
            AggregationResult over the matching logs
        """
        selected = filter_logs(logs, office_id, start_date, end_date)
        result = aggregate((log.record for log in selected), self.top_issues_limit)

        logger.info(
            f"Aggregated {result.total} classifications "
            f"(office={office_id or 'all'}, range={start_date or '*'}..{end_date or '*'}): "
            f"{result.count(Sentiment.POSITIVE)} positive, "
            f"{result.count(Sentiment.NEUTRAL)} neutral, "
            f"{result.count(Sentiment.NEGATIVE)} negative, "
            f"{len(result.top_issues)} issues"
        )

        return result

"""
Unit tests for the Sentiment Pipeline and the Aggregator.
"""

import pytest

from civicpulse import aggregate, analyze
from civicpulse.analysis.aggregation import (
    SentimentAggregator,
    filter_logs,
    select_samples,
)
from civicpulse.analysis.pipeline import SentimentPipeline
from civicpulse.errors import InvalidInput
from civicpulse.models.aggregation import issue_label, percent_of
from civicpulse.models.classification import (
    ClassificationRecord,
    IssueCategory,
    Language,
    Sentiment,
    SentimentLog,
)


def _record(sentiment, category=None):
    return ClassificationRecord(
        sentiment=sentiment,
        category=category,
        confidence=0.6,
        language=Language.ENGLISH
    )


def _log(review_id, office_id, date, sentiment, category=None, text=""):
    return SentimentLog(
        log_id=f"log-{review_id}",
        review_id=review_id,
        office_id=office_id,
        date=date,
        record=_record(sentiment, category),
        text=text
    )


def test_analyze_full_record():
    """Pipeline composes language, sentiment and category."""
    record = analyze("I waited a long time and the staff were rude")

    assert record.language == Language.ENGLISH
    assert record.sentiment == Sentiment.NEGATIVE
    assert record.category == IssueCategory.WAITING_TIME
    assert record.confidence == 0.6


def test_analyze_empty_text_is_neutral():
    record = analyze("")
    assert record.sentiment == Sentiment.NEUTRAL
    assert record.confidence == 0.6
    assert record.category is None
    assert record.language == Language.ENGLISH


def test_analyze_none_raises_invalid_input():
    with pytest.raises(InvalidInput):
        analyze(None)


def test_analyze_non_string_raises_invalid_input():
    with pytest.raises(InvalidInput):
        SentimentPipeline().analyze(42)


def test_analyze_is_idempotent():
    text = "ሰራተኛው ጥሩ ነበር"
    assert analyze(text) == analyze(text)


def test_record_is_immutable():
    record = analyze("great")
    with pytest.raises(AttributeError):
        record.sentiment = Sentiment.NEGATIVE


def test_record_rejects_confidence_out_of_range():
    with pytest.raises(ValueError):
        ClassificationRecord(Sentiment.POSITIVE, None, 0.99, Language.ENGLISH)
    with pytest.raises(ValueError):
        ClassificationRecord(Sentiment.POSITIVE, None, 0.4, Language.ENGLISH)


def test_record_serialization():
    record = ClassificationRecord(
        Sentiment.NEGATIVE, IssueCategory.CORRUPTION, 0.8, Language.AMHARIC
    )
    data = record.to_dict()

    assert data == {
        "sentiment": "negative",
        "category": "corruption",
        "confidence": 0.8,
        "language": "amharic"
    }
    assert ClassificationRecord.from_dict(data) == record


def test_aggregate_empty():
    """Empty input gives zero counts and no issues."""
    result = aggregate([])

    assert result.counts == {
        Sentiment.POSITIVE: 0,
        Sentiment.NEUTRAL: 0,
        Sentiment.NEGATIVE: 0
    }
    assert result.total == 0
    assert result.top_issues == []
    assert result.percentages() == {
        Sentiment.POSITIVE: 0,
        Sentiment.NEUTRAL: 0,
        Sentiment.NEGATIVE: 0
    }


def test_aggregate_counts_and_top_issues():
    """6 positive, 3 negative, 1 neutral with waiting_time leading."""
    records = (
        [_record(Sentiment.POSITIVE)] * 4
        + [_record(Sentiment.POSITIVE, IssueCategory.WAITING_TIME)] * 2
        + [_record(Sentiment.NEGATIVE, IssueCategory.WAITING_TIME)] * 2
        + [_record(Sentiment.NEGATIVE, IssueCategory.STAFF_BEHAVIOR)]
        + [_record(Sentiment.NEUTRAL, IssueCategory.STAFF_BEHAVIOR)]
    )

    result = aggregate(records)

    assert result.counts[Sentiment.POSITIVE] == 6
    assert result.counts[Sentiment.NEGATIVE] == 3
    assert result.counts[Sentiment.NEUTRAL] == 1
    assert result.total == 10
    assert sum(result.counts.values()) == len(records)

    top = result.top_issues[0]
    assert top.category == IssueCategory.WAITING_TIME
    assert top.count == 4
    assert top.percentage == 40
    assert result.top_issues[1].category == IssueCategory.STAFF_BEHAVIOR
    assert result.top_issues[1].percentage == 20


def test_aggregate_ties_keep_first_seen_order():
    records = [
        _record(Sentiment.NEGATIVE, IssueCategory.CORRUPTION),
        _record(Sentiment.NEGATIVE, IssueCategory.WAITING_TIME),
        _record(Sentiment.NEGATIVE, IssueCategory.WAITING_TIME),
        _record(Sentiment.NEGATIVE, IssueCategory.CORRUPTION),
        _record(Sentiment.NEGATIVE, IssueCategory.FACILITY_CONDITION),
    ]

    result = aggregate(records)

    assert [issue.category for issue in result.top_issues] == [
        IssueCategory.CORRUPTION,
        IssueCategory.WAITING_TIME,
        IssueCategory.FACILITY_CONDITION,
    ]


def test_aggregate_limits_top_issues():
    records = [_record(Sentiment.NEGATIVE, category) for category in IssueCategory]
    records.append(_record(Sentiment.NEGATIVE, IssueCategory.CORRUPTION))

    assert len(aggregate(records).top_issues) == 5
    assert len(aggregate(records, top_issues_limit=2).top_issues) == 2
    assert aggregate(records).top_issues[0].category == IssueCategory.CORRUPTION


def test_aggregate_does_not_mutate_input():
    records = [_record(Sentiment.POSITIVE), _record(Sentiment.NEGATIVE, IssueCategory.CORRUPTION)]
    snapshot = list(records)

    aggregate(records)

    assert records == snapshot


def test_aggregate_accepts_generator():
    result = aggregate(_record(Sentiment.NEUTRAL) for _ in range(3))
    assert result.total == 3


def test_percent_of_rounds_half_up():
    assert percent_of(1, 8) == 13  # 12.5
    assert percent_of(1, 3) == 33
    assert percent_of(2, 3) == 67
    assert percent_of(5, 0) == 0


def test_issue_label():
    assert issue_label(IssueCategory.WAITING_TIME) == "Long Waiting Times"
    assert issue_label("corruption") == "Corruption Concerns"
    assert issue_label("online_system") == "Online System"


def test_filter_logs_by_office_and_dates():
    logs = [
        _log("r1", "office-a", "2024-06-01", Sentiment.POSITIVE),
        _log("r2", "office-b", "2024-06-02", Sentiment.NEGATIVE),
        _log("r3", "office-a", "2024-06-15", Sentiment.NEGATIVE),
        _log("r4", "office-a", "2024-07-01", Sentiment.NEUTRAL),
    ]

    assert [log.review_id for log in filter_logs(logs, office_id="office-a")] == ["r1", "r3", "r4"]
    assert [
        log.review_id
        for log in filter_logs(logs, start_date="2024-06-02", end_date="2024-06-15")
    ] == ["r2", "r3"]
    assert [
        log.review_id
        for log in filter_logs(logs, "office-a", "2024-06-01", "2024-06-30")
    ] == ["r1", "r3"]
    assert filter_logs(logs) == logs


def test_aggregate_logs():
    logs = [
        _log("r1", "office-a", "2024-06-01", Sentiment.POSITIVE),
        _log("r2", "office-a", "2024-06-02", Sentiment.NEGATIVE, IssueCategory.CORRUPTION),
        _log("r3", "office-b", "2024-06-02", Sentiment.NEGATIVE, IssueCategory.WAITING_TIME),
    ]

    result = SentimentAggregator().aggregate_logs(logs, office_id="office-a")

    assert result.total == 2
    assert result.top_issues[0].category == IssueCategory.CORRUPTION
    assert result.top_issues[0].percentage == 50


def test_select_samples_newest_first_and_skips_empty():
    logs = [
        _log("r1", "office-a", "2024-06-01", Sentiment.POSITIVE, text="Old comment"),
        _log("r2", "office-a", "2024-06-03", Sentiment.NEGATIVE, text="  "),
        _log("r3", "office-a", "2024-06-05", Sentiment.NEGATIVE, IssueCategory.CORRUPTION, text="New comment"),
    ]

    samples = select_samples(logs, limit=10)

    assert [sample.text for sample in samples] == ["New comment", "Old comment"]
    assert samples[0].category == IssueCategory.CORRUPTION
    assert len(select_samples(logs, limit=1)) == 1


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

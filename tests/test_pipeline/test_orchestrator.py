"""
Integration tests for the Pipeline Orchestrator.

Runs deterministic-only (no API key) so no external calls are made.
"""

import json
import os
import tempfile

import pytest
from unittest.mock import patch

from civicpulse.models.classification import Sentiment
from civicpulse.models.feedback import FeedbackSubmission
from civicpulse.orchestrator import FeedbackPipelineOrchestrator


FEEDBACK = [
    {"review_id": "r1", "office_id": "office-a", "text": "The staff were great and very helpful",
     "rating": 5, "date": "2024-06-01"},
    {"review_id": "r2", "office_id": "office-a", "text": "I waited a long time in the queue, terrible",
     "rating": 1, "date": "2024-06-01"},
    {"review_id": "r3", "office_id": "office-a", "text": "ሙስና አለ",
     "rating": 2, "date": "2024-06-03"},
    {"review_id": "r4", "office_id": "office-b", "text": "Excellent and fast",
     "rating": 5, "date": "2024-06-02"},
    {"review_id": "r5", "office_id": "office-a", "text": "Quick visit",
     "rating": 4, "date": "2024-07-15"},
]


@pytest.fixture
def workspace():
    with tempfile.TemporaryDirectory() as tmpdir:
        input_path = os.path.join(tmpdir, "feedback.json")
        with open(input_path, "w", encoding="utf-8") as f:
            json.dump(FEEDBACK, f, ensure_ascii=False)
        yield tmpdir, input_path


def _orchestrator(tmpdir):
    return FeedbackPipelineOrchestrator(
        data_root=os.path.join(tmpdir, "data"),
        output_root=os.path.join(tmpdir, "output"),
        api_key=""
    )


def test_run_produces_office_report(workspace):
    tmpdir, input_path = workspace
    orchestrator = _orchestrator(tmpdir)

    report_path = orchestrator.run(
        input_path=input_path,
        office_id="office-a",
        office_name="Arada Office",
        start_date="2024-06-01",
        end_date="2024-06-30"
    )

    with open(report_path, encoding="utf-8") as f:
        payload = json.load(f)

    assert payload["sentiment"]["total"] == 3
    assert payload["sentiment"]["positive"] == 1
    assert payload["sentiment"]["negative"] == 2
    assert payload["report"]["source"] == "deterministic"
    assert "Arada Office" in payload["report"]["summary"]

    trend_path = os.path.join(tmpdir, "output", "sentiment_trend_2024-06-30.csv")
    assert os.path.exists(trend_path)


def test_run_persists_logs_by_date(workspace):
    tmpdir, input_path = workspace
    orchestrator = _orchestrator(tmpdir)

    orchestrator.run(input_path=input_path)

    assert orchestrator.storage.get_all_log_dates() == [
        "2024-06-01", "2024-06-02", "2024-06-03", "2024-07-15"
    ]
    assert len(orchestrator.storage.load_sentiment_logs("2024-06-01")) == 2


def test_rerun_does_not_duplicate_logs(workspace):
    tmpdir, input_path = workspace
    orchestrator = _orchestrator(tmpdir)

    orchestrator.run(input_path=input_path)
    orchestrator.run(input_path=input_path)

    assert len(orchestrator.storage.load_all_sentiment_logs()) == len(FEEDBACK)


def _write_feedback(tmpdir, name, entries):
    path = os.path.join(tmpdir, name)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(entries, f, ensure_ascii=False)
    return path


def test_rating_only_submissions_are_not_counted(workspace):
    tmpdir, _ = workspace
    orchestrator = _orchestrator(tmpdir)
    input_path = _write_feedback(tmpdir, "ratings.json", [
        {"review_id": "r1", "office_id": "o", "text": "great and helpful", "rating": 5, "date": "2024-06-01"},
        {"review_id": "r2", "office_id": "o", "text": None, "rating": 3, "date": "2024-06-01"},
        {"review_id": "r3", "office_id": "o", "rating": 4, "date": "2024-06-01"},
        {"review_id": "r4", "office_id": "o", "text": "   ", "rating": 2, "date": "2024-06-01"},
    ])

    report_path = orchestrator.run(input_path=input_path, office_id="o")

    with open(report_path, encoding="utf-8") as f:
        payload = json.load(f)

    assert payload["sentiment"]["total"] == 1
    assert payload["sentiment"]["positive"] == 1
    assert payload["sentiment"]["neutral"] == 0
    assert [log.review_id for log in orchestrator.storage.load_all_sentiment_logs()] == ["r1"]


def test_resubmitted_review_keeps_single_log(workspace):
    tmpdir, _ = workspace
    orchestrator = _orchestrator(tmpdir)
    first = _write_feedback(tmpdir, "first.json", [
        {"review_id": "r1", "office_id": "o", "text": "terrible", "rating": 1, "date": "2024-06-01"},
        {"review_id": "r2", "office_id": "o", "text": "great", "rating": 5, "date": "2024-06-01"},
    ])
    second = _write_feedback(tmpdir, "second.json", [
        {"review_id": "r1", "office_id": "o", "text": "great", "rating": 5, "date": "2024-06-02"},
    ])

    orchestrator.run(input_path=first, office_id="o")
    report_path = orchestrator.run(input_path=second, office_id="o")

    with open(report_path, encoding="utf-8") as f:
        payload = json.load(f)

    assert payload["sentiment"]["total"] == 2
    assert payload["sentiment"]["positive"] == 2
    assert payload["sentiment"]["negative"] == 0

    # Old day keeps only the untouched review
    assert [log.review_id for log in orchestrator.storage.load_sentiment_logs("2024-06-01")] == ["r2"]
    moved = orchestrator.storage.load_sentiment_logs("2024-06-02")
    assert [log.review_id for log in moved] == ["r1"]
    assert moved[0].record.sentiment == Sentiment.POSITIVE


def test_run_with_no_matching_data_gives_no_data_report(workspace):
    tmpdir, input_path = workspace
    orchestrator = _orchestrator(tmpdir)

    report_path = orchestrator.run(input_path=input_path, office_id="office-z")

    with open(report_path, encoding="utf-8") as f:
        payload = json.load(f)

    assert payload["sentiment"]["total"] == 0
    assert payload["sentiment"]["topIssues"] == []
    assert "No feedback data" in payload["report"]["summary"]


def test_reclassify_returns_new_log(workspace):
    tmpdir, _ = workspace
    orchestrator = _orchestrator(tmpdir)

    original = orchestrator.classify_submission(
        FeedbackSubmission("r1", "office-a", "terrible and rude", 1, "2024-06-01")
    )
    updated = orchestrator.reclassify(original, "great and helpful")

    assert original.record.sentiment == Sentiment.NEGATIVE
    assert updated.record.sentiment == Sentiment.POSITIVE
    assert updated.review_id == original.review_id
    assert updated.text == "great and helpful"


def test_gemini_enabled_with_api_key(workspace):
    tmpdir, _ = workspace
    with patch('civicpulse.reporting.gemini.genai'):
        orchestrator = FeedbackPipelineOrchestrator(
            data_root=os.path.join(tmpdir, "data"),
            output_root=os.path.join(tmpdir, "output"),
            api_key="test-key"
        )

    assert orchestrator.report_service.primary is not None


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

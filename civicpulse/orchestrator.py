"""
Pipeline Orchestrator.

Coordinates classification, persistence, aggregation and report
generation for a batch of feedback submissions.
"""

import logging
import uuid
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional

from civicpulse.analysis.aggregation import SentimentAggregator, filter_logs, select_samples
from civicpulse.analysis.pipeline import SentimentPipeline
from civicpulse.errors import InvalidInput
from civicpulse.models.classification import SentimentLog
from civicpulse.models.feedback import FeedbackSubmission
from civicpulse.models.report import DateRange, ReportContext
from civicpulse.reporting.gemini import GeminiReportGenerator
from civicpulse.reporting.service import ReportService
from civicpulse.reporting.trend import SentimentTrendBuilder
from civicpulse.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)


class FeedbackPipelineOrchestrator:
    """
    Orchestrates the feedback sentiment pipeline.

    Coordinates:
    1. Load feedback → 2. Classify → 3. Persist sentiment logs
    → 4. Filter + Aggregate → 5. Report (with fallback) → 6. Trend table
    """

    def __init__(self, data_root: str, output_root: str, api_key: str = ""):
        """
        Initialize pipeline orchestrator.

        Args:
            data_root: Root directory for data storage
            output_root: Directory for trend tables
            api_key: Google API key for Gemini reports (deterministic only if empty)
        """
        self.data_root = data_root
        self.output_root = output_root

        logger.info("Initializing pipeline components...")

        self.storage = StorageManager(data_root)
        self.pipeline = SentimentPipeline()
        self.aggregator = SentimentAggregator(top_issues_limit=settings.TOP_ISSUES_LIMIT)
        self.trend_builder = SentimentTrendBuilder()

        primary = None
        if api_key and settings.USE_GEMINI_REPORTS:
            primary = GeminiReportGenerator(
                api_key=api_key,
                model_name=settings.GEMINI_REPORT_MODEL,
                temperature=settings.GEMINI_TEMPERATURE,
                max_output_tokens=settings.GEMINI_MAX_OUTPUT_TOKENS,
                max_retries=settings.GEMINI_MAX_RETRIES
            )
        else:
            logger.info("Gemini reports disabled, using deterministic reports only")

        self.report_service = ReportService(primary=primary)

        logger.info("Pipeline initialized successfully")

    def classify_submission(self, submission: FeedbackSubmission) -> SentimentLog:
        """
        Classify one submission into a new sentiment log.

        Raises:
            InvalidInput: If the submission has no text
        """
        record = self.pipeline.analyze(submission.text)
        return SentimentLog(
            log_id=str(uuid.uuid4()),
            review_id=submission.review_id,
            office_id=submission.office_id,
            date=submission.date,
            record=record,
            text=submission.text
        )

    def reclassify(self, log: SentimentLog, new_text: str) -> SentimentLog:
        """Classify edited feedback text into a new log; the old log is untouched."""
        return log.with_record(self.pipeline.analyze(new_text), new_text)

    def run(
        self,
        input_path: str,
        office_id: Optional[str] = None,
        office_name: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ) -> str:
        """
        Run the complete pipeline.

        Args:
            input_path: JSON file of feedback submissions
            office_id: Office to report on (all offices if None)
            office_name: Display name for the report
            start_date: Start of the reporting period (YYYY-MM-DD)
            end_date: End of the reporting period (YYYY-MM-DD)

        Returns:
            Path to the saved report JSON
        """
        # STAGE 1: Load feedback
        submissions = self.storage.load_feedback(input_path)

        # STAGE 2: Classification
        new_logs = []
        for submission in submissions:
            if not submission.has_comment:
                logger.info(f"Submission {submission.review_id} has no comment, skipping sentiment analysis")
                continue
            try:
                new_logs.append(self.classify_submission(submission))
            except InvalidInput as e:
                logger.warning(f"Skipping submission {submission.review_id}: {e}")

        logger.info(f"Classified {len(new_logs)} of {len(submissions)} submissions")

        # STAGE 3: Persistence
        self._persist_logs(new_logs)

        # STAGE 4: Filter + Aggregate
        all_logs = self.storage.load_all_sentiment_logs()
        selected = filter_logs(all_logs, office_id, start_date, end_date)
        aggregation = self.aggregator.aggregate_logs(selected)

        # STAGE 5: Report
        context = ReportContext(
            office_name=office_name or settings.DEFAULT_OFFICE_NAME,
            date_range=DateRange(
                start=start_date or settings.DEFAULT_START_LABEL,
                end=end_date or settings.DEFAULT_END_LABEL
            ),
            samples=select_samples(selected, settings.REVIEW_SAMPLE_LIMIT)
        )
        report = self.report_service.generate(aggregation, context)

        payload = {
            "office_id": office_id,
            "office_name": context.office_name,
            "date_range": {"start": context.date_range.start, "end": context.date_range.end},
            "sentiment": aggregation.to_dict(),
            "report": report.to_dict(),
            "generated_at": datetime.utcnow().isoformat() + "Z"
        }
        report_name = f"report_{office_id or 'all'}_{end_date or datetime.now().strftime('%Y-%m-%d')}"
        report_path = self.storage.save_report(payload, report_name)

        # STAGE 6: Trend table
        if selected:
            trend_start = start_date or min(log.date for log in selected)
            trend_end = end_date or max(log.date for log in selected)
            trend = self.trend_builder.build(selected, trend_start, trend_end)
            self.trend_builder.save(trend, self.output_root, trend_end)
        else:
            logger.warning("No classifications in range, skipping trend table")

        logger.info(f"Pipeline complete! Report: {report_path} (source={report.source})")
        return report_path

    def _persist_logs(self, logs: List[SentimentLog]) -> None:
        """
        Merge new logs into storage, keeping one log per review across all dates.

        A review re-submitted under a different date is removed from its old
        day file; only the days that change are rewritten.
        """
        if not logs:
            return

        incoming = {log.review_id: log for log in logs}

        by_date: Dict[str, List[SentimentLog]] = defaultdict(list)
        changed = set()
        for date in self.storage.get_all_log_dates():
            stored = self.storage.load_sentiment_logs(date) or []
            kept = [log for log in stored if log.review_id not in incoming]
            if len(kept) != len(stored):
                changed.add(date)
            by_date[date] = kept

        for log in incoming.values():
            by_date[log.date].append(log)
            changed.add(log.date)

        for date in sorted(changed):
            self.storage.save_sentiment_logs(by_date[date], date)


# Pipeline Invariants:
#
# 1. Only submissions with a non-blank comment are classified
#    - Rating-only submissions never reach the aggregation
#
# 2. Exactly one stored log per review_id across all days
#    - A re-run replaces the previous log for the same review
#    - A review re-submitted under a new date leaves its old day
#
# 3. A report JSON is saved on every run, including the no-data report
#    - The trend table is only written when logs were selected

"""
Storage utility.

File I/O helpers for feedback input, sentiment logs and generated reports.
"""

import json
import os
import logging
from typing import Dict, List, Optional

from civicpulse.models.classification import SentimentLog
from civicpulse.models.feedback import FeedbackSubmission

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file I/O for all data persistence.

    Handles:
    - Sentiment logs (data/sentiment_logs/YYYY-MM-DD.json)
    - Reports (data/reports/<name>.json)
    - Feedback submissions (any JSON file holding a list of submissions)
    """

    def __init__(self, data_root: str):
        """
        Initialize storage manager.

        Args:
            data_root: Root data directory (e.g., /path/to/data)
        """
        self.data_root = data_root
        self.logs_dir = os.path.join(data_root, "sentiment_logs")
        self.reports_dir = os.path.join(data_root, "reports")

        # Create directories if they don't exist
        os.makedirs(self.logs_dir, exist_ok=True)
        os.makedirs(self.reports_dir, exist_ok=True)

        logger.info(f"Initialized StorageManager with data_root={data_root}")

    def load_feedback(self, path: str) -> List[FeedbackSubmission]:
        """
        Load feedback submissions from a JSON file.

        Args:
            path: JSON file containing a list of submission dicts

        Returns:
            Valid submissions; invalid entries are logged and skipped

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file does not contain a JSON list
        """
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)

        if not isinstance(payload, list):
            raise ValueError(f"Feedback file {path} must contain a JSON list")

        submissions = []
        for item in payload:
            try:
                submissions.append(FeedbackSubmission.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping invalid feedback entry in {path}: {e}")
                continue

        logger.info(f"Loaded {len(submissions)} feedback submissions from {path}")
        return submissions

    def save_sentiment_logs(self, logs: List[SentimentLog], date: str) -> None:
        """
        Save sentiment logs for a specific date, replacing any existing file.

        Args:
            logs: Sentiment logs dated `date`
            date: Date in YYYY-MM-DD format
        """
        filepath = os.path.join(self.logs_dir, f"{date}.json")

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump([log.to_dict() for log in logs], f, indent=2, ensure_ascii=False)
            logger.info(f"Saved {len(logs)} sentiment logs to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save sentiment logs for {date}: {e}")
            raise

    def load_sentiment_logs(self, date: str) -> Optional[List[SentimentLog]]:
        """
        Load sentiment logs for a specific date.

        Args:
            date: Date in YYYY-MM-DD format

        Returns:
            List of sentiment logs, or None if the file doesn't exist or is unreadable
        """
        filepath = os.path.join(self.logs_dir, f"{date}.json")

        if not os.path.exists(filepath):
            logger.debug(f"No sentiment logs found for {date}")
            return None

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return [SentimentLog.from_dict(item) for item in data]
        except Exception as e:
            logger.error(f"Failed to load sentiment logs for {date}: {e}")
            return None

    def get_all_log_dates(self) -> List[str]:
        """
        Get all dates that have sentiment log files.

        Returns:
            Sorted list of dates in YYYY-MM-DD format
        """
        dates = []
        for filename in os.listdir(self.logs_dir):
            if filename.endswith('.json'):
                dates.append(filename.replace('.json', ''))

        return sorted(dates)

    def load_all_sentiment_logs(self) -> List[SentimentLog]:
        """Load sentiment logs for every stored date, oldest first."""
        logs = []
        for date in self.get_all_log_dates():
            logs.extend(self.load_sentiment_logs(date) or [])
        return logs

    def save_report(self, report: Dict, name: str) -> str:
        """
        Save a generated report payload.

        Args:
            report: JSON-serializable report dict
            name: File name without extension

        Returns:
            Path to the saved report
        """
        filepath = os.path.join(self.reports_dir, f"{name}.json")

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(report, f, indent=2, ensure_ascii=False)
            logger.info(f"Saved report to {filepath}")
            return filepath
        except Exception as e:
            logger.error(f"Failed to save report {name}: {e}")
            raise

    def load_report(self, name: str) -> Optional[Dict]:
        """
        Load a saved report payload.

        Returns:
            Report dict, or None if it doesn't exist
        """
        filepath = os.path.join(self.reports_dir, f"{name}.json")

        if not os.path.exists(filepath):
            return None

        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)


# Storage Layout and Limits:
#
# 1. One sentiment log file per day (sentiment_logs/YYYY-MM-DD.json)
#    - Each file is rewritten whole on save
#    - A day whose logs all moved away is saved as an empty list
#
# 2. Missing or unreadable log files load as None
#    - load_all_sentiment_logs() treats them as empty days
#
# 3. Feedback files must hold a JSON list
#    - Entries that fail validation are logged and skipped

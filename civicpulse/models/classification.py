"""
Classification data models.

Sentiment, language and issue-category tags, the per-feedback
classification record, and the persisted sentiment log.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Language(str, Enum):
    AMHARIC = "amharic"
    ENGLISH = "english"


class IssueCategory(str, Enum):
    WAITING_TIME = "waiting_time"
    STAFF_BEHAVIOR = "staff_behavior"
    CORRUPTION = "corruption"
    FACILITY_CONDITION = "facility_condition"
    PROCESS_COMPLEXITY = "process_complexity"


MIN_CONFIDENCE = 0.5
MAX_CONFIDENCE = 0.95


@dataclass(frozen=True)
class ClassificationRecord:
    """
    Result of classifying one piece of feedback text.
    Output of the Sentiment Pipeline.
    """
    sentiment: Sentiment
    category: Optional[IssueCategory]
    confidence: float  # Heuristic score in [0.5, 0.95]
    language: Language

    def __post_init__(self):
        if not (MIN_CONFIDENCE <= self.confidence <= MAX_CONFIDENCE):
            raise ValueError(
                f"Invalid confidence: {self.confidence}. "
                f"Must be between {MIN_CONFIDENCE} and {MAX_CONFIDENCE}"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "ClassificationRecord":
        """Create ClassificationRecord from JSON dict."""
        category = data.get("category")
        return cls(
            sentiment=Sentiment(data["sentiment"]),
            category=IssueCategory(category) if category else None,
            confidence=float(data["confidence"]),
            language=Language(data["language"])
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "sentiment": self.sentiment.value,
            "category": self.category.value if self.category else None,
            "confidence": self.confidence,
            "language": self.language.value
        }


@dataclass(frozen=True)
class SentimentLog:
    """
    A classification record persisted against a feedback submission.
    """
    log_id: str
    review_id: str
    office_id: str
    date: str  # YYYY-MM-DD format
    record: ClassificationRecord
    text: str = ""  # Snapshot of the classified text, used for report samples

    def with_record(self, record: ClassificationRecord, text: str) -> "SentimentLog":
        """Return a new log carrying a fresh classification for edited text."""
        return replace(self, record=record, text=text)

    @classmethod
    def from_dict(cls, data: dict) -> "SentimentLog":
        """Create SentimentLog from JSON dict."""
        return cls(
            log_id=data["log_id"],
            review_id=data["review_id"],
            office_id=data["office_id"],
            date=data["date"],
            record=ClassificationRecord.from_dict(data["record"]),
            text=data.get("text", "")
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "log_id": self.log_id,
            "review_id": self.review_id,
            "office_id": self.office_id,
            "date": self.date,
            "record": self.record.to_dict(),
            "text": self.text
        }

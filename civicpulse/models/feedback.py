"""
Feedback data model.

Represents a citizen feedback submission about a government office.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FeedbackSubmission:
    """
    A citizen's rating and optional comment for one office.
    Minimal fields needed for classification and aggregation.
    """
    review_id: str  # Unique identifier for the submission
    office_id: str  # Office the feedback is about
    text: Optional[str]  # Free-text comment, None for rating-only submissions
    rating: int  # 1-5 star rating
    date: str  # YYYY-MM-DD format

    def __post_init__(self):
        # Validate rating
        if not (1 <= self.rating <= 5):
            raise ValueError(f"Invalid rating: {self.rating}. Must be 1-5")

    @property
    def has_comment(self) -> bool:
        """True when the submission carries non-blank comment text."""
        return isinstance(self.text, str) and bool(self.text.strip())

    @classmethod
    def from_dict(cls, data: dict) -> "FeedbackSubmission":
        """Create FeedbackSubmission from JSON dict."""
        return cls(
            review_id=data["review_id"],
            office_id=data["office_id"],
            text=data.get("text"),
            rating=int(data["rating"]),
            date=data["date"]
        )

"""
Sentiment Classifier.

Scores feedback text as positive, negative or neutral by counting
language-specific keyword hits.
"""

import logging
from typing import Mapping, Optional, Tuple

from civicpulse.lexicon import DEFAULT_LEXICONS, LanguageLexicon
from civicpulse.models.classification import (
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    Language,
    Sentiment,
)

logger = logging.getLogger(__name__)

CONFIDENCE_STEP = 0.1
NEUTRAL_CONFIDENCE = 0.6


def _count_hits(lower_text: str, keywords: Tuple[str, ...]) -> int:
    """Number of keywords present in the text (each counts at most once)."""
    return sum(1 for keyword in keywords if keyword in lower_text)


class SentimentClassifier:
    """
    Keyword-based sentiment classifier.

    Stateless apart from the keyword lexicons it is constructed with.
    """

    def __init__(self, lexicons: Optional[Mapping[Language, LanguageLexicon]] = None):
        """
        Initialize sentiment classifier.

        Args:
            lexicons: Keyword sets per language (defaults to DEFAULT_LEXICONS)
        """
        self.lexicons = lexicons or DEFAULT_LEXICONS

    def classify(self, text: str, language: Language) -> Tuple[Sentiment, float]:
        """
        Classify feedback text.

        Args:
            text: Feedback text
            language: Detected language of the text

        Returns:
            (sentiment, confidence) where confidence grows by 0.1 per keyword
            of margin from 0.5, capped at 0.95; ties are neutral at 0.6
        """
        lexicon = self.lexicons.get(language)
        if lexicon is None:
            logger.warning(f"No lexicon for language={language}, defaulting to neutral")
            return Sentiment.NEUTRAL, MIN_CONFIDENCE

        lower_text = text.lower()
        positive_score = _count_hits(lower_text, lexicon.positive)
        negative_score = _count_hits(lower_text, lexicon.negative)

        if positive_score > negative_score:
            return Sentiment.POSITIVE, self._confidence(positive_score - negative_score)
        if negative_score > positive_score:
            return Sentiment.NEGATIVE, self._confidence(negative_score - positive_score)
        return Sentiment.NEUTRAL, NEUTRAL_CONFIDENCE

    @staticmethod
    def _confidence(margin: int) -> float:
        # Rounded so 0.5 + 0.1 * 2 is exactly 0.7
        return round(min(MIN_CONFIDENCE + CONFIDENCE_STEP * margin, MAX_CONFIDENCE), 2)

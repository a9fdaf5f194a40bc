"""
Sentiment Pipeline.

Composes language detection, sentiment classification and category
detection into one classification record per feedback text.
"""

import logging
from typing import Mapping, Optional

from civicpulse.analysis.category import detect_category
from civicpulse.analysis.language import detect_language
from civicpulse.analysis.sentiment import SentimentClassifier
from civicpulse.errors import InvalidInput
from civicpulse.lexicon import DEFAULT_LEXICONS, LanguageLexicon
from civicpulse.models.classification import ClassificationRecord, Language

logger = logging.getLogger(__name__)


class SentimentPipeline:
    """
    Classifies feedback text.

    Flow: Language Detector -> Sentiment Classifier -> Category Detector
    """

    def __init__(self, lexicons: Optional[Mapping[Language, LanguageLexicon]] = None):
        self.lexicons = lexicons or DEFAULT_LEXICONS
        self.classifier = SentimentClassifier(self.lexicons)

    def analyze(self, text: str) -> ClassificationRecord:
        """
        Classify one piece of feedback text.

        Args:
            text: Feedback text (may be empty)

        Returns:
            ClassificationRecord with sentiment, category, confidence and language

        Raises:
            InvalidInput: If text is None or not a string
        """
        if text is None:
            raise InvalidInput("Feedback text is required")
        if not isinstance(text, str):
            raise InvalidInput(f"Feedback text must be a string, got {type(text).__name__}")

        language = detect_language(text)
        sentiment, confidence = self.classifier.classify(text, language)
        category = detect_category(text, language, self.lexicons)

        logger.debug(
            f"Classified text ({len(text)} chars): language={language.value}, "
            f"sentiment={sentiment.value}, confidence={confidence}, "
            f"category={category.value if category else None}"
        )

        return ClassificationRecord(
            sentiment=sentiment,
            category=category,
            confidence=confidence,
            language=language
        )


_default_pipeline = SentimentPipeline()


def analyze(text: str) -> ClassificationRecord:
    """Classify feedback text with the default lexicons."""
    return _default_pipeline.analyze(text)

"""
Category Detector.

Maps feedback text to an optional issue category using per-language
keyword lists.
"""

from typing import Mapping, Optional

from civicpulse.lexicon import DEFAULT_LEXICONS, LanguageLexicon
from civicpulse.models.classification import IssueCategory, Language


def detect_category(
    text: str,
    language: Language,
    lexicons: Optional[Mapping[Language, LanguageLexicon]] = None
) -> Optional[IssueCategory]:
    """
    Detect the issue category of feedback text.

    Args:
        text: Feedback text
        language: Detected language of the text
        lexicons: Keyword sets per language (defaults to DEFAULT_LEXICONS)

    Returns:
        The first category in lexicon order with a keyword contained in
        the lower-cased text, or None if nothing matched
    """
    lexicon = (lexicons or DEFAULT_LEXICONS).get(language)
    if lexicon is None:
        return None

    lower_text = text.lower()
    for category, keywords in lexicon.categories:
        if any(keyword in lower_text for keyword in keywords):
            return category

    return None

"""
Language Detector.

Classifies feedback text as Amharic or English by script inspection.
"""

import re

from civicpulse.models.classification import Language

# Ethiopic Unicode block
ETHIOPIC_PATTERN = re.compile("[\u1200-\u137F]")


def detect_language(text: str) -> Language:
    """
    Detect the language of feedback text.

    Any character in the Ethiopic block (U+1200-U+137F) marks the text
    as Amharic; everything else, including the empty string, is English.
    """
    if ETHIOPIC_PATTERN.search(text):
        return Language.AMHARIC
    return Language.ENGLISH

"""
Keyword lexicons.

Per-language positive, negative and category keyword sets used by the
sentiment classifier and category detector. Built once at import time.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from civicpulse.models.classification import IssueCategory, Language


@dataclass(frozen=True)
class LanguageLexicon:
    """
    Keyword sets for a single language.

    Category order matters: the first category with a matching keyword wins.
    """
    positive: Tuple[str, ...]
    negative: Tuple[str, ...]
    categories: Tuple[Tuple[IssueCategory, Tuple[str, ...]], ...]


ENGLISH_LEXICON = LanguageLexicon(
    positive=(
        "good", "great", "excellent", "amazing", "wonderful", "fantastic",
        "helpful", "friendly", "efficient", "quick", "fast", "professional",
        "satisfied", "happy", "pleased", "impressed", "thank", "appreciate",
    ),
    negative=(
        "bad", "poor", "terrible", "horrible", "awful", "disappointing",
        "unhelpful", "unfriendly", "inefficient", "slow", "unprofessional",
        "dissatisfied", "unhappy", "displeased", "unimpressed", "rude",
        "corrupt", "bribe", "waste", "long wait", "complicated",
    ),
    categories=(
        (IssueCategory.WAITING_TIME, ("wait", "time", "queue", "long")),
        (IssueCategory.STAFF_BEHAVIOR, ("staff", "employee", "officer", "service")),
        (IssueCategory.CORRUPTION, ("corrupt", "bribe", "money", "pay")),
        (IssueCategory.FACILITY_CONDITION, ("clean", "facility", "building", "toilet")),
        (IssueCategory.PROCESS_COMPLEXITY, ("process", "procedure", "bureaucracy", "paperwork")),
    ),
)

AMHARIC_LEXICON = LanguageLexicon(
    positive=("ጥሩ", "ደስ", "አመሰግናለሁ", "ፈጣን"),
    negative=("መጥፎ", "አስቸጋሪ", "ዘገየ", "ሙስና"),
    categories=(
        (IssueCategory.WAITING_TIME, ("ጊዜ", "መጠበቅ", "ረጅም")),
        (IssueCategory.STAFF_BEHAVIOR, ("ሰራተኛ", "አገልግሎት")),
        (IssueCategory.CORRUPTION, ("ሙስና", "ጉቦ")),
    ),
)

DEFAULT_LEXICONS: Mapping[Language, LanguageLexicon] = MappingProxyType({
    Language.ENGLISH: ENGLISH_LEXICON,
    Language.AMHARIC: AMHARIC_LEXICON,
})

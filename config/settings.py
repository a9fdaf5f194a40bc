"""
Configuration settings for CivicPulse.

Centralized configuration for the sentiment pipeline, report generation
and scheduled reports.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# API Configuration
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")

# Generative report model (optional, deterministic fallback always available)
GEMINI_REPORT_MODEL = "gemini-1.5-flash"
GEMINI_TEMPERATURE = 0.2
GEMINI_MAX_OUTPUT_TOKENS = 8192
GEMINI_MAX_RETRIES = 2
USE_GEMINI_REPORTS = True  # Ignored when GOOGLE_API_KEY is empty

# Aggregation
TOP_ISSUES_LIMIT = 5
REVIEW_SAMPLE_LIMIT = 10

# Narrative report thresholds (percent)
GOOD_SATISFACTION_THRESHOLD = 60
MODERATE_SATISFACTION_THRESHOLD = 40
HIGH_NEGATIVE_THRESHOLD = 30
TRAINING_POSITIVE_THRESHOLD = 70
LARGE_SAMPLE_THRESHOLD = 50

# Narrative report limits
MAX_KEY_INSIGHTS = 5
MAX_REPORT_SAMPLES = 3
SAMPLE_TRUNCATE_CHARS = 100

# Report context defaults
DEFAULT_OFFICE_NAME = "the selected office"
DEFAULT_START_LABEL = "all time"
DEFAULT_END_LABEL = "present"

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "civicpulse.log"


# Threshold Semantics:
#
# 1. Satisfaction qualifier uses strict comparisons
#    - positive% > 60 is good, > 40 is moderate, otherwise low
#
# 2. Recommendation triggers are strict as well
#    - negative% > 30 adds the service improvement plan
#    - positive% < 70 adds staff training
#
# 3. USE_GEMINI_REPORTS has no effect without GOOGLE_API_KEY

"""
Report Service.

Selects between an optional external report generator and the
deterministic assembler. A report is always produced.
"""

import logging
from typing import Optional, Protocol

from civicpulse.models.aggregation import AggregationResult
from civicpulse.models.report import NarrativeReport, ReportContext
from civicpulse.reporting.assembler import DeterministicReportGenerator

logger = logging.getLogger(__name__)


class ReportGenerator(Protocol):
    """Anything that turns an aggregation into a narrative report."""

    def generate(
        self,
        aggregation: AggregationResult,
        context: Optional[ReportContext] = None
    ) -> NarrativeReport:
        ...


class ReportService:
    """
    Try the primary generator, then fall back to the deterministic one.
    """

    def __init__(
        self,
        primary: Optional[ReportGenerator] = None,
        fallback: Optional[DeterministicReportGenerator] = None
    ):
        """
        Initialize report service.

        Args:
            primary: Best-effort generator (e.g. Gemini), or None for
                deterministic-only operation
            fallback: Deterministic generator used when primary is absent or fails
        """
        self.primary = primary
        self.fallback = fallback or DeterministicReportGenerator()

    def generate(
        self,
        aggregation: AggregationResult,
        context: Optional[ReportContext] = None
    ) -> NarrativeReport:
        """
        Generate a report, never surfacing a primary generator failure.
        """
        context = context or ReportContext()

        if self.primary is not None and aggregation.total > 0:
            try:
                return self.primary.generate(aggregation, context)
            except Exception as e:
                logger.warning(
                    f"Primary report generator failed for {context.office_name}: {e}. "
                    f"Using deterministic report"
                )

        return self.fallback.generate(aggregation, context)

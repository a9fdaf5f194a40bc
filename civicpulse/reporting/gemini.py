"""
Gemini Report Generator.

Produces the narrative report fields with a Gemini model. Best-effort:
failures raise ReportGenerationError so the caller can fall back to the
deterministic assembler.
"""

import logging
import re
from typing import List, Optional

import google.generativeai as genai

from civicpulse.errors import ReportGenerationError
from civicpulse.models.aggregation import AggregationResult
from civicpulse.models.classification import Sentiment
from civicpulse.models.report import NarrativeReport, ReportContext

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are an expert government service analyst who writes reports from citizen feedback statistics.

Rules:
- Refer to the office by the exact name you are given, never as "the office" or "all offices"
- Base every statement on the numbers provided; do not invent data
- Keep recommendations specific and actionable
- Answer using the exact section headers requested, in order"""


SECTION_HEADERS = ("SUMMARY", "KEY_INSIGHTS", "RECOMMENDATIONS", "TREND_ANALYSIS", "FULL_ANALYSIS")


def _construct_prompt(aggregation: AggregationResult, context: ReportContext) -> str:
    """Construct the office-specific user prompt."""
    office = context.office_name
    pct = aggregation.percentages()

    issue_lines = "\n".join(
        f"- {issue.label}: {issue.count} mentions ({issue.percentage}%)"
        for issue in aggregation.top_issues
    ) or "- No specific issues identified"

    sample_block = ""
    if context.samples:
        sample_lines = "\n".join(
            f'- "{sample.text}" (Sentiment: {sample.sentiment.value}'
            + (f", Category: {sample.category.value}" if sample.category else "")
            + ")"
            for sample in context.samples
        )
        sample_block = f"\nSAMPLE REVIEWS FROM CITIZENS ABOUT \"{office}\":\n{sample_lines}\n"

    return f"""Analyze citizen feedback about "{office}" for the period from {context.date_range.start} to {context.date_range.end}.

DATA FOR "{office}":
- Positive feedback: {aggregation.count(Sentiment.POSITIVE)} ({pct[Sentiment.POSITIVE]}%)
- Neutral feedback: {aggregation.count(Sentiment.NEUTRAL)} ({pct[Sentiment.NEUTRAL]}%)
- Negative feedback: {aggregation.count(Sentiment.NEGATIVE)} ({pct[Sentiment.NEGATIVE]}%)
- Total reviews: {aggregation.total}

TOP ISSUES:
{issue_lines}
{sample_block}
Provide:
1. A concise executive summary (2-3 paragraphs)
2. 4-5 key insights
3. 3-4 actionable recommendations
4. A brief trend analysis comparing positive vs negative sentiment
5. A comprehensive analysis (about 300-400 words)

Format your response as follows:
SUMMARY:
[summary]

KEY_INSIGHTS:
- [insight]

RECOMMENDATIONS:
- [recommendation]

TREND_ANALYSIS:
[trend analysis]

FULL_ANALYSIS:
[full analysis]"""


def _section(response_text: str, header: str) -> str:
    """Text between a section header and the next known header."""
    following = SECTION_HEADERS[SECTION_HEADERS.index(header) + 1:]
    stops = "".join(f"{h}:|" for h in following)
    match = re.search(rf"{header}:(.*?)(?={stops}\Z)", response_text, re.DOTALL)
    return match.group(1).strip() if match else ""


def _bullets(section_text: str) -> List[str]:
    """Split a bulleted section into items."""
    items = []
    for line in section_text.splitlines():
        item = line.strip().lstrip("-*•").strip()
        if item:
            items.append(item)
    return items


class GeminiReportGenerator:
    """
    Generates narrative reports with Gemini.

    Same five-field output as the deterministic assembler.
    """

    source = "gemini"

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.2,
        max_output_tokens: int = 8192,
        max_retries: int = 2
    ):
        """
        Initialize Gemini report generator.

        Args:
            api_key: Gemini API key
            model_name: Gemini model to use
            temperature: LLM temperature
            max_output_tokens: Response length cap
            max_retries: Number of attempts before giving up
        """
        self.model_name = model_name
        self.temperature = temperature
        self.max_retries = max_retries

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name=model_name,
            generation_config={
                "temperature": temperature,
                "max_output_tokens": max_output_tokens
            },
            system_instruction=SYSTEM_PROMPT
        )

        logger.info(f"Initialized GeminiReportGenerator with model={model_name}, temp={temperature}")

    def generate(
        self,
        aggregation: AggregationResult,
        context: Optional[ReportContext] = None
    ) -> NarrativeReport:
        """
        Generate a report with Gemini.

        Raises:
            ReportGenerationError: If there is no data, the API keeps failing,
                or the response cannot be parsed
        """
        if aggregation.total == 0:
            raise ReportGenerationError("No classifications available for AI analysis")

        context = context or ReportContext()
        prompt = _construct_prompt(aggregation, context)
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                response = self.model.generate_content(prompt)
                report = self._parse_response(response.text)
                logger.info(f"Gemini report generated for {context.office_name} (attempt {attempt + 1})")
                return report
            except ReportGenerationError as e:
                logger.error(f"Unusable Gemini response (attempt {attempt + 1}): {e}")
                last_error = e
            except Exception as e:
                logger.error(f"Gemini API error (attempt {attempt + 1}): {e}")
                last_error = e

        raise ReportGenerationError(
            f"Gemini report generation failed after {self.max_retries} attempts: {last_error}"
        )

    def _parse_response(self, response_text: str) -> NarrativeReport:
        """
        Parse the sectioned Gemini response into a NarrativeReport.

        Raises:
            ReportGenerationError: If the summary section is missing
        """
        summary = _section(response_text, "SUMMARY")
        if not summary:
            raise ReportGenerationError("Response missing SUMMARY section")

        return NarrativeReport(
            summary=summary,
            key_insights=_bullets(_section(response_text, "KEY_INSIGHTS")),
            recommendations=_bullets(_section(response_text, "RECOMMENDATIONS")),
            trend_analysis=_section(response_text, "TREND_ANALYSIS"),
            full_analysis=_section(response_text, "FULL_ANALYSIS"),
            source=self.source
        )


# Response Contract:
#
# 1. Sections are read by their headers (SUMMARY:, KEY_INSIGHTS:, ...)
#    - A response without a SUMMARY section counts as a failed attempt
#
# 2. Bullet markers (-, *, •) are stripped from list sections
#
# 3. Empty aggregations are refused before any API call

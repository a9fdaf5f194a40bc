"""
Deterministic Report Assembler.

Builds a narrative report (summary, key insights, recommendations,
trend analysis, full analysis) from an aggregation result using fixed
templates. Always available, and the fallback for any external generator.
"""

import logging
from typing import List, Optional

import config.settings as settings
from civicpulse.models.aggregation import AggregationResult
from civicpulse.models.classification import Sentiment
from civicpulse.models.report import NarrativeReport, ReportContext, ReviewSample

logger = logging.getLogger(__name__)


NO_DATA_REPORT = NarrativeReport(
    summary=(
        "No feedback data is available for the selected office and period. "
        "Either no reviews have been submitted or none have been approved "
        "for analysis yet."
    ),
    key_insights=[
        "No citizen feedback data is available for this office.",
        "The office may benefit from increased citizen engagement initiatives.",
        "Review the feedback collection and approval process for this office.",
    ],
    recommendations=[
        "Implement targeted outreach programs to encourage citizen feedback.",
        "Review and streamline the feedback approval process.",
        "Consider alternative feedback collection methods suited to the office's services.",
    ],
    trend_analysis=(
        "No trend data is available due to insufficient feedback volume "
        "during the selected period."
    ),
    full_analysis=(
        "A comprehensive analysis cannot be performed without feedback data. "
        "Focus on increasing citizen engagement and feedback collection so "
        "that future reports have data to analyze."
    ),
)


def _satisfaction_level(positive_pct: int) -> str:
    if positive_pct > settings.GOOD_SATISFACTION_THRESHOLD:
        return "good"
    if positive_pct > settings.MODERATE_SATISFACTION_THRESHOLD:
        return "moderate"
    return "low"


def _truncate(text: str, limit: int = settings.SAMPLE_TRUNCATE_CHARS) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class DeterministicReportGenerator:
    """
    Template-based report generator.

    Every field is a pure function of the aggregation and context, so the
    same inputs always produce the same report.
    """

    source = "deterministic"

    def generate(
        self,
        aggregation: AggregationResult,
        context: Optional[ReportContext] = None
    ) -> NarrativeReport:
        """
        Assemble a narrative report.

        Args:
            aggregation: Sentiment counts and top issues
            context: Office name, date range and samples (defaults if None)

        Returns:
            NarrativeReport; the fixed no-data report when total is 0
        """
        if aggregation.total == 0:
            logger.info("No classifications to report on, returning no-data report")
            return NO_DATA_REPORT

        context = context or ReportContext()
        recommendations = self._recommendations(aggregation)

        report = NarrativeReport(
            summary=self._summary(aggregation, context),
            key_insights=self._key_insights(aggregation),
            recommendations=recommendations,
            trend_analysis=self._trend_analysis(aggregation),
            full_analysis=self._full_analysis(aggregation, context, recommendations),
            source=self.source
        )

        logger.info(
            f"Assembled deterministic report for {context.office_name}: "
            f"{len(report.key_insights)} insights, {len(report.recommendations)} recommendations"
        )
        return report

    def _summary(self, agg: AggregationResult, context: ReportContext) -> str:
        pct = agg.percentages()
        positive_pct = pct[Sentiment.POSITIVE]
        negative_pct = pct[Sentiment.NEGATIVE]
        office = context.office_name

        parts = [
            f"Analysis of {agg.total} citizen reviews submitted to {office} "
            f"from {context.date_range.start} to {context.date_range.end} shows "
            f"{positive_pct}% positive, {pct[Sentiment.NEUTRAL]}% neutral and "
            f"{negative_pct}% negative feedback."
        ]

        top = agg.top_issue(0)
        if top:
            parts.append(
                f'The most frequently mentioned concern was "{top.label}", '
                f"appearing in {top.percentage}% of all feedback."
            )
            second = agg.top_issue(1)
            if second:
                followed = f'This was followed by "{second.label}" at {second.percentage}%'
                third = agg.top_issue(2)
                if third:
                    followed += f' and "{third.label}" at {third.percentage}%'
                parts.append(followed + ".")
        else:
            parts.append("No specific issue categories were identified in the feedback.")

        if agg.count(Sentiment.POSITIVE) > agg.count(Sentiment.NEGATIVE):
            parts.append(
                f"Overall, feedback indicates citizen satisfaction with {office}'s services, "
                f"though the {negative_pct}% negative feedback highlights areas for continued improvement."
            )
        else:
            parts.append(
                f"The {negative_pct}% negative sentiment indicates significant opportunities "
                f"for service enhancement at {office}."
            )

        return " ".join(parts)

    def _key_insights(self, agg: AggregationResult) -> List[str]:
        positive_pct = agg.percentage(Sentiment.POSITIVE)
        negative_pct = agg.percentage(Sentiment.NEGATIVE)

        insights = [
            f"{positive_pct}% of feedback was positive, indicating "
            f"{_satisfaction_level(positive_pct)} citizen satisfaction with services."
        ]

        if negative_pct > 0:
            insights.append(
                f"{negative_pct}% of feedback was negative, suggesting areas for improvement."
            )

        top = agg.top_issue(0)
        if top:
            insights.append(f"The most common issue was '{top.label}' ({top.percentage}%).")

        second = agg.top_issue(1)
        if second:
            insights.append(
                f"{second.label} was the second most mentioned concern ({second.percentage}%)."
            )

        insights.append(f"Total of {agg.total} reviews were analyzed for this reporting period.")

        return insights[:settings.MAX_KEY_INSIGHTS]

    def _recommendations(self, agg: AggregationResult) -> List[str]:
        positive_pct = agg.percentage(Sentiment.POSITIVE)
        negative_pct = agg.percentage(Sentiment.NEGATIVE)
        recommendations = []

        top = agg.top_issue(0)
        if top:
            recommendations.append(
                f"Address the primary concern of '{top.label}' through process "
                f"improvements and staff training."
            )

        second = agg.top_issue(1)
        if second:
            recommendations.append(
                f"Implement targeted solutions for '{second.label}' to improve citizen experience."
            )

        if negative_pct > settings.HIGH_NEGATIVE_THRESHOLD:
            recommendations.append(
                f"With {negative_pct}% negative feedback, implement a comprehensive "
                f"service improvement plan."
            )

        if positive_pct < settings.TRAINING_POSITIVE_THRESHOLD:
            recommendations.append(
                "Establish regular staff training on customer service best practices "
                "to increase satisfaction."
            )

        recommendations.append(
            "Implement a real-time feedback system to capture citizen experiences "
            "and enable rapid response to issues."
        )

        return recommendations

    def _trend_analysis(self, agg: AggregationResult) -> str:
        pct = agg.percentages()
        positive_pct = pct[Sentiment.POSITIVE]
        negative_pct = pct[Sentiment.NEGATIVE]
        positive = agg.count(Sentiment.POSITIVE)
        negative = agg.count(Sentiment.NEGATIVE)

        paragraphs = [
            f"The sentiment analysis reveals a {positive_pct}% positive, "
            f"{pct[Sentiment.NEUTRAL]}% neutral, and {negative_pct}% negative feedback "
            f"distribution. The positive to negative feedback ratio stands at "
            f"{positive}:{negative}."
        ]

        if positive > negative:
            paragraphs.append(
                f"The predominance of positive feedback ({positive_pct}%) over negative "
                f"feedback ({negative_pct}%) indicates overall citizen satisfaction with services."
            )
        elif negative > positive:
            paragraphs.append(
                f"The higher negative feedback ({negative_pct}%) compared to positive "
                f"feedback ({positive_pct}%) indicates significant room for service improvement."
            )
        else:
            paragraphs.append(
                f"Positive and negative feedback are evenly balanced ({positive_pct}% each), "
                f"indicating mixed citizen experiences."
            )

        top = agg.top_issue(0)
        if top:
            paragraphs.append(
                f'The most frequently mentioned issue, "{top.label}" ({top.percentage}%), '
                f"represents a key area requiring immediate attention."
            )
        else:
            paragraphs.append("No specific issue patterns were identified in the current feedback data.")

        if agg.total > settings.LARGE_SAMPLE_THRESHOLD:
            paragraphs.append(
                f"With {agg.total} reviews analyzed, this represents a substantial sample "
                f"size for reliable trend analysis."
            )
        else:
            paragraphs.append(
                f"The current sample size of {agg.total} reviews provides initial insights, "
                f"though a larger sample would strengthen trend analysis."
            )

        return "\n\n".join(paragraphs)

    def _full_analysis(
        self,
        agg: AggregationResult,
        context: ReportContext,
        recommendations: List[str]
    ) -> str:
        pct = agg.percentages()
        positive_pct = pct[Sentiment.POSITIVE]
        neutral_pct = pct[Sentiment.NEUTRAL]
        negative_pct = pct[Sentiment.NEGATIVE]

        sections = [
            f"This analysis examines {agg.total} citizen reviews for {context.office_name} "
            f"from {context.date_range.start} to {context.date_range.end}. The sentiment "
            f"distribution shows {positive_pct}% positive, {neutral_pct}% neutral, and "
            f"{negative_pct}% negative feedback."
        ]

        breakdown = ["SENTIMENT ANALYSIS SUMMARY:"]
        if positive_pct > 0:
            breakdown.append(
                f"Positive feedback ({positive_pct}%): Citizens expressed satisfaction with services received."
            )
        else:
            breakdown.append("No positive feedback recorded in this period.")
        if neutral_pct > 0:
            breakdown.append(
                f"Neutral feedback ({neutral_pct}%): Citizens provided balanced or mixed feedback."
            )
        if negative_pct > 0:
            breakdown.append(
                f"Negative feedback ({negative_pct}%): Citizens reported issues or dissatisfaction with services."
            )
        else:
            breakdown.append("No negative feedback recorded in this period.")
        sections.append("\n".join(breakdown))

        issues = ["ISSUE ANALYSIS:"]
        if agg.top_issues:
            issues.extend(
                f"{index}. {issue.label}: Mentioned in {issue.count} reviews "
                f"({issue.percentage}% of total feedback)"
                for index, issue in enumerate(agg.top_issues, start=1)
            )
        else:
            issues.append("No specific issue categories were identified in the feedback data.")
        sections.append("\n".join(issues))

        sections.append(self._samples_section(context.samples))

        actions = [
            "RECOMMENDATIONS FOR ACTION:",
            "Based on this analysis, the following actions are recommended:",
        ]
        actions.extend(
            f"{index}. {recommendation}"
            for index, recommendation in enumerate(recommendations, start=1)
        )
        sections.append("\n".join(actions))

        sections.append(
            "This data-driven analysis provides a foundation for targeted service "
            "improvements to enhance citizen satisfaction and address identified concerns."
        )

        return "\n\n".join(sections)

    @staticmethod
    def _samples_section(samples: List[ReviewSample]) -> str:
        if not samples:
            return "No review samples available for detailed analysis."

        lines = ["SAMPLE FEEDBACK:"]
        for index, sample in enumerate(samples[:settings.MAX_REPORT_SAMPLES], start=1):
            lines.append(f'{index}. "{_truncate(sample.text)}" ({sample.sentiment.value})')
        return "\n".join(lines)


_default_generator = DeterministicReportGenerator()


def assemble_report(
    aggregation: AggregationResult,
    context: Optional[ReportContext] = None
) -> NarrativeReport:
    """Assemble a report with the deterministic generator."""
    return _default_generator.generate(aggregation, context)


# Report Shape:
#
# 1. Total of zero always yields NO_DATA_REPORT, whatever the context
#
# 2. Key insights: 2 to 5 entries
#    - Positive ratio first, review total last
#
# 3. Samples: at most 3; text over 100 characters is cut and ends with "..."
#
# 4. Output depends only on the aggregation and context (no clock, no randomness)

"""
Scheduled report timing.

Next-run date calculation and due-report selection. There is no worker
loop here; callers poll due_reports() and record runs with mark_run().
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from civicpulse.models.schedule import ScheduledReport

logger = logging.getLogger(__name__)


def _add_months(base: datetime, months: int) -> datetime:
    """Add calendar months; a day past the target month's end rolls into the next month."""
    month_index = base.month - 1 + months
    year = base.year + month_index // 12
    month = month_index % 12 + 1
    return base.replace(year=year, month=month, day=1) + timedelta(days=base.day - 1)


def calculate_next_run_date(frequency: str, from_date: Optional[datetime] = None) -> datetime:
    """
    Calculate when a scheduled report should next run.

    Args:
        frequency: "daily", "weekly", "monthly", or "quarterly"
        from_date: Base date (defaults to now)

    Returns:
        Base date plus one interval

    Raises:
        ValueError: If frequency is unknown
    """
    base = from_date or datetime.now()

    if frequency == "daily":
        return base + timedelta(days=1)
    if frequency == "weekly":
        return base + timedelta(days=7)
    if frequency == "monthly":
        return _add_months(base, 1)
    if frequency == "quarterly":
        return _add_months(base, 3)

    raise ValueError(f"Invalid frequency: {frequency}")


def due_reports(reports: Iterable[ScheduledReport], now: Optional[datetime] = None) -> List[ScheduledReport]:
    """Active reports whose next run date has passed, oldest first."""
    now = now or datetime.now()
    due = [report for report in reports if report.is_due(now)]
    return sorted(due, key=lambda report: report.next_run_date)


def mark_run(report: ScheduledReport, run_at: Optional[datetime] = None) -> ScheduledReport:
    """
    Record a run of a scheduled report.

    Returns:
        A new ScheduledReport with last_run_date set and next_run_date advanced
    """
    run_at = run_at or datetime.now()
    updated = replace(
        report,
        last_run_date=run_at,
        next_run_date=calculate_next_run_date(report.frequency, run_at)
    )
    logger.info(
        f"Scheduled report {report.scheduled_report_id} ran at {run_at.isoformat()}, "
        f"next run {updated.next_run_date.isoformat()}"
    )
    return updated

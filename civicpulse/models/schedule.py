"""
Scheduled report data model.

A recurring report definition with its next and last run dates.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


REPORT_TYPES = ("sentiment", "feedback", "performance", "services")
FREQUENCIES = ("daily", "weekly", "monthly", "quarterly")
STATUSES = ("active", "paused", "inactive")


@dataclass(frozen=True)
class ScheduledReport:
    """
    A report to be regenerated on a fixed frequency.
    """
    scheduled_report_id: str
    title: str
    report_type: str  # "sentiment", "feedback", "performance", or "services"
    frequency: str  # "daily", "weekly", "monthly", or "quarterly"
    next_run_date: datetime
    office_id: Optional[str] = None
    recipients: List[str] = field(default_factory=list)  # Email addresses
    last_run_date: Optional[datetime] = None
    status: str = "active"

    def __post_init__(self):
        if self.report_type not in REPORT_TYPES:
            raise ValueError(
                f"Invalid report_type: {self.report_type}. Must be one of {REPORT_TYPES}"
            )
        if self.frequency not in FREQUENCIES:
            raise ValueError(
                f"Invalid frequency: {self.frequency}. Must be one of {FREQUENCIES}"
            )
        if self.status not in STATUSES:
            raise ValueError(
                f"Invalid status: {self.status}. Must be one of {STATUSES}"
            )

    def is_due(self, now: datetime) -> bool:
        return self.status == "active" and self.next_run_date <= now

"""
Reporting period windows.

Revenue and expenses are always read from the prior complete month so
month-over-month figures are never skewed by a partial month. Cash is
always read as of today.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional


@dataclass(frozen=True)
class DateRange:
    """Inclusive reporting window."""
    start: date
    end: date


def current_month(today: Optional[date] = None) -> DateRange:
    """First day of the current month through today."""
    today = today or date.today()
    return DateRange(start=today.replace(day=1), end=today)


def prior_month(today: Optional[date] = None) -> DateRange:
    """The full previous calendar month."""
    today = today or date.today()
    end = today.replace(day=1) - timedelta(days=1)
    return DateRange(start=end.replace(day=1), end=end)


def as_of(today: Optional[date] = None) -> date:
    """Point-in-time date for balance sheet and cash reads."""
    return today or date.today()

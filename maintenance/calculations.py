"""Helper functions for due date calculations."""

import math
from datetime import date
from dateutil.relativedelta import relativedelta
from typing import Optional


def add_months(start: date, months: float) -> date:
    """
    Add a (possibly fractional) number of months to a date.

    Whole months clamp to the end of shorter months (Jan 31 + 1 = Feb 28);
    the fractional part is added as days of a 30-day month.
    """
    whole = int(months)
    days = int(round((months - whole) * 30))
    return start + relativedelta(months=whole, days=days)


def months_for_distance(remaining: float, annual_distance: float) -> int:
    """Whole months needed to cover a distance at an annual rate, never less than one."""
    return max(1, math.ceil(remaining * 12 / annual_distance))


def is_past(due_date: Optional[date], today: date) -> bool:
    """Date-only comparison: due strictly before today."""
    return due_date is not None and due_date < today


def earlier(first: date, second: date) -> date:
    """The earlier of two dates; ties go to the first argument."""
    return second if second < first else first

"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta, MO


def next_business_day(start: date) -> date:
    """Return the first weekday strictly after ``start``."""
    candidate = start + timedelta(days=1)
    if candidate.weekday() >= 5:
        candidate += relativedelta(weekday=MO)
    return candidate


def parse_processing_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse the date a payment file should be processed on.

    Supports:
    - Relative dates: "today", "tomorrow", "next business day"
    - Absolute dates: "2024-03-15", "15/03/2024", "15 March 2024".
      Ambiguous numeric dates are read day first.

    Args:
        date_str: Date string
        today: Reference date for relative forms (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "tomorrow": today + timedelta(days=1),
        "next business day": next_business_day(today),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        # ISO dates are year first; everything else follows the Australian order
        dayfirst = not (len(date_str) >= 4 and date_str[:4].isdigit())
        return date_parser.parse(date_str, dayfirst=dayfirst).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")

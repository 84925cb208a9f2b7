"""
Date Utilities

Holding-period and financial-year helpers.
"""
import re
import calendar
from datetime import date, datetime
from typing import Optional


FINANCIAL_YEAR_PATTERN = re.compile(r"^(\d{4})-(\d{4})$")


def is_month_end(d: date) -> bool:
    return d.day == calendar.monthrange(d.year, d.month)[1]


def months_between(start: date, end: date) -> int:
    """
    Whole months elapsed from start to end (floor).

    A month counts once end's day-of-month reaches start's day-of-month,
    or end falls on the last day of a shorter month:
      - 2024-01-15 -> 2025-01-15 = 12
      - 2024-01-15 -> 2025-01-14 = 11
      - 2024-01-31 -> 2024-02-29 = 1

    Parameters:
        start (date): Acquisition date
        end (date): Sale date

    Returns:
        int: Elapsed months, negative if end precedes start
    """
    if end < start:
        return -months_between(end, start)

    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day and not is_month_end(end):
        months -= 1
    return months


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse 'YYYY-MM-DD', optionally followed by a 'T' or ' ' time part; None for blanks"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value = str(value).strip()
    if not value:
        return None
    if len(value) > 10 and value[10] in "T ":
        return datetime.fromisoformat(value).date()
    return date.fromisoformat(value)


def validate_financial_year(financial_year: str) -> bool:
    """
    Check a 'YYYY-YYYY' financial year string with consecutive years.
    """
    match = FINANCIAL_YEAR_PATTERN.match(financial_year or "")
    if not match:
        return False
    start, end = int(match.group(1)), int(match.group(2))
    return end == start + 1

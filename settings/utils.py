from datetime import date, datetime

from django.conf import settings


def to_date(value):
    """
    Truncate a date, datetime or ISO string ('YYYY-MM-DD...') to a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def calculate_day_number(log_date, start_date, total_days=None):
    """
    Return the 1-based program day for log_date, clamped to [1, total_days].

    Dates before the program start map to day 1 and dates after the program
    end map to the last day. Time of day is ignored.

    Args:
        log_date: The date being logged (date, datetime or ISO string)
        start_date: First day of the program (date, datetime or ISO string)
        total_days: Program length; falls back to DEFAULT_TOTAL_DAYS when empty

    Returns:
        int: Day number within the program window
    """
    total_days = total_days or settings.DEFAULT_TOTAL_DAYS
    diff = (to_date(log_date) - to_date(start_date)).days + 1
    return max(1, min(diff, total_days))

"""Gregorian calendar arithmetic used by the grid and the navigation state machine."""

import calendar
from datetime import date, timedelta

# Dates are plain wall-clock values; equality and ordering use year/month/day only.
CalendarDate = date

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Monday first, matching date.weekday()
DAY_LABELS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def days_in_month(year: int, month: int) -> int:
    """Get the number of days in a month.

    Args:
        year: Gregorian year
        month: Month number, 1-12

    Returns:
        Day count between 28 and 31
    """
    return calendar.monthrange(year, month)[1]


def iso_week_number(d: date) -> int:
    """Get the ISO-8601 week of year (1-53) for a date.

    Weeks always start on Monday here, whatever day the grid starts on.
    """
    return d.isocalendar()[1]


def shift_year_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by a whole number of months.

    Args:
        year: Starting year
        month: Starting month, 1-12
        delta: Months to move, negative for backwards

    Returns:
        New (year, month) pair
    """
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def shift_by_months(d: date, delta: int) -> date:
    """Shift a date by whole months, clamping the day to the target month length.

    Jan 31 + 1 month gives Feb 28 (or 29), never a date in March.

    Args:
        d: Date to shift
        delta: Months to move, negative for backwards

    Returns:
        New date
    """
    year, month = shift_year_month(d.year, d.month, delta)
    return date(year, month, min(d.day, days_in_month(year, month)))


def shift_by_days(d: date, delta: int) -> date:
    """Shift a date by a number of days."""
    return d + timedelta(days=delta)


def first_day_of_month(d: date) -> date:
    """Get the first day of the month containing ``d``."""
    return d.replace(day=1)


def last_day_of_month(d: date) -> date:
    """Get the last day of the month containing ``d``."""
    return d.replace(day=days_in_month(d.year, d.month))


def weekday_offset(year: int, month: int, start_day_of_week: int) -> int:
    """Get the column (0-6) of day 1 in a grid starting on ``start_day_of_week``."""
    return (date(year, month, 1).weekday() - start_day_of_week) % 7


def month_name(month: int) -> str:
    """Get the English name of a month number (1-12)."""
    return MONTH_NAMES[month - 1]


def day_labels(start_day_of_week: int = 0) -> list[str]:
    """Get the seven day names rotated so index 0 is ``start_day_of_week``.

    Args:
        start_day_of_week: 0 for Monday through 6 for Sunday

    Returns:
        Ordered list of day names
    """
    rotation = start_day_of_week % len(DAY_LABELS)
    return list(DAY_LABELS[rotation:] + DAY_LABELS[:rotation])


def format_date(d: date) -> str:
    """Render a date as DD/MM/YYYY."""
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"

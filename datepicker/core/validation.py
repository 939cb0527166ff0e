"""Range checks deciding which dates can be focused or selected."""

from datetime import date

from ..settings.models import DateBounds
from .calendar_math import CalendarDate, days_in_month, shift_year_month


def is_selectable(d: CalendarDate, bounds: DateBounds) -> bool:
    """Check whether a date lies strictly inside the bounds.

    Both bounds are exclusive: a date equal to the minimum or to the maximum
    is disabled.

    Args:
        d: Candidate date
        bounds: Minimum and maximum dates, either may be unset

    Returns:
        True if the date can be focused and selected
    """
    if bounds.min is not None and d <= bounds.min:
        return False
    if bounds.max is not None and d >= bounds.max:
        return False
    return True


def can_show_previous_month(year: int, month: int, bounds: DateBounds) -> bool:
    """Check whether the month before (year, month) has anything past the minimum."""
    if bounds.min is None:
        return True
    prev_year, prev_month = shift_year_month(year, month, -1)
    last_of_previous = date(prev_year, prev_month, days_in_month(prev_year, prev_month))
    return last_of_previous > bounds.min


def can_show_next_month(year: int, month: int, bounds: DateBounds) -> bool:
    """Check whether the month after (year, month) starts before the maximum."""
    if bounds.max is None:
        return True
    next_year, next_month = shift_year_month(year, month, 1)
    return date(next_year, next_month, 1) < bounds.max


"""Pure calendar logic: date arithmetic, month grids, range checks and masked text entry."""

from .calendar_math import (
    CalendarDate,
    day_labels,
    days_in_month,
    format_date,
    iso_week_number,
    month_name,
    shift_by_months,
)
from .grid import CalendarGrid, CellKind, DayCell, GridLayout
from .text_parser import ParseResult, mask_input, parse_input, parse_masked
from .validation import can_show_next_month, can_show_previous_month, is_selectable

__all__ = [
    "CalendarDate",
    "CalendarGrid",
    "CellKind",
    "DayCell",
    "GridLayout",
    "ParseResult",
    "can_show_next_month",
    "can_show_previous_month",
    "day_labels",
    "days_in_month",
    "format_date",
    "is_selectable",
    "iso_week_number",
    "mask_input",
    "month_name",
    "parse_input",
    "parse_masked",
    "shift_by_months",
]

"""Month grid generation.

A month is laid out as rows of eight cells: a week-number cell followed by
seven day slots ordered from the configured first day of the week. Slots
outside the month are blank padding cells.

The inline layout keeps the flat cell order used by web renderers that wrap
cells themselves: the week-number cell is the first of the leading cells and
then follows each date that starts a week.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .calendar_math import (
    CalendarDate,
    days_in_month,
    iso_week_number,
    shift_by_days,
    weekday_offset,
)

ROW_WIDTH = 8
DAYS_PER_WEEK = 7


class GridLayout(Enum):
    """Order in which week-number cells are emitted."""

    ALIGNED = "aligned"
    INLINE = "inline"


class CellKind(Enum):
    """Kind of content held by a grid cell."""

    DATE = "date"
    WEEK_NUMBER = "week_number"
    BLANK = "blank"


@dataclass(frozen=True)
class DayCell:
    """Single grid cell holding a date, a week number or nothing."""

    kind: CellKind
    date: Optional[CalendarDate] = None
    week_number: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is CellKind.DATE and (self.date is None or self.week_number is not None):
            raise ValueError("Date cell must hold a date and no week number")
        if self.kind is CellKind.WEEK_NUMBER and (
            self.week_number is None or self.date is not None
        ):
            raise ValueError("Week-number cell must hold a week number and no date")
        if self.kind is CellKind.BLANK and (self.date is not None or self.week_number is not None):
            raise ValueError("Blank cell must be empty")

    @classmethod
    def for_date(cls, d: CalendarDate) -> "DayCell":
        return cls(CellKind.DATE, date=d)

    @classmethod
    def for_week(cls, week_number: int) -> "DayCell":
        return cls(CellKind.WEEK_NUMBER, week_number=week_number)

    @classmethod
    def blank(cls) -> "DayCell":
        return cls(CellKind.BLANK)

    @property
    def is_date(self) -> bool:
        return self.kind is CellKind.DATE

    @property
    def is_week_number(self) -> bool:
        return self.kind is CellKind.WEEK_NUMBER


class CalendarGrid:
    """Lazy, restartable sequence of cells covering one month.

    Every call to ``iter()`` walks the month again from the first cell, so the
    same grid can be rendered any number of times.

    Args:
        year: Year of the month to lay out
        month: Month number, 1-12
        start_day_of_week: Day shown in the first column, 0 for Monday through 6 for Sunday
        pad_trailing: Complete the last row with blank cells. When False the
            stream stops after the last day of the month and the consumer is
            responsible for padding the final row.
        layout: ALIGNED puts a week-number cell at column 0 of every row.
            INLINE emits ``offset`` leading cells (week number first) and a
            week-number cell after each date that starts a week; it never
            pads trailing cells and its rows are not eight-column aligned.
    """

    def __init__(
        self,
        year: int,
        month: int,
        start_day_of_week: int = 0,
        pad_trailing: bool = True,
        layout: GridLayout = GridLayout.ALIGNED,
    ) -> None:
        if not 0 <= start_day_of_week < DAYS_PER_WEEK:
            raise ValueError(f"start_day_of_week must be 0-6, got {start_day_of_week}")
        self.year = year
        self.month = month
        self.start_day_of_week = start_day_of_week
        self.pad_trailing = pad_trailing
        self.layout = layout

    def __iter__(self) -> Iterator[DayCell]:
        if self.layout is GridLayout.INLINE:
            return self._generate_inline()
        return self._generate()

    def _generate_inline(self) -> Iterator[DayCell]:
        first = date(self.year, self.month, 1)
        offset = weekday_offset(self.year, self.month, self.start_day_of_week)

        for index in range(offset):
            if index == 0:
                yield DayCell.for_week(iso_week_number(shift_by_days(first, -offset)))
            else:
                yield DayCell.blank()

        for day in range(1, days_in_month(self.year, self.month) + 1):
            current = date(self.year, self.month, day)
            yield DayCell.for_date(current)
            if current.weekday() == self.start_day_of_week:
                yield DayCell.for_week(iso_week_number(current))

    def _generate(self) -> Iterator[DayCell]:
        first = date(self.year, self.month, 1)
        offset = weekday_offset(self.year, self.month, self.start_day_of_week)

        # First row is labelled with the week of its first visible date,
        # which can fall in the previous month.
        if offset:
            yield DayCell.for_week(iso_week_number(shift_by_days(first, -offset)))
            for _ in range(offset):
                yield DayCell.blank()

        column = offset
        for day in range(1, days_in_month(self.year, self.month) + 1):
            current = date(self.year, self.month, day)
            if current.weekday() == self.start_day_of_week:
                yield DayCell.for_week(iso_week_number(current))
                column = 0
            yield DayCell.for_date(current)
            column += 1

        if self.pad_trailing:
            for _ in range(column, DAYS_PER_WEEK):
                yield DayCell.blank()

    def rows(self) -> list[list[DayCell]]:
        """Group the cells into rows of eight.

        With ``pad_trailing`` disabled the last row may be shorter. Rows only
        line up with weeks in the aligned layout.
        """
        rows: list[list[DayCell]] = []
        for index, cell in enumerate(self):
            if index % ROW_WIDTH == 0:
                rows.append([])
            rows[-1].append(cell)
        return rows

    def date_cells(self) -> Iterator[CalendarDate]:
        """Yield the dates of the month in grid order."""
        for cell in self:
            if cell.date is not None:
                yield cell.date

    def __repr__(self) -> str:
        return (
            f"CalendarGrid(year={self.year!r}, month={self.month!r}, "
            f"start_day_of_week={self.start_day_of_week!r}, pad_trailing={self.pad_trailing!r}, "
            f"layout={self.layout.name})"
        )

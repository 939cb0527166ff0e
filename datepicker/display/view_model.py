"""Render-ready description of a picker for one navigation state.

Every per-cell flag (disabled, tabbable, today, selected, focused) is computed
here once per state change, so renderers only read values.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.calendar_math import CalendarDate, day_labels, month_name
from ..core.grid import CalendarGrid, CellKind, DayCell
from ..core.validation import can_show_next_month, can_show_previous_month, is_selectable
from ..settings.models import PickerConfig
from ..ui.state import NavigationState

logger = logging.getLogger(__name__)


def cell_id(d: CalendarDate) -> str:
    """Identifier of the grid cell showing ``d``, used as the focus target."""
    return f"day-{d.day}-{d.month}-{d.year}"


@dataclass(frozen=True)
class RenderedCell:
    """Grid cell with everything a renderer needs to draw it.

    Attributes:
        kind: Date, week number or blank padding
        date: Date shown, for date cells
        week_number: ISO week, for week-number cells
        disabled: Date is outside the selectable range
        tabbable: Cell holds the roving tabindex (the focused date)
        is_today: Date is the reference "today"
        is_selected: Date is the committed selection
        is_focused: Date is the focused date
    """

    kind: CellKind
    date: Optional[CalendarDate] = None
    week_number: Optional[int] = None
    disabled: bool = False
    tabbable: bool = False
    is_today: bool = False
    is_selected: bool = False
    is_focused: bool = False

    @property
    def cell_id(self) -> Optional[str]:
        return cell_id(self.date) if self.date is not None else None

    @property
    def label(self) -> str:
        """Text shown in the cell."""
        if self.date is not None:
            return str(self.date.day)
        if self.week_number is not None:
            return str(self.week_number)
        return ""


@dataclass(frozen=True)
class MonthView:
    """Everything observable about a picker after a state change."""

    title: str
    day_labels: tuple[str, ...]
    rows: tuple[tuple[RenderedCell, ...], ...]
    input_text: str
    placeholder: str
    label: str
    week_annotation: Optional[str]
    is_open: bool
    is_help_open: bool
    previous_enabled: bool
    next_enabled: bool

    def find_cell(self, d: CalendarDate) -> Optional[RenderedCell]:
        """Look up the rendered cell for ``d``; None when it is not on screen."""
        for row in self.rows:
            for cell in row:
                if cell.date == d:
                    return cell
        return None

    @property
    def tabbable_cell(self) -> Optional[RenderedCell]:
        return next((cell for row in self.rows for cell in row if cell.tabbable), None)


def week_annotation(week_number: Optional[int]) -> Optional[str]:
    """Annotation shown next to the input once a date is selected."""
    return f"(wk {week_number})" if week_number else None


def _render_cell(
    cell: DayCell, state: NavigationState, config: PickerConfig, today: date
) -> RenderedCell:
    if cell.kind is not CellKind.DATE:
        return RenderedCell(kind=cell.kind, week_number=cell.week_number)

    d = cell.date
    focused = d == state.focused_date
    return RenderedCell(
        kind=cell.kind,
        date=d,
        disabled=not is_selectable(d, config.bounds),
        tabbable=focused,
        is_today=d == today,
        is_selected=d == state.selected_date,
        is_focused=focused,
    )


def build_month_view(
    state: NavigationState, config: PickerConfig, today: Optional[date] = None
) -> MonthView:
    """Build the view for ``state``.

    Args:
        state: Current navigation state
        config: Picker configuration
        today: Reference date for the today marker, defaults to date.today()

    Returns:
        Immutable month view
    """
    today = today or date.today()
    year, month = state.visible

    grid = CalendarGrid(year, month, config.start_day_of_week)
    rows = tuple(
        tuple(_render_cell(cell, state, config, today) for cell in row) for row in grid.rows()
    )

    view = MonthView(
        title=f"{month_name(month)} {year}",
        day_labels=tuple(day_labels(config.start_day_of_week)),
        rows=rows,
        input_text=state.input_text,
        placeholder=config.placeholder,
        label=config.label,
        week_annotation=week_annotation(state.selected_week_number),
        is_open=state.is_open,
        is_help_open=state.is_help_open,
        previous_enabled=can_show_previous_month(year, month, config.bounds),
        next_enabled=can_show_next_month(year, month, config.bounds),
    )
    logger.debug(f"Built view for {view.title} with {len(rows)} rows")
    return view

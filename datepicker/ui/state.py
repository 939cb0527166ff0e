"""Navigation state of a single picker instance."""

import dataclasses
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..settings.models import PickerConfig


@dataclass(frozen=True)
class NavigationState:
    """Everything needed to render a picker, as an immutable value.

    The state machine never mutates an instance; every transition builds a
    new one with ``evolve``.

    Attributes:
        is_open: Whether the calendar popup is shown
        is_help_open: Whether the keyboard shortcuts panel is shown
        focused_date: Date holding the roving tabindex, if any
        selected_date: Committed selection, if any
        visible_year: Year of the month on screen
        visible_month: Month on screen, 1-12
        input_text: Masked text of the input field
        selected_week_number: ISO week of the selection, shown next to the input
    """

    visible_year: int
    visible_month: int
    is_open: bool = False
    is_help_open: bool = False
    focused_date: Optional[date] = None
    selected_date: Optional[date] = None
    input_text: str = ""
    selected_week_number: Optional[int] = None

    @classmethod
    def initial(cls, config: PickerConfig, today: Optional[date] = None) -> "NavigationState":
        """Create the closed starting state showing the minimum date's month.

        Args:
            config: Picker configuration
            today: Reference date used when there is no minimum, defaults to date.today()

        Returns:
            Closed state with nothing focused or selected
        """
        anchor = config.min_date or today or date.today()
        return cls(visible_year=anchor.year, visible_month=anchor.month)

    def evolve(self, **changes: Any) -> "NavigationState":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def showing(self, d: date) -> "NavigationState":
        """Return a copy whose visible month is the month of ``d``."""
        return self.evolve(visible_year=d.year, visible_month=d.month)

    @property
    def visible(self) -> tuple[int, int]:
        """Visible (year, month) pair."""
        return self.visible_year, self.visible_month

    def __str__(self) -> str:
        """String representation of navigation state."""
        return (
            f"NavigationState(open={self.is_open}, focused={self.focused_date}, "
            f"selected={self.selected_date}, visible={self.visible_year}-{self.visible_month:02d})"
        )
